import uuid
from datetime import datetime, timezone

from sqlalchemy import Column, String, Text, DateTime, ForeignKey, JSON
from sqlalchemy.orm import relationship
from database import Base


def new_id() -> str:
    return str(uuid.uuid4())


def utcnow() -> datetime:
    return datetime.now(timezone.utc)


class User(Base):
    __tablename__ = "users"
    id = Column(String(36), primary_key=True, default=new_id)
    email = Column(String, unique=True, index=True, nullable=False)
    password_hash = Column(String)  # Plain text password

class Case(Base):
    __tablename__ = "cases"
    id = Column(String(36), primary_key=True, default=new_id)
    user_id = Column(String, index=True, nullable=False)
    complaint = Column(Text, nullable=False)
    symptoms = Column(Text, default="")
    vitals = Column(Text, default="")
    labs = Column(Text, default="")
    created_at = Column(DateTime(timezone=True), default=utcnow, index=True)

    outputs = relationship("Output", back_populates="case", order_by="Output.created_at")

class Output(Base):
    __tablename__ = "outputs"
    id = Column(String(36), primary_key=True, default=new_id)
    case_id = Column(String(36), ForeignKey("cases.id"), nullable=False, index=True)
    content = Column(JSON, nullable=False)
    created_at = Column(DateTime(timezone=True), default=utcnow)

    case = relationship("Case", back_populates="outputs")
