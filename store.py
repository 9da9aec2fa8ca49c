"""
Case store: persistence of users, cases and generated outputs.

Two implementations share the ``Store`` interface. ``SqlStore`` talks to a
relational database through SQLAlchemy; ``DemoStore`` is used when no
database is configured and hands back synthetic ids without persisting
anything. ``build_store`` picks one at startup so route handlers never need
to know which mode they are running in.
"""
import json
import uuid
from abc import ABC, abstractmethod
from typing import Any, Dict, List

from sqlalchemy.exc import IntegrityError, SQLAlchemyError
from sqlalchemy.orm import selectinload, sessionmaker

from config import Settings
from database import build_engine, build_session_factory, init_db
from exceptions import StoreError
from logger import get_logger
from models import Case, Output, User
from schemas import DEMO_USER_ID, HistoryEntry, UserOut

logger = get_logger(__name__)


class Store(ABC):

    @abstractmethod
    def get_or_create_user(self, email: str, password: str) -> UserOut:
        ...

    @abstractmethod
    def create_case(self, user_id: str, complaint: str, symptoms: str, vitals: str, labs: str) -> str:
        ...

    @abstractmethod
    def create_output(self, case_id: str, content: Dict[str, Any]) -> str:
        ...

    @abstractmethod
    def list_cases_by_user(self, user_id: str) -> List[HistoryEntry]:
        ...


class SqlStore(Store):

    def __init__(self, session_factory: sessionmaker):
        self._session_factory = session_factory

    def get_or_create_user(self, email: str, password: str) -> UserOut:
        """
        Return the user registered under ``email``, creating it if absent.

        The unique index on ``users.email`` makes the insert the arbiter: when
        a concurrent login wins the race, the insert fails and the row it
        created is read back instead of producing a duplicate.
        """
        try:
            with self._session_factory() as session:
                user = session.query(User).filter(User.email == email).first()
                if user is None:
                    # Plain text password, there is no real authentication
                    user = User(email=email, password_hash=password)
                    session.add(user)
                    try:
                        session.commit()
                        logger.info("Created user %s", user.id)
                    except IntegrityError:
                        session.rollback()
                        user = session.query(User).filter(User.email == email).one()
                return UserOut(id=user.id, email=user.email)
        except SQLAlchemyError as e:
            logger.error("User lookup failed: %s", e)
            raise StoreError(_db_message(e)) from e

    def create_case(self, user_id: str, complaint: str, symptoms: str, vitals: str, labs: str) -> str:
        try:
            with self._session_factory() as session:
                case = Case(
                    user_id=user_id,
                    complaint=complaint,
                    symptoms=symptoms,
                    vitals=vitals,
                    labs=labs
                )
                session.add(case)
                session.commit()
                return case.id
        except SQLAlchemyError as e:
            logger.error("Case insert failed: %s", e)
            raise StoreError(_db_message(e)) from e

    def create_output(self, case_id: str, content: Dict[str, Any]) -> str:
        try:
            with self._session_factory() as session:
                output = Output(case_id=case_id, content=content)
                session.add(output)
                session.commit()
                return output.id
        except SQLAlchemyError as e:
            logger.error("Output insert failed: %s", e)
            raise StoreError(_db_message(e)) from e

    def list_cases_by_user(self, user_id: str) -> List[HistoryEntry]:
        try:
            with self._session_factory() as session:
                cases = (
                    session.query(Case)
                    .options(selectinload(Case.outputs))
                    .filter(Case.user_id == user_id)
                    .order_by(Case.created_at.desc())
                    .all()
                )
                return [_history_entry(case) for case in cases]
        except SQLAlchemyError as e:
            logger.error("History query failed: %s", e)
            raise StoreError(_db_message(e)) from e


class DemoStore(Store):
    """Stands in for the database when none is configured. Persists nothing."""

    def get_or_create_user(self, email: str, password: str) -> UserOut:
        return UserOut(id=DEMO_USER_ID, email=email)

    def create_case(self, user_id: str, complaint: str, symptoms: str, vitals: str, labs: str) -> str:
        return f"demo-case-{uuid.uuid4().hex[:7]}"

    def create_output(self, case_id: str, content: Dict[str, Any]) -> str:
        return f"demo-output-{uuid.uuid4().hex[:7]}"

    def list_cases_by_user(self, user_id: str) -> List[HistoryEntry]:
        return []


def build_store(settings: Settings) -> Store:
    if not settings.database_configured:
        logger.warning("No database configured, running in demo mode")
        return DemoStore()
    engine = build_engine(settings.database_url, settings.database_key)
    init_db(engine)
    logger.info("Using SQL store (%s)", engine.url.get_backend_name())
    return SqlStore(build_session_factory(engine))


def _history_entry(case: Case) -> HistoryEntry:
    report = None
    if case.outputs:
        # outputs are ordered oldest first
        report = json.dumps(case.outputs[-1].content, ensure_ascii=False)
    return HistoryEntry(
        id=case.id,
        user_id=case.user_id,
        complaint=case.complaint,
        symptoms=case.symptoms or "",
        vitals=case.vitals or "",
        labs=case.labs or "",
        created_at=case.created_at,
        report=report
    )


def _db_message(error: SQLAlchemyError) -> str:
    orig = getattr(error, "orig", None)
    return str(orig) if orig is not None else str(error)
