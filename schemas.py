from datetime import datetime
from enum import Enum
from typing import List, Literal, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

Language = Literal["en", "ar"]

DEMO_USER_ID = "demo-user"


class Urgency(str, Enum):
    HIGH = "High"
    MEDIUM = "Medium"
    LOW = "Low"


# Older reports generated in Arabic carry localized urgency literals
LEGACY_URGENCY_VALUES = {
    "عالية": Urgency.HIGH,
    "متوسطة": Urgency.MEDIUM,
    "منخفضة": Urgency.LOW,
}

URGENCY_LABELS = {
    "en": {Urgency.HIGH: "High", Urgency.MEDIUM: "Medium", Urgency.LOW: "Low"},
    "ar": {Urgency.HIGH: "عالية", Urgency.MEDIUM: "متوسطة", Urgency.LOW: "منخفضة"},
}


def localize_urgency(urgency: Urgency, language: str = "en") -> str:
    """
    Display label for an urgency in the client's language. Stored reports
    always carry the English enum value; clients translate at render time.
    """
    labels = URGENCY_LABELS.get(language, URGENCY_LABELS["en"])
    return labels[urgency]


class ClinicalReport(BaseModel):
    urgency: Urgency
    differential_dx: List[str]
    workup: List[str]
    management: List[str]
    dosing_safety: List[str]
    monitoring_followup: List[str]

    @field_validator("urgency", mode="before")
    @classmethod
    def normalize_urgency(cls, value):
        if isinstance(value, str):
            stripped = value.strip()
            if stripped in LEGACY_URGENCY_VALUES:
                return LEGACY_URGENCY_VALUES[stripped]
            return stripped.capitalize()
        return value


class LoginRequest(BaseModel):
    email: str = Field(min_length=1)
    password: str = ""


class UserOut(BaseModel):
    id: str
    email: str


class LoginResponse(BaseModel):
    user: UserOut


class CaseCreate(BaseModel):
    user_id: str
    complaint: str
    symptoms: str = ""
    vitals: str = ""
    labs: str = ""

    model_config = ConfigDict(json_schema_extra={
        "example": {
            "user_id": "4f6c1f0e-7a43-4d0e-9c43-2a1f6b0d2e11",
            "complaint": "fever",
            "symptoms": "cough, fatigue",
            "vitals": "BP: 120/80, HR: 96, Temp: 38.6°C",
            "labs": "WBC: 13.1"
        }
    })


class OutputCreate(BaseModel):
    case_id: str
    content: ClinicalReport


class CreatedResponse(BaseModel):
    id: str


class HistoryEntry(BaseModel):
    id: str
    user_id: str
    complaint: str
    symptoms: str = ""
    vitals: str = ""
    labs: str = ""
    created_at: Optional[datetime] = None
    report: Optional[str] = None  # JSON string of the latest output content


class ImageAttachment(BaseModel):
    mime_type: str = "image/jpeg"
    data: str  # base64 encoded


class ReportRequest(BaseModel):
    complaint: str = Field(min_length=1)
    symptoms: str = ""
    vitals: str = ""
    labs: str = ""
    language: Language = "en"
    images: List[ImageAttachment] = []


class ConsultationRequest(ReportRequest):
    user_id: str


class ConsultationResponse(BaseModel):
    case_id: str
    output_id: str
    report: ClinicalReport
