"""
Clinical report generation through the Groq chat-completions API.
"""
import json
from typing import Optional, Sequence

from groq import Groq
from pydantic import ValidationError

from config import Settings
from exceptions import ConfigurationError, GenerationError
from logger import get_logger
from schemas import ClinicalReport, ImageAttachment, Urgency

logger = get_logger(__name__)

LANGUAGE_NAMES = {"en": "English", "ar": "Arabic"}

_STRING_LIST = {"type": "array", "items": {"type": "string"}}

REPORT_SCHEMA = {
    "type": "object",
    "properties": {
        "urgency": {
            "type": "string",
            "enum": [u.value for u in Urgency],
            "description": "Urgency level: High, Medium, or Low"
        },
        "differential_dx": dict(_STRING_LIST, description="List of potential differential diagnoses"),
        "workup": dict(_STRING_LIST, description="Recommended next steps for workup and investigations"),
        "management": dict(_STRING_LIST, description="Management plan and immediate actions"),
        "dosing_safety": dict(_STRING_LIST, description="Medication dosing, safety considerations, and contraindications"),
        "monitoring_followup": dict(_STRING_LIST, description="Follow-up plan and monitoring parameters"),
    },
    "required": ["urgency", "differential_dx", "workup", "management", "dosing_safety", "monitoring_followup"],
    "additionalProperties": False
}


def build_prompt(complaint: str, symptoms: str, vitals: str, labs: str, language: str = "en") -> str:
    language_name = LANGUAGE_NAMES.get(language, "English")
    return f"""You are a clinical decision support assistant. Analyze the following patient data and provide a structured clinical report.

IMPORTANT: The entire response MUST be in {language_name}, except the urgency field which must be exactly one of High, Medium or Low.

Complaint: {complaint}
Symptoms: {symptoms}
Vitals: {vitals}
Labs: {labs}"""


def build_messages(prompt: str, images: Sequence[ImageAttachment] = ()) -> list:
    if not images:
        return [{"role": "user", "content": prompt}]
    content = [{"type": "text", "text": prompt}]
    for image in images:
        content.append({
            "type": "image_url",
            "image_url": {"url": f"data:{image.mime_type};base64,{image.data}"}
        })
    return [{"role": "user", "content": content}]


class ReportGenerator:
    """
    Turns case data into a ``ClinicalReport``.

    One outbound call per ``generate``; no retry and no caching, so identical
    cases may come back with different content.
    """

    def __init__(self, client: Optional[Groq], model: str):
        self._client = client
        self._model = model

    @classmethod
    def from_settings(cls, settings: Settings) -> "ReportGenerator":
        # Single attempt per generation, the SDK retries twice by default
        client = Groq(api_key=settings.groq_api_key, max_retries=0) if settings.groq_api_key else None
        if client is None:
            logger.warning("GROQ_API_KEY is not set, report generation is unavailable")
        return cls(client, settings.groq_model)

    def generate(
        self,
        complaint: str,
        symptoms: str,
        vitals: str,
        labs: str,
        images: Sequence[ImageAttachment] = (),
        language: str = "en",
    ) -> ClinicalReport:
        if self._client is None:
            raise ConfigurationError("AI service API key is not configured.")

        prompt = build_prompt(complaint, symptoms, vitals, labs, language)
        try:
            chat_completion = self._client.chat.completions.create(
                messages=build_messages(prompt, images),
                model=self._model,
                response_format={
                    "type": "json_schema",
                    "json_schema": {
                        "name": "clinical_report",
                        "schema": REPORT_SCHEMA,
                        "strict": True
                    }
                },
                stream=False
            )
        except Exception as e:
            logger.error("Report generation call failed: %s", e)
            raise GenerationError(f"Report generation failed: {e}") from e

        if not chat_completion.choices:
            raise GenerationError("Report generation returned an empty response.")
        return parse_report(chat_completion.choices[0].message.content)


def parse_report(payload: Optional[str]) -> ClinicalReport:
    if not payload or not payload.strip():
        raise GenerationError("Report generation returned an empty response.")
    try:
        data = json.loads(payload)
    except json.JSONDecodeError as e:
        raise GenerationError(f"Report generation returned invalid JSON: {e}") from e
    try:
        return ClinicalReport.model_validate(data)
    except ValidationError as e:
        raise GenerationError(f"Report does not match the expected shape: {e}") from e
