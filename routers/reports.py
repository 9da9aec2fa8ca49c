from fastapi import APIRouter, Depends
from schemas import ClinicalReport, ConsultationRequest, ConsultationResponse, ReportRequest
from generator import ReportGenerator
from store import Store
from dependencies import get_generator, get_store
from logger import get_logger

logger = get_logger(__name__)

router = APIRouter()

@router.post("/reports", response_model=ClinicalReport, summary="Generate a Clinical Report", description="Sends the case data to the AI model and returns the structured report without storing it.")
def generate_report(data: ReportRequest, generator: ReportGenerator = Depends(get_generator)):
    return generator.generate(
        data.complaint, data.symptoms, data.vitals, data.labs,
        images=data.images, language=data.language
    )

@router.post("/consultations", response_model=ConsultationResponse, summary="Generate and Save", description="Generates a report, then stores the case and the report.")
def create_consultation(
    data: ConsultationRequest,
    generator: ReportGenerator = Depends(get_generator),
    store: Store = Depends(get_store),
):
    """
    Generate the report first so a failed generation leaves nothing behind.
    """
    report = generator.generate(
        data.complaint, data.symptoms, data.vitals, data.labs,
        images=data.images, language=data.language
    )
    case_id = store.create_case(data.user_id, data.complaint, data.symptoms, data.vitals, data.labs)
    output_id = store.create_output(case_id, report.model_dump(mode="json"))
    logger.info("Saved case %s with report %s (urgency %s)", case_id, output_id, report.urgency.value)
    return ConsultationResponse(case_id=case_id, output_id=output_id, report=report)
