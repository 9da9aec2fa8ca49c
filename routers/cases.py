from fastapi import APIRouter, Depends
from schemas import CaseCreate, CreatedResponse
from store import Store
from dependencies import get_store

router = APIRouter()

@router.post("", response_model=CreatedResponse, summary="Create a Case", description="Stores the patient data of a new case.")
def create_case(data: CaseCreate, store: Store = Depends(get_store)):
    case_id = store.create_case(data.user_id, data.complaint, data.symptoms, data.vitals, data.labs)
    return CreatedResponse(id=case_id)
