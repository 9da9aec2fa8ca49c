from fastapi import APIRouter, Depends
from schemas import OutputCreate, CreatedResponse
from store import Store
from dependencies import get_store

router = APIRouter()

@router.post("", response_model=CreatedResponse, summary="Attach a Report", description="Stores a generated clinical report against an existing case.")
def create_output(data: OutputCreate, store: Store = Depends(get_store)):
    output_id = store.create_output(data.case_id, data.content.model_dump(mode="json"))
    return CreatedResponse(id=output_id)
