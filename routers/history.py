from typing import List
from fastapi import APIRouter, Depends
from schemas import DEMO_USER_ID, HistoryEntry
from store import Store
from dependencies import get_store

router = APIRouter()

@router.get("/{user_id}", response_model=List[HistoryEntry], summary="Case History", description="Returns a user's cases, most recent first, each with its report as a JSON string.")
def read_history(user_id: str, store: Store = Depends(get_store)):
    if user_id == DEMO_USER_ID:
        return []
    return store.list_cases_by_user(user_id)
