from fastapi import APIRouter, Depends
from schemas import LoginRequest, LoginResponse
from store import Store
from dependencies import get_store

router = APIRouter()

@router.post("/login", response_model=LoginResponse, summary="User Login", description="Login with email; the user is created on first login.")
def login(data: LoginRequest, store: Store = Depends(get_store)):
    """
    Look up the user by email, creating it if absent. No session token is issued.
    """
    user = store.get_or_create_user(data.email, data.password)
    return LoginResponse(user=user)
