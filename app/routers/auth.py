from typing import Optional

from fastapi import APIRouter, Depends, Response

from app.routers.deps import get_auth_service, get_current_user, get_session_token
from app.schemas.user import LoginRequest, SessionOut, UserCreate, UserOut
from app.services.auth_service import AuthService

router = APIRouter(prefix="/auth", tags=["auth"])


@router.post("/login", response_model=SessionOut)
async def login(
    credentials: LoginRequest, auth_service: AuthService = Depends(get_auth_service)
):
    """Open a session; use the returned token as a Bearer token"""
    return auth_service.login(credentials.email, credentials.password)


@router.post("/register", response_model=SessionOut, status_code=201)
async def register(
    user_data: UserCreate, auth_service: AuthService = Depends(get_auth_service)
):
    return auth_service.register(user_data)


@router.post("/logout", status_code=204)
async def logout(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
):
    if token:
        auth_service.logout(token)
    return Response(status_code=204)


@router.get("/me", response_model=UserOut)
async def read_current_user(current_user: UserOut = Depends(get_current_user)):
    return current_user
