from typing import Optional

from fastapi import Depends, HTTPException, Request, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from app.schemas.user import UserOut
from app.services.auth_service import AuthService
from app.services.event_service import EventService

# auto_error=False: anonymous requests are allowed on read endpoints
bearer_scheme = HTTPBearer(auto_error=False)


def get_event_service(request: Request) -> EventService:
    """Dependency to get the app's EventService instance"""
    return request.app.state.event_service


def get_auth_service(request: Request) -> AuthService:
    """Dependency to get the app's AuthService instance"""
    return request.app.state.auth_service


def get_session_token(
    credentials: Optional[HTTPAuthorizationCredentials] = Depends(bearer_scheme),
) -> Optional[str]:
    if credentials is None:
        return None
    return credentials.credentials


def get_current_user_optional(
    token: Optional[str] = Depends(get_session_token),
    auth_service: AuthService = Depends(get_auth_service),
) -> Optional[UserOut]:
    # Unknown or expired tokens are treated as anonymous
    if token is None:
        return None
    return auth_service.get_user(token)


def get_current_user(
    user: Optional[UserOut] = Depends(get_current_user_optional),
) -> UserOut:
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Authentication required",
            headers={"WWW-Authenticate": "Bearer"},
        )
    return user
