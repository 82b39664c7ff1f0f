"""CMS auth endpoints (login, register, logout, verify) and auth dependencies (get_current_user, require_role)."""

from collections.abc import Callable
from datetime import timedelta
from typing import Annotated

from fastapi import APIRouter, Depends, status
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer
from sqlalchemy.orm import Session

from cms_auth.core.config import Settings, get_settings
from cms_auth.core.database import get_db
from cms_auth.schemas.auth import (
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    UserProfile,
    UsersListResponse,
    VerifyResponse,
)
from cms_auth.services.auth import AuthService, Forbidden

router = APIRouter(
    responses={
        status.HTTP_400_BAD_REQUEST: {"model": ErrorResponse},
        status.HTTP_401_UNAUTHORIZED: {"model": ErrorResponse},
        status.HTTP_500_INTERNAL_SERVER_ERROR: {"model": ErrorResponse},
    },
)
security = HTTPBearer(auto_error=False)


def get_auth_service(
    db: Annotated[Session, Depends(get_db)],
    settings: Annotated[Settings, Depends(get_settings)],
) -> AuthService:
    """Dependency: AuthService bound to the request's DB session and the signing secret."""
    return AuthService(
        db,
        secret=settings.CMS_AUTH_SECRET.get_secret_value(),
        session_ttl=timedelta(hours=settings.SESSION_TTL_HOURS),
    )


def _bearer_token(credentials: HTTPAuthorizationCredentials | None) -> str | None:
    if credentials is None:
        return None
    return credentials.credentials


@router.post("/login", response_model=LoginResponse)
def login(
    body: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    """
    Authenticate with email and password; returns a signed session token valid for SESSION_TTL_HOURS.
    Include the token in the Authorization header as: Bearer <token>
    """
    result = service.login(body.email, body.password)
    return LoginResponse(token=result.token, user=result.user, expires_at=result.expires_at)


@router.post("/register", response_model=RegisterResponse, status_code=status.HTTP_201_CREATED)
def register(
    body: RegisterRequest,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> RegisterResponse:
    """
    Create a CMS account. The first account needs no token and becomes admin;
    every later registration requires an admin Bearer token.
    """
    result = service.register(
        body.email,
        body.password,
        name=body.name,
        role=body.role,
        caller_token=_bearer_token(credentials),
    )
    return RegisterResponse(user=result.user, message=result.message)


@router.post("/logout", response_model=MessageResponse)
def logout(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> MessageResponse:
    """Revoke the session carried by the Bearer token. Other sessions of the same user stay valid."""
    service.logout(_bearer_token(credentials))
    return MessageResponse(message="Logged out successfully")


@router.post("/verify", response_model=VerifyResponse)
def verify(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> VerifyResponse:
    """Check the Bearer token and its session; returns the user with current roles."""
    result = service.verify(_bearer_token(credentials))
    return VerifyResponse(user=result.user, expires_at=result.expires_at)


def get_current_user(
    credentials: Annotated[HTTPAuthorizationCredentials | None, Depends(security)],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UserProfile:
    """Dependency: require a valid token with a live session. Raises Unauthorized/SessionExpired (401)."""
    return service.verify(_bearer_token(credentials)).user


def require_role(role: str) -> Callable[[UserProfile], UserProfile]:
    """Dependency factory: require the current user to hold role. Raises Forbidden (403) otherwise."""

    def dependency(
        current_user: Annotated[UserProfile, Depends(get_current_user)],
    ) -> UserProfile:
        if role not in current_user.roles:
            raise Forbidden(f"{role.capitalize()} access required")
        return current_user

    return dependency


@router.get("/users", response_model=UsersListResponse)
def list_users(
    _admin: Annotated[UserProfile, Depends(require_role("admin"))],
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> UsersListResponse:
    """List all CMS users with their roles (admin only)."""
    return UsersListResponse(users=service.list_users())
