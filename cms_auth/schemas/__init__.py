"""Pydantic request/response schemas."""

from cms_auth.schemas.auth import (
    ROLES,
    Claims,
    ErrorResponse,
    LoginRequest,
    LoginResponse,
    MessageResponse,
    RegisterRequest,
    RegisterResponse,
    Role,
    UserProfile,
    UsersListResponse,
    VerifyResponse,
)
from cms_auth.schemas.health import HealthResponse

__all__ = [
    "Claims",
    "ErrorResponse",
    "HealthResponse",
    "LoginRequest",
    "LoginResponse",
    "MessageResponse",
    "ROLES",
    "RegisterRequest",
    "RegisterResponse",
    "Role",
    "UserProfile",
    "UsersListResponse",
    "VerifyResponse",
]
