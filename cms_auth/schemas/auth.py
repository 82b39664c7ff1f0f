"""Request/response schemas for CMS auth endpoints, plus the signed-token claims."""

from datetime import datetime
from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

Role = Literal["admin", "editor", "viewer"]

# Closed role set; order is display order only.
ROLES: tuple[str, ...] = ("admin", "editor", "viewer")
DEFAULT_ROLE = "editor"
BOOTSTRAP_ROLE = "admin"


class Claims(BaseModel):
    """Decoded payload of a signed session token. Validated on decode, never trusted as-is."""

    model_config = ConfigDict(extra="ignore")

    sub: str = Field(..., min_length=1, description="User id")
    email: str
    name: str | None = None
    roles: list[str] = Field(default_factory=list, description="Role snapshot at issue time")
    session: str = Field(..., min_length=1, description="Session ledger id")
    exp: int = Field(..., description="Absolute expiry, Unix seconds")


class LoginRequest(BaseModel):
    """
    Credentials for login.

    Fields are optional at the schema level so that a missing field maps to a 400
    with a readable message instead of a generic validation error.
    """

    email: str | None = Field(default=None, max_length=255, description="Email address")
    password: str | None = Field(default=None, max_length=1024, description="Password")


class RegisterRequest(BaseModel):
    """New account. role defaults to 'editor'; the very first account is always 'admin'."""

    email: str | None = Field(default=None, max_length=255)
    password: str | None = Field(default=None, max_length=1024)
    name: str | None = Field(default=None, max_length=255)
    role: str | None = Field(default=None, description="admin, editor or viewer")


class UserProfile(BaseModel):
    """Public view of a CMS user (no password hash)."""

    model_config = ConfigDict(from_attributes=True)

    id: str
    email: str
    name: str | None = None
    roles: list[str] = Field(default_factory=list)


class LoginResponse(BaseModel):
    """Signed token and profile returned after a successful login."""

    token: str = Field(..., description="Signed session token; send as Authorization: Bearer <token>")
    user: UserProfile
    expires_at: datetime


class RegisterResponse(BaseModel):
    user: UserProfile
    message: str


class VerifyResponse(BaseModel):
    """Profile with roles re-read from the store, and the session's expiry."""

    user: UserProfile
    expires_at: datetime


class MessageResponse(BaseModel):
    message: str


class ErrorResponse(BaseModel):
    """Body of every non-2xx response from the auth endpoints."""

    error: str
    code: str


class UsersListResponse(BaseModel):
    """Response for GET /users (admin only)."""

    users: list[UserProfile]
