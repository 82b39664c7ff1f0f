"""
Client-side CMS auth context: holds the current token and user, restores the tab's
session on startup, and exposes login/logout/has_role to UI code.

Role checks here are advisory; the server re-checks roles on every privileged call.
"""

import logging
from dataclasses import dataclass, replace
from typing import Any

import httpx
from pydantic import ValidationError

from cms_auth.client.storage import TOKEN_STORAGE_KEY, TabSessionStorage, TokenStorage
from cms_auth.schemas.auth import UserProfile

logger = logging.getLogger(__name__)

DEFAULT_BASE_PATH = "/api/v1/cms-auth"


@dataclass(frozen=True)
class AuthState:
    user: UserProfile | None = None
    token: str | None = None
    is_loading: bool = True
    is_authenticated: bool = False


@dataclass(frozen=True)
class LoginResult:
    """Outcome of CmsAuthContext.login; failures carry a displayable message instead of raising."""

    success: bool
    error: str | None = None


def _bearer(token: str) -> dict[str, str]:
    return {"Authorization": f"Bearer {token}"}


def _json_body(response: httpx.Response) -> dict[str, Any]:
    try:
        body = response.json()
    except ValueError:
        return {}
    return body if isinstance(body, dict) else {}


def _parse_user(body: dict[str, Any]) -> UserProfile | None:
    user = body.get("user")
    if not isinstance(user, dict):
        return None
    try:
        return UserProfile.model_validate(user)
    except ValidationError:
        return None


class CmsAuthContext:
    """
    Browser-side auth state for the CMS admin panel.

    client is an httpx.AsyncClient whose base_url points at the service; base_path is
    where the auth router is mounted.
    """

    def __init__(
        self,
        client: httpx.AsyncClient,
        storage: TokenStorage | None = None,
        base_path: str = DEFAULT_BASE_PATH,
    ) -> None:
        self.client = client
        self.storage = storage if storage is not None else TabSessionStorage()
        self.base_path = base_path.rstrip("/")
        self.state = AuthState()

    @property
    def user(self) -> UserProfile | None:
        return self.state.user

    @property
    def token(self) -> str | None:
        return self.state.token

    @property
    def is_loading(self) -> bool:
        return self.state.is_loading

    @property
    def is_authenticated(self) -> bool:
        return self.state.is_authenticated

    def _set_auth(self, user: UserProfile | None, token: str | None) -> None:
        self.state = AuthState(
            user=user,
            token=token,
            is_loading=False,
            is_authenticated=user is not None,
        )

    async def initialize(self) -> None:
        """
        Restore the session stored for this tab, if any. A missing, expired or revoked
        token leaves the context unauthenticated without surfacing an error.
        """
        stored = self.storage.get_item(TOKEN_STORAGE_KEY)
        if not stored:
            self.state = replace(self.state, is_loading=False)
            return

        user = None
        try:
            response = await self.client.post(f"{self.base_path}/verify", headers=_bearer(stored))
            if response.is_success:
                user = _parse_user(_json_body(response))
        except httpx.HTTPError as e:
            logger.info("Session restore failed: %s", e)

        if user is None:
            self.storage.remove_item(TOKEN_STORAGE_KEY)
            self.state = replace(self.state, is_loading=False)
            return
        self._set_auth(user, stored)

    async def login(self, email: str, password: str) -> LoginResult:
        try:
            response = await self.client.post(
                f"{self.base_path}/login",
                json={"email": email, "password": password},
            )
        except httpx.HTTPError as e:
            return LoginResult(success=False, error=str(e) or "Login failed")

        body = _json_body(response)
        if response.is_error or body.get("error"):
            return LoginResult(success=False, error=body.get("error") or "Login failed")

        token = body.get("token")
        user = _parse_user(body)
        if token and user is not None:
            self.storage.set_item(TOKEN_STORAGE_KEY, token)
            self._set_auth(user, token)
            return LoginResult(success=True)
        return LoginResult(success=False, error="Unexpected response")

    async def logout(self) -> None:
        """Revoke the server session if possible; local state is cleared regardless."""
        current_token = self.state.token
        if current_token:
            try:
                await self.client.post(f"{self.base_path}/logout", headers=_bearer(current_token))
            except httpx.HTTPError as e:
                logger.warning("Logout request failed; clearing local session anyway: %s", e)
        self.storage.remove_item(TOKEN_STORAGE_KEY)
        self._set_auth(None, None)

    def has_role(self, role: str) -> bool:
        if self.state.user is None:
            return False
        return role in self.state.user.roles

    def auth_headers(self) -> dict[str, str]:
        """Authorization header for privileged CMS requests, empty when signed out."""
        if not self.state.token:
            return {}
        return _bearer(self.state.token)
