"""Client-side auth context for the CMS admin panel."""

from cms_auth.client.context import AuthState, CmsAuthContext, LoginResult
from cms_auth.client.storage import TOKEN_STORAGE_KEY, TabSessionStorage, TokenStorage

__all__ = [
    "AuthState",
    "CmsAuthContext",
    "LoginResult",
    "TOKEN_STORAGE_KEY",
    "TabSessionStorage",
    "TokenStorage",
]
