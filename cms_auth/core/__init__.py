"""Core app configuration, database, password hashing and token signing."""

from cms_auth.core.config import get_settings, settings
from cms_auth.core.database import get_db

__all__ = ["get_settings", "settings", "get_db"]
