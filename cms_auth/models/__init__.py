"""SQLAlchemy ORM models."""

from cms_auth.models.base import Base
from cms_auth.models.session import CmsSession
from cms_auth.models.user import CmsUser, CmsUserRole

__all__ = ["Base", "CmsSession", "CmsUser", "CmsUserRole"]
