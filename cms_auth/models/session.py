"""ORM model for the server-side session ledger."""

from sqlalchemy import Column, DateTime, ForeignKey, String, func
from sqlalchemy.orm import relationship

from cms_auth.models.base import Base


class CmsSession(Base):
    """
    Issued login session. id is an opaque random value, distinct from the signed token.

    Rows past expires_at are stale but stay until the reaper prunes them; liveness
    checks filter on expires_at.
    """

    __tablename__ = "cms_sessions"

    id = Column(String(64), primary_key=True)
    user_id = Column(
        String(36),
        ForeignKey("cms_users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )
    expires_at = Column(DateTime(timezone=True), nullable=False, index=True)

    user = relationship("CmsUser", back_populates="sessions")
