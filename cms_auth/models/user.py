"""ORM models for CMS accounts and their role assignments."""

import uuid

from sqlalchemy import (
    Boolean,
    CheckConstraint,
    Column,
    DateTime,
    ForeignKey,
    Integer,
    String,
    UniqueConstraint,
    func,
    true,
)
from sqlalchemy.orm import relationship

from cms_auth.models.base import Base


def _new_user_id() -> str:
    return str(uuid.uuid4())


class CmsUser(Base):
    """
    CMS admin-panel account.

    email is stored normalized (trimmed, lower-cased) and is unique. Accounts are
    deactivated via is_active rather than deleted; deleting a row cascades to its
    roles and sessions.
    """

    __tablename__ = "cms_users"

    id = Column(String(36), primary_key=True, default=_new_user_id)
    email = Column(String(255), nullable=False, unique=True, index=True)
    name = Column(String(255), nullable=True)
    password_hash = Column(String(255), nullable=False)
    is_active = Column(Boolean, nullable=False, default=True, server_default=true())
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    roles = relationship(
        "CmsUserRole",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
        order_by="CmsUserRole.id",
    )
    sessions = relationship(
        "CmsSession",
        back_populates="user",
        cascade="all, delete-orphan",
        passive_deletes=True,
    )


class CmsUserRole(Base):
    """
    One role granted to one user. Grant by insert, revoke by delete.

    The autoincrement id fixes insertion order, which is the order roles appear in tokens.
    """

    __tablename__ = "cms_user_roles"
    __table_args__ = (
        UniqueConstraint("user_id", "role", name="uq_cms_user_roles_user_role"),
        CheckConstraint(
            "role IN ('admin', 'editor', 'viewer')",
            name="ck_cms_user_roles_role",
        ),
    )

    id = Column(Integer, primary_key=True, autoincrement=True)
    user_id = Column(
        String(36),
        ForeignKey("cms_users.id", ondelete="CASCADE"),
        nullable=False,
        index=True,
    )
    role = Column(String(32), nullable=False)
    created_at = Column(
        DateTime(timezone=True),
        nullable=False,
        server_default=func.now(),
    )

    user = relationship("CmsUser", back_populates="roles")
