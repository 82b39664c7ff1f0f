"""Credential store: CMS users and role assignments behind a storage-neutral interface."""

from sqlalchemy import func
from sqlalchemy.exc import IntegrityError
from sqlalchemy.orm import Session

from cms_auth.models import CmsUser, CmsUserRole


class UniqueConstraintViolation(Exception):
    """Raised when an insert collides with a uniqueness constraint (e.g. duplicate email)."""

    def __init__(self, message: str) -> None:
        self.message = message
        super().__init__(message)


def normalize_email(email: str) -> str:
    """Emails are compared and stored trimmed and lower-cased."""
    return email.strip().lower()


class CredentialStore:
    """
    Users and roles on top of a SQLAlchemy session.

    Writes are flushed, not committed; the caller owns the transaction.
    """

    def __init__(self, db: Session) -> None:
        self.db = db

    def count_users(self) -> int:
        return self.db.query(func.count(CmsUser.id)).scalar() or 0

    def get_user_by_email(self, email: str) -> CmsUser | None:
        return (
            self.db.query(CmsUser)
            .filter(CmsUser.email == normalize_email(email))
            .first()
        )

    def get_user(self, user_id: str) -> CmsUser | None:
        return self.db.get(CmsUser, user_id)

    def list_users(self) -> list[CmsUser]:
        return self.db.query(CmsUser).order_by(CmsUser.created_at, CmsUser.email).all()

    def insert_user(self, email: str, password_hash: str, name: str | None = None) -> CmsUser:
        """
        Insert a user. The database unique index on email is authoritative: no
        existence pre-check is made, a conflict surfaces as UniqueConstraintViolation.
        """
        user = CmsUser(
            email=normalize_email(email),
            password_hash=password_hash,
            name=name or None,
        )
        self.db.add(user)
        try:
            self.db.flush()
        except IntegrityError as e:
            self.db.rollback()
            raise UniqueConstraintViolation("Email already exists") from e
        return user

    def list_roles(self, user_id: str) -> list[str]:
        """Roles of user_id in insertion order."""
        rows = (
            self.db.query(CmsUserRole.role)
            .filter(CmsUserRole.user_id == user_id)
            .order_by(CmsUserRole.id)
            .all()
        )
        return [row.role for row in rows]

    def add_role(self, user_id: str, role: str) -> CmsUserRole:
        assignment = CmsUserRole(user_id=user_id, role=role)
        self.db.add(assignment)
        self.db.flush()
        return assignment
