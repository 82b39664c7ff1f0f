"""SQLAlchemy declarative Base shared by the credential store and session ledger tables."""

from sqlalchemy.orm import DeclarativeBase


class Base(DeclarativeBase):
    """Declarative base for all ORM models."""
