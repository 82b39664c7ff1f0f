"""Add cms_users, cms_user_roles and cms_sessions tables.

Revision ID: 20261019000000
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

revision: str = "20261019000000"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "cms_users",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("email", sa.String(length=255), nullable=False),
        sa.Column("name", sa.String(length=255), nullable=True),
        sa.Column("password_hash", sa.String(length=255), nullable=False),
        sa.Column("is_active", sa.Boolean(), nullable=False, server_default=sa.true()),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cms_users_email"), "cms_users", ["email"], unique=True)

    op.create_table(
        "cms_user_roles",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column("role", sa.String(length=32), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.ForeignKeyConstraint(["user_id"], ["cms_users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("user_id", "role", name="uq_cms_user_roles_user_role"),
        sa.CheckConstraint(
            "role IN ('admin', 'editor', 'viewer')",
            name="ck_cms_user_roles_role",
        ),
    )
    op.create_index(op.f("ix_cms_user_roles_user_id"), "cms_user_roles", ["user_id"])

    op.create_table(
        "cms_sessions",
        sa.Column("id", sa.String(length=64), nullable=False),
        sa.Column("user_id", sa.String(length=36), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            nullable=False,
            server_default=sa.func.now(),
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["user_id"], ["cms_users.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(op.f("ix_cms_sessions_user_id"), "cms_sessions", ["user_id"])
    op.create_index(op.f("ix_cms_sessions_expires_at"), "cms_sessions", ["expires_at"])


def downgrade() -> None:
    op.drop_index(op.f("ix_cms_sessions_expires_at"), table_name="cms_sessions")
    op.drop_index(op.f("ix_cms_sessions_user_id"), table_name="cms_sessions")
    op.drop_table("cms_sessions")
    op.drop_index(op.f("ix_cms_user_roles_user_id"), table_name="cms_user_roles")
    op.drop_table("cms_user_roles")
    op.drop_index(op.f("ix_cms_users_email"), table_name="cms_users")
    op.drop_table("cms_users")
