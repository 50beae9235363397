"""Create account and password_token tables.

Revision ID: a1c3e5f7b9d0
Revises:
Create Date: 2026-10-19

account: participants, admins and donor intake records; email unique among
rows that are not soft-deleted. password_token: single-use password links
(create_password / reset_password), stored by SHA-256 hash.
"""

from collections.abc import Sequence
from typing import Union

import sqlalchemy as sa
from alembic import op

revision: str = "a1c3e5f7b9d0"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "account",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("email", sa.String(255), nullable=True),
        sa.Column("first_name", sa.String(100), nullable=True),
        sa.Column("last_name", sa.String(100), nullable=True),
        sa.Column(
            "role",
            sa.String(20),
            server_default=sa.text("'participant'"),
            nullable=False,
        ),
        sa.Column("hashed_password", sa.String(), nullable=True),
        sa.Column("date_of_birth", sa.Date(), nullable=True),
        sa.Column("phone", sa.String(12), nullable=True),
        sa.Column("city", sa.String(100), nullable=True),
        sa.Column("state", sa.String(50), nullable=True),
        sa.Column("zip_code", sa.String(5), nullable=True),
        sa.Column("school_or_employer", sa.String(200), nullable=True),
        sa.Column("field_of_interest", sa.String(50), nullable=True),
        sa.Column("photo_path", sa.String(500), nullable=True),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "updated_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column(
            "is_deleted",
            sa.Boolean(),
            server_default=sa.text("false"),
            nullable=False,
        ),
        sa.Column("deleted_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "role IN ('participant', 'admin', 'donor')", name="ck_account_role"
        ),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "uq_account_email_active",
        "account",
        ["email"],
        unique=True,
        postgresql_where=sa.text("is_deleted = false"),
    )

    op.create_table(
        "password_token",
        sa.Column("id", sa.String(), nullable=False),
        sa.Column("token_hash", sa.String(64), nullable=False),
        sa.Column("account_id", sa.String(), nullable=False),
        sa.Column("purpose", sa.String(50), nullable=False),
        sa.Column(
            "created_at",
            sa.DateTime(timezone=True),
            server_default=sa.text("now()"),
            nullable=False,
        ),
        sa.Column("expires_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("used_at", sa.DateTime(timezone=True), nullable=True),
        sa.CheckConstraint(
            "purpose IN ('create_password', 'reset_password')",
            name="ck_password_token_purpose",
        ),
        sa.ForeignKeyConstraint(["account_id"], ["account.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_password_token_token_hash"),
        "password_token",
        ["token_hash"],
        unique=True,
    )
    op.create_index(
        op.f("ix_password_token_account_id"),
        "password_token",
        ["account_id"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index(op.f("ix_password_token_account_id"), table_name="password_token")
    op.drop_index(op.f("ix_password_token_token_hash"), table_name="password_token")
    op.drop_table("password_token")
    op.drop_index("uq_account_email_active", table_name="account")
    op.drop_table("account")
