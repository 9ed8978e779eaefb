"""users + public_profiles

Revision ID: 0001
Revises:
Create Date: 2026-10-19

"""
from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql

revision: str = "0001"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "users",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("email", sa.String(255), nullable=False),
        sa.Column("display_name", sa.String(120), nullable=True),
        sa.Column("hashed_password", sa.String(255), nullable=False),
        sa.Column("token_version", sa.Integer(), nullable=False, server_default="0"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_users_email", "users", ["email"], unique=True)

    op.create_table(
        "public_profiles",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column(
            "user_id",
            sa.String(36),
            sa.ForeignKey("users.id", ondelete="CASCADE"),
            nullable=False,
        ),
        sa.Column("profile_title", sa.String(120), nullable=True),
        sa.Column("profile_description", sa.Text(), nullable=True),
        sa.Column(
            "data",
            sa.JSON().with_variant(postgresql.JSONB(), "postgresql"),
            nullable=True,
        ),
        sa.Column("chosen", sa.Boolean(), nullable=False, server_default="false"),
        sa.Column("created_at", sa.DateTime(timezone=True), server_default=sa.func.now()),
    )
    op.create_index("ix_public_profiles_user_id", "public_profiles", ["user_id"])
    op.create_index("ix_public_profiles_chosen", "public_profiles", ["chosen"])
    op.create_index(
        "uq_public_profiles_one_chosen",
        "public_profiles",
        ["user_id"],
        unique=True,
        postgresql_where=sa.text("chosen"),
        sqlite_where=sa.text("chosen"),
    )


def downgrade() -> None:
    op.drop_index("uq_public_profiles_one_chosen", table_name="public_profiles")
    op.drop_index("ix_public_profiles_chosen", table_name="public_profiles")
    op.drop_index("ix_public_profiles_user_id", table_name="public_profiles")
    op.drop_table("public_profiles")
    op.drop_index("ix_users_email", table_name="users")
    op.drop_table("users")
