"""create_screener_tables

Revision ID: 4c1e9b7d2a10
Revises:
Create Date: 2026-10-18 09:12:31.204118

"""

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa
from sqlalchemy.dialects import postgresql


# revision identifiers, used by Alembic.
revision: str = "4c1e9b7d2a10"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    # 1. Screener universe (one JSON payload per ticker)
    op.create_table(
        "screener_cache",
        sa.Column("ticker", sa.String(), nullable=False),
        sa.Column("data", postgresql.JSONB(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("ticker"),
    )
    op.create_index(
        "idx_screener_cache_updated_at", "screener_cache", ["updated_at"], unique=False
    )

    # 2. Saved screens (user-owned filter presets)
    op.create_table(
        "saved_screens",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("user_id", sa.String(), nullable=False),
        sa.Column("name", sa.String(), nullable=False),
        sa.Column("description", sa.Text(), nullable=True),
        sa.Column("filters_json", postgresql.JSONB(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=True),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        op.f("ix_saved_screens_user_id"), "saved_screens", ["user_id"], unique=False
    )
    op.create_index(
        "idx_saved_screens_user_created",
        "saved_screens",
        ["user_id", "created_at"],
        unique=False,
    )


def downgrade() -> None:
    op.drop_index("idx_saved_screens_user_created", table_name="saved_screens")
    op.drop_index(op.f("ix_saved_screens_user_id"), table_name="saved_screens")
    op.drop_table("saved_screens")

    op.drop_index("idx_screener_cache_updated_at", table_name="screener_cache")
    op.drop_table("screener_cache")
