"""saved verses and prayer points

Revision ID: 8a3f6d21c9e4
Revises: 5c1e2a9d7b40
Create Date: 2026-10-19 15:40:02.771930

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "8a3f6d21c9e4"
down_revision: Union[str, Sequence[str], None] = "5c1e2a9d7b40"
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    """Create the saved_verses and prayer_points tables."""
    op.create_table(
        "saved_verses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("verse_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["verse_id"], ["verses.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("verse_id", "user_id", name="uq_saved_verses_user"),
    )
    op.create_table(
        "prayer_points",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("verse_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("prayer_text", sa.Text(), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["verse_id"], ["verses.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_prayer_points_verse_id", "prayer_points", ["verse_id"])


def downgrade() -> None:
    """Drop the saved_verses and prayer_points tables."""
    op.drop_index("ix_prayer_points_verse_id", table_name="prayer_points")
    op.drop_table("prayer_points")
    op.drop_table("saved_verses")
