"""initial schema

Revision ID: 5c1e2a9d7b40
Revises:
Create Date: 2026-10-19 09:12:44.518203

"""
from __future__ import annotations

from typing import Sequence, Union

from alembic import op
import sqlalchemy as sa

# revision identifiers, used by Alembic.
revision: str = "5c1e2a9d7b40"
down_revision: Union[str, Sequence[str], None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None

_REASON_CHECK = "reason IN ('spam', 'blasphemy', 'offensive')"


def _created_at() -> sa.Column:
    return sa.Column("created_at", sa.DateTime(timezone=True), nullable=False)


def upgrade() -> None:
    """Create verses, profiles, subjects, ledgers, counters and references."""
    op.create_table(
        "verses",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("book", sa.Text(), nullable=False),
        sa.Column("chapter", sa.Integer(), nullable=False),
        sa.Column("verse", sa.Integer(), nullable=False),
        sa.Column("original_text", sa.Text(), nullable=True),
        sa.Column("transliteration", sa.Text(), nullable=True),
        sa.Column("verbatim_english", sa.Text(), nullable=True),
        sa.Column("kjv", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("book", "chapter", "verse", name="uq_verses_location"),
    )
    op.create_table(
        "user_profiles",
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("username", sa.Text(), nullable=True),
        sa.Column("avatar", sa.Text(), nullable=True),
        sa.PrimaryKeyConstraint("user_id"),
        sa.UniqueConstraint("username"),
    )

    op.create_table(
        "interpretations",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("verse_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("is_hidden", sa.Boolean(), nullable=False),
        sa.Column("hidden_reason", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["verse_id"], ["verses.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_interpretations_verse_id", "interpretations", ["verse_id"])
    op.create_index("ix_interpretations_user_id", "interpretations", ["user_id"])
    op.create_index(
        "uq_interpretations_visible_author",
        "interpretations",
        ["verse_id", "user_id"],
        unique=True,
        sqlite_where=sa.text("NOT is_hidden"),
        postgresql_where=sa.text("NOT is_hidden"),
    )

    op.create_table(
        "replies",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("interpretation_id", sa.Integer(), nullable=False),
        sa.Column("verse_id", sa.Integer(), nullable=False),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("text", sa.Text(), nullable=False),
        sa.Column("is_hidden", sa.Boolean(), nullable=False),
        sa.Column("hidden_reason", sa.Text(), nullable=True),
        _created_at(),
        sa.ForeignKeyConstraint(["interpretation_id"], ["interpretations.id"]),
        sa.ForeignKeyConstraint(["verse_id"], ["verses.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index("ix_replies_interpretation_id", "replies", ["interpretation_id"])

    for subject, table in (("interpretation", "interpretations"), ("reply", "replies")):
        subject_id = f"{subject}_id"
        op.create_table(
            f"{subject}_upvotes",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(subject_id, sa.Integer(), nullable=False),
            sa.Column("user_id", sa.Text(), nullable=False),
            _created_at(),
            sa.ForeignKeyConstraint([subject_id], [f"{table}.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(subject_id, "user_id", name=f"uq_{subject}_upvotes_voter"),
        )
        op.create_table(
            f"{subject}_flags",
            sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
            sa.Column(subject_id, sa.Integer(), nullable=False),
            sa.Column("flagged_by", sa.Text(), nullable=False),
            sa.Column("reason", sa.Text(), nullable=False),
            sa.Column("explanation", sa.Text(), nullable=True),
            _created_at(),
            sa.CheckConstraint(_REASON_CHECK, name=f"ck_{subject}_flags_reason"),
            sa.ForeignKeyConstraint([subject_id], [f"{table}.id"], ondelete="CASCADE"),
            sa.PrimaryKeyConstraint("id"),
            sa.UniqueConstraint(subject_id, "flagged_by", name=f"uq_{subject}_flags_reporter"),
        )

    op.create_table(
        "interpretation_counts",
        sa.Column("interpretation_id", sa.Integer(), nullable=False),
        sa.Column("reply_count", sa.Integer(), nullable=False),
        sa.Column("upvote_count", sa.Integer(), nullable=False),
        sa.Column("report_count", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["interpretation_id"], ["interpretations.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("interpretation_id"),
    )
    op.create_table(
        "reply_counts",
        sa.Column("reply_id", sa.Integer(), nullable=False),
        sa.Column("upvote_count", sa.Integer(), nullable=False),
        sa.Column("report_count", sa.Integer(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=False),
        sa.ForeignKeyConstraint(["reply_id"], ["replies.id"], ondelete="CASCADE"),
        sa.PrimaryKeyConstraint("reply_id"),
    )

    op.create_table(
        "verse_references",
        sa.Column("id", sa.Integer(), autoincrement=True, nullable=False),
        sa.Column("source_verse_id", sa.Integer(), nullable=False),
        sa.Column("target_verse_id", sa.Integer(), nullable=False),
        sa.Column("interpretation_id", sa.Integer(), nullable=True),
        sa.Column("user_id", sa.Text(), nullable=False),
        sa.Column("reference_text", sa.Text(), nullable=False),
        sa.Column("is_hidden", sa.Boolean(), nullable=False),
        _created_at(),
        sa.ForeignKeyConstraint(["source_verse_id"], ["verses.id"]),
        sa.ForeignKeyConstraint(["target_verse_id"], ["verses.id"]),
        sa.ForeignKeyConstraint(["interpretation_id"], ["interpretations.id"]),
        sa.PrimaryKeyConstraint("id"),
    )
    op.create_index(
        "ix_verse_references_target_verse_id",
        "verse_references",
        ["target_verse_id"],
    )
    op.create_index(
        "ix_verse_references_interpretation_id",
        "verse_references",
        ["interpretation_id"],
    )


def downgrade() -> None:
    """Drop every table in reverse dependency order."""
    op.drop_index("ix_verse_references_interpretation_id", table_name="verse_references")
    op.drop_index("ix_verse_references_target_verse_id", table_name="verse_references")
    op.drop_table("verse_references")
    op.drop_table("reply_counts")
    op.drop_table("interpretation_counts")
    for subject in ("reply", "interpretation"):
        op.drop_table(f"{subject}_flags")
        op.drop_table(f"{subject}_upvotes")
    op.drop_index("ix_replies_interpretation_id", table_name="replies")
    op.drop_table("replies")
    op.drop_index("uq_interpretations_visible_author", table_name="interpretations")
    op.drop_index("ix_interpretations_user_id", table_name="interpretations")
    op.drop_index("ix_interpretations_verse_id", table_name="interpretations")
    op.drop_table("interpretations")
    op.drop_table("user_profiles")
    op.drop_table("verses")
