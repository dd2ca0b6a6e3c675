"""add operator pick-list terms

Revision ID: c4e6a8b0d2f1
Revises: a1d3e5f7b9c2
Create Date: 2026-10-19 10:30:00.000000
"""

from __future__ import annotations

from alembic import op
import sqlalchemy as sa


# revision identifiers, used by Alembic.
revision = "c4e6a8b0d2f1"
down_revision = "a1d3e5f7b9c2"
branch_labels = None
depends_on = None


VOCABULARY_LIST = sa.Enum("MACHINES", "OILS", "CHEMICALS", "PART_FAMILIES", name="vocabulary_list_enum")


def upgrade() -> None:
    op.create_table(
        "vocabulary_terms",
        sa.Column("id", sa.String(length=36), nullable=False),
        sa.Column("list_name", VOCABULARY_LIST, nullable=False),
        sa.Column("value", sa.String(length=255), nullable=False),
        sa.Column("value_key", sa.String(length=255), nullable=False),
        sa.Column("created_at", sa.DateTime(timezone=True), nullable=False),
        sa.Column("created_by", sa.String(length=128), nullable=False),
        sa.PrimaryKeyConstraint("id"),
        sa.UniqueConstraint("list_name", "value_key", name="uq_vocabulary_terms_list_value"),
    )
    op.create_index("ix_vocabulary_terms_id", "vocabulary_terms", ["id"])
    op.create_index("ix_vocabulary_terms_list_name", "vocabulary_terms", ["list_name"])


def downgrade() -> None:
    op.drop_table("vocabulary_terms")
    VOCABULARY_LIST.drop(op.get_bind(), checkfirst=True)
