"""Create the document table.

Revision ID: 0001_document_store
Revises:
Create Date: 2024-01-01 00:00:00

"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

from wasteflow.adapters.sqlalchemy.mappings import UTCDateTime

revision = "0001_document_store"
down_revision = None
branch_labels = None
depends_on = None


def upgrade() -> None:
    op.create_table(
        "document",
        sa.Column("key", sa.String(length=64), nullable=False),
        sa.Column("version", sa.Integer(), nullable=False),
        sa.Column("payload", sa.JSON(), nullable=False),
        sa.Column("updated_at", UTCDateTime(), nullable=False),
        sa.PrimaryKeyConstraint("key", name=op.f("pk_document")),
    )


def downgrade() -> None:
    op.drop_table("document")
