"""create item table

Revision ID: 0001_create_item_table
Revises:
Create Date: 2026-10-16 09:00:00
"""

from __future__ import annotations

import sqlalchemy as sa
from alembic import op

revision: str = "0001_create_item_table"
down_revision: str | None = None
branch_labels: str | None = None
depends_on: str | None = None


def upgrade() -> None:
    op.create_table(
        "item",
        sa.Column("pk", sa.String(length=128), nullable=False),
        sa.Column("sk", sa.String(length=128), nullable=False),
        sa.Column("customer_id", sa.String(length=128), nullable=True),
        sa.Column("vin", sa.String(length=64), nullable=True),
        sa.Column("data", sa.JSON(), nullable=False),
        sa.Column("updated_at", sa.DateTime(timezone=True), nullable=True),
        sa.PrimaryKeyConstraint("pk", "sk", name=op.f("pk_item")),
    )
    op.create_index("ix_item_customer_id_vin", "item", ["customer_id", "vin"])
    op.create_index("ix_item_vin", "item", ["vin"])


def downgrade() -> None:
    op.drop_index("ix_item_vin", table_name="item")
    op.drop_index("ix_item_customer_id_vin", table_name="item")
    op.drop_table("item")
