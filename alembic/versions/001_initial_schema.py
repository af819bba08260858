"""initial schema

Revision ID: 001_initial_schema
Revises:
Create Date: 2024-09-26 00:00:00.000000
"""
from typing import Sequence, Union

import sqlalchemy as sa
from sqlalchemy.dialects.postgresql import JSONB

from alembic import op

revision: str = "001_initial_schema"
down_revision: Union[str, None] = None
branch_labels: Union[str, Sequence[str], None] = None
depends_on: Union[str, Sequence[str], None] = None


def upgrade() -> None:
    op.create_table(
        "swipe_listings",
        sa.Column("id", sa.String(36), primary_key=True),
        sa.Column("swipe_count", sa.Integer(), nullable=False),
        sa.Column("price_per_swipe", sa.Numeric(10, 2), nullable=False),
        # ISO dates / enum labels
        sa.Column("dates", JSONB, nullable=False, server_default=sa.text("'[]'")),
        sa.Column("meals", JSONB, nullable=False, server_default=sa.text("'[]'")),
        sa.Column("locations", JSONB, nullable=False, server_default=sa.text("'[]'")),
        # Contact
        sa.Column("buyer_name", sa.String(256), nullable=False),
        sa.Column("contact_phone", sa.String(32), nullable=False),
        sa.Column("note", sa.Text(), nullable=False, server_default=""),
        sa.Column("listed_at", sa.DateTime(timezone=True), nullable=False),
        sa.CheckConstraint("swipe_count > 0", name="ck_swipe_listings_swipe_count_positive"),
        sa.CheckConstraint("price_per_swipe > 0", name="ck_swipe_listings_price_positive"),
    )

    op.create_index("ix_swipe_listings_listed_at_id", "swipe_listings", ["listed_at", "id"])


def downgrade() -> None:
    op.drop_index("ix_swipe_listings_listed_at_id", table_name="swipe_listings")
    op.drop_table("swipe_listings")
