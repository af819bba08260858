"""
SQLAlchemy ORM models.

These are purely infrastructure concerns; domain entities are mapped to/from
these models inside the repository implementations.
"""
import uuid
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Index, Integer, Numeric, String, Text
from sqlalchemy.dialects.postgresql import JSONB
from sqlalchemy.orm import Mapped, mapped_column

from zotswipe.infrastructure.database.connection import Base


def _new_id() -> str:
    return str(uuid.uuid4())


class SwipeListingModel(Base):
    __tablename__ = "swipe_listings"

    id: Mapped[str] = mapped_column(String(36), primary_key=True, default=_new_id)

    swipe_count: Mapped[int] = mapped_column(Integer, nullable=False)
    price_per_swipe: Mapped[Decimal] = mapped_column(Numeric(10, 2), nullable=False)

    # ISO dates / enum labels
    dates: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)  # type: ignore[type-arg]
    meals: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)  # type: ignore[type-arg]
    locations: Mapped[list] = mapped_column(JSONB, nullable=False, default=list)  # type: ignore[type-arg]

    buyer_name: Mapped[str] = mapped_column(String(256), nullable=False)
    contact_phone: Mapped[str] = mapped_column(String(32), nullable=False)
    note: Mapped[str] = mapped_column(Text, nullable=False, default="")

    listed_at: Mapped[datetime] = mapped_column(DateTime(timezone=True), nullable=False)

    __table_args__ = (
        Index("ix_swipe_listings_listed_at_id", "listed_at", "id"),
    )
