import uuid
from datetime import date
from decimal import Decimal

import structlog
from sqlalchemy import select
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.ext.asyncio import AsyncSession, async_sessionmaker

from zotswipe.application.interfaces.listing_repository import (
    ListingRepository,
    PersistenceError,
)
from zotswipe.domain.entities.swipe_listing import SwipeListing
from zotswipe.domain.errors import DecodeError
from zotswipe.infrastructure.database.models import SwipeListingModel

logger = structlog.get_logger(__name__)


def _to_domain(model: SwipeListingModel) -> SwipeListing:
    try:
        return SwipeListing(
            id=model.id,
            swipe_count=int(model.swipe_count),
            price_per_swipe=Decimal(str(model.price_per_swipe)),
            dates=frozenset(date.fromisoformat(d) for d in model.dates),
            meals=frozenset(model.meals),
            locations=frozenset(model.locations),
            buyer_name=model.buyer_name,
            contact_phone=model.contact_phone,
            note=model.note or "",
            listed_at=model.listed_at,
        )
    except (TypeError, ValueError, ArithmeticError) as exc:
        raise DecodeError(f"listing {model.id}", str(exc)) from exc


def _to_model(listing: SwipeListing) -> SwipeListingModel:
    return SwipeListingModel(
        id=listing.id or str(uuid.uuid4()),
        swipe_count=listing.swipe_count,
        price_per_swipe=listing.price_per_swipe,
        dates=[d.isoformat() for d in sorted(listing.dates)],
        meals=sorted(m.value for m in listing.meals),
        locations=sorted(loc.value for loc in listing.locations),
        buyer_name=listing.buyer_name,
        contact_phone=listing.contact_phone,
        note=listing.note,
        listed_at=listing.listed_at,
    )


def decode_listings(models: list[SwipeListingModel]) -> list[SwipeListing]:
    """Decode rows, skipping any that no longer satisfy the listing invariants."""
    listings: list[SwipeListing] = []
    for model in models:
        try:
            listings.append(_to_domain(model))
        except DecodeError as exc:
            logger.warning("listing_record_skipped", listing_id=model.id, reason=exc.reason)
    return listings


class SqlAlchemyListingRepository(ListingRepository):
    """SQLAlchemy implementation for listing persistence; one session per call."""

    def __init__(self, session_factory: async_sessionmaker[AsyncSession]) -> None:
        self._session_factory = session_factory

    async def insert(self, listing: SwipeListing) -> str:
        model = _to_model(listing)
        try:
            async with self._session_factory() as session:
                async with session.begin():
                    session.add(model)
                    await session.flush()
        except (SQLAlchemyError, OSError) as exc:
            logger.error("listing_insert_failed", error=str(exc))
            raise PersistenceError("Failed to save listing.") from exc
        return model.id

    async def fetch_recent(self, limit: int) -> list[SwipeListing]:
        query = (
            select(SwipeListingModel)
            .order_by(SwipeListingModel.listed_at.desc(), SwipeListingModel.id.desc())
            .limit(limit)
        )
        try:
            async with self._session_factory() as session:
                result = await session.execute(query)
                models = list(result.scalars().all())
        except (SQLAlchemyError, OSError) as exc:
            logger.error("listing_query_failed", error=str(exc))
            raise PersistenceError("Failed to load listings.") from exc
        return decode_listings(models)
