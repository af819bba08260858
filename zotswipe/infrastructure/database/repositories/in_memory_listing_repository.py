"""
In-memory listing repository, used in tests and for local development
without a database.
"""
from uuid import uuid4

import structlog

from zotswipe.application.interfaces.listing_repository import ListingRepository
from zotswipe.domain.entities.swipe_listing import SwipeListing

logger = structlog.get_logger(__name__)


class InMemoryListingRepository(ListingRepository):
    """Keeps listings in a dict keyed by generated id."""

    def __init__(self, listings: list[SwipeListing] | None = None) -> None:
        self._listings: dict[str, SwipeListing] = {}
        for listing in listings or []:
            listing_id = listing.id or str(uuid4())
            self._listings[listing_id] = listing.with_id(listing_id)

    async def insert(self, listing: SwipeListing) -> str:
        listing_id = str(uuid4())
        self._listings[listing_id] = listing.with_id(listing_id)
        logger.debug("listing_stored_in_memory", listing_id=listing_id)
        return listing_id

    async def fetch_recent(self, limit: int) -> list[SwipeListing]:
        ordered = sorted(
            self._listings.values(),
            key=lambda listing: (listing.listed_at, listing.id),
            reverse=True,
        )
        return ordered[:limit]
