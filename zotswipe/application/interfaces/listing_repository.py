from abc import ABC, abstractmethod

from zotswipe.domain.entities.swipe_listing import SwipeListing


class PersistenceError(Exception):
    """Raised when the listing store cannot be read or written."""


class ListingRepository(ABC):
    """Port for persisting and querying swipe listings."""

    @abstractmethod
    async def insert(self, listing: SwipeListing) -> str:
        """Write a new listing and return its generated id."""
        ...

    @abstractmethod
    async def fetch_recent(self, limit: int) -> list[SwipeListing]:
        """
        Return at most ``limit`` listings, newest ``listed_at`` first.

        Records that fail to decode are skipped rather than failing the read.
        """
        ...
