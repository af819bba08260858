"""
Observable cache of the most recent swipe listings.

The store is the single writer of its state. Every mutation happens inside
its own coroutines on the event loop that drives it, and each change is
pushed to subscribers as an immutable ``ListingFeedState`` snapshot.
"""
from collections.abc import Callable
from dataclasses import dataclass, replace
from datetime import datetime, timezone

import structlog

from zotswipe.application.interfaces.listing_repository import (
    ListingRepository,
    PersistenceError,
)
from zotswipe.domain.entities.swipe_listing import ListingDraft, SwipeListing
from zotswipe.domain.validation.listing_validator import ListingValidator

logger = structlog.get_logger(__name__)

DEFAULT_RECENT_LIMIT = 20

LOAD_FAILURE_MESSAGE = "Couldn't load listings. Pull to refresh."
SAVE_FAILURE_MESSAGE = "Couldn't save your listing. Please try again."


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


@dataclass(frozen=True)
class ListingFeedState:
    listings: tuple[SwipeListing, ...] = ()
    is_loading: bool = False
    last_error: str | None = None


FeedObserver = Callable[[ListingFeedState], None]


class ListingStore:
    """Owns the recent-listings cache and the write/reload pipeline."""

    def __init__(
        self,
        repository: ListingRepository,
        *,
        default_limit: int = DEFAULT_RECENT_LIMIT,
        validator: ListingValidator | None = None,
        clock: Callable[[], datetime] = _utcnow,
    ) -> None:
        self._repository = repository
        self._default_limit = default_limit
        self._validator = validator or ListingValidator()
        self._clock = clock
        self._state = ListingFeedState()
        self._observers: list[FeedObserver] = []

    # -------------------------------------------------------------------------
    # Observation
    # -------------------------------------------------------------------------

    @property
    def state(self) -> ListingFeedState:
        return self._state

    @property
    def listings(self) -> tuple[SwipeListing, ...]:
        return self._state.listings

    @property
    def is_loading(self) -> bool:
        return self._state.is_loading

    @property
    def validator(self) -> ListingValidator:
        return self._validator

    def subscribe(self, observer: FeedObserver) -> Callable[[], None]:
        """Register ``observer`` and return a callable that removes it."""
        self._observers.append(observer)

        def unsubscribe() -> None:
            if observer in self._observers:
                self._observers.remove(observer)

        return unsubscribe

    def find(self, listing_id: str) -> SwipeListing | None:
        """Look up a listing in the current cache."""
        return next(
            (listing for listing in self._state.listings if listing.id == listing_id), None
        )

    def _set_state(self, **changes: object) -> None:
        self._state = replace(self._state, **changes)  # type: ignore[arg-type]
        for observer in list(self._observers):
            try:
                observer(self._state)
            except Exception:
                logger.exception("listing_observer_failed")

    # -------------------------------------------------------------------------
    # Operations
    # -------------------------------------------------------------------------

    async def fetch_recent(self, limit: int | None = None) -> list[SwipeListing]:
        """
        Reload the ``limit`` newest listings into the cache.

        On failure the previous listings stay cached, the error is recorded
        for display, and PersistenceError is raised.
        """
        limit = self._default_limit if limit is None else limit
        if limit < 1:
            raise ValueError(f"limit must be at least 1, got {limit}.")

        self._set_state(is_loading=True)
        try:
            listings = await self._repository.fetch_recent(limit)
        except PersistenceError as exc:
            logger.error("listing_fetch_failed", limit=limit, error=str(exc))
            self._set_state(is_loading=False, last_error=LOAD_FAILURE_MESSAGE)
            raise
        except Exception as exc:
            logger.exception("listing_fetch_failed", limit=limit)
            self._set_state(is_loading=False, last_error=LOAD_FAILURE_MESSAGE)
            raise PersistenceError(LOAD_FAILURE_MESSAGE) from exc
        else:
            self._set_state(listings=tuple(listings), is_loading=False, last_error=None)
        finally:
            # Cancellation skips both branches above
            if self._state.is_loading:
                self._set_state(is_loading=False)

        logger.info("listings_fetched", count=len(listings), limit=limit)
        return listings

    async def create(self, draft: ListingDraft) -> SwipeListing:
        """
        Validate and persist ``draft``, then reload the recent listings.

        The draft itself is never modified, so a failed submit can be retried.
        May raise ValidationError or PersistenceError.
        """
        self._validator.validate(draft)
        listing = draft.to_listing(listed_at=self._clock())

        try:
            listing_id = await self._repository.insert(listing)
        except PersistenceError as exc:
            logger.error("listing_create_failed", error=str(exc))
            self._set_state(last_error=SAVE_FAILURE_MESSAGE)
            raise
        except Exception as exc:
            logger.exception("listing_create_failed")
            self._set_state(last_error=SAVE_FAILURE_MESSAGE)
            raise PersistenceError(SAVE_FAILURE_MESSAGE) from exc

        created = listing.with_id(listing_id)
        logger.info(
            "listing_created",
            listing_id=listing_id,
            swipe_count=created.swipe_count,
            price_per_swipe=str(created.price_per_swipe),
        )

        try:
            await self.fetch_recent()
        except PersistenceError:
            # The write stands; the failed reload is already recorded in state
            logger.warning("listing_refresh_after_create_failed", listing_id=listing_id)

        return created
