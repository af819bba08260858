from dataclasses import dataclass
from enum import Enum

import structlog

from zotswipe.application.interfaces.listing_repository import PersistenceError
from zotswipe.application.listing_store import ListingStore
from zotswipe.domain.entities.swipe_listing import ListingDraft, SwipeListing
from zotswipe.domain.validation.listing_validator import ValidationError

logger = structlog.get_logger(__name__)

SUCCESS_MESSAGE = "Listing created successfully!"
PERSISTENCE_FAILURE_MESSAGE = "We couldn't save your listing. Please try again."


class SubmitFailure(str, Enum):
    VALIDATION = "validation"
    PERSISTENCE = "persistence"


@dataclass
class SubmitListingOutput:
    message: str
    listing: SwipeListing | None = None
    failure: SubmitFailure | None = None

    @property
    def succeeded(self) -> bool:
        return self.listing is not None


class SubmitListing:
    """
    Use case: Submit the buyer's form.

    On success the draft is reset for the next listing; on any failure it is
    left untouched so the user can fix it or retry.
    """

    def __init__(self, store: ListingStore) -> None:
        self._store = store

    async def execute(self, draft: ListingDraft) -> SubmitListingOutput:
        try:
            listing = await self._store.create(draft)
        except ValidationError as exc:
            logger.info("listing_submit_rejected")
            return SubmitListingOutput(message=exc.message, failure=SubmitFailure.VALIDATION)
        except PersistenceError:
            return SubmitListingOutput(
                message=PERSISTENCE_FAILURE_MESSAGE, failure=SubmitFailure.PERSISTENCE
            )

        draft.reset()
        return SubmitListingOutput(message=SUCCESS_MESSAGE, listing=listing)
