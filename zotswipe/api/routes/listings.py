from fastapi import APIRouter, Depends, HTTPException, Query, status

from zotswipe.api.dependencies import get_listing_store, get_submit_listing_use_case
from zotswipe.api.schemas.listing_schemas import (
    ContactLinkResponse,
    CreateListingResponse,
    DraftValidationResponse,
    ListingDraftRequest,
    ListingFeedResponse,
    ListingOptionsResponse,
    ListingResponse,
    QuantityBounds,
)
from zotswipe.application.interfaces.listing_repository import PersistenceError
from zotswipe.application.listing_store import ListingStore
from zotswipe.application.use_cases.submit_listing import SubmitFailure, SubmitListing
from zotswipe.config import settings
from zotswipe.domain.contact import build_sms_link
from zotswipe.domain.entities.swipe_listing import SwipeListing
from zotswipe.domain.enums.dining_location import DiningLocation
from zotswipe.domain.enums.meal_period import MealPeriod
from zotswipe.domain.presentation import (
    format_dates,
    format_listed_time,
    format_price,
    next_days,
)
from zotswipe.domain.validation.listing_validator import GENERIC_VALIDATION_MESSAGE

router = APIRouter(prefix="/listings", tags=["listings"])


def _listing_to_response(listing: SwipeListing) -> ListingResponse:
    return ListingResponse(
        id=listing.id or "",
        swipe_count=listing.swipe_count,
        price_per_swipe=listing.price_per_swipe,
        total_price=listing.total_price,
        dates=sorted(listing.dates),
        meals=[m for m in MealPeriod if m in listing.meals],
        locations=[loc for loc in DiningLocation if loc in listing.locations],
        buyer_name=listing.buyer_name,
        contact_phone=listing.contact_phone,
        note=listing.note,
        listed_at=listing.listed_at,
        price_label=format_price(listing.price_per_swipe),
        dates_label=format_dates(listing.dates),
        listed_label=format_listed_time(listing.listed_at),
    )


def _feed_response(store: ListingStore) -> ListingFeedResponse:
    state = store.state
    return ListingFeedResponse(
        listings=[_listing_to_response(listing) for listing in state.listings],
        is_loading=state.is_loading,
        last_error=state.last_error,
    )


@router.get("", response_model=ListingFeedResponse)
async def list_recent_listings(
    limit: int = Query(default=settings.recent_listings_limit, ge=1, le=100),
    store: ListingStore = Depends(get_listing_store),
) -> ListingFeedResponse:
    """Reload and return the newest listings; on failure serve the cached ones."""
    try:
        await store.fetch_recent(limit)
    except PersistenceError:
        pass  # already logged and recorded in store.state.last_error
    return _feed_response(store)


@router.post("", status_code=status.HTTP_201_CREATED, response_model=CreateListingResponse)
async def create_listing(
    body: ListingDraftRequest,
    use_case: SubmitListing = Depends(get_submit_listing_use_case),
) -> CreateListingResponse:
    result = await use_case.execute(body.to_draft())
    if result.failure is SubmitFailure.VALIDATION:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=result.message)
    if result.failure is SubmitFailure.PERSISTENCE or result.listing is None:
        raise HTTPException(status_code=status.HTTP_503_SERVICE_UNAVAILABLE, detail=result.message)
    return CreateListingResponse(
        listing=_listing_to_response(result.listing),
        message=result.message,
    )


@router.post("/validate", response_model=DraftValidationResponse)
async def validate_draft(
    body: ListingDraftRequest,
    store: ListingStore = Depends(get_listing_store),
) -> DraftValidationResponse:
    """Form gate, re-evaluated by the client after every field change."""
    draft = body.to_draft()
    submittable = store.validator.is_submittable(draft)
    return DraftValidationResponse(
        submittable=submittable,
        contact_phone=draft.contact_phone,
        message=None if submittable else GENERIC_VALIDATION_MESSAGE,
    )


@router.get("/options", response_model=ListingOptionsResponse)
async def listing_options(
    store: ListingStore = Depends(get_listing_store),
) -> ListingOptionsResponse:
    options = store.validator.options
    return ListingOptionsResponse(
        meals=[m for m in MealPeriod if m in options.meals],
        locations=[loc for loc in DiningLocation if loc in options.locations],
        swipe_count=QuantityBounds(
            minimum=settings.swipe_count_min, maximum=settings.swipe_count_max
        ),
        price_per_swipe=QuantityBounds(
            minimum=settings.price_per_swipe_min, maximum=settings.price_per_swipe_max
        ),
        dates=next_days(settings.date_picker_days),
    )


@router.get("/{listing_id}/contact-link", response_model=ContactLinkResponse)
async def contact_link(
    listing_id: str,
    store: ListingStore = Depends(get_listing_store),
) -> ContactLinkResponse:
    listing = store.find(listing_id)
    if listing is None:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Listing not found.")
    return ContactLinkResponse(
        listing_id=listing_id,
        url=build_sms_link(listing, greeting=settings.contact_greeting),
    )
