from datetime import date, datetime
from decimal import Decimal

from pydantic import BaseModel

from zotswipe.domain.entities.swipe_listing import ListingDraft
from zotswipe.domain.enums.dining_location import DiningLocation
from zotswipe.domain.enums.meal_period import MealPeriod


class ListingResponse(BaseModel):
    id: str
    swipe_count: int
    price_per_swipe: Decimal
    total_price: Decimal
    dates: list[date]
    meals: list[MealPeriod]
    locations: list[DiningLocation]
    buyer_name: str
    contact_phone: str
    note: str
    listed_at: datetime

    # Pre-rendered labels for the feed and detail views
    price_label: str
    dates_label: str
    listed_label: str


class ListingFeedResponse(BaseModel):
    listings: list[ListingResponse]
    is_loading: bool
    last_error: str | None = None


class ListingDraftRequest(BaseModel):
    """
    Form contents as typed by the user.

    Deliberately unconstrained: completeness is judged by the listing
    validator so that every failure produces the same message.
    """

    swipe_count: int = 1
    price_per_swipe: Decimal = Decimal("10")
    dates: list[date] = []
    meals: list[MealPeriod] = []
    locations: list[DiningLocation] = []
    buyer_name: str = ""
    contact_phone: str = ""
    note: str = ""

    def to_draft(self) -> ListingDraft:
        draft = ListingDraft(
            swipe_count=self.swipe_count,
            price_per_swipe=self.price_per_swipe,
            dates=set(self.dates),
            meals=set(self.meals),
            locations=set(self.locations),
            buyer_name=self.buyer_name,
            note=self.note,
        )
        draft.set_contact_phone(self.contact_phone)
        return draft


class CreateListingResponse(BaseModel):
    listing: ListingResponse
    message: str


class DraftValidationResponse(BaseModel):
    submittable: bool
    contact_phone: str
    message: str | None = None


class QuantityBounds(BaseModel):
    minimum: int
    maximum: int


class ListingOptionsResponse(BaseModel):
    meals: list[MealPeriod]
    locations: list[DiningLocation]
    swipe_count: QuantityBounds
    price_per_swipe: QuantityBounds
    dates: list[date]


class ContactLinkResponse(BaseModel):
    listing_id: str
    url: str
