from dataclasses import dataclass, field

from zotswipe.domain.entities.swipe_listing import ListingDraft
from zotswipe.domain.enums.dining_location import DiningLocation
from zotswipe.domain.enums.meal_period import MealPeriod
from zotswipe.domain.phone_number import is_valid_phone_number

GENERIC_VALIDATION_MESSAGE = (
    "Please fill in all required fields and ensure your phone number is valid."
)


class ValidationError(Exception):
    """Raised when a draft is not complete enough to submit."""

    def __init__(self, message: str = GENERIC_VALIDATION_MESSAGE) -> None:
        self.message = message
        super().__init__(message)


@dataclass(frozen=True)
class ListingOptions:
    """Meal and location choices the host currently offers."""

    meals: frozenset[MealPeriod] = field(default_factory=lambda: frozenset(MealPeriod))
    locations: frozenset[DiningLocation] = field(
        default_factory=lambda: frozenset(DiningLocation)
    )

    @classmethod
    def from_labels(cls, meals: list[str], locations: list[str]) -> "ListingOptions":
        return cls(
            meals=frozenset(MealPeriod(m) for m in meals),
            locations=frozenset(DiningLocation(loc) for loc in locations),
        )


class ListingValidator:
    """
    Single boolean gate over a draft.

    Cheap and side-effect free, so callers re-evaluate it after every field
    change. A failing draft yields one generic message, never a per-field one.
    """

    def __init__(self, options: ListingOptions | None = None) -> None:
        self._options = options or ListingOptions()

    @property
    def options(self) -> ListingOptions:
        return self._options

    def is_submittable(self, draft: ListingDraft) -> bool:
        return (
            draft.swipe_count >= 1
            and draft.price_per_swipe >= 1
            and bool(draft.dates)
            and bool(draft.meals)
            and bool(draft.locations)
            and draft.meals <= self._options.meals
            and draft.locations <= self._options.locations
            and bool(draft.buyer_name)
            and is_valid_phone_number(draft.contact_phone)
        )

    def validate(self, draft: ListingDraft) -> None:
        """Raise ValidationError if the draft cannot be submitted."""
        if not self.is_submittable(draft):
            raise ValidationError()
