from dataclasses import dataclass, field, replace
from datetime import date, datetime, timezone
from decimal import ROUND_HALF_UP, Decimal
from typing import TypeVar

from zotswipe.domain.enums.dining_location import DiningLocation
from zotswipe.domain.enums.meal_period import MealPeriod
from zotswipe.domain.phone_number import format_phone_number, is_valid_phone_number

_T = TypeVar("_T")

# Matches the NUMERIC(10, 2) storage column
CENT = Decimal("0.01")


def _utcnow() -> datetime:
    return datetime.now(timezone.utc)


def _as_day(value: date) -> date:
    # datetime is a subclass of date; keep calendar-day granularity only
    if isinstance(value, datetime):
        return value.date()
    return value


@dataclass(frozen=True)
class QuantityRange:
    """Closed range used by the form steppers."""

    minimum: int
    maximum: int

    def __post_init__(self) -> None:
        if self.minimum > self.maximum:
            raise ValueError(f"Empty range [{self.minimum}, {self.maximum}].")

    def clamp(self, value: int) -> int:
        return max(self.minimum, min(self.maximum, value))


SWIPE_COUNT_RANGE = QuantityRange(1, 10)
PRICE_PER_SWIPE_RANGE = QuantityRange(1, 20)


@dataclass(frozen=True)
class SwipeListing:
    """
    A persisted offer to buy meal swipes.

    Immutable once constructed. ``id`` stays ``None`` until the store has
    written the record, and ``listed_at`` is always assigned by the store.
    """

    swipe_count: int
    price_per_swipe: Decimal
    dates: frozenset[date]
    meals: frozenset[MealPeriod]
    locations: frozenset[DiningLocation]
    buyer_name: str
    contact_phone: str
    listed_at: datetime
    note: str = ""
    id: str | None = None

    def __post_init__(self) -> None:
        # Normalise collections so equality works regardless of input type
        price = Decimal(str(self.price_per_swipe)).quantize(CENT, rounding=ROUND_HALF_UP)
        object.__setattr__(self, "price_per_swipe", price)
        object.__setattr__(self, "dates", frozenset(_as_day(d) for d in self.dates))
        object.__setattr__(self, "meals", frozenset(MealPeriod(m) for m in self.meals))
        object.__setattr__(
            self, "locations", frozenset(DiningLocation(loc) for loc in self.locations)
        )

        if self.swipe_count <= 0:
            raise ValueError("swipe_count must be positive.")
        if self.price_per_swipe <= 0:
            raise ValueError("price_per_swipe must be positive.")
        if not self.dates:
            raise ValueError("At least one date is required.")
        if not self.meals:
            raise ValueError("At least one meal is required.")
        if not self.locations:
            raise ValueError("At least one location is required.")
        if not self.buyer_name:
            raise ValueError("buyer_name must not be empty.")
        if not is_valid_phone_number(self.contact_phone):
            raise ValueError(f"contact_phone {self.contact_phone!r} is not in canonical form.")

    @property
    def total_price(self) -> Decimal:
        return self.price_per_swipe * self.swipe_count

    def with_id(self, listing_id: str) -> "SwipeListing":
        return replace(self, id=listing_id)


def _toggle(items: set[_T], item: _T) -> None:
    if item in items:
        items.remove(item)
    else:
        items.add(item)


@dataclass
class ListingDraft:
    """In-progress listing, mutated field by field while the form is edited."""

    swipe_count: int = 1
    price_per_swipe: Decimal = Decimal("10")
    dates: set[date] = field(default_factory=set)
    meals: set[MealPeriod] = field(default_factory=set)
    locations: set[DiningLocation] = field(default_factory=set)
    buyer_name: str = ""
    contact_phone: str = ""
    note: str = ""

    def toggle_date(self, day: date) -> None:
        _toggle(self.dates, _as_day(day))

    def toggle_meal(self, meal: MealPeriod) -> None:
        _toggle(self.meals, MealPeriod(meal))

    def toggle_location(self, location: DiningLocation) -> None:
        _toggle(self.locations, DiningLocation(location))

    def set_contact_phone(self, raw: str) -> None:
        self.contact_phone = format_phone_number(raw)

    def adjust_swipe_count(self, delta: int, bounds: QuantityRange = SWIPE_COUNT_RANGE) -> None:
        self.swipe_count = bounds.clamp(self.swipe_count + delta)

    def adjust_price(self, delta: int, bounds: QuantityRange = PRICE_PER_SWIPE_RANGE) -> None:
        self.price_per_swipe = Decimal(bounds.clamp(int(self.price_per_swipe) + delta))

    def reset(self) -> None:
        defaults = ListingDraft()
        self.__dict__.update(defaults.__dict__)

    def to_listing(self, listed_at: datetime | None = None) -> SwipeListing:
        """Freeze the draft into an unsaved listing; raises ValueError if incomplete."""
        return SwipeListing(
            swipe_count=self.swipe_count,
            price_per_swipe=Decimal(self.price_per_swipe),
            dates=frozenset(self.dates),
            meals=frozenset(self.meals),
            locations=frozenset(self.locations),
            buyer_name=self.buyer_name,
            contact_phone=self.contact_phone,
            note=self.note,
            listed_at=listed_at or _utcnow(),
        )
