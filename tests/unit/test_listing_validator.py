"""Unit tests for the listing form gate."""
from datetime import date
from decimal import Decimal

import pytest

from zotswipe.domain.entities.swipe_listing import ListingDraft
from zotswipe.domain.enums.dining_location import DiningLocation
from zotswipe.domain.enums.meal_period import MealPeriod
from zotswipe.domain.validation.listing_validator import (
    GENERIC_VALIDATION_MESSAGE,
    ListingOptions,
    ListingValidator,
    ValidationError,
)


def _make_draft(**overrides) -> ListingDraft:  # type: ignore[no-untyped-def]
    defaults = dict(
        swipe_count=2,
        price_per_swipe=Decimal("5"),
        dates={date(2024, 10, 3)},
        meals={MealPeriod.LUNCH},
        locations={DiningLocation.ANTEATERY},
        buyer_name="Peter",
        contact_phone="(555) 123-4567",
    )
    defaults.update(overrides)
    return ListingDraft(**defaults)


@pytest.fixture()
def validator() -> ListingValidator:
    return ListingValidator()


class TestIsSubmittable:
    def test_complete_draft_is_submittable(self, validator: ListingValidator) -> None:
        assert validator.is_submittable(_make_draft()) is True

    @pytest.mark.parametrize(
        "overrides",
        [
            {"swipe_count": 0},
            {"price_per_swipe": Decimal("0")},
            {"price_per_swipe": Decimal("0.5")},
            {"dates": set()},
            {"meals": set()},
            {"locations": set()},
            {"buyer_name": ""},
            {"contact_phone": ""},
            {"contact_phone": "(555) 123"},
            {"contact_phone": "5551234567"},
        ],
    )
    def test_missing_field_blocks_submission(
        self, validator: ListingValidator, overrides: dict  # type: ignore[type-arg]
    ) -> None:
        assert validator.is_submittable(_make_draft(**overrides)) is False

    def test_default_draft_is_not_submittable(self, validator: ListingValidator) -> None:
        assert validator.is_submittable(ListingDraft()) is False

    def test_reevaluates_as_draft_changes(self, validator: ListingValidator) -> None:
        draft = _make_draft(contact_phone="")
        assert validator.is_submittable(draft) is False
        draft.set_contact_phone("555123456")
        assert validator.is_submittable(draft) is False
        draft.set_contact_phone(draft.contact_phone + "7")
        assert validator.is_submittable(draft) is True
        draft.toggle_meal(MealPeriod.LUNCH)
        assert validator.is_submittable(draft) is False

    def test_swipe_count_above_ui_bound_is_still_submittable(
        self, validator: ListingValidator
    ) -> None:
        assert validator.is_submittable(_make_draft(swipe_count=50)) is True


class TestConfiguredOptions:
    def test_disabled_meal_blocks_submission(self) -> None:
        validator = ListingValidator(
            ListingOptions.from_labels(["Lunch", "Dinner"], ["Anteatery", "Brandywine"])
        )
        assert validator.is_submittable(_make_draft(meals={MealPeriod.BREAKFAST})) is False
        assert validator.is_submittable(_make_draft(meals={MealPeriod.DINNER})) is True

    def test_disabled_location_blocks_submission(self) -> None:
        validator = ListingValidator(
            ListingOptions.from_labels(["Breakfast", "Lunch", "Dinner"], ["Brandywine"])
        )
        assert validator.is_submittable(_make_draft()) is False

    def test_unknown_label_is_rejected(self) -> None:
        with pytest.raises(ValueError):
            ListingOptions.from_labels(["Brunch"], ["Anteatery"])


class TestValidate:
    def test_passes_silently_for_valid_draft(self, validator: ListingValidator) -> None:
        validator.validate(_make_draft())

    def test_raises_generic_message(self, validator: ListingValidator) -> None:
        with pytest.raises(ValidationError) as exc_info:
            validator.validate(_make_draft(buyer_name=""))
        assert exc_info.value.message == GENERIC_VALIDATION_MESSAGE
