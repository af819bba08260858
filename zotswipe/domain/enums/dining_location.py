from enum import Enum


class DiningLocation(str, Enum):
    """Dining halls where swipes can be redeemed."""

    ANTEATERY = "Anteatery"
    BRANDYWINE = "Brandywine"
