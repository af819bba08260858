from enum import Enum


class MealPeriod(str, Enum):
    """Meal periods a buyer can ask swipes for."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
