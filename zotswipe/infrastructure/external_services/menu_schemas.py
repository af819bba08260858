"""Response shapes of the dining hall menu API."""
from pydantic import BaseModel, ConfigDict, Field


class Nutrition(BaseModel):
    calories: str | None = None
    protein: str | None = None


class Meal(BaseModel):
    name: str
    description: str
    nutrition: Nutrition | None = None


class Menu(BaseModel):
    category: str
    items: list[Meal]


class Station(BaseModel):
    station: str
    menu: list[Menu]


class MealTime(BaseModel):
    start: int
    end: int


class Restaurant(BaseModel):
    model_config = ConfigDict(populate_by_name=True)

    all: list[Station]
    current_meal: str = Field(alias="currentMeal")
    date: str
    price: dict[str, float]
    restaurant: str
    schedule: dict[str, MealTime]

    @property
    def current_price(self) -> float:
        return self.price.get(self.current_meal, 0.0)
