from pydantic import BaseModel

from zotswipe.infrastructure.external_services.menu_schemas import Restaurant


class MenuResultResponse(BaseModel):
    location: str
    restaurant: Restaurant | None = None
    current_price: float | None = None
    error: str | None = None


class AllMenusResponse(BaseModel):
    menus: list[MenuResultResponse]
