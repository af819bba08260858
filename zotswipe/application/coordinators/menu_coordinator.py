from dataclasses import dataclass, field

import structlog

from zotswipe.domain.errors import DecodeError
from zotswipe.infrastructure.external_services.menu_client import MenuClient, MenuClientError
from zotswipe.infrastructure.external_services.menu_schemas import Restaurant

logger = structlog.get_logger(__name__)


@dataclass
class MenuLoadResult:
    location: str
    restaurant: Restaurant | None = None
    error: str | None = None


@dataclass
class DiningMenuState:
    restaurants: dict[str, Restaurant] = field(default_factory=dict)
    errors: dict[str, str] = field(default_factory=dict)
    is_loading: dict[str, bool] = field(default_factory=dict)

    @property
    def is_any_location_loading(self) -> bool:
        return any(self.is_loading.values())


class DiningMenuCoordinator:
    """Loads each dining hall's menu, keeping failures scoped to their location."""

    def __init__(self, client: MenuClient, dining_halls: list[str]) -> None:
        self._client = client
        self._dining_halls = list(dining_halls)
        self.state = DiningMenuState()

    @property
    def dining_halls(self) -> list[str]:
        return list(self._dining_halls)

    async def fetch_menu(self, location: str) -> MenuLoadResult:
        self.state.is_loading[location] = True
        try:
            restaurant = await self._client.fetch_menu(location)
        except (MenuClientError, DecodeError) as exc:
            logger.warning("menu_unavailable", location=location, error=str(exc))
            self.state.errors[location] = str(exc)
            return MenuLoadResult(location=location, error=str(exc))
        finally:
            self.state.is_loading[location] = False

        self.state.restaurants[location] = restaurant
        self.state.errors.pop(location, None)
        return MenuLoadResult(location=location, restaurant=restaurant)

    async def fetch_all_menus(self) -> list[MenuLoadResult]:
        """Fetch every configured hall in order; one failure never stops the rest."""
        results = []
        for hall in self._dining_halls:
            results.append(await self.fetch_menu(hall))
        return results
