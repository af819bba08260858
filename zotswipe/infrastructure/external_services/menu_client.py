"""HTTP client for the dining hall menu API."""

import httpx
import structlog
from pydantic import ValidationError as PydanticValidationError

from zotswipe.config import settings
from zotswipe.domain.errors import DecodeError
from zotswipe.infrastructure.external_services.menu_schemas import Restaurant

logger = structlog.get_logger(__name__)


class MenuClientError(Exception):
    pass


class MenuClient:
    """Thin HTTP wrapper around the menu REST API."""

    def __init__(
        self,
        base_url: str = settings.menu_api_url,
        timeout: float = settings.menu_api_timeout_seconds,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport

    async def fetch_menu(self, location: str) -> Restaurant:
        """
        GET /api?location=<name> → {"restaurant": "...", "currentMeal": "...", "all": [...]}
        """
        async with httpx.AsyncClient(timeout=self._timeout, transport=self._transport) as client:
            try:
                response = await client.get(self._base_url, params={"location": location})
                response.raise_for_status()
                data = response.json()
            except httpx.HTTPStatusError as exc:
                logger.error(
                    "menu_request_failed",
                    location=location,
                    status_code=exc.response.status_code,
                )
                raise MenuClientError(
                    f"Menu API returned {exc.response.status_code} for {location}"
                ) from exc
            except httpx.InvalidURL as exc:
                logger.error("menu_url_invalid", location=location, error=str(exc))
                raise MenuClientError(f"Invalid menu API URL for {location}") from exc
            except httpx.HTTPError as exc:
                logger.error("menu_connection_failed", location=location, error=str(exc))
                raise MenuClientError(f"Failed to reach menu API for {location}") from exc
            except ValueError as exc:
                logger.error("menu_response_not_json", location=location)
                raise DecodeError(f"menu for {location}", "response is not JSON") from exc

        try:
            restaurant = Restaurant.model_validate(data)
        except PydanticValidationError as exc:
            logger.error("menu_decode_failed", location=location, errors=exc.error_count())
            raise DecodeError(f"menu for {location}", str(exc)) from exc

        logger.info(
            "menu_fetched",
            location=location,
            current_meal=restaurant.current_meal,
            stations=len(restaurant.all),
        )
        return restaurant
