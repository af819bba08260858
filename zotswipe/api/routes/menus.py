from fastapi import APIRouter, Depends, HTTPException, status

from zotswipe.api.dependencies import get_menu_coordinator
from zotswipe.api.schemas.menu_schemas import AllMenusResponse, MenuResultResponse
from zotswipe.application.coordinators.menu_coordinator import (
    DiningMenuCoordinator,
    MenuLoadResult,
)

router = APIRouter(prefix="/menus", tags=["menus"])


def _result_to_response(result: MenuLoadResult) -> MenuResultResponse:
    return MenuResultResponse(
        location=result.location,
        restaurant=result.restaurant,
        current_price=result.restaurant.current_price if result.restaurant else None,
        error=result.error,
    )


@router.get("", response_model=AllMenusResponse)
async def all_menus(
    coordinator: DiningMenuCoordinator = Depends(get_menu_coordinator),
) -> AllMenusResponse:
    """Menus for every dining hall; halls that failed carry an error instead."""
    results = await coordinator.fetch_all_menus()
    return AllMenusResponse(menus=[_result_to_response(r) for r in results])


@router.get("/{location}", response_model=MenuResultResponse)
async def menu_for_location(
    location: str,
    coordinator: DiningMenuCoordinator = Depends(get_menu_coordinator),
) -> MenuResultResponse:
    location = location.lower()
    if location not in coordinator.dining_halls:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Unknown dining hall.")

    result = await coordinator.fetch_menu(location)
    if result.error is not None:
        raise HTTPException(status_code=status.HTTP_502_BAD_GATEWAY, detail=result.error)
    return _result_to_response(result)
