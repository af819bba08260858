"""
FastAPI dependency injection wiring.

The listing store and menu coordinator are long-lived and owned by the
application (created in the lifespan and kept on ``app.state``); per-request
objects are built around them here, keeping the route handlers thin.
"""
from fastapi import Depends, Request

from zotswipe.application.coordinators.menu_coordinator import DiningMenuCoordinator
from zotswipe.application.listing_store import ListingStore
from zotswipe.application.use_cases.submit_listing import SubmitListing


def get_listing_store(request: Request) -> ListingStore:
    return request.app.state.listing_store


def get_menu_coordinator(request: Request) -> DiningMenuCoordinator:
    return request.app.state.menu_coordinator


def get_submit_listing_use_case(
    store: ListingStore = Depends(get_listing_store),
) -> SubmitListing:
    return SubmitListing(store)
