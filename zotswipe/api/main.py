"""FastAPI application entry point."""
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator

import structlog
from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from zotswipe.api.routes import health, listings, menus
from zotswipe.application.coordinators.menu_coordinator import DiningMenuCoordinator
from zotswipe.application.interfaces.listing_repository import (
    ListingRepository,
    PersistenceError,
)
from zotswipe.application.listing_store import ListingStore
from zotswipe.config import settings
from zotswipe.domain.validation.listing_validator import ListingOptions, ListingValidator
from zotswipe.infrastructure.database.connection import AsyncSessionLocal
from zotswipe.infrastructure.database.repositories.in_memory_listing_repository import (
    InMemoryListingRepository,
)
from zotswipe.infrastructure.database.repositories.listing_repository import (
    SqlAlchemyListingRepository,
)
from zotswipe.infrastructure.external_services.menu_client import MenuClient
from zotswipe.logging_config import configure_logging

logger = structlog.get_logger(__name__)


def _build_repository() -> ListingRepository:
    if settings.listing_backend == "memory":
        return InMemoryListingRepository()
    return SqlAlchemyListingRepository(AsyncSessionLocal)


def build_listing_store(repository: ListingRepository) -> ListingStore:
    validator = ListingValidator(
        ListingOptions.from_labels(settings.meal_options, settings.location_options)
    )
    return ListingStore(
        repository,
        default_limit=settings.recent_listings_limit,
        validator=validator,
    )


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    configure_logging(settings.log_level, settings.log_format)
    logger.info("zotswipe_starting", listing_backend=settings.listing_backend)

    app.state.listing_store = build_listing_store(_build_repository())
    app.state.menu_coordinator = DiningMenuCoordinator(MenuClient(), settings.dining_halls)

    try:
        await app.state.listing_store.fetch_recent()
    except PersistenceError:
        logger.warning("initial_listing_fetch_failed")

    yield
    logger.info("zotswipe_stopping")


def create_app() -> FastAPI:
    app = FastAPI(
        title="ZotSwipe",
        description="Meal-swipe marketplace and dining hall menus.",
        version="0.1.0",
        docs_url="/docs",
        redoc_url="/redoc",
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    app.include_router(health.router)
    app.include_router(listings.router)
    app.include_router(menus.router)

    return app


app = create_app()
