from fastapi import APIRouter, Request
from sqlalchemy import text

from zotswipe.infrastructure.database.connection import AsyncSessionLocal

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(request: Request) -> dict:  # type: ignore[type-arg]
    """Liveness + dependency health check."""
    db_status = "connected"
    try:
        async with AsyncSessionLocal() as session:
            await session.execute(text("SELECT 1"))
    except Exception as exc:
        db_status = f"error: {exc}"

    listing_store = getattr(request.app.state, "listing_store", None)
    last_error = listing_store.state.last_error if listing_store is not None else None

    overall = "healthy" if db_status == "connected" else "degraded"

    return {
        "status": overall,
        "database": db_status,
        "listings_last_error": last_error,
    }
