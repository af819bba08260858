"""Unit tests for the listing repositories; the database session is mocked."""
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal
from unittest.mock import AsyncMock, MagicMock

import pytest
from sqlalchemy.exc import OperationalError

from zotswipe.application.interfaces.listing_repository import PersistenceError
from zotswipe.application.listing_store import LOAD_FAILURE_MESSAGE, ListingStore
from zotswipe.domain.entities.swipe_listing import SwipeListing
from zotswipe.domain.enums.dining_location import DiningLocation
from zotswipe.domain.enums.meal_period import MealPeriod
from zotswipe.infrastructure.database.models import SwipeListingModel
from zotswipe.infrastructure.database.repositories.in_memory_listing_repository import (
    InMemoryListingRepository,
)
from zotswipe.infrastructure.database.repositories.listing_repository import (
    SqlAlchemyListingRepository,
    decode_listings,
)

BASE_TIME = datetime(2024, 10, 1, 12, 0, tzinfo=timezone.utc)


def _make_model(index: int, **overrides) -> SwipeListingModel:  # type: ignore[no-untyped-def]
    defaults = dict(
        id=f"listing-{index}",
        swipe_count=2,
        price_per_swipe=Decimal("5.00"),
        dates=["2024-10-03", "2024-10-04"],
        meals=["Lunch"],
        locations=["Anteatery", "Brandywine"],
        buyer_name="Peter",
        contact_phone="(555) 123-4567",
        note="",
        listed_at=BASE_TIME - timedelta(minutes=index),
    )
    defaults.update(overrides)
    return SwipeListingModel(**defaults)


def _make_listing(minutes: int = 0) -> SwipeListing:
    return SwipeListing(
        swipe_count=2,
        price_per_swipe=Decimal("5"),
        dates=frozenset({date(2024, 10, 3)}),
        meals=frozenset({MealPeriod.LUNCH}),
        locations=frozenset({DiningLocation.ANTEATERY}),
        buyer_name="Peter",
        contact_phone="(555) 123-4567",
        listed_at=BASE_TIME + timedelta(minutes=minutes),
    )


def _make_session_factory(session: MagicMock) -> MagicMock:
    session_cm = MagicMock()
    session_cm.__aenter__ = AsyncMock(return_value=session)
    session_cm.__aexit__ = AsyncMock(return_value=False)

    begin_cm = MagicMock()
    begin_cm.__aenter__ = AsyncMock(return_value=None)
    begin_cm.__aexit__ = AsyncMock(return_value=False)
    session.begin = MagicMock(return_value=begin_cm)

    return MagicMock(return_value=session_cm)


def _make_session(models: list[SwipeListingModel] | None = None) -> MagicMock:
    result = MagicMock()
    result.scalars.return_value.all.return_value = models or []
    session = MagicMock()
    session.execute = AsyncMock(return_value=result)
    session.flush = AsyncMock()
    session.add = MagicMock()
    return session


class TestDecodeListings:
    def test_decodes_valid_rows(self) -> None:
        listings = decode_listings([_make_model(0)])
        assert len(listings) == 1
        listing = listings[0]
        assert listing.id == "listing-0"
        assert listing.dates == frozenset({date(2024, 10, 3), date(2024, 10, 4)})
        assert listing.meals == frozenset({MealPeriod.LUNCH})
        assert listing.locations == frozenset(DiningLocation)
        assert listing.price_per_swipe == Decimal("5.00")

    def test_skips_malformed_record(self) -> None:
        models = [_make_model(i) for i in range(20)]
        models[7] = _make_model(7, contact_phone="555-123-4567")

        listings = decode_listings(models)

        assert len(listings) == 19
        assert "listing-7" not in {listing.id for listing in listings}

    @pytest.mark.parametrize(
        "overrides",
        [
            {"meals": []},
            {"meals": ["Brunch"]},
            {"dates": ["not-a-date"]},
            {"dates": None},
            {"swipe_count": 0},
            {"buyer_name": ""},
        ],
    )
    def test_each_kind_of_bad_row_is_skipped(self, overrides: dict) -> None:  # type: ignore[type-arg]
        assert decode_listings([_make_model(0, **overrides), _make_model(1)])[0].id == "listing-1"


class TestSqlAlchemyListingRepository:
    @pytest.mark.asyncio
    async def test_fetch_recent_decodes_query_result(self) -> None:
        session = _make_session([_make_model(0), _make_model(1)])
        repo = SqlAlchemyListingRepository(_make_session_factory(session))

        listings = await repo.fetch_recent(20)

        assert [listing.id for listing in listings] == ["listing-0", "listing-1"]
        session.execute.assert_awaited_once()

    @pytest.mark.asyncio
    async def test_fetch_recent_orders_and_limits_query(self) -> None:
        session = _make_session()
        repo = SqlAlchemyListingRepository(_make_session_factory(session))

        await repo.fetch_recent(5)

        query = session.execute.await_args.args[0]
        sql = str(query.compile(compile_kwargs={"literal_binds": True}))
        assert "ORDER BY swipe_listings.listed_at DESC, swipe_listings.id DESC" in sql
        assert "LIMIT 5" in sql

    @pytest.mark.asyncio
    async def test_fetch_recent_wraps_database_errors(self) -> None:
        session = _make_session()
        session.execute = AsyncMock(side_effect=OperationalError("SELECT", {}, Exception("down")))
        repo = SqlAlchemyListingRepository(_make_session_factory(session))

        with pytest.raises(PersistenceError):
            await repo.fetch_recent(20)

    @pytest.mark.asyncio
    async def test_insert_returns_generated_id(self) -> None:
        session = _make_session()
        repo = SqlAlchemyListingRepository(_make_session_factory(session))

        listing_id = await repo.insert(_make_listing())

        added = session.add.call_args.args[0]
        assert isinstance(added, SwipeListingModel)
        assert listing_id == added.id
        assert added.meals == ["Lunch"]
        assert added.dates == ["2024-10-03"]
        assert added.listed_at == BASE_TIME

    @pytest.mark.asyncio
    async def test_insert_wraps_database_errors(self) -> None:
        session = _make_session()
        session.flush = AsyncMock(side_effect=OperationalError("INSERT", {}, Exception("down")))
        repo = SqlAlchemyListingRepository(_make_session_factory(session))

        with pytest.raises(PersistenceError):
            await repo.insert(_make_listing())


class TestInMemoryListingRepository:
    @pytest.mark.asyncio
    async def test_returns_newest_first_with_limit(self) -> None:
        repo = InMemoryListingRepository()
        for minutes in (3, 1, 5, 2, 4):
            await repo.insert(_make_listing(minutes))

        recent = await repo.fetch_recent(3)

        assert [listing.listed_at for listing in recent] == [
            BASE_TIME + timedelta(minutes=5),
            BASE_TIME + timedelta(minutes=4),
            BASE_TIME + timedelta(minutes=3),
        ]

    @pytest.mark.asyncio
    async def test_insert_assigns_unique_ids(self) -> None:
        repo = InMemoryListingRepository()
        first = await repo.insert(_make_listing())
        second = await repo.insert(_make_listing())
        assert first != second


class TestFailureMessages:
    @pytest.mark.asyncio
    async def test_store_error_does_not_expose_database_details(self) -> None:
        session = _make_session()
        session.execute = AsyncMock(
            side_effect=OperationalError(
                "SELECT swipe_listings.contact_phone FROM swipe_listings",
                {},
                Exception("could not connect to host db.internal:5432"),
            )
        )
        store = ListingStore(SqlAlchemyListingRepository(_make_session_factory(session)))

        with pytest.raises(PersistenceError) as exc_info:
            await store.fetch_recent()

        last_error = store.state.last_error
        assert last_error == LOAD_FAILURE_MESSAGE
        for leaked in ("SELECT", "swipe_listings", "db.internal", "sqlalche.me"):
            assert leaked not in last_error
            assert leaked not in str(exc_info.value)

    @pytest.mark.asyncio
    async def test_insert_error_does_not_expose_database_details(self) -> None:
        session = _make_session()
        session.flush = AsyncMock(
            side_effect=OperationalError(
                "INSERT INTO swipe_listings (id) VALUES ($1)",
                {},
                Exception("could not connect to host db.internal:5432"),
            )
        )
        repo = SqlAlchemyListingRepository(_make_session_factory(session))

        with pytest.raises(PersistenceError) as exc_info:
            await repo.insert(_make_listing())

        assert "INSERT" not in str(exc_info.value)
        assert "db.internal" not in str(exc_info.value)


class TestPricePrecision:
    @pytest.mark.asyncio
    async def test_insert_keeps_price_as_decimal_cents(self) -> None:
        session = _make_session()
        repo = SqlAlchemyListingRepository(_make_session_factory(session))
        listing = SwipeListing(
            swipe_count=1,
            price_per_swipe=Decimal("5.555"),
            dates=frozenset({date(2024, 10, 3)}),
            meals=frozenset({MealPeriod.LUNCH}),
            locations=frozenset({DiningLocation.ANTEATERY}),
            buyer_name="Peter",
            contact_phone="(555) 123-4567",
            listed_at=BASE_TIME,
        )

        await repo.insert(listing)

        added = session.add.call_args.args[0]
        assert isinstance(added.price_per_swipe, Decimal)
        assert added.price_per_swipe == Decimal("5.56")

    def test_stored_price_decodes_to_created_price(self) -> None:
        created = _make_listing()
        stored = decode_listings([_make_model(0, price_per_swipe=Decimal("5.00"))])[0]
        assert stored.price_per_swipe == created.price_per_swipe
        assert str(stored.price_per_swipe) == str(created.price_per_swipe)
