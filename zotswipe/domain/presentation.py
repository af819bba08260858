"""Display helpers shared by the listing feed and detail views."""
from collections.abc import Iterable
from datetime import date, datetime, timedelta, timezone
from decimal import Decimal

_UNITS: tuple[tuple[str, int], ...] = (
    ("year", 365 * 24 * 3600),
    ("month", 30 * 24 * 3600),
    ("week", 7 * 24 * 3600),
    ("day", 24 * 3600),
    ("hour", 3600),
    ("minute", 60),
    ("second", 1),
)


def format_price(amount: Decimal) -> str:
    return f"${amount:.2f}"


def format_dates(dates: Iterable[date]) -> str:
    """Render days as ``Oct 3, Oct 4`` in calendar order."""
    return ", ".join(f"{d:%b} {d.day}" for d in sorted(dates))


def format_listed_time(listed_at: datetime, now: datetime | None = None) -> str:
    """Relative description such as ``5 minutes ago``."""
    now = now or datetime.now(timezone.utc)
    seconds = int((now - listed_at).total_seconds())
    for name, size in _UNITS:
        if seconds >= size:
            count = seconds // size
            unit = name if count == 1 else f"{name}s"
            return f"{count} {unit} ago"
    return "now"


def next_days(count: int, today: date | None = None) -> list[date]:
    """The ``count`` calendar days starting today, offered by the date picker."""
    start = today or date.today()
    return [start + timedelta(days=offset) for offset in range(count)]
