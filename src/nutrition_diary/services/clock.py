"""Clock helpers bound to the configured timezone."""

from collections.abc import Callable
from datetime import UTC, date, datetime
from zoneinfo import ZoneInfo

Today = Callable[[], date]
Now = Callable[[], datetime]


def local_today(timezone_name: str) -> date:
    """Return the current calendar date in the given timezone."""
    return datetime.now(tz=ZoneInfo(timezone_name)).date()


def today_provider(timezone_name: str) -> Today:
    """Return a callable producing today's date in the given timezone."""
    return lambda: local_today(timezone_name)


def utc_now() -> datetime:
    return datetime.now(tz=UTC)
