from __future__ import annotations

import calendar
from datetime import date, datetime, time, timedelta, timezone, tzinfo
from functools import lru_cache
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from ..core.exceptions import ConfigurationError


def parse_iso_date(value: str) -> date:
    """Parse YYYY-MM-DD string into date."""
    return datetime.strptime(value, "%Y-%m-%d").date()


def parse_month(value: str) -> tuple[int, int]:
    """Parse YYYY-MM string into (year, month)."""
    parsed = datetime.strptime(value, "%Y-%m")
    return parsed.year, parsed.month


def now_utc() -> datetime:
    """Current time, timezone-aware.

    Note: Wrapped so tests can patch/mocked easier.
    """
    return datetime.now(timezone.utc)


@lru_cache(maxsize=None)
def get_zone(name: str) -> tzinfo:
    try:
        return ZoneInfo(name)
    except (ZoneInfoNotFoundError, ValueError) as e:
        raise ConfigurationError(f"Unknown timezone: {name!r}") from e


def minute_of_day(value: datetime | time) -> int:
    """Minutes since midnight, seconds truncated."""
    return value.hour * 60 + value.minute


def day_bounds(day: date, zone: tzinfo) -> tuple[datetime, datetime]:
    """[start, end) of a local calendar day as aware datetimes."""
    start = datetime.combine(day, time(0, 0), tzinfo=zone)
    end = datetime.combine(day + timedelta(days=1), time(0, 0), tzinfo=zone)
    return start, end


def month_days(year: int, month: int) -> list[date]:
    last = calendar.monthrange(year, month)[1]
    return [date(year, month, d) for d in range(1, last + 1)]


def to_api_timestamp(value: datetime) -> str:
    """ISO-8601 in UTC with an explicit +00:00 offset, as the provider expects."""
    return value.astimezone(timezone.utc).isoformat(timespec="seconds")


def round_minutes(delta: timedelta) -> int:
    """Round a non-negative duration to whole minutes, halves rounding up."""
    seconds = max(delta.total_seconds(), 0.0)
    return int((seconds + 30) // 60)


def format_minutes(minutes: int) -> str:
    """Display helper: 485 -> '8h 05m'."""
    return f"{minutes // 60}h {minutes % 60:02d}m"
