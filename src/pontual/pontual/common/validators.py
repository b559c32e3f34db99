from __future__ import annotations

from datetime import date
from typing import Optional

from ..core.exceptions import ValidationError
from .datetime_utils import parse_iso_date, parse_month


def require_non_empty(value: str, field_name: str) -> str:
    if not value or not value.strip():
        raise ValidationError(f"{field_name} is required")
    return value.strip()


def require_date_range(start: date, end: date, *, max_days: int = 366) -> None:
    if end < start:
        raise ValidationError("End date must not be before start date")
    if (end - start).days > max_days:
        raise ValidationError(f"Date range is limited to {max_days} days")


def parse_date_param(value: Optional[str], field_name: str, *, default: Optional[date] = None) -> date:
    """Query-string date (YYYY-MM-DD); missing falls back to ``default``."""
    if not value or not value.strip():
        if default is None:
            raise ValidationError(f"{field_name} is required")
        return default
    try:
        return parse_iso_date(value.strip())
    except ValueError as e:
        raise ValidationError(f"{field_name} must be a YYYY-MM-DD date") from e


def parse_month_param(value: Optional[str], *, default: tuple[int, int]) -> tuple[int, int]:
    if not value or not value.strip():
        return default
    try:
        return parse_month(value.strip())
    except ValueError as e:
        raise ValidationError("month must be YYYY-MM") from e
