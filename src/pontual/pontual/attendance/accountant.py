"""Time accounting for a single employee-day.

All wall-clock comparisons (lateness, overtime) happen in the schedule's own
timezone, at minute resolution with seconds truncated.
"""

from __future__ import annotations

from datetime import date, datetime, timedelta
from typing import Optional, Sequence

from ..common.datetime_utils import get_zone, minute_of_day, round_minutes
from ..core.exceptions import ConfigurationError
from ..schedules.model import AutoBreakDeduction, Schedule
from .factory import DayStatusStrategyFactory
from .model import DaySummary, WorkedSegment
from .strategies.base import DayFacts


def _local_minute(value: datetime, schedule: Schedule) -> int:
    return minute_of_day(value.astimezone(get_zone(schedule.timezone)))


def apply_auto_break(worked_minutes: int, auto_break: Optional[AutoBreakDeduction]) -> int:
    if not auto_break or not auto_break.enabled:
        return worked_minutes
    if worked_minutes >= auto_break.duration_minutes:
        return max(worked_minutes - auto_break.duration_minutes, 0)
    return worked_minutes


def is_late(first_event: Optional[datetime], schedule: Schedule) -> bool:
    if first_event is None:
        return False
    limit = minute_of_day(schedule.start_time) + schedule.late_tolerance_minutes
    return _local_minute(first_event, schedule) > limit


def overtime_minutes(first_in: Optional[datetime], last_out: Optional[datetime], schedule: Schedule) -> int:
    """Early-arrival and late-leave deltas, each kept only if it reaches the threshold."""
    threshold = schedule.overtime_threshold_minutes
    total = 0

    if first_in is not None:
        early = minute_of_day(schedule.start_time) - _local_minute(first_in, schedule)
        if early > 0 and early >= threshold:
            total += early

    if last_out is not None:
        late = _local_minute(last_out, schedule) - minute_of_day(schedule.end_time)
        if late > 0 and late >= threshold:
            total += late

    return total


def account_day(
    segments: Sequence[WorkedSegment],
    schedule: Optional[Schedule],
    first_event_timestamp: Optional[datetime],
    *,
    work_date: date,
    employee_id: str = "",
    first_entry_timestamp: Optional[datetime] = None,
    strategy_factory: Optional[DayStatusStrategyFactory] = None,
) -> DaySummary:
    """Worked time, overtime and status for one employee-day.

    ``first_entry_timestamp`` is the day's first entry punch; a re-badged entry
    moves the first segment's start but not the early-arrival overtime.
    """
    if schedule is None:
        raise ConfigurationError(f"No schedule resolved for employee {employee_id!r}")

    raw = sum((s.duration for s in segments), timedelta(0))
    worked = apply_auto_break(round_minutes(raw), schedule.auto_break)

    first_in = first_entry_timestamp or (segments[0].start if segments else None)
    still_open = bool(segments) and segments[-1].is_open
    last_out = segments[-1].end if segments and not still_open else None

    facts = DayFacts(
        work_date=work_date,
        worked_minutes=worked,
        is_weekend=work_date.weekday() in schedule.weekend_days,
        is_late=is_late(first_event_timestamp, schedule),
    )
    factory = strategy_factory or DayStatusStrategyFactory()
    decision = factory.for_day(facts).decide(facts)

    return DaySummary(
        employee_id=employee_id,
        work_date=work_date,
        status=decision.status,
        worked_minutes=worked,
        overtime_minutes=overtime_minutes(first_in, last_out, schedule),
        first_in=first_in,
        last_out=last_out,
        is_open=still_open,
        segments=tuple(segments),
    )
