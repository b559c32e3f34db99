from __future__ import annotations

import math
from collections import defaultdict
from typing import Iterable

from ..core.enums import DayStatus
from .model import DaySummary, PeriodSummary


def _round_half_up(value: float) -> int:
    return int(math.floor(value + 0.5))


def _percent(part: int, whole: int, *, empty: int) -> int:
    if whole == 0:
        return empty
    return _round_half_up(100 * part / whole)


def aggregate(days: Iterable[DaySummary]) -> PeriodSummary:
    """Roll day summaries up into period totals.

    Weekend and upcoming days never count as work days. Time worked on a
    weekend still adds to the worked and overtime totals, but the average only
    covers present work days.
    """
    days = list(days)
    work_days = [d for d in days if d.status not in (DayStatus.WEEKEND, DayStatus.UPCOMING)]
    present = [d for d in work_days if d.worked_minutes > 0]
    late = [d for d in work_days if d.status is DayStatus.LATE]
    absent = [d for d in work_days if d.status is DayStatus.ABSENT]

    total_worked = sum(d.worked_minutes for d in days)
    total_overtime = sum(d.overtime_minutes for d in days)
    present_worked = sum(d.worked_minutes for d in present)

    return PeriodSummary(
        work_days=len(work_days),
        present_days=len(present),
        absent_days=len(absent),
        late_days=len(late),
        total_worked_minutes=total_worked,
        average_worked_minutes=_round_half_up(present_worked / len(present)) if present else 0,
        total_overtime_minutes=total_overtime,
        punctuality_rate=_percent(len(work_days) - len(late), len(work_days), empty=100),
        attendance_rate=_percent(len(present), len(work_days), empty=0),
    )


def aggregate_by_employee(days: Iterable[DaySummary]) -> dict[str, PeriodSummary]:
    grouped: dict[str, list[DaySummary]] = defaultdict(list)
    for d in days:
        grouped[d.employee_id].append(d)
    return {employee_id: aggregate(grouped[employee_id]) for employee_id in sorted(grouped)}
