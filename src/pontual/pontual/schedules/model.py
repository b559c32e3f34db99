from __future__ import annotations

from dataclasses import dataclass
from datetime import time
from typing import Optional

from ..core.constants import DEFAULT_TIMEZONE, DEFAULT_WEEKEND_DAYS


@dataclass(frozen=True)
class AutoBreakDeduction:
    """Fixed break taken off worked time once worked time reaches the duration.

    The window is the nominal break period shown to users; it does not change how
    much is deducted.
    """

    enabled: bool
    duration_minutes: int
    window_start: Optional[time] = None
    window_end: Optional[time] = None


@dataclass(frozen=True)
class Schedule:
    """Domain entity: working hours an employee is held to."""

    schedule_id: str
    name: str
    start_time: time
    end_time: time
    late_tolerance_minutes: int = 0
    early_out_tolerance_minutes: int = 0
    overtime_threshold_minutes: int = 0
    auto_break: Optional[AutoBreakDeduction] = None
    timezone: str = DEFAULT_TIMEZONE
    weekend_days: tuple[int, ...] = DEFAULT_WEEKEND_DAYS

    @property
    def regular_minutes(self) -> int:
        start = self.start_time.hour * 60 + self.start_time.minute
        end = self.end_time.hour * 60 + self.end_time.minute
        return end - start


@dataclass(frozen=True)
class ScheduleInfo:
    """Read-model for dashboards: which schedule applies to an employee."""

    schedule_id: str
    name: str
    start_time: time
    end_time: time
    regular_minutes: int
