from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date, datetime, timedelta
from typing import Optional

from ..core.enums import DayStatus, PresenceStatus
from ..schedules.model import ScheduleInfo


@dataclass(frozen=True)
class WorkedSegment:
    """Derived span between an entry punch and the exit that closes it.

    An open segment (employee still clocked in) ends at the `now` it was built
    with and must be rebuilt whenever `now` moves.
    """

    start: datetime
    end: datetime
    is_open: bool = False

    @property
    def duration(self) -> timedelta:
        return max(self.end - self.start, timedelta(0))

    @property
    def duration_minutes(self) -> float:
        return self.duration.total_seconds() / 60


@dataclass(frozen=True)
class DaySummary:
    """One employee, one local calendar day."""

    employee_id: str
    work_date: date
    status: DayStatus
    worked_minutes: int
    overtime_minutes: int
    first_in: Optional[datetime] = None
    last_out: Optional[datetime] = None
    is_open: bool = False
    segments: tuple[WorkedSegment, ...] = ()

    @property
    def is_weekend(self) -> bool:
        return self.status is DayStatus.WEEKEND


@dataclass(frozen=True)
class PeriodSummary:
    work_days: int
    present_days: int
    absent_days: int
    late_days: int
    total_worked_minutes: int
    average_worked_minutes: int
    total_overtime_minutes: int
    punctuality_rate: int
    attendance_rate: int


@dataclass(frozen=True)
class Timesheet:
    """Monthly sheet for one employee: every calendar day plus totals."""

    employee_id: str
    employee_name: Optional[str]
    year: int
    month: int
    schedule: ScheduleInfo
    days: list[DaySummary]
    summary: PeriodSummary


@dataclass(frozen=True)
class EmployeePresence:
    employee_id: str
    name: Optional[str]
    status: PresenceStatus
    first_check: datetime
    last_check: datetime
    total_minutes: int
    schedule: ScheduleInfo


@dataclass(frozen=True)
class LiveKpis:
    total: int
    present: int
    late: int
    left: int
    average_minutes: int
    punctuality_rate: int


@dataclass(frozen=True)
class LiveBoard:
    generated_at: datetime
    employees: list[EmployeePresence] = field(default_factory=list)
    kpis: LiveKpis = field(default_factory=lambda: LiveKpis(0, 0, 0, 0, 0, 100))
