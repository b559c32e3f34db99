from __future__ import annotations

from dataclasses import dataclass, field
from datetime import date

from ..attendance.model import DaySummary, PeriodSummary


@dataclass(frozen=True)
class ReportStats:
    unique_employees: int
    employee_days: int
    total_worked_minutes: int
    total_overtime_minutes: int


@dataclass(frozen=True)
class ReportData:
    start: date
    end: date
    days: list[DaySummary]
    names: dict[str, str]
    per_employee: dict[str, PeriodSummary]
    stats: ReportStats
    diagnostics: dict = field(default_factory=dict)
