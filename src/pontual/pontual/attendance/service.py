from __future__ import annotations

import logging
from collections import defaultdict
from dataclasses import replace
from datetime import date, datetime, timedelta
from typing import Iterable, Optional

from ..common.datetime_utils import day_bounds, get_zone, month_days, round_minutes
from ..core.enums import DayStatus, EventClass, PresenceStatus
from ..core.exceptions import ValidationError
from ..events.classifier import classify
from ..events.ingest import parse_records
from ..events.model import CheckEvent, Diagnostics
from ..schedules.registry import ScheduleRegistry
from .accountant import account_day, is_late
from .aggregator import aggregate
from .factory import DayStatusStrategyFactory
from .model import DaySummary, EmployeePresence, LiveBoard, LiveKpis, Timesheet
from .repository import EventSource
from .segments import build_segments

logger = logging.getLogger(__name__)


def _classified(events: Iterable[CheckEvent]) -> list[CheckEvent]:
    """Entry/exit events only, in time order."""
    return sorted(
        (e for e in events if classify(e.type_code) is not EventClass.UNKNOWN),
        key=lambda e: e.timestamp,
    )


class AttendanceService:
    def __init__(
        self,
        source: EventSource,
        registry: ScheduleRegistry,
        *,
        strategy_factory: Optional[DayStatusStrategyFactory] = None,
    ):
        self._source = source
        self._registry = registry
        self._factory = strategy_factory or DayStatusStrategyFactory()

    @property
    def registry(self) -> ScheduleRegistry:
        return self._registry

    def ingest(self, records: Iterable[dict], diagnostics: Optional[Diagnostics] = None) -> list[CheckEvent]:
        return parse_records(list(records), diagnostics)

    def fetch_events(self, begin: datetime, end: datetime, diagnostics: Optional[Diagnostics] = None) -> list[CheckEvent]:
        if end <= begin:
            raise ValidationError("Window end must be after window start")

        records = self._source.fetch_records(begin, end)
        events = self.ingest(records, diagnostics)
        logger.info(
            "Fetched %d records (%d valid) for %s .. %s",
            len(records), len(events), begin.isoformat(), end.isoformat(),
        )
        return events

    def local_date(self, event: CheckEvent) -> date:
        """Calendar day of the punch in its employee's schedule timezone."""
        return self.localize(event.employee_id, event.timestamp).date()

    def localize(self, employee_id: str, value: datetime) -> datetime:
        return value.astimezone(get_zone(self._registry.resolve(employee_id).timezone))

    def group_by_employee_day(self, events: Iterable[CheckEvent]) -> dict[tuple[str, date], list[CheckEvent]]:
        groups: dict[tuple[str, date], list[CheckEvent]] = defaultdict(list)
        for event in events:
            groups[(event.employee_id, self.local_date(event))].append(event)
        return groups

    def summarize_day(
        self,
        employee_id: str,
        work_date: date,
        events: Iterable[CheckEvent],
        *,
        now: datetime,
        diagnostics: Optional[Diagnostics] = None,
    ) -> DaySummary:
        schedule = self._registry.resolve(employee_id)
        _, day_end = day_bounds(work_date, get_zone(schedule.timezone))

        events = list(events)
        # An entry left open on a past day is closed at that day's end.
        segments = build_segments(events, now=min(now, day_end), diagnostics=diagnostics)
        classified = _classified(events)
        first_event = classified[0].timestamp if classified else None
        first_entry = next((e.timestamp for e in classified if classify(e.type_code) is EventClass.ENTRY), None)

        return account_day(
            segments,
            schedule,
            first_event,
            work_date=work_date,
            employee_id=employee_id,
            first_entry_timestamp=first_entry,
            strategy_factory=self._factory,
        )

    def summarize_days(
        self,
        events: Iterable[CheckEvent],
        *,
        now: datetime,
        start: Optional[date] = None,
        end: Optional[date] = None,
        diagnostics: Optional[Diagnostics] = None,
    ) -> list[DaySummary]:
        """One summary per (employee, local day) with at least one entry or exit punch.

        ``start``/``end`` optionally restrict the result to local days inside the range.
        """
        summaries = []
        for (employee_id, work_date), day_events in self.group_by_employee_day(events).items():
            if (start is not None and work_date < start) or (end is not None and work_date > end):
                continue
            if not _classified(day_events):
                # Only unknown check types that day: nothing to account.
                if diagnostics is not None:
                    for event in day_events:
                        diagnostics.record_unknown(event.type_code)
                continue
            summaries.append(
                self.summarize_day(employee_id, work_date, day_events, now=now, diagnostics=diagnostics)
            )
        summaries.sort(key=lambda d: (d.work_date, d.employee_id))
        return summaries

    def build_timesheet(
        self,
        events: Iterable[CheckEvent],
        *,
        employee_id: str,
        year: int,
        month: int,
        now: datetime,
        diagnostics: Optional[Diagnostics] = None,
    ) -> Timesheet:
        employee_id = str(employee_id)
        mine = [e for e in events if e.employee_id == employee_id]
        schedule = self._registry.resolve(employee_id)
        zone = get_zone(schedule.timezone)
        today = now.astimezone(zone).date()

        by_day: dict[date, list[CheckEvent]] = defaultdict(list)
        for event in mine:
            by_day[event.timestamp.astimezone(zone).date()].append(event)

        days: list[DaySummary] = []
        for day in month_days(year, month):
            if by_day.get(day):
                days.append(self.summarize_day(employee_id, day, by_day[day], now=now, diagnostics=diagnostics))
            else:
                empty = account_day(
                    [], schedule, None,
                    work_date=day, employee_id=employee_id, strategy_factory=self._factory,
                )
                if day > today and not empty.is_weekend:
                    empty = replace(empty, status=DayStatus.UPCOMING)
                days.append(empty)

        name = next((e.employee_name for e in mine if e.employee_name), None)
        # Days that have not happened yet are listed but not counted as absences.
        summary = aggregate(d for d in days if d.work_date <= today)

        return Timesheet(
            employee_id=employee_id,
            employee_name=name,
            year=year,
            month=month,
            schedule=self._registry.info(employee_id),
            days=days,
            summary=summary,
        )

    def live_board(
        self,
        events: Iterable[CheckEvent],
        *,
        now: datetime,
        diagnostics: Optional[Diagnostics] = None,
    ) -> LiveBoard:
        """Who is in right now, who arrived late, who already left."""
        by_employee: dict[str, list[CheckEvent]] = defaultdict(list)
        for event in events:
            by_employee[event.employee_id].append(event)

        rows: list[EmployeePresence] = []
        for employee_id, employee_events in by_employee.items():
            classified = _classified(employee_events)
            if not classified:
                continue

            schedule = self._registry.resolve(employee_id)
            first, last = classified[0], classified[-1]
            segments = build_segments(employee_events, now=now, diagnostics=diagnostics)
            total = round_minutes(sum((s.duration for s in segments), timedelta(0)))

            if classify(last.type_code) is EventClass.ENTRY:
                status = PresenceStatus.LATE if is_late(first.timestamp, schedule) else PresenceStatus.PRESENT
            else:
                status = PresenceStatus.LEFT

            rows.append(
                EmployeePresence(
                    employee_id=employee_id,
                    name=next((e.employee_name for e in employee_events if e.employee_name), None),
                    status=status,
                    first_check=first.timestamp,
                    last_check=last.timestamp,
                    total_minutes=total,
                    schedule=self._registry.info(employee_id),
                )
            )

        rows.sort(key=lambda r: ((r.name or r.employee_id).lower(), r.employee_id))
        return LiveBoard(generated_at=now, employees=rows, kpis=self._kpis(rows))

    @staticmethod
    def _kpis(rows: list[EmployeePresence]) -> LiveKpis:
        total = len(rows)
        late = sum(1 for r in rows if r.status is PresenceStatus.LATE)
        present = sum(1 for r in rows if r.status in (PresenceStatus.PRESENT, PresenceStatus.LATE))
        left = sum(1 for r in rows if r.status is PresenceStatus.LEFT)
        minutes = sum(r.total_minutes for r in rows)

        return LiveKpis(
            total=total,
            present=present,
            late=late,
            left=left,
            average_minutes=int(minutes / total + 0.5) if total else 0,
            punctuality_rate=int(100 * (total - late) / total + 0.5) if total else 100,
        )

    @staticmethod
    def list_employees(events: Iterable[CheckEvent]) -> list[tuple[str, str]]:
        events = list(events)
        names: dict[str, str] = {}
        for event in events:
            if event.employee_name:
                names.setdefault(event.employee_id, event.employee_name)
        for event in events:
            names.setdefault(event.employee_id, event.employee_id)
        return sorted(names.items(), key=lambda item: (item[1].lower(), item[0]))
