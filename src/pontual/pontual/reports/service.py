from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, tzinfo
from typing import Optional

from ..attendance.aggregator import aggregate_by_employee
from ..attendance.model import LiveBoard, Timesheet
from ..attendance.service import AttendanceService
from ..common.datetime_utils import day_bounds, get_zone, month_days
from ..common.validators import require_date_range
from ..core.constants import DEFAULT_REPORT_DAYS, DEFAULT_TIMEZONE
from ..core.enums import EventClass
from ..events.classifier import classify, type_label
from ..events.model import CheckEvent, Diagnostics
from .model import ReportData, ReportStats

logger = logging.getLogger(__name__)


class ReportService:
    def __init__(self, attendance: AttendanceService, *, timezone: str = DEFAULT_TIMEZONE):
        self._attendance = attendance
        self._timezone = timezone

    def _zones(self) -> list[tzinfo]:
        names = {self._timezone} | {s.timezone for s in self._attendance.registry.schedules.values()}
        return [get_zone(name) for name in sorted(names)]

    def _window(self, start: date, end: date) -> tuple[datetime, datetime]:
        """Fetch window covering local days start..end in every schedule timezone."""
        zones = self._zones()
        begin = min(day_bounds(start, zone)[0] for zone in zones)
        finish = max(day_bounds(end, zone)[1] for zone in zones)
        return begin, finish

    def _within(self, event: CheckEvent, start: date, end: date) -> bool:
        return start <= self._attendance.local_date(event) <= end

    def today(self, now: datetime) -> date:
        return now.astimezone(get_zone(self._timezone)).date()

    def build_live_board(self, *, now: datetime) -> LiveBoard:
        """Today's presence board; each employee's today is in their schedule's timezone."""
        diagnostics = Diagnostics()
        today = self.today(now)
        begin, _ = self._window(today - timedelta(days=1), today)

        events = self._attendance.fetch_events(begin, max(now, begin + timedelta(seconds=1)), diagnostics)
        # Keep each employee's own local today.
        events = [
            e for e in events
            if self._attendance.local_date(e) == self._attendance.localize(e.employee_id, now).date()
        ]
        board = self._attendance.live_board(events, now=now, diagnostics=diagnostics)
        logger.debug("Live board for %s: %d employees, %s", today, len(board.employees), diagnostics.as_dict())
        return board

    def list_recent_employees(self, *, now: datetime, days: int = DEFAULT_REPORT_DAYS) -> list[tuple[str, str]]:
        today = self.today(now)
        begin, finish = self._window(today - timedelta(days=days), today)
        return self._attendance.list_employees(self._attendance.fetch_events(begin, finish))

    def build_attendance_report(
        self,
        *,
        start: date,
        end: date,
        now: datetime,
        search: Optional[str] = None,
    ) -> ReportData:
        require_date_range(start, end)
        diagnostics = Diagnostics()
        begin, finish = self._window(start, end)

        events = self._attendance.fetch_events(begin, finish, diagnostics)
        names = dict(self._attendance.list_employees(events))

        term = (search or "").strip().lower()
        if term:
            events = [e for e in events if term in names[e.employee_id].lower() or term in e.employee_id.lower()]

        days = self._attendance.summarize_days(events, now=now, start=start, end=end, diagnostics=diagnostics)
        days.sort(key=lambda d: (d.work_date, d.first_in.timestamp() if d.first_in else 0.0), reverse=True)

        stats = ReportStats(
            unique_employees=len({d.employee_id for d in days}),
            employee_days=len(days),
            total_worked_minutes=sum(d.worked_minutes for d in days),
            total_overtime_minutes=sum(d.overtime_minutes for d in days),
        )
        if diagnostics.rejected_records or diagnostics.unmatched_exits or diagnostics.unknown_events:
            logger.warning("Report %s..%s diagnostics: %s", start, end, diagnostics.as_dict())

        return ReportData(
            start=start,
            end=end,
            days=days,
            names={d.employee_id: names[d.employee_id] for d in days},
            per_employee=aggregate_by_employee(days),
            stats=stats,
            diagnostics=diagnostics.as_dict(),
        )

    def build_raw_listing(self, *, start: date, end: date) -> tuple[list[dict], dict]:
        """Every valid record in the window, unknown check types included."""
        require_date_range(start, end)
        diagnostics = Diagnostics()
        events = self._attendance.fetch_events(*self._window(start, end), diagnostics)
        events = [e for e in events if self._within(e, start, end)]

        rows = []
        for event in sorted(events, key=lambda e: e.timestamp, reverse=True):
            kind = classify(event.type_code)
            if kind is EventClass.UNKNOWN:
                diagnostics.record_unknown(event.type_code)
            rows.append(
                {
                    "uuid": event.uuid,
                    "employee_id": event.employee_id,
                    "employee_name": event.employee_name or event.employee_id,
                    "timestamp": self._attendance.localize(event.employee_id, event.timestamp).isoformat(),
                    "type_code": event.type_code,
                    "type_label": type_label(event.type_code),
                    "event_class": kind.value,
                    "device": event.device_label,
                    "device_serial": event.device_serial,
                }
            )
        return rows, diagnostics.as_dict()

    def build_timesheet_report(self, *, employee_id: str, year: int, month: int, now: datetime) -> tuple[Timesheet, dict]:
        diagnostics = Diagnostics()
        schedule = self._attendance.registry.resolve(employee_id)
        zone = get_zone(schedule.timezone)
        days = month_days(year, month)
        begin, finish = day_bounds(days[0], zone)[0], day_bounds(days[-1], zone)[1]

        events = self._attendance.fetch_events(begin, finish, diagnostics)
        timesheet = self._attendance.build_timesheet(
            events, employee_id=employee_id, year=year, month=month, now=now, diagnostics=diagnostics
        )
        return timesheet, diagnostics.as_dict()

