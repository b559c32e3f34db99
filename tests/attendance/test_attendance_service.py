from __future__ import annotations

from datetime import date, datetime
from zoneinfo import ZoneInfo

import pytest

from src.pontual.pontual.attendance.service import AttendanceService
from src.pontual.pontual.core.enums import DayStatus, PresenceStatus
from src.pontual.pontual.core.exceptions import ValidationError
from src.pontual.pontual.events.model import CheckEvent, Diagnostics
from src.pontual.pontual.schedules.registry import build_builtin_registry

LIS = ZoneInfo("Europe/Lisbon")


class InMemorySource:
    def __init__(self, records):
        self.records = records
        self.calls = []

    def fetch_records(self, begin, end):
        self.calls.append((begin, end))
        return self.records


def at(day: int, hour: int, minute: int = 0) -> datetime:
    return datetime(2025, 2, day, hour, minute, tzinfo=LIS)


def ev(employee_id: str, day: int, hour: int, minute: int, code: int, name: str | None = None) -> CheckEvent:
    return CheckEvent(employee_id=employee_id, timestamp=at(day, hour, minute), type_code=code, employee_name=name)


def _service(records=()):
    return AttendanceService(InMemorySource(list(records)), build_builtin_registry())


def test_fetch_events_ingests_and_counts_rejects():
    records = [
        {"checktype": 0, "checktime": "2025-02-03T08:30:00+00:00", "employee": {"workno": "1"}},
        {"checktype": 0, "checktime": "bad", "employee": {"workno": "1"}},
    ]
    diagnostics = Diagnostics()

    events = _service(records).fetch_events(at(3, 0), at(4, 0), diagnostics)

    assert len(events) == 1
    assert diagnostics.rejected_records == 1


def test_fetch_events_rejects_empty_window():
    with pytest.raises(ValidationError):
        _service().fetch_events(at(3, 12), at(3, 12))


def test_summarize_days_groups_by_employee_and_local_day():
    events = [
        ev("1", 3, 8, 30, 0), ev("1", 3, 17, 30, 1),
        ev("1", 4, 9, 0, 0), ev("1", 4, 17, 30, 1),
        ev("3", 3, 9, 50, 0), ev("3", 3, 18, 0, 1),
    ]

    days = _service().summarize_days(events, now=at(10, 12))

    assert [(d.employee_id, d.work_date.day, d.status) for d in days] == [
        ("1", 3, DayStatus.NORMAL),
        ("3", 3, DayStatus.NORMAL),
        ("1", 4, DayStatus.LATE),
    ]
    assert days[0].worked_minutes == 540


def test_summarize_days_range_filter():
    events = [ev("1", 3, 8, 30, 0), ev("1", 4, 8, 30, 0)]

    days = _service().summarize_days(events, now=at(10, 12), start=date(2025, 2, 4), end=date(2025, 2, 4))

    assert [d.work_date for d in days] == [date(2025, 2, 4)]


def test_open_entry_on_past_day_closes_at_midnight():
    service = _service()

    day = service.summarize_day("1", date(2025, 2, 3), [ev("1", 3, 20, 0, 0)], now=at(5, 12))

    assert day.is_open
    assert day.worked_minutes == 240


def test_timesheet_lists_every_day_and_counts_up_to_today():
    events = [
        ev("1", 3, 8, 30, 0, "Ana Silva"), ev("1", 3, 17, 30, 1),
        ev("1", 4, 9, 0, 0), ev("1", 4, 17, 30, 1),
        ev("1", 8, 10, 0, 0), ev("1", 8, 12, 0, 1),
        ev("2", 3, 8, 30, 0),
    ]

    sheet = _service().build_timesheet(events, employee_id="1", year=2025, month=2, now=at(10, 12))

    assert sheet.employee_name == "Ana Silva"
    assert len(sheet.days) == 28
    assert sheet.schedule.schedule_id == "VE"
    by_day = {d.work_date.day: d for d in sheet.days}
    assert by_day[1].status is DayStatus.WEEKEND
    assert by_day[5].status is DayStatus.ABSENT
    assert by_day[8].status is DayStatus.WEEKEND
    assert by_day[8].worked_minutes == 120
    assert by_day[11].status is DayStatus.UPCOMING
    assert by_day[15].status is DayStatus.WEEKEND

    summary = sheet.summary
    assert summary.work_days == 6
    assert summary.present_days == 2
    assert summary.absent_days == 4
    assert summary.late_days == 1
    assert summary.total_worked_minutes == 1170
    assert summary.average_worked_minutes == 525
    assert summary.punctuality_rate == 83
    assert summary.attendance_rate == 33


def test_two_employees_resolve_their_own_schedules():
    events = [ev("3", 3, 9, 50, 0), ev("1", 3, 9, 50, 0)]

    days = _service().summarize_days(events, now=at(3, 12))

    statuses = {d.employee_id: d.status for d in days}
    assert statuses == {"1": DayStatus.LATE, "3": DayStatus.NORMAL}


def test_live_board_statuses_and_kpis():
    events = [
        ev("1", 3, 8, 30, 0, "Ana"),
        ev("2", 3, 9, 0, 0, "Bruno"),
        ev("3", 3, 9, 50, 0, "Carla"),
        ev("4", 3, 8, 0, 0, "Duarte"), ev("4", 3, 12, 0, 1),
        ev("5", 3, 9, 0, 7, "Eva"),
    ]

    board = _service().live_board(events, now=at(3, 12, 30))

    assert [r.employee_id for r in board.employees] == ["1", "2", "3", "4"]
    statuses = {r.employee_id: r.status for r in board.employees}
    assert statuses == {
        "1": PresenceStatus.PRESENT,
        "2": PresenceStatus.LATE,
        "3": PresenceStatus.PRESENT,
        "4": PresenceStatus.LEFT,
    }
    assert board.kpis.total == 4
    assert board.kpis.present == 3
    assert board.kpis.late == 1
    assert board.kpis.left == 1
    assert board.kpis.punctuality_rate == 75
    assert board.kpis.average_minutes == 213


def test_empty_live_board():
    board = _service().live_board([], now=at(3, 12))
    assert board.employees == []
    assert board.kpis.punctuality_rate == 100


def test_list_employees_prefers_names():
    events = [ev("2", 3, 9, 0, 0), ev("2", 3, 10, 0, 1, "Bruno"), ev("1", 3, 9, 0, 0, "Ana")]
    assert AttendanceService.list_employees(events) == [("1", "Ana"), ("2", "Bruno")]


def test_rebadged_entry_overtime_counts_from_first_entry():
    day = _service(records=()).summarize_day(
        "1",
        date(2025, 2, 3),
        [ev("1", 3, 8, 0, 0), ev("1", 3, 8, 5, 0), ev("1", 3, 17, 30, 1)],
        now=at(3, 20),
    )

    assert day.overtime_minutes == 30
    assert day.first_in == at(3, 8, 0)
