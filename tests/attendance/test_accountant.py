from datetime import date, datetime, time
from zoneinfo import ZoneInfo

import pytest

from src.pontual.pontual.attendance.accountant import account_day, apply_auto_break, is_late, overtime_minutes
from src.pontual.pontual.attendance.segments import build_segments
from src.pontual.pontual.core.enums import DayStatus
from src.pontual.pontual.core.exceptions import ConfigurationError
from src.pontual.pontual.events.model import CheckEvent, Diagnostics
from src.pontual.pontual.schedules.model import AutoBreakDeduction, Schedule

LIS = ZoneInfo("Europe/Lisbon")
MONDAY = date(2025, 2, 3)
SATURDAY = date(2025, 2, 8)

SCHEDULE = Schedule(
    schedule_id="VE",
    name="VE",
    start_time=time(8, 30),
    end_time=time(17, 30),
    late_tolerance_minutes=20,
    early_out_tolerance_minutes=20,
    overtime_threshold_minutes=10,
)


def at(hour: int, minute: int = 0, second: int = 0, day: date = MONDAY) -> datetime:
    return datetime(day.year, day.month, day.day, hour, minute, second, tzinfo=LIS)


def account(punches, *, now=None, day=MONDAY, schedule=SCHEDULE, diagnostics=None):
    events = [CheckEvent(employee_id="1", timestamp=at(h, m, day=day), type_code=code) for h, m, code in punches]
    segments = build_segments(events, now=now or at(23, day=day), diagnostics=diagnostics)
    first = min((e.timestamp for e in events if e.type_code in (0, 1)), default=None)
    return account_day(segments, schedule, first, work_date=day, employee_id="1")


def test_split_day_late_with_exit_overtime():
    summary = account([(9, 0, 0), (13, 0, 1), (14, 0, 0), (18, 0, 1)])

    assert summary.worked_minutes == 480
    assert summary.status is DayStatus.LATE
    assert summary.overtime_minutes == 30
    assert summary.first_in == at(9)
    assert summary.last_out == at(18)
    assert not summary.is_open


def test_still_clocked_in():
    summary = account([(8, 40, 0)], now=at(11))

    assert summary.worked_minutes == 140
    assert summary.status is DayStatus.NORMAL
    assert summary.is_open
    assert summary.last_out is None


def test_lone_exit_is_absent():
    diagnostics = Diagnostics()
    summary = account([(14, 0, 1)], diagnostics=diagnostics)

    assert summary.worked_minutes == 0
    assert summary.status is DayStatus.ABSENT
    assert diagnostics.unmatched_exits == 1


def test_weekend_without_punches():
    summary = account([], day=SATURDAY)
    assert summary.status is DayStatus.WEEKEND
    assert summary.is_weekend


def test_weekend_beats_late():
    summary = account([(11, 0, 0), (15, 0, 1)], day=SATURDAY)
    assert summary.status is DayStatus.WEEKEND
    assert summary.worked_minutes == 240


def test_small_deltas_earn_no_overtime():
    summary = account([(8, 25, 0), (17, 35, 1)])

    assert summary.status is DayStatus.NORMAL
    assert summary.overtime_minutes == 0


def test_lateness_boundary_is_strict():
    assert not is_late(at(8, 50), SCHEDULE)
    assert not is_late(at(8, 50, 59), SCHEDULE)
    assert is_late(at(8, 51), SCHEDULE)
    assert not is_late(None, SCHEDULE)


def test_lateness_uses_schedule_timezone():
    utc_morning = datetime(2025, 7, 1, 7, 45, tzinfo=ZoneInfo("UTC"))
    # 07:45 UTC is 08:45 in Lisbon summer time
    assert not is_late(utc_morning, SCHEDULE)
    assert is_late(utc_morning.replace(hour=8), SCHEDULE)


def test_overtime_deltas_count_independently():
    assert overtime_minutes(at(8, 0), at(17, 35), SCHEDULE) == 30
    assert overtime_minutes(at(8, 25), at(18, 0), SCHEDULE) == 30
    assert overtime_minutes(at(8, 20), at(17, 40), SCHEDULE) == 20
    assert overtime_minutes(at(8, 20), None, SCHEDULE) == 10


def test_auto_break_only_when_day_is_long_enough():
    lunch = AutoBreakDeduction(enabled=True, duration_minutes=60)

    assert apply_auto_break(480, lunch) == 420
    assert apply_auto_break(60, lunch) == 0
    assert apply_auto_break(59, lunch) == 59
    assert apply_auto_break(480, AutoBreakDeduction(enabled=False, duration_minutes=60)) == 480
    assert apply_auto_break(480, None) == 480


def test_worked_minutes_round_half_up():
    events = [
        CheckEvent("1", at(9, 0, 0), 0),
        CheckEvent("1", at(9, 10, 30), 1),
    ]
    summary = account_day(build_segments(events, now=at(23)), SCHEDULE, at(9), work_date=MONDAY)
    assert summary.worked_minutes == 11


def test_missing_schedule_is_fatal():
    with pytest.raises(ConfigurationError):
        account_day([], None, None, work_date=MONDAY, employee_id="1")


def test_rebadged_entry_keeps_first_entry_for_overtime():
    events = [
        CheckEvent("1", at(8, 0), 0),
        CheckEvent("1", at(8, 5), 0),
        CheckEvent("1", at(17, 30), 1),
    ]
    segments = build_segments(events, now=at(23))

    summary = account_day(
        segments, SCHEDULE, at(8, 0), work_date=MONDAY, employee_id="1", first_entry_timestamp=at(8, 0)
    )

    assert summary.worked_minutes == 565
    assert summary.first_in == at(8, 0)
    assert summary.overtime_minutes == 30
