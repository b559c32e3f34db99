from datetime import date

from src.pontual.pontual.attendance.aggregator import aggregate, aggregate_by_employee
from src.pontual.pontual.attendance.model import DaySummary
from src.pontual.pontual.core.enums import DayStatus


def _day(day: int, status: DayStatus, worked: int = 0, overtime: int = 0, employee_id: str = "1") -> DaySummary:
    return DaySummary(
        employee_id=employee_id,
        work_date=date(2025, 2, day),
        status=status,
        worked_minutes=worked,
        overtime_minutes=overtime,
    )


def test_weekends_excluded_from_denominators_but_time_counts():
    days = [
        _day(3, DayStatus.NORMAL, 480, 30),
        _day(4, DayStatus.LATE, 450),
        _day(5, DayStatus.ABSENT),
        _day(8, DayStatus.WEEKEND, 120, 0),
        _day(9, DayStatus.WEEKEND),
    ]

    summary = aggregate(days)

    assert summary.work_days == 3
    assert summary.present_days == 2
    assert summary.absent_days == 1
    assert summary.late_days == 1
    assert summary.total_worked_minutes == 1050
    assert summary.total_overtime_minutes == 30
    assert summary.average_worked_minutes == 465
    assert summary.punctuality_rate == 67
    assert summary.attendance_rate == 67


def test_empty_period():
    summary = aggregate([])

    assert summary.work_days == 0
    assert summary.punctuality_rate == 100
    assert summary.attendance_rate == 0
    assert summary.average_worked_minutes == 0


def test_rates_round_half_up():
    days = [_day(d, DayStatus.NORMAL, 60) for d in (3, 4, 5, 6, 7, 10, 11)] + [_day(12, DayStatus.LATE, 60)]
    # 7/8 = 87.5%
    assert aggregate(days).punctuality_rate == 88


def test_grouping_by_employee():
    days = [
        _day(3, DayStatus.NORMAL, 480, employee_id="2"),
        _day(3, DayStatus.LATE, 400, employee_id="1"),
        _day(4, DayStatus.NORMAL, 300, employee_id="1"),
    ]

    grouped = aggregate_by_employee(days)

    assert list(grouped) == ["1", "2"]
    assert grouped["1"].total_worked_minutes == 700
    assert grouped["1"].late_days == 1
    assert grouped["2"].punctuality_rate == 100


def test_average_covers_present_work_days_only():
    days = [
        _day(3, DayStatus.NORMAL, 400),
        _day(8, DayStatus.WEEKEND, 600),
    ]

    summary = aggregate(days)

    assert summary.total_worked_minutes == 1000
    assert summary.average_worked_minutes == 400


def test_upcoming_days_are_not_work_days():
    days = [_day(3, DayStatus.NORMAL, 480), _day(4, DayStatus.UPCOMING), _day(5, DayStatus.UPCOMING)]

    summary = aggregate(days)

    assert summary.work_days == 1
    assert summary.absent_days == 0
    assert summary.attendance_rate == 100
