from datetime import time

import pytest

from src.pontual.pontual.core.exceptions import ConfigurationError
from src.pontual.pontual.schedules.model import Schedule
from src.pontual.pontual.schedules.registry import ScheduleRegistry, build_builtin_registry


def _schedule(schedule_id: str) -> Schedule:
    return Schedule(schedule_id=schedule_id, name=schedule_id, start_time=time(8, 30), end_time=time(17, 30))


def test_builtin_registry_resolves_explicit_and_default():
    registry = build_builtin_registry()

    assert registry.resolve("3").schedule_id == "VE2"
    assert registry.resolve("7").schedule_id == "VE"
    assert registry.resolve("").schedule_id == "VE"


def test_builtin_schedules_match_published_hours():
    registry = build_builtin_registry()
    ve, ve2 = registry.resolve("1"), registry.resolve("3")

    assert (ve.start_time, ve.end_time, ve.late_tolerance_minutes) == (time(8, 30), time(17, 30), 20)
    assert (ve2.start_time, ve2.end_time, ve2.late_tolerance_minutes) == (time(9, 0), time(18, 0), 60)
    assert ve.regular_minutes == 540


def test_info_describes_the_resolved_schedule():
    info = build_builtin_registry().info("3")
    assert info.schedule_id == "VE2"
    assert info.start_time == time(9, 0)
    assert info.regular_minutes == 540


def test_overtime_threshold_override():
    registry = build_builtin_registry(overtime_threshold_minutes=10)
    assert registry.resolve("3").overtime_threshold_minutes == 10
    assert registry.resolve("1").overtime_threshold_minutes == 10


def test_missing_default_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        ScheduleRegistry({"A": _schedule("A")}, default_schedule_id="B")


def test_assignment_to_undefined_schedule_is_a_configuration_error():
    with pytest.raises(ConfigurationError):
        ScheduleRegistry({"A": _schedule("A")}, {"9": "Z"}, default_schedule_id="A")
