from __future__ import annotations

import logging
from dataclasses import replace
from datetime import time
from types import MappingProxyType
from typing import Mapping, Optional

from ..core.constants import DEFAULT_SCHEDULE_ID, DEFAULT_TIMEZONE
from ..core.exceptions import ConfigurationError
from .model import Schedule, ScheduleInfo

logger = logging.getLogger(__name__)


class ScheduleRegistry:
    """Resolves every employee id to exactly one Schedule.

    Employees without an explicit assignment get the default schedule. The
    invariant is checked once, at construction: a registry whose default or whose
    assignments point at unknown schedules cannot be built.
    """

    def __init__(
        self,
        schedules: Mapping[str, Schedule],
        assignments: Optional[Mapping[str, str]] = None,
        *,
        default_schedule_id: str = DEFAULT_SCHEDULE_ID,
    ):
        self._schedules = MappingProxyType(dict(schedules))
        self._assignments = MappingProxyType({str(k): str(v) for k, v in (assignments or {}).items()})
        self._default_id = default_schedule_id

        if default_schedule_id not in self._schedules:
            raise ConfigurationError(f"Default schedule {default_schedule_id!r} is not defined")

        dangling = sorted(emp for emp, sid in self._assignments.items() if sid not in self._schedules)
        if dangling:
            raise ConfigurationError(f"Employees assigned to undefined schedules: {', '.join(dangling)}")

    @property
    def default_schedule_id(self) -> str:
        return self._default_id

    @property
    def schedules(self) -> Mapping[str, Schedule]:
        return self._schedules

    @property
    def assignments(self) -> Mapping[str, str]:
        return self._assignments

    def schedule_id_for(self, employee_id: str) -> str:
        return self._assignments.get(str(employee_id), self._default_id)

    def resolve(self, employee_id: str) -> Schedule:
        schedule_id = self.schedule_id_for(employee_id)
        schedule = self._schedules.get(schedule_id)
        if schedule is None:
            # Unreachable for a registry built through __init__.
            raise ConfigurationError(f"No schedule {schedule_id!r} for employee {employee_id!r}")
        return schedule

    def info(self, employee_id: str) -> ScheduleInfo:
        schedule = self.resolve(employee_id)
        return ScheduleInfo(
            schedule_id=schedule.schedule_id,
            name=schedule.name,
            start_time=schedule.start_time,
            end_time=schedule.end_time,
            regular_minutes=schedule.regular_minutes,
        )


def builtin_schedules(*, timezone: str = DEFAULT_TIMEZONE) -> dict[str, Schedule]:
    return {
        "VE": Schedule(
            schedule_id="VE",
            name="Horário VE",
            start_time=time(8, 30),
            end_time=time(17, 30),
            late_tolerance_minutes=20,
            early_out_tolerance_minutes=20,
            timezone=timezone,
        ),
        "VE2": Schedule(
            schedule_id="VE2",
            name="Horário VE 2",
            start_time=time(9, 0),
            end_time=time(18, 0),
            late_tolerance_minutes=60,
            early_out_tolerance_minutes=60,
            timezone=timezone,
        ),
    }


# Employee workno -> schedule id; everyone else gets the default.
BUILTIN_ASSIGNMENTS: dict[str, str] = {
    "3": "VE2",
}


def build_builtin_registry(
    *,
    timezone: str = DEFAULT_TIMEZONE,
    default_schedule_id: str = DEFAULT_SCHEDULE_ID,
    overtime_threshold_minutes: Optional[int] = None,
) -> ScheduleRegistry:
    schedules = builtin_schedules(timezone=timezone)
    if overtime_threshold_minutes is not None:
        schedules = {
            sid: replace(s, overtime_threshold_minutes=int(overtime_threshold_minutes)) for sid, s in schedules.items()
        }
    registry = ScheduleRegistry(schedules, BUILTIN_ASSIGNMENTS, default_schedule_id=default_schedule_id)
    logger.debug("Built-in schedule registry: %d schedules, %d assignments", len(schedules), len(BUILTIN_ASSIGNMENTS))
    return registry
