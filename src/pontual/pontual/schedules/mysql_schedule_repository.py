from __future__ import annotations

import logging

from ..core.constants import DEFAULT_WEEKEND_DAYS
from ..core.exceptions import ConfigurationError
from ..database.connection import DatabaseConnection
from ..database.mysql_base import db_cursor, fetchall, normalize_mysql_time
from .model import AutoBreakDeduction, Schedule
from .registry import ScheduleRegistry
from .repository import ScheduleRepository

logger = logging.getLogger(__name__)


def _parse_weekend_days(value) -> tuple[int, ...]:
    if value is None or str(value).strip() == "":
        return DEFAULT_WEEKEND_DAYS
    try:
        days = tuple(sorted({int(p) for p in str(value).split(",") if p.strip()}))
    except ValueError as e:
        raise ConfigurationError(f"Invalid weekend_days value: {value!r}") from e
    if any(d < 0 or d > 6 for d in days):
        raise ConfigurationError(f"Invalid weekend_days value: {value!r}")
    return days


def row_to_schedule(row: dict, *, timezone: str) -> Schedule:
    auto_break = None
    if row.get("break_minutes"):
        auto_break = AutoBreakDeduction(
            enabled=bool(row.get("break_enabled", True)),
            duration_minutes=int(row["break_minutes"]),
            window_start=normalize_mysql_time(row.get("break_window_start")),
            window_end=normalize_mysql_time(row.get("break_window_end")),
        )

    return Schedule(
        schedule_id=str(row["schedule_id"]),
        name=row.get("name") or str(row["schedule_id"]),
        start_time=normalize_mysql_time(row["start_time"]),
        end_time=normalize_mysql_time(row["end_time"]),
        late_tolerance_minutes=int(row.get("late_tolerance_minutes") or 0),
        early_out_tolerance_minutes=int(row.get("early_out_tolerance_minutes") or 0),
        overtime_threshold_minutes=int(row.get("overtime_threshold_minutes") or 0),
        auto_break=auto_break,
        timezone=row.get("timezone") or timezone,
        weekend_days=_parse_weekend_days(row.get("weekend_days")),
    )


class MySQLScheduleRepository(ScheduleRepository):
    def __init__(self, conn_factory: DatabaseConnection):
        self._conn_factory = conn_factory

    def load_registry(self, *, default_schedule_id: str, timezone: str) -> ScheduleRegistry:
        with db_cursor(self._conn_factory) as (_, cur):
            cur.execute(
                """
                SELECT schedule_id, name, start_time, end_time,
                       late_tolerance_minutes, early_out_tolerance_minutes, overtime_threshold_minutes,
                       break_enabled, break_minutes, break_window_start, break_window_end,
                       timezone, weekend_days
                FROM work_schedules
                """
            )
            schedule_rows = fetchall(cur)

            cur.execute("SELECT workno, schedule_id FROM employee_schedules")
            assignment_rows = fetchall(cur)

        schedules = {str(r["schedule_id"]): row_to_schedule(r, timezone=timezone) for r in schedule_rows}
        assignments = {str(r["workno"]): str(r["schedule_id"]) for r in assignment_rows}
        logger.info("Loaded %d schedules and %d assignments from MySQL", len(schedules), len(assignments))
        return ScheduleRegistry(schedules, assignments, default_schedule_id=default_schedule_id)
