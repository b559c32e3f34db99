from __future__ import annotations

import logging
import re
from pathlib import Path
from typing import Iterable, Optional

import mysql.connector

from ..core.constants import DEFAULT_TIMEZONE
from ..schedules.registry import BUILTIN_ASSIGNMENTS, builtin_schedules
from .connection import DBConfig

logger = logging.getLogger(__name__)


def _connect(db_config: dict, *, with_database: bool = True):
    target = DBConfig.from_dict(db_config)
    kwargs = {
        "host": target.host,
        "port": target.port,
        "user": target.user,
        "password": target.password,
        "use_pure": True,
    }
    if with_database:
        kwargs["database"] = target.database
    return mysql.connector.connect(**kwargs)


def _strip_create_db_and_use(sql: str) -> str:
    # schema.sql must not pin a database name; DB_CONFIG decides.
    sql = re.sub(r"(?im)^\s*CREATE\s+DATABASE\b.*?;\s*$", "", sql)
    sql = re.sub(r"(?im)^\s*USE\b.*?;\s*$", "", sql)
    return sql


def _strip_comments(sql: str) -> str:
    return re.sub(r"(?m)^\s*--.*$", "", sql)


def iter_sql_statements(sql: str) -> Iterable[str]:
    """Split a script on ';', ignoring semicolons inside quoted strings."""
    buf: list[str] = []
    in_single = False
    in_double = False
    escape = False

    for ch in sql:
        if escape:
            buf.append(ch)
            escape = False
            continue

        if ch == "\\":
            buf.append(ch)
            escape = True
            continue

        if ch == "'" and not in_double:
            in_single = not in_single
        elif ch == '"' and not in_single:
            in_double = not in_double
        elif ch == ";" and not in_single and not in_double:
            stmt = "".join(buf).strip()
            buf.clear()
            if stmt:
                yield stmt
            continue

        buf.append(ch)

    tail = "".join(buf).strip()
    if tail:
        yield tail


def _run_script(db_config: dict, path: str | Path) -> int:
    sql = _strip_comments(_strip_create_db_and_use(Path(path).read_text(encoding="utf-8")))
    conn = _connect(db_config)
    count = 0
    try:
        cur = conn.cursor()
        for stmt in iter_sql_statements(sql):
            cur.execute(stmt)
            count += 1
        conn.commit()
    finally:
        conn.close()
    return count


def ensure_database_exists(db_config: dict) -> None:
    database = DBConfig.from_dict(db_config).database
    conn = _connect(db_config, with_database=False)
    try:
        cur = conn.cursor()
        cur.execute(f"CREATE DATABASE IF NOT EXISTS `{database}` CHARACTER SET utf8mb4 COLLATE utf8mb4_unicode_ci")
        conn.commit()
    finally:
        conn.close()


def apply_schema(db_config: dict, *, schema_path: str | Path) -> None:
    ensure_database_exists(db_config)
    count = _run_script(db_config, schema_path)
    logger.info("Applied %s (%d statements)", Path(schema_path).name, count)


def apply_seed_sql(db_config: dict, *, seed_path: str | Path) -> None:
    count = _run_script(db_config, seed_path)
    logger.info("Applied %s (%d statements)", Path(seed_path).name, count)


def ensure_builtin_schedules(db_config: dict, *, timezone: Optional[str] = None) -> None:
    """Upsert the built-in VE/VE2 schedules and their employee assignments."""
    schedules = builtin_schedules(timezone=timezone or DEFAULT_TIMEZONE)

    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        for s in schedules.values():
            cur.execute(
                """
                INSERT INTO work_schedules
                    (schedule_id, name, start_time, end_time,
                     late_tolerance_minutes, early_out_tolerance_minutes, overtime_threshold_minutes,
                     timezone, weekend_days)
                VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s)
                ON DUPLICATE KEY UPDATE
                    name=VALUES(name),
                    start_time=VALUES(start_time),
                    end_time=VALUES(end_time),
                    late_tolerance_minutes=VALUES(late_tolerance_minutes),
                    early_out_tolerance_minutes=VALUES(early_out_tolerance_minutes)
                """,
                (
                    s.schedule_id,
                    s.name,
                    s.start_time.strftime("%H:%M:%S"),
                    s.end_time.strftime("%H:%M:%S"),
                    s.late_tolerance_minutes,
                    s.early_out_tolerance_minutes,
                    s.overtime_threshold_minutes,
                    s.timezone,
                    ",".join(str(d) for d in s.weekend_days),
                ),
            )

        for workno, schedule_id in BUILTIN_ASSIGNMENTS.items():
            cur.execute(
                """
                INSERT INTO employee_schedules (workno, schedule_id)
                VALUES (%s, %s)
                ON DUPLICATE KEY UPDATE schedule_id=VALUES(schedule_id)
                """,
                (workno, schedule_id),
            )

        conn.commit()
    finally:
        conn.close()
    logger.info("Built-in schedules ready (%d schedules, %d assignments)", len(schedules), len(BUILTIN_ASSIGNMENTS))


def list_tables(db_config: dict) -> list[str]:
    conn = _connect(db_config)
    try:
        cur = conn.cursor()
        cur.execute("SHOW TABLES")
        return [row[0] for row in cur.fetchall()]
    finally:
        conn.close()
