"""Ingestion boundary: provider wire records -> CheckEvent.

CrossChex answers with records shaped like::

    {
        "uuid": "...",
        "checktype": 0,
        "checktime": "2024-02-02T09:00:00+00:00",
        "device": {"serial_number": "...", "name": "..."},
        "employee": {"first_name": "...", "last_name": "...", "workno": "3"},
    }

Anything that does not convert cleanly is rejected one record at a time and
counted in the caller's Diagnostics; the rest of the batch still goes through.
"""

from __future__ import annotations

import logging
import re
from datetime import datetime
from typing import Any, Iterable, Optional

from ..core.exceptions import ValidationError
from .model import CheckEvent, Diagnostics

logger = logging.getLogger(__name__)

_INTEGER = re.compile(r"-?[0-9]+")


def parse_checktime(value: Any) -> datetime:
    if not isinstance(value, str) or not value.strip():
        raise ValidationError(f"checktime is missing or not a string: {value!r}")

    text = value.strip()
    if text.endswith("Z"):
        text = text[:-1] + "+00:00"
    try:
        parsed = datetime.fromisoformat(text)
    except ValueError as e:
        raise ValidationError(f"checktime is not ISO-8601: {value!r}") from e

    if parsed.tzinfo is None or parsed.utcoffset() is None:
        raise ValidationError(f"checktime has no timezone offset: {value!r}")
    return parsed


def parse_checktype(value: Any) -> int:
    # bool is an int subclass; a True/False checktype is a broken payload.
    if isinstance(value, bool):
        raise ValidationError(f"checktype is not an integer: {value!r}")
    if isinstance(value, int):
        return value
    if isinstance(value, str) and _INTEGER.fullmatch(value.strip()):
        return int(value.strip())
    raise ValidationError(f"checktype is not an integer: {value!r}")


def _employee_name(employee: dict) -> Optional[str]:
    first = str(employee.get("first_name") or "").strip()
    last = str(employee.get("last_name") or "").strip()
    name = f"{first} {last}".strip()
    return name or None


def to_check_event(record: Any) -> CheckEvent:
    if not isinstance(record, dict):
        raise ValidationError(f"record is not an object: {type(record).__name__}")

    employee = record.get("employee") or {}
    if not isinstance(employee, dict):
        raise ValidationError("employee is not an object")
    workno = employee.get("workno")
    if workno is None or not str(workno).strip():
        raise ValidationError("employee.workno is missing")

    device = record.get("device") or {}
    if not isinstance(device, dict):
        device = {}

    return CheckEvent(
        employee_id=str(workno).strip(),
        timestamp=parse_checktime(record.get("checktime")),
        type_code=parse_checktype(record.get("checktype")),
        employee_name=_employee_name(employee),
        device_label=device.get("name"),
        device_serial=device.get("serial_number"),
        uuid=record.get("uuid"),
    )


def parse_records(records: Iterable[Any], diagnostics: Optional[Diagnostics] = None) -> list[CheckEvent]:
    """Convert provider records, keeping arrival order and skipping bad ones."""
    events: list[CheckEvent] = []
    for index, record in enumerate(records):
        try:
            events.append(to_check_event(record))
        except ValidationError as e:
            if diagnostics is not None:
                diagnostics.rejected_records += 1
            logger.warning("Rejected attendance record #%d: %s", index, e)
    return events
