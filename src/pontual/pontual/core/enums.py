from __future__ import annotations

from enum import Enum, IntEnum


class CheckType(IntEnum):
    """Check-type codes reported by Anviz devices through CrossChex Cloud."""

    CHECK_IN = 0
    CHECK_OUT = 1
    BREAK_START = 2
    BREAK_END = 3
    OVERTIME_IN = 128
    OVERTIME_OUT = 129


class EventClass(str, Enum):
    ENTRY = "entry"
    EXIT = "exit"
    UNKNOWN = "unknown"


class DayStatus(str, Enum):
    """Per-day classification of an employee's attendance."""

    NORMAL = "normal"
    LATE = "late"
    ABSENT = "absent"
    WEEKEND = "weekend"
    UPCOMING = "upcoming"


class PresenceStatus(str, Enum):
    """Live dashboard state of an employee for the current day."""

    PRESENT = "present"
    LATE = "late"
    LEFT = "left"
