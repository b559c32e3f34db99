from __future__ import annotations

from ..core.enums import CheckType, EventClass

_CLASSES: dict[int, EventClass] = {
    CheckType.CHECK_IN: EventClass.ENTRY,
    CheckType.OVERTIME_IN: EventClass.ENTRY,
    CheckType.BREAK_END: EventClass.ENTRY,
    CheckType.CHECK_OUT: EventClass.EXIT,
    CheckType.OVERTIME_OUT: EventClass.EXIT,
    CheckType.BREAK_START: EventClass.EXIT,
}

_LABELS: dict[int, str] = {
    CheckType.CHECK_IN: "Check-In",
    CheckType.CHECK_OUT: "Check-Out",
    CheckType.BREAK_START: "Break Start",
    CheckType.BREAK_END: "Break End",
    CheckType.OVERTIME_IN: "Overtime In",
    CheckType.OVERTIME_OUT: "Overtime Out",
}


def classify(type_code: int) -> EventClass:
    """Map a device check-type code to Entry, Exit or Unknown.

    Every component that needs to know whether a punch opens or closes worked
    time goes through this function.
    """
    return _CLASSES.get(int(type_code), EventClass.UNKNOWN)


def is_entry(type_code: int) -> bool:
    return classify(type_code) is EventClass.ENTRY


def is_exit(type_code: int) -> bool:
    return classify(type_code) is EventClass.EXIT


def type_label(type_code: int) -> str:
    return _LABELS.get(int(type_code), f"Type {type_code}")
