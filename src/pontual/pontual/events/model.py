from __future__ import annotations

from collections import Counter
from dataclasses import dataclass, field
from datetime import datetime
from typing import Optional


@dataclass(frozen=True)
class CheckEvent:
    """Domain entity: one biometric punch, already validated."""

    employee_id: str
    timestamp: datetime
    type_code: int
    employee_name: Optional[str] = None
    device_label: Optional[str] = None
    device_serial: Optional[str] = None
    uuid: Optional[str] = None


@dataclass
class Diagnostics:
    """Counters for records that were rejected or could not be paired.

    Ingestion and segment building both report into the same instance for a
    request.
    """

    rejected_records: int = 0
    unmatched_exits: int = 0
    unknown_events: int = 0
    unknown_codes: Counter = field(default_factory=Counter)

    def record_unknown(self, type_code: int) -> None:
        self.unknown_events += 1
        self.unknown_codes[type_code] += 1

    def as_dict(self) -> dict:
        return {
            "rejected_records": self.rejected_records,
            "unmatched_exits": self.unmatched_exits,
            "unknown_events": self.unknown_events,
            "unknown_codes": {str(k): v for k, v in sorted(self.unknown_codes.items())},
        }
