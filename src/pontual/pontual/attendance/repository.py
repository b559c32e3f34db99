from __future__ import annotations

from datetime import datetime
from typing import Any, Protocol, Sequence


class EventSource(Protocol):
    """Where raw punch records come from.

    Implementations return every record with begin <= checktime < end, already
    merged across pages, in any order.
    """

    def fetch_records(self, begin: datetime, end: datetime) -> Sequence[dict[str, Any]]:
        raise NotImplementedError
