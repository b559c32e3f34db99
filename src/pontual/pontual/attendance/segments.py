from __future__ import annotations

import logging
from datetime import datetime
from typing import Iterable, Optional

from ..core.enums import EventClass
from ..core.exceptions import ValidationError
from ..events.classifier import classify
from ..events.model import CheckEvent, Diagnostics
from .model import WorkedSegment

logger = logging.getLogger(__name__)


def build_segments(
    events: Iterable[CheckEvent],
    *,
    now: datetime,
    diagnostics: Optional[Diagnostics] = None,
) -> list[WorkedSegment]:
    """Pair entry and exit punches into worked segments.

    Events are sorted by timestamp (stable, so equal timestamps keep arrival
    order). An entry while another entry is open replaces it. An exit with no
    open entry produces nothing and is counted as unmatched. Unknown codes are
    skipped and counted. A trailing open entry runs until `now`.
    """
    if now.tzinfo is None or now.utcoffset() is None:
        raise ValidationError("now must be timezone-aware")

    ordered = sorted(events, key=lambda e: e.timestamp)
    segments: list[WorkedSegment] = []
    open_entry: Optional[datetime] = None

    for event in ordered:
        kind = classify(event.type_code)
        if kind is EventClass.ENTRY:
            open_entry = event.timestamp
        elif kind is EventClass.EXIT:
            if open_entry is None:
                if diagnostics is not None:
                    diagnostics.unmatched_exits += 1
                logger.debug("Unmatched exit for employee %s at %s", event.employee_id, event.timestamp.isoformat())
                continue
            segments.append(WorkedSegment(start=open_entry, end=event.timestamp))
            open_entry = None
        else:
            if diagnostics is not None:
                diagnostics.record_unknown(event.type_code)

    if open_entry is not None:
        segments.append(WorkedSegment(start=open_entry, end=max(now, open_entry), is_open=True))

    return segments
