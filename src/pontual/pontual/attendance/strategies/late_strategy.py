from __future__ import annotations

from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class LateStrategy(DayStatusStrategy):
    """First punch after start time plus tolerance."""

    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(status=DayStatus.LATE)
