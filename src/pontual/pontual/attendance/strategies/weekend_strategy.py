from __future__ import annotations

from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class WeekendStrategy(DayStatusStrategy):
    """Rest day by calendar, whatever was punched."""

    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(status=DayStatus.WEEKEND)
