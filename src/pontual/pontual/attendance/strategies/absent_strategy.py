from __future__ import annotations

from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class AbsentStrategy(DayStatusStrategy):
    """Work day with no worked time."""

    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(status=DayStatus.ABSENT)
