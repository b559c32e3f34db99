from __future__ import annotations

from ...core.enums import DayStatus
from .base import DayFacts, DayStatusStrategy, StatusDecision


class NormalStrategy(DayStatusStrategy):
    def decide(self, facts: DayFacts) -> StatusDecision:
        return StatusDecision(status=DayStatus.NORMAL)
