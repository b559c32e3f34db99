from __future__ import annotations

from dataclasses import dataclass

from .strategies.absent_strategy import AbsentStrategy
from .strategies.base import DayFacts, DayStatusStrategy
from .strategies.late_strategy import LateStrategy
from .strategies.normal_strategy import NormalStrategy
from .strategies.weekend_strategy import WeekendStrategy


@dataclass
class DayStatusStrategyFactory:
    """Factory Pattern: weekend beats absent, absent beats late, late beats normal."""

    def for_day(self, facts: DayFacts) -> DayStatusStrategy:
        if facts.is_weekend:
            return WeekendStrategy()
        if facts.worked_minutes <= 0:
            return AbsentStrategy()
        if facts.is_late:
            return LateStrategy()
        return NormalStrategy()
