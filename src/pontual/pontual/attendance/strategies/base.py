from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from datetime import date

from ...core.enums import DayStatus


@dataclass(frozen=True)
class DayFacts:
    work_date: date
    worked_minutes: int
    is_weekend: bool
    is_late: bool


@dataclass(frozen=True)
class StatusDecision:
    status: DayStatus


class DayStatusStrategy(ABC):
    """Strategy Pattern: encapsulate how a day's status is decided."""

    @abstractmethod
    def decide(self, facts: DayFacts) -> StatusDecision:
        raise NotImplementedError
