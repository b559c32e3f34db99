from datetime import date

from src.pontual.pontual.attendance.factory import DayStatusStrategyFactory
from src.pontual.pontual.attendance.strategies.absent_strategy import AbsentStrategy
from src.pontual.pontual.attendance.strategies.base import DayFacts
from src.pontual.pontual.attendance.strategies.late_strategy import LateStrategy
from src.pontual.pontual.attendance.strategies.normal_strategy import NormalStrategy
from src.pontual.pontual.attendance.strategies.weekend_strategy import WeekendStrategy
from src.pontual.pontual.core.enums import DayStatus


def _facts(*, worked: int, weekend: bool = False, late: bool = False) -> DayFacts:
    return DayFacts(work_date=date(2025, 2, 3), worked_minutes=worked, is_weekend=weekend, is_late=late)


def test_weekend_wins_over_everything():
    factory = DayStatusStrategyFactory()
    assert isinstance(factory.for_day(_facts(worked=0, weekend=True, late=True)), WeekendStrategy)


def test_no_worked_time_is_absent_even_if_late():
    strategy = DayStatusStrategyFactory().for_day(_facts(worked=0, late=True))

    assert isinstance(strategy, AbsentStrategy)
    assert strategy.decide(_facts(worked=0, late=True)).status is DayStatus.ABSENT


def test_late_and_normal():
    factory = DayStatusStrategyFactory()
    assert isinstance(factory.for_day(_facts(worked=300, late=True)), LateStrategy)
    assert isinstance(factory.for_day(_facts(worked=300)), NormalStrategy)
