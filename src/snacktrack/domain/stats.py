"""Domain models for statistics."""

from dataclasses import dataclass
from enum import StrEnum


class StatsPeriod(StrEnum):
    WEEKLY = "weekly"
    MONTHLY = "monthly"


@dataclass(frozen=True)
class CalorieRow:
    """Calories of a single logged item and when it was logged."""

    timestamp: int
    calories: int


@dataclass(frozen=True)
class DailyCalorieSample:
    """Total calories logged on a local calendar day."""

    date_key: str
    total_calories: int


@dataclass(frozen=True)
class DayStat:
    """One bar of the period chart."""

    date_key: str
    label: str
    calories: int
    met_goal: bool


@dataclass(frozen=True)
class StatsResult:
    """Per-day series and summary figures for a period."""

    period: StatsPeriod
    days: list[DayStat]
    average_calories: int
    current_streak: int
    best_streak: int
    days_goal_met: int
    days_with_data: int
    compliance_rate: int
