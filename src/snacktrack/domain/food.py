"""Domain models for logged food."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum

from snacktrack.domain.profile import DailyGoals


class MealType(StrEnum):
    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


@dataclass(frozen=True)
class FoodDraft:
    """Food values supplied when adding or editing an entry."""

    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    meal_type: MealType | None = None
    description: str = ""


@dataclass(frozen=True)
class FoodLogRecord:
    """A logged food item attributed to a moment in time (epoch ms)."""

    id: str
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    timestamp: int
    meal_type: MealType
    description: str = ""


@dataclass(frozen=True)
class MacroTotals:
    """Summed calories and macros."""

    calories: int
    protein: float
    carbs: float
    fat: float


@dataclass(frozen=True)
class DaySummary:
    """A day's entries with totals and what is left of the goals."""

    date_key: str
    records: list[FoodLogRecord]
    totals: MacroTotals
    goals: DailyGoals
    remaining: MacroTotals


@dataclass(frozen=True)
class FavouriteFood:
    """A saved food that can be logged again in one step."""

    id: str
    name: str
    calories: int
    protein: float
    carbs: float
    fat: float
    use_count: int
    last_used_at: datetime | None


def sum_macros(records: list[FoodLogRecord]) -> MacroTotals:
    """Return calorie and macro sums for the given records."""
    return MacroTotals(
        calories=sum(record.calories for record in records),
        protein=round(sum(record.protein for record in records), 1),
        carbs=round(sum(record.carbs for record in records), 1),
        fat=round(sum(record.fat for record in records), 1),
    )
