"""Food logging service."""

import logging
import uuid
from dataclasses import dataclass
from typing import Protocol

from snacktrack.domain.errors import FoodLogNotFoundError
from snacktrack.domain.food import (
    DaySummary,
    FoodDraft,
    FoodLogRecord,
    MacroTotals,
    MealType,
    sum_macros,
)
from snacktrack.domain.profile import DailyGoals
from snacktrack.services.clock import LocalCalendarClock

_logger = logging.getLogger(__name__)


class FoodLogRepository(Protocol):
    """Persistence interface for logged food."""

    def create_record(self, record: FoodLogRecord) -> None:
        """Insert a new record."""

    def update_record(self, record: FoodLogRecord) -> None:
        """Replace the values of an existing record."""

    def get_record(self, record_id: str) -> FoodLogRecord | None:
        """Return a record by id, if present."""

    def delete_record(self, record_id: str) -> None:
        """Delete a record by id."""

    def list_records(self, start_ms: int, end_ms: int) -> list[FoodLogRecord]:
        """Return records with start <= timestamp < end, oldest first."""

    def list_recent_records(self, limit: int) -> list[FoodLogRecord]:
        """Return the most recent records, newest first."""

    def delete_records(self, start_ms: int, end_ms: int) -> int:
        """Delete records with start <= timestamp < end and return the count."""


def suggest_meal_type(hour: int) -> MealType:
    """Suggest a meal type from the local hour of day."""
    if 6 <= hour < 10:  # noqa: PLR2004
        return MealType.BREAKFAST
    if 11 <= hour < 14:  # noqa: PLR2004
        return MealType.LUNCH
    if 18 <= hour < 21:  # noqa: PLR2004
        return MealType.DINNER
    return MealType.SNACK


@dataclass
class FoodLogService:
    """Service for adding, editing and reading logged food."""

    repository: FoodLogRepository
    clock: LocalCalendarClock

    def add_food(
        self, draft: FoodDraft, timestamp_ms: int | None = None
    ) -> FoodLogRecord:
        """Log a food item, attributed to now unless a timestamp is given."""
        timestamp = timestamp_ms if timestamp_ms is not None else self.clock.now_ms()
        record = FoodLogRecord(
            id=uuid.uuid4().hex,
            name=draft.name,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fat=draft.fat,
            timestamp=timestamp,
            meal_type=draft.meal_type
            or suggest_meal_type(self.clock.local_hour(timestamp)),
            description=draft.description,
        )
        self.repository.create_record(record)
        _logger.info(
            "Logged food: id=%s calories=%s day=%s",
            record.id,
            record.calories,
            self.clock.date_key_of(timestamp),
        )
        return record

    def update_food(self, record_id: str, draft: FoodDraft) -> FoodLogRecord:
        """Edit a logged item; its timestamp is kept."""
        current = self.get_food(record_id)
        updated = FoodLogRecord(
            id=current.id,
            name=draft.name,
            calories=draft.calories,
            protein=draft.protein,
            carbs=draft.carbs,
            fat=draft.fat,
            timestamp=current.timestamp,
            meal_type=draft.meal_type or current.meal_type,
            description=draft.description,
        )
        self.repository.update_record(updated)
        return updated

    def get_food(self, record_id: str) -> FoodLogRecord:
        """Return a logged item or raise ``FoodLogNotFoundError``."""
        record = self.repository.get_record(record_id)
        if record is None:
            raise FoodLogNotFoundError(record_id)
        return record

    def delete_food(self, record_id: str) -> None:
        """Delete a logged item."""
        self.get_food(record_id)
        self.repository.delete_record(record_id)

    def list_day(self, date_key: str) -> list[FoodLogRecord]:
        """Return a local day's items, oldest first."""
        start_ms, end_ms = self.clock.day_bounds(date_key)
        return self.repository.list_records(start_ms, end_ms)

    def clear_day(self, date_key: str) -> int:
        """Delete every item of a local day."""
        start_ms, end_ms = self.clock.day_bounds(date_key)
        deleted = self.repository.delete_records(start_ms, end_ms)
        _logger.info("Cleared food log: day=%s deleted=%s", date_key, deleted)
        return deleted

    def history(self, limit: int = 50) -> list[FoodLogRecord]:
        """Return the most recent items across all days."""
        return self.repository.list_recent_records(limit)

    def get_day_summary(self, date_key: str, goals: DailyGoals) -> DaySummary:
        """Return a day's items with totals and remaining goals."""
        records = self.list_day(date_key)
        totals = sum_macros(records)
        return DaySummary(
            date_key=date_key,
            records=records,
            totals=totals,
            goals=goals,
            remaining=MacroTotals(
                calories=goals.calorie_goal - totals.calories,
                protein=round(goals.protein_goal - totals.protein, 1),
                carbs=round(goals.carbs_goal - totals.carbs, 1),
                fat=round(goals.fat_goal - totals.fat, 1),
            ),
        )
