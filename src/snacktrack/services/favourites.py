"""Services for managing favourite foods."""

from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol

from snacktrack.domain.errors import FavouriteNotFoundError
from snacktrack.domain.food import FavouriteFood, FoodDraft, FoodLogRecord, MealType
from snacktrack.services.food_log import FoodLogService


class FavouritesRepository(Protocol):
    """Persistence interface for favourite foods."""

    def create_favourite(self, draft: FoodDraft) -> FavouriteFood:
        """Create a favourite and return it."""

    def get_favourite(self, favourite_id: str) -> FavouriteFood | None:
        """Return a favourite by id, if present."""

    def list_favourites(self, limit: int) -> list[FavouriteFood]:
        """Return saved favourites."""

    def delete_favourite(self, favourite_id: str) -> None:
        """Delete a favourite."""

    def increment_usage(self, favourite_id: str, used_at: datetime) -> None:
        """Increment usage counters for a favourite."""


@dataclass
class FavouritesService:
    """Application service for favourite foods."""

    repository: FavouritesRepository
    food_log_service: FoodLogService

    def list_favourites(self, limit: int = 20) -> list[FavouriteFood]:
        """Return favourites, most recently and frequently used first."""
        return self._rank(self.repository.list_favourites(limit))

    def add_favourite(self, draft: FoodDraft) -> FavouriteFood:
        """Save a food as a favourite."""
        return self.repository.create_favourite(draft)

    def delete_favourite(self, favourite_id: str) -> None:
        """Remove a favourite."""
        self._get(favourite_id)
        self.repository.delete_favourite(favourite_id)

    def log_favourite(
        self,
        favourite_id: str,
        meal_type: MealType | None = None,
        timestamp_ms: int | None = None,
    ) -> FoodLogRecord:
        """Log a favourite as a new food entry and record its use.

        The entry lands at ``timestamp_ms`` when given, so a favourite can be
        added to a past day; otherwise it is logged now.
        """
        favourite = self._get(favourite_id)
        record = self.food_log_service.add_food(
            FoodDraft(
                name=favourite.name,
                calories=favourite.calories,
                protein=favourite.protein,
                carbs=favourite.carbs,
                fat=favourite.fat,
                meal_type=meal_type,
                description="Added from favourites",
            ),
            timestamp_ms,
        )
        self.repository.increment_usage(favourite_id, used_at=datetime.now(tz=UTC))
        return record

    def _get(self, favourite_id: str) -> FavouriteFood:
        favourite = self.repository.get_favourite(favourite_id)
        if favourite is None:
            raise FavouriteNotFoundError(favourite_id)
        return favourite

    @staticmethod
    def _rank(items: list[FavouriteFood]) -> list[FavouriteFood]:
        """Rank favourites by recent use then frequency."""
        return sorted(
            items,
            key=lambda item: (
                item.last_used_at or datetime.min.replace(tzinfo=UTC),
                item.use_count,
            ),
            reverse=True,
        )
