"""Supabase repository for logged food and calorie statistics."""

from dataclasses import dataclass

from supabase import Client

from snacktrack.domain.food import FoodLogRecord, MealType
from snacktrack.domain.stats import CalorieRow
from snacktrack.services.food_log import FoodLogRepository
from snacktrack.services.stats import StatsRepository

_TABLE = "food_items"


@dataclass
class SupabaseFoodLogRepository(FoodLogRepository, StatsRepository):
    """Supabase implementation for the food_items table."""

    client: Client

    def create_record(self, record: FoodLogRecord) -> None:
        """Insert a new food row."""
        response = self.client.table(_TABLE).insert(_to_row(record)).execute()
        if not response.data:
            raise RuntimeError("Failed to create food log entry")

    def update_record(self, record: FoodLogRecord) -> None:
        """Update an existing food row."""
        payload = _to_row(record)
        payload.pop("id")
        self.client.table(_TABLE).update(payload).eq("id", record.id).execute()

    def get_record(self, record_id: str) -> FoodLogRecord | None:
        """Return a food row by id."""
        response = (
            self.client.table(_TABLE).select("*").eq("id", record_id).limit(1).execute()
        )
        if not response.data:
            return None
        return _parse_record(response.data[0])

    def delete_record(self, record_id: str) -> None:
        """Delete a food row."""
        self.client.table(_TABLE).delete().eq("id", record_id).execute()

    def list_records(self, start_ms: int, end_ms: int) -> list[FoodLogRecord]:
        """Return rows in the time range, oldest first."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .gte("timestamp", start_ms)
            .lt("timestamp", end_ms)
            .order("timestamp", desc=False)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]

    def list_recent_records(self, limit: int) -> list[FoodLogRecord]:
        """Return the newest rows."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("timestamp", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_record(row) for row in response.data or []]

    def delete_records(self, start_ms: int, end_ms: int) -> int:
        """Delete rows in the time range and return how many were removed."""
        response = (
            self.client.table(_TABLE)
            .delete()
            .gte("timestamp", start_ms)
            .lt("timestamp", end_ms)
            .execute()
        )
        return len(response.data or [])

    def list_calorie_rows(
        self, start_ms: int | None = None, end_ms: int | None = None
    ) -> list[CalorieRow]:
        """Return timestamp and calories of rows, optionally bounded."""
        query = self.client.table(_TABLE).select("timestamp, calories")
        if start_ms is not None:
            query = query.gte("timestamp", start_ms)
        if end_ms is not None:
            query = query.lt("timestamp", end_ms)
        response = query.order("timestamp", desc=False).execute()
        return [
            CalorieRow(
                timestamp=int(row["timestamp"]), calories=int(row.get("calories") or 0)
            )
            for row in response.data or []
        ]


def _to_row(record: FoodLogRecord) -> dict[str, object]:
    return {
        "id": record.id,
        "name": record.name,
        "description": record.description,
        "calories": record.calories,
        "protein": record.protein,
        "carbs": record.carbs,
        "fat": record.fat,
        "timestamp": record.timestamp,
        "meal_type": record.meal_type.value,
    }


def _parse_record(row: dict[str, object]) -> FoodLogRecord:
    return FoodLogRecord(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories") or 0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        timestamp=int(row["timestamp"]),
        meal_type=MealType(row.get("meal_type") or MealType.SNACK),
        description=str(row.get("description") or ""),
    )
