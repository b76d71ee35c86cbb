"""Supabase implementation for favourite foods."""

from dataclasses import dataclass
from datetime import datetime

from supabase import Client

from snacktrack.domain.food import FavouriteFood, FoodDraft
from snacktrack.services.favourites import FavouritesRepository

_TABLE = "favourites"


@dataclass
class SupabaseFavouritesRepository(FavouritesRepository):
    """Supabase-backed repository for favourite foods."""

    client: Client

    def create_favourite(self, draft: FoodDraft) -> FavouriteFood:
        """Create a favourite and return it."""
        response = (
            self.client.table(_TABLE)
            .insert(
                {
                    "name": draft.name,
                    "calories": draft.calories,
                    "protein": draft.protein,
                    "carbs": draft.carbs,
                    "fat": draft.fat,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create favourite")
        return _parse_favourite(response.data[0])

    def get_favourite(self, favourite_id: str) -> FavouriteFood | None:
        """Return a favourite by id, if present."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .eq("id", favourite_id)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_favourite(response.data[0])

    def list_favourites(self, limit: int) -> list[FavouriteFood]:
        """Return favourites ordered by recent use."""
        response = (
            self.client.table(_TABLE)
            .select("*")
            .order("last_used_at", desc=True, nullsfirst=False)
            .order("use_count", desc=True)
            .limit(limit)
            .execute()
        )
        return [_parse_favourite(row) for row in response.data or []]

    def delete_favourite(self, favourite_id: str) -> None:
        """Delete a favourite."""
        self.client.table(_TABLE).delete().eq("id", favourite_id).execute()

    def increment_usage(self, favourite_id: str, used_at: datetime) -> None:
        """Increment usage counters for a favourite."""
        response = (
            self.client.table(_TABLE)
            .select("use_count")
            .eq("id", favourite_id)
            .limit(1)
            .execute()
        )
        current = 0
        if response.data:
            current = int(response.data[0].get("use_count", 0))
        self.client.table(_TABLE).update(
            {"use_count": current + 1, "last_used_at": used_at.isoformat()}
        ).eq("id", favourite_id).execute()


def _parse_favourite(row: dict[str, object]) -> FavouriteFood:
    """Parse a favourites row into a domain model."""
    last_used_raw = row.get("last_used_at")
    last_used_at = (
        datetime.fromisoformat(last_used_raw)
        if isinstance(last_used_raw, str) and last_used_raw
        else None
    )
    return FavouriteFood(
        id=str(row["id"]),
        name=str(row.get("name", "")),
        calories=int(row.get("calories") or 0),
        protein=float(row.get("protein") or 0.0),
        carbs=float(row.get("carbs") or 0.0),
        fat=float(row.get("fat") or 0.0),
        use_count=int(row.get("use_count") or 0),
        last_used_at=last_used_at,
    )
