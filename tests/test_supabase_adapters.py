"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest
from postgrest import SyncPostgrestClient, SyncSelectRequestBuilder

from snacktrack.adapters.supabase_favourites_repository import (
    SupabaseFavouritesRepository,
)
from snacktrack.adapters.supabase_food_log_repository import SupabaseFoodLogRepository
from snacktrack.adapters.supabase_profile_repository import (
    SupabaseGoalsRepository,
    SupabaseProfileRepository,
)
from snacktrack.domain.food import FoodDraft, FoodLogRecord, MealType
from snacktrack.domain.profile import DailyGoals, WeightGoal, default_profile
from snacktrack.domain.stats import CalorieRow


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, str, object]] = field(default_factory=list)
    orderings: list[tuple[str, bool, bool | None]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        self.last_filters = []
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        self.last_filters = []
        return self

    def upsert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self.last_filters = []
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("eq", column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("gte", column, value))
        return self

    def lt(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append(("lt", column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(
        self, column: str, desc: bool = False, nullsfirst: bool | None = None
    ) -> "FakeTable":
        self.orderings.append((column, desc, nullsfirst))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def _food_row(**changes: object) -> dict[str, object]:
    return {
        "id": "f-1",
        "name": "Apple",
        "description": "",
        "calories": 95,
        "protein": 0.5,
        "carbs": 25,
        "fat": 0.3,
        "timestamp": 1704283200000,
        "meal_type": "snack",
        **changes,
    }


def test_supabase_profile_repository_roundtrip() -> None:
    client = FakeSupabaseClient()
    table = client.table("user_profile")
    repository = SupabaseProfileRepository(client)

    assert repository.get_profile() is None

    profile = default_profile(1704283200000).with_changes(
        {"weight_goal": WeightGoal.GAIN}
    )
    repository.save_profile(profile)
    table.queue("select", [dict(table.last_payload)])

    assert table.last_payload["id"] == 1
    assert table.last_payload["weight_goal"] == "gain"
    assert repository.get_profile() == profile
    assert table.last_filters == [("eq", "id", 1)]


def test_supabase_goals_repository() -> None:
    client = FakeSupabaseClient()
    table = client.table("daily_goals")
    repository = SupabaseGoalsRepository(client)
    goals = DailyGoals(calorie_goal=1800, protein_goal=110, carbs_goal=190, fat_goal=55)

    repository.save_goals(goals)
    table.queue("select", [dict(table.last_payload)])

    assert repository.get_goals() == goals


def test_supabase_food_log_repository_records() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    repository = SupabaseFoodLogRepository(client)
    record = FoodLogRecord(
        id="f-1",
        name="Apple",
        calories=95,
        protein=0.5,
        carbs=25,
        fat=0.3,
        timestamp=1704283200000,
        meal_type=MealType.SNACK,
    )
    table.queue("insert", [_food_row()])
    table.queue("select", [_food_row()])

    repository.create_record(record)
    assert table.last_payload["meal_type"] == "snack"
    assert repository.get_record("f-1") == record

    repository.update_record(record)
    assert "id" not in table.last_payload
    assert table.last_filters == [("eq", "id", "f-1")]


def test_supabase_food_log_repository_ranges() -> None:
    client = FakeSupabaseClient()
    table = client.table("food_items")
    repository = SupabaseFoodLogRepository(client)
    table.queue("select", [_food_row(), _food_row(id="f-2", meal_type=None)])
    table.queue("delete", [{"id": "f-1"}, {"id": "f-2"}])
    table.queue("select", [{"timestamp": 1704283200000, "calories": 95}])

    records = repository.list_records(100, 200)
    assert table.last_filters == [("gte", "timestamp", 100), ("lt", "timestamp", 200)]
    assert [record.meal_type for record in records] == [MealType.SNACK] * 2

    assert repository.delete_records(100, 200) == 2

    rows = repository.list_calorie_rows()
    assert rows == [CalorieRow(timestamp=1704283200000, calories=95)]
    assert table.last_filters == []


def test_supabase_favourites_repository_usage() -> None:
    client = FakeSupabaseClient()
    table = client.table("favourites")
    repository = SupabaseFavouritesRepository(client)
    row = {
        "id": "fav-1",
        "name": "Shake",
        "calories": 220,
        "protein": 30,
        "carbs": 8,
        "fat": 4,
        "use_count": 2,
        "last_used_at": "2024-01-02T08:00:00+00:00",
    }
    table.queue("insert", [row])
    table.queue("select", [row])
    table.queue("select", [{"use_count": 2}])

    created = repository.create_favourite(
        FoodDraft(name="Shake", calories=220, protein=30, carbs=8, fat=4)
    )
    listed = repository.list_favourites(limit=5)
    used_at = datetime(2024, 1, 3, 12, tzinfo=UTC)
    repository.increment_usage("fav-1", used_at)

    assert created.use_count == 2
    assert listed[0].last_used_at == datetime(2024, 1, 2, 8, tzinfo=UTC)
    assert table.last_payload == {
        "use_count": 3,
        "last_used_at": used_at.isoformat(),
    }


def test_supabase_favourites_never_used_sort_last() -> None:
    client = FakeSupabaseClient()
    table = client.table("favourites")
    repository = SupabaseFavouritesRepository(client)

    repository.list_favourites(limit=20)

    assert table.orderings == [
        ("last_used_at", True, False),
        ("use_count", True, None),
    ]


@dataclass
class PostgrestBackedClient:
    postgrest: SyncPostgrestClient

    def table(self, name: str):  # type: ignore[no-untyped-def]
        return self.postgrest.from_(name)


def test_supabase_favourites_query_puts_nulls_last(
    monkeypatch: pytest.MonkeyPatch,
) -> None:
    captured: list[str] = []

    def fake_execute(self):  # type: ignore[no-untyped-def]
        captured.append(str(self.params))
        return FakeResponse(data=[])

    monkeypatch.setattr(SyncSelectRequestBuilder, "execute", fake_execute)
    client = PostgrestBackedClient(SyncPostgrestClient("http://localhost/rest/v1"))

    SupabaseFavouritesRepository(client).list_favourites(limit=20)

    assert "last_used_at.desc.nullslast" in captured[0]
