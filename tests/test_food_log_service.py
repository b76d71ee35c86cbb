"""Tests for food log service."""

from datetime import UTC, datetime

import pytest

from snacktrack.domain.errors import FoodLogNotFoundError
from snacktrack.domain.food import FoodDraft, MealType
from snacktrack.domain.profile import DailyGoals
from snacktrack.services.food_log import FoodLogService, suggest_meal_type
from tests.conftest import NOW, InMemoryFoodLogRepository, fixed_clock, ms


def _service() -> tuple[FoodLogService, InMemoryFoodLogRepository]:
    repository = InMemoryFoodLogRepository()
    return FoodLogService(repository=repository, clock=fixed_clock()), repository


def _draft(name: str = "Oatmeal", calories: int = 300, **extra: object) -> FoodDraft:
    return FoodDraft(
        name=name, calories=calories, protein=10.5, carbs=50.2, fat=5.1, **extra
    )


@pytest.mark.parametrize(
    ("hour", "meal_type"),
    [
        (5, MealType.SNACK),
        (6, MealType.BREAKFAST),
        (9, MealType.BREAKFAST),
        (10, MealType.SNACK),
        (11, MealType.LUNCH),
        (13, MealType.LUNCH),
        (14, MealType.SNACK),
        (18, MealType.DINNER),
        (20, MealType.DINNER),
        (21, MealType.SNACK),
    ],
)
def test_suggest_meal_type(hour: int, meal_type: MealType) -> None:
    assert suggest_meal_type(hour) == meal_type


def test_add_food_defaults_to_now_and_suggested_meal() -> None:
    service, repository = _service()

    record = service.add_food(_draft())

    assert record.timestamp == ms(NOW)
    assert record.meal_type == MealType.LUNCH
    assert repository.records[record.id] == record


def test_add_food_keeps_explicit_values() -> None:
    service, _ = _service()
    breakfast = ms(datetime(2024, 1, 2, 7, 30, tzinfo=UTC))

    record = service.add_food(_draft(meal_type=MealType.DINNER), breakfast)

    assert record.timestamp == breakfast
    assert record.meal_type == MealType.DINNER


def test_update_food_keeps_timestamp() -> None:
    service, _ = _service()
    original = service.add_food(_draft(), ms(datetime(2024, 1, 2, 7, tzinfo=UTC)))

    updated = service.update_food(original.id, _draft(name="Porridge", calories=350))

    assert updated.timestamp == original.timestamp
    assert updated.meal_type == original.meal_type
    assert service.get_food(original.id).name == "Porridge"


def test_missing_food_raises() -> None:
    service, _ = _service()

    with pytest.raises(FoodLogNotFoundError):
        service.get_food("missing")
    with pytest.raises(FoodLogNotFoundError):
        service.delete_food("missing")
    with pytest.raises(FoodLogNotFoundError):
        service.update_food("missing", _draft())


def test_list_and_clear_day() -> None:
    service, repository = _service()
    service.add_food(_draft("Yesterday"), ms(datetime(2024, 1, 2, 23, tzinfo=UTC)))
    late = service.add_food(_draft("Late"), ms(datetime(2024, 1, 3, 20, tzinfo=UTC)))
    early = service.add_food(_draft("Early"), ms(datetime(2024, 1, 3, 0, tzinfo=UTC)))

    assert service.list_day("2024-01-03") == [early, late]
    assert service.clear_day("2024-01-03") == 2
    assert [record.name for record in repository.records.values()] == ["Yesterday"]


def test_history_returns_newest_first() -> None:
    service, _ = _service()
    first = service.add_food(_draft("First"), ms(datetime(2024, 1, 1, 9, tzinfo=UTC)))
    second = service.add_food(_draft("Second"))

    assert service.history(limit=1) == [second]
    assert service.history() == [second, first]


def test_day_summary_totals_and_remaining() -> None:
    service, _ = _service()
    service.add_food(_draft(calories=300))
    service.add_food(_draft(calories=450))
    goals = DailyGoals(calorie_goal=2000, protein_goal=120, carbs_goal=250, fat_goal=65)

    summary = service.get_day_summary("2024-01-03", goals)

    assert len(summary.records) == 2
    assert summary.totals.calories == 750
    assert summary.totals.protein == 21.0
    assert summary.totals.carbs == 100.4
    assert summary.remaining.calories == 1250
    assert summary.remaining.carbs == 149.6
    assert summary.remaining.fat == 54.8
