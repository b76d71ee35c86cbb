"""Tests for profile service."""

from datetime import UTC, datetime

import pytest

from snacktrack.domain.profile import (
    DailyGoals,
    WeightGoal,
    default_profile,
)
from snacktrack.services.goals import GoalsService
from snacktrack.services.profile import ProfileService
from tests.conftest import (
    NOW,
    InMemoryGoalsRepository,
    InMemoryProfileRepository,
    fixed_clock,
    ms,
)


def _service(
    moment: datetime = NOW,
) -> tuple[ProfileService, InMemoryProfileRepository, InMemoryGoalsRepository]:
    profiles = InMemoryProfileRepository()
    goals = InMemoryGoalsRepository()
    service = ProfileService(
        repository=profiles,
        goals_service=GoalsService(goals),
        clock=fixed_clock(moment),
    )
    return service, profiles, goals


def test_get_profile_creates_default_once() -> None:
    service, profiles, _ = _service()

    profile = service.get_profile()
    service.get_profile()

    assert profile == default_profile(ms(NOW))
    assert profile.onboarding_completed is False
    assert profiles.saves == 1


def test_update_profile_applies_partial_changes() -> None:
    service, profiles, _ = _service()
    service.get_profile()

    updated = service.update_profile(
        {"weight_kg": 82.5, "weight_goal": WeightGoal.LOSE}
    )

    assert updated.weight_kg == 82.5
    assert updated.weight_goal == WeightGoal.LOSE
    assert updated.age == 25
    assert profiles.profile == updated


def test_update_profile_rejects_unknown_fields() -> None:
    service, _, _ = _service()

    with pytest.raises(ValueError, match="created_at"):
        service.update_profile({"created_at": 1})
    with pytest.raises(ValueError, match="nickname"):
        service.update_profile({"nickname": "sam"})


def test_complete_onboarding_stores_goals() -> None:
    service, profiles, goals = _service()

    profile, calculated = service.complete_onboarding()

    assert profile.onboarding_completed is True
    assert profiles.profile == profile
    assert calculated.calorie_goal == 2547
    assert goals.goals == DailyGoals(
        calorie_goal=2547, protein_goal=112, carbs_goal=349, fat_goal=78
    )


def test_preview_does_not_store_goals() -> None:
    service, _, goals = _service()
    service.update_profile({"weight_goal": WeightGoal.GAIN})

    preview = service.preview_goals()

    assert preview.calorie_goal == 3047
    assert goals.goals is None

    service.recalculate_goals()

    assert goals.goals == preview.to_daily_goals()


def test_reset_profile_keeps_created_at() -> None:
    created = datetime(2023, 12, 1, tzinfo=UTC)
    service, profiles, _ = _service(created)
    service.get_profile()
    service.update_profile({"age": 41, "onboarding_completed": True})

    later, _, _ = _service()
    later.repository = profiles
    reset = later.reset_profile()

    assert reset.age == 25
    assert reset.onboarding_completed is False
    assert reset.created_at == ms(created)
    assert reset.updated_at == ms(NOW)
