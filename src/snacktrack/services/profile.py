"""Profile lifecycle for the single user of an installation."""

import logging
from dataclasses import dataclass, fields
from typing import Protocol

from snacktrack.domain.profile import NutritionGoals, UserProfile, default_profile
from snacktrack.services.clock import LocalCalendarClock
from snacktrack.services.goals import GoalsService, calculate_nutrition_goals

_IMMUTABLE_FIELDS = {"created_at", "updated_at"}
UPDATABLE_FIELDS = frozenset(
    field.name for field in fields(UserProfile) if field.name not in _IMMUTABLE_FIELDS
)

_logger = logging.getLogger(__name__)


class ProfileRepository(Protocol):
    """Persistence interface for the singleton profile."""

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if created."""

    def save_profile(self, profile: UserProfile) -> None:
        """Create or replace the stored profile."""


@dataclass
class ProfileService:
    """Service for reading and editing the profile."""

    repository: ProfileRepository
    goals_service: GoalsService
    clock: LocalCalendarClock

    def get_profile(self) -> UserProfile:
        """Return the profile, creating the default one on first access."""
        existing = self.repository.get_profile()
        if existing is not None:
            return existing
        created = default_profile(self.clock.now_ms())
        self.repository.save_profile(created)
        _logger.info("Created default profile")
        return created

    def update_profile(self, changes: dict[str, object]) -> UserProfile:
        """Apply a partial update to the profile."""
        unknown = set(changes) - UPDATABLE_FIELDS
        if unknown:
            raise ValueError(f"Unknown profile fields: {', '.join(sorted(unknown))}")
        updated = self.get_profile().with_changes(
            {**changes, "updated_at": self.clock.now_ms()}
        )
        self.repository.save_profile(updated)
        return updated

    def complete_onboarding(self) -> tuple[UserProfile, NutritionGoals]:
        """Mark onboarding done and store goals derived from the profile."""
        profile = self.update_profile({"onboarding_completed": True})
        return profile, self.goals_service.recalculate(profile)

    def reset_profile(self) -> UserProfile:
        """Restore default values, keeping the creation time."""
        current = self.get_profile()
        now_ms = self.clock.now_ms()
        reset = default_profile(now_ms).with_changes({"created_at": current.created_at})
        self.repository.save_profile(reset)
        _logger.info("Reset profile to defaults")
        return reset

    def preview_goals(self) -> NutritionGoals:
        """Calculate goals for the current profile without storing them."""
        return calculate_nutrition_goals(self.get_profile())

    def recalculate_goals(self) -> NutritionGoals:
        """Store goals derived from the current profile."""
        return self.goals_service.recalculate(self.get_profile())
