"""Supabase repositories for the singleton profile and daily goals."""

from dataclasses import dataclass

from supabase import Client

from snacktrack.domain.profile import (
    ActivityLevel,
    DailyGoals,
    EatingType,
    Gender,
    GoalAggressiveness,
    HeightUnit,
    UserProfile,
    WeightGoal,
    WeightUnit,
)
from snacktrack.services.goals import GoalsRepository
from snacktrack.services.profile import ProfileRepository

_SINGLETON_ID = 1


@dataclass
class SupabaseProfileRepository(ProfileRepository):
    """Supabase implementation for the user profile row."""

    client: Client

    def get_profile(self) -> UserProfile | None:
        """Return the stored profile, if created."""
        response = (
            self.client.table("user_profile")
            .select("*")
            .eq("id", _SINGLETON_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_profile(response.data[0])

    def save_profile(self, profile: UserProfile) -> None:
        """Create or replace the profile row."""
        self.client.table("user_profile").upsert(
            {
                "id": _SINGLETON_ID,
                "gender": profile.gender.value,
                "age": profile.age,
                "height_cm": profile.height_cm,
                "weight_kg": profile.weight_kg,
                "target_weight_kg": profile.target_weight_kg,
                "height_unit": profile.height_unit.value,
                "weight_unit": profile.weight_unit.value,
                "activity_level": profile.activity_level.value,
                "weight_goal": profile.weight_goal.value,
                "goal_aggressiveness": profile.goal_aggressiveness.value,
                "eating_type": profile.eating_type.value,
                "onboarding_completed": profile.onboarding_completed,
                "created_at": profile.created_at,
                "updated_at": profile.updated_at,
            }
        ).execute()


@dataclass
class SupabaseGoalsRepository(GoalsRepository):
    """Supabase implementation for the daily goals row."""

    client: Client

    def get_goals(self) -> DailyGoals | None:
        """Return the stored goals, if any."""
        response = (
            self.client.table("daily_goals")
            .select("calorie_goal, protein_goal, carbs_goal, fat_goal")
            .eq("id", _SINGLETON_ID)
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        row = response.data[0]
        return DailyGoals(
            calorie_goal=int(row["calorie_goal"]),
            protein_goal=int(row["protein_goal"]),
            carbs_goal=int(row["carbs_goal"]),
            fat_goal=int(row["fat_goal"]),
        )

    def save_goals(self, goals: DailyGoals) -> None:
        """Create or replace the goals row."""
        self.client.table("daily_goals").upsert(
            {
                "id": _SINGLETON_ID,
                "calorie_goal": goals.calorie_goal,
                "protein_goal": goals.protein_goal,
                "carbs_goal": goals.carbs_goal,
                "fat_goal": goals.fat_goal,
            }
        ).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        gender=Gender(row["gender"]),
        age=int(row["age"]),
        height_cm=float(row["height_cm"]),
        weight_kg=float(row["weight_kg"]),
        target_weight_kg=float(row["target_weight_kg"]),
        height_unit=HeightUnit(row.get("height_unit") or HeightUnit.CM),
        weight_unit=WeightUnit(row.get("weight_unit") or WeightUnit.KG),
        activity_level=ActivityLevel(row["activity_level"]),
        weight_goal=WeightGoal(row["weight_goal"]),
        goal_aggressiveness=GoalAggressiveness(row["goal_aggressiveness"]),
        eating_type=EatingType(row["eating_type"]),
        onboarding_completed=bool(row.get("onboarding_completed", False)),
        created_at=int(row.get("created_at") or 0),
        updated_at=int(row.get("updated_at") or 0),
    )
