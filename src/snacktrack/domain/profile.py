"""Domain models for the user profile and nutrition goals."""

from dataclasses import dataclass, replace
from enum import StrEnum


class Gender(StrEnum):
    MALE = "male"
    FEMALE = "female"
    OTHER = "other"


class ActivityLevel(StrEnum):
    SEDENTARY = "sedentary"
    LIGHTLY_ACTIVE = "lightly_active"
    MODERATELY_ACTIVE = "moderately_active"
    VERY_ACTIVE = "very_active"
    EXTREMELY_ACTIVE = "extremely_active"


class WeightGoal(StrEnum):
    LOSE = "lose"
    MAINTAIN = "maintain"
    GAIN = "gain"


class GoalAggressiveness(StrEnum):
    SLOW = "slow"
    MODERATE = "moderate"
    FAST = "fast"


class EatingType(StrEnum):
    LIGHT = "light"
    NORMAL = "normal"
    HEAVY = "heavy"


class HeightUnit(StrEnum):
    CM = "cm"
    FT = "ft"


class WeightUnit(StrEnum):
    KG = "kg"
    LBS = "lbs"


@dataclass(frozen=True)
class UserProfile:
    """The single profile of an installation.

    Height and weights are always stored in metric units; the unit fields
    only record how the user prefers to see them.
    """

    gender: Gender
    age: int
    height_cm: float
    weight_kg: float
    target_weight_kg: float
    activity_level: ActivityLevel
    weight_goal: WeightGoal
    goal_aggressiveness: GoalAggressiveness
    eating_type: EatingType
    height_unit: HeightUnit = HeightUnit.CM
    weight_unit: WeightUnit = WeightUnit.KG
    onboarding_completed: bool = False
    created_at: int = 0
    updated_at: int = 0

    @property
    def is_gaining_weight(self) -> bool:
        """Return True when the profile aims to gain weight."""
        return self.weight_goal == WeightGoal.GAIN

    def with_changes(self, changes: dict[str, object]) -> "UserProfile":
        """Return a copy with the given fields replaced."""
        return replace(self, **changes)


def default_profile(now_ms: int = 0) -> UserProfile:
    """Return the profile used before onboarding has been completed."""
    return UserProfile(
        gender=Gender.MALE,
        age=25,
        height_cm=170.0,
        weight_kg=70.0,
        target_weight_kg=70.0,
        activity_level=ActivityLevel.MODERATELY_ACTIVE,
        weight_goal=WeightGoal.MAINTAIN,
        goal_aggressiveness=GoalAggressiveness.MODERATE,
        eating_type=EatingType.NORMAL,
        height_unit=HeightUnit.CM,
        weight_unit=WeightUnit.KG,
        onboarding_completed=False,
        created_at=now_ms,
        updated_at=now_ms,
    )


@dataclass(frozen=True)
class DailyGoals:
    """Daily calorie and macro targets."""

    calorie_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int


DEFAULT_DAILY_GOALS = DailyGoals(
    calorie_goal=2000, protein_goal=120, carbs_goal=250, fat_goal=65
)


@dataclass(frozen=True)
class NutritionGoals:
    """Calculated energy expenditure and the goals derived from it."""

    bmr: int
    tdee: int
    calorie_goal: int
    protein_goal: int
    carbs_goal: int
    fat_goal: int

    def to_daily_goals(self) -> DailyGoals:
        """Return the persisted subset of the calculation."""
        return DailyGoals(
            calorie_goal=self.calorie_goal,
            protein_goal=self.protein_goal,
            carbs_goal=self.carbs_goal,
            fat_goal=self.fat_goal,
        )
