"""Nutrition goal calculation and persistence.

The calculation pipeline is profile -> BMR -> TDEE -> calorie goal -> macro
split. Every step is a pure function. Rounding is half-up, so ``x.5`` always
rounds towards the larger integer.
"""

import logging
import math
from dataclasses import dataclass
from typing import Protocol

from snacktrack.domain.profile import (
    DEFAULT_DAILY_GOALS,
    ActivityLevel,
    DailyGoals,
    EatingType,
    Gender,
    GoalAggressiveness,
    NutritionGoals,
    UserProfile,
    WeightGoal,
)

MIN_CALORIE_GOAL = 1200
FAT_CALORIE_SHARE = 0.275
KCAL_PER_G_PROTEIN = 4
KCAL_PER_G_CARBS = 4
KCAL_PER_G_FAT = 9

ACTIVITY_MULTIPLIERS: dict[ActivityLevel, float] = {
    ActivityLevel.SEDENTARY: 1.2,
    ActivityLevel.LIGHTLY_ACTIVE: 1.375,
    ActivityLevel.MODERATELY_ACTIVE: 1.55,
    ActivityLevel.VERY_ACTIVE: 1.725,
    ActivityLevel.EXTREMELY_ACTIVE: 1.9,
}

# kcal/day; roughly 0.25, 0.5 and 1 kg per week.
CALORIE_ADJUSTMENTS: dict[GoalAggressiveness, int] = {
    GoalAggressiveness.SLOW: 250,
    GoalAggressiveness.MODERATE: 500,
    GoalAggressiveness.FAST: 1000,
}

# g of protein per kg of body weight.
_BASE_PROTEIN_MULTIPLIERS: dict[EatingType, float] = {
    EatingType.LIGHT: 1.4,
    EatingType.NORMAL: 1.6,
    EatingType.HEAVY: 1.8,
}
_PROTEIN_GOAL_BONUS: dict[WeightGoal, float] = {
    WeightGoal.LOSE: 0.2,
    WeightGoal.MAINTAIN: 0.0,
    WeightGoal.GAIN: 0.4,
}

_CM_PER_INCH = 2.54
_LBS_PER_KG = 2.20462

_logger = logging.getLogger(__name__)


def round_half_up(value: float) -> int:
    """Round to the nearest integer with halves rounded up."""
    return math.floor(value + 0.5)


def calculate_bmr(gender: Gender, weight_kg: float, height_cm: float, age: int) -> int:
    """Return basal metabolic rate using the Mifflin-St Jeor equation."""
    bmr = 10 * weight_kg + 6.25 * height_cm - 5 * age
    if gender == Gender.FEMALE:
        bmr -= 161
    else:
        bmr += 5
    return round_half_up(bmr)


def calculate_tdee(bmr: int, activity_level: ActivityLevel) -> int:
    """Return total daily energy expenditure for an activity level."""
    return round_half_up(bmr * ACTIVITY_MULTIPLIERS[activity_level])


def calculate_calorie_goal(
    tdee: int, weight_goal: WeightGoal, aggressiveness: GoalAggressiveness
) -> int:
    """Return the daily calorie goal; losing weight never goes below 1200."""
    if weight_goal == WeightGoal.MAINTAIN:
        return tdee
    adjustment = CALORIE_ADJUSTMENTS[aggressiveness]
    if weight_goal == WeightGoal.LOSE:
        return max(MIN_CALORIE_GOAL, tdee - adjustment)
    return tdee + adjustment


def protein_multiplier(eating_type: EatingType, weight_goal: WeightGoal) -> float:
    """Return grams of protein per kg of body weight."""
    return _BASE_PROTEIN_MULTIPLIERS[eating_type] + _PROTEIN_GOAL_BONUS[weight_goal]


def calculate_nutrition_goals(profile: UserProfile) -> NutritionGoals:
    """Calculate BMR, TDEE and daily calorie/macro goals for a profile."""
    bmr = calculate_bmr(
        profile.gender, profile.weight_kg, profile.height_cm, profile.age
    )
    tdee = calculate_tdee(bmr, profile.activity_level)
    calorie_goal = calculate_calorie_goal(
        tdee, profile.weight_goal, profile.goal_aggressiveness
    )
    protein_goal = round_half_up(
        profile.weight_kg * protein_multiplier(profile.eating_type, profile.weight_goal)
    )
    fat_goal = round_half_up(calorie_goal * FAT_CALORIE_SHARE / KCAL_PER_G_FAT)
    remaining = (
        calorie_goal
        - protein_goal * KCAL_PER_G_PROTEIN
        - fat_goal * KCAL_PER_G_FAT
    )
    # Protein and fat can exceed the calorie goal for heavy, low-goal profiles.
    carbs_goal = max(0, round_half_up(remaining / KCAL_PER_G_CARBS))
    return NutritionGoals(
        bmr=bmr,
        tdee=tdee,
        calorie_goal=calorie_goal,
        protein_goal=protein_goal,
        carbs_goal=carbs_goal,
        fat_goal=fat_goal,
    )


def cm_to_feet_inches(cm: float) -> tuple[int, int]:
    """Convert centimetres to whole feet and rounded inches."""
    total_inches = cm / _CM_PER_INCH
    feet = math.floor(total_inches / 12)
    inches = round_half_up(total_inches % 12)
    return feet, inches


def feet_inches_to_cm(feet: int, inches: float) -> int:
    """Convert feet and inches to whole centimetres."""
    return round_half_up((feet * 12 + inches) * _CM_PER_INCH)


def kg_to_lbs(kg: float) -> float:
    """Convert kilograms to pounds with one decimal."""
    return round_half_up(kg * _LBS_PER_KG * 10) / 10


def lbs_to_kg(lbs: float) -> float:
    """Convert pounds to kilograms with one decimal."""
    return round_half_up(lbs / _LBS_PER_KG * 10) / 10


class GoalsRepository(Protocol):
    """Persistence interface for daily goals."""

    def get_goals(self) -> DailyGoals | None:
        """Return the stored goals, if any."""

    def save_goals(self, goals: DailyGoals) -> None:
        """Create or replace the stored goals."""


@dataclass
class GoalsService:
    """Service for reading, overriding and recalculating daily goals."""

    repository: GoalsRepository

    def get_goals(self) -> DailyGoals:
        """Return stored goals, falling back to defaults."""
        return self.repository.get_goals() or DEFAULT_DAILY_GOALS

    def update_goals(self, goals: DailyGoals) -> DailyGoals:
        """Store goals entered by the user directly."""
        self.repository.save_goals(goals)
        return goals

    def recalculate(self, profile: UserProfile) -> NutritionGoals:
        """Derive goals from the profile and store them."""
        calculated = calculate_nutrition_goals(profile)
        self.repository.save_goals(calculated.to_daily_goals())
        _logger.info(
            "Recalculated goals: calories=%s protein=%s carbs=%s fat=%s",
            calculated.calorie_goal,
            calculated.protein_goal,
            calculated.carbs_goal,
            calculated.fat_goal,
        )
        return calculated
