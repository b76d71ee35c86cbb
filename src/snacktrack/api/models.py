"""Pydantic models for API request bodies."""

from pydantic import BaseModel, ConfigDict, Field

from snacktrack.domain.food import FoodDraft, MealType
from snacktrack.domain.profile import (
    ActivityLevel,
    DailyGoals,
    EatingType,
    Gender,
    GoalAggressiveness,
    HeightUnit,
    WeightGoal,
    WeightUnit,
)


class ProfileUpdate(BaseModel):
    """Partial profile update; omitted fields are left unchanged."""

    model_config = ConfigDict(extra="forbid")

    gender: Gender | None = None
    age: int | None = Field(default=None, gt=0, le=120)
    height_cm: float | None = Field(default=None, gt=0, le=300)
    weight_kg: float | None = Field(default=None, gt=0, le=500)
    target_weight_kg: float | None = Field(default=None, gt=0, le=500)
    height_unit: HeightUnit | None = None
    weight_unit: WeightUnit | None = None
    activity_level: ActivityLevel | None = None
    weight_goal: WeightGoal | None = None
    goal_aggressiveness: GoalAggressiveness | None = None
    eating_type: EatingType | None = None
    onboarding_completed: bool | None = None

    def changes(self) -> dict[str, object]:
        """Return only the fields the client sent."""
        return self.model_dump(exclude_unset=True, exclude_none=True)


class GoalsUpdate(BaseModel):
    """Goals entered by the user directly."""

    calorie_goal: int = Field(ge=0)
    protein_goal: int = Field(ge=0)
    carbs_goal: int = Field(ge=0)
    fat_goal: int = Field(ge=0)

    def to_goals(self) -> DailyGoals:
        return DailyGoals(**self.model_dump())


class FoodIn(BaseModel):
    """Food entry values."""

    name: str = Field(min_length=1)
    calories: int = Field(ge=0)
    protein: float = Field(ge=0)
    carbs: float = Field(ge=0)
    fat: float = Field(ge=0)
    meal_type: MealType | None = None
    description: str = ""
    timestamp: int | None = Field(default=None, ge=0, description="Epoch ms")

    def to_draft(self) -> FoodDraft:
        return FoodDraft(
            name=self.name,
            calories=self.calories,
            protein=self.protein,
            carbs=self.carbs,
            fat=self.fat,
            meal_type=self.meal_type,
            description=self.description,
        )


class FavouriteLogRequest(BaseModel):
    """Options for logging a favourite."""

    meal_type: MealType | None = None
    timestamp: int | None = Field(default=None, ge=0, description="Epoch ms")


class TextAnalysisRequest(BaseModel):
    """Free-text food description."""

    description: str = Field(min_length=1, max_length=500)


class PhotoAnalysisRequest(BaseModel):
    """Base64-encoded food photo."""

    image_base64: str = Field(min_length=1)
