"""Models for AI nutrition estimates."""

from enum import StrEnum

from pydantic import BaseModel, Field


class EstimateSource(StrEnum):
    AI = "ai"
    HEURISTIC = "heuristic"


class FoodEstimate(BaseModel):
    """Estimated nutrition for a described or photographed food."""

    name: str
    calories: int = Field(ge=0)
    protein: int = Field(ge=0)
    carbs: int = Field(ge=0)
    fat: int = Field(ge=0)
    weight_g: int | None = Field(default=None, ge=0)
    source: EstimateSource = EstimateSource.AI


class TextEstimate(BaseModel):
    """Structured model output for a text description."""

    is_food: bool
    name: str
    calories: float
    protein: float
    carbs: float
    fat: float


class PhotoFood(BaseModel):
    """A single food detected in a photo."""

    name: str | None = None
    weight_g: float | None = None
    calories: float | None = None
    protein: float | None = None
    carbs: float | None = None
    fat: float | None = None


class PhotoEstimate(BaseModel):
    """Structured model output for a food photo."""

    foods: list[PhotoFood]
