# -*- coding: utf-8 -*-
"""Analysis — Pydantic models."""

from __future__ import annotations

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field

DEFAULT_MEAL_TYPE = "Unspecified"
DEFAULT_DIET_GOAL = "General Health"


class MealType(str, Enum):
    breakfast = "Breakfast"
    lunch = "Lunch"
    dinner = "Dinner"
    snack = "Snack"
    unspecified = "Unspecified"


class DietGoal(str, Enum):
    weight_loss = "Weight Loss"
    muscle_gain = "Muscle Gain"
    keto_low_carb = "Keto / Low Carb"
    general_health = "General Health"


class AnalysisContext(BaseModel):
    """Advisory prompt context.

    Values are free text: the enums above list what the UI offers, but any
    string is accepted and embedded into the prompt as-is.
    """

    model_config = ConfigDict(frozen=True)

    meal_type: str = DEFAULT_MEAL_TYPE
    diet_goal: str = DEFAULT_DIET_GOAL

    @classmethod
    def from_form(cls, meal_type: Optional[str], diet_goal: Optional[str]) -> "AnalysisContext":
        return cls(
            meal_type=meal_type or DEFAULT_MEAL_TYPE,
            diet_goal=diet_goal or DEFAULT_DIET_GOAL,
        )


class NutritionRecord(BaseModel):
    """Documented shape of a successful reply (for the OpenAPI schema only)."""

    foodName: str = Field(..., description="Name of the food")
    calories: str = Field(..., description="e.g. '250 kcal'")
    proteins: str = Field(..., description="e.g. '10g'")
    carbs: str = Field(..., description="e.g. '30g'")
    fats: str = Field(..., description="e.g. '5g'")
    description: str = Field(..., description="One-sentence description")
    warnings: List[str] = Field(default_factory=list)
    healthierAlternatives: Optional[List[str]] = None


class ErrorResponse(BaseModel):
    error: str
