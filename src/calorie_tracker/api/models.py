"""Pydantic models for API request bodies."""

from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field


class ManualMealRequest(BaseModel):
    """Body for logging a meal by hand."""

    model_config = ConfigDict(populate_by_name=True)

    meal_name: str | None = Field(default=None, alias="mealName")
    calories: int | None = None
    notes: str | None = None
    date_eaten: datetime | None = Field(default=None, alias="dateEaten")


class ConfirmedMealRequest(BaseModel):
    """Body for saving a reviewed recognition result."""

    model_config = ConfigDict(populate_by_name=True)

    meal_name: str | None = Field(default=None, alias="mealName")
    calories: int | None = None
    confidence: int | None = None
    date_eaten: datetime | None = Field(default=None, alias="dateEaten")


class MealUpdateRequest(BaseModel):
    """Body for editing a meal; omitted fields stay unchanged."""

    model_config = ConfigDict(populate_by_name=True)

    meal_name: str | None = Field(default=None, alias="mealName")
    calories: int | None = None
    notes: str | None = None


class GoalUpdateRequest(BaseModel):
    """Body for changing the daily calorie goal."""

    model_config = ConfigDict(populate_by_name=True)

    daily_calorie_goal: int | None = Field(default=None, alias="dailyCalorieGoal")


class TimezoneUpdateRequest(BaseModel):
    """Body for changing the user's timezone."""

    timezone: str
