"""Domain models for meal logging."""

from dataclasses import dataclass
from datetime import datetime
from enum import StrEnum
from uuid import UUID


class DetectionMethod(StrEnum):
    """How a meal's name and calories were obtained."""

    MANUAL = "manual"
    AI_IMAGE = "ai_image"


@dataclass(frozen=True)
class MealRecord:
    """A persisted meal owned by one user."""

    id: UUID
    user_id: UUID
    name: str
    calorie_count: int
    detection_method: DetectionMethod
    confidence: int | None
    timestamp: datetime
    notes: str = ""

    @property
    def is_ai_detected(self) -> bool:
        """Return True when the meal came from image recognition."""
        return self.detection_method is DetectionMethod.AI_IMAGE


@dataclass(frozen=True)
class NewMeal:
    """Validated meal data ready to be persisted."""

    user_id: UUID
    name: str
    calorie_count: int
    detection_method: DetectionMethod
    confidence: int | None
    timestamp: datetime
    notes: str = ""


@dataclass(frozen=True)
class MealChanges:
    """Editable meal fields; None means leave unchanged."""

    name: str | None = None
    calorie_count: int | None = None
    notes: str | None = None


@dataclass(frozen=True)
class DaySummary:
    """Meals and calorie total for one calendar day."""

    date: str
    meals: list[MealRecord]
    total_calories: int


@dataclass(frozen=True)
class DailyProgress:
    """A day's meals compared against the user's goal."""

    date: str
    meals: list[MealRecord]
    total_calories: int
    daily_goal: int
    remaining_calories: int
    progress_fraction: float
