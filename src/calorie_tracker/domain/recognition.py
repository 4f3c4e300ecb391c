"""Models for food image recognition results."""

from dataclasses import dataclass

from pydantic import BaseModel, Field


class ClassifierResult(BaseModel):
    """Top label returned by an image classifier."""

    label: str
    confidence_percent: int = Field(ge=0, le=100)


@dataclass(frozen=True)
class FoodAnalysis:
    """Recognized food with its estimated calories."""

    food_name: str
    calories: int
    confidence: int
