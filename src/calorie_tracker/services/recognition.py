"""Food recognition from meal photos."""

import logging
from dataclasses import dataclass
from typing import Protocol

from calorie_tracker.domain.recognition import ClassifierResult, FoodAnalysis

DEFAULT_CALORIES = 250

# Order matters: the first key found in the label wins.
CALORIE_TABLE: dict[str, int] = {
    "pizza": 285,
    "burger": 540,
    "sandwich": 350,
    "salad": 150,
    "pasta": 400,
    "rice": 206,
    "chicken": 165,
    "fish": 206,
    "bread": 265,
    "apple": 95,
    "banana": 105,
    "orange": 62,
    "egg": 155,
    "milk": 149,
    "cheese": 402,
    "yogurt": 100,
    "cake": 350,
    "ice cream": 207,
    "chocolate": 546,
    "coffee": 2,
    "tea": 2,
    "juice": 112,
    "soda": 140,
    "water": 0,
    "soup": 86,
    "fries": 312,
    "hotdog": 290,
    "taco": 226,
    "sushi": 200,
    "steak": 271,
}

FALLBACK_ANALYSIS = FoodAnalysis(food_name="unrecognized", calories=200, confidence=0)

_logger = logging.getLogger(__name__)


class ClassifierClient(Protocol):
    """Interface for image classification backends."""

    async def classify(self, image_bytes: bytes) -> dict[str, object]:
        """Return the top label and its confidence percentage."""


def estimate_calories(label: str) -> int:
    """Estimate calories for a food label from the static table."""
    label_lower = label.lower()
    for key, calories in CALORIE_TABLE.items():
        if key in label_lower:
            return calories
    return DEFAULT_CALORIES


@dataclass
class RecognitionService:
    """Identifies food in images, degrading to a fallback on upstream errors."""

    client: ClassifierClient

    async def identify(self, image_bytes: bytes) -> FoodAnalysis:
        """Classify an image and estimate its calories."""
        try:
            raw = await self.client.classify(image_bytes)
            result = ClassifierResult.model_validate(raw)
        except Exception:
            _logger.exception("Food classification failed, using fallback")
            return FALLBACK_ANALYSIS
        return FoodAnalysis(
            food_name=result.label,
            calories=estimate_calories(result.label),
            confidence=result.confidence_percent,
        )
