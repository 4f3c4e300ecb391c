"""Meal logging service."""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from calorie_tracker.domain.days import logical_day_anchor
from calorie_tracker.domain.meals import (
    DetectionMethod,
    MealChanges,
    MealRecord,
    NewMeal,
)
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.domain.recognition import FoodAnalysis
from calorie_tracker.errors import AuthorizationError, NotFoundError, ValidationError
from calorie_tracker.services.recognition import RecognitionService

MAX_CONFIDENCE = 100

_logger = logging.getLogger(__name__)


class MealRepository(Protocol):
    """Persistence interface for meals."""

    def create_meal(self, meal: NewMeal) -> MealRecord:
        """Persist a meal and return the stored record."""

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return a user's meals with start <= timestamp <= end, newest first."""

    def update_meal(self, meal_id: UUID, changes: MealChanges) -> MealRecord | None:
        """Apply changes to a meal and return the updated record."""

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal by id."""


@dataclass
class MealService:
    """Service that validates and persists meals for their owners."""

    repository: MealRepository
    recognition_service: RecognitionService

    def log_manual(  # noqa: PLR0913
        self,
        user: UserProfile,
        name: str | None,
        calorie_count: int | None,
        notes: str | None = None,
        eaten_at: datetime | None = None,
        now: datetime | None = None,
    ) -> MealRecord:
        """Validate and save a manually entered meal."""
        meal = NewMeal(
            user_id=user.id,
            name=_require_name(name),
            calorie_count=_require_calories(calorie_count),
            detection_method=DetectionMethod.MANUAL,
            confidence=None,
            timestamp=_resolve_timestamp(user, eaten_at, now),
            notes=(notes or "").strip(),
        )
        return self.repository.create_meal(meal)

    def log_ai_confirmed(  # noqa: PLR0913
        self,
        user: UserProfile,
        name: str | None,
        calorie_count: int | None,
        confidence: int | None,
        eaten_at: datetime | None = None,
        now: datetime | None = None,
    ) -> MealRecord:
        """Save a meal whose recognition result the user reviewed."""
        if confidence is not None and not 0 <= confidence <= MAX_CONFIDENCE:
            raise ValidationError("Confidence must be between 0 and 100.")
        meal = NewMeal(
            user_id=user.id,
            name=_require_name(name),
            calorie_count=_require_calories(calorie_count),
            detection_method=DetectionMethod.AI_IMAGE,
            confidence=confidence,
            timestamp=_resolve_timestamp(user, eaten_at, now),
        )
        return self.repository.create_meal(meal)

    async def identify(self, image_bytes: bytes) -> FoodAnalysis:
        """Recognize the food in an image without saving anything."""
        return await self.recognition_service.identify(image_bytes)

    async def analyze_and_save(
        self, user: UserProfile, image_bytes: bytes
    ) -> tuple[MealRecord, FoodAnalysis]:
        """Recognize the food in an image and save it as a meal eaten now."""
        analysis = await self.recognition_service.identify(image_bytes)
        meal = self.repository.create_meal(
            NewMeal(
                user_id=user.id,
                name=analysis.food_name,
                calorie_count=analysis.calories,
                detection_method=DetectionMethod.AI_IMAGE,
                confidence=analysis.confidence,
                timestamp=datetime.now(tz=UTC),
            )
        )
        return meal, analysis

    def get_owned_meal(self, user: UserProfile, meal_id: UUID) -> MealRecord:
        """Return a meal after checking it exists and belongs to the user."""
        meal = self.repository.get_meal(meal_id)
        if meal is None:
            raise NotFoundError("Meal not found.")
        if meal.user_id != user.id:
            _logger.warning(
                "Rejected access to meal %s by user %s", meal_id, user.id
            )
            raise AuthorizationError("You are not allowed to modify this meal.")
        return meal

    def update_meal(
        self, user: UserProfile, meal_id: UUID, changes: MealChanges
    ) -> MealRecord:
        """Apply an edit to a meal owned by the user."""
        current = self.get_owned_meal(user, meal_id)
        normalized = MealChanges(
            name=(changes.name or "").strip() or None,
            calorie_count=(
                _require_calories(changes.calorie_count)
                if changes.calorie_count is not None
                else None
            ),
            notes=changes.notes,
        )
        if normalized == MealChanges():
            return current
        updated = self.repository.update_meal(meal_id, normalized)
        if updated is None:
            raise NotFoundError("Meal not found.")
        return updated

    def delete_meal(self, user: UserProfile, meal_id: UUID) -> None:
        """Delete a meal owned by the user."""
        self.get_owned_meal(user, meal_id)
        self.repository.delete_meal(meal_id)


def _require_name(name: str | None) -> str:
    cleaned = (name or "").strip()
    if not cleaned:
        raise ValidationError("Meal name and calories are required.")
    return cleaned


def _require_calories(calorie_count: int | None) -> int:
    if calorie_count is None:
        raise ValidationError("Meal name and calories are required.")
    if calorie_count < 0:
        raise ValidationError("Calories must be a positive number.")
    return int(calorie_count)


def _resolve_timestamp(
    user: UserProfile, eaten_at: datetime | None, now: datetime | None
) -> datetime:
    """Return the stored timestamp for a new meal.

    Explicit times are kept as given (naive values are read as UTC); a meal
    logged "now" is pinned to its logical day in the user's timezone.
    """
    if eaten_at is not None:
        if eaten_at.tzinfo is None:
            return eaten_at.replace(tzinfo=UTC)
        return eaten_at.astimezone(UTC)
    local_now = (now or datetime.now(tz=UTC)).astimezone(ZoneInfo(user.timezone))
    return logical_day_anchor(local_now)
