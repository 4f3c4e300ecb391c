"""Supabase repository for meals."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.meals import (
    DetectionMethod,
    MealChanges,
    MealRecord,
    NewMeal,
)
from calorie_tracker.services.meals import MealRepository

_COLUMNS = (
    "id, user_id, name, calorie_count, detection_method, confidence, eaten_at, notes"
)


@dataclass
class SupabaseMealRepository(MealRepository):
    """Supabase implementation for meals."""

    client: Client

    def create_meal(self, meal: NewMeal) -> MealRecord:
        """Insert a meal row and return it."""
        response = (
            self.client.table("meals")
            .insert(
                {
                    "user_id": str(meal.user_id),
                    "name": meal.name,
                    "calorie_count": meal.calorie_count,
                    "detection_method": meal.detection_method.value,
                    "confidence": meal.confidence,
                    "eaten_at": meal.timestamp.isoformat(),
                    "notes": meal.notes,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create meal")
        return _parse_row(response.data[0])

    def get_meal(self, meal_id: UUID) -> MealRecord | None:
        """Return a meal by id."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("id", str(meal_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def list_meals(
        self, user_id: UUID, start: datetime, end: datetime
    ) -> list[MealRecord]:
        """Return a user's meals in the inclusive time range, newest first."""
        response = (
            self.client.table("meals")
            .select(_COLUMNS)
            .eq("user_id", str(user_id))
            .gte("eaten_at", start.isoformat())
            .lte("eaten_at", end.isoformat())
            .order("eaten_at", desc=True)
            .execute()
        )
        return [_parse_row(row) for row in response.data or []]

    def update_meal(self, meal_id: UUID, changes: MealChanges) -> MealRecord | None:
        """Update the editable columns that changed."""
        payload: dict[str, object] = {}
        if changes.name is not None:
            payload["name"] = changes.name
        if changes.calorie_count is not None:
            payload["calorie_count"] = changes.calorie_count
        if changes.notes is not None:
            payload["notes"] = changes.notes
        response = (
            self.client.table("meals").update(payload).eq("id", str(meal_id)).execute()
        )
        if not response.data:
            return None
        return _parse_row(response.data[0])

    def delete_meal(self, meal_id: UUID) -> None:
        """Delete a meal row."""
        self.client.table("meals").delete().eq("id", str(meal_id)).execute()


def _parse_row(row: dict[str, object]) -> MealRecord:
    eaten_at = datetime.fromisoformat(str(row["eaten_at"]))
    if eaten_at.tzinfo is None:
        eaten_at = eaten_at.replace(tzinfo=UTC)
    confidence = row.get("confidence")
    return MealRecord(
        id=UUID(str(row["id"])),
        user_id=UUID(str(row["user_id"])),
        name=str(row.get("name", "")),
        calorie_count=int(row.get("calorie_count") or 0),
        detection_method=DetectionMethod(row.get("detection_method") or "manual"),
        confidence=int(confidence) if confidence is not None else None,
        timestamp=eaten_at,
        notes=str(row.get("notes") or ""),
    )
