"""Supabase-backed user profile repository."""

from dataclasses import dataclass
from datetime import UTC, datetime
from uuid import UUID

from supabase import Client

from calorie_tracker.domain.models import UserProfile
from calorie_tracker.services.users import UserRepository


@dataclass
class SupabaseUserRepository(UserRepository):
    """Supabase implementation for user profiles."""

    client: Client

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""
        response = (
            self.client.table("user_profiles")
            .select("user_id, daily_calorie_goal, timezone")
            .eq("user_id", str(user_id))
            .limit(1)
            .execute()
        )
        if response.data:
            return _parse_profile(response.data[0])
        return None

    def create_profile(
        self, user_id: UUID, daily_calorie_goal: int, timezone: str
    ) -> UserProfile:
        """Create a profile row and return it."""
        response = (
            self.client.table("user_profiles")
            .insert(
                {
                    "user_id": str(user_id),
                    "daily_calorie_goal": daily_calorie_goal,
                    "timezone": timezone,
                }
            )
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create user profile in Supabase")
        return _parse_profile(response.data[0])

    def update_goal(self, user_id: UUID, daily_calorie_goal: int) -> None:
        """Update the daily calorie goal."""
        self.client.table("user_profiles").update(
            {
                "daily_calorie_goal": daily_calorie_goal,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("user_id", str(user_id)).execute()

    def update_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""
        self.client.table("user_profiles").update(
            {
                "timezone": timezone,
                "updated_at": datetime.now(tz=UTC).isoformat(),
            }
        ).eq("user_id", str(user_id)).execute()


def _parse_profile(row: dict[str, object]) -> UserProfile:
    return UserProfile(
        id=UUID(str(row["user_id"])),
        daily_calorie_goal=int(row.get("daily_calorie_goal") or 2000),
        timezone=str(row.get("timezone") or "UTC"),
    )
