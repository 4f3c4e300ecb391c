"""Domain models for users."""

from dataclasses import dataclass
from uuid import UUID


@dataclass(frozen=True)
class UserProfile:
    """Represents a user's calorie settings stored in the database."""

    id: UUID
    daily_calorie_goal: int
    timezone: str
