"""User-related business logic."""

import logging
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID
from zoneinfo import ZoneInfo

from calorie_tracker.domain.models import UserProfile
from calorie_tracker.errors import AuthenticationError, ValidationError

MIN_DAILY_GOAL = 500
MAX_DAILY_GOAL = 10000

_logger = logging.getLogger(__name__)


class IdentityProvider(Protocol):
    """Resolves bearer tokens issued by the external auth provider."""

    def authenticate(self, token: str) -> UUID | None:
        """Return the user id for a valid token, otherwise None."""


class UserRepository(Protocol):
    """Persistence interface for user profiles."""

    def get_profile(self, user_id: UUID) -> UserProfile | None:
        """Return the profile for a user id, if present."""

    def create_profile(
        self, user_id: UUID, daily_calorie_goal: int, timezone: str
    ) -> UserProfile:
        """Create and return a new profile."""

    def update_goal(self, user_id: UUID, daily_calorie_goal: int) -> None:
        """Update the user's daily calorie goal."""

    def update_timezone(self, user_id: UUID, timezone: str) -> None:
        """Update the user's timezone."""


@dataclass
class UserService:
    """Application service for user lifecycle actions."""

    repository: UserRepository
    identity_provider: IdentityProvider
    default_daily_goal: int = 2000
    default_timezone: str = "UTC"

    def authenticate(self, token: str | None) -> UserProfile:
        """Resolve a bearer token into the caller's profile."""
        if not token:
            raise AuthenticationError("Missing access token. Please sign in.")
        user_id = self.identity_provider.authenticate(token)
        if user_id is None:
            raise AuthenticationError("Authentication failed. Please sign in again.")
        return self.ensure_user(user_id)

    def ensure_user(self, user_id: UUID) -> UserProfile:
        """Ensure a profile exists for the user and return it."""
        existing = self.repository.get_profile(user_id)
        if existing:
            return existing
        _logger.info("Creating profile for user %s", user_id)
        return self.repository.create_profile(
            user_id,
            daily_calorie_goal=self.default_daily_goal,
            timezone=self.default_timezone,
        )

    def update_goal(
        self, user: UserProfile, daily_calorie_goal: int | None
    ) -> UserProfile:
        """Validate and persist a new daily calorie goal."""
        if daily_calorie_goal is None or not (
            MIN_DAILY_GOAL <= daily_calorie_goal <= MAX_DAILY_GOAL
        ):
            raise ValidationError(
                f"Daily goal must be between {MIN_DAILY_GOAL} and {MAX_DAILY_GOAL}."
            )
        self.repository.update_goal(user.id, daily_calorie_goal)
        return UserProfile(
            id=user.id, daily_calorie_goal=daily_calorie_goal, timezone=user.timezone
        )

    def set_timezone(self, user: UserProfile, timezone: str) -> UserProfile:
        """Validate and persist the user's timezone."""
        name = timezone.strip()
        if not _is_valid_timezone(name):
            raise ValidationError("Please send a valid timezone like Asia/Jerusalem.")
        self.repository.update_timezone(user.id, name)
        return UserProfile(
            id=user.id, daily_calorie_goal=user.daily_calorie_goal, timezone=name
        )


def _is_valid_timezone(value: str) -> bool:
    if not value:
        return False
    try:
        ZoneInfo(value)
    except Exception:
        return False
    return True
