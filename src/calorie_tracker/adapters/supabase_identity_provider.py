"""Supabase Auth identity provider."""

import logging
from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from calorie_tracker.services.users import IdentityProvider

_logger = logging.getLogger(__name__)


@dataclass
class SupabaseIdentityProvider(IdentityProvider):
    """Validates access tokens against Supabase Auth."""

    client: Client

    def authenticate(self, token: str) -> UUID | None:
        """Return the Supabase user id for a valid access token."""
        try:
            response = self.client.auth.get_user(token)
        except Exception:
            _logger.warning("Rejected access token", exc_info=True)
            return None
        if response is None or response.user is None:
            return None
        return UUID(str(response.user.id))
