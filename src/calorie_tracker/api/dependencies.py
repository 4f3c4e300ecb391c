"""Shared FastAPI dependencies."""

from fastapi import Depends, Header, Request

from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserProfile


def get_container(request: Request) -> AppContainer:
    """Return the dependency container attached to the app."""
    return request.app.state.container


async def require_user(
    authorization: str | None = Header(default=None),
    container: AppContainer = Depends(get_container),
) -> UserProfile:
    """Resolve the Bearer token into the caller's profile."""
    return container.user_service.authenticate(_bearer_token(authorization))


def _bearer_token(header: str | None) -> str | None:
    if not header or not header.startswith("Bearer "):
        return None
    return header.removeprefix("Bearer ").strip() or None
