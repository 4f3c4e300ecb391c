"""Profile endpoints for the authenticated user."""

from fastapi import APIRouter, Depends

from calorie_tracker.api.dependencies import get_container, require_user
from calorie_tracker.api.models import GoalUpdateRequest, TimezoneUpdateRequest
from calorie_tracker.api.serializers import serialize_user
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.models import UserProfile

router = APIRouter(prefix="/api/auth", tags=["auth"])


@router.get("/me")
async def me(user: UserProfile = Depends(require_user)) -> dict[str, object]:
    """Return the caller's profile."""
    return {"success": True, "user": serialize_user(user)}


@router.put("/update-goal")
async def update_goal(
    body: GoalUpdateRequest,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change the caller's daily calorie goal."""
    updated = container.user_service.update_goal(user, body.daily_calorie_goal)
    return {
        "success": True,
        "message": "Daily goal updated.",
        "dailyCalorieGoal": updated.daily_calorie_goal,
    }


@router.put("/timezone")
async def update_timezone(
    body: TimezoneUpdateRequest,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Change the timezone used for day boundaries."""
    updated = container.user_service.set_timezone(user, body.timezone)
    return {"success": True, "timezone": updated.timezone}
