"""Meal logging and history endpoints."""

from datetime import date
from uuid import UUID

from fastapi import APIRouter, Depends, Query, status

from calorie_tracker.api.dependencies import get_container, require_user
from calorie_tracker.api.models import ManualMealRequest, MealUpdateRequest
from calorie_tracker.api.serializers import (
    serialize_day,
    serialize_meal,
    serialize_month,
    serialize_progress,
    serialize_selection,
)
from calorie_tracker.containers import AppContainer
from calorie_tracker.domain.meals import MealChanges
from calorie_tracker.domain.models import UserProfile

router = APIRouter(prefix="/api/meals", tags=["meals"])


@router.post("/manual", status_code=status.HTTP_201_CREATED)
async def add_manual_meal(
    body: ManualMealRequest,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Log a meal entered by hand."""
    meal = container.meal_service.log_manual(
        user,
        name=body.meal_name,
        calorie_count=body.calories,
        notes=body.notes,
        eaten_at=body.date_eaten,
    )
    return {"success": True, "message": "Meal added.", "meal": serialize_meal(meal)}


@router.get("/today")
async def today(
    logical: bool = False,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return today's meals, totals and remaining calories."""
    if logical:
        progress = container.history_service.get_logical_today(user)
    else:
        progress = container.history_service.get_today(user)
    return {"success": True, **serialize_progress(progress)}


@router.get("/history")
async def history(
    start_date: date | None = Query(default=None, alias="startDate"),
    end_date: date | None = Query(default=None, alias="endDate"),
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return meals grouped by day for a date range."""
    days = container.history_service.get_history(user, start_date, end_date)
    return {
        "success": True,
        "history": [serialize_day(day) for day in days],
        "totalDays": len(days),
    }


@router.get("/calendar")
async def calendar_month(
    year: int,
    month: int,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the 42-cell grid for a month."""
    grid = container.history_service.get_calendar(user, year, month)
    return {"success": True, **serialize_month(grid)}


@router.get("/calendar/{day}")
async def calendar_day(
    day: str,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Return the meals of a selected calendar day."""
    selection = container.history_service.get_day(user, day)
    return {"success": True, **serialize_selection(selection)}


@router.put("/{meal_id}")
async def update_meal(
    meal_id: UUID,
    body: MealUpdateRequest,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Edit the name, calories or notes of a meal."""
    meal = container.meal_service.update_meal(
        user,
        meal_id,
        MealChanges(
            name=body.meal_name, calorie_count=body.calories, notes=body.notes
        ),
    )
    return {"success": True, "message": "Meal updated.", "meal": serialize_meal(meal)}


@router.delete("/{meal_id}")
async def delete_meal(
    meal_id: UUID,
    user: UserProfile = Depends(require_user),
    container: AppContainer = Depends(get_container),
) -> dict[str, object]:
    """Delete a meal."""
    container.meal_service.delete_meal(user, meal_id)
    return {"success": True, "message": "Meal deleted."}
