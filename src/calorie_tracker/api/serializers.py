"""JSON serialization of domain objects for API responses."""

from calorie_tracker.domain.calendar import CalendarCell, DaySelection, MonthGrid
from calorie_tracker.domain.meals import DailyProgress, DaySummary, MealRecord
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.domain.recognition import FoodAnalysis


def serialize_meal(meal: MealRecord) -> dict[str, object]:
    return {
        "id": str(meal.id),
        "userId": str(meal.user_id),
        "mealName": meal.name,
        "calories": meal.calorie_count,
        "detectionMethod": meal.detection_method.value,
        "confidenceScore": meal.confidence,
        "dateEaten": meal.timestamp.isoformat(),
        "notes": meal.notes,
    }


def serialize_day(summary: DaySummary) -> dict[str, object]:
    return {
        "date": summary.date,
        "meals": [serialize_meal(meal) for meal in summary.meals],
        "totalCalories": summary.total_calories,
    }


def serialize_progress(progress: DailyProgress) -> dict[str, object]:
    return {
        "date": progress.date,
        "meals": [serialize_meal(meal) for meal in progress.meals],
        "totalCalories": progress.total_calories,
        "dailyGoal": progress.daily_goal,
        "remainingCalories": progress.remaining_calories,
        "progress": progress.progress_fraction,
    }


def serialize_analysis(analysis: FoodAnalysis) -> dict[str, object]:
    return {
        "foodName": analysis.food_name,
        "calories": analysis.calories,
        "confidence": analysis.confidence,
    }


def serialize_user(user: UserProfile) -> dict[str, object]:
    return {
        "id": str(user.id),
        "dailyCalorieGoal": user.daily_calorie_goal,
        "timezone": user.timezone,
    }


def _serialize_cell(cell: CalendarCell) -> dict[str, object]:
    return {
        "date": cell.date.isoformat(),
        "day": cell.day,
        "inMonth": cell.in_month,
        "isToday": cell.is_today,
        "hasMeals": cell.has_meals,
    }


def serialize_month(grid: MonthGrid) -> dict[str, object]:
    return {
        "year": grid.year,
        "month": grid.month,
        "title": grid.title,
        "cells": [_serialize_cell(cell) for cell in grid.cells],
    }


def serialize_selection(selection: DaySelection) -> dict[str, object]:
    return {
        "date": selection.date,
        "status": selection.status.value,
        "hasData": selection.has_data,
        "day": serialize_day(selection.summary) if selection.summary else None,
    }
