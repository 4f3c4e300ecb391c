"""Day-bucketed meal history and daily progress."""

from dataclasses import dataclass
from datetime import UTC, date, datetime, time, timedelta
from zoneinfo import ZoneInfo

from calorie_tracker.domain.calendar import DaySelection, MonthGrid
from calorie_tracker.domain.days import (
    local_day_bounds,
    logical_day_bounds,
    logical_day_range,
    progress_fraction,
    remaining_calories,
)
from calorie_tracker.domain.meals import DailyProgress, DaySummary, MealRecord
from calorie_tracker.domain.models import UserProfile
from calorie_tracker.errors import ValidationError
from calorie_tracker.services.calendar import build_month, grid_bounds, select_day
from calorie_tracker.services.meals import MealRepository

DEFAULT_HISTORY_DAYS = 30
DECEMBER = 12
MIN_YEAR = 1900
MAX_YEAR = 2100


def aggregate(
    meals: list[MealRecord], range_start: datetime, range_end: datetime
) -> list[DaySummary]:
    """Group meals into per-day summaries.

    Meals are filtered on their raw stored timestamp (inclusive on both ends)
    and bucketed by its calendar date. Days appear in the order they are
    first seen walking meals newest first.
    """
    in_range = [meal for meal in meals if range_start <= meal.timestamp <= range_end]
    ordered = sorted(in_range, key=lambda meal: meal.timestamp, reverse=True)
    grouped: dict[str, list[MealRecord]] = {}
    for meal in ordered:
        grouped.setdefault(meal.timestamp.date().isoformat(), []).append(meal)
    return [
        DaySummary(
            date=day,
            meals=day_meals,
            total_calories=sum(meal.calorie_count for meal in day_meals),
        )
        for day, day_meals in grouped.items()
    ]


def summaries_by_date(summaries: list[DaySummary]) -> dict[str, DaySummary]:
    """Index summaries by their YYYY-MM-DD date."""
    return {summary.date: summary for summary in summaries}


@dataclass
class HistoryService:
    """Service computing history, daily progress and calendar views."""

    repository: MealRepository
    history_days: int = DEFAULT_HISTORY_DAYS

    def get_history(
        self,
        user: UserProfile,
        start_date: date | None = None,
        end_date: date | None = None,
        now: datetime | None = None,
    ) -> list[DaySummary]:
        """Return day summaries for a date range, or the last 30 days."""
        if start_date is not None and end_date is not None:
            if end_date < start_date:
                raise ValidationError("endDate must not be before startDate.")
            start = _utc_midnight(start_date)
            end = _utc_midnight(end_date)
        else:
            end = now or datetime.now(tz=UTC)
            start = end - timedelta(days=self.history_days)
        meals = self.repository.list_meals(user.id, start, end)
        return aggregate(meals, start, end)

    def get_today(
        self, user: UserProfile, now: datetime | None = None
    ) -> DailyProgress:
        """Return today's meals using midnight-to-midnight local bucketing."""
        tz = ZoneInfo(user.timezone)
        local_now = (now or datetime.now(tz=UTC)).astimezone(tz)
        start, end = local_day_bounds(local_now.date(), tz)
        meals = self.repository.list_meals(
            user.id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return _daily_progress(user, local_now.date(), meals)

    def get_logical_today(
        self, user: UserProfile, now: datetime | None = None
    ) -> DailyProgress:
        """Return the current logical day's meals (day starts at 04:00 local)."""
        tz = ZoneInfo(user.timezone)
        local_now = (now or datetime.now(tz=UTC)).astimezone(tz)
        logical_today, _ = logical_day_range(local_now)
        start, end = logical_day_bounds(logical_today, tz)
        meals = self.repository.list_meals(
            user.id, start.astimezone(UTC), end.astimezone(UTC)
        )
        return _daily_progress(user, logical_today, meals)

    def get_calendar(
        self,
        user: UserProfile,
        year: int,
        month: int,
        today: date | None = None,
    ) -> MonthGrid:
        """Return the month grid with days highlighted when they have meals."""
        _validate_month(year, month)
        first, last = grid_bounds(year, month)
        summaries = self.get_history(user, first, last + timedelta(days=1))
        return build_month(
            year,
            month,
            summaries_by_date(summaries),
            today or datetime.now(tz=UTC).date(),
        )

    def get_day(self, user: UserProfile, date_str: str) -> DaySelection:
        """Return the selection result for a single calendar day."""
        try:
            day = date.fromisoformat(date_str)
        except ValueError as exc:
            raise ValidationError("Date must use the YYYY-MM-DD format.") from exc
        summaries = self.get_history(user, day, day + timedelta(days=1))
        return select_day(day.isoformat(), summaries_by_date(summaries))


def _daily_progress(
    user: UserProfile, day: date, meals: list[MealRecord]
) -> DailyProgress:
    ordered = sorted(meals, key=lambda meal: meal.timestamp, reverse=True)
    total = sum(meal.calorie_count for meal in ordered)
    return DailyProgress(
        date=day.isoformat(),
        meals=ordered,
        total_calories=total,
        daily_goal=user.daily_calorie_goal,
        remaining_calories=remaining_calories(user.daily_calorie_goal, total),
        progress_fraction=progress_fraction(user.daily_calorie_goal, total),
    )


def _utc_midnight(day: date) -> datetime:
    return datetime.combine(day, time.min, tzinfo=UTC)


def _validate_month(year: int, month: int) -> None:
    if not MIN_YEAR <= year <= MAX_YEAR:
        raise ValidationError(f"Year must be between {MIN_YEAR} and {MAX_YEAR}.")
    if not 1 <= month <= DECEMBER:
        raise ValidationError("Month must be between 1 and 12.")
