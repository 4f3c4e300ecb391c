"""Logical-day boundary rules.

A logical day starts at 04:00 local time: anything eaten between midnight
and 03:59 still counts towards the previous calendar date.
"""

from datetime import UTC, date, datetime, time, timedelta, tzinfo

DAY_CUTOFF_HOUR = 4
HOURS_PER_DAY = 24


def resolve_logical_date(timestamp: datetime, local_hour: int | None = None) -> date:
    """Return the logical date for a local timestamp.

    ``local_hour`` defaults to the timestamp's own hour; pass it explicitly
    when the caller's wall clock differs from the timestamp's zone.
    """
    hour = timestamp.hour if local_hour is None else local_hour
    if not 0 <= hour < HOURS_PER_DAY:
        raise ValueError(f"local hour out of range: {hour}")
    if hour < DAY_CUTOFF_HOUR:
        return timestamp.date() - timedelta(days=1)
    return timestamp.date()


def logical_day_range(now: datetime) -> tuple[date, date]:
    """Return the half-open [logical today, logical tomorrow) date pair."""
    today = resolve_logical_date(now)
    return today, today + timedelta(days=1)


def logical_day_anchor(now: datetime) -> datetime:
    """Return the UTC timestamp stored for a meal logged without an explicit time.

    The anchor falls inside the logical day's local 04:00 window and on the
    logical date in UTC, so the logical-today view and the UTC-date history
    buckets agree for every zone between UTC-12 and UTC+14. Noon UTC is used
    whenever it qualifies; otherwise the middle of the overlap.
    """
    day = resolve_logical_date(now)
    window_start = datetime.combine(
        day, time(DAY_CUTOFF_HOUR, 0), tzinfo=now.tzinfo or UTC
    )
    window_end = datetime.combine(
        day + timedelta(days=1), time(DAY_CUTOFF_HOUR, 0), tzinfo=now.tzinfo or UTC
    )
    utc_start = datetime.combine(day, time.min, tzinfo=UTC)
    low = max(window_start, utc_start).astimezone(UTC)
    high = min(window_end, utc_start + timedelta(days=1)).astimezone(UTC)
    noon = utc_start.replace(hour=12)
    if low <= noon < high:
        return noon
    return low + (high - low) / 2


def remaining_calories(daily_goal: int, total_calories: int) -> int:
    """Return calories left for the day; negative once the goal is exceeded."""
    return daily_goal - total_calories


def progress_fraction(daily_goal: int, total_calories: int) -> float:
    """Return the progress-bar fill, clamped to 1.0."""
    if daily_goal <= 0:
        return 0.0
    return min(total_calories / daily_goal, 1.0)


def local_day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the inclusive [00:00, 23:59:59.999999] bounds of a local date."""
    start = datetime.combine(day, time.min, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), time.min, tzinfo=tz)
    return start, end - timedelta(microseconds=1)


def logical_day_bounds(day: date, tz: tzinfo) -> tuple[datetime, datetime]:
    """Return the inclusive local bounds of a logical date (04:00 to 03:59)."""
    cutoff = time(DAY_CUTOFF_HOUR, 0)
    start = datetime.combine(day, cutoff, tzinfo=tz)
    end = datetime.combine(day + timedelta(days=1), cutoff, tzinfo=tz)
    return start, end - timedelta(microseconds=1)
