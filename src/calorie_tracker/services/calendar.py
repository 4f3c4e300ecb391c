"""Month calendar materialization."""

import calendar
from datetime import date, timedelta

from calorie_tracker.domain.calendar import (
    CalendarCell,
    DaySelection,
    MonthGrid,
    SelectionStatus,
)
from calorie_tracker.domain.meals import DaySummary

GRID_CELLS = 42
DAYS_PER_WEEK = 7
DECEMBER = 12


def leading_days(year: int, month: int) -> int:
    """Return how many previous-month cells precede the 1st (weeks start Sunday)."""
    return (date(year, month, 1).weekday() + 1) % DAYS_PER_WEEK


def grid_bounds(year: int, month: int) -> tuple[date, date]:
    """Return the first and last dates shown in the month grid."""
    first = date(year, month, 1) - timedelta(days=leading_days(year, month))
    return first, first + timedelta(days=GRID_CELLS - 1)


def build_month_grid(
    year: int,
    month: int,
    summaries_by_date: dict[str, DaySummary],
    today: date,
) -> list[CalendarCell]:
    """Build the fixed 6x7 grid of day cells for a month."""
    first, _ = grid_bounds(year, month)
    cells: list[CalendarCell] = []
    for offset in range(GRID_CELLS):
        day = first + timedelta(days=offset)
        in_month = day.year == year and day.month == month
        summary = summaries_by_date.get(day.isoformat())
        cells.append(
            CalendarCell(
                date=day,
                day=day.day,
                in_month=in_month,
                is_today=in_month and day == today,
                has_meals=in_month and summary is not None and bool(summary.meals),
            )
        )
    return cells


def build_month(
    year: int,
    month: int,
    summaries_by_date: dict[str, DaySummary],
    today: date,
) -> MonthGrid:
    """Build the month grid with its title."""
    return MonthGrid(
        year=year,
        month=month,
        title=month_title(year, month),
        cells=build_month_grid(year, month, summaries_by_date, today),
    )


def select_day(
    date_str: str, summaries_by_date: dict[str, DaySummary]
) -> DaySelection:
    """Look up the summary for a selected day by exact date string."""
    summary = summaries_by_date.get(date_str)
    if summary is None:
        status = SelectionStatus.MISSING
    elif not summary.meals:
        status = SelectionStatus.EMPTY
    else:
        status = SelectionStatus.FOUND
    return DaySelection(date=date_str, status=status, summary=summary)


def month_title(year: int, month: int) -> str:
    """Return a display title such as 'March 2024'."""
    return f"{calendar.month_name[month]} {year}"


def shift_month(year: int, month: int, delta: int) -> tuple[int, int]:
    """Return the (year, month) that is ``delta`` months away."""
    index = year * DECEMBER + (month - 1) + delta
    return index // DECEMBER, index % DECEMBER + 1
