"""Domain models for the month calendar view."""

from dataclasses import dataclass
from datetime import date
from enum import StrEnum

from calorie_tracker.domain.meals import DaySummary


@dataclass(frozen=True)
class CalendarCell:
    """Single day cell of the 6x7 month grid."""

    date: date
    day: int
    in_month: bool
    is_today: bool
    has_meals: bool


class SelectionStatus(StrEnum):
    """Outcome of looking up a selected calendar day."""

    FOUND = "found"
    MISSING = "missing"
    EMPTY = "empty"


@dataclass(frozen=True)
class DaySelection:
    """Result of selecting a calendar day."""

    date: str
    status: SelectionStatus
    summary: DaySummary | None

    @property
    def has_data(self) -> bool:
        """Return True when the day has at least one meal."""
        return self.status is SelectionStatus.FOUND


@dataclass(frozen=True)
class MonthGrid:
    """Materialized calendar month."""

    year: int
    month: int
    title: str
    cells: list[CalendarCell]
