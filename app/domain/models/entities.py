"""
Domain Models - Entities
Pure domain objects with no infrastructure dependencies
"""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import Enum
from typing import Optional, Tuple


class DurationUnit(str, Enum):
    """Unit of a procedural duration"""
    DAY = "day"
    WEEK = "week"
    MONTH = "month"


class AdjustmentKind(str, Enum):
    """Rule applied while computing a deadline"""
    START_OFFSET = "START_OFFSET"
    RECESS = "RECESS"
    WEEKEND_ROLL = "WEEKEND_ROLL"
    HOLIDAY_ROLL = "HOLIDAY_ROLL"


@dataclass(frozen=True)
class OfficialHoliday:
    """
    Recurring official holiday, bound to a month-day pair (any year)
    """
    month: int
    day: int
    name: str = ""

    @property
    def key(self) -> str:
        """Month-day key, e.g. '10-29'"""
        return f"{self.month:02d}-{self.day:02d}"

    def matches(self, d: date) -> bool:
        return d.month == self.month and d.day == self.day


@dataclass(frozen=True)
class JudicialRecess:
    """
    Judicial recess window (HMK m. 93)

    Window is inclusive on both ends; deadlines ending inside it are
    extended to the resumption date of the same year.
    """
    start_month: int = 7
    start_day: int = 20
    end_month: int = 8
    end_day: int = 31
    resume_month: int = 9
    resume_day: int = 7

    def window(self, year: int) -> Tuple[date, date]:
        """Recess start and end dates for a year"""
        return (
            date(year, self.start_month, self.start_day),
            date(year, self.end_month, self.end_day),
        )

    def resumption(self, year: int) -> date:
        return date(year, self.resume_month, self.resume_day)

    def contains(self, d: date) -> bool:
        start, end = self.window(d.year)
        return start <= d <= end


@dataclass(frozen=True)
class LegalCalendar:
    """
    Read-only calendar consumed by the deadline engine

    Holds the recurring official holidays and the judicial recess window.
    Swapping the calendar changes the jurisdiction without touching the
    algorithm.
    """
    holidays: Tuple[OfficialHoliday, ...]
    recess: JudicialRecess = field(default_factory=JudicialRecess)

    @staticmethod
    def is_weekend(d: date) -> bool:
        # Saturday=5, Sunday=6
        return d.weekday() >= 5

    def holiday_on(self, d: date) -> Optional[OfficialHoliday]:
        """Return the official holiday falling on a date, if any"""
        for holiday in self.holidays:
            if holiday.matches(d):
                return holiday
        return None

    def is_business_day(self, d: date) -> bool:
        return not self.is_weekend(d) and self.holiday_on(d) is None


@dataclass(frozen=True)
class DeadlineRequest:
    """
    Input of a single deadline calculation
    """
    reference_date: date
    duration_value: int
    duration_unit: DurationUnit
    apply_judicial_recess_extension: bool = True


@dataclass(frozen=True)
class Adjustment:
    """
    One rule applied during a calculation

    on_date is the date the rule inspected, target_date the date it produced.
    holiday is set only for HOLIDAY_ROLL.
    """
    kind: AdjustmentKind
    on_date: date
    target_date: date
    holiday: Optional[OfficialHoliday] = None

    @property
    def is_sunday(self) -> bool:
        return self.on_date.weekday() == 6


@dataclass(frozen=True)
class DeadlineResult:
    """
    Outcome of a deadline calculation
    """
    request: DeadlineRequest
    base_date: date
    final_due_date: date
    adjustments: Tuple[Adjustment, ...]
    adjustment_notes: Tuple[str, ...]
    judicial_recess_triggered: bool

    def kinds(self) -> Tuple[AdjustmentKind, ...]:
        """Ordered kinds of the applied adjustments"""
        return tuple(adj.kind for adj in self.adjustments)


@dataclass
class SavedDeadline:
    """
    Agenda entry saved by the user for the current session
    """
    id: str
    title: str
    date: str
    created_at: datetime
