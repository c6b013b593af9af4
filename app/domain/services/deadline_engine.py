"""
DEADLINE ENGINE
Compute the binding last day of a procedural period

RESPONSIBILITIES:
- Exclude the notification day (H+1 start)
- Add day / week / month durations
- Extend deadlines ending in the judicial recess (HMK m. 93)
- Roll forward over weekends and official holidays
- NO I/O, NO PERSISTENCE, NO VALIDATION GATE

RULES:
✅ Pure calculation
✅ Deterministic output
✅ Month durations count from the reference date itself
✅ Recess check runs once, before rolling
"""

import calendar
from datetime import MAXYEAR, MINYEAR, date, timedelta
from functools import lru_cache
from typing import Iterable, List, Optional, Tuple, TypeVar

from app.domain.models import (
    Adjustment,
    AdjustmentKind,
    DeadlineRequest,
    DeadlineResult,
    DurationUnit,
    LegalCalendar,
)
from app.domain.services.calendar_config_engine import DEFAULT_LEGAL_CALENDAR
from app.reports.deadline_formatter import render_adjustment_notes

T = TypeVar("T")


def add_months(d: date, months: int) -> date:
    """
    Add calendar months, clamping to the last day of the target month.

    Jan 31 + 1 month -> Feb 28 (Feb 29 in leap years), never Mar 3.
    """
    month_index = d.month - 1 + months
    year = d.year + month_index // 12
    month = month_index % 12 + 1
    if year > MAXYEAR:
        return date.max
    if year < MINYEAR:
        return date.min
    last_day = calendar.monthrange(year, month)[1]
    return date(year, month, min(d.day, last_day))


def shift_days(d: date, days: int) -> date:
    """Add days, saturating at date.min / date.max instead of overflowing."""
    try:
        return d + timedelta(days=days)
    except OverflowError:
        return date.max if days > 0 else date.min


def _unique(items: Iterable[T]) -> Tuple[T, ...]:
    return tuple(dict.fromkeys(items))


def apply_duration(
    reference_date: date,
    start_date: date,
    duration_value: int,
    duration_unit: DurationUnit,
) -> date:
    """
    Base end date before recess and roll-forward rules.

    Day and week periods count the start date as day one. Month periods
    ignore the start date and count from the reference date.
    """
    unit = DurationUnit(duration_unit)

    if unit == DurationUnit.MONTH:
        return add_months(reference_date, duration_value)

    if unit == DurationUnit.WEEK:
        return shift_days(start_date, duration_value * 7 - 1)

    return shift_days(start_date, duration_value - 1)


def apply_judicial_recess(
    candidate: date,
    legal_calendar: LegalCalendar,
) -> Tuple[date, Optional[Adjustment]]:
    """
    Move a date inside the recess window to the resumption date.
    """
    if not legal_calendar.recess.contains(candidate):
        return candidate, None

    resumed = legal_calendar.recess.resumption(candidate.year)
    return resumed, Adjustment(
        kind=AdjustmentKind.RECESS,
        on_date=candidate,
        target_date=resumed,
    )


def roll_forward(
    candidate: date,
    legal_calendar: LegalCalendar,
) -> Tuple[date, Tuple[Adjustment, ...]]:
    """
    Advance one day at a time until the date is a business day.

    Weekend and holiday are both checked on every step; a holiday falling
    on a weekend records both adjustments for the same day.
    """
    trail: List[Adjustment] = []

    while True:
        is_weekend = legal_calendar.is_weekend(candidate)
        holiday = legal_calendar.holiday_on(candidate)

        if not is_weekend and holiday is None:
            return candidate, tuple(trail)

        next_day = shift_days(candidate, 1)
        if next_day == candidate:
            # date.max cannot roll any further
            return candidate, tuple(trail)
        if is_weekend:
            trail.append(Adjustment(
                kind=AdjustmentKind.WEEKEND_ROLL,
                on_date=candidate,
                target_date=next_day,
            ))
        if holiday is not None:
            trail.append(Adjustment(
                kind=AdjustmentKind.HOLIDAY_ROLL,
                on_date=candidate,
                target_date=next_day,
                holiday=holiday,
            ))
        candidate = next_day


@lru_cache(maxsize=1024)
def _calculate(request: DeadlineRequest, legal_calendar: LegalCalendar) -> DeadlineResult:
    reference_date = request.reference_date
    start_date = shift_days(reference_date, 1)

    adjustments: List[Adjustment] = [
        Adjustment(
            kind=AdjustmentKind.START_OFFSET,
            on_date=reference_date,
            target_date=start_date,
        )
    ]

    base_date = apply_duration(
        reference_date=reference_date,
        start_date=start_date,
        duration_value=request.duration_value,
        duration_unit=request.duration_unit,
    )
    # Zero or negative durations resolve to the start date
    base_date = max(base_date, start_date)

    candidate = base_date
    recess_triggered = False
    if request.apply_judicial_recess_extension:
        candidate, recess_adjustment = apply_judicial_recess(candidate, legal_calendar)
        if recess_adjustment is not None:
            recess_triggered = True
            adjustments.append(recess_adjustment)

    final_due_date, rolled = roll_forward(candidate, legal_calendar)
    adjustments.extend(rolled)

    unique_adjustments = _unique(adjustments)

    return DeadlineResult(
        request=request,
        base_date=base_date,
        final_due_date=final_due_date,
        adjustments=unique_adjustments,
        adjustment_notes=render_adjustment_notes(unique_adjustments),
        judicial_recess_triggered=recess_triggered,
    )


class DeadlineEngine:
    """
    Deadline Engine
    Stateless; holds only the read-only calendar it was built with
    """

    def __init__(self, legal_calendar: Optional[LegalCalendar] = None):
        """Initialize with a legal calendar (defaults to the built-in one)"""
        self.legal_calendar = legal_calendar or DEFAULT_LEGAL_CALENDAR

    def calculate(self, request: DeadlineRequest) -> DeadlineResult:
        """
        Calculate the final due date for a request

        Args:
            request: Reference date, duration and recess flag

        Returns:
            DeadlineResult with the final date and the applied adjustments
        """
        return _calculate(request, self.legal_calendar)


def compute_deadline(
    reference_date: date,
    duration_value: int,
    duration_unit: DurationUnit,
    apply_judicial_recess_extension: bool,
    legal_calendar: Optional[LegalCalendar] = None,
) -> DeadlineResult:
    """
    Functional entry point around DeadlineEngine.calculate

    Never raises for out-of-range durations: dates saturate at
    date.min / date.max.
    """
    request = DeadlineRequest(
        reference_date=reference_date,
        duration_value=duration_value,
        duration_unit=DurationUnit(duration_unit),
        apply_judicial_recess_extension=apply_judicial_recess_extension,
    )
    return DeadlineEngine(legal_calendar).calculate(request)
