"""
Domain Models Package
Export all domain entities
"""

from .entities import (
    # Enums
    AdjustmentKind,
    DurationUnit,

    # Calendar
    JudicialRecess,
    LegalCalendar,
    OfficialHoliday,

    # Entities
    Adjustment,
    DeadlineRequest,
    DeadlineResult,
    SavedDeadline,
)

__all__ = [
    # Enums
    "AdjustmentKind",
    "DurationUnit",

    # Calendar
    "JudicialRecess",
    "LegalCalendar",
    "OfficialHoliday",

    # Entities
    "Adjustment",
    "DeadlineRequest",
    "DeadlineResult",
    "SavedDeadline",
]
