"""Time utilities (Europe/Istanbul)."""

from datetime import date, datetime
from zoneinfo import ZoneInfo

TRT = ZoneInfo("Europe/Istanbul")


def now_trt() -> datetime:
    """Current time in Turkey, timezone-aware."""
    return datetime.now(TRT)


def today_trt() -> date:
    """
    Current calendar day in Turkey.

    Notification dates are calendar days in Turkish local time, so the
    default reference date must not follow the server timezone.
    """
    return now_trt().date()
