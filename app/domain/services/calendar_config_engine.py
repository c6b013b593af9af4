"""
CALENDAR CONFIG ENGINE
Load, validate, and expose the legal calendar

RESPONSIBILITIES:
- Load official holidays and the judicial recess window from YAML
- Validate calendar integrity
- Expose a read-only LegalCalendar

RULES:
✅ Fail fast on invalid config
✅ Compiled-in Turkish calendar when no file is configured
✅ Deterministic output
"""

import logging
from datetime import date
from pathlib import Path
from typing import Any, Dict, List, Optional, Tuple

import yaml

from app.domain.models import JudicialRecess, LegalCalendar, OfficialHoliday

logger = logging.getLogger(__name__)


DEFAULT_OFFICIAL_HOLIDAYS: Tuple[OfficialHoliday, ...] = (
    OfficialHoliday(1, 1, "Yılbaşı"),
    OfficialHoliday(4, 23, "Ulusal Egemenlik ve Çocuk Bayramı"),
    OfficialHoliday(5, 1, "Emek ve Dayanışma Günü"),
    OfficialHoliday(5, 19, "Atatürk'ü Anma, Gençlik ve Spor Bayramı"),
    OfficialHoliday(7, 15, "Demokrasi ve Milli Birlik Günü"),
    OfficialHoliday(8, 30, "Zafer Bayramı"),
    OfficialHoliday(10, 29, "Cumhuriyet Bayramı"),
)

DEFAULT_LEGAL_CALENDAR = LegalCalendar(
    holidays=DEFAULT_OFFICIAL_HOLIDAYS,
    recess=JudicialRecess(),
)

# Leap year so that 02-29 is accepted as a month-day pair
_PROBE_YEAR = 2000


def _parse_month_day(value: Any, field_name: str) -> Tuple[int, int]:
    """Parse 'MM-DD' into (month, day)"""
    if not isinstance(value, str):
        raise ValueError(f"{field_name} must be a 'MM-DD' string, got {value!r}")
    try:
        month_str, day_str = value.strip().split("-")
        month, day = int(month_str), int(day_str)
        date(_PROBE_YEAR, month, day)
    except ValueError:
        raise ValueError(f"{field_name} is not a valid month-day: {value!r}")
    return month, day


class CalendarConfigEngine:
    """
    Calendar Configuration Engine
    Single source of truth for holidays and the judicial recess
    """

    def __init__(self, config_file: Path):
        """Initialize with calendar file path"""
        self.config_file = Path(config_file)
        self._legal_calendar: LegalCalendar = None

    def load(self) -> LegalCalendar:
        """Load and validate the calendar file"""
        if not self.config_file.exists():
            raise FileNotFoundError(f"Legal calendar config not found: {self.config_file}")

        with open(self.config_file, "r", encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}

        if not isinstance(data, dict):
            raise ValueError("Legal calendar config must be a mapping")

        holidays = self._load_holidays(data.get("official_holidays", []))
        recess = self._load_recess(data.get("judicial_recess"))

        self._legal_calendar = LegalCalendar(holidays=holidays, recess=recess)
        logger.info(
            "LEGAL_CALENDAR_LOADED | file=%s | holidays=%s",
            self.config_file,
            len(holidays),
        )
        return self._legal_calendar

    def _load_holidays(self, entries: List[Dict]) -> Tuple[OfficialHoliday, ...]:
        if not isinstance(entries, list):
            raise ValueError("official_holidays must be a list")

        holidays = []
        for entry in entries:
            if not isinstance(entry, dict) or "date" not in entry:
                raise ValueError(f"Invalid holiday entry: {entry!r}")
            month, day = _parse_month_day(entry["date"], "official_holidays.date")
            holidays.append(OfficialHoliday(month, day, str(entry.get("name", ""))))

        keys = [h.key for h in holidays]
        if len(keys) != len(set(keys)):
            raise ValueError("Duplicate official holidays found in configuration")

        return tuple(holidays)

    def _load_recess(self, data: Optional[Dict]) -> JudicialRecess:
        if data is None:
            return JudicialRecess()
        if not isinstance(data, dict):
            raise ValueError("judicial_recess must be a mapping")

        start = _parse_month_day(data.get("start"), "judicial_recess.start")
        end = _parse_month_day(data.get("end"), "judicial_recess.end")
        resume = _parse_month_day(data.get("resume"), "judicial_recess.resume")

        if not start <= end < resume:
            raise ValueError(
                "judicial_recess must satisfy start <= end < resume within one year"
            )

        return JudicialRecess(
            start_month=start[0],
            start_day=start[1],
            end_month=end[0],
            end_day=end[1],
            resume_month=resume[0],
            resume_day=resume[1],
        )

    @property
    def legal_calendar(self) -> LegalCalendar:
        if self._legal_calendar is None:
            raise RuntimeError("Legal calendar not loaded")
        return self._legal_calendar


def load_legal_calendar(config_file: Optional[Path] = None) -> LegalCalendar:
    """
    Load the calendar from a file, or return the built-in one
    """
    if config_file is None:
        logger.info("LEGAL_CALENDAR_DEFAULT | holidays=%s", len(DEFAULT_OFFICIAL_HOLIDAYS))
        return DEFAULT_LEGAL_CALENDAR
    return CalendarConfigEngine(config_file).load()
