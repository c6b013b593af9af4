"""
Deadline API Routes
Statutory deadline calculation and the session agenda

Input Rules:
- `reference_date` omitted -> today (Europe/Istanbul)
- `duration_value` that is not an integer -> leading digits, else 0
- Saved deadlines are scoped by the `X-Session-ID` header
"""

import logging
import math
import re
from datetime import date
from typing import Any, List, Optional

from fastapi import APIRouter, Depends, Header, HTTPException, Query
from pydantic import BaseModel, field_validator

from app.domain.models import Adjustment, DeadlineRequest, DurationUnit
from app.domain.services.deadline_engine import DeadlineEngine
from app.infrastructure.session.saved_deadline_store import SavedDeadlineStore
from app.reports.deadline_formatter import (
    TURKISH_WEEKDAYS,
    format_duration,
    format_long_date,
    format_short_date,
    render_adjustment,
)
from app.utils.time import today_trt

logger = logging.getLogger(__name__)
router = APIRouter()

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def parse_duration_value(raw: Any) -> int:
    """
    Lenient integer parsing for form input.

    '15' -> 15, '12 gün' -> 12, '1.9' -> 1, '' / 'abc' / None / NaN -> 0
    """
    if isinstance(raw, bool) or raw is None:
        return 0
    if isinstance(raw, int):
        return raw
    if isinstance(raw, float):
        if not math.isfinite(raw):
            return 0
        return int(raw)
    match = _LEADING_INT.match(str(raw))
    if match is None:
        return 0
    return int(match.group(1))


# -------------------------------------------------------------------
# Dependencies
# -------------------------------------------------------------------

def get_deadline_engine() -> DeadlineEngine:
    from app.main import deadline_engine

    if deadline_engine is None:
        raise HTTPException(status_code=500, detail="Deadline engine not initialized")
    return deadline_engine


def get_saved_deadline_store() -> SavedDeadlineStore:
    from app.main import saved_deadline_store

    if saved_deadline_store is None:
        raise HTTPException(status_code=500, detail="Saved deadline store not initialized")
    return saved_deadline_store


def get_session_id(x_session_id: Optional[str] = Header(default=None)) -> str:
    return (x_session_id or "").strip() or "default"


# -------------------------------------------------------------------
# Request / response models
# -------------------------------------------------------------------

class DeadlineCalculationRequest(BaseModel):
    reference_date: Optional[date] = None
    duration_value: int = 15
    duration_unit: DurationUnit = DurationUnit.DAY
    apply_judicial_recess_extension: bool = True

    @field_validator("duration_value", mode="before")
    @classmethod
    def _lenient_duration(cls, value: Any) -> int:
        return parse_duration_value(value)


class AdjustmentInfo(BaseModel):
    kind: str
    on_date: date
    target_date: date
    holiday: Optional[str] = None
    note: str


class DeadlineCalculationResponse(BaseModel):
    reference_date: date
    reference_date_display: str
    duration_value: int
    duration_unit: DurationUnit
    duration_label: str
    base_date: date
    final_due_date: date
    final_due_date_display: str
    adjustment_notes: List[str]
    adjustments: List[AdjustmentInfo]
    judicial_recess_triggered: bool


class HolidayInfo(BaseModel):
    date: date
    key: str
    name: str
    weekday: str


class JudicialRecessInfo(BaseModel):
    start: date
    end: date
    resume: date


class LegalCalendarResponse(BaseModel):
    year: int
    holidays: List[HolidayInfo]
    judicial_recess: JudicialRecessInfo


class SavedDeadlineRequest(BaseModel):
    title: str
    date: str


class SavedDeadlineResponse(BaseModel):
    id: str
    title: str
    date: str


def _adjustment_info(adjustment: Adjustment) -> AdjustmentInfo:
    holiday = adjustment.holiday
    return AdjustmentInfo(
        kind=adjustment.kind.value,
        on_date=adjustment.on_date,
        target_date=adjustment.target_date,
        holiday=(holiday.name or holiday.key) if holiday else None,
        note=render_adjustment(adjustment),
    )


# -------------------------------------------------------------------
# Calculation
# -------------------------------------------------------------------

@router.post("/calculate", response_model=DeadlineCalculationResponse)
async def calculate_deadline(
    payload: DeadlineCalculationRequest,
    engine: DeadlineEngine = Depends(get_deadline_engine),
):
    """
    Calculate the last day of a procedural period
    """
    reference_date = payload.reference_date or today_trt()
    request = DeadlineRequest(
        reference_date=reference_date,
        duration_value=payload.duration_value,
        duration_unit=payload.duration_unit,
        apply_judicial_recess_extension=payload.apply_judicial_recess_extension,
    )

    result = engine.calculate(request)

    logger.info(
        "DEADLINE_CALCULATED | reference=%s | duration=%s %s | final=%s | recess=%s",
        reference_date,
        payload.duration_value,
        payload.duration_unit.value,
        result.final_due_date,
        result.judicial_recess_triggered,
    )

    return DeadlineCalculationResponse(
        reference_date=reference_date,
        reference_date_display=format_short_date(reference_date),
        duration_value=payload.duration_value,
        duration_unit=payload.duration_unit,
        duration_label=format_duration(payload.duration_value, payload.duration_unit),
        base_date=result.base_date,
        final_due_date=result.final_due_date,
        final_due_date_display=format_long_date(result.final_due_date),
        adjustment_notes=list(result.adjustment_notes),
        adjustments=[_adjustment_info(adj) for adj in result.adjustments],
        judicial_recess_triggered=result.judicial_recess_triggered,
    )


@router.get("/calendar", response_model=LegalCalendarResponse)
async def get_legal_calendar(
    year: Optional[int] = Query(default=None, ge=1, le=9999),
    engine: DeadlineEngine = Depends(get_deadline_engine),
):
    """
    Official holidays and the judicial recess window for a year
    """
    year = year or today_trt().year
    legal_calendar = engine.legal_calendar
    recess_start, recess_end = legal_calendar.recess.window(year)

    holidays = []
    for holiday in sorted(legal_calendar.holidays, key=lambda h: (h.month, h.day)):
        try:
            holiday_date = date(year, holiday.month, holiday.day)
        except ValueError:
            # 02-29 outside leap years
            continue
        holidays.append(HolidayInfo(
            date=holiday_date,
            key=holiday.key,
            name=holiday.name,
            weekday=TURKISH_WEEKDAYS[holiday_date.weekday()],
        ))

    return LegalCalendarResponse(
        year=year,
        holidays=holidays,
        judicial_recess=JudicialRecessInfo(
            start=recess_start,
            end=recess_end,
            resume=legal_calendar.recess.resumption(year),
        ),
    )


# -------------------------------------------------------------------
# Session agenda
# -------------------------------------------------------------------

@router.get("/saved", response_model=List[SavedDeadlineResponse])
async def list_saved_deadlines(
    session_id: str = Depends(get_session_id),
    store: SavedDeadlineStore = Depends(get_saved_deadline_store),
):
    return [
        SavedDeadlineResponse(id=e.id, title=e.title, date=e.date)
        for e in store.list(session_id)
    ]


@router.post("/saved", response_model=SavedDeadlineResponse, status_code=201)
async def save_deadline(
    payload: SavedDeadlineRequest,
    session_id: str = Depends(get_session_id),
    store: SavedDeadlineStore = Depends(get_saved_deadline_store),
):
    try:
        entry = store.add(session_id, payload.title, payload.date)
    except ValueError as exc:
        raise HTTPException(status_code=400, detail=str(exc))

    return SavedDeadlineResponse(id=entry.id, title=entry.title, date=entry.date)


@router.delete("/saved/{entry_id}", response_model=SavedDeadlineResponse)
async def delete_saved_deadline(
    entry_id: str,
    session_id: str = Depends(get_session_id),
    store: SavedDeadlineStore = Depends(get_saved_deadline_store),
):
    try:
        entry = store.remove(session_id, entry_id)
    except KeyError:
        raise HTTPException(status_code=404, detail=f"Saved deadline not found: {entry_id}")

    return SavedDeadlineResponse(id=entry.id, title=entry.title, date=entry.date)
