"""
Deadline formatting (tr-TR).
Renders adjustment trails and dates for display.
"""

from __future__ import annotations

from datetime import date
from typing import Iterable, Tuple

from app.domain.models import Adjustment, AdjustmentKind, DurationUnit


TURKISH_MONTHS = (
    "Ocak", "Şubat", "Mart", "Nisan", "Mayıs", "Haziran",
    "Temmuz", "Ağustos", "Eylül", "Ekim", "Kasım", "Aralık",
)

# Monday first, matching date.weekday()
TURKISH_WEEKDAYS = (
    "Pazartesi", "Salı", "Çarşamba", "Perşembe", "Cuma", "Cumartesi", "Pazar",
)

DURATION_UNIT_LABELS = {
    DurationUnit.DAY: "Gün",
    DurationUnit.WEEK: "Hafta",
    DurationUnit.MONTH: "Ay",
}


def format_long_date(d: date) -> str:
    """'09 Eylül 2024 Pazartesi'"""
    return (
        f"{d.day:02d} {TURKISH_MONTHS[d.month - 1]} {d.year} "
        f"{TURKISH_WEEKDAYS[d.weekday()]}"
    )


def format_short_date(d: date) -> str:
    """'01.07.2024'"""
    return d.strftime("%d.%m.%Y")


def format_duration(value: int, unit: DurationUnit) -> str:
    return f"{value} {DURATION_UNIT_LABELS[DurationUnit(unit)]}"


def render_adjustment(adjustment: Adjustment) -> str:
    kind = adjustment.kind

    if kind == AdjustmentKind.START_OFFSET:
        return "Hesaplama tebliği izleyen günden (H+1) itibaren başlatılmıştır."

    if kind == AdjustmentKind.RECESS:
        target = adjustment.target_date
        return (
            "Sürenin sonu adli tatile rastladığı için HMK m. 93 uyarınca "
            f"{target.day} {TURKISH_MONTHS[target.month - 1]} tarihine uzatılmıştır."
        )

    if kind == AdjustmentKind.WEEKEND_ROLL:
        day_name = "Pazar" if adjustment.is_sunday else "Cumartesi"
        return (
            f"Sürenin son günü hafta sonuna ({day_name}) rastladığı için "
            "ilk iş gününe uzatılmıştır."
        )

    if kind == AdjustmentKind.HOLIDAY_ROLL:
        month_day = adjustment.on_date.strftime("%m-%d")
        return (
            f"Sürenin son günü resmi tatile ({month_day}) rastladığı için "
            "bir sonraki güne uzatılmıştır."
        )

    raise ValueError(f"Unknown adjustment kind: {kind}")


def render_adjustment_notes(adjustments: Iterable[Adjustment]) -> Tuple[str, ...]:
    """
    Render notes in order, dropping repeated texts (first occurrence wins).
    """
    return tuple(dict.fromkeys(render_adjustment(adj) for adj in adjustments))
