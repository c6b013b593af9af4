"""
Unit Tests for DeadlineEngine

Covers H+1 start, day/week/month arithmetic, judicial recess extension,
weekend / holiday roll-forward and degenerate durations.
"""

import pytest
from datetime import date, timedelta

from app.domain.models import (
    AdjustmentKind,
    DeadlineRequest,
    DurationUnit,
    JudicialRecess,
    LegalCalendar,
    OfficialHoliday,
)
from app.domain.services.calendar_config_engine import DEFAULT_LEGAL_CALENDAR
from app.domain.services.deadline_engine import (
    DeadlineEngine,
    add_months,
    compute_deadline,
    roll_forward,
)


@pytest.fixture
def engine():
    """Engine with the built-in Turkish calendar"""
    return DeadlineEngine()


def _request(reference, value, unit=DurationUnit.DAY, recess=True):
    return DeadlineRequest(
        reference_date=reference,
        duration_value=value,
        duration_unit=unit,
        apply_judicial_recess_extension=recess,
    )


class TestAddMonths:

    def test_plain_month(self):
        assert add_months(date(2024, 3, 15), 1) == date(2024, 4, 15)

    def test_clamps_to_february_end(self):
        assert add_months(date(2023, 1, 31), 1) == date(2023, 2, 28)

    def test_clamps_to_leap_day(self):
        assert add_months(date(2024, 1, 31), 1) == date(2024, 2, 29)

    def test_clamps_to_thirty_day_month(self):
        assert add_months(date(2024, 3, 31), 1) == date(2024, 4, 30)

    def test_crosses_year(self):
        assert add_months(date(2024, 11, 30), 3) == date(2025, 2, 28)

    def test_negative_months(self):
        assert add_months(date(2024, 3, 31), -1) == date(2024, 2, 29)


class TestDayAndWeekDurations:

    def test_start_offset_is_always_recorded(self, engine):
        result = engine.calculate(_request(date(2024, 7, 1), 15))
        first = result.adjustments[0]
        assert first.kind == AdjustmentKind.START_OFFSET
        assert first.on_date == date(2024, 7, 1)
        assert first.target_date == date(2024, 7, 2)

    def test_fifteen_days_before_recess(self, engine):
        # 2024-07-02 + 14 days = 2024-07-16 (Tuesday), window starts July 20
        result = engine.calculate(_request(date(2024, 7, 1), 15))
        assert result.base_date == date(2024, 7, 16)
        assert result.final_due_date == date(2024, 7, 16)
        assert result.judicial_recess_triggered is False
        assert result.kinds() == (AdjustmentKind.START_OFFSET,)

    def test_day_unit_rolls_saturday_to_monday(self, engine):
        # Monday 2024-06-10 + 12 days -> Saturday 2024-06-22
        result = engine.calculate(_request(date(2024, 6, 10), 12, recess=False))
        assert result.base_date == date(2024, 6, 22)
        assert result.final_due_date == date(2024, 6, 24)
        assert result.kinds() == (
            AdjustmentKind.START_OFFSET,
            AdjustmentKind.WEEKEND_ROLL,
            AdjustmentKind.WEEKEND_ROLL,
        )
        assert any("(Cumartesi)" in note for note in result.adjustment_notes)
        assert any("(Pazar)" in note for note in result.adjustment_notes)

    def test_day_unit_rolls_sunday_to_monday(self, engine):
        # Monday 2024-06-10 + 13 days -> Sunday 2024-06-23
        result = engine.calculate(_request(date(2024, 6, 10), 13, recess=False))
        assert result.base_date == date(2024, 6, 23)
        assert result.final_due_date == date(2024, 6, 24)
        weekend_notes = [n for n in result.adjustment_notes if "hafta sonuna" in n]
        assert len(weekend_notes) == 1
        assert "(Pazar)" in weekend_notes[0]

    def test_two_weeks_ends_on_same_weekday(self, engine):
        # Monday notification, 2 weeks -> Monday two weeks later
        result = engine.calculate(_request(date(2024, 3, 4), 2, DurationUnit.WEEK))
        assert result.base_date == date(2024, 3, 18)
        assert result.final_due_date == date(2024, 3, 18)

    def test_holiday_rolls_to_next_day(self, engine):
        # 2024-10-29 is Cumhuriyet Bayramı (Tuesday)
        result = engine.calculate(_request(date(2024, 10, 14), 15))
        assert result.base_date == date(2024, 10, 29)
        assert result.final_due_date == date(2024, 10, 30)
        holiday_adj = result.adjustments[-1]
        assert holiday_adj.kind == AdjustmentKind.HOLIDAY_ROLL
        assert holiday_adj.holiday.key == "10-29"
        assert result.adjustment_notes[-1] == (
            "Sürenin son günü resmi tatile (10-29) rastladığı için "
            "bir sonraki güne uzatılmıştır."
        )

    def test_holiday_on_weekend_records_both_rules(self, engine):
        # 2022-10-29 is a Saturday and a holiday
        result = engine.calculate(_request(date(2022, 10, 14), 15))
        assert result.base_date == date(2022, 10, 29)
        assert result.final_due_date == date(2022, 10, 31)
        assert result.kinds() == (
            AdjustmentKind.START_OFFSET,
            AdjustmentKind.WEEKEND_ROLL,
            AdjustmentKind.HOLIDAY_ROLL,
            AdjustmentKind.WEEKEND_ROLL,
        )
        assert result.adjustments[1].on_date == result.adjustments[2].on_date

    def test_new_year_after_weekend(self):
        # 2022-12-31 Saturday -> Sunday -> 2023-01-01 is also Sunday + holiday -> Monday
        result = compute_deadline(date(2022, 12, 20), 11, DurationUnit.DAY, False)
        assert result.base_date == date(2022, 12, 31)
        assert result.final_due_date == date(2023, 1, 2)


class TestMonthDuration:

    def test_month_counts_from_reference_date(self, engine):
        # No H+1 offset: 2024-03-15 + 1 month = 2024-04-15 (Monday)
        result = engine.calculate(_request(date(2024, 3, 15), 1, DurationUnit.MONTH))
        assert result.base_date == date(2024, 4, 15)
        assert result.final_due_date == date(2024, 4, 15)
        assert result.kinds()[0] == AdjustmentKind.START_OFFSET

    def test_january_31_plus_one_month(self, engine):
        result = engine.calculate(_request(date(2023, 1, 31), 1, DurationUnit.MONTH))
        assert result.base_date == date(2023, 2, 28)
        assert result.final_due_date == date(2023, 2, 28)

    def test_january_31_plus_one_month_leap_year(self, engine):
        result = engine.calculate(_request(date(2024, 1, 31), 1, DurationUnit.MONTH))
        assert result.base_date == date(2024, 2, 29)

    def test_month_ending_in_recess(self, engine):
        result = engine.calculate(_request(date(2024, 6, 25), 1, DurationUnit.MONTH))
        assert result.base_date == date(2024, 7, 25)
        assert result.judicial_recess_triggered is True
        # 2024-09-07 is Saturday
        assert result.final_due_date == date(2024, 9, 9)


class TestJudicialRecess:

    def test_recess_scenario_with_weekend_roll(self, engine):
        # 2024-08-11 + 9 days = 2024-08-20, inside the window
        result = engine.calculate(_request(date(2024, 8, 10), 10))
        assert result.base_date == date(2024, 8, 20)
        assert result.judicial_recess_triggered is True
        assert result.final_due_date == date(2024, 9, 9)
        assert result.kinds() == (
            AdjustmentKind.START_OFFSET,
            AdjustmentKind.RECESS,
            AdjustmentKind.WEEKEND_ROLL,
            AdjustmentKind.WEEKEND_ROLL,
        )
        recess_adj = result.adjustments[1]
        assert recess_adj.on_date == date(2024, 8, 20)
        assert recess_adj.target_date == date(2024, 9, 7)
        assert result.adjustment_notes[1] == (
            "Sürenin sonu adli tatile rastladığı için HMK m. 93 uyarınca "
            "7 Eylül tarihine uzatılmıştır."
        )

    def test_recess_disabled_never_triggers(self, engine):
        result = engine.calculate(_request(date(2024, 8, 10), 10, recess=False))
        assert result.judicial_recess_triggered is False
        assert result.final_due_date == date(2024, 8, 20)
        assert AdjustmentKind.RECESS not in result.kinds()

    def test_window_start_is_inclusive(self, engine):
        # 2024-07-11 + 9 days = 2024-07-20
        result = engine.calculate(_request(date(2024, 7, 10), 10))
        assert result.base_date == date(2024, 7, 20)
        assert result.judicial_recess_triggered is True

    def test_window_end_is_inclusive(self, engine):
        # 2024-08-22 + 9 days = 2024-08-31
        result = engine.calculate(_request(date(2024, 8, 21), 10))
        assert result.base_date == date(2024, 8, 31)
        assert result.judicial_recess_triggered is True
        assert result.final_due_date == date(2024, 9, 9)

    def test_day_before_window(self, engine):
        # 2024-07-19 is a Friday
        result = engine.calculate(_request(date(2024, 7, 9), 10))
        assert result.base_date == date(2024, 7, 19)
        assert result.judicial_recess_triggered is False
        assert result.final_due_date == date(2024, 7, 19)

    def test_resumption_on_sunday_rolls_to_monday(self, engine):
        # 2025-09-07 is a Sunday -> Monday 2025-09-08
        result = engine.calculate(_request(date(2025, 8, 1), 10))
        assert result.base_date == date(2025, 8, 11)
        assert result.final_due_date == date(2025, 9, 8)

    def test_recess_checked_only_once(self, engine):
        # Saturday 2026-07-18 rolls into the window and stays there
        result = engine.calculate(_request(date(2026, 7, 8), 10))
        assert result.base_date == date(2026, 7, 18)
        assert result.judicial_recess_triggered is False
        assert result.final_due_date == date(2026, 7, 20)


class TestDegenerateInput:

    def test_zero_days_resolves_to_start_date(self, engine):
        result = engine.calculate(_request(date(2024, 7, 1), 0))
        assert result.base_date == date(2024, 7, 2)
        assert result.final_due_date == date(2024, 7, 2)

    def test_zero_months_resolves_to_start_date(self, engine):
        result = engine.calculate(_request(date(2024, 7, 1), 0, DurationUnit.MONTH))
        assert result.final_due_date == date(2024, 7, 2)

    def test_negative_duration_does_not_raise(self, engine):
        result = engine.calculate(_request(date(2024, 7, 3), -5))
        assert result.final_due_date == date(2024, 7, 4)

    def test_zero_days_on_friday_rolls_over_weekend(self, engine):
        # Friday reference -> start Saturday -> Monday
        result = engine.calculate(_request(date(2024, 6, 14), 0))
        assert result.final_due_date == date(2024, 6, 17)

    def test_huge_day_count_saturates_at_max_date(self, engine):
        result = engine.calculate(_request(date(2024, 1, 1), 5_000_000))
        # 9999-12-31 is a Friday
        assert result.final_due_date == date.max

    def test_huge_month_count_saturates_at_max_date(self, engine):
        result = engine.calculate(_request(date(2024, 1, 1), 200_000, DurationUnit.MONTH))
        assert result.base_date == date.max
        assert result.final_due_date == date.max

    def test_huge_negative_duration_resolves_to_start_date(self, engine):
        result = engine.calculate(_request(date(2024, 7, 3), -5_000_000))
        assert result.final_due_date == date(2024, 7, 4)

    def test_reference_on_last_representable_day(self, engine):
        result = engine.calculate(_request(date.max, 15))
        assert result.final_due_date == date.max


class TestInvariants:

    @pytest.mark.parametrize("unit,values", [
        (DurationUnit.DAY, (0, 1, 7, 10, 15, 30, 60)),
        (DurationUnit.WEEK, (1, 2)),
        (DurationUnit.MONTH, (1, 6)),
    ])
    @pytest.mark.parametrize("recess", [True, False])
    def test_result_is_business_day_after_reference(self, engine, unit, values, recess):
        reference = date(2024, 1, 1)
        while reference.year == 2024:
            for value in values:
                result = engine.calculate(_request(reference, value, unit, recess))
                final = result.final_due_date
                assert final >= reference + timedelta(days=1)
                assert final.weekday() < 5
                assert DEFAULT_LEGAL_CALENDAR.holiday_on(final) is None
                if not recess:
                    assert result.judicial_recess_triggered is False
            reference += timedelta(days=3)

    def test_recess_snaps_to_resumption_before_rolling(self, engine):
        reference = date(2024, 7, 1)
        while reference < date(2024, 9, 1):
            result = engine.calculate(_request(reference, 15))
            if DEFAULT_LEGAL_CALENDAR.recess.contains(result.base_date):
                assert result.judicial_recess_triggered is True
                recess_adj = result.adjustments[1]
                assert recess_adj.kind == AdjustmentKind.RECESS
                assert recess_adj.target_date == date(2024, 9, 7)
            else:
                assert result.judicial_recess_triggered is False
            reference += timedelta(days=1)

    def test_identical_inputs_give_identical_output(self, engine):
        first = engine.calculate(_request(date(2024, 8, 10), 10))
        second = DeadlineEngine().calculate(_request(date(2024, 8, 10), 10))
        assert first == second
        assert first.adjustment_notes == second.adjustment_notes

    def test_notes_have_no_duplicates(self, engine):
        result = engine.calculate(_request(date(2022, 10, 14), 15))
        assert len(result.adjustment_notes) == len(set(result.adjustment_notes))


class TestInjectedCalendar:

    def test_custom_holiday_table(self):
        legal_calendar = LegalCalendar(holidays=(OfficialHoliday(7, 16, "Test"),))
        result = DeadlineEngine(legal_calendar).calculate(_request(date(2024, 7, 1), 15))
        assert result.final_due_date == date(2024, 7, 17)
        assert result.adjustments[-1].holiday.name == "Test"

    def test_custom_recess_window(self):
        legal_calendar = LegalCalendar(
            holidays=(),
            recess=JudicialRecess(
                start_month=7, start_day=1,
                end_month=7, end_day=31,
                resume_month=8, resume_day=1,
            ),
        )
        result = DeadlineEngine(legal_calendar).calculate(_request(date(2024, 7, 1), 15))
        assert result.judicial_recess_triggered is True
        # 2024-08-01 is a Thursday
        assert result.final_due_date == date(2024, 8, 1)

    def test_empty_calendar_only_skips_weekends(self):
        candidate, trail = roll_forward(date(2024, 10, 26), LegalCalendar(holidays=()))
        assert candidate == date(2024, 10, 28)
        assert [adj.kind for adj in trail] == [AdjustmentKind.WEEKEND_ROLL] * 2
