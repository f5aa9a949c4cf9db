"""
Tests for recurrence expansion, cursor advancement, and due scanning.
"""

from dataclasses import replace
from datetime import date, timedelta
from decimal import Decimal

import pytest

from core.errors import InvalidProjectionInput
from engine.records import Direction, Frequency, RecurringObligation
from engine.recurrence import due_obligations, expand_occurrences, next_occurrence


def _ob(frequency, anchor, **kw):
    return RecurringObligation(
        amount=Decimal("100000"),
        direction=Direction.OUTFLOW,
        frequency=frequency,
        anchor=anchor,
        **kw,
    )


class TestExpandOccurrences:
    """Occurrence dates inside a window."""

    def test_monthly_single_hit_in_february(self, monthly_rent):
        dates = list(expand_occurrences(monthly_rent, date(2024, 2, 1), date(2024, 2, 29)))
        assert dates == [date(2024, 2, 15)]
        assert monthly_rent.amount * len(dates) == Decimal("1000000")

    def test_daily_window_is_capped_at_31(self, daily_coffee):
        start, end = date(2024, 1, 1), date(2024, 3, 31)
        dates = list(expand_occurrences(daily_coffee, start, end))
        assert len(dates) == 31
        assert dates[0] == date(2024, 1, 1)
        assert dates[-1] == date(2024, 1, 31)
        assert all(a < b for a, b in zip(dates, dates[1:]))
        assert all(start <= d <= end for d in dates)

    def test_cap_applies_when_anchor_is_years_before_window(self):
        ob = _ob(Frequency.DAILY, date(2020, 1, 1))
        dates = list(expand_occurrences(ob, date(2024, 3, 1), date(2024, 12, 31)))
        assert len(dates) == 31
        assert dates[0] == date(2024, 3, 1)

    def test_custom_cap(self, daily_coffee):
        dates = list(expand_occurrences(
            daily_coffee, date(2024, 1, 1), date(2024, 1, 31), max_occurrences=5
        ))
        assert len(dates) == 5

    def test_weekly_skips_ahead_to_window(self):
        ob = _ob(Frequency.WEEKLY, date(2024, 1, 3))
        dates = list(expand_occurrences(ob, date(2024, 2, 1), date(2024, 2, 29)))
        assert dates == [date(2024, 2, 7), date(2024, 2, 14), date(2024, 2, 21), date(2024, 2, 28)]

    def test_month_end_anchor_clamps_in_leap_february(self):
        ob = _ob(Frequency.MONTHLY, date(2024, 1, 31))
        dates = list(expand_occurrences(ob, date(2024, 2, 1), date(2024, 2, 29)))
        assert dates == [date(2024, 2, 29)]

    def test_month_end_anchor_clamps_in_common_february(self):
        ob = _ob(Frequency.MONTHLY, date(2023, 1, 31))
        dates = list(expand_occurrences(ob, date(2023, 2, 1), date(2023, 2, 28)))
        assert dates == [date(2023, 2, 28)]

    def test_month_end_anchor_does_not_drift(self):
        ob = _ob(Frequency.MONTHLY, date(2024, 1, 31))
        march = list(expand_occurrences(ob, date(2024, 3, 1), date(2024, 3, 31)))
        april = list(expand_occurrences(ob, date(2024, 4, 1), date(2024, 4, 30)))
        assert march == [date(2024, 3, 31)]
        assert april == [date(2024, 4, 30)]

    def test_monthly_across_a_year(self):
        ob = _ob(Frequency.MONTHLY, date(2024, 1, 31))
        dates = list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 12, 31)))
        assert len(dates) == 12
        assert dates[1] == date(2024, 2, 29)
        assert dates[-1] == date(2024, 12, 31)

    def test_yearly_leap_day_anchor(self):
        ob = _ob(Frequency.YEARLY, date(2024, 2, 29))
        dates = list(expand_occurrences(ob, date(2025, 2, 1), date(2025, 2, 28)))
        assert dates == [date(2025, 2, 28)]

    def test_yearly_outside_window(self):
        ob = _ob(Frequency.YEARLY, date(2024, 6, 1))
        assert list(expand_occurrences(ob, date(2025, 1, 1), date(2025, 5, 31))) == []

    def test_custom_interval(self):
        ob = _ob(Frequency.CUSTOM, date(2024, 1, 1), custom_interval_days=10)
        dates = list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 1, 31)))
        assert dates == [date(2024, 1, 1), date(2024, 1, 11), date(2024, 1, 21), date(2024, 1, 31)]

    def test_custom_without_interval_yields_nothing(self):
        ob = _ob(Frequency.CUSTOM, date(2024, 1, 1))
        assert list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 1, 31))) == []

    def test_custom_with_zero_interval_yields_nothing(self):
        ob = _ob(Frequency.CUSTOM, date(2024, 1, 1), custom_interval_days=0)
        assert list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 1, 31))) == []

    def test_unknown_frequency_yields_nothing(self):
        ob = _ob("fortnightly", date(2024, 1, 1))
        assert list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 12, 31))) == []

    def test_frequency_string_is_case_insensitive(self):
        ob = _ob(" Weekly ", date(2024, 1, 1))
        assert len(list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 1, 31)))) == 5

    def test_inactive_obligation_yields_nothing(self, monthly_rent):
        ob = replace(monthly_rent, is_active=False)
        assert list(expand_occurrences(ob, date(2024, 2, 1), date(2024, 2, 29))) == []

    def test_end_date_truncates(self):
        ob = _ob(Frequency.DAILY, date(2024, 1, 1), end_date=date(2024, 1, 5))
        dates = list(expand_occurrences(ob, date(2024, 1, 1), date(2024, 1, 31)))
        assert dates[-1] == date(2024, 1, 5)
        assert len(dates) == 5

    def test_anchor_after_window(self, monthly_rent):
        assert list(expand_occurrences(monthly_rent, date(2023, 12, 1), date(2023, 12, 31))) == []

    def test_start_from_cursor_replaces_anchor(self, monthly_rent):
        feb = expand_occurrences(
            monthly_rent, date(2024, 2, 1), date(2024, 2, 29), start_from=date(2024, 3, 15)
        )
        mar = expand_occurrences(
            monthly_rent, date(2024, 3, 1), date(2024, 3, 31), start_from=date(2024, 3, 15)
        )
        assert list(feb) == []
        assert list(mar) == [date(2024, 3, 15)]

    def test_sequence_is_restartable(self, daily_coffee):
        occ = expand_occurrences(daily_coffee, date(2024, 1, 1), date(2024, 1, 10))
        assert list(occ) == list(occ)
        assert occ.count() == 10

    def test_single_day_window(self, monthly_rent):
        dates = list(expand_occurrences(monthly_rent, date(2024, 5, 15), date(2024, 5, 15)))
        assert dates == [date(2024, 5, 15)]

    def test_inverted_window_raises(self, monthly_rent):
        with pytest.raises(InvalidProjectionInput):
            expand_occurrences(monthly_rent, date(2024, 3, 1), date(2024, 2, 1))

    def test_inverted_window_is_a_value_error(self, monthly_rent):
        with pytest.raises(ValueError):
            expand_occurrences(monthly_rent, date(2024, 3, 1), date(2024, 2, 1))

    def test_non_positive_cap_raises(self, monthly_rent):
        with pytest.raises(InvalidProjectionInput):
            expand_occurrences(monthly_rent, date(2024, 1, 1), date(2024, 2, 1), max_occurrences=0)

    @pytest.mark.parametrize(
        "frequency,interval",
        [
            (Frequency.DAILY, None),
            (Frequency.WEEKLY, None),
            (Frequency.MONTHLY, None),
            (Frequency.YEARLY, None),
            (Frequency.CUSTOM, 3),
        ],
    )
    def test_every_date_is_inside_window(self, frequency, interval):
        ob = _ob(frequency, date(2023, 8, 31), custom_interval_days=interval)
        for start in (date(2023, 8, 1), date(2024, 2, 10), date(2024, 12, 30)):
            end = start + timedelta(days=400)
            dates = list(expand_occurrences(ob, start, end))
            assert all(start <= d <= end for d in dates)
            assert all(a < b for a, b in zip(dates, dates[1:]))
            assert len(dates) <= 31


class TestNextOccurrence:
    """One-step cursor advancement after a template is posted."""

    def test_daily(self):
        assert next_occurrence(date(2024, 12, 31), "daily") == date(2025, 1, 1)

    def test_weekly(self):
        assert next_occurrence(date(2024, 1, 1), Frequency.WEEKLY) == date(2024, 1, 8)

    def test_monthly_clamps(self):
        assert next_occurrence(date(2024, 1, 31), "monthly") == date(2024, 2, 29)

    def test_yearly_leap_day(self):
        assert next_occurrence(date(2024, 2, 29), "yearly") == date(2025, 2, 28)

    def test_custom(self):
        assert next_occurrence(date(2024, 1, 1), "custom", 14) == date(2024, 1, 15)

    def test_custom_without_interval_steps_one_day(self):
        assert next_occurrence(date(2024, 1, 1), "custom") == date(2024, 1, 2)

    def test_unknown_frequency_keeps_cursor(self):
        assert next_occurrence(date(2024, 1, 1), "quarterly") == date(2024, 1, 1)


class TestDueObligations:
    """Which templates should be posted today."""

    def test_split_due_and_expired(self):
        today = date(2024, 6, 10)
        due = _ob(Frequency.MONTHLY, date(2024, 6, 10), name="due")
        overdue = _ob(Frequency.MONTHLY, date(2024, 6, 1), name="overdue")
        expired = _ob(Frequency.MONTHLY, date(2024, 5, 1), name="expired", end_date=date(2024, 6, 1))
        future = _ob(Frequency.MONTHLY, date(2024, 7, 1), name="future")
        inactive = _ob(Frequency.MONTHLY, date(2024, 6, 1), name="inactive", is_active=False)

        scan = due_obligations([due, overdue, expired, future, inactive], today)

        assert [o.name for o in scan.due] == ["due", "overdue"]
        assert [o.name for o in scan.expired] == ["expired"]

    def test_end_date_today_is_still_due(self):
        ob = _ob(Frequency.DAILY, date(2024, 6, 1), end_date=date(2024, 6, 10))
        scan = due_obligations([ob], date(2024, 6, 10))
        assert scan.due == [ob]
        assert scan.expired == []
