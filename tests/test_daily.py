"""
Tests for the dashboard's two-week daily balance strip.
"""

from datetime import date
from decimal import Decimal

import pandas as pd
import pytest

from engine.daily import daily_balance_window


@pytest.fixture
def transactions():
    return pd.DataFrame(
        [
            {"date": "2024-03-10", "amount": 200_000, "type": "expense"},
            {"date": "2024-03-09", "amount": 1_000_000, "type": "income"},
            {"date": "2024-03-08", "amount": 500_000, "type": "expense"},
            {"date": "2024-03-08", "amount": 300_000, "type": "transfer"},
            {"date": "2024-02-28", "amount": 9_999, "type": "income"},
        ]
    )


class TestDailyBalanceWindow:

    def test_shape(self, transactions):
        df = daily_balance_window(transactions, 10_000_000, date(2024, 3, 10))
        assert len(df) == 14
        assert df["date"].iloc[0] == date(2024, 3, 3)
        assert df["date"].iloc[-1] == date(2024, 3, 16)
        assert int(df["is_forecast"].sum()) == 6

    def test_today_is_current_balance(self, transactions):
        df = daily_balance_window(transactions, 10_000_000, date(2024, 3, 10))
        today = df[df["date"] == date(2024, 3, 10)].iloc[0]
        assert today["balance"] == Decimal("10000000")
        assert today["expense"] == Decimal("200000")

    def test_past_days_unwind_actuals(self, transactions):
        df = daily_balance_window(transactions, 10_000_000, date(2024, 3, 10)).set_index("date")
        assert df.loc[date(2024, 3, 9), "balance"] == Decimal("10200000")
        assert df.loc[date(2024, 3, 8), "balance"] == Decimal("9200000")
        assert df.loc[date(2024, 3, 7), "balance"] == Decimal("9700000")
        assert df.loc[date(2024, 3, 3), "balance"] == Decimal("9700000")

    def test_future_days_use_month_daily_average(self, transactions):
        df = daily_balance_window(transactions, 10_000_000, date(2024, 3, 10)).set_index("date")
        daily_in = Decimal("1000000") / 31
        daily_out = Decimal("700000") / 31
        assert df.loc[date(2024, 3, 11), "balance"] == Decimal("10000000") + daily_in - daily_out
        assert df.loc[date(2024, 3, 11), "income"] == Decimal("1000000") / 31

    def test_missing_columns(self):
        with pytest.raises(ValueError):
            daily_balance_window(pd.DataFrame({"date": []}), 0, date(2024, 1, 1))
