"""
Tests for KPR (mortgage) tracking math.
"""

from datetime import date
from decimal import Decimal

import pytest

from core.errors import InvalidProjectionInput
from engine.mortgage import MortgageRecord, apply_lump_sum, payment_schedule, payoff_progress


def _kpr(**kw):
    base = dict(
        principal_amount=Decimal("3000000000"),
        current_balance=Decimal("2700000000"),
        monthly_payment=Decimal("30000000"),
        interest_rate=Decimal("6"),
        tenor_years=1,
        start_date=date(2024, 1, 1),
    )
    base.update(kw)
    return MortgageRecord(**base)


class TestMortgageRecord:

    def test_expected_payoff_date(self):
        kpr = _kpr(start_date=date(2020, 1, 15), tenor_years=17)
        assert kpr.expected_payoff_date == date(2037, 1, 15)

    def test_monthly_rate_from_percent(self):
        assert _kpr().monthly_rate == Decimal("0.005")

    def test_from_row(self):
        row = {
            "principal_amount": 3_000_000_000,
            "current_balance": "2500000000",
            "monthly_payment": 30_000_000,
            "interest_rate": 4.99,
            "tenor_years": 17,
            "start_date": "2023-05-01",
            "bombing_history": [
                {
                    "date": "2024-01-10T08:00:00Z",
                    "amount": 500_000_000,
                    "penalty": 20_000_000,
                    "balance_before": 2_980_000_000,
                    "balance_after": 2_500_000_000,
                }
            ],
            "total_interest_saved": 12_000_000,
        }
        kpr = MortgageRecord.from_row(row)
        assert kpr.current_balance == Decimal("2500000000")
        assert kpr.interest_rate == Decimal("4.99")
        assert kpr.start_date == date(2023, 5, 1)
        assert len(kpr.lump_sums) == 1
        assert kpr.lump_sums[0].paid_on == date(2024, 1, 10)
        assert kpr.lump_sums[0].net_amount == Decimal("480000000")

    def test_from_row_defaults_current_balance_to_principal(self):
        kpr = MortgageRecord.from_row({
            "principal_amount": 100,
            "monthly_payment": 10,
            "interest_rate": 5,
            "tenor_years": 1,
            "start_date": date(2024, 1, 1),
        })
        assert kpr.current_balance == Decimal("100")
        assert kpr.lump_sums == ()


class TestPaymentSchedule:

    def test_first_row_split(self):
        kpr = _kpr(current_balance=Decimal("100000000"), monthly_payment=Decimal("3000000"),
                   interest_rate=Decimal("12"))
        sched = payment_schedule(kpr, 12, as_of=date(2024, 3, 1))
        first = sched.iloc[0]
        assert first["interest"] == Decimal("1000000")
        assert first["principal"] == Decimal("2000000")
        assert first["balance"] == Decimal("98000000")
        assert first["date"] == date(2024, 3, 1)
        assert sched.iloc[1]["date"] == date(2024, 4, 1)
        assert len(sched) == 12

    def test_stops_when_paid_off(self):
        kpr = _kpr(current_balance=Decimal("1200000"), monthly_payment=Decimal("100000"),
                   interest_rate=Decimal("0"))
        sched = payment_schedule(kpr, 24, as_of=date(2024, 1, 1))
        assert len(sched) == 12
        assert sched.iloc[-1]["balance"] == 0

    def test_balance_never_negative(self):
        kpr = _kpr(current_balance=Decimal("150000"), monthly_payment=Decimal("100000"),
                   interest_rate=Decimal("0"))
        sched = payment_schedule(kpr, 12, as_of=date(2024, 1, 1))
        assert list(sched["balance"]) == [Decimal("50000"), Decimal("0")]

    def test_rejects_non_positive_months(self):
        with pytest.raises(InvalidProjectionInput):
            payment_schedule(_kpr(), 0)


class TestLumpSum:

    def test_penalty_and_balance(self):
        updated, paid = apply_lump_sum(_kpr(), 500_000_000, as_of=date(2024, 7, 1))
        assert paid.penalty == Decimal("20000000")
        assert paid.balance_before == Decimal("2700000000")
        assert paid.balance_after == Decimal("2220000000")
        assert updated.current_balance == Decimal("2220000000")
        assert updated.lump_sums == (paid,)

    def test_interest_saved_uses_months_remaining(self):
        # 480 juta net x 0.5% x 6 months left
        updated, _ = apply_lump_sum(_kpr(), 500_000_000, as_of=date(2024, 7, 1))
        assert updated.total_interest_saved == Decimal("14400000")

    def test_original_record_untouched(self):
        kpr = _kpr()
        apply_lump_sum(kpr, 100_000_000, as_of=date(2024, 7, 1))
        assert kpr.current_balance == Decimal("2700000000")
        assert kpr.lump_sums == ()

    def test_overpayment_floors_at_zero(self):
        updated, _ = apply_lump_sum(_kpr(current_balance=Decimal("1000")), 5000, as_of=date(2024, 7, 1))
        assert updated.current_balance == 0

    def test_no_interest_saved_after_payoff_date(self):
        updated, _ = apply_lump_sum(_kpr(), 1000, as_of=date(2026, 1, 1))
        assert updated.total_interest_saved == 0

    @pytest.mark.parametrize("amount", [0, -5])
    def test_rejects_non_positive_amount(self, amount):
        with pytest.raises(InvalidProjectionInput):
            apply_lump_sum(_kpr(), amount)

    def test_custom_penalty_rate(self):
        _, paid = apply_lump_sum(_kpr(), 1_000_000, penalty_rate=0, as_of=date(2024, 7, 1))
        assert paid.penalty == 0
        assert paid.net_amount == Decimal("1000000")


class TestPayoffProgress:

    def test_percent_repaid(self):
        progress = payoff_progress(_kpr(), as_of=date(2024, 12, 2))
        assert progress.percent_repaid == Decimal("10")

    def test_days_and_months(self):
        progress = payoff_progress(_kpr(), as_of=date(2024, 12, 2))
        assert progress.days_until_payoff == 30
        assert progress.months_until_payoff == 1
        assert payoff_progress(_kpr(), as_of=date(2024, 12, 1)).months_until_payoff == 2

    def test_zero_principal(self):
        progress = payoff_progress(_kpr(principal_amount=Decimal("0")), as_of=date(2024, 1, 1))
        assert progress.percent_repaid == 0
