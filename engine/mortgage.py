"""
Mortgage (KPR) tracking math: amortization schedule, lump-sum prepayments
("bombing") with a fixed-rate-period penalty, and payoff progress.

interest_rate is stored the way the tracking table stores it: annual percent
(4.99 means 4.99%).
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field, replace
from datetime import date
from decimal import Decimal
from typing import Dict, List, Mapping, Optional, Tuple

import pandas as pd
from dateutil.relativedelta import relativedelta

from core.errors import InvalidProjectionInput
from core.utils import as_date, months_between, to_decimal

DEFAULT_PENALTY_RATE = Decimal("0.04")

_ZERO = Decimal("0")


@dataclass(frozen=True)
class LumpSumPayment:
    paid_on: date
    amount: Decimal
    penalty: Decimal
    balance_before: Decimal
    balance_after: Decimal

    @property
    def net_amount(self) -> Decimal:
        return self.amount - self.penalty


@dataclass(frozen=True)
class MortgageRecord:
    principal_amount: Decimal
    current_balance: Decimal
    monthly_payment: Decimal
    interest_rate: Decimal  # annual, percent
    tenor_years: int
    start_date: date
    lump_sums: Tuple[LumpSumPayment, ...] = field(default_factory=tuple)
    total_interest_saved: Decimal = _ZERO

    @property
    def expected_payoff_date(self) -> date:
        return self.start_date + relativedelta(months=self.tenor_years * 12)

    @property
    def monthly_rate(self) -> Decimal:
        return self.interest_rate / 100 / 12

    @classmethod
    def from_row(cls, row: Mapping) -> "MortgageRecord":
        """Build from a tracking-table row; bombing_history entries are optional."""
        history = []
        for item in row.get("bombing_history") or []:
            history.append(
                LumpSumPayment(
                    paid_on=as_date(item["date"]),
                    amount=to_decimal(item["amount"]),
                    penalty=to_decimal(item.get("penalty", 0)),
                    balance_before=to_decimal(item["balance_before"]),
                    balance_after=to_decimal(item["balance_after"]),
                )
            )
        principal = to_decimal(row["principal_amount"])
        current = row.get("current_balance")
        return cls(
            principal_amount=principal,
            current_balance=principal if current is None else to_decimal(current),
            monthly_payment=to_decimal(row["monthly_payment"]),
            interest_rate=to_decimal(row["interest_rate"]),
            tenor_years=int(row["tenor_years"]),
            start_date=as_date(row["start_date"]),
            lump_sums=tuple(history),
            total_interest_saved=to_decimal(row.get("total_interest_saved", 0)),
        )


def payment_schedule(
    record: MortgageRecord,
    months: int = 12,
    *,
    as_of: Optional[date] = None,
) -> pd.DataFrame:
    """
    Forward amortization from the current balance at the fixed monthly payment.
    Stops early once the balance hits zero.
    """
    if months <= 0:
        raise InvalidProjectionInput(f"months must be positive, got {months}")
    as_of = as_of or date.today()

    rate = record.monthly_rate
    payment = record.monthly_payment
    balance = record.current_balance

    rows: List[Dict] = []
    for month in range(1, months + 1):
        if balance <= 0:
            break
        interest = balance * rate
        principal = payment - interest
        balance = max(_ZERO, balance - principal)
        rows.append({
            "month": month,
            "date": as_of + relativedelta(months=month - 1),
            "payment": payment,
            "principal": principal,
            "interest": interest,
            "balance": balance,
        })

    return pd.DataFrame(rows, columns=["month", "date", "payment", "principal", "interest", "balance"])


def apply_lump_sum(
    record: MortgageRecord,
    amount,
    *,
    penalty_rate=DEFAULT_PENALTY_RATE,
    as_of: Optional[date] = None,
) -> Tuple[MortgageRecord, LumpSumPayment]:
    """
    Record an extra principal payment. The penalty is taken off the gross
    amount; interest saved is estimated as net amount x monthly rate x whole
    months left until the scheduled payoff.
    """
    amount = to_decimal(amount)
    if amount <= 0:
        raise InvalidProjectionInput(f"lump-sum amount must be positive, got {amount}")
    as_of = as_of or date.today()

    penalty = amount * to_decimal(penalty_rate)
    net = amount - penalty
    before = record.current_balance
    after = max(_ZERO, before - net)

    months_left = max(months_between(as_of, record.expected_payoff_date), 0)
    saved = net * record.monthly_rate * months_left

    payment = LumpSumPayment(
        paid_on=as_of,
        amount=amount,
        penalty=penalty,
        balance_before=before,
        balance_after=after,
    )
    updated = replace(
        record,
        current_balance=after,
        lump_sums=record.lump_sums + (payment,),
        total_interest_saved=record.total_interest_saved + saved,
    )
    return updated, payment


@dataclass(frozen=True)
class PayoffProgress:
    percent_repaid: Decimal
    days_until_payoff: int
    months_until_payoff: int


def payoff_progress(record: MortgageRecord, *, as_of: Optional[date] = None) -> PayoffProgress:
    as_of = as_of or date.today()
    if record.principal_amount > 0:
        pct = (record.principal_amount - record.current_balance) / record.principal_amount * 100
    else:
        pct = _ZERO
    days = (record.expected_payoff_date - as_of).days
    return PayoffProgress(
        percent_repaid=pct,
        days_until_payoff=days,
        months_until_payoff=math.ceil(days / 30),
    )
