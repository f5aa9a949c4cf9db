"""
Trailing-window historical averages from realized transactions.

The forecaster treats these as opaque inputs; this is the dashboard's way of
producing them: take income/expense transactions dated from as_of - months
through as_of, total them per calendar month, and average over the months that
actually have transactions (at least one, so an empty history gives 0).
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal

import pandas as pd
from dateutil.relativedelta import relativedelta

from core.schema import EXPENSE_TYPE, INCOME_TYPE, TRANSACTION_COLUMNS
from core.utils import require_columns, to_decimal
from engine.records import HistoricalAverage


def historical_average_from_transactions(
    transactions: pd.DataFrame,
    *,
    as_of: date,
    months: int = 6,
) -> HistoricalAverage:
    require_columns(transactions, TRANSACTION_COLUMNS)
    if transactions.empty:
        return HistoricalAverage()

    df = transactions.loc[:, list(TRANSACTION_COLUMNS)].copy()
    df["date"] = pd.to_datetime(df["date"], errors="coerce")
    cutoff = pd.Timestamp(as_of - relativedelta(months=months))
    df = df[
        df["date"].notna()
        & (df["date"] >= cutoff)
        & (df["date"].dt.normalize() <= pd.Timestamp(as_of))
        & df["type"].isin([INCOME_TYPE, EXPENSE_TYPE])
    ]
    if df.empty:
        return HistoricalAverage()

    df["month"] = df["date"].dt.to_period("M")
    df["amount"] = df["amount"].map(to_decimal)
    n_months = max(df["month"].nunique(), 1)

    income = sum(df.loc[df["type"] == INCOME_TYPE, "amount"], Decimal("0"))
    expense = sum(df.loc[df["type"] == EXPENSE_TYPE, "amount"], Decimal("0"))

    return HistoricalAverage(
        average_monthly_inflow=income / n_months,
        average_monthly_outflow=expense / n_months,
    )
