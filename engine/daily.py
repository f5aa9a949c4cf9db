"""
Two-week daily balance strip for the dashboard cash-flow widget.

Past days come from actual transactions, unwound backwards from today's
balance; future days add this month's average daily income and expense.
"""

from __future__ import annotations

import calendar
from datetime import date, timedelta
from decimal import Decimal
from typing import Dict, List, Tuple

import pandas as pd

from core.schema import EXPENSE_TYPE, INCOME_TYPE, TRANSACTION_COLUMNS
from core.utils import month_bounds, require_columns, to_decimal

_ZERO = Decimal("0")


def _daily_totals(transactions: pd.DataFrame, start: date, end: date) -> Dict[date, Tuple[Decimal, Decimal]]:
    df = transactions.copy()
    df["date"] = pd.to_datetime(df["date"], errors="coerce").dt.date
    df = df[df["date"].notna() & (df["date"] >= start) & (df["date"] <= end)]

    totals: Dict[date, Tuple[Decimal, Decimal]] = {}
    for row in df.itertuples(index=False):
        inc, exp = totals.get(row.date, (_ZERO, _ZERO))
        amount = to_decimal(row.amount)
        if row.type == INCOME_TYPE:
            inc += amount
        elif row.type == EXPENSE_TYPE:
            exp += amount
        totals[row.date] = (inc, exp)
    return totals


def daily_balance_window(
    transactions: pd.DataFrame,
    current_balance,
    today: date,
    *,
    days_back: int = 7,
    days_forward: int = 7,
) -> pd.DataFrame:
    """
    Balance at the end of each day from today - days_back to
    today + days_forward - 1. Transfers and other types are ignored.

    Returns DataFrame: date, balance, income, expense, is_forecast
    """
    require_columns(transactions, TRANSACTION_COLUMNS)
    current = to_decimal(current_balance)

    month_start, _ = month_bounds(today)
    window_start = min(today - timedelta(days=days_back), month_start)
    totals = _daily_totals(transactions, window_start, today)

    month_income = sum((v[0] for d, v in totals.items() if d >= month_start), _ZERO)
    month_expense = sum((v[1] for d, v in totals.items() if d >= month_start), _ZERO)
    days_in_month = calendar.monthrange(today.year, today.month)[1]
    daily_income = month_income / days_in_month
    daily_expense = month_expense / days_in_month

    past: List[dict] = []
    balance = current
    for offset in range(0, days_back + 1):
        day = today - timedelta(days=offset)
        inc, exp = totals.get(day, (_ZERO, _ZERO))
        if offset > 0:
            past.append({"date": day, "balance": balance, "income": inc, "expense": exp, "is_forecast": False})
        # balance at end of the previous day
        balance = balance - inc + exp
    past.reverse()

    today_inc, today_exp = totals.get(today, (_ZERO, _ZERO))
    rows = past + [{"date": today, "balance": current, "income": today_inc, "expense": today_exp, "is_forecast": False}]

    balance = current
    for offset in range(1, days_forward):
        balance = balance + daily_income - daily_expense
        rows.append({
            "date": today + timedelta(days=offset),
            "balance": balance,
            "income": daily_income,
            "expense": daily_expense,
            "is_forecast": True,
        })

    return pd.DataFrame(rows, columns=["date", "balance", "income", "expense", "is_forecast"])
