from __future__ import annotations

import calendar
from datetime import date, datetime
from decimal import Decimal
from typing import Iterable, List, Tuple

import pandas as pd
from dateutil.relativedelta import relativedelta


def require_columns(df: pd.DataFrame, cols: Iterable[str]) -> None:
    missing = [c for c in cols if c not in df.columns]
    if missing:
        raise ValueError(f"Missing required columns: {missing}")


def to_decimal(value) -> Decimal:
    """Coerce int/float/str/Decimal to Decimal via str() so 0.7 stays 0.7. None -> 0."""
    if value is None:
        return Decimal("0")
    if isinstance(value, Decimal):
        return value
    if isinstance(value, float) and pd.isna(value):
        return Decimal("0")
    return Decimal(str(value))


def as_date(value) -> date:
    """Normalize date/datetime/Timestamp/ISO string to a plain date."""
    if isinstance(value, datetime):
        return value.date()
    if isinstance(value, date):
        return value
    return pd.Timestamp(value).date()


def month_bounds(any_day: date) -> Tuple[date, date]:
    """First and last calendar day of the month containing any_day."""
    last = calendar.monthrange(any_day.year, any_day.month)[1]
    return any_day.replace(day=1), any_day.replace(day=last)


def month_starts(as_of: date, n_months: int) -> List[date]:
    """
    Month-start dates for projection periods beginning with as_of's own month.
    Unlike a loan tape, the current month is period 0 here.
    """
    first = as_of.replace(day=1)
    return [first + relativedelta(months=k) for k in range(n_months)]


def months_between(start: date, end: date) -> int:
    """
    Whole calendar months from start to end, rounded toward zero: a month
    only counts once end has reached start's day of month.
    """
    months = (end.year - start.year) * 12 + (end.month - start.month)
    if months > 0 and end.day < start.day:
        months -= 1
    elif months < 0 and end.day > start.day:
        months += 1
    return months
