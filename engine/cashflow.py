"""
Monthly cash-flow forecaster.

Projected flow for a month blends two sources:
  1. Recurring obligations expanded into that month's window (known amounts)
  2. A share (non_recurring_factor, 0.7 by default) of the trailing historical
     monthly average, standing in for everything that is not a known obligation

The historical average already contains last months' recurring amounts, so
only part of it is added on top of the expanded obligations.

All arithmetic is Decimal; net_flow and cumulative_balance are exact sums of
the values reported on each row.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence, Tuple

import structlog

from core.errors import InvalidProjectionInput
from core.utils import month_bounds, month_starts, to_decimal

from .records import Direction, HistoricalAverage, MonthlyProjection, RecurringObligation
from .recurrence import DEFAULT_MAX_OCCURRENCES, expand_occurrences

log = structlog.get_logger(__name__)

DEFAULT_NON_RECURRING_FACTOR = Decimal("0.7")

_ZERO = Decimal("0")


def recurring_totals(
    obligations: Sequence[RecurringObligation],
    window_start: date,
    window_end: date,
    *,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> Tuple[Decimal, Decimal]:
    """Sum of expanded occurrence amounts in the window, split into (inflow, outflow)."""
    inflow = _ZERO
    outflow = _ZERO
    for ob in obligations:
        n = expand_occurrences(
            ob, window_start, window_end, max_occurrences=max_occurrences
        ).count()
        if n == 0:
            continue
        amount = to_decimal(ob.amount) * n
        if ob.direction == Direction.INFLOW:
            inflow += amount
        else:
            outflow += amount
    return inflow, outflow


def _check_month_count(month_count) -> int:
    if isinstance(month_count, bool) or not isinstance(month_count, int):
        raise InvalidProjectionInput(f"month_count must be an integer, got {month_count!r}")
    if month_count <= 0:
        raise InvalidProjectionInput(f"month_count must be positive, got {month_count}")
    return month_count


def forecast(
    starting_balance,
    obligations: Sequence[RecurringObligation],
    historical: Optional[HistoricalAverage],
    month_count: int,
    non_recurring_factor=DEFAULT_NON_RECURRING_FACTOR,
    *,
    as_of: Optional[date] = None,
    max_occurrences: int = DEFAULT_MAX_OCCURRENCES,
) -> List[MonthlyProjection]:
    """
    Project income, expenses, net flow and running balance for `month_count`
    months starting with the calendar month of `as_of` (today if omitted).

    Parameters
    ----------
    starting_balance : number
        Balance before month 0 (sum of active non-debt accounts).
    obligations : sequence of RecurringObligation
        Recurring templates; inactive / malformed ones contribute nothing.
    historical : HistoricalAverage or None
        Trailing monthly averages. None means recurring-only projection.
    month_count : int
        Number of months to project; any positive integer.
    non_recurring_factor : number
        Weight applied to the historical averages.
    """
    month_count = _check_month_count(month_count)
    factor = to_decimal(non_recurring_factor)
    if factor < 0:
        raise InvalidProjectionInput(f"non_recurring_factor must be >= 0, got {factor}")

    as_of = as_of or date.today()
    historical = historical or HistoricalAverage()
    avg_in = to_decimal(historical.average_monthly_inflow)
    avg_out = to_decimal(historical.average_monthly_outflow)

    balance = to_decimal(starting_balance)
    rows: List[MonthlyProjection] = []

    for first_day in month_starts(as_of, month_count):
        start, end = month_bounds(first_day)
        rec_in, rec_out = recurring_totals(
            obligations, start, end, max_occurrences=max_occurrences
        )

        projected_in = rec_in + avg_in * factor
        projected_out = rec_out + avg_out * factor
        net = projected_in - projected_out
        balance += net

        rows.append(
            MonthlyProjection(
                period=start.strftime("%Y-%m"),
                month_label=start.strftime("%b %Y"),
                projected_inflow=projected_in,
                projected_outflow=projected_out,
                net_flow=net,
                cumulative_balance=balance,
                recurring_inflow=rec_in,
                recurring_outflow=rec_out,
                average_historical_inflow=avg_in,
                average_historical_outflow=avg_out,
            )
        )

    log.info(
        "cashflow_forecast",
        months=month_count,
        obligations=len(obligations),
        first_period=rows[0].period,
        final_balance=str(balance),
    )
    return rows
