"""
Net-worth compounding simulator — 17-year household trajectory.

Year 0 is today's balance sheet. Each later year:
  1. investment grows by investment_return_rate
  2. while y <= active_paydown_years: the annual contribution is invested and,
     if the mortgage is still open, annual_debt_paydown * (1 - penalty) comes
     off the liability (floored at zero)
  3. after the active window: contribution + paydown are both invested;
     the liability is no longer reduced

Liability reduction is linear: no interest accrues on the outstanding
mortgage balance, and a balance left over after the active window is carried
unchanged to the horizon. With the default plan (Rp 3 miliar, Rp 500 juta a
year at 4% penalty) that leaves Rp 120 juta outstanding after year 6.

Cash is held constant; the simulator does not model cash accumulation.
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import List, Optional, Sequence

import structlog

from core.config import NetWorthParams
from core.errors import InvalidProjectionInput
from core.utils import to_decimal

from .records import NetWorthSnapshot

log = structlog.get_logger(__name__)

_ZERO = Decimal("0")


def simulate(
    initial_cash,
    initial_investment,
    initial_liability,
    params: Optional[NetWorthParams] = None,
    *,
    start_year: Optional[int] = None,
) -> List[NetWorthSnapshot]:
    """
    Run the simulation; returns horizon_years + 1 snapshots (years 0..17 by default).
    """
    params = params or NetWorthParams()
    if params.horizon_years < 0:
        raise InvalidProjectionInput(f"horizon_years must be >= 0, got {params.horizon_years}")

    cash = to_decimal(initial_cash)
    investment = to_decimal(initial_investment)
    liability = to_decimal(initial_liability)
    if liability < 0:
        raise InvalidProjectionInput(f"initial_liability must be >= 0, got {liability}")

    contribution = to_decimal(params.annual_contribution)
    paydown = to_decimal(params.annual_debt_paydown)
    growth = 1 + to_decimal(params.investment_return_rate)
    net_paydown = paydown * (1 - to_decimal(params.paydown_penalty_rate))
    active_years = params.active_paydown_years

    start_year = date.today().year if start_year is None else start_year

    snapshots: List[NetWorthSnapshot] = []
    for year in range(params.horizon_years + 1):
        if year > 0:
            investment = investment * growth
            if year <= active_years:
                investment += contribution
                if liability > 0:
                    liability = max(_ZERO, liability - net_paydown)
            else:
                investment += contribution + paydown

        assets = cash + investment
        snapshots.append(
            NetWorthSnapshot(
                year_index=year,
                calendar_year=start_year + year,
                assets=assets,
                liabilities=liability,
                net_worth=assets - liability,
                cash_component=cash,
                investment_component=investment,
            )
        )

    log.info(
        "networth_simulated",
        years=params.horizon_years,
        final_net_worth=str(snapshots[-1].net_worth),
        residual_liability=str(liability),
    )
    return snapshots


def snapshot_for_year(snapshots: Sequence[NetWorthSnapshot], year_index: int) -> NetWorthSnapshot:
    """Direct lookup; the horizon is fixed so the index is the year."""
    if year_index < 0 or year_index >= len(snapshots):
        raise InvalidProjectionInput(
            f"year_index {year_index} outside simulated horizon 0..{len(snapshots) - 1}"
        )
    return snapshots[year_index]


def first_debt_free_year(snapshots: Sequence[NetWorthSnapshot]) -> Optional[NetWorthSnapshot]:
    """First snapshot with zero liabilities, or None if the debt is never retired."""
    for snap in snapshots:
        if snap.liabilities == 0:
            return snap
    return None
