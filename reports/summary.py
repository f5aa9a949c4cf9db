"""
Cash-flow forecast summary — the numbers behind the summary cards:
current balance, total projected income/expenses/net, projected final balance.
"""

from __future__ import annotations

from dataclasses import dataclass
from decimal import Decimal
from typing import Optional, Sequence

from core.utils import to_decimal
from engine.records import MonthlyProjection


@dataclass(frozen=True)
class ForecastSummary:
    starting_balance: Decimal
    total_projected_inflow: Decimal
    total_projected_outflow: Decimal
    total_net_flow: Decimal
    final_balance: Decimal
    lowest_balance: Decimal
    lowest_balance_period: Optional[str]
    months_with_deficit: int

    @property
    def balance_grows(self) -> bool:
        return self.final_balance >= self.starting_balance


def summarize_forecast(
    projections: Sequence[MonthlyProjection],
    starting_balance,
) -> ForecastSummary:
    """An empty forecast summarizes to the starting balance."""
    start = to_decimal(starting_balance)
    total_in = sum((p.projected_inflow for p in projections), Decimal("0"))
    total_out = sum((p.projected_outflow for p in projections), Decimal("0"))

    lowest = min(projections, key=lambda p: p.cumulative_balance, default=None)

    return ForecastSummary(
        starting_balance=start,
        total_projected_inflow=total_in,
        total_projected_outflow=total_out,
        total_net_flow=total_in - total_out,
        final_balance=projections[-1].cumulative_balance if projections else start,
        lowest_balance=lowest.cumulative_balance if lowest is not None else start,
        lowest_balance_period=lowest.period if lowest is not None else None,
        months_with_deficit=sum(1 for p in projections if p.net_flow < 0),
    )
