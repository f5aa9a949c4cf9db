"""
Net-worth milestones — is the household plan on track?

Translates a simulated trajectory into the statements the net-worth page shows:
  - final (year 17) net worth against the Rp 20–35 miliar target band
  - the first year the mortgage is fully retired, if ever
  - mortgage still outstanding when the paydown window closes
"""

from __future__ import annotations

from dataclasses import dataclass, field
from decimal import Decimal
from typing import List, Optional, Sequence

import pandas as pd

from core.errors import InvalidProjectionInput
from core.utils import to_decimal
from engine.networth import first_debt_free_year, snapshot_for_year
from engine.records import NetWorthSnapshot

from .formatting import format_idr, format_idr_short

DEFAULT_TARGET_MIN = Decimal("20000000000")  # Rp 20 miliar
DEFAULT_TARGET_MAX = Decimal("35000000000")  # Rp 35 miliar


@dataclass
class NetWorthReport:
    """Structured milestone output for one simulation run."""
    start_net_worth: Decimal
    final_net_worth: Decimal
    final_year: int
    target_min: Decimal
    target_max: Decimal

    debt_free_year_index: Optional[int]
    debt_free_calendar_year: Optional[int]
    liability_after_paydown: Decimal

    flags: List[str] = field(default_factory=list)

    @property
    def on_track(self) -> bool:
        return self.final_net_worth >= self.target_min

    @property
    def exceeds_target(self) -> bool:
        return self.final_net_worth > self.target_max

    def to_dataframe(self) -> pd.DataFrame:
        """Convert to a display-friendly table."""
        debt_free = (
            f"Y{self.debt_free_year_index} ({self.debt_free_calendar_year})"
            if self.debt_free_year_index is not None
            else "Not within horizon"
        )
        rows = [
            {"Metric": "Current Net Worth", "Value": format_idr(self.start_net_worth)},
            {"Metric": f"Net Worth in {self.final_year}", "Value": format_idr(self.final_net_worth)},
            {
                "Metric": "Target",
                "Value": f"{format_idr_short(self.target_min)} – {format_idr_short(self.target_max)}",
            },
            {"Metric": "On Track", "Value": "Yes" if self.on_track else "No"},
            {"Metric": "Mortgage Paid Off", "Value": debt_free},
            {"Metric": "Mortgage Left After Paydown", "Value": format_idr(self.liability_after_paydown)},
        ]
        if self.flags:
            rows.append({"Metric": "FLAGS", "Value": " | ".join(self.flags)})
        return pd.DataFrame(rows)


def build_networth_report(
    snapshots: Sequence[NetWorthSnapshot],
    *,
    active_paydown_years: int = 6,
    target_min=DEFAULT_TARGET_MIN,
    target_max=DEFAULT_TARGET_MAX,
) -> NetWorthReport:
    """
    Parameters
    ----------
    snapshots : sequence of NetWorthSnapshot
        Output of engine.networth.simulate(), year 0 first.
    active_paydown_years : int
        Paydown window used for the run; the liability is read at its last year.
    target_min, target_max : number
        Target band for the final year's net worth.
    """
    if not snapshots:
        raise InvalidProjectionInput("No snapshots to build a report from.")

    target_min = to_decimal(target_min)
    target_max = to_decimal(target_max)
    first = snapshots[0]
    last = snapshots[-1]

    paydown_end = snapshot_for_year(snapshots, min(active_paydown_years, len(snapshots) - 1))
    debt_free = first_debt_free_year(snapshots)

    flags = []
    if last.net_worth < target_min:
        flags.append(f"BELOW_TARGET: {format_idr_short(last.net_worth)} under {format_idr_short(target_min)}")
    if first.liabilities > 0 and debt_free is None:
        flags.append(
            f"MORTGAGE_NOT_RETIRED: {format_idr_short(last.liabilities)} still outstanding in {last.calendar_year}"
        )
    if any(s.net_worth < 0 for s in snapshots):
        flags.append("NEGATIVE_NET_WORTH: net worth dips below zero")

    return NetWorthReport(
        start_net_worth=first.net_worth,
        final_net_worth=last.net_worth,
        final_year=last.calendar_year,
        target_min=target_min,
        target_max=target_max,
        debt_free_year_index=debt_free.year_index if debt_free is not None else None,
        debt_free_calendar_year=debt_free.calendar_year if debt_free is not None else None,
        liability_after_paydown=paydown_end.liabilities,
        flags=flags,
    )
