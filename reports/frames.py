"""
Typed engine output -> pandas DataFrames for charts and tables.

Money columns are converted to float here and nowhere else; the engine
keeps Decimal so its identities hold exactly.
"""

from __future__ import annotations

from typing import Sequence

import pandas as pd

from engine.records import MonthlyProjection, NetWorthSnapshot

PROJECTION_VALUE_COLUMNS = [
    "projected_inflow",
    "projected_outflow",
    "net_flow",
    "cumulative_balance",
    "recurring_inflow",
    "recurring_outflow",
    "average_historical_inflow",
    "average_historical_outflow",
]

SNAPSHOT_VALUE_COLUMNS = [
    "assets",
    "liabilities",
    "net_worth",
    "cash_component",
    "investment_component",
]


def projections_to_frame(projections: Sequence[MonthlyProjection]) -> pd.DataFrame:
    rows = []
    for p in projections:
        row = {"period": p.period, "month_label": p.month_label}
        for col in PROJECTION_VALUE_COLUMNS:
            row[col] = float(getattr(p, col))
        rows.append(row)
    df = pd.DataFrame(rows, columns=["period", "month_label"] + PROJECTION_VALUE_COLUMNS)
    df["month_start"] = pd.to_datetime(df["period"], format="%Y-%m")
    return df


def snapshots_to_frame(snapshots: Sequence[NetWorthSnapshot], *, rounded: bool = True) -> pd.DataFrame:
    """One row per simulated year; rounded to whole rupiah for display by default."""
    rows = []
    for s in snapshots:
        row = {"year": s.label, "year_index": s.year_index, "calendar_year": s.calendar_year}
        for col in SNAPSHOT_VALUE_COLUMNS:
            value = getattr(s, col)
            row[col] = float(round(value)) if rounded else float(value)
        rows.append(row)
    return pd.DataFrame(rows, columns=["year", "year_index", "calendar_year"] + SNAPSHOT_VALUE_COLUMNS)
