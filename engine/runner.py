"""
Projection runner — turns raw data-store rows into engine inputs and runs a projection.

The views fetch accounts, transactions and recurring templates (in parallel,
outside this module) and hand the raw frames here. This module:
  1. converts recurring rows to typed obligations
  2. derives trailing historical averages from transactions
  3. runs the forecaster / simulator
  4. returns a chart-ready DataFrame plus the typed records and summary
"""

from __future__ import annotations

from datetime import date
from decimal import Decimal
from typing import Dict, Optional, Tuple

import pandas as pd
import structlog

from core.config import ForecastConfig, NetWorthParams
from core.utils import to_decimal
from data_prep.history import historical_average_from_transactions
from data_prep.obligation_builder import obligations_from_frame
from data_prep.validators import validate_obligation_table
from reports.frames import projections_to_frame, snapshots_to_frame
from reports.summary import summarize_forecast

from .cashflow import forecast
from .networth import first_debt_free_year, simulate

log = structlog.get_logger(__name__)


def run_cashflow_projection(
    recurring_rows: pd.DataFrame,
    transactions: pd.DataFrame,
    starting_balance,
    config: Optional[ForecastConfig] = None,
    *,
    as_of: Optional[date] = None,
) -> Tuple[pd.DataFrame, Dict]:
    """
    Run the cash-flow forecast from raw rows.

    Returns
    -------
    (projection_df, details)
    projection_df: one row per month, float columns for charting
    details: typed projections, summary, historical average, validation result
    """
    cfg = config or ForecastConfig()
    as_of = as_of or date.today()

    # only a missing column blocks; unreadable rows are dropped by the builder
    validation = validate_obligation_table(recurring_rows)
    if not validation.is_valid:
        log.warning("recurring_rows_invalid", errors=validation.errors)
    elif validation.warnings:
        log.info("recurring_rows_warnings", warnings=validation.warnings)

    obligations = obligations_from_frame(recurring_rows) if validation.is_valid else []
    historical = historical_average_from_transactions(
        transactions, as_of=as_of, months=cfg.history_months
    )

    projections = forecast(
        starting_balance,
        obligations,
        historical,
        cfg.month_count,
        cfg.non_recurring_factor,
        as_of=as_of,
        max_occurrences=cfg.max_occurrences,
    )
    summary = summarize_forecast(projections, starting_balance)

    details = {
        "projections": projections,
        "summary": summary,
        "historical": historical,
        "obligations": obligations,
        "validation": validation,
    }
    return projections_to_frame(projections), details


def run_networth_projection(
    cash_balance,
    investment_value,
    liability_balance,
    params: Optional[NetWorthParams] = None,
    *,
    start_year: Optional[int] = None,
) -> Tuple[pd.DataFrame, Dict]:
    """Net-worth simulation plus the current balance sheet it started from."""
    cash = to_decimal(cash_balance)
    investment = to_decimal(investment_value)
    liability = to_decimal(liability_balance)

    snapshots = simulate(cash, investment, liability, params, start_year=start_year)
    details = {
        "snapshots": snapshots,
        "current": {
            "cash": cash,
            "investment": investment,
            "liabilities": liability,
            "assets": cash + investment,
            "net_worth": cash + investment - liability,
        },
        "debt_free": first_debt_free_year(snapshots),
        "residual_liability": snapshots[-1].liabilities if snapshots else Decimal("0"),
    }
    return snapshots_to_frame(snapshots), details
