"""
Household Projection Dashboard
==============================

Three views over the projection engine:
  1. Cash Flow:  recurring templates + trailing averages -> monthly forecast
  2. Net Worth:  17-year compounding plan with mortgage paydown milestones
  3. KPR:        mortgage amortization schedule and lump-sum ("bombing") what-if

Run: streamlit run app/streamlit_app.py
"""

from __future__ import annotations

import sys
from dataclasses import replace
from datetime import date
from decimal import Decimal
from pathlib import Path

import pandas as pd
import streamlit as st

try:
    import altair as alt
    _HAS_ALTAIR = True
except ImportError:
    alt = None
    _HAS_ALTAIR = False

# ---------------------------------------------------------------------------
# Make project root importable
# ---------------------------------------------------------------------------
PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

from core.config import ForecastConfig, NetWorthParams, get_settings
from core.logging import configure_logging
from engine.cashflow import forecast
from engine.daily import daily_balance_window
from engine.mortgage import MortgageRecord, apply_lump_sum, payment_schedule, payoff_progress
from engine.recurrence import due_obligations
from engine.records import HistoricalAverage
from engine.runner import run_cashflow_projection, run_networth_projection
from data_prep.obligation_builder import obligations_from_frame
from data_prep.validators import validate_obligation_table
from reports.formatting import format_idr, format_idr_short, format_pct
from reports.frames import projections_to_frame
from reports.milestones import build_networth_report
from reports.summary import summarize_forecast

# ---------------------------------------------------------------------------
# Starter data for the recurring-template editor
# ---------------------------------------------------------------------------
SAMPLE_RECURRING = pd.DataFrame(
    [
        {"template_name": "Salary", "amount": 35_000_000, "type": "income",
         "frequency": "monthly", "next_occurrence": date.today().replace(day=25),
         "custom_interval_days": None, "is_active": True},
        {"template_name": "KPR installment", "amount": 18_500_000, "type": "expense",
         "frequency": "monthly", "next_occurrence": date.today().replace(day=5),
         "custom_interval_days": None, "is_active": True},
        {"template_name": "Groceries", "amount": 1_250_000, "type": "expense",
         "frequency": "weekly", "next_occurrence": date.today(),
         "custom_interval_days": None, "is_active": True},
        {"template_name": "Car insurance", "amount": 6_000_000, "type": "expense",
         "frequency": "yearly", "next_occurrence": date.today(),
         "custom_interval_days": None, "is_active": True},
    ]
)

MONTH_CHOICES = (3, 6, 12)


# ---------------------------------------------------------------------------
# Chart helpers
# ---------------------------------------------------------------------------
def _plot_multi_line(df, *, x, ys, title, y_title, x_type="T", height=300):
    if not isinstance(df, pd.DataFrame) or len(df) == 0 or x not in df.columns:
        st.info("No data to plot.")
        return
    if any(y not in df.columns for y in ys):
        return
    if not _HAS_ALTAIR:
        st.markdown(f"**{title}**")
        st.line_chart(df.set_index(x)[ys])
        return
    long = df[[x] + ys].melt(id_vars=[x], value_vars=ys, var_name="series", value_name="value")
    chart = (
        alt.Chart(long).mark_line(point=True)
        .encode(
            x=alt.X(f"{x}:{x_type}", title=None),
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format=",.0f")),
            color=alt.Color("series:N", title="Series"),
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


def _plot_bars(df, *, x, ys, title, y_title, height=300):
    if not isinstance(df, pd.DataFrame) or len(df) == 0:
        return
    if not _HAS_ALTAIR:
        st.markdown(f"**{title}**")
        st.bar_chart(df.set_index(x)[ys])
        return
    long = df[[x] + ys].melt(id_vars=[x], value_vars=ys, var_name="series", value_name="value")
    chart = (
        alt.Chart(long).mark_bar()
        .encode(
            x=alt.X(f"{x}:N", title=None, sort=None),
            xOffset="series:N",
            y=alt.Y("value:Q", title=y_title, axis=alt.Axis(format=",.0f")),
            color=alt.Color("series:N", title="Series"),
        )
        .properties(title=title, height=height)
    )
    st.altair_chart(chart, use_container_width=True)


# ---------------------------------------------------------------------------
# Views
# ---------------------------------------------------------------------------
def _cashflow_view(as_of: date, cfg: ForecastConfig) -> None:
    st.subheader("Cash Flow Projection")
    st.caption("Recurring templates plus a share of your trailing monthly averages.")

    c1, c2, c3, c4 = st.columns(4)
    starting_balance = c1.number_input("Current balance (Rp)", value=50_000_000, step=1_000_000)
    avg_in = c2.number_input("Avg monthly income (Rp)", value=40_000_000, step=1_000_000)
    avg_out = c3.number_input("Avg monthly expenses (Rp)", value=30_000_000, step=1_000_000)
    default_idx = MONTH_CHOICES.index(cfg.month_count) if cfg.month_count in MONTH_CHOICES else 1
    months = c4.selectbox("Months", MONTH_CHOICES, index=default_idx)
    chart_type = st.radio("Chart", ["Line", "Bar"], horizontal=True)

    rows = st.data_editor(SAMPLE_RECURRING, num_rows="dynamic", use_container_width=True, key="recurring")
    validation = validate_obligation_table(rows)
    if validation.errors or validation.warnings:
        st.code(validation.summary())
    if not validation.is_valid:
        return

    upload = st.file_uploader("Transactions CSV (date, amount, type)", type=["csv"])
    transactions = pd.read_csv(upload) if upload is not None else None

    if transactions is not None:
        # trailing averages come from the uploaded history instead of the inputs above
        df, details = run_cashflow_projection(
            rows, transactions, starting_balance,
            replace(cfg, month_count=int(months)), as_of=as_of,
        )
        obligations = details["obligations"]
        summary = details["summary"]
        hist = details["historical"]
        st.caption(
            f"Trailing {cfg.history_months}-month averages: income {format_idr(hist.average_monthly_inflow)}, "
            f"expenses {format_idr(hist.average_monthly_outflow)}"
        )
    else:
        obligations = obligations_from_frame(rows)
        historical = HistoricalAverage(
            average_monthly_inflow=Decimal(str(avg_in)),
            average_monthly_outflow=Decimal(str(avg_out)),
        )
        projections = forecast(
            starting_balance, obligations, historical, int(months),
            cfg.non_recurring_factor, as_of=as_of, max_occurrences=cfg.max_occurrences,
        )
        summary = summarize_forecast(projections, starting_balance)
        df = projections_to_frame(projections)

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Current Balance", format_idr(summary.starting_balance))
    k2.metric("Total Projected Income", format_idr(summary.total_projected_inflow))
    k3.metric("Total Projected Expenses", format_idr(summary.total_projected_outflow))
    k4.metric(
        "Projected Balance",
        format_idr(summary.final_balance),
        delta=format_idr(summary.final_balance - summary.starting_balance),
    )

    chart_df = df.rename(columns={
        "projected_inflow": "Income",
        "projected_outflow": "Expenses",
        "net_flow": "Net Flow",
        "cumulative_balance": "Balance",
    })
    ys = ["Income", "Expenses", "Net Flow", "Balance"]
    if chart_type == "Line":
        _plot_multi_line(chart_df, x="month_start", ys=ys, title="Monthly Projection", y_title="Rp")
    else:
        _plot_bars(chart_df, x="month_label", ys=ys, title="Monthly Projection", y_title="Rp")

    if summary.months_with_deficit:
        st.warning(
            f"{summary.months_with_deficit} month(s) spend more than they earn; "
            f"lowest balance {format_idr(summary.lowest_balance)} in {summary.lowest_balance_period}."
        )

    scan = due_obligations(obligations, as_of)
    if scan.due:
        st.markdown("**Due today or overdue**")
        st.dataframe(pd.DataFrame([
            {"Template": o.name, "Amount": format_idr(o.amount), "Next": o.anchor} for o in scan.due
        ]), use_container_width=True)

    st.dataframe(df.drop(columns=["month_start"]), use_container_width=True)

    if transactions is not None:
        strip = daily_balance_window(transactions, starting_balance, as_of)
        strip["balance"] = strip["balance"].astype(float)
        strip["date"] = pd.to_datetime(strip["date"])
        _plot_multi_line(strip, x="date", ys=["balance"], title="Balance, last 7 days and next 7", y_title="Rp")


def _networth_view(as_of: date) -> None:
    st.subheader("Net Worth Tracker")
    st.caption("17-year journey to Rp 20–35 miliar")

    c1, c2, c3 = st.columns(3)
    cash = c1.number_input("Cash (Rp)", value=150_000_000, step=10_000_000)
    investment = c2.number_input("Investments (Rp)", value=250_000_000, step=10_000_000)
    liability = c3.number_input("KPR balance (Rp)", value=3_000_000_000, step=50_000_000, min_value=0)

    with st.expander("Assumptions"):
        defaults = NetWorthParams()
        a1, a2, a3 = st.columns(3)
        contribution = a1.number_input("Annual investment (Rp)", value=int(defaults.annual_contribution))
        paydown = a2.number_input("Annual KPR bombing (Rp)", value=int(defaults.annual_debt_paydown))
        active = a3.number_input("Bombing years", value=defaults.active_paydown_years, min_value=0, max_value=17)
        b1, b2 = st.columns(2)
        ret = b1.number_input("Investment return (%)", value=float(defaults.investment_return_rate * 100))
        penalty = b2.number_input("Bombing penalty (%)", value=float(defaults.paydown_penalty_rate * 100))

    params = NetWorthParams(
        annual_contribution=Decimal(str(contribution)),
        annual_debt_paydown=Decimal(str(paydown)),
        paydown_penalty_rate=Decimal(str(penalty)) / 100,
        investment_return_rate=Decimal(str(ret)) / 100,
        active_paydown_years=int(active),
    )
    df, details = run_networth_projection(cash, investment, liability, params, start_year=as_of.year)
    report = build_networth_report(details["snapshots"], active_paydown_years=params.active_paydown_years)

    k1, k2, k3, k4 = st.columns(4)
    k1.metric("Current Net Worth", format_idr(details["current"]["net_worth"]))
    k2.metric("Total Assets", format_idr_short(details["current"]["assets"]))
    k3.metric("KPR Balance", format_idr_short(details["current"]["liabilities"]))
    k4.metric(f"Net Worth {report.final_year}", format_idr_short(report.final_net_worth),
              delta="On track" if report.on_track else "Below target")

    _plot_multi_line(df, x="year", ys=["assets", "liabilities", "net_worth"], x_type="N",
                     title="Projected Net Worth", y_title="Rp")
    st.dataframe(report.to_dataframe(), use_container_width=True, hide_index=True)
    with st.expander("Year-by-year"):
        st.dataframe(df, use_container_width=True, hide_index=True)


def _kpr_view(as_of: date) -> None:
    st.subheader("KPR Bombing Tracker")

    c1, c2, c3 = st.columns(3)
    principal = c1.number_input("Principal (Rp)", value=3_000_000_000, step=50_000_000)
    current = c2.number_input("Current balance (Rp)", value=2_700_000_000, step=50_000_000)
    payment = c3.number_input("Monthly payment (Rp)", value=30_000_000, step=1_000_000)
    d1, d2, d3 = st.columns(3)
    rate = d1.number_input("Interest rate (%)", value=4.99, step=0.01)
    tenor = d2.number_input("Tenor (years)", value=17, min_value=1)
    start = d3.date_input("Start date", value=date(as_of.year - 2, 1, 1))

    record = MortgageRecord(
        principal_amount=Decimal(str(principal)),
        current_balance=Decimal(str(current)),
        monthly_payment=Decimal(str(payment)),
        interest_rate=Decimal(str(rate)),
        tenor_years=int(tenor),
        start_date=start,
    )
    progress = payoff_progress(record, as_of=as_of)
    k1, k2, k3 = st.columns(3)
    k1.metric("Repaid", format_pct(progress.percent_repaid))
    k2.metric("Expected payoff", record.expected_payoff_date.isoformat())
    k3.metric("Months left", progress.months_until_payoff)

    bombing = st.number_input("Lump-sum payment (Rp)", value=0, step=10_000_000, min_value=0)
    if bombing > 0:
        updated, paid = apply_lump_sum(record, bombing, as_of=as_of)
        st.success(
            f"Penalty {format_idr(paid.penalty)}; balance {format_idr(paid.balance_before)} → "
            f"{format_idr(paid.balance_after)}; est. interest saved {format_idr(updated.total_interest_saved)}."
        )
        record = updated

    schedule = payment_schedule(record, 12, as_of=as_of)
    st.markdown("**Next 12 Months Payment Schedule**")
    st.dataframe(schedule.astype({c: float for c in ["payment", "principal", "interest", "balance"]}),
                 use_container_width=True, hide_index=True)


def main() -> None:
    settings = get_settings()
    configure_logging(settings.log_level, json=settings.log_json)

    st.set_page_config(page_title="Household Projection", layout="wide")
    with st.sidebar:
        st.header("Settings")
        as_of = st.date_input("As of", value=date.today())

    cfg = ForecastConfig.from_settings(settings)
    tab_cf, tab_nw, tab_kpr = st.tabs(["Cash Flow", "Net Worth", "KPR"])
    with tab_cf:
        _cashflow_view(as_of, cfg)
    with tab_nw:
        _networth_view(as_of)
    with tab_kpr:
        _kpr_view(as_of)


if __name__ == "__main__":
    main()
