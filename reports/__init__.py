"""
Reporting outputs — summaries, milestones, chart frames, and currency formatting.
"""

from .summary import ForecastSummary, summarize_forecast
from .milestones import NetWorthReport, build_networth_report
from .frames import projections_to_frame, snapshots_to_frame
from .formatting import format_idr, format_idr_short

__all__ = [
    "ForecastSummary",
    "summarize_forecast",
    "NetWorthReport",
    "build_networth_report",
    "projections_to_frame",
    "snapshots_to_frame",
    "format_idr",
    "format_idr_short",
]
