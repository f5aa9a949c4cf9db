"""
Projection engine — recurrence expansion, monthly cash-flow forecast, net-worth simulation.

Pure functions over explicit inputs. engine.runner wires them to raw
data-store frames and is imported directly, not re-exported here.
"""

from .records import (
    Direction,
    Frequency,
    HistoricalAverage,
    MonthlyProjection,
    NetWorthSnapshot,
    RecurringObligation,
)
from .recurrence import due_obligations, expand_occurrences, next_occurrence
from .cashflow import forecast
from .networth import simulate

__all__ = [
    "Direction",
    "Frequency",
    "HistoricalAverage",
    "MonthlyProjection",
    "NetWorthSnapshot",
    "RecurringObligation",
    "due_obligations",
    "expand_occurrences",
    "next_occurrence",
    "forecast",
    "simulate",
]
