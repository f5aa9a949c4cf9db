"""
Typed records passed into and out of the projection engine.

Database rows arrive as loosely typed dicts / DataFrame rows; data_prep turns
them into these records before anything is projected.
"""

from __future__ import annotations

from dataclasses import dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Optional, Union


class Direction(str, Enum):
    INFLOW = "inflow"
    OUTFLOW = "outflow"


class Frequency(str, Enum):
    DAILY = "daily"
    WEEKLY = "weekly"
    MONTHLY = "monthly"
    YEARLY = "yearly"
    CUSTOM = "custom"


@dataclass(frozen=True)
class RecurringObligation:
    """
    A recurring income or expense template.

    frequency is kept as whatever the row carried: an unrecognized value is a
    data problem the expander tolerates (zero occurrences), not a type error.
    custom_interval_days is only meaningful when frequency is "custom".
    """

    amount: Decimal
    direction: Direction
    frequency: Union[Frequency, str]
    anchor: date
    custom_interval_days: Optional[int] = None
    name: str = ""
    is_active: bool = True
    end_date: Optional[date] = None


@dataclass(frozen=True)
class HistoricalAverage:
    """Trailing-window monthly averages supplied by the caller."""

    average_monthly_inflow: Decimal = Decimal("0")
    average_monthly_outflow: Decimal = Decimal("0")


@dataclass(frozen=True)
class MonthlyProjection:
    period: str  # "2024-02"
    month_label: str  # "Feb 2024"
    projected_inflow: Decimal
    projected_outflow: Decimal
    net_flow: Decimal
    cumulative_balance: Decimal
    recurring_inflow: Decimal
    recurring_outflow: Decimal
    average_historical_inflow: Decimal
    average_historical_outflow: Decimal


@dataclass(frozen=True)
class NetWorthSnapshot:
    year_index: int
    calendar_year: int
    assets: Decimal
    liabilities: Decimal
    net_worth: Decimal
    cash_component: Decimal
    investment_component: Decimal

    @property
    def label(self) -> str:
        return f"Y{self.year_index}"
