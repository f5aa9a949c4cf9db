"""Shared pytest fixtures. Living at the project root also puts the top-level packages on sys.path."""

from datetime import date
from decimal import Decimal

import pytest

from engine.records import Direction, Frequency, RecurringObligation


@pytest.fixture
def monthly_rent():
    return RecurringObligation(
        amount=Decimal("1000000"),
        direction=Direction.OUTFLOW,
        frequency=Frequency.MONTHLY,
        anchor=date(2024, 1, 15),
        name="Rent",
    )


@pytest.fixture
def monthly_salary():
    return RecurringObligation(
        amount=Decimal("5000000"),
        direction=Direction.INFLOW,
        frequency=Frequency.MONTHLY,
        anchor=date(2024, 1, 25),
        name="Salary",
    )


@pytest.fixture
def daily_coffee():
    return RecurringObligation(
        amount=Decimal("25000"),
        direction=Direction.OUTFLOW,
        frequency=Frequency.DAILY,
        anchor=date(2024, 1, 1),
        name="Coffee",
    )
