"""
Core package — schema definitions, configuration, errors, logging, and shared utilities.
No business logic lives here.
"""

from .schema import OBLIGATION_COLUMNS, TRANSACTION_COLUMNS
from .config import EngineSettings, ForecastConfig, NetWorthParams, get_settings
from .errors import InvalidProjectionInput
from .utils import require_columns, to_decimal, month_bounds, month_starts

__all__ = [
    "OBLIGATION_COLUMNS",
    "TRANSACTION_COLUMNS",
    "EngineSettings",
    "ForecastConfig",
    "NetWorthParams",
    "get_settings",
    "InvalidProjectionInput",
    "require_columns",
    "to_decimal",
    "month_bounds",
    "month_starts",
]
