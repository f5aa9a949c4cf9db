"""
Data preparation — typed records from database rows, historical averages, validation.
"""

from .obligation_builder import canonicalize_columns, obligations_from_frame
from .history import historical_average_from_transactions
from .validators import ValidationResult, validate_obligation_table

__all__ = [
    "canonicalize_columns",
    "obligations_from_frame",
    "historical_average_from_transactions",
    "ValidationResult",
    "validate_obligation_table",
]
