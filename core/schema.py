from __future__ import annotations

from typing import Tuple

# Columns of a `recurring_transactions` row that the engine reads.
# Anything else on the row (ids, category, merchant, ...) is ignored.
OBLIGATION_COLUMNS: Tuple[str, ...] = (
    "amount",
    "type",
    "frequency",
    "next_occurrence",
)

OPTIONAL_OBLIGATION_COLUMNS: Tuple[str, ...] = (
    "template_name",
    "custom_interval_days",
    "is_active",
    "end_date",
)

# Columns of a `transactions` row used for historical averages and the daily widget.
TRANSACTION_COLUMNS: Tuple[str, ...] = (
    "date",
    "amount",
    "type",
)

INCOME_TYPE = "income"
EXPENSE_TYPE = "expense"
