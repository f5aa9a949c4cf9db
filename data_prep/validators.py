"""
Data quality checks for recurring-transaction rows before they are projected.

The engine itself never rejects a malformed obligation (it just expands to
nothing), so this is where the dashboard finds out why a template is being
ignored:
- Missing required columns (the only blocking error)
- Rows with a missing amount or unparseable date, which are skipped
- Non-positive amounts
- Custom frequency without an interval, or an unknown frequency/type
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import List

import pandas as pd

from core.schema import EXPENSE_TYPE, INCOME_TYPE, OBLIGATION_COLUMNS
from engine.records import Frequency

from .obligation_builder import canonicalize_columns


@dataclass
class ValidationResult:
    """Collects all validation warnings/errors for an obligation table."""
    errors: List[str] = field(default_factory=list)
    warnings: List[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def summary(self) -> str:
        lines = []
        if self.errors:
            lines.append(f"ERRORS ({len(self.errors)}):")
            for e in self.errors:
                lines.append(f"  ✗ {e}")
        if self.warnings:
            lines.append(f"WARNINGS ({len(self.warnings)}):")
            for w in self.warnings:
                lines.append(f"  ⚠ {w}")
        if not lines:
            lines.append("✓ All checks passed.")
        return "\n".join(lines)


def validate_obligation_table(
    table: pd.DataFrame,
    *,
    columns: tuple = OBLIGATION_COLUMNS,
) -> ValidationResult:
    """
    Run all validation checks on recurring-transaction rows.
    Returns a ValidationResult with errors (blocking: the table cannot be read)
    and warnings (bad rows are skipped, the rest still project).
    """
    result = ValidationResult()
    table = canonicalize_columns(table)

    # --- Schema checks ---
    missing = [c for c in columns if c not in table.columns]
    if missing:
        result.errors.append(f"Missing required columns: {missing}")
        return result  # can't continue without columns

    if len(table) == 0:
        result.warnings.append("No recurring transactions (0 rows).")
        return result

    # --- Amounts ---
    amount = pd.to_numeric(table["amount"], errors="coerce")
    n_bad_amount = int(amount.isna().sum())
    if n_bad_amount:
        result.warnings.append(f"{n_bad_amount} rows have a missing or non-numeric amount (skipped).")
    n_non_positive = int((amount <= 0).sum())
    if n_non_positive:
        result.warnings.append(f"{n_non_positive} rows have a zero or negative amount.")

    # --- Dates ---
    nxt = pd.to_datetime(table["next_occurrence"], errors="coerce")
    n_bad_date = int(nxt.isna().sum())
    if n_bad_date:
        result.warnings.append(f"{n_bad_date} rows have an unparseable next_occurrence (skipped).")

    if "end_date" in table.columns:
        end = pd.to_datetime(table["end_date"], errors="coerce")
        n_inverted = int((end.notna() & nxt.notna() & (end < nxt)).sum())
        if n_inverted:
            result.warnings.append(f"{n_inverted} rows end before their next occurrence.")

    # --- Frequency ---
    freq = table["frequency"].astype(str).str.strip().str.lower()
    known = {f.value for f in Frequency}
    unknown = sorted(set(freq[~freq.isin(known)]))
    if unknown:
        result.warnings.append(f"Unknown frequencies (rows will not project): {unknown}")

    is_custom = freq == Frequency.CUSTOM.value
    if is_custom.any():
        if "custom_interval_days" in table.columns:
            interval = pd.to_numeric(table["custom_interval_days"], errors="coerce")
        else:
            interval = pd.Series(float("nan"), index=table.index)
        n_no_interval = int((is_custom & ~(interval > 0)).sum())
        if n_no_interval:
            result.warnings.append(
                f"{n_no_interval} custom-frequency rows lack a positive custom_interval_days."
            )
    if "custom_interval_days" in table.columns:
        interval = pd.to_numeric(table["custom_interval_days"], errors="coerce")
        n_stray = int((~is_custom & interval.notna()).sum())
        if n_stray:
            result.warnings.append(
                f"{n_stray} non-custom rows carry a custom_interval_days (ignored)."
            )

    # --- Type ---
    types = table["type"].astype(str).str.strip().str.lower()
    odd = sorted(set(types[~types.isin([INCOME_TYPE, EXPENSE_TYPE])]))
    if odd:
        result.warnings.append(f"Unrecognized types treated as expense: {odd}")

    return result
