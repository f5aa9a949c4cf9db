"""
Build typed RecurringObligation records from `recurring_transactions` rows.

Rows arrive from the data store as a DataFrame (or list of dicts). Column
names vary a little between exports, so aliases are normalized first.
"""

from __future__ import annotations

from typing import Dict, Iterable, List, Mapping, Union

import pandas as pd
import structlog

from core.schema import INCOME_TYPE, OBLIGATION_COLUMNS, OPTIONAL_OBLIGATION_COLUMNS
from core.utils import require_columns, to_decimal
from engine.records import Direction, RecurringObligation

log = structlog.get_logger(__name__)


_COLUMN_ALIASES: Dict[str, str] = {
    # cursor / anchor
    "nextOccurrence": "next_occurrence",
    "next_date": "next_occurrence",
    "anchor": "next_occurrence",
    "start_date": "next_occurrence",
    # direction
    "transaction_type": "type",
    "direction": "type",
    # custom interval
    "customIntervalDays": "custom_interval_days",
    "interval_days": "custom_interval_days",
    # naming
    "name": "template_name",
    "description": "template_name",
    "isActive": "is_active",
    "endDate": "end_date",
}


def canonicalize_columns(df: pd.DataFrame) -> pd.DataFrame:
    """Return a copy with alias column names normalized. A canonical column already present wins."""
    ren: Dict[str, str] = {}
    for col in df.columns:
        target = _COLUMN_ALIASES.get(col)
        if target and target not in df.columns and target not in ren.values():
            ren[col] = target
    return df.rename(columns=ren).copy()


def _direction(raw) -> Direction:
    # anything that is not income is spent money
    text = str(raw).strip().lower()
    if text in (INCOME_TYPE, Direction.INFLOW.value):
        return Direction.INFLOW
    return Direction.OUTFLOW


def _optional_int(value):
    if value is None or pd.isna(value):
        return None
    return int(value)


def _optional_date(value):
    if value is None or pd.isna(value):
        return None
    return pd.Timestamp(value).date()


_FALSE_STRINGS = {"false", "f", "no", "n", "0", "off"}


def _flag(value) -> bool:
    """is_active from bools, numbers or text exports; missing means active."""
    if value is None or pd.isna(value):
        return True
    if isinstance(value, str):
        text = value.strip().lower()
        return not text or text not in _FALSE_STRINGS
    return bool(value)


def obligations_from_frame(
    rows: Union[pd.DataFrame, Iterable[Mapping]],
) -> List[RecurringObligation]:
    """
    Convert recurring-transaction rows into RecurringObligation records.

    Rows whose amount or next_occurrence cannot be parsed are dropped (and
    logged); frequency is passed through untouched so the expander can decide.
    """
    df = rows if isinstance(rows, pd.DataFrame) else pd.DataFrame(list(rows))
    df = canonicalize_columns(df)
    require_columns(df, OBLIGATION_COLUMNS)

    for col in OPTIONAL_OBLIGATION_COLUMNS:
        if col not in df.columns:
            df[col] = None

    df["next_occurrence"] = pd.to_datetime(df["next_occurrence"], errors="coerce")
    df["end_date"] = pd.to_datetime(df["end_date"], errors="coerce")
    df["amount"] = pd.to_numeric(df["amount"], errors="coerce")

    bad = df["next_occurrence"].isna() | df["amount"].isna()
    if bad.any():
        log.warning("obligation_rows_dropped", count=int(bad.sum()))
    df = df[~bad]

    out: List[RecurringObligation] = []
    for row in df.to_dict(orient="records"):
        name = row["template_name"]
        out.append(
            RecurringObligation(
                amount=abs(to_decimal(row["amount"])),
                direction=_direction(row["type"]),
                frequency=row["frequency"],
                anchor=row["next_occurrence"].date(),
                custom_interval_days=_optional_int(row["custom_interval_days"]),
                name="" if name is None or pd.isna(name) else str(name),
                is_active=_flag(row["is_active"]),
                end_date=_optional_date(row["end_date"]),
            )
        )
    return out
