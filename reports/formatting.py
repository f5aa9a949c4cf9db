from __future__ import annotations

from decimal import ROUND_HALF_UP, Decimal

from core.utils import to_decimal

_MILIAR = Decimal("1000000000")
_JUTA = Decimal("1000000")


def format_idr(amount) -> str:
    """id-ID rupiah, no decimals: 1234567 -> 'Rp 1.234.567', -5000 -> '-Rp 5.000'."""
    value = to_decimal(amount).quantize(Decimal("1"), rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    grouped = f"{abs(int(value)):,}".replace(",", ".")
    return f"{sign}Rp {grouped}"


def format_idr_short(amount) -> str:
    """Compact chart labels: 'Rp 1.5M' (miliar), 'Rp 2.5jt' (juta), else full."""
    value = to_decimal(amount)
    if value >= _MILIAR:
        return f"Rp {value / _MILIAR:.1f}M"
    if value >= _JUTA:
        return f"Rp {value / _JUTA:.1f}jt"
    return format_idr(value)


def format_pct(value, decimals: int = 1) -> str:
    return f"{float(value):.{decimals}f}%"
