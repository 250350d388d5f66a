"""Display formatting with an explicit sentinel for unreachable values."""

from __future__ import annotations

import math

INFINITY_SYMBOL = "∞"


def format_currency(value: float) -> str:
    """US-dollar amount with thousands separators, e.g. '$1,234.56' or '-$50.00'."""
    if not math.isfinite(value):
        return INFINITY_SYMBOL
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def format_number(value: float, decimals: int = 0) -> str:
    if not math.isfinite(value):
        return INFINITY_SYMBOL
    return f"{value:.{decimals}f}"


def format_pct(value: float, decimals: int = 2) -> str:
    if not math.isfinite(value):
        return f"{INFINITY_SYMBOL}%"
    return f"{value:.{decimals}f}%"
