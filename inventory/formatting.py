"""Number and date formatting for table cells."""

from __future__ import annotations

import math

EMPTY = "—"


def format_number(value: float | None, min_digits: int = 0, max_digits: int = 2) -> str:
    """Group thousands and keep between ``min_digits`` and ``max_digits`` decimals.

    Trailing zeros beyond ``min_digits`` are dropped, so 1234.5 with (0, 2)
    renders as "1,234.5" and 3 with (2, 2) as "3.00".
    """
    if value is None or (isinstance(value, float) and not math.isfinite(value)):
        return EMPTY

    text = f"{value:,.{max_digits}f}"
    if max_digits > min_digits and "." in text:
        whole, decimals = text.split(".")
        decimals = decimals.rstrip("0")
        if len(decimals) < min_digits:
            decimals = decimals.ljust(min_digits, "0")
        text = f"{whole}.{decimals}" if decimals else whole
    return text


def format_factor(value: float) -> str:
    """Small factors get five decimals, everything else two."""
    return format_number(value, 5, 5) if value < 1 else format_number(value, 2, 2)


def format_exponential(value: float, digits: int = 5) -> str:
    return f"{value:.{digits}e}"


def format_emission(value: float) -> str:
    return format_number(value, 2, 2)


def format_date(value: str | None) -> str:
    """2024-03-15 -> 2024/03/15."""
    if not value:
        return EMPTY
    return value.replace("-", "/")


def format_month(month: int) -> str:
    return f"M{month:02d}"
