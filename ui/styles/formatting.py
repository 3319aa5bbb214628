# ui/formatting.py
from __future__ import annotations

from datetime import date


def fmt_float(value: float | None, decimals: int = 2) -> str:
    """
    Format float with thousands separator and fixed decimals.
    Example: 1234567.8 -> '1,234,567.80'
    """
    if value is None:
        return "-"
    fmt = f"{{:,.{decimals}f}}"
    return fmt.format(float(value))


def fmt_currency(value: float | None, currency_symbol: str = "") -> str:
    """
    Format currency with thousands and 2 decimals.
    Example: 1234567.8, '$' -> '$ 1,234,567.80'
    """
    if value is None:
        return "-"
    return f"{currency_symbol} {fmt_float(value, 2)}".strip()


# Simple dictionary of currency codes to symbols
CURRENCY_SYMBOLS = {
    "USD": "$",
    "EUR": "€",
    "GBP": "£",
    "JPY": "¥",
    "INR": "₹",
}


def currency_symbol_from_code(code: str | None) -> str:
    if not code:
        return ""
    return CURRENCY_SYMBOLS.get(code.upper(), code.upper())


def fmt_money(value: float | None, currency_code: str | None = None) -> str:
    return fmt_currency(value, currency_symbol_from_code(currency_code))


def fmt_date(value: date | None) -> str:
    return value.isoformat() if value else "-"


def fmt_date_range(start: date | None, finish: date | None) -> str:
    return f"{fmt_date(start)} to {fmt_date(finish)}"
