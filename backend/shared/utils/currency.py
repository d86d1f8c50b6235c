"""
Currency helpers for display.

Amounts are whole local units; the configured currency has no minor unit in
everyday use, so nothing is shown after the decimal point.
"""

import re

from shared.config.settings import settings

_NON_NUMERIC = re.compile(r"[^0-9.]")


def format_currency(amount: float, symbol: str | None = None) -> str:
    """
    Format an amount with thousand separators and no decimals.

    Example: 50000 -> "USh 50,000"
    """
    if symbol is None:
        symbol = settings.currency_symbol
    return f"{symbol} {round(amount):,}"


def convert_usd_to_local(usd_amount: float) -> int:
    """Convert USD to local units at the configured rate."""
    return round(usd_amount * settings.usd_exchange_rate)


def convert_local_to_usd(local_amount: float) -> float:
    """Convert local units to USD at the configured rate."""
    return local_amount / settings.usd_exchange_rate


def parse_currency_input(value: str) -> float:
    """
    Parse user-typed money input, ignoring symbols and separators.

    Returns 0 when nothing numeric is left.
    """
    cleaned = _NON_NUMERIC.sub("", value)
    # Keep the first decimal point only ("1.2.3" -> "1.23")
    if cleaned.count(".") > 1:
        head, _, tail = cleaned.partition(".")
        cleaned = f"{head}.{tail.replace('.', '')}"
    try:
        return float(cleaned)
    except ValueError:
        return 0.0
