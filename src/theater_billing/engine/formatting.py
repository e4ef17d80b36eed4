"""
Currency formatting for statements.

A formatter is any callable taking an amount in minor units and
returning a display string; `usd` is the default.
"""
from decimal import Decimal
from typing import Callable

Formatter = Callable[[int], str]


def usd(amount: int, minor_units_per_major: int = 100) -> str:
    """
    Format an amount in cents as US dollars.

    Examples:
        30000 -> "$300.00"
        123456789 -> "$1,234,567.89"
        -150 -> "-$1.50"
    """
    value = Decimal(int(amount)) / Decimal(minor_units_per_major)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"
