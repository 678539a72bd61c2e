
from typing import Optional

from budget_core import config

_SYMBOLS = {"USD": "$", "EUR": "€", "GBP": "£", "JPY": "¥"}


def format_currency(amount: float, currency: Optional[str] = None) -> str:
    """'$1,234.50' style, two decimals, minus sign before the symbol."""
    code = currency or config.CURRENCY
    symbol = _SYMBOLS.get(code, code + " ")
    sign = "-" if amount < 0 else ""
    return f"{sign}{symbol}{abs(amount):,.2f}"


def format_percentage(percentage: float) -> str:
    return f"{percentage:.1f}%"
