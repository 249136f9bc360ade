"""Currency and percentage formatting for display.

Amounts are shown in euros using Spanish conventions: "." groups
thousands, "," marks decimals and the symbol follows the amount. As in
the es-ES locale, 4-digit integer parts are not grouped.
"""

import re

CURRENCY_SYMBOL = "€"
GROUP_SEPARATOR = "."
DECIMAL_SEPARATOR = ","
MIN_GROUPING_DIGITS = 5  # "1234" stays ungrouped, "12.345" is grouped
NBSP = "\u00a0"

_LEADING_INTEGER = re.compile(r"^\s*([+-]?\d+)")


def _group_digits(digits: str) -> str:
    """Insert group separators into a string of integer digits."""
    if len(digits) < MIN_GROUPING_DIGITS:
        return digits
    grouped = f"{int(digits):,}"
    return grouped.replace(",", GROUP_SEPARATOR)


def format_number(value: float, decimals: int = 2) -> str:
    """Format a number with locale separators and fixed decimals."""
    text = f"{abs(value):.{decimals}f}"
    integer, _, fraction = text.partition(".")
    sign = "-" if value < 0 and float(text) != 0 else ""

    result = sign + _group_digits(integer)
    if fraction:
        result += DECIMAL_SEPARATOR + fraction
    return result


def format_currency(amount: float) -> str:
    """Format an amount as euros with two decimals, e.g. "303.555,78 €"."""
    return f"{format_number(amount, 2)}{NBSP}{CURRENCY_SYMBOL}"


def format_percent(value: float) -> str:
    """Format a percentage value with two decimals, e.g. "2.75%"."""
    return f"{value:.2f}%"


def format_price_display(value) -> str:
    """Format the house price field as a grouped integer."""
    if value is None or value == "":
        return ""
    return format_number(float(value), 0)


def parse_price_input(text: str) -> int:
    """Parse a house price typed with "." groupings and "," decimals.

    Returns 0 when the text holds no number.
    """
    cleaned = text.replace(GROUP_SEPARATOR, "").replace(DECIMAL_SEPARATOR, ".")
    match = _LEADING_INTEGER.match(cleaned)
    if not match:
        return 0
    return int(match.group(1))
