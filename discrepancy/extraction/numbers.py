"""
Numeric normalization for extracted amounts.

Turns textual numerals such as "1,200", "2.5M" or "$3 thousand" into plain
numbers so that differently written mentions of one value compare equal.
"""

import math
import re
from decimal import Decimal, InvalidOperation

MAGNITUDE_MULTIPLIERS: dict[str, Decimal] = {
    "k": Decimal(1_000),
    "thousand": Decimal(1_000),
    "m": Decimal(1_000_000),
    "million": Decimal(1_000_000),
}

# Magnitude words/abbreviations as they may follow a numeral
MAGNITUDE_PATTERN = r"million|thousand|M|m|K|k"

_NUMERAL_RE = re.compile(
    r"^(?P<number>\d[\d,]*(?:\.\d+)?|\.\d+)\s*(?P<suffix>" + MAGNITUDE_PATTERN + r")?$",
    re.IGNORECASE,
)


def normalize_number(token: str) -> float | None:
    """
    Convert a numeral with an optional magnitude suffix to a number.

    Accepts plain integers and decimals, with or without thousands
    separators, optionally followed by k/thousand (x1,000) or
    m/million (x1,000,000). The multiplication is done in Decimal so the
    result is exactly N x multiplier for any decimal N.

    Args:
        token: Numeral text, e.g. "12", "1,250.5", "2.5M", "3 thousand"

    Returns:
        The normalized value, or None if the token is not a number
    """
    if not isinstance(token, str):
        return None

    match = _NUMERAL_RE.match(token.strip())
    if not match:
        return None

    try:
        number = Decimal(match.group("number").replace(",", ""))
    except InvalidOperation:
        return None

    suffix = match.group("suffix")
    if suffix:
        number *= MAGNITUDE_MULTIPLIERS[suffix.lower()]

    value = float(number)
    if not math.isfinite(value):
        return None
    return value


def parse_currency(raw: str) -> float | None:
    """
    Parse a currency amount such as "$5 million" or "$1,200.50".

    The currency symbol is stripped and the remainder normalized with
    normalize_number. Returns None for anything that does not normalize.
    """
    if not isinstance(raw, str):
        return None

    raw = raw.strip()
    if not raw.startswith("$"):
        return None

    return normalize_number(raw[1:])


def format_number(value: float) -> str:
    """Format a value without trailing zeros (12.0 -> "12")."""
    if float(value).is_integer():
        return str(int(value))
    return f"{value:.3f}".rstrip("0").rstrip(".")


def format_currency(value: float) -> str:
    """Format a monetary value with thousands separators ("$5,000,000")."""
    if float(value).is_integer():
        return f"${int(value):,}"
    return "$" + f"{value:,.3f}".rstrip("0").rstrip(".")
