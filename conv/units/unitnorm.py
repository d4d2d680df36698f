"""Input normalization and output formatting for unit conversion.

Handles the text edges of the converter: turning user-typed symbols and
numbers into canonical form, and rendering results for display.

Formatting policy: fixed number of decimals (4 by default) with trailing
zeros trimmed, so 1000.0 prints as "1000" and 1.609344 as "1.6093".
"""

import math
from typing import Union

from conv.units.uniterrors import MalformedValueError

DEFAULT_PRECISION = 4


def normalize_symbol(name: str) -> str:
    """Normalize a unit symbol for lookup.

    Args:
        name: Raw symbol as typed (e.g., "KG", " Km ")

    Returns:
        Lowercase symbol with surrounding whitespace removed

    Examples:
        >>> normalize_symbol("KG")
        'kg'

        >>> normalize_symbol(" GiB ")
        'gib'
    """
    if not name:
        return ""
    return name.strip().lower()


def parse_value(token: Union[str, int, float]) -> float:
    """Parse a numeric value token.

    Args:
        token: Text such as "42", "-40", "1.5e3", or an int/float

    Returns:
        The value as a float

    Raises:
        MalformedValueError: If the token is not a number, or is nan/inf

    Examples:
        >>> parse_value("1.5e3")
        1500.0

        >>> parse_value("abc")
        Traceback (most recent call last):
        ...
        conv.units.uniterrors.MalformedValueError: Malformed value 'abc': expected a finite number
    """
    if isinstance(token, bool):
        raise MalformedValueError(str(token))

    if isinstance(token, (int, float)):
        value = float(token)
    else:
        try:
            value = float(str(token).strip())
        except ValueError:
            raise MalformedValueError(str(token)) from None

    if not math.isfinite(value):
        raise MalformedValueError(str(token))

    return value


def format_value(value: float, precision: int = DEFAULT_PRECISION) -> str:
    """Format a number with ``precision`` decimals, trailing zeros trimmed.

    Examples:
        >>> format_value(1000.0)
        '1000'

        >>> format_value(1.609344)
        '1.6093'

        >>> format_value(-0.00001)
        '0'
    """
    if precision < 0:
        raise ValueError(f"precision must be non-negative, got {precision}")

    text = f"{value:.{precision}f}"
    if "." in text:
        text = text.rstrip("0").rstrip(".")

    # -0.00001 rounds to "-0"
    if text == "-0":
        text = "0"
    return text


__all__ = [
    "DEFAULT_PRECISION",
    "normalize_symbol",
    "parse_value",
    "format_value",
]
