"""Public API for unit lookup and conversion.

This module provides the main entry points for resolving unit symbols and
converting values between units of the same category.

Key Design Principles:
1. The unit table is fixed and loaded once
2. Lookups are case-insensitive; errors keep the input as typed
3. Conversions never mix categories
4. Failures are raised as typed errors, never defaulted
"""

from typing import Optional, Union

import pandas as pd

from conv.units.unitconvert import convert
from conv.units.unitnorm import (
    DEFAULT_PRECISION,
    format_value,
    normalize_symbol,
    parse_value,
)
from conv.units.unitregistry import (
    Category,
    Unit,
    find_unit,
    format_unit_listing,
    load_unit_table,
    units_frame,
)
from conv.utils.resolver import topk_matches


def unit_identifier(name: str) -> Unit:
    """Return the registered Unit for a symbol.

    Args:
        name: Unit symbol in any case (e.g., "KG", "Km", "gib")

    Returns:
        The matching Unit

    Raises:
        InvalidUnitError: If the symbol is not registered

    Examples:
        >>> unit_identifier("KG").symbol
        'kg'

        >>> unit_identifier("Km").category
        <Category.LENGTH: 'Length'>
    """
    return find_unit(name)


def match_unit(name: str, *, k: int = 5) -> list:
    """Top-K candidates + scores (for review UIs).

    Args:
        name: Unit symbol to match
        k: Number of top candidates to return. Default 5.

    Returns:
        List of dicts, each containing the unit table columns (symbol, name,
        category, base_symbol, factor, formula) plus score (0-100).
        Ordered by descending score.

    Examples:
        >>> [m["symbol"] for m in match_unit("kgg", k=1)]
        ['kg']
    """
    query_norm = normalize_symbol(name)
    if not query_norm:
        return []

    results = topk_matches(load_unit_table(), query_norm, k=k)
    return [
        {**row.to_dict(), "score": score}
        for row, score in results
    ]


def list_units(category: Optional[Union[str, Category]] = None) -> pd.DataFrame:
    """List registered units, optionally for one category.

    Args:
        category: Optional category filter, either a Category or its name
                  in any case (e.g., "length", "Data")

    Returns:
        DataFrame with one row per unit

    Raises:
        ValueError: If the category name is unknown

    Examples:
        >>> list_units("data")["symbol"].tolist()[:3]
        ['b', 'kb', 'mb']
    """
    df = units_frame()

    if category is not None:
        df = df[df["category"] == _resolve_category(category).value]

    return df.reset_index(drop=True)


def units_report() -> str:
    """Human-readable listing of every unit, grouped by category."""
    return format_unit_listing()


def convert_units(value: Union[str, float], from_name: str, to_name: str) -> float:
    """Resolve two symbols and convert ``value`` between them.

    Args:
        value: Number, or numeric text such as "-40" or "1.5e3"
        from_name: Source unit symbol (any case)
        to_name: Target unit symbol (any case)

    Returns:
        Converted value

    Raises:
        MalformedValueError: If ``value`` is not a finite number
        InvalidUnitError: If either symbol is unknown
        IncompatibleUnitsError: If the units belong to different categories

    Examples:
        >>> convert_units(1, "mi", "km")
        1.609344

        >>> convert_units("100", "C", "F")
        212.0
    """
    number = parse_value(value)
    from_unit = find_unit(from_name)
    to_unit = find_unit(to_name)
    return convert(number, from_unit, to_unit)


def describe_conversion(
    value: Union[str, float],
    from_name: str,
    to_name: str,
    precision: int = DEFAULT_PRECISION,
) -> str:
    """Convert and render the result as a sentence.

    Examples:
        >>> describe_conversion("1", "KM", "m")
        '1 km is 1000 m'

        >>> describe_conversion(1, "kg", "lb")
        '1 kg is 2.2046 lb'
    """
    number = parse_value(value)
    from_unit = find_unit(from_name)
    to_unit = find_unit(to_name)
    result = convert(number, from_unit, to_unit)
    return (
        f"{format_value(number, precision)} {from_unit.symbol} is "
        f"{format_value(result, precision)} {to_unit.symbol}"
    )


def _resolve_category(category: Union[str, Category]) -> Category:
    if isinstance(category, Category):
        return category
    wanted = str(category).strip().lower()
    for member in Category:
        if member.value.lower() == wanted:
            return member
    raise ValueError(
        f"Unknown category: {category}. "
        f"Expected one of: {', '.join(c.value for c in Category)}"
    )


__all__ = [
    "unit_identifier",
    "match_unit",
    "list_units",
    "units_report",
    "convert_units",
    "describe_conversion",
]
