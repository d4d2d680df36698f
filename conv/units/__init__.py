"""Units module: unit registry and conversion engine.

This module converts a numeric value between units of the same measurement
category (temperature, length, weight, volume, data size, time).

Public API:
    unit_identifier(name) -> Unit
        Case-insensitive symbol lookup

    convert(value, from_unit, to_unit) -> float
        Pivot conversion between two Units

    convert_units(value, from_name, to_name) -> float
        Lookup + conversion from symbols

    describe_conversion(value, from_name, to_name) -> str
        "1 km is 1000 m"

    list_units(category=None) -> DataFrame
        The unit table

    units_report() -> str
        Listing grouped by category

    match_unit(name, k=5) -> list[dict]
        Fuzzy candidates for a symbol

Examples:
    >>> from conv.units import unit_identifier, convert
    >>>
    >>> convert(0.0, unit_identifier("c"), unit_identifier("f"))
    32.0
    >>> convert(1.0, unit_identifier("gib"), unit_identifier("b"))
    1073741824.0
"""

from .unitapi import (
    unit_identifier,
    match_unit,
    list_units,
    units_report,
    convert_units,
    describe_conversion,
)
from .unitconvert import convert
from .uniterrors import (
    ConversionError,
    InvalidUnitError,
    IncompatibleUnitsError,
    MalformedValueError,
)
from .unitnorm import format_value, parse_value
from .unitregistry import Category, Unit

__all__ = [
    "unit_identifier",
    "match_unit",
    "list_units",
    "units_report",
    "convert_units",
    "describe_conversion",
    "convert",
    "format_value",
    "parse_value",
    "Category",
    "Unit",
    "ConversionError",
    "InvalidUnitError",
    "IncompatibleUnitsError",
    "MalformedValueError",
]
