"""conv - unit conversion for the command line

Public API for converting a value between units of the same category
(temperature, length, weight, volume, data size, time).

Usage:
    from conv import unit_identifier, convert, convert_units, units_report

    # Look up units (case-insensitive)
    km = unit_identifier("KM")       # Unit(symbol='km', category=Category.LENGTH, ...)

    # Convert between Units
    convert(1.0, km, unit_identifier("m"))   # Returns: 1000.0

    # Convert from symbols
    convert_units(100, "c", "f")     # Returns: 212.0

    # Show everything that is registered
    print(units_report())

Command line:
    conv 1 km m          # 1 km is 1000 m
    conv --list
    conv --repl
"""

__version__ = "0.1.0"

# ============================================================================
# Unit Lookup API
# ============================================================================

from .units.unitapi import (
    unit_identifier,        # Primary API - resolve symbol to Unit
    match_unit,             # Get top-K candidate matches
    list_units,             # List/filter registered units
    units_report,           # Listing grouped by category
)

# ============================================================================
# Conversion API
# ============================================================================

from .units.unitconvert import (
    convert,                # Convert between two Units
)
from .units.unitapi import (
    convert_units,          # Convert between two symbols
    describe_conversion,    # "1 km is 1000 m"
)
from .units.unitnorm import (
    parse_value,            # Parse numeric text
    format_value,           # Fixed decimals, trailing zeros trimmed
)

# ============================================================================
# Types and Errors
# ============================================================================

from .units.unitregistry import Category, Unit
from .units.uniterrors import (
    ConversionError,
    InvalidUnitError,
    IncompatibleUnitsError,
    MalformedValueError,
)

__all__ = [
    # Version
    "__version__",

    # ========================================================================
    # PRIMARY APIS - Start here!
    # ========================================================================
    "unit_identifier",      # Resolve symbol -> Unit
    "convert",              # Convert value between Units
    "convert_units",        # Convert value between symbols

    # ========================================================================
    # Lookup
    # ========================================================================
    "match_unit",           # Get top-K unit matches
    "list_units",           # List registered units
    "units_report",         # Listing grouped by category

    # ========================================================================
    # Formatting
    # ========================================================================
    "describe_conversion",  # Conversion rendered as a sentence
    "parse_value",          # Parse numeric text
    "format_value",         # Format a result

    # ========================================================================
    # Types and Errors
    # ========================================================================
    "Category",
    "Unit",
    "ConversionError",
    "InvalidUnitError",
    "IncompatibleUnitsError",
    "MalformedValueError",
]
