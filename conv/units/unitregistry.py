"""Unit registry: the fixed table of known units.

The table lives in unitconfig.yaml next to this module and is loaded once
per process. After loading, the registry is a read-only mapping from
lowercase symbol to Unit, so it can be shared between callers without
locking.

Every category converts through a single base unit:

    Temperature -> k    Length -> m    Weight -> g
    Volume      -> l    Data   -> b    Time   -> s

Linear units store one factor (to_base = v * factor, from_base = v / factor).
Temperature scales have offsets, so they name a formula instead.
"""

import logging
from dataclasses import dataclass
from enum import Enum
from functools import lru_cache
from pathlib import Path
from types import MappingProxyType
from typing import Callable, Dict, List, Mapping, Optional, Tuple, Union

import pandas as pd

from conv.units.uniterrors import IncompatibleUnitsError, InvalidUnitError
from conv.units.unitnorm import normalize_symbol
from conv.utils.build_utils import (
    load_yaml_file,
    validate_duplicate_keys,
    validate_required_fields,
)
from conv.utils.resolver import topk_matches

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_PATH = Path(__file__).parent / "unitconfig.yaml"

UNIT_COLUMNS = ["symbol", "name", "category", "base_symbol", "factor", "formula"]

# Suggestions shown when a symbol is not found
SUGGESTION_LIMIT = 3
SUGGESTION_THRESHOLD = 60


class Category(str, Enum):
    """Measurement category. The value is the display name."""

    TEMPERATURE = "Temperature"
    LENGTH = "Length"
    WEIGHT = "Weight"
    VOLUME = "Volume"
    DATA = "Data"
    TIME = "Time"

    @property
    def base_symbol(self) -> str:
        return _BASE_SYMBOLS[self]


_BASE_SYMBOLS = {
    Category.TEMPERATURE: "k",
    Category.LENGTH: "m",
    Category.WEIGHT: "g",
    Category.VOLUME: "l",
    Category.DATA: "b",
    Category.TIME: "s",
}


Converter = Callable[[float], float]

# formula id -> (to kelvin, from kelvin)
TEMPERATURE_FORMULAS: Dict[str, Tuple[Converter, Converter]] = {
    "kelvin": (lambda k: k, lambda k: k),
    "celsius": (lambda c: c + 273.15, lambda k: k - 273.15),
    "fahrenheit": (
        lambda f: (f - 32.0) * 5.0 / 9.0 + 273.15,
        lambda k: (k - 273.15) * 9.0 / 5.0 + 32.0,
    ),
    "rankine": (lambda r: r * 5.0 / 9.0, lambda k: k * 9.0 / 5.0),
    "delisle": (
        lambda de: 373.15 - de * 2.0 / 3.0,
        lambda k: (373.15 - k) * 3.0 / 2.0,
    ),
}

IDENTITY_FORMULAS = {"kelvin"}


@dataclass(frozen=True)
class Unit:
    """One unit of measure.

    Exactly one of ``factor`` (linear units) or ``formula`` (a key of
    TEMPERATURE_FORMULAS) is set.
    """

    symbol: str
    category: Category
    name: str = ""
    factor: Optional[float] = None
    formula: Optional[str] = None

    @property
    def is_base(self) -> bool:
        return self.symbol == self.category.base_symbol

    def to_base(self, value: float) -> float:
        """Express ``value`` (in this unit) in the category's base unit."""
        if self.formula is not None:
            to_base, _ = TEMPERATURE_FORMULAS[self.formula]
            return to_base(value)
        return value * self.factor

    def from_base(self, value: float) -> float:
        """Express ``value`` (in the base unit) in this unit."""
        if self.formula is not None:
            _, from_base = TEMPERATURE_FORMULAS[self.formula]
            return from_base(value)
        return value / self.factor

    def convert_to(self, value: float, other: "Unit") -> float:
        """Convert ``value`` from this unit to ``other`` through the base unit.

        Raises:
            IncompatibleUnitsError: If ``other`` is in a different category
        """
        if self.category != other.category:
            raise IncompatibleUnitsError(self.category.value, other.category.value)
        return other.from_base(self.to_base(value))


# ============================================================================
# Loading
# ============================================================================

def _flatten_config(config: dict, config_path: Path) -> List[dict]:
    """Turn the per-category YAML sections into one record per unit."""
    records = []
    for category_name, section in config.items():
        try:
            category = Category(category_name)
        except ValueError:
            raise ValueError(
                f"Unknown category '{category_name}' in {config_path}. "
                f"Expected one of: {', '.join(c.value for c in Category)}"
            ) from None

        section = section or {}
        base = section.get("base")
        if base != category.base_symbol:
            raise ValueError(
                f"{category.value} base unit must be '{category.base_symbol}', "
                f"got '{base}' in {config_path}"
            )

        for entry in section.get("units") or []:
            factor = entry.get("factor")
            records.append({
                "symbol": str(entry.get("symbol", "")),
                "name": str(entry.get("name", "")),
                "category": category.value,
                "base_symbol": category.base_symbol,
                "factor": float(factor) if factor is not None else None,
                "formula": entry.get("formula"),
            })
    return records


def validate_units(df: pd.DataFrame) -> List[str]:
    """Check the unit table for consistency.

    Returns:
        List of human-readable issues (empty when the table is valid)
    """
    issues = []
    issues.extend(validate_required_fields(df, ["symbol", "name", "category"]))
    issues.extend(validate_duplicate_keys(df, "symbol"))

    not_lower = df[df["symbol"] != df["symbol"].str.lower()]
    if not not_lower.empty:
        issues.append(f"Symbols must be lowercase: {not_lower['symbol'].tolist()}")

    has_factor = df["factor"].notna()
    has_formula = df["formula"].notna()

    ambiguous = df[has_factor == has_formula]
    if not ambiguous.empty:
        issues.append(
            f"Units need exactly one of factor/formula: {ambiguous['symbol'].tolist()}"
        )

    factors = df.loc[has_factor, "factor"]
    bad_factors = df.loc[has_factor][~((factors > 0) & (factors < float("inf")))]
    if not bad_factors.empty:
        issues.append(
            f"Factors must be positive and finite: {bad_factors['symbol'].tolist()}"
        )

    unknown = df.loc[has_formula][~df.loc[has_formula, "formula"].isin(list(TEMPERATURE_FORMULAS))]
    if not unknown.empty:
        issues.append(f"Unknown formulas: {unknown['formula'].tolist()}")

    for category in Category:
        rows = df[df["category"] == category.value]
        if rows.empty:
            issues.append(f"No units defined for {category.value}")
            continue
        base = rows[rows["symbol"] == category.base_symbol]
        if base.empty:
            issues.append(f"Missing base unit '{category.base_symbol}' for {category.value}")
            continue
        row = base.iloc[0]
        if pd.notna(row["factor"]) and row["factor"] != 1.0:
            issues.append(f"Base unit '{row['symbol']}' must have factor 1.0")
        if pd.notna(row["formula"]) and row["formula"] not in IDENTITY_FORMULAS:
            issues.append(f"Base unit '{row['symbol']}' must use an identity formula")

    return issues


@lru_cache(maxsize=1)
def load_unit_table(path: Optional[Union[str, Path]] = None) -> pd.DataFrame:
    """Load and validate the unit table.

    Uses LRU cache so the YAML file is read once per process.

    Args:
        path: Optional path to a unit table. If None, uses the packaged
              conv/units/unitconfig.yaml

    Returns:
        DataFrame with one row per unit and columns:
          - symbol: canonical lowercase symbol
          - name: human-readable name
          - category: category display name
          - base_symbol: symbol of the category's base unit
          - factor: multiplier to the base unit (NaN for formula units)
          - formula: temperature formula id (None for linear units)

    Raises:
        FileNotFoundError: If the table is missing
        ValueError: If the table fails validation
    """
    config_path = Path(path) if path is not None else DEFAULT_CONFIG_PATH
    config = load_yaml_file(config_path)

    records = _flatten_config(config, config_path)
    df = pd.DataFrame.from_records(records, columns=UNIT_COLUMNS)

    issues = validate_units(df)
    if issues:
        raise ValueError(
            f"Invalid unit table {config_path}:\n" + "\n".join(f"  - {i}" for i in issues)
        )

    logger.debug(f"Loaded {len(df)} units in {df['category'].nunique()} categories from {config_path}")
    return df


@lru_cache(maxsize=1)
def load_units() -> Mapping[str, Unit]:
    """Return the process-wide registry: symbol -> Unit (read-only)."""
    df = load_unit_table()
    units = {}
    for row in df.itertuples(index=False):
        units[row.symbol] = Unit(
            symbol=row.symbol,
            category=Category(row.category),
            name=row.name,
            factor=None if pd.isna(row.factor) else float(row.factor),
            formula=row.formula if isinstance(row.formula, str) else None,
        )
    return MappingProxyType(units)


def units_frame() -> pd.DataFrame:
    """Return a copy of the unit table (safe for callers to modify)."""
    return load_unit_table().copy()


# ============================================================================
# Lookup and listing
# ============================================================================

def suggest_units(
    name: str,
    k: int = SUGGESTION_LIMIT,
    threshold: float = SUGGESTION_THRESHOLD,
) -> List[str]:
    """Return up to ``k`` registered symbols that look like ``name``."""
    query_norm = normalize_symbol(name)
    if not query_norm:
        return []
    matches = topk_matches(load_unit_table(), query_norm, k=k, threshold=threshold)
    return [row["symbol"] for row, _ in matches]


def find_unit(name: str) -> Unit:
    """Case-insensitive symbol lookup.

    Raises:
        InvalidUnitError: If no unit matches. The error carries the input
            exactly as given, plus close symbols as suggestions.
    """
    unit = load_units().get(normalize_symbol(name))
    if unit is None:
        raise InvalidUnitError(name, suggest_units(name))
    return unit


def format_unit_listing(df: Optional[pd.DataFrame] = None) -> str:
    """Render the registry grouped by category.

    Categories are sorted by display name; symbols within a category are
    sorted lexicographically.
    """
    if df is None:
        df = load_unit_table()

    lines = ["Available units:"]
    for category, group in df.groupby("category", sort=True):
        symbols = ", ".join(sorted(group["symbol"]))
        lines.append(f"\t{category}: {symbols}")
    return "\n".join(lines)


__all__ = [
    "Category",
    "Unit",
    "TEMPERATURE_FORMULAS",
    "load_unit_table",
    "load_units",
    "units_frame",
    "validate_units",
    "suggest_units",
    "find_unit",
    "format_unit_listing",
]
