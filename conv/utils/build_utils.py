"""
Table Loading Utilities
-----------------------

Common functions used when loading packaged lookup tables (units).
This module provides utilities for loading YAML files and checking tables.

Functions:
  - load_yaml_file: Load and parse YAML file
  - validate_duplicate_keys: Report rows sharing a key
  - validate_required_fields: Report rows with empty required fields
"""

from pathlib import Path
from typing import List

import pandas as pd


def load_yaml_file(path: Path) -> dict:
    """
    Load and parse YAML file.

    Args:
        path: Path to YAML file

    Returns:
        Parsed YAML data as dictionary

    Raises:
        FileNotFoundError: If file does not exist
        ValueError: If the document is not a mapping

    Examples:
        >>> data = load_yaml_file(Path("unitconfig.yaml"))
        >>> data['Length']['base']
        'm'
    """
    import yaml

    if not path.exists():
        raise FileNotFoundError(f"Required file not found: {path}")

    with open(path, 'r', encoding='utf-8') as f:
        data = yaml.safe_load(f)

    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at top level of {path}, got {type(data).__name__}")

    return data


def validate_duplicate_keys(df: pd.DataFrame, key_field: str) -> List[str]:
    """Check for duplicate keys."""
    issues = []
    dup_keys = df[df.duplicated(subset=[key_field], keep=False)]
    if not dup_keys.empty:
        dup_key_names = sorted(set(dup_keys[key_field].tolist()))
        issues.append(f"Duplicate {key_field}s found: {dup_key_names}")
    return issues


def validate_required_fields(df: pd.DataFrame, required_fields: List[str]) -> List[str]:
    """Check for missing required fields."""
    issues = []
    for field in required_fields:
        if field not in df.columns:
            issues.append(f"Missing column: {field}")
            continue
        missing = df[df[field].isna() | (df[field] == "")]
        if not missing.empty:
            missing_rows = missing.index.tolist()
            issues.append(f"Missing {field} for rows: {missing_rows}")
    return issues


__all__ = [
    "load_yaml_file",
    "validate_duplicate_keys",
    "validate_required_fields",
]
