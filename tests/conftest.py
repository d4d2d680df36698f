"""Shared test fixtures and utilities for conv tests."""

import copy

import pytest
import yaml

from conv.units.unitregistry import DEFAULT_CONFIG_PATH, load_unit_table, load_units


# Finite values used for round-trip checks, spanning sign and magnitude
SAMPLE_VALUES = [-1000.5, -40.0, -1.0, 0.0, 0.001, 1.0, 3.14159, 42.0, 1e6]


@pytest.fixture
def units():
    """The process-wide registry: symbol -> Unit."""
    return load_units()


@pytest.fixture
def sample_values():
    """Fixture providing finite test values."""
    return list(SAMPLE_VALUES)


@pytest.fixture
def unit_config():
    """Deep copy of the packaged unit table, as parsed YAML.

    Tests mutate it and hand it to ``write_unit_table`` to exercise
    load-time validation.
    """
    with open(DEFAULT_CONFIG_PATH, "r", encoding="utf-8") as f:
        return copy.deepcopy(yaml.safe_load(f))


@pytest.fixture
def write_unit_table(tmp_path):
    """Fixture returning a function that writes a unit table and returns its path."""

    def _write(config, name="unitconfig.yaml"):
        path = tmp_path / name
        with open(path, "w", encoding="utf-8") as f:
            yaml.safe_dump(config, f, sort_keys=False)
        return path

    yield _write

    # Custom tables share the cache slot with the packaged table
    load_unit_table.cache_clear()
