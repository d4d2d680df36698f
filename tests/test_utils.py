"""Tests for shared utilities and text handling."""

import pandas as pd
import pytest

from conv.units.uniterrors import MalformedValueError
from conv.units.unitnorm import format_value, normalize_symbol, parse_value
from conv.units.unitregistry import load_unit_table, validate_units
from conv.utils.build_utils import (
    load_yaml_file,
    validate_duplicate_keys,
    validate_required_fields,
)
from conv.utils.resolver import topk_matches


class TestLoadYamlFile:
    """Test YAML loading utility"""

    def test_load_mapping(self, tmp_path):
        """A YAML mapping loads as a dict"""
        path = tmp_path / "table.yaml"
        path.write_text("Length:\n  base: m\n")
        assert load_yaml_file(path) == {"Length": {"base": "m"}}

    def test_missing_file(self, tmp_path):
        """A missing file raises FileNotFoundError"""
        with pytest.raises(FileNotFoundError, match="Required file not found"):
            load_yaml_file(tmp_path / "missing.yaml")

    def test_non_mapping(self, tmp_path):
        """A top-level list is rejected"""
        path = tmp_path / "list.yaml"
        path.write_text("- a\n- b\n")
        with pytest.raises(ValueError, match="Expected a mapping"):
            load_yaml_file(path)


class TestValidators:
    """Test table validation helpers"""

    def test_duplicate_keys(self):
        """Duplicated keys are reported once each"""
        df = pd.DataFrame({"symbol": ["m", "km", "m"]})
        issues = validate_duplicate_keys(df, "symbol")
        assert issues == ["Duplicate symbols found: ['m']"]

    def test_no_duplicates(self):
        """Unique keys pass"""
        df = pd.DataFrame({"symbol": ["m", "km"]})
        assert validate_duplicate_keys(df, "symbol") == []

    def test_required_fields(self):
        """Empty and missing values are reported"""
        df = pd.DataFrame({"symbol": ["m", ""], "name": ["meter", None]})
        issues = validate_required_fields(df, ["symbol", "name", "category"])
        assert len(issues) == 3
        assert "Missing column: category" in issues

    def test_packaged_table_is_valid(self):
        """The shipped unit table has no issues"""
        assert validate_units(load_unit_table()) == []


class TestTopkMatches:
    """Test fuzzy candidate ranking"""

    @pytest.fixture
    def candidates(self):
        return pd.DataFrame({"symbol": ["km", "kg", "kib"]})

    def test_best_match(self, candidates):
        """The closest candidate ranks first"""
        matches = topk_matches(candidates, "kgg", k=1)
        assert len(matches) == 1
        row, score = matches[0]
        assert row["symbol"] == "kg"
        assert score == pytest.approx(80.0)

    def test_threshold(self, candidates):
        """Candidates below the threshold are dropped"""
        assert topk_matches(candidates, "xyz", threshold=60) == []

    def test_k_limits_results(self, candidates):
        """At most k candidates are returned"""
        assert len(topk_matches(candidates, "k", k=2)) == 2

    def test_empty_candidates(self):
        """An empty table has no matches"""
        assert topk_matches(pd.DataFrame({"symbol": []}), "kg") == []


class TestUnitTableValidation:
    """Test load-time checks on the unit table"""

    def test_valid_copy_loads(self, unit_config, write_unit_table):
        """An unmodified copy of the table loads"""
        df = load_unit_table(write_unit_table(unit_config))
        assert len(df) == 57

    def test_duplicate_symbol(self, unit_config, write_unit_table):
        """A symbol used twice is rejected"""
        unit_config["Weight"]["units"].append({"symbol": "m", "name": "mystery", "factor": 2.0})
        with pytest.raises(ValueError, match="Duplicate symbols"):
            load_unit_table(write_unit_table(unit_config))

    def test_uppercase_symbol(self, unit_config, write_unit_table):
        """Symbols must be lowercase"""
        unit_config["Length"]["units"].append({"symbol": "FUR", "name": "furlong", "factor": 201.168})
        with pytest.raises(ValueError, match="lowercase"):
            load_unit_table(write_unit_table(unit_config))

    def test_base_factor(self, unit_config, write_unit_table):
        """Base units must have factor 1.0"""
        unit_config["Length"]["units"][0]["factor"] = 2.0
        with pytest.raises(ValueError, match="must have factor 1.0"):
            load_unit_table(write_unit_table(unit_config))

    def test_wrong_base(self, unit_config, write_unit_table):
        """Base units are fixed per category"""
        unit_config["Length"]["base"] = "km"
        with pytest.raises(ValueError, match="base unit must be 'm'"):
            load_unit_table(write_unit_table(unit_config))

    def test_unknown_category(self, unit_config, write_unit_table):
        """Only the six categories are accepted"""
        unit_config["Speed"] = {"base": "mps", "units": []}
        with pytest.raises(ValueError, match="Unknown category 'Speed'"):
            load_unit_table(write_unit_table(unit_config))

    def test_missing_category(self, unit_config, write_unit_table):
        """Every category needs units"""
        del unit_config["Time"]
        with pytest.raises(ValueError, match="No units defined for Time"):
            load_unit_table(write_unit_table(unit_config))

    def test_unknown_formula(self, unit_config, write_unit_table):
        """Formulas must be known"""
        unit_config["Temperature"]["units"].append({"symbol": "re", "name": "reaumur", "formula": "reaumur"})
        with pytest.raises(ValueError, match="Unknown formulas"):
            load_unit_table(write_unit_table(unit_config))

    def test_factor_and_formula(self, unit_config, write_unit_table):
        """A unit cannot have both a factor and a formula"""
        unit_config["Temperature"]["units"][1]["factor"] = 1.0
        with pytest.raises(ValueError, match="exactly one of factor/formula"):
            load_unit_table(write_unit_table(unit_config))

    def test_negative_factor(self, unit_config, write_unit_table):
        """Factors must be positive"""
        unit_config["Time"]["units"][1]["factor"] = -0.001
        with pytest.raises(ValueError, match="positive and finite"):
            load_unit_table(write_unit_table(unit_config))


class TestNormalizeSymbol:
    """Test symbol normalization"""

    def test_lowercase_and_strip(self):
        assert normalize_symbol(" KG ") == "kg"

    def test_empty(self):
        assert normalize_symbol("") == ""
        assert normalize_symbol(None) == ""


class TestParseValue:
    """Test numeric value parsing"""

    @pytest.mark.parametrize("token,expected", [
        ("42", 42.0),
        (" -40 ", -40.0),
        ("1.5e3", 1500.0),
        ("0.125", 0.125),
        (3, 3.0),
        (2.5, 2.5),
    ])
    def test_valid(self, token, expected):
        assert parse_value(token) == expected

    @pytest.mark.parametrize("token", ["", "abc", "1,5", "12km", "nan", "inf", "-inf", True])
    def test_invalid(self, token):
        with pytest.raises(MalformedValueError):
            parse_value(token)

    def test_error_message(self):
        with pytest.raises(MalformedValueError, match="Malformed value 'abc'"):
            parse_value("abc")


class TestFormatValue:
    """Test result formatting"""

    @pytest.mark.parametrize("value,expected", [
        (1000.0, "1000"),
        (1.609344, "1.6093"),
        (2.20462, "2.2046"),
        (0.5, "0.5"),
        (-40.00000000000006, "-40"),
        (-0.00001, "0"),
        (0.1 + 0.2, "0.3"),
        (1073741824.0, "1073741824"),
    ])
    def test_default_precision(self, value, expected):
        assert format_value(value) == expected

    def test_custom_precision(self):
        assert format_value(1.609344, precision=2) == "1.61"
        assert format_value(2.6, precision=0) == "3"

    def test_negative_precision(self):
        with pytest.raises(ValueError):
            format_value(1.0, precision=-1)
