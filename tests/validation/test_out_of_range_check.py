"""Tests for the IQR-based out-of-range check."""

from conftest import make_table

from validata.validation.checks.out_of_range import check_out_of_range
from validata.validation.config import ValidationSettings


def test_out_of_range_flags_value_beyond_fence(settings):
    """[1, 2, 3, 4, 100]: Q1=2, Q3=4, fence [-4, 10], so 100 is out of range."""
    table = make_table({"value": ["1", "2", "3", "4", "100"]})
    result = check_out_of_range(table, settings)

    assert result.passed is False
    assert result.fail_count == 1
    assert result.by_column == {"value": 1}
    assert "[-4, 10]" in result.messages[0]


def test_out_of_range_pass_within_fence(settings):
    table = make_table({"value": ["1", "2", "3", "4", "10"]})
    # 10 sits exactly on the upper fence and is not strictly outside
    assert check_out_of_range(table, settings).fail_count == 0


def test_out_of_range_needs_two_values(settings):
    table = make_table({"value": ["5", None, "x", "y"], "other": ["1", "2", "3", "4"]})
    # "value" is categorical here (1 of 3 non-empty cells parse); check both paths
    assert check_out_of_range(table, settings).fail_count == 0

    single = make_table({"value": ["5", None]})
    assert single.kind_of("value").value == "numeric"
    assert check_out_of_range(single, settings).fail_count == 0


def test_out_of_range_ignores_unparseable_cells(settings):
    table = make_table({"value": ["1", "2", "3", "4", "100", "oops"]})
    assert check_out_of_range(table, settings).fail_count == 1


def test_out_of_range_ignores_categorical_columns(settings):
    table = make_table({"value": ["1", "1000000", "a", "b", "c"]})
    assert check_out_of_range(table, settings).fail_count == 0


def test_out_of_range_multiplier_is_configurable():
    table = make_table({"value": ["1", "2", "3", "4", "9"]})
    assert check_out_of_range(table, ValidationSettings()).fail_count == 0
    assert check_out_of_range(table, ValidationSettings(iqr_multiplier=1.5)).fail_count == 1
