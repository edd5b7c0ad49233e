"""Tests for the z-score outliers check."""

from conftest import make_table

from validata.validation.checks.outliers import check_outliers
from validata.validation.config import ValidationSettings


def test_outliers_flags_extreme_value(settings):
    """Twenty 10s and one 100: z for 100 is about 4.4."""
    table = make_table({"value": ["10"] * 20 + ["100"]})
    result = check_outliers(table, settings)

    assert result.passed is False
    assert result.fail_count == 1
    assert result.by_column == {"value": 1}


def test_outliers_small_sample_not_flagged(settings):
    """[1, 2, 3, 4, 100]: mean 22, std ~43.6, z for 100 ~1.79."""
    table = make_table({"value": ["1", "2", "3", "4", "100"]})
    assert check_outliers(table, settings).fail_count == 0


def test_outliers_zero_std_contributes_nothing(settings):
    table = make_table({"value": ["7", "7", "7", "7"]})
    assert check_outliers(table, settings).fail_count == 0


def test_outliers_single_value_contributes_nothing(settings):
    table = make_table({"value": ["7", None, None]})
    assert check_outliers(table, settings).fail_count == 0


def test_outliers_threshold_is_configurable():
    table = make_table({"value": ["1", "2", "3", "4", "100"]})
    assert check_outliers(table, ValidationSettings(zscore_threshold=1.5)).fail_count == 1
