"""Tests for the Table model and column type inference."""

import os
import subprocess
import sys

import pandas as pd
import pytest

from conftest import make_table

from validata.core.enums import ColumnKind
from validata.core.errors import IngestionError
from validata.core.inference import NUMERIC_THRESHOLD, coerce_numeric, infer_column_kind
from validata.core.table import Table


@pytest.mark.parametrize(
    "cells,expected",
    [
        (["1", "2", "3"], ColumnKind.NUMERIC),
        (["1", "2", "x"], ColumnKind.NUMERIC),
        (["1", "x"], ColumnKind.CATEGORICAL),  # exactly 50% stays categorical
        (["a", "b", "3"], ColumnKind.CATEGORICAL),
        ([None, None], ColumnKind.CATEGORICAL),  # no numeric evidence
        (["1", None, None, None], ColumnKind.NUMERIC),  # empties are not counted
        ([1, 2.5, "x"], ColumnKind.NUMERIC),
    ],
)
def test_infer_column_kind(cells, expected):
    assert infer_column_kind(pd.Series(cells, dtype=object), 0.5) is expected


def test_coerce_numeric_rejects_non_finite():
    result = coerce_numeric(pd.Series(["1", "inf", "-inf", "abc", None], dtype=object))
    assert result.iloc[0] == 1.0
    assert result.iloc[1:].isna().all()


def test_table_properties():
    table = make_table({"a": ["1", "2", "3"], "b": ["x", "", None]})

    assert table.columns == ["a", "b"]
    assert table.row_count == len(table) == 3
    assert table.column_count == 2
    assert table.total_cells == 6
    assert table.numeric_columns() == ["a"]
    assert table.column("b").isna().tolist() == [False, True, True]
    assert table.numeric_values("a").tolist() == [1.0, 2.0, 3.0]


def test_table_is_not_mutated_through_accessors():
    table = make_table({"a": ["1", "2"]})

    column = table.column("a")
    column[0] = "changed"
    frame = table.to_frame()
    frame.loc[1, "a"] = "changed"
    kinds = table.kinds
    kinds["a"] = ColumnKind.CATEGORICAL

    assert table.column("a").tolist() == ["1", "2"]
    assert table.kind_of("a") is ColumnKind.NUMERIC


def test_table_does_not_alias_source_frame():
    source = pd.DataFrame({"a": ["1", "2"]})
    table = Table.from_frame(source)
    source.loc[0, "a"] = "x"
    assert table.column("a").tolist() == ["1", "2"]


def test_table_rejects_duplicate_columns():
    frame = pd.DataFrame([["1", "2"]], columns=["a", "a"])
    with pytest.raises(IngestionError, match="Duplicate column names"):
        Table.from_frame(frame)


def test_table_column_names_are_strings():
    table = Table.from_frame(pd.DataFrame({0: ["x"], 1: ["y"]}))
    assert table.columns == ["0", "1"]


def test_numeric_threshold_shared_with_validation_config():
    from validata.validation import config

    assert config.NUMERIC_THRESHOLD is NUMERIC_THRESHOLD
    assert config.ValidationSettings().numeric_threshold == NUMERIC_THRESHOLD


def test_core_table_does_not_import_validation_layer():
    """Building a Table must not pull in validata.validation."""
    code = (
        "import sys\n"
        "import pandas as pd\n"
        "from validata.core.table import Table\n"
        "Table.from_frame(pd.DataFrame({'a': ['1', '2']}))\n"
        "loaded = [m for m in sys.modules if m.startswith('validata.validation')]\n"
        "assert not loaded, loaded\n"
    )
    env = {**os.environ, "PYTHONPATH": os.pathsep.join(p for p in sys.path if p)}
    result = subprocess.run(
        [sys.executable, "-c", code], env=env, capture_output=True, text=True, check=False
    )
    assert result.returncode == 0, result.stderr
