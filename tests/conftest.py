"""Shared pytest configuration, fixtures, and utilities for validation testing."""

from datetime import datetime, timezone
from pathlib import Path
from typing import Dict, List, Optional

import pandas as pd
import pytest

from validata.core.table import Table
from validata.validation.config import ValidationSettings

FIXED_NOW = datetime(2024, 3, 1, 12, 0, 0, tzinfo=timezone.utc)


def make_table(data: Dict[str, List], numeric_threshold: Optional[float] = None) -> Table:
    """Build a Table from a column -> cells mapping (None or "" for empty cells)."""
    return Table.from_frame(pd.DataFrame(data), numeric_threshold)


def write_csv(directory: Path, name: str, text: str) -> Path:
    path = directory / name
    path.write_text(text, encoding="utf-8")
    return path


@pytest.fixture
def settings():
    """Default validation settings."""
    return ValidationSettings()


@pytest.fixture
def scenario_a_table():
    """Two categorical columns, four rows, one empty cell, no duplicates."""
    return make_table(
        {
            "a": ["north", "south", "east", "west"],
            "b": ["red", "", "green", "blue"],
        }
    )


@pytest.fixture
def clean_csv_bytes():
    """A small CSV with no data quality issues."""
    return b"name,age,email\nalice,30,alice@example.com\nbob,40,bob@example.org\ncarol,35,carol@example.net\n"


@pytest.fixture
def dirty_csv_bytes():
    """A CSV with a missing value, a duplicate row and a bad email."""
    return (
        b"name,age,email\n"
        b"alice,30,alice@example.com\n"
        b"bob,,bob-at-example\n"
        b"alice,30,alice@example.com\n"
        b"carol,35,carol@example.net\n"
    )
