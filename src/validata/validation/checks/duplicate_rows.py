"""Duplicate rows check.

A row is a duplicate when its full tuple of raw values equals a row that
appears earlier in ingestion order. Only the repeats are counted: two
identical rows contribute one.
"""

from __future__ import annotations

from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult


def check_duplicate_rows(table: Table, settings: ValidationSettings) -> CheckResult:
    """Count rows that repeat an earlier row.

    Empty cells compare equal to each other, so two rows that are both empty
    in the same columns and equal elsewhere are duplicates.
    """
    frame = table.to_frame()
    if frame.empty:
        return CheckResult.from_count("duplicate_rows", 0)

    duplicated = frame.duplicated(keep="first")
    count = int(duplicated.sum())
    messages = []
    if count:
        # 1-based data row numbers, header excluded
        rows = [int(i) + 1 for i in frame.index[duplicated][:5]]
        messages.append(f"{count} repeated rows; first at data rows {rows}")
    return CheckResult.from_count("duplicate_rows", count, messages=messages)
