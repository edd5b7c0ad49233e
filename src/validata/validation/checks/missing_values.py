"""Missing values check.

Counts every empty cell in the table. A row with three empty cells
contributes three; there is no per-row or per-column collapsing.
"""

from __future__ import annotations

from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult


def check_missing_values(table: Table, settings: ValidationSettings) -> CheckResult:
    """Count empty cells across all columns.

    Returns:
        CheckResult whose fail_count is at most rows x columns.
    """
    by_column = {}
    messages = []
    for name in table.columns:
        count = int(table.column(name).isna().sum())
        if count:
            by_column[name] = count
            messages.append(f"Column '{name}': {count} empty cells")
    return CheckResult.from_count("missing_values", sum(by_column.values()), by_column, messages)
