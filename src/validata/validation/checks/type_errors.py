"""Type errors check.

In columns classified numeric, counts non-empty cells that fail numeric
coercion. Empty cells are not counted here (missing_values covers them),
and categorical columns contribute nothing.
"""

from __future__ import annotations

from validata.core.inference import coerce_numeric
from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult


def check_type_errors(table: Table, settings: ValidationSettings) -> CheckResult:
    by_column = {}
    messages = []
    for name in table.numeric_columns():
        cells = table.column(name)
        failed = cells.notna() & coerce_numeric(cells).isna()
        count = int(failed.sum())
        if count:
            by_column[name] = count
            sample = cells[failed].astype(str).head(3).tolist()
            messages.append(f"Column '{name}': {count} non-numeric values, e.g. {sample}")
    return CheckResult.from_count("type_errors", sum(by_column.values()), by_column, messages)
