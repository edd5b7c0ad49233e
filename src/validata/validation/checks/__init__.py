"""Validation checks base interface.

This module defines the protocol (interface) that all validation checks
implement. Each check counts one kind of defect in a `Table` and is a plain
function, so checks are independent and order-insensitive.

A check:

1. Lives in its own file in this directory (e.g., `missing_values.py`)
2. Is a function ``check_<name>(table, settings) -> CheckResult``
3. Never mutates the table and never raises for a bad cell; a cell that
   fails coercion or a pattern is exactly what the check counts
4. Is listed in ALL_CHECKS in registry.py

Example:
    ```python
    # checks/my_check.py
    from validata.core.table import Table
    from ..config import ValidationSettings
    from ..models import CheckResult

    def check_my_thing(table: Table, settings: ValidationSettings) -> CheckResult:
        by_column = {name: ... for name in table.columns}
        return CheckResult.from_count("my_thing", sum(by_column.values()), by_column)
    ```
"""

from __future__ import annotations

from typing import Protocol

from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult


class CheckFunction(Protocol):
    """Protocol for validation check callables.

    Args:
        table: Typed table to inspect (never mutated).
        settings: Thresholds for this run.

    Returns:
        CheckResult with the defect count and a per-column breakdown.
    """

    def __call__(self, table: Table, settings: ValidationSettings) -> CheckResult:
        ...


__all__ = ["CheckFunction"]
