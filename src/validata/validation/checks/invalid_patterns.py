"""Invalid patterns check.

Columns whose name contains an email keyword ("email", "mail",
case-insensitive) must hold email addresses. Every cell that does not fully
match `EMAIL_PATTERN` is counted, including empty cells.
"""

from __future__ import annotations

from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult


def check_invalid_patterns(table: Table, settings: ValidationSettings) -> CheckResult:
    by_column = {}
    messages = []
    regex = settings.email_regex
    for name in table.columns:
        if not settings.is_email_column(name):
            continue
        cells = table.column(name)
        # Empty cells become "" and fail the anchored pattern
        text = cells.where(cells.notna(), "").astype(str)
        invalid = ~text.map(lambda value: regex.fullmatch(value) is not None)
        count = int(invalid.sum())
        if count:
            by_column[name] = count
            messages.append(f"Column '{name}': {count} values are not valid email addresses")
    return CheckResult.from_count(
        "invalid_patterns", sum(by_column.values()), by_column, messages
    )
