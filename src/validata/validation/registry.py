"""Validation check registry and runner.

This module orchestrates validation checks:
- ALL_CHECKS: Fixed tuple of (check_id, check function) pairs
- run_checks(): Executes every check against a Table
- validate_table(): Runs checks, scores them and assembles a ValidationRecord
- validate_bytes(): Ingests raw CSV bytes, then validates
- print_report(): Displays validation results to console

The engine is stateless: each call builds its own results and record, so
concurrent validations never share anything.
"""

from __future__ import annotations

import logging
from datetime import datetime, timezone
from typing import List, Optional, Tuple

from validata.core.errors import EmptyTableError
from validata.core.table import Table
from validata.ingestion.csv_table import parse_table
from .checks import CheckFunction
from .checks.duplicate_rows import check_duplicate_rows
from .checks.invalid_patterns import check_invalid_patterns
from .checks.missing_values import check_missing_values
from .checks.out_of_range import check_out_of_range
from .checks.outliers import check_outliers
from .checks.type_errors import check_type_errors
from .config import DEFAULT_SETTINGS, ValidationSettings
from .models import CheckResult, ValidationRecord
from .scorer import compute_score, total_issues

logger = logging.getLogger(__name__)


# Registry of all validation checks, in report order
ALL_CHECKS: Tuple[Tuple[str, CheckFunction], ...] = (
    ("missing_values", check_missing_values),
    ("duplicate_rows", check_duplicate_rows),
    ("type_errors", check_type_errors),
    ("out_of_range", check_out_of_range),
    ("invalid_patterns", check_invalid_patterns),
    ("outliers", check_outliers),
)


def run_checks(
    table: Table, settings: Optional[ValidationSettings] = None
) -> List[CheckResult]:
    """Run every registered check against a table.

    Args:
        table: Typed table to inspect.
        settings: Thresholds for this run (defaults to `DEFAULT_SETTINGS`).

    Returns:
        One CheckResult per registered check, in ALL_CHECKS order.
    """
    settings = settings or DEFAULT_SETTINGS
    results: List[CheckResult] = []
    for check_id, check in ALL_CHECKS:
        result = check(table, settings)
        if result.check_id != check_id:
            raise RuntimeError(
                f"Check registered as '{check_id}' returned result for '{result.check_id}'"
            )
        logger.debug("%s: %d", check_id, result.fail_count)
        results.append(result)
    return results


def validate_table(
    table: Table,
    settings: Optional[ValidationSettings] = None,
    *,
    dataset_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ValidationRecord:
    """Validate a table and return an immutable ValidationRecord.

    Args:
        table: Typed table to validate.
        settings: Thresholds for this run (defaults to `DEFAULT_SETTINGS`).
        dataset_id: Identifier recorded on the result, if the table came from a store.
        now: Timestamp to record (defaults to the current UTC time).

    Returns:
        ValidationRecord with score, counts and table dimensions.

    Raises:
        EmptyTableError: If the table has zero rows or zero columns.

    Examples:
        >>> table = parse_table(b"a,b\\n1,x\\n2,\\n3,y\\n4,z\\n")
        >>> validate_table(table).issues["missing_values"]
        1
    """
    if table.total_cells == 0:
        raise EmptyTableError(
            f"Cannot validate an empty table ({table.row_count} rows x "
            f"{table.column_count} columns)"
        )

    logger.info(
        "Validating table: %d rows x %d columns", table.row_count, table.column_count
    )
    results = run_checks(table, settings)
    issues = {r.check_id: r.fail_count for r in results}
    issue_total = total_issues(issues)
    score = compute_score(issue_total, table.total_cells)
    logger.info("Validation finished: score %d%%, %d issues", score, issue_total)

    created_at = now or datetime.now(timezone.utc)
    return ValidationRecord(
        score=score,
        total_issues=issue_total,
        issues=issues,
        total_cells=table.total_cells,
        total_rows=table.row_count,
        total_columns=table.column_count,
        created_at=created_at,
        dataset_id=dataset_id,
        results=tuple(results),
    )


def validate_bytes(
    raw: bytes,
    settings: Optional[ValidationSettings] = None,
    *,
    dataset_id: Optional[str] = None,
    now: Optional[datetime] = None,
) -> ValidationRecord:
    """Parse raw CSV bytes and validate the resulting table.

    Raises:
        IngestionError: If the bytes are not a well-formed CSV (no checks run).
        EmptyTableError: If the table has zero rows or zero columns.
    """
    settings = settings or DEFAULT_SETTINGS
    table = parse_table(raw, settings.numeric_threshold)
    return validate_table(table, settings, dataset_id=dataset_id, now=now)


def print_report(record: ValidationRecord) -> None:
    """Print validation report to console.

    Displays a summary followed by details of all failed checks.

    Examples:
        >>> print_report(validate_bytes(b"a,b\\n1,x\\n1,x\\n"))
        Validation Summary:
          Score: 75% (Good Quality)
          Table: 2 rows x 2 columns (4 cells)
          Issues: 1 total
        <BLANKLINE>
        Check Details:
        ⚠️ duplicate_rows (medium): 1 issues
           - 1 repeated rows; first at data rows [2]
    """
    print(record.to_console_summary())
