"""Validation data models.

This module defines core data structures for validation results:
- CheckResult: Outcome of a single check (count plus per-column breakdown)
- ValidationRecord: Immutable snapshot of one validation run
"""

from __future__ import annotations

import json
from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Dict, List, Mapping, Optional, Tuple

from validata.core.enums import ScoreBand
from .config import CHECK_IDS, CHECK_TITLES, SEVERITY_LEVELS, get_severity


@dataclass(frozen=True)
class CheckResult:
    """Result of a single validation check.

    Attributes:
        check_id: Check identifier (one of `config.CHECK_IDS`).
        severity: Severity level - "high", "medium" or "low".
        passed: True if the check found no defects.
        fail_count: Number of defective cells or rows (0 if passed).
        by_column: Defect count per column, only columns with defects.
        messages: Human-readable details (e.g., which column had how many defects).

    Examples:
        >>> CheckResult(
        ...     check_id="missing_values",
        ...     severity="high",
        ...     passed=False,
        ...     fail_count=3,
        ...     by_column={"age": 3},
        ...     messages=["Column 'age': 3 empty cells"],
        ... )
    """

    check_id: str
    severity: str  # "high" | "medium" | "low"
    passed: bool
    fail_count: int
    by_column: Dict[str, int] = field(default_factory=dict)
    messages: List[str] = field(default_factory=list)

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if self.check_id not in CHECK_IDS:
            raise ValueError(f"Unknown check_id: {self.check_id}")
        if self.severity not in SEVERITY_LEVELS:
            raise ValueError(
                f"Invalid severity: {self.severity}. Must be one of {', '.join(SEVERITY_LEVELS)}."
            )
        if self.fail_count < 0:
            raise ValueError("fail_count must be >= 0")
        if self.passed and self.fail_count != 0:
            raise ValueError("passed=True requires fail_count=0")
        if not self.passed and self.fail_count == 0:
            raise ValueError("passed=False requires fail_count > 0")

    @classmethod
    def from_count(
        cls,
        check_id: str,
        fail_count: int,
        by_column: Optional[Mapping[str, int]] = None,
        messages: Optional[List[str]] = None,
    ) -> "CheckResult":
        """Build a result from a count, deriving severity and pass/fail."""
        return cls(
            check_id=check_id,
            severity=get_severity(check_id),
            passed=fail_count == 0,
            fail_count=int(fail_count),
            by_column={k: int(v) for k, v in (by_column or {}).items() if v},
            messages=list(messages or []),
        )

    @property
    def title(self) -> str:
        return CHECK_TITLES[self.check_id]

    def to_dict(self) -> Dict[str, Any]:
        return {
            "check_id": self.check_id,
            "severity": self.severity,
            "passed": self.passed,
            "fail_count": self.fail_count,
            "by_column": dict(self.by_column),
            "messages": list(self.messages),
        }


@dataclass(frozen=True)
class ValidationRecord:
    """Immutable snapshot of one validation run.

    Attributes:
        score: Quality score, 0-100.
        total_issues: Sum of the six check counts.
        issues: Check id -> defect count, always all six keys in `CHECK_IDS` order.
        total_cells: rows x columns.
        total_rows: Number of data rows.
        total_columns: Number of columns.
        created_at: Timezone-aware UTC timestamp of the run.
        dataset_id: Identifier of the validated dataset, if it came from a store.
        results: Per-check results backing `issues` (empty when loaded from a
            store record that did not keep them).

    Examples:
        >>> record.to_dict()["details"]
        {'total_cells': 8, 'total_rows': 4, 'total_columns': 2}
    """

    score: int
    total_issues: int
    issues: Dict[str, int]
    total_cells: int
    total_rows: int
    total_columns: int
    created_at: datetime
    dataset_id: Optional[str] = None
    results: Tuple[CheckResult, ...] = ()

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not 0 <= self.score <= 100:
            raise ValueError(f"score must be within 0..100, got {self.score}")
        if set(self.issues) != set(CHECK_IDS):
            raise ValueError(
                f"issues must have exactly the keys {', '.join(CHECK_IDS)}, "
                f"got {', '.join(sorted(self.issues))}"
            )
        if any(v < 0 for v in self.issues.values()):
            raise ValueError("issue counts must be >= 0")
        if self.total_issues != sum(self.issues.values()):
            raise ValueError("total_issues must equal the sum of issue counts")
        if self.total_cells != self.total_rows * self.total_columns:
            raise ValueError("total_cells must equal total_rows * total_columns")
        if self.created_at.tzinfo is None or self.created_at.utcoffset() is None:
            raise ValueError(f"created_at must be timezone-aware, got {self.created_at!r}")

    @property
    def band(self) -> ScoreBand:
        return ScoreBand.for_score(self.score)

    def get_failed_checks(self) -> List[CheckResult]:
        """Get all checks that found at least one defect, in check order."""
        return [r for r in self.results if not r.passed]

    def recommendations(self) -> List[str]:
        """Plain-language next steps derived from the issue counts."""
        recs = []
        if self.issues["missing_values"] > 0:
            recs.append(
                f"Address {self.issues['missing_values']} missing values before production use"
            )
        if self.issues["type_errors"] > 0:
            recs.append(
                f"Fix {self.issues['type_errors']} type errors to ensure data consistency"
            )
        if self.issues["duplicate_rows"] > 0:
            recs.append(
                f"Remove {self.issues['duplicate_rows']} duplicate rows to improve accuracy"
            )
        if self.band is ScoreBand.EXCELLENT:
            recs.append("Data quality is excellent and ready for production use")
        return recs

    # ------------------------------------------------------------------
    # Serialization
    # ------------------------------------------------------------------

    def to_dict(self) -> Dict[str, Any]:
        """Return the public result shape."""
        return {
            "score": self.score,
            "total_issues": self.total_issues,
            "issues": {check_id: self.issues[check_id] for check_id in CHECK_IDS},
            "details": {
                "total_cells": self.total_cells,
                "total_rows": self.total_rows,
                "total_columns": self.total_columns,
            },
            "created_at": self.created_at.isoformat(),
        }

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "ValidationRecord":
        """Rebuild a record from `to_dict()` / `to_json()` output.

        Raises:
            ValueError: If required keys are missing or values are inconsistent.
        """
        try:
            details = data["details"]
            results = tuple(
                CheckResult(
                    check_id=r["check_id"],
                    severity=r["severity"],
                    passed=r["passed"],
                    fail_count=r["fail_count"],
                    by_column=dict(r.get("by_column", {})),
                    messages=list(r.get("messages", [])),
                )
                for r in data.get("checks", [])
            )
            return cls(
                score=int(data["score"]),
                total_issues=int(data["total_issues"]),
                issues={k: int(v) for k, v in data["issues"].items()},
                total_cells=int(details["total_cells"]),
                total_rows=int(details["total_rows"]),
                total_columns=int(details["total_columns"]),
                created_at=datetime.fromisoformat(data["created_at"]),
                dataset_id=data.get("dataset_id"),
                results=results,
            )
        except (KeyError, TypeError) as e:
            raise ValueError(f"Malformed validation record: {e}") from e

    def to_json(self) -> str:
        """Generate detailed JSON validation report.

        Returns:
            The public result shape plus `dataset_id`, `band` and per-check details.
        """
        data = self.to_dict()
        data["dataset_id"] = self.dataset_id
        data["band"] = self.band.value
        data["checks"] = [r.to_dict() for r in self.results]
        return json.dumps(data, indent=2, ensure_ascii=False)

    # ------------------------------------------------------------------
    # Text reports
    # ------------------------------------------------------------------

    def summary(self) -> str:
        """Generate a concise text summary of validation results.

        Examples:
            >>> print(record.summary())
            Validation Summary:
              Score: 88% (Good Quality)
              Table: 4 rows x 2 columns (8 cells)
              Issues: 1 total
        """
        return (
            f"Validation Summary:\n"
            f"  Score: {self.score}% ({self.band.value})\n"
            f"  Table: {self.total_rows} rows x {self.total_columns} columns "
            f"({self.total_cells} cells)\n"
            f"  Issues: {self.total_issues} total"
        )

    def to_console_summary(self) -> str:
        """Generate a concise summary for console output.

        Returns:
            A string containing the overall summary and a brief list of failed checks.
        """
        lines = [self.summary(), ""]

        failed_checks = self.get_failed_checks()

        if self.total_issues == 0:
            lines.append("✅ No data quality issues found!")
        elif not failed_checks:
            # Loaded from a record without per-check details
            for check_id in CHECK_IDS:
                if self.issues[check_id]:
                    lines.append(f"⚠️ {check_id}: {self.issues[check_id]}")
        else:
            lines.append("Check Details:")
            for result in failed_checks:
                icon = "❌" if result.severity == "high" else "⚠️"
                lines.append(
                    f"{icon} {result.check_id} ({result.severity}): {result.fail_count} issues"
                )
                if result.messages:
                    lines.append(f"   - {result.messages[0]}")

        return "\n".join(lines)

    def to_markdown(self, title: Optional[str] = None) -> str:
        """Generate detailed Markdown validation report.

        Args:
            title: Dataset name for the heading (defaults to the dataset id).

        Returns:
            Formatted Markdown string with:
            - Header with dataset information and timestamp
            - Score and quality band
            - Issues table with counts and severity
            - Per-check details for failed checks
            - Recommendations
        """
        name = title or self.dataset_id or "dataset"
        lines = [
            f"# Validation Report: {name}",
            "",
            f"**Rows:** {self.total_rows}",
            f"**Columns:** {self.total_columns}",
            f"**Generated:** {self.created_at.strftime('%Y-%m-%d %H:%M:%S %Z')}",
            "",
            "## Overall Quality Score",
            "",
            f"**{self.score}%** ({self.band.value})",
            "",
            "## Issues Detected",
            "",
            "| Issue Type | Count | Severity |",
            "|---|---:|---|",
        ]
        for check_id in CHECK_IDS:
            lines.append(
                f"| {CHECK_TITLES[check_id]} | {self.issues[check_id]} | "
                f"{get_severity(check_id).capitalize()} |"
            )
        lines.append("")
        lines.append(f"**Total Issues:** {self.total_issues}")
        lines.append("")

        failed = self.get_failed_checks()
        if failed:
            lines.append("## Details")
            lines.append("")
            for result in failed:
                lines.append(f"### {result.title} ({result.fail_count})")
                lines.append("")
                for msg in result.messages:
                    lines.append(f"- {msg}")
                lines.append("")

        recs = self.recommendations()
        if recs:
            lines.append("## Recommendations")
            lines.append("")
            for rec in recs:
                lines.append(f"- {rec}")
            lines.append("")

        return "\n".join(lines)
