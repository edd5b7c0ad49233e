"""Validation engine for Validata.

This module provides the data-quality validation framework:

- **Models**: CheckResult, ValidationRecord - validation result data structures
- **Checks**: Six independent check functions (see validation/checks/)
- **Config**: Thresholds, severity rules and ValidationSettings (import from .config)
- **Scorer**: compute_score() - reduces issue counts to a 0-100 score
- **Registry**: validate_table(), validate_bytes(), print_report() - orchestration

Public API:
    CheckResult: Individual check result with severity and per-column breakdown
    ValidationRecord: Immutable snapshot of one validation run
    ValidationSettings: Tunable thresholds for a run
    validate_table: Validate an already-parsed Table
    validate_bytes: Parse CSV bytes and validate them
    print_report: Display validation results to console

Usage:
    >>> from validata.validation import validate_bytes, print_report
    >>> record = validate_bytes(Path("data.csv").read_bytes())
    >>> print_report(record)
"""

from __future__ import annotations

from .config import ValidationSettings
from .models import CheckResult, ValidationRecord
from .registry import print_report, run_checks, validate_bytes, validate_table
from .scorer import compute_score

__all__ = [
    # Data models
    "CheckResult",
    "ValidationRecord",
    "ValidationSettings",
    # Runner functions
    "run_checks",
    "validate_table",
    "validate_bytes",
    "print_report",
    "compute_score",
]
