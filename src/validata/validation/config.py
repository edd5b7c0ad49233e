"""Validation configuration constants.

This module centralizes all validation thresholds and severity rules.
Adjust these constants to tune validation behavior, or override them per run
with a YAML settings file (see `ValidationSettings.from_yaml`).

Severity Levels:
    - "high": Defects that make the data unusable as-is (missing values, type errors)
    - "medium": Defects that distort analysis (duplicates, out-of-range values)
    - "low": Defects that warrant review (malformed patterns, statistical outliers)
"""

from __future__ import annotations

import re
from dataclasses import dataclass, field, fields
from pathlib import Path
from typing import Dict, Tuple

import yaml

from validata.core.inference import NUMERIC_THRESHOLD

# ============================================================================
# THRESHOLD CONSTANTS
# ============================================================================

# NUMERIC_THRESHOLD (column-kind cutoff) is defined with the inference code in
# validata.core.inference and re-exported here.

# Out-of-range fence: [Q1 - k*IQR, Q3 + k*IQR]
IQR_MULTIPLIER = 3.0

# Outliers: |value - mean| / std above this is flagged
ZSCORE_THRESHOLD = 3.0

# Columns whose (lower-cased) name contains any of these get the email check
EMAIL_COLUMN_KEYWORDS: Tuple[str, ...] = ("email", "mail")

EMAIL_PATTERN = r"^[A-Za-z0-9._%+-]+@[A-Za-z0-9.-]+\.[A-Za-z]{2,}$"


# ============================================================================
# CHECK IDS & SEVERITY RULES
# ============================================================================

# Fixed order used for reports and the issues mapping
CHECK_IDS: Tuple[str, ...] = (
    "missing_values",
    "duplicate_rows",
    "type_errors",
    "out_of_range",
    "invalid_patterns",
    "outliers",
)

SEVERITY_LEVELS: Tuple[str, ...] = ("high", "medium", "low")

_SEVERITY_MAP: Dict[str, str] = {
    "missing_values": "high",
    "duplicate_rows": "medium",
    "type_errors": "high",
    "out_of_range": "medium",
    "invalid_patterns": "low",
    "outliers": "low",
}

# Display names used in reports
CHECK_TITLES: Dict[str, str] = {
    "missing_values": "Missing Values",
    "duplicate_rows": "Duplicate Rows",
    "type_errors": "Type Errors",
    "out_of_range": "Out of Range",
    "invalid_patterns": "Invalid Patterns",
    "outliers": "Outliers",
}


# ============================================================================
# HELPER FUNCTIONS
# ============================================================================

def get_severity(check_id: str) -> str:
    """Get severity level for a check.

    Args:
        check_id: Validation check identifier (e.g., "missing_values").

    Returns:
        Severity level: "high", "medium" or "low".

    Raises:
        ValueError: If check_id is unknown.

    Examples:
        >>> get_severity("type_errors")
        'high'
        >>> get_severity("outliers")
        'low'
    """
    if check_id not in _SEVERITY_MAP:
        raise ValueError(f"Unknown check_id: {check_id}")
    return _SEVERITY_MAP[check_id]


@dataclass(frozen=True)
class ValidationSettings:
    """Tunable parameters for one validation run.

    Defaults mirror the module constants. Instances are immutable and can be
    shared freely between concurrent runs.

    Examples:
        >>> ValidationSettings().numeric_threshold
        0.5
        >>> ValidationSettings(zscore_threshold=2.5).iqr_multiplier
        3.0
    """

    numeric_threshold: float = NUMERIC_THRESHOLD
    iqr_multiplier: float = IQR_MULTIPLIER
    zscore_threshold: float = ZSCORE_THRESHOLD
    email_column_keywords: Tuple[str, ...] = field(default=EMAIL_COLUMN_KEYWORDS)
    email_pattern: str = EMAIL_PATTERN

    def __post_init__(self) -> None:
        """Validate field constraints."""
        if not 0.0 <= self.numeric_threshold < 1.0:
            raise ValueError(
                f"numeric_threshold must be in [0, 1), got {self.numeric_threshold}"
            )
        if self.iqr_multiplier < 0:
            raise ValueError(f"iqr_multiplier must be >= 0, got {self.iqr_multiplier}")
        if self.zscore_threshold <= 0:
            raise ValueError(f"zscore_threshold must be > 0, got {self.zscore_threshold}")
        try:
            re.compile(self.email_pattern)
        except re.error as e:
            raise ValueError(f"Invalid email_pattern: {e}") from e
        # Accept lists from YAML but store an immutable tuple
        object.__setattr__(
            self,
            "email_column_keywords",
            tuple(str(k).lower() for k in self.email_column_keywords),
        )

    @property
    def email_regex(self) -> "re.Pattern[str]":
        return re.compile(self.email_pattern)

    def is_email_column(self, name: str) -> bool:
        """Return True if the column name matches one of the email keywords."""
        lowered = name.lower()
        return any(keyword in lowered for keyword in self.email_column_keywords)

    @classmethod
    def from_yaml(cls, path: Path) -> "ValidationSettings":
        """Load settings from a YAML file.

        The file holds a flat mapping of field names to values, e.g.::

            numeric_threshold: 0.6
            zscore_threshold: 2.5

        Missing keys keep their defaults.

        Raises:
            FileNotFoundError: If the file does not exist.
            ValueError: If the YAML is malformed, not a mapping, or has unknown keys.
        """
        if not path.exists():
            raise FileNotFoundError(f"Settings file not found: {path}")
        try:
            with path.open("r", encoding="utf-8") as f:
                data = yaml.safe_load(f) or {}
        except yaml.YAMLError as e:
            raise ValueError(f"Failed to read settings file {path}: {e}") from e
        if not isinstance(data, dict):
            raise ValueError(f"Settings file {path} must contain a mapping")

        known = {f.name for f in fields(cls)}
        unknown = sorted(set(data) - known)
        if unknown:
            raise ValueError(
                f"Unknown settings in {path}: {', '.join(unknown)}. "
                f"Valid keys: {', '.join(sorted(known))}"
            )
        keywords = data.get("email_column_keywords")
        if isinstance(keywords, str):
            data["email_column_keywords"] = (keywords,)
        elif keywords is not None:
            data["email_column_keywords"] = tuple(keywords)
        return cls(**data)


DEFAULT_SETTINGS = ValidationSettings()
