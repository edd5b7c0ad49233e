"""Core enumerations used across the package."""

from __future__ import annotations

from enum import Enum


class ColumnKind(str, Enum):
    """Classification of a column for the purposes of downstream checks.

    Values are strings to ease serialization into reports.
    """

    NUMERIC = "numeric"
    CATEGORICAL = "categorical"


class ScoreBand(str, Enum):
    """Human-readable quality band for a 0-100 score."""

    EXCELLENT = "Excellent Quality"
    GOOD = "Good Quality"
    NEEDS_IMPROVEMENT = "Needs Improvement"

    @classmethod
    def for_score(cls, score: int) -> "ScoreBand":
        """Map a quality score to its band.

        Examples:
            >>> ScoreBand.for_score(95)
            <ScoreBand.EXCELLENT: 'Excellent Quality'>
            >>> ScoreBand.for_score(70).name
            'GOOD'
        """
        if score >= 90:
            return cls.EXCELLENT
        if score >= 70:
            return cls.GOOD
        return cls.NEEDS_IMPROVEMENT


__all__ = ["ColumnKind", "ScoreBand"]
