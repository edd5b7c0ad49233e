"""Quality score computation."""

from __future__ import annotations

import math
from typing import Mapping

from validata.core.errors import EmptyTableError


def compute_score(total_issues: int, total_cells: int) -> int:
    """Reduce an issue count to a 0-100 quality score.

    ``score = max(0, round(100 - total_issues / total_cells * 100))``, rounding
    halves up. Cells can be flagged by more than one check, so issues may
    exceed cells; the score is then clamped at 0.

    Args:
        total_issues: Sum of all check counts.
        total_cells: rows x columns of the validated table.

    Returns:
        Integer score in 0..100.

    Raises:
        EmptyTableError: If total_cells is 0 (score undefined).
        ValueError: If either argument is negative.

    Examples:
        >>> compute_score(1, 8)
        88
        >>> compute_score(20, 8)
        0
    """
    if total_cells < 0 or total_issues < 0:
        raise ValueError("total_issues and total_cells must be >= 0")
    if total_cells == 0:
        raise EmptyTableError("Cannot score an empty table (zero rows or zero columns)")
    raw = 100 - (total_issues / total_cells) * 100
    return max(0, min(100, math.floor(raw + 0.5)))


def total_issues(counts: Mapping[str, int]) -> int:
    return int(sum(counts.values()))


__all__ = ["compute_score", "total_issues"]
