"""Column type inference.

A column is treated as numeric when more than a threshold share of its
non-empty cells coerce to a finite number. The classification gates which
checks (type errors, out-of-range, outliers) apply to a column.
"""

from __future__ import annotations

import logging
from typing import Dict

import numpy as np
import pandas as pd

from .enums import ColumnKind

logger = logging.getLogger(__name__)

# Share of non-empty cells that must parse as numbers for a column to be
# numeric. Strictly greater-than: a 50/50 column stays categorical.
NUMERIC_THRESHOLD = 0.5


def coerce_numeric(series: pd.Series) -> pd.Series:
    """Coerce a column to floats, leaving NaN where a cell does not parse.

    Uses the permissive `pd.to_numeric(errors="coerce")`, so cells that were
    already typed numeric at ingestion pass through unchanged. Non-finite
    results (``inf``, ``-inf``) are treated as failures.

    Examples:
        >>> coerce_numeric(pd.Series(["1", "2.5", "x", None])).tolist()
        [1.0, 2.5, nan, nan]
    """
    numeric = pd.to_numeric(series, errors="coerce").astype(float)
    return numeric.where(np.isfinite(numeric))


def infer_column_kind(series: pd.Series, threshold: float) -> ColumnKind:
    """Classify a single column as numeric or categorical.

    Args:
        series: Column cells; missing cells are NaN/None.
        threshold: Share of non-empty cells that must parse as numbers.
            The comparison is strict: exactly ``threshold`` stays categorical.

    Returns:
        ColumnKind.NUMERIC or ColumnKind.CATEGORICAL. A column with no
        non-empty cells is categorical.
    """
    non_empty = int(series.notna().sum())
    if non_empty == 0:
        return ColumnKind.CATEGORICAL
    parsed = int(coerce_numeric(series).notna().sum())
    if parsed / non_empty > threshold:
        return ColumnKind.NUMERIC
    return ColumnKind.CATEGORICAL


def infer_column_kinds(frame: pd.DataFrame, threshold: float) -> Dict[str, ColumnKind]:
    """Classify every column of a frame, preserving column order."""
    kinds = {str(name): infer_column_kind(frame[name], threshold) for name in frame.columns}
    logger.debug("Inferred column kinds: %s", {k: v.value for k, v in kinds.items()})
    return kinds


__all__ = ["NUMERIC_THRESHOLD", "coerce_numeric", "infer_column_kind", "infer_column_kinds"]
