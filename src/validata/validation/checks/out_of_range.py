"""Out-of-range check (IQR fence).

For each numeric column, Q1 and Q3 are estimated with linear interpolation
over the column's numeric values, and cells strictly outside
``[Q1 - k*IQR, Q3 + k*IQR]`` are counted, with ``k`` = `IQR_MULTIPLIER`.

This check and the z-score outliers check are additive: a value may be
flagged by both.
"""

from __future__ import annotations

import logging

from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult

logger = logging.getLogger(__name__)


def check_out_of_range(table: Table, settings: ValidationSettings) -> CheckResult:
    """Count numeric cells outside the interquartile fence.

    Columns with fewer than two numeric values contribute 0 (quantiles undefined).
    """
    by_column = {}
    messages = []
    k = settings.iqr_multiplier
    for name in table.numeric_columns():
        values = table.numeric_values(name)
        if len(values) < 2:
            continue
        q1 = float(values.quantile(0.25, interpolation="linear"))
        q3 = float(values.quantile(0.75, interpolation="linear"))
        iqr = q3 - q1
        lower = q1 - k * iqr
        upper = q3 + k * iqr
        count = int(((values < lower) | (values > upper)).sum())
        logger.debug("%s: IQR fence [%s, %s], %d outside", name, lower, upper, count)
        if count:
            by_column[name] = count
            messages.append(
                f"Column '{name}': {count} values outside [{lower:g}, {upper:g}]"
            )
    return CheckResult.from_count("out_of_range", sum(by_column.values()), by_column, messages)
