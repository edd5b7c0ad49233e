"""Statistical outliers check (z-score).

For each numeric column with a positive sample standard deviation, counts
values whose absolute z-score ``(value - mean) / std`` exceeds
`ZSCORE_THRESHOLD`. Columns with fewer than two values or identical values
contribute 0.
"""

from __future__ import annotations

import numpy as np

from validata.core.table import Table
from ..config import ValidationSettings
from ..models import CheckResult


def check_outliers(table: Table, settings: ValidationSettings) -> CheckResult:
    by_column = {}
    messages = []
    for name in table.numeric_columns():
        values = table.numeric_values(name)
        if len(values) < 2:
            continue
        std = float(values.std(ddof=1))
        if not std > 0:
            continue
        mean = float(values.mean())
        z_scores = np.abs((values - mean) / std)
        count = int((z_scores > settings.zscore_threshold).sum())
        if count:
            by_column[name] = count
            messages.append(
                f"Column '{name}': {count} values with |z| > {settings.zscore_threshold:g} "
                f"(mean {mean:g}, std {std:g})"
            )
    return CheckResult.from_count("outliers", sum(by_column.values()), by_column, messages)
