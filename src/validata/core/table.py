"""In-memory table model.

A `Table` wraps a pandas DataFrame of raw cell values together with the
per-column `ColumnKind` classification derived when the table is built.
The wrapped frame is private; every accessor hands out a copy, so a Table
never changes after construction.
"""

from __future__ import annotations

from typing import Dict, List, Mapping, Optional

import pandas as pd

from .enums import ColumnKind
from .errors import IngestionError
from .inference import NUMERIC_THRESHOLD, coerce_numeric, infer_column_kinds


class Table:
    """Immutable typed view over a parsed dataset.

    Attributes:
        columns: Ordered, unique column names.
        kinds: Mapping of column name to its inferred ColumnKind.
        row_count: Number of data rows (header excluded).

    Examples:
        >>> table = Table.from_frame(pd.DataFrame({"a": ["1", "2"], "b": ["x", None]}))
        >>> table.columns
        ['a', 'b']
        >>> table.kinds["a"]
        <ColumnKind.NUMERIC: 'numeric'>
        >>> table.total_cells
        4
    """

    __slots__ = ("_frame", "_kinds")

    def __init__(self, frame: pd.DataFrame, kinds: Mapping[str, ColumnKind]) -> None:
        self._frame = frame
        self._kinds: Dict[str, ColumnKind] = dict(kinds)

    @classmethod
    def from_frame(
        cls, frame: pd.DataFrame, numeric_threshold: Optional[float] = None
    ) -> "Table":
        """Build a Table from a DataFrame of raw cells.

        Empty strings are normalised to missing values so that a single
        ``isna()`` test identifies empty cells everywhere downstream.

        Args:
            frame: Parsed data; column labels become column names.
            numeric_threshold: Override for the numeric classification cutoff.
                Defaults to `NUMERIC_THRESHOLD`.

        Raises:
            IngestionError: If column names are not unique.
        """
        threshold = NUMERIC_THRESHOLD if numeric_threshold is None else numeric_threshold

        data = frame.copy()
        data.columns = [str(c) for c in data.columns]
        if not data.columns.is_unique:
            duplicated = sorted(set(data.columns[data.columns.duplicated()]))
            raise IngestionError(f"Duplicate column names: {', '.join(duplicated)}")
        data = data.astype(object)
        data = data.mask(data.isna() | data.eq(""))
        data = data.reset_index(drop=True)

        return cls(data, infer_column_kinds(data, threshold))

    @property
    def columns(self) -> List[str]:
        return list(self._frame.columns)

    @property
    def kinds(self) -> Dict[str, ColumnKind]:
        return dict(self._kinds)

    @property
    def row_count(self) -> int:
        return int(len(self._frame.index))

    @property
    def column_count(self) -> int:
        return int(len(self._frame.columns))

    @property
    def total_cells(self) -> int:
        return self.row_count * self.column_count

    def kind_of(self, name: str) -> ColumnKind:
        return self._kinds[name]

    def numeric_columns(self) -> List[str]:
        """Names of columns classified numeric, in table order."""
        return [c for c in self.columns if self._kinds[c] is ColumnKind.NUMERIC]

    def column(self, name: str) -> pd.Series:
        """Return a copy of one column's raw cells."""
        return self._frame[name].copy()

    def numeric_values(self, name: str) -> pd.Series:
        """Return the finite numeric values of a column, empty and unparseable cells dropped."""
        return coerce_numeric(self._frame[name]).dropna()

    def to_frame(self) -> pd.DataFrame:
        """Return a copy of the underlying raw frame."""
        return self._frame.copy()

    def __len__(self) -> int:
        return self.row_count

    def __repr__(self) -> str:
        return f"Table(rows={self.row_count}, columns={self.columns!r})"


__all__ = ["Table"]
