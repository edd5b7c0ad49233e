"""CSV ingestion.

Turns raw CSV bytes (UTF-8, first row = header) into a `Table`. Structural
problems are reported as `IngestionError` before any check runs:

- bytes that are not valid UTF-8
- CSV that cannot be tokenized
- duplicate header names
- rows whose field count differs from the header

Cells are kept as the raw strings of the file so that duplicate detection
compares values exactly as they appear in the file. Only truly empty fields
become missing values; tokens such as ``NA`` or ``null`` are kept as text.
"""

from __future__ import annotations

import csv
import io
import logging
from pathlib import Path
from typing import List, Optional, Tuple

import pandas as pd

from validata.core.errors import IngestionError
from validata.core.table import Table

logger = logging.getLogger(__name__)


def _decode(raw: bytes) -> str:
    try:
        return raw.decode("utf-8-sig")
    except UnicodeDecodeError as e:
        raise IngestionError(f"Dataset is not valid UTF-8 text: {e}") from e


def _read_rows(text: str) -> Tuple[List[str], List[List[str]]]:
    """Return the header and data rows, verifying every row has the header's width.

    Lines with no fields at all are skipped. Any other line, including one
    holding only whitespace, is a row.
    """
    reader = csv.reader(io.StringIO(text))
    header: Optional[List[str]] = None
    rows: List[List[str]] = []
    try:
        for row in reader:
            if not row:
                continue  # blank line
            if header is None:
                header = row
                continue
            if len(row) != len(header):
                raise IngestionError(
                    f"Row on line {reader.line_num} has {len(row)} fields, "
                    f"expected {len(header)} (header: {', '.join(header)})"
                )
            rows.append(row)
    except csv.Error as e:
        raise IngestionError(f"Malformed CSV near line {reader.line_num}: {e}") from e

    if header is None:
        return [], []
    seen = set()
    duplicates = []
    for name in header:
        if name in seen and name not in duplicates:
            duplicates.append(name)
        seen.add(name)
    if duplicates:
        raise IngestionError(f"Duplicate column names: {', '.join(duplicates)}")
    return header, rows


def parse_table(raw: bytes, numeric_threshold: Optional[float] = None) -> Table:
    """Parse raw CSV bytes into a Table.

    Args:
        raw: CSV content. A UTF-8 BOM is tolerated.
        numeric_threshold: Optional override for the numeric classification cutoff.

    Returns:
        Table with per-column kinds attached. Input with no header at all
        yields a table with zero columns; header-only input yields zero rows.

    Raises:
        IngestionError: If the bytes are not a well-formed rectangular CSV.

    Examples:
        >>> table = parse_table(b"a,b\\n1,x\\n2,\\n")
        >>> table.row_count, table.column_count
        (2, 2)
    """
    text = _decode(raw)
    header, rows = _read_rows(text)
    if not header:
        logger.warning("Dataset has no header row")
        return Table.from_frame(pd.DataFrame(), numeric_threshold)

    # Header is kept exactly as written; cells stay raw strings
    frame = pd.DataFrame(rows, columns=header, dtype=object)
    table = Table.from_frame(frame, numeric_threshold)
    logger.debug("Parsed table: %d rows x %d columns", table.row_count, table.column_count)
    return table


def read_table(path: Path, numeric_threshold: Optional[float] = None) -> Table:
    """Read a CSV file from disk into a Table.

    Raises:
        FileNotFoundError: If the file does not exist.
        IngestionError: If the file is not a well-formed CSV.
    """
    if not path.exists():
        raise FileNotFoundError(f"CSV file not found: {path}")
    return parse_table(path.read_bytes(), numeric_threshold)


__all__ = ["parse_table", "read_table"]
