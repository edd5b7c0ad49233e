"""File-system dataset and validation store.

Layout under the store root::

    datasets/<dataset_id>/raw.csv                    uploaded bytes, unchanged
    datasets/<dataset_id>/dataset.json               metadata (filename, shape, sha256)
    datasets/<dataset_id>/validations/<stamp>_<seq>_<suffix>.json

Validation records are append-only: each one is written to a new file opened
in exclusive-create mode, so concurrent validations of the same dataset never
overwrite each other. History is ordered by ``created_at`` and then by file
name, whose monotonic sequence number follows append order; the latest
record is the last one.
"""

from __future__ import annotations

import hashlib
import json
import logging
import math
import re
import threading
import time
from dataclasses import asdict, dataclass
from datetime import datetime, timezone
from pathlib import Path
from typing import Any, Dict, List, Optional
from uuid import uuid4

from validata.core.errors import DatasetNotFoundError
from validata.core.table import Table
from validata.ingestion.csv_table import parse_table
from validata.validation.config import DEFAULT_SETTINGS, ValidationSettings
from validata.validation.models import ValidationRecord
from validata.validation.registry import validate_table

logger = logging.getLogger(__name__)

_DATASET_ID_RE = re.compile(r"^[0-9a-f]{32}$")

_seq_lock = threading.Lock()
_last_seq = 0


def _next_sequence() -> int:
    """Return a strictly increasing sequence number for record file names."""
    global _last_seq
    with _seq_lock:
        _last_seq = max(time.monotonic_ns(), _last_seq + 1)
        return _last_seq


@dataclass(frozen=True)
class DatasetInfo:
    """Metadata of a stored dataset."""

    dataset_id: str
    filename: str
    rows: int
    columns: int
    sha256: str
    uploaded_at: str  # ISO-8601, UTC


class DatasetStore:
    """Persist raw datasets and their validation history on disk."""

    def __init__(self, root: Path) -> None:
        """Initialize the store rooted at ``root`` (created on first write)."""
        self.root = root
        self.datasets_dir = root / "datasets"

    # ------------------------------------------------------------------
    # Datasets
    # ------------------------------------------------------------------

    def _dataset_dir(self, dataset_id: str) -> Path:
        if not _DATASET_ID_RE.match(dataset_id):
            raise DatasetNotFoundError(f"Invalid dataset id: {dataset_id!r}")
        path = self.datasets_dir / dataset_id
        if not (path / "dataset.json").exists():
            raise DatasetNotFoundError(f"Dataset not found: {dataset_id}")
        return path

    def add_dataset(
        self,
        raw: bytes,
        filename: str,
        settings: Optional[ValidationSettings] = None,
    ) -> DatasetInfo:
        """Store raw CSV bytes as a new dataset.

        The bytes are parsed once so malformed uploads are rejected before
        anything is written.

        Raises:
            IngestionError: If the bytes are not a well-formed CSV.
        """
        settings = settings or DEFAULT_SETTINGS
        table = parse_table(raw, settings.numeric_threshold)

        dataset_id = uuid4().hex
        info = DatasetInfo(
            dataset_id=dataset_id,
            filename=filename,
            rows=table.row_count,
            columns=table.column_count,
            sha256=hashlib.sha256(raw).hexdigest(),
            uploaded_at=datetime.now(timezone.utc).isoformat(),
        )

        path = self.datasets_dir / dataset_id
        (path / "validations").mkdir(parents=True, exist_ok=False)
        (path / "raw.csv").write_bytes(raw)
        # Metadata last: a dataset is visible only once it is complete
        with open(path / "dataset.json", "w", encoding="utf-8") as f:
            json.dump(asdict(info), f, indent=2, ensure_ascii=False)

        logger.info(
            "Stored dataset %s (%s, %d rows x %d columns)",
            dataset_id,
            filename,
            info.rows,
            info.columns,
        )
        return info

    def get_dataset(self, dataset_id: str) -> DatasetInfo:
        """Return metadata for a dataset.

        Raises:
            DatasetNotFoundError: If the dataset does not exist.
        """
        path = self._dataset_dir(dataset_id)
        try:
            with open(path / "dataset.json", "r", encoding="utf-8") as f:
                data = json.load(f)
        except (OSError, json.JSONDecodeError) as e:
            raise ValueError(f"Failed to read dataset metadata for {dataset_id}: {e}") from e
        return DatasetInfo(**data)

    def list_datasets(self) -> List[DatasetInfo]:
        """Return all datasets, oldest upload first."""
        if not self.datasets_dir.exists():
            return []
        infos = [
            self.get_dataset(p.name)
            for p in self.datasets_dir.iterdir()
            if p.is_dir() and _DATASET_ID_RE.match(p.name) and (p / "dataset.json").exists()
        ]
        return sorted(infos, key=lambda i: (i.uploaded_at, i.dataset_id))

    def read_raw(self, dataset_id: str) -> bytes:
        return (self._dataset_dir(dataset_id) / "raw.csv").read_bytes()

    def load_table(
        self, dataset_id: str, settings: Optional[ValidationSettings] = None
    ) -> Table:
        """Rebuild the Table for a dataset from its stored bytes."""
        settings = settings or DEFAULT_SETTINGS
        return parse_table(self.read_raw(dataset_id), settings.numeric_threshold)

    # ------------------------------------------------------------------
    # Validation history
    # ------------------------------------------------------------------

    def append_record(self, dataset_id: str, record: ValidationRecord) -> Path:
        """Append a validation record to the dataset's history.

        Never overwrites an existing record.

        Returns:
            Path of the written record file.
        """
        validations_dir = self._dataset_dir(dataset_id) / "validations"
        validations_dir.mkdir(parents=True, exist_ok=True)
        stamp = record.created_at.astimezone(timezone.utc).strftime("%Y%m%dT%H%M%S%fZ")
        # Sequence keeps same-timestamp records in append order
        seq = _next_sequence()
        path = validations_dir / f"{stamp}_{seq:020d}_{uuid4().hex[:8]}.json"

        payload = json.loads(record.to_json())
        payload["dataset_id"] = dataset_id
        with open(path, "x", encoding="utf-8") as f:
            json.dump(payload, f, indent=2, ensure_ascii=False)

        logger.info("Saved validation for %s: score %d%%", dataset_id, record.score)
        return path

    def history(self, dataset_id: str) -> List[ValidationRecord]:
        """Return all validation records of a dataset, oldest first."""
        validations_dir = self._dataset_dir(dataset_id) / "validations"
        if not validations_dir.exists():
            return []
        entries = []
        for path in validations_dir.glob("*.json"):
            try:
                with open(path, "r", encoding="utf-8") as f:
                    record = ValidationRecord.from_dict(json.load(f))
            except (OSError, json.JSONDecodeError) as e:
                raise ValueError(f"Failed to read validation record {path}: {e}") from e
            entries.append((record.created_at, path.name, record))
        entries.sort(key=lambda e: (e[0], e[1]))
        return [record for _, _, record in entries]

    def latest(self, dataset_id: str) -> Optional[ValidationRecord]:
        """Return the most recently created record, or None if never validated."""
        records = self.history(dataset_id)
        return records[-1] if records else None

    def validate(
        self, dataset_id: str, settings: Optional[ValidationSettings] = None
    ) -> ValidationRecord:
        """Validate a stored dataset and append the result to its history.

        Raises:
            DatasetNotFoundError: If the dataset does not exist.
            IngestionError: If the stored bytes no longer parse.
            EmptyTableError: If the table has zero rows or zero columns.
        """
        settings = settings or DEFAULT_SETTINGS
        table = self.load_table(dataset_id, settings)
        record = validate_table(table, settings, dataset_id=dataset_id)
        self.append_record(dataset_id, record)
        return record

    def history_summary(self) -> Dict[str, Any]:
        """Summarize the latest validation of every dataset.

        Returns:
            Dict with ``entries`` (one per validated dataset: filename, rows,
            score, total_issues, uploaded_at, validated_at), ``average_score``
            (rounded, None when nothing was validated) and ``total_rows``.
        """
        entries = []
        for info in self.list_datasets():
            record = self.latest(info.dataset_id)
            if record is None:
                continue
            entries.append(
                {
                    "dataset_id": info.dataset_id,
                    "filename": info.filename,
                    "rows": info.rows,
                    "score": record.score,
                    "total_issues": record.total_issues,
                    "uploaded_at": info.uploaded_at,
                    "validated_at": record.created_at.isoformat(),
                }
            )
        average = (
            math.floor(sum(e["score"] for e in entries) / len(entries) + 0.5) if entries else None
        )
        return {
            "entries": entries,
            "average_score": average,
            "total_rows": sum(e["rows"] for e in entries),
        }


__all__ = ["DatasetInfo", "DatasetStore"]
