"""Error types raised by the validation engine and the dataset store."""

from __future__ import annotations


class ValidataError(ValueError):
    """Base class for all errors raised by Validata."""


class IngestionError(ValidataError):
    """Raw table bytes could not be turned into a Table.

    Raised for undecodable input, unparseable CSV, ragged rows and
    duplicate header names. No check runs when this is raised.
    """


class EmptyTableError(ValidataError):
    """The table has zero rows or zero columns, so the score is undefined."""


class DatasetNotFoundError(ValidataError, FileNotFoundError):
    """The dataset store holds no dataset with the requested identifier."""


__all__ = [
    "ValidataError",
    "IngestionError",
    "EmptyTableError",
    "DatasetNotFoundError",
]
