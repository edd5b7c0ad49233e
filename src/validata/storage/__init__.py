"""Persistence of uploaded datasets and their validation history."""

from .store import DatasetInfo, DatasetStore

__all__ = ["DatasetInfo", "DatasetStore"]
