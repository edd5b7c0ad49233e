"""Ingestion of raw dataset bytes into a typed Table."""

from .csv_table import parse_table, read_table

__all__ = ["parse_table", "read_table"]
