"""Validata: data-quality scoring for tabular (CSV) datasets.

The package is organised around a small validation engine:

- `validata.ingestion` turns raw CSV bytes into a typed `Table`
- `validata.validation` runs the six checks and scores the result
- `validata.storage` keeps uploaded datasets and their validation history
- `validata.interfaces.cli` exposes all of the above as the `validata` command
"""

__all__ = [
    "__version__",
]

__version__ = "0.1.0"
