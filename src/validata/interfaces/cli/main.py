import argparse
import json
import logging
from pathlib import Path
from typing import Optional
import importlib
import colorlog

from validata.core.errors import DatasetNotFoundError, EmptyTableError, IngestionError
from validata.validation.config import ValidationSettings
from validata.validation.models import ValidationRecord

try:
    # Prefer package-defined version
    from validata import __version__ as _PACKAGE_VERSION
except ImportError:  # pragma: no cover
    _PACKAGE_VERSION = None  # type: ignore[assignment]
    try:
        # Fallback to installed package metadata
        from importlib.metadata import version as _pkg_version, PackageNotFoundError

        _PACKAGE_VERSION = _pkg_version("validata")  # type: ignore[assignment]
    except PackageNotFoundError:
        _PACKAGE_VERSION = "unknown"  # type: ignore[assignment]


def setup_logging(
    verbose: bool = False, warnings_only: bool = False, errors_only: bool = False
) -> None:
    logger = logging.getLogger()
    for h in list(logger.handlers):
        logger.removeHandler(h)
    log_format = (
        "%(asctime)s:%(levelname)s:%(name)s in %(filename)s:%(funcName)s:%(lineno)d: %(message)s"
    )
    log_colors = {
        "DEBUG": "cyan",
        "INFO": "green",
        "WARNING": "yellow",
        "ERROR": "red",
        "CRITICAL": "bold_red",
    }
    stream_handler = colorlog.StreamHandler()
    formatter = colorlog.ColoredFormatter(f"%(log_color)s{log_format}", log_colors=log_colors)
    stream_handler.setFormatter(formatter)
    logger.addHandler(stream_handler)
    if errors_only:
        logger.setLevel(logging.ERROR)
    elif warnings_only:
        logger.setLevel(logging.WARNING)
    else:
        logger.setLevel(logging.DEBUG if verbose else logging.INFO)


def _load_settings(args: argparse.Namespace) -> ValidationSettings:
    config_path = getattr(args, "config", None)
    if config_path:
        return ValidationSettings.from_yaml(Path(config_path))
    return ValidationSettings()


def _write_reports(
    args: argparse.Namespace, record: ValidationRecord, stem: str, default_dir: Path, title: str
) -> None:
    """Write Markdown/JSON reports requested with --report / --report-json.

    A bare flag writes next to ``default_dir``; a value is used as the output directory.
    """
    for flag, suffix, render in (
        ("report", "md", lambda: record.to_markdown(title=title)),
        ("report_json", "json", record.to_json),
    ):
        target = getattr(args, flag, False)
        if not target:
            continue
        report_dir = default_dir if target is True else Path(target)
        report_dir.mkdir(parents=True, exist_ok=True)
        report_path = report_dir / f"{stem}_validation.{suffix}"
        with open(report_path, "w", encoding="utf-8") as f:
            f.write(render())
        logging.info("%s report saved: %s", "Markdown" if suffix == "md" else "JSON", report_path)


def _exit_code(record: ValidationRecord) -> int:
    if record.total_issues > 0:
        logging.warning(
            "Validation found %d issues (score %d%%)", record.total_issues, record.score
        )
        return 2
    logging.info("Validation passed with score %d%%", record.score)
    return 0


def cmd_validate(args: argparse.Namespace) -> int:
    """Validate a CSV file directly, without storing it.

    Returns:
        0 if no issues were found
        1 if the file could not be read, parsed or scored
        2 if any data quality issues were found
    """
    ingestion = importlib.import_module("validata.ingestion.csv_table")
    registry = importlib.import_module("validata.validation.registry")

    csv_path = Path(args.csv).resolve()
    if not csv_path.exists():
        logging.error("CSV file not found: %s", csv_path)
        return 1

    try:
        settings = _load_settings(args)
        logging.info("Validating %s...", csv_path.name)
        table = ingestion.read_table(csv_path, settings.numeric_threshold)
        record = registry.validate_table(table, settings)
    except EmptyTableError as e:
        logging.error("Cannot score %s: %s", csv_path.name, e)
        return 1
    except IngestionError as e:
        logging.error("Malformed dataset %s: %s", csv_path.name, e)
        return 1
    except (ValueError, OSError) as e:
        logging.error("Error validating %s: %s", csv_path.name, e)
        return 1

    registry.print_report(record)
    _write_reports(args, record, csv_path.stem, csv_path.parent, csv_path.name)
    return _exit_code(record)


def cmd_upload(args: argparse.Namespace) -> int:
    """Store a CSV file as a new dataset and print its id."""
    store_mod = importlib.import_module("validata.storage.store")
    registry = importlib.import_module("validata.validation.registry")

    csv_path = Path(args.csv).resolve()
    if not csv_path.exists():
        logging.error("CSV file not found: %s", csv_path)
        return 1

    store = store_mod.DatasetStore(Path(args.store_root).resolve())
    try:
        settings = _load_settings(args)
        info = store.add_dataset(csv_path.read_bytes(), csv_path.name, settings)
    except (ValueError, OSError) as e:
        logging.error("Upload failed for %s: %s", csv_path.name, e)
        return 1

    print(info.dataset_id)
    if not getattr(args, "validate", False):
        return 0
    try:
        record = store.validate(info.dataset_id, settings)
    except (ValueError, OSError) as e:
        logging.error("Error validating %s: %s", info.dataset_id, e)
        return 1
    registry.print_report(record)
    return _exit_code(record)


def cmd_check(args: argparse.Namespace) -> int:
    """Validate a stored dataset and append the result to its history."""
    store_mod = importlib.import_module("validata.storage.store")
    registry = importlib.import_module("validata.validation.registry")

    store_root = Path(args.store_root).resolve()
    if not store_root.exists():
        logging.error("Store root not found: %s. Run 'validata upload' first.", store_root)
        return 1
    store = store_mod.DatasetStore(store_root)

    try:
        settings = _load_settings(args)
        info = store.get_dataset(args.dataset_id)
        logging.info("Validating %s (%s)...", info.dataset_id, info.filename)
        record = store.validate(info.dataset_id, settings)
    except DatasetNotFoundError as e:
        logging.error("%s", e)
        return 1
    except (ValueError, OSError) as e:
        logging.error("Error validating %s: %s", args.dataset_id, e)
        return 1

    registry.print_report(record)
    report_dir = store_root / "datasets" / info.dataset_id
    _write_reports(args, record, Path(info.filename).stem, report_dir, info.filename)
    return _exit_code(record)


def cmd_history(args: argparse.Namespace) -> int:
    """Print validation history of one dataset, or a summary across all datasets."""
    store_mod = importlib.import_module("validata.storage.store")
    store = store_mod.DatasetStore(Path(args.store_root).resolve())

    try:
        if args.dataset_id:
            info = store.get_dataset(args.dataset_id)
            records = store.history(info.dataset_id)
            output = {
                "dataset": info.dataset_id,
                "filename": info.filename,
                "history": [
                    {**r.to_dict(), "dataset_id": info.dataset_id} for r in records
                ],
            }
        else:
            output = store.history_summary()
    except (ValueError, OSError) as e:
        logging.error("Failed to read history: %s", e)
        return 1

    print(json.dumps(output, indent=2, ensure_ascii=False))
    return 0


def build_parser() -> argparse.ArgumentParser:
    p = argparse.ArgumentParser(
        prog="validata",
        description=f"Validata data quality validation (v{_PACKAGE_VERSION})",
    )
    p.add_argument("--verbose", action="store_true", help="Enable verbose logging")
    p.add_argument(
        "--warnings-only",
        action="store_true",
        help="Show only warnings and errors (overrides --verbose)",
    )
    p.add_argument(
        "--errors-only",
        action="store_true",
        help="Show only errors (overrides --warnings-only and --verbose)",
    )

    sub = p.add_subparsers(dest="command", required=True)

    def add_config(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--config",
            default=None,
            help="Path to a YAML file overriding validation thresholds",
        )

    def add_reports(sp: argparse.ArgumentParser) -> None:
        sp.add_argument(
            "--report",
            nargs="?",
            const=True,
            default=False,
            help="Generate detailed Markdown report. Optionally specify custom directory path.",
        )
        sp.add_argument(
            "--report-json",
            nargs="?",
            const=True,
            default=False,
            help="Generate detailed JSON report. Optionally specify custom directory path.",
        )

    p_validate = sub.add_parser("validate", help="Validate a CSV file")
    p_validate.add_argument("csv", help="Path to the CSV file")
    add_config(p_validate)
    add_reports(p_validate)
    p_validate.set_defaults(func=cmd_validate)

    p_upload = sub.add_parser("upload", help="Store a CSV file as a new dataset")
    p_upload.add_argument("csv", help="Path to the CSV file")
    p_upload.add_argument(
        "--store-root",
        default=str(Path("data/store")),
        help="Dataset store root (defaults to ./data/store)",
    )
    p_upload.add_argument(
        "--validate",
        action="store_true",
        help="Validate the dataset right after storing it",
    )
    add_config(p_upload)
    p_upload.set_defaults(func=cmd_upload)

    p_check = sub.add_parser("check", help="Validate a stored dataset and record the result")
    p_check.add_argument("dataset_id", help="Dataset id printed by 'validata upload'")
    p_check.add_argument(
        "--store-root",
        default=str(Path("data/store")),
        help="Dataset store root (defaults to ./data/store)",
    )
    add_config(p_check)
    add_reports(p_check)
    p_check.set_defaults(func=cmd_check)

    p_history = sub.add_parser("history", help="Show validation history")
    p_history.add_argument(
        "dataset_id",
        nargs="?",
        default=None,
        help="Dataset id; omit for a summary across all datasets",
    )
    p_history.add_argument(
        "--store-root",
        default=str(Path("data/store")),
        help="Dataset store root (defaults to ./data/store)",
    )
    p_history.set_defaults(func=cmd_history)

    return p


def main(argv: Optional[list[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)
    setup_logging(
        verbose=bool(args.verbose),
        warnings_only=bool(getattr(args, "warnings_only", False)),
        errors_only=bool(getattr(args, "errors_only", False)),
    )
    return args.func(args)


if __name__ == "__main__":
    raise SystemExit(main())
