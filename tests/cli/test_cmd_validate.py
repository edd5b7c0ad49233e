"""Tests for the validata command line interface."""

from __future__ import annotations

import argparse
import json
from unittest.mock import patch

import pytest

from conftest import write_csv

from validata.ingestion.csv_table import read_table
from validata.interfaces.cli.main import build_parser, cmd_validate, main


def _args(csv, **kwargs):
    defaults = {"csv": str(csv), "config": None, "report": False, "report_json": False}
    defaults.update(kwargs)
    return argparse.Namespace(**defaults)


CLEAN = "name,age,email\nalice,30,alice@example.com\nbob,40,bob@example.org\ncarol,35,carol@example.net\n"
DIRTY = "name,age,email\nalice,30,alice@example.com\nbob,,bob-at-example\nalice,30,alice@example.com\n"


class TestCmdValidate:
    def test_missing_file(self, tmp_path):
        assert cmd_validate(_args(tmp_path / "nonexistent.csv")) == 1

    def test_clean_file_returns_zero(self, tmp_path, capsys):
        csv_path = write_csv(tmp_path, "clean.csv", CLEAN)
        assert cmd_validate(_args(csv_path)) == 0
        assert "Score: 100%" in capsys.readouterr().out

    def test_reads_file_through_read_table(self, tmp_path):
        csv_path = write_csv(tmp_path, "clean.csv", CLEAN)
        with patch("validata.ingestion.csv_table.read_table", wraps=read_table) as reader:
            assert cmd_validate(_args(csv_path)) == 0
        reader.assert_called_once_with(csv_path.resolve(), 0.5)

    def test_issues_return_two(self, tmp_path):
        csv_path = write_csv(tmp_path, "dirty.csv", DIRTY)
        assert cmd_validate(_args(csv_path)) == 2

    def test_empty_table_returns_one(self, tmp_path):
        csv_path = write_csv(tmp_path, "empty.csv", "a,b\n")
        assert cmd_validate(_args(csv_path)) == 1

    def test_malformed_returns_one(self, tmp_path):
        csv_path = write_csv(tmp_path, "ragged.csv", "a,b\n1\n")
        assert cmd_validate(_args(csv_path)) == 1

    def test_bad_config_returns_one(self, tmp_path):
        csv_path = write_csv(tmp_path, "clean.csv", CLEAN)
        config = tmp_path / "settings.yaml"
        config.write_text("unknown_key: 1\n", encoding="utf-8")
        assert cmd_validate(_args(csv_path, config=str(config))) == 1

    def test_report_flag_writes_markdown_next_to_csv(self, tmp_path):
        csv_path = write_csv(tmp_path, "dirty.csv", DIRTY)
        cmd_validate(_args(csv_path, report=True))

        report = tmp_path / "dirty_validation.md"
        assert report.exists()
        content = report.read_text(encoding="utf-8")
        assert "# Validation Report: dirty.csv" in content
        assert "Issues Detected" in content

    def test_report_json_custom_directory(self, tmp_path):
        csv_path = write_csv(tmp_path, "dirty.csv", DIRTY)
        out_dir = tmp_path / "reports"
        cmd_validate(_args(csv_path, report_json=str(out_dir)))

        data = json.loads((out_dir / "dirty_validation.json").read_text(encoding="utf-8"))
        assert data["issues"]["duplicate_rows"] == 1
        assert data["details"]["total_rows"] == 3


class TestStoreCommands:
    def test_upload_check_history(self, tmp_path, capsys):
        csv_path = write_csv(tmp_path, "dirty.csv", DIRTY)
        store_root = tmp_path / "store"

        assert main(["upload", str(csv_path), "--store-root", str(store_root)]) == 0
        dataset_id = capsys.readouterr().out.strip()
        assert len(dataset_id) == 32

        assert main(["check", dataset_id, "--store-root", str(store_root), "--report"]) == 2
        capsys.readouterr()
        assert (store_root / "datasets" / dataset_id / "dirty_validation.md").exists()

        assert main(["history", dataset_id, "--store-root", str(store_root)]) == 0
        history = json.loads(capsys.readouterr().out)
        assert history["filename"] == "dirty.csv"
        assert len(history["history"]) == 1
        assert history["history"][0]["issues"]["missing_values"] == 1

    def test_upload_with_validate(self, tmp_path, capsys):
        csv_path = write_csv(tmp_path, "clean.csv", CLEAN)
        store_root = tmp_path / "store"

        assert main(["upload", str(csv_path), "--store-root", str(store_root), "--validate"]) == 0
        out = capsys.readouterr().out
        assert "Score: 100%" in out

        assert main(["history", "--store-root", str(store_root)]) == 0
        summary = json.loads(capsys.readouterr().out)
        assert summary["average_score"] == 100
        assert summary["entries"][0]["filename"] == "clean.csv"

    def test_history_with_naive_record_returns_one(self, tmp_path, capsys):
        csv_path = write_csv(tmp_path, "clean.csv", CLEAN)
        store_root = tmp_path / "store"
        assert main(["upload", str(csv_path), "--store-root", str(store_root), "--validate"]) == 0
        dataset_id = capsys.readouterr().out.splitlines()[0].strip()

        validations = store_root / "datasets" / dataset_id / "validations"
        record = json.loads(next(validations.glob("*.json")).read_text(encoding="utf-8"))
        record["created_at"] = "2024-01-02T00:00:00"
        (validations / "naive.json").write_text(json.dumps(record), encoding="utf-8")

        assert main(["history", dataset_id, "--store-root", str(store_root)]) == 1
        assert main(["history", "--store-root", str(store_root)]) == 1

    def test_check_unknown_dataset(self, tmp_path):
        store_root = tmp_path / "store"
        store_root.mkdir()
        assert main(["check", "0" * 32, "--store-root", str(store_root)]) == 1

    def test_check_missing_store_root(self, tmp_path):
        assert main(["check", "0" * 32, "--store-root", str(tmp_path / "missing")]) == 1


def test_parser_requires_command():
    with pytest.raises(SystemExit):
        build_parser().parse_args([])
