"""Tests for the command-line harness."""

from __future__ import annotations

from fs_hasher.cli import build_parser, main
from tests.helpers import XY_DIRECTORY_SHA256, hexdigest, write_tree


def test_parser_defaults():
    args = build_parser().parse_args(["some/path"])
    assert args.paths == ["some/path"]
    assert args.algorithm == "sha256"
    assert args.report is None
    assert args.retry_delay == 0.010


def test_directory_run_writes_report(xy_dir, tmp_path, capsys):
    report = tmp_path / "report.csv"
    assert main([str(xy_dir), "--report", str(report)]) == 0

    out = capsys.readouterr().out
    assert XY_DIRECTORY_SHA256 in out
    assert "All items are unique." in out
    assert report.read_text().startswith(f"(D);>{xy_dir};{XY_DIRECTORY_SHA256}\n")


def test_batch_run_writes_duplicates(tmp_path, capsys):
    write_tree(tmp_path / "data", {"a": "same", "b": "same", "c": "other"})
    dups = tmp_path / "dups.csv"
    paths = [str(tmp_path / "data" / name) for name in "abc"]

    assert main(paths + ["--duplicates", str(dups), "-a", "md5"]) == 0
    assert "1 duplicated digest(s) found." in capsys.readouterr().out
    assert dups.read_text() == f"2;{hexdigest('same', 'md5')};{paths[0]}\n;;{paths[1]}\n"


def test_missing_path_fails(tmp_path, capsys):
    assert main([str(tmp_path / "missing")]) == 1
    assert "is False" in capsys.readouterr().out
