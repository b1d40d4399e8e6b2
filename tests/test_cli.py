"""
Tests for the command-line interface (cafetools.cli).

These tests validate that:
- top-level and kind-level -h/--help work
- a kind without a task is rejected
- ninfo and ts tasks run end to end on small files
"""

from __future__ import annotations

import sys
from pathlib import Path

import matplotlib

matplotlib.use("Agg")

import pytest

import cafetools.cli as cli

from test_time_series import SYSTEM_LINE_0, SYSTEM_LINE_1, _write_ts


def test_top_level_help_prints_usage(monkeypatch: pytest.MonkeyPatch, capsys: pytest.CaptureFixture[str]):
    monkeypatch.setattr(sys, "argv", ["cafetools", "-h"])
    with pytest.raises(SystemExit) as e:
        cli.main()
    assert e.value.code == 0

    out = capsys.readouterr().out
    assert "cafetools CLI" in out
    assert "ninfo" in out and "ts" in out


def test_kind_help_prints_tasks(capsys: pytest.CaptureFixture[str]):
    with pytest.raises(SystemExit) as e:
        cli.main(["ninfo", "-h"])
    assert e.value.code == 0

    out = capsys.readouterr().out
    for task in ("get", "filter", "map"):
        assert task in out


def test_kind_without_task_fails():
    with pytest.raises(SystemExit) as e:
        cli.main(["ts"])
    assert e.value.code != 0


def test_ninfo_get_prints_counts(ninfo_file: Path, capsys: pytest.CaptureFixture[str]):
    rc = cli.main(["ninfo", "get", "--file", str(ninfo_file)])
    assert rc == 0
    out = capsys.readouterr().out
    assert "contacts: 2" in out
    assert "bonds: 1" in out


def test_ninfo_get_exports_kind(ninfo_file: Path, tmp_path: Path):
    out = tmp_path / "tables" / "bonds.csv"
    rc = cli.main(["ninfo", "get", "--file", str(ninfo_file),
                   "--kind", "bond", "--export", str(out)])
    assert rc == 0
    lines = out.read_text().splitlines()
    assert lines[0].startswith("index,unit_1,index_1")
    assert len(lines) == 2


def test_ninfo_filter_to_stdout(ninfo_file: Path, capsys: pytest.CaptureFixture[str]):
    rc = cli.main(["ninfo", "filter", "--file", str(ninfo_file), "--min", "1", "--max", "45"])
    assert rc == 0
    lines = capsys.readouterr().out.splitlines()
    assert lines[0] == "<<<< native contact"
    assert lines[1] == "** total_contact =   1"
    assert lines[-1] == ">>>>"
    assert lines[-2].startswith("contact      2")


def test_ninfo_filter_out_of_range_writes_nothing(ninfo_file: Path, capsys: pytest.CaptureFixture[str]):
    rc = cli.main(["ninfo", "filter", "--file", str(ninfo_file), "--min", "114", "--max", "174"])
    assert rc == 0
    assert capsys.readouterr().out == ""


def test_ninfo_map_saves_image(ninfo_file: Path, tmp_path: Path):
    out = tmp_path / "plots" / "map.png"
    rc = cli.main(["ninfo", "map", "--file", str(ninfo_file), "--save", str(out)])
    assert rc == 0
    assert out.exists()


def test_ts_csv_and_cat(tmp_path: Path, capsys: pytest.CaptureFixture[str]):
    a = _write_ts(tmp_path / "a.ts", [SYSTEM_LINE_0])
    b = _write_ts(tmp_path / "b.ts", [SYSTEM_LINE_1])

    out = tmp_path / "csv" / "a.csv"
    assert cli.main(["ts", "csv", "--file", str(a), "--out", str(out)]) == 0
    assert out.read_text().splitlines()[1] == "0,360.00,366.38,33.93,377.23,0.000,732.77"
    capsys.readouterr()

    assert cli.main(["ts", "cat", str(a), str(b)]) == 0
    lines = capsys.readouterr().out.splitlines()
    assert len(lines) == 11
    assert lines[-1] == SYSTEM_LINE_1
