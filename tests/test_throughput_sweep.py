"""Tests for scripts/throughput_sweep.py argument handling and output."""

import argparse
import importlib.util
import json
import sys
from pathlib import Path

import pytest

_SCRIPT = Path(__file__).resolve().parents[1] / "scripts" / "throughput_sweep.py"


@pytest.fixture(scope="module")
def sweep():
    spec = importlib.util.spec_from_file_location("throughput_sweep", _SCRIPT)
    mod = importlib.util.module_from_spec(spec)
    spec.loader.exec_module(mod)
    return mod


class TestCounts:
    @pytest.mark.parametrize("s,expected", [("1000", 1000), ("1_000", 1000), ("1e6", 1_000_000)])
    def test_accepted(self, sweep, s, expected):
        assert sweep._count(s) == expected

    @pytest.mark.parametrize("s", ["0", "-3", "abc", "inf", "nan"])
    def test_rejected(self, sweep, s):
        with pytest.raises(argparse.ArgumentTypeError):
            sweep._count(s)


class TestMain:
    @pytest.mark.parametrize("runs", ["0", "-1"])
    def test_non_positive_runs_is_usage_error(self, sweep, monkeypatch, tmp_path, runs):
        monkeypatch.setattr(sys, "argv", [
            "throughput_sweep.py", "--counts", "10", "--runs", runs,
            "--output", str(tmp_path / "out.json"),
        ])
        with pytest.raises(SystemExit) as exc:
            sweep.main()
        assert exc.value.code == 2

    def test_json_output(self, sweep, monkeypatch, tmp_path):
        out = tmp_path / "out.json"
        monkeypatch.setattr(sys, "argv", [
            "throughput_sweep.py", "--counts", "10", "25", "--runs", "2",
            "--output", str(out),
        ])
        sweep.main()
        rows = json.loads(out.read_text())
        assert [r["count"] for r in rows] == [10, 25]
        assert all(r["runs"] == 2 for r in rows)
