"""Tests for the solve_almanac command-line script."""
from __future__ import annotations

import json
import os
import subprocess
import sys
from pathlib import Path

ROOT = Path(__file__).resolve().parents[1]


def _run(*args: str) -> subprocess.CompletedProcess[str]:
    env = dict(os.environ)
    env["PYTHONPATH"] = os.pathsep.join(
        p for p in (str(ROOT / "src"), env.get("PYTHONPATH", "")) if p
    )
    return subprocess.run(
        [sys.executable, str(ROOT / "scripts" / "solve_almanac.py"), *args],
        capture_output=True,
        text=True,
        check=False,
        env=env,
    )


def test_solve_both_parts(example_file: Path) -> None:
    proc = _run(str(example_file), "--workers", "1")
    assert proc.returncode == 0, proc.stderr
    assert json.loads(proc.stdout) == {"part_one": 35, "part_two": 46}


def test_solve_part_two_enumerate_with_manifest(example_file: Path, tmp_path: Path) -> None:
    manifest_path = tmp_path / "runs" / "manifest.json"
    proc = _run(
        str(example_file),
        "--part", "2",
        "--strategy", "enumerate",
        "--workers", "2",
        "--chunk-size", "4",
        "--manifest", str(manifest_path),
    )
    assert proc.returncode == 0, proc.stderr
    assert json.loads(proc.stdout) == {"part_two": 46}
    manifest = json.loads(manifest_path.read_text())
    assert manifest["answers"] == {"part_two": 46}
    assert manifest["settings"]["strategy"] == "enumerate"
    assert manifest["settings"]["workers"] == 2


def test_malformed_input_exits_nonzero(tmp_path: Path) -> None:
    path = tmp_path / "bad.txt"
    path.write_text("seeds: 1 2\n\nseed-to-soil map:\n50 98\n")
    proc = _run(str(path))
    assert proc.returncode == 1
    assert "ERROR" in proc.stderr
    assert proc.stdout == ""


def test_odd_seed_list_exits_nonzero(tmp_path: Path) -> None:
    path = tmp_path / "odd.txt"
    path.write_text("seeds: 1 2 3\n\nseed-to-soil map:\n50 98 2\n")
    proc = _run(str(path), "--workers", "1")
    assert proc.returncode == 1
    assert "pairs" in proc.stderr


def test_seed_range_past_u64_exits_nonzero(tmp_path: Path) -> None:
    path = tmp_path / "overflow.txt"
    path.write_text("seeds: 18446744073709551615 5\n\nseed-to-soil map:\n50 98 2\n")
    proc = _run(str(path), "--part", "2", "--workers", "1")
    assert proc.returncode == 1
    assert "ERROR" in proc.stderr
    assert "overflows u64" in proc.stderr
    assert "Traceback" not in proc.stderr
    assert proc.stdout == ""


def test_all_empty_seed_ranges_exit_nonzero(tmp_path: Path) -> None:
    path = tmp_path / "empty.txt"
    path.write_text("seeds: 79 0\n\nseed-to-soil map:\n50 98 2\n")
    proc = _run(str(path), "--workers", "1")
    assert proc.returncode == 1
    assert "No seeds to evaluate" in proc.stderr
    assert "Traceback" not in proc.stderr
    assert proc.stdout == ""


def test_missing_input_file(tmp_path: Path) -> None:
    proc = _run(str(tmp_path / "nope.txt"))
    assert proc.returncode == 1
    assert "input file not found" in proc.stderr
