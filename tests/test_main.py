"""
Tests for the headless command line mode of main.py.

Usage:
    pytest tests/test_main.py
"""

import json
import sys
from pathlib import Path

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import main
from sumten.settings import DEFAULT_SETTINGS


def test_solve_file_writes_outputs(tmp_path, capsys):
    board = tmp_path / "board.json"
    board.write_text("[[5, 5], [2, 8]]", encoding="utf-8")
    steps_path = tmp_path / "steps.json"
    summary_path = tmp_path / "summary.json"

    args = main.parse_args([
        "--input", str(board),
        "--strategy", "beam",
        "--output", str(steps_path),
        "--summary", str(summary_path),
    ])
    assert main.solve_file(args, dict(DEFAULT_SETTINGS)) == 0

    steps = json.loads(steps_path.read_text(encoding="utf-8"))
    assert len(steps) == 2
    assert steps[-1]["gridAfter"] == [[0, 0], [0, 0]]

    summary = json.loads(summary_path.read_text(encoding="utf-8"))
    assert summary["totalScore"] == 6
    assert summary["remaining"] == 0
    assert summary["strategy"] == "beam"

    out = capsys.readouterr().out
    assert "2 moves, 4 cells cleared, score 6, 0 remaining" in out


def test_solve_file_rejects_bad_grid(tmp_path):
    board = tmp_path / "board.json"
    board.write_text("[[5, 5], [2]]", encoding="utf-8")

    args = main.parse_args(["--input", str(board)])
    assert main.solve_file(args, dict(DEFAULT_SETTINGS)) == 1
