"""
Tests for grid validation, JSON I/O, settings persistence and rendering.

Usage:
    pytest tests/test_grid_io.py
"""

import json
import sys
from pathlib import Path

import numpy as np
import pytest
from PIL import Image

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sumten.grid_io import (
    GridValidationError,
    create_empty_grid,
    grid_to_json,
    load_grid,
    parse_grid,
    parse_grid_json,
    solution_to_json,
    steps_to_json,
)
from sumten.rendering import CELL_SIZE, PADDING, HEADER_HEIGHT, render_grid, render_solution
from sumten.settings import DEFAULT_SETTINGS, load_settings, save_settings, strategy_kwargs
from sumten.solver import Grid, SolutionContext, create_strategy


# ========== Validation ==========

def test_parse_valid_grid():
    grid = parse_grid([[1, 0, 9], [5.0, 5, 0]])

    assert grid.to_list() == [[1, 0, 9], [5, 5, 0]]


def test_parse_numpy_and_grid():
    array = np.array([[5, 5], [2, 8]])
    assert parse_grid(array).to_list() == [[5, 5], [2, 8]]

    grid = Grid.from_rows([[5, 5]])
    parsed = parse_grid(grid)
    assert parsed == grid and parsed is not grid


def test_parse_list_of_numpy_rows():
    rows = [np.array([5, 5]), np.array([2, 8])]
    assert parse_grid(rows).to_list() == [[5, 5], [2, 8]]

    with pytest.raises(GridValidationError, match="row 1 has 1 cells"):
        parse_grid([np.array([5, 5]), np.array([2])])

    with pytest.raises(GridValidationError, match="value 12"):
        parse_grid([np.array([5, 12])])


def test_parse_empty():
    grid = parse_grid([])
    assert (grid.rows, grid.cols) == (0, 0)


@pytest.mark.parametrize("raw, fragment", [
    ([[1, 2], [3]], "row 1 has 1 cells, expected 2"),
    ([[1, 10]], "cell (0, 1) value 10"),
    ([[0], [-1]], "cell (1, 0) value -1"),
    ([[1, 2.5]], "non-integer"),
    ([[1, "5"]], "non-integer"),
    ([[True, 1]], "boolean"),
    ([[1, None]], "non-integer"),
    ([1, 2], "row 0"),
    ("[[1]]", "expected an array of rows"),
    (42, "expected an array of rows"),
])
def test_parse_rejects(raw, fragment):
    with pytest.raises(GridValidationError) as exc_info:
        parse_grid(raw)

    message = str(exc_info.value)
    assert message.startswith("Failed to parse grid")
    assert fragment in message


def test_validation_error_is_value_error():
    with pytest.raises(ValueError):
        parse_grid_json("not json")


# ========== JSON ==========

def test_load_grid(tmp_path):
    path = tmp_path / "board.json"
    path.write_text("[[1, 9], [0, 4]]", encoding="utf-8")

    assert load_grid(path).to_list() == [[1, 9], [0, 4]]

    with pytest.raises(OSError):
        load_grid(tmp_path / "missing.json")


def test_grid_to_json():
    assert json.loads(grid_to_json(Grid.from_rows([[1, 0], [0, 9]]))) == [[1, 0], [0, 9]]


def test_steps_and_solution_json():
    solution = create_strategy("beam").solve(
        SolutionContext(grid=Grid.from_rows([[5, 5], [2, 8]]))
    )

    steps = json.loads(steps_to_json(solution.steps, indent=2))
    assert [set(step) for step in steps] == [{"cells", "sum", "gridAfter"}] * 2
    assert steps[0]["cells"] == [{"row": 0, "col": 0, "value": 5},
                                 {"row": 0, "col": 1, "value": 5}]
    assert steps[0]["gridAfter"] == [[0, 0], [2, 8]]

    summary = json.loads(solution_to_json(solution))
    assert summary["totalScore"] == 6
    assert summary["totalCleared"] == 4
    assert summary["remaining"] == 0
    assert summary["strategy"] == "beam"


def test_matrix_helpers():
    matrix = create_empty_grid(2, 3)
    assert matrix == [[0, 0, 0], [0, 0, 0]]
    matrix[1][2] = 7
    assert matrix[0][2] == 0


# ========== Settings ==========

def test_settings_defaults_when_missing(tmp_path):
    settings = load_settings(tmp_path / "config.json")
    assert settings == DEFAULT_SETTINGS
    assert settings is not DEFAULT_SETTINGS


def test_settings_round_trip(tmp_path):
    path = tmp_path / "config.json"
    settings = load_settings(path)
    settings["strategy_name"] = "beam"
    settings["beam_width"] = 8
    save_settings(settings, path)

    loaded = load_settings(path)
    assert loaded["strategy_name"] == "beam"
    assert strategy_kwargs(loaded, "beam") == {"beam_width": 8}


def test_settings_merge_missing_keys(tmp_path):
    path = tmp_path / "config.json"
    path.write_text('{"debug_enabled": true}', encoding="utf-8")

    settings = load_settings(path)
    assert settings["debug_enabled"] is True
    assert settings["target"] == 10


@pytest.mark.parametrize("content", ["{broken", "[1, 2]"])
def test_settings_invalid_file(tmp_path, content):
    path = tmp_path / "config.json"
    path.write_text(content, encoding="utf-8")

    assert load_settings(path) == DEFAULT_SETTINGS


def test_strategy_kwargs():
    assert strategy_kwargs(DEFAULT_SETTINGS, "greedy_lookahead") == {
        "depth": 3,
        "max_candidates": 5,
    }
    assert strategy_kwargs(DEFAULT_SETTINGS, "auto")["medium_beam_width"] == 12
    assert strategy_kwargs(DEFAULT_SETTINGS, "unknown") == {}


# ========== Rendering ==========

def test_render_grid_size():
    image = render_grid(Grid.from_rows([[1, 2, 3], [0, 5, 6]]), highlighted=[(0, 0)], caption="t")

    assert image.size == (PADDING * 2 + 3 * CELL_SIZE,
                          PADDING * 2 + HEADER_HEIGHT + 2 * CELL_SIZE)
    assert image.mode == "RGB"


def test_render_solution(tmp_path):
    solution = create_strategy("beam").solve(
        SolutionContext(grid=Grid.from_rows([[5, 5], [2, 8]]))
    )
    paths = render_solution(solution, tmp_path / "out")

    assert [p.name for p in paths] == ["step_001.png", "step_002.png", "final.png"]
    for path in paths:
        assert path.exists()
        with Image.open(path) as image:
            assert image.format == "PNG"
