"""
Tests for the solving strategies and the top-level solve() entry point.

Covers:
1. Scoring and step bookkeeping
2. Beam search (dominated-state pruning, terminal selection)
3. Greedy lookahead evaluation
4. Auto strategy selection
5. Strategy factory
6. solve() / solve_json()

Usage:
    pytest tests/test_solver.py
"""

import json
import sys
from pathlib import Path

import pytest

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

import sumten
from sumten.grid_io import GridValidationError
from sumten.settings import DEFAULT_SETTINGS
from sumten.solver import (
    Grid,
    SolutionContext,
    create_strategy,
    create_strategy_from_settings,
    find_valid_combinations,
    get_default_strategy_name,
    get_strategy_info,
    get_strategy_names,
    move_score,
)
from sumten.solver.strategies import AutoStrategy, BeamSearchStrategy, GreedyLookaheadStrategy
from sumten.solver.solution import best_terminal_key, describe


# Board with one pair per half-row
SAMPLE_BOARD = [
    [1, 9, 3, 7],
    [5, 5, 2, 8],
    [4, 6, 1, 9],
    [3, 7, 8, 2],
]

# Two row pairs; their union is reachable in either order
TWO_PAIRS = [[5, 5], [2, 8]]

STRATEGIES = [
    BeamSearchStrategy(),
    GreedyLookaheadStrategy(depth=2),
    AutoStrategy(),
]


def _solve(strategy, rows, target=10):
    return strategy.solve(SolutionContext(grid=Grid.from_rows(rows), target=target))


# ========== Scoring ==========

def test_move_score_is_triangular():
    assert [move_score(n) for n in range(1, 6)] == [1, 3, 6, 10, 15]
    # One 4-cell move beats two 2-cell moves
    assert move_score(4) > 2 * move_score(2)


def test_terminal_ordering():
    assert best_terminal_key(6, 5) > best_terminal_key(5, 0)
    assert best_terminal_key(6, 0) > best_terminal_key(6, 2)


# ========== Every strategy ==========

@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_single_pair(strategy):
    solution = _solve(strategy, [[5, 5]])

    assert solution.move_count == 1
    step = solution.steps[0]
    assert step.positions == ((0, 0), (0, 1))
    assert step.sum == 10
    assert step.score == 3
    assert step.grid_after.to_list() == [[0, 0]]


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
@pytest.mark.parametrize("rows", [[], [[0, 0], [0, 0]], [[9, 9], [9, 9]], [[3, 5, 7]]])
def test_no_moves(strategy, rows):
    solution = _solve(strategy, rows)

    assert solution.steps == []
    assert not solution.has_moves
    assert describe(solution) == "No valid moves found"


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_steps_replay(strategy):
    """Each step clears exactly its cells from the grid before it."""
    solution = _solve(strategy, SAMPLE_BOARD)
    assert solution.has_moves

    for index, step in enumerate(solution.steps):
        before = solution.grid_before(index)
        assert sum(c.value for c in step.cells) == 10
        for cell in step.cells:
            assert before.get(cell.row, cell.col) == cell.value
        assert before.apply_move(step.positions) == step.grid_after
        assert before.count_remaining() - step.grid_after.count_remaining() == step.cell_count

    assert solution.total_cleared + solution.remaining == 16


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_deterministic(strategy):
    first = [step.to_dict() for step in _solve(strategy, SAMPLE_BOARD).steps]
    second = [step.to_dict() for step in _solve(strategy, SAMPLE_BOARD).steps]
    assert first == second


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_prefers_larger_move(strategy):
    """Taking 5+2+3 beats taking 5+5, which strands the 2 and 3."""
    solution = _solve(strategy, [[5, 5, 2, 3]])

    assert solution.move_count == 1
    assert solution.steps[0].positions == ((0, 1), (0, 2), (0, 3))
    assert solution.total_score == 6
    assert solution.final_grid.to_list() == [[5, 0, 0, 0]]


@pytest.mark.parametrize("strategy", STRATEGIES, ids=lambda s: s.name)
def test_custom_target(strategy):
    solution = _solve(strategy, [[2, 3, 0], [0, 4, 1]], target=5)

    assert solution.move_count == 2
    assert all(step.sum == 5 for step in solution.steps)
    assert solution.remaining == 0


def test_progress_reported():
    updates = []
    context = SolutionContext(
        grid=Grid.from_rows(SAMPLE_BOARD),
        progress_callback=lambda percent, message: updates.append((percent, message)),
    )
    BeamSearchStrategy().solve(context)

    assert updates
    assert all(0.0 <= percent < 1.0 for percent, _ in updates)


# ========== Beam search ==========

def test_beam_prunes_dominated_state():
    """Both orders of the two pairs reach the same grid; only the first survives."""
    solution = _solve(BeamSearchStrategy(), TWO_PAIRS)

    assert [step.positions for step in solution.steps] == [
        ((0, 0), (0, 1)),
        ((1, 0), (1, 1)),
    ]
    assert solution.total_score == 6
    assert solution.remaining == 0
    assert solution.metrics.pruned_branches == 1
    assert solution.metrics.strategy_name == "beam"


def test_beam_width_one_still_solves():
    solution = _solve(BeamSearchStrategy(beam_width=1), SAMPLE_BOARD)
    assert solution.has_moves


def test_beam_rectangle():
    solution = _solve(BeamSearchStrategy(), [[1, 2], [3, 4]])

    assert solution.move_count == 1
    assert solution.steps[0].selection_type == "Rectangle"
    assert solution.total_score == 10


def test_beam_rejects_bad_width():
    with pytest.raises(ValueError):
        BeamSearchStrategy(beam_width=0)


# ========== Greedy lookahead ==========

def test_lookahead_depth_one():
    """Depth 1 adds half the heuristic estimate of the grid left behind."""
    grid = Grid.from_rows(TWO_PAIRS)
    first = find_valid_combinations(grid)[0]

    assert GreedyLookaheadStrategy().evaluate(grid, first, 1, 10) == 3 + 3 // 2


def test_lookahead_discounts_future():
    grid = Grid.from_rows(TWO_PAIRS)
    first = find_valid_combinations(grid)[0]

    # 3 now, then the other pair worth 3 (depth 1, empty grid left) at 9/10
    assert GreedyLookaheadStrategy().evaluate(grid, first, 2, 10) == 3 + 3 * 9 // 10


def test_lookahead_dead_end_penalty():
    """Ten stranded tiles cost one point."""
    rows = [[5, 5]] + [[9, 9] for _ in range(5)]
    grid = Grid.from_rows(rows)
    moves = find_valid_combinations(grid)
    assert len(moves) == 1

    assert GreedyLookaheadStrategy().evaluate(grid, moves[0], 2, 10) == 3 - 10 // 10


def test_lookahead_keeps_first_of_equal_moves():
    solution = _solve(GreedyLookaheadStrategy(), TWO_PAIRS)

    assert solution.steps[0].positions == ((0, 0), (0, 1))
    assert solution.total_score == 6
    assert solution.metrics.strategy_name == "greedy_lookahead"


@pytest.mark.parametrize("kwargs", [{"depth": 0}, {"max_candidates": 0}])
def test_lookahead_rejects_bad_params(kwargs):
    with pytest.raises(ValueError):
        GreedyLookaheadStrategy(**kwargs)


# ========== Auto ==========

@pytest.mark.parametrize("tiles, expected, setting", [
    (0, BeamSearchStrategy, 20),
    (30, BeamSearchStrategy, 20),
    (31, BeamSearchStrategy, 12),
    (50, BeamSearchStrategy, 12),
    (51, GreedyLookaheadStrategy, 3),
    (140, GreedyLookaheadStrategy, 3),
])
def test_auto_selection(tiles, expected, setting):
    delegate = AutoStrategy().select(tiles)

    assert isinstance(delegate, expected)
    if expected is BeamSearchStrategy:
        assert delegate.beam_width == setting
    else:
        assert delegate.depth == setting


def test_auto_reports_delegate_name():
    small = _solve(AutoStrategy(), TWO_PAIRS)
    assert small.metrics.strategy_name == "beam"

    # 60 nines: dense enough for lookahead, and no move to make
    dense = _solve(AutoStrategy(), [[9] * 10 for _ in range(6)])
    assert dense.metrics.strategy_name == "greedy_lookahead"
    assert dense.steps == []


def test_auto_custom_thresholds():
    delegate = AutoStrategy(small_board_cells=4, medium_board_cells=8).select(9)
    assert isinstance(delegate, GreedyLookaheadStrategy)


# ========== Factory ==========

def test_registered_strategies():
    names = get_strategy_names()
    for name in ["auto", "beam", "greedy_lookahead"]:
        assert name in names
    assert get_default_strategy_name() == "auto"
    assert all(info["description"] for info in get_strategy_info())


def test_create_strategy():
    strategy = create_strategy("beam", beam_width=5)
    assert isinstance(strategy, BeamSearchStrategy)
    assert strategy.beam_width == 5

    with pytest.raises(ValueError, match="Unknown strategy"):
        create_strategy("exhaustive")


def test_create_strategy_from_settings():
    settings = dict(DEFAULT_SETTINGS)
    settings["lookahead_depth"] = 2
    settings["lookahead_candidates"] = 4

    assert isinstance(create_strategy_from_settings(settings), AutoStrategy)

    strategy = create_strategy_from_settings(settings, "greedy_lookahead")
    assert strategy.depth == 2
    assert strategy.max_candidates == 4


# ========== Top-level API ==========

def test_solve_returns_steps():
    steps = sumten.solve(TWO_PAIRS)

    assert len(steps) == 2
    assert steps[-1].grid_after.to_list() == [[0, 0], [0, 0]]


def test_solve_json_format():
    result = json.loads(sumten.solve_json("[[5, 5]]"))

    assert result == [{
        "cells": [
            {"row": 0, "col": 0, "value": 5},
            {"row": 0, "col": 1, "value": 5},
        ],
        "sum": 10,
        "gridAfter": [[0, 0]],
    }]


def test_solve_empty_inputs():
    assert sumten.solve([]) == []
    assert json.loads(sumten.solve_json("[]")) == []


@pytest.mark.parametrize("raw", [[[1, 2], [3]], [[10]], [[-1]], "55"])
def test_solve_rejects_invalid_grid(raw):
    with pytest.raises(GridValidationError):
        sumten.solve(raw)


def test_solve_json_rejects_bad_json():
    with pytest.raises(GridValidationError, match="invalid JSON"):
        sumten.solve_json("[[5, 5]")
