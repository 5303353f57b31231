"""
Solver Package - Search engine for the Sum to 10 puzzle.

A move clears tiles that sum to exactly 10 and form a horizontal run, a
vertical run or a rectangle; clearing n tiles scores n * (n + 1) / 2.
Strategies are pluggable and selected by name.

Public API:
    - Grid: Dense board representation
    - Cell, Move, MoveKind: Move definition
    - Step, Solution, SolutionMetrics: Strategy results
    - SolutionContext: Input passed to strategies
    - SolverStrategy: Abstract base for strategies
    - find_valid_combinations(): Every valid move on a grid
    - estimate_future_score(): Search heuristic
    - create_strategy(): Factory function
    - get_strategy_names(): List available strategies
    - get_strategy_info(): Get strategy metadata

Usage:
    from sumten.solver import create_strategy, Grid, SolutionContext

    grid = Grid.from_rows([[5, 5], [2, 8]])
    context = SolutionContext(grid=grid)

    strategy = create_strategy("auto")
    solution = strategy.solve(context)

    for step in solution.steps:
        print(f"Clear {step.cell_count} cells: {step.positions}")
"""

# Core data structures
from .grid import Grid, EMPTY
from .move import Cell, Move, MoveKind, move_score
from .solution import Step, Solution, SolutionMetrics
from .context import SolutionContext, TARGET_SUM

# Search building blocks
from .combinations import find_valid_combinations, find_subsets_with_sum, MAX_SUBSET_CELLS
from .heuristics import estimate_future_score

# Strategy framework
from .base import SolverStrategy
from .factory import (
    create_strategy,
    create_strategy_from_settings,
    get_strategy_names,
    get_strategy_info,
    get_default_strategy_name,
    register_strategy,
)

# Import strategies to register them
from . import strategies

__all__ = [
    # Data structures
    "Grid",
    "EMPTY",
    "Cell",
    "Move",
    "MoveKind",
    "move_score",
    "Step",
    "Solution",
    "SolutionMetrics",
    "SolutionContext",
    "TARGET_SUM",
    # Search
    "find_valid_combinations",
    "find_subsets_with_sum",
    "MAX_SUBSET_CELLS",
    "estimate_future_score",
    # Strategy framework
    "SolverStrategy",
    "create_strategy",
    "create_strategy_from_settings",
    "get_strategy_names",
    "get_strategy_info",
    "get_default_strategy_name",
    "register_strategy",
]
