"""
Sum to 10 Solver

Finds a high-scoring sequence of moves for the Sum to 10 tile puzzle.

Usage:
    import sumten

    steps = sumten.solve([[5, 5], [2, 8]])
    for step in steps:
        print(step.to_dict())
"""

import logging
from typing import Any, List

from .grid_io import GridValidationError, parse_grid, parse_grid_json, steps_to_json
from .solver import SolutionContext, Step, TARGET_SUM, create_strategy

__version__ = "1.0.0"

logger = logging.getLogger(__name__)


def solve(grid: Any, target: int = TARGET_SUM) -> List[Step]:
    """
    Solve a puzzle grid with the auto-selected strategy.

    Args:
        grid: Rectangular matrix of integers 0-9 (0 = empty)
        target: Sum every move must reach

    Returns:
        Ordered steps; empty if the grid has no valid move

    Raises:
        GridValidationError: If grid is not a rectangular matrix of digits
    """
    board = parse_grid(grid)
    solution = create_strategy("auto").solve(SolutionContext(grid=board, target=target))
    logger.debug(f"Solved {board.rows}x{board.cols} grid: {solution.move_count} moves")
    return solution.steps


def solve_json(text: str, target: int = TARGET_SUM) -> str:
    """
    Solve a grid given as JSON text.

    Args:
        text: JSON array of rows
        target: Sum every move must reach

    Returns:
        JSON array of steps ({"cells", "sum", "gridAfter"} objects)

    Raises:
        GridValidationError: If text is not a valid grid
    """
    return steps_to_json(solve(parse_grid_json(text), target))


__all__ = [
    "solve",
    "solve_json",
    "GridValidationError",
    "__version__",
]
