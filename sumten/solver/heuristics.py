"""
Heuristic Estimator - Cheap guess at the value of the next move.

Used to rank search branches only, never as a bound. Rectangles are left
out so the estimate stays cheap enough to compute at every expanded node;
this biases it low.
"""

from .combinations import find_subsets_with_sum, grid_lines, is_contiguous, line_cells
from .context import TARGET_SUM
from .grid import Grid
from .move import move_score


def largest_line_move(grid: Grid, target: int = TARGET_SUM) -> int:
    """
    Size of the largest valid horizontal or vertical move.

    A line holding no more tiles than the best size found so far cannot
    beat it, so it is not searched.

    Args:
        grid: Grid to inspect
        target: Sum every move must reach

    Returns:
        Cell count of the largest row/column move, 0 if there is none
    """
    best = 0
    for kind, index, line in grid_lines(grid):
        cells = line_cells(index, line, kind)
        if len(cells) <= best:
            continue
        for subset in find_subsets_with_sum(cells, target):
            if len(subset) > best and is_contiguous(subset, line, kind):
                best = len(subset)
    return best


def estimate_future_score(grid: Grid, target: int = TARGET_SUM) -> int:
    """
    Optimistic score of one more move from this grid.

    Args:
        grid: Grid to inspect
        target: Sum every move must reach

    Returns:
        move_score() of the largest row/column move
    """
    return move_score(largest_line_move(grid, target))
