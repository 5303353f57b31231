"""
Combination Finder - Enumerates every valid move on a grid.

Three passes produce candidate moves:
    1. Horizontal: subsets of a row's tiles with no tile left between them
    2. Vertical: the same over columns
    3. Rectangular: every tile inside a rectangle spanning 2+ rows and 2+ cols

A move found by more than one pass is only reported once, keyed by its
sorted cell positions.
"""

import logging
from typing import Iterable, List, Set, Tuple

from .context import TARGET_SUM
from .grid import EMPTY, Grid
from .move import Cell, Move, MoveKind

logger = logging.getLogger(__name__)

# Lines with more tiles than this are skipped by the subset search
MAX_SUBSET_CELLS = 20


def find_subsets_with_sum(cells: List[Cell], target: int) -> List[List[Cell]]:
    """
    Find every non-empty subset of cells whose values sum to target.

    Depth-first include/exclude backtracking, pruned when the running sum
    overshoots the target or when even taking every remaining cell cannot
    reach it. Each matching subset is reported exactly once, in the order
    its last cell was included.

    Args:
        cells: Candidate cells, in line order
        target: Required sum

    Returns:
        List of matching subsets (each in input order); empty if cells is
        empty or longer than MAX_SUBSET_CELLS
    """
    n = len(cells)
    if n == 0:
        return []
    if n > MAX_SUBSET_CELLS:
        logger.debug(f"[Combinations] Skipping subset search over {n} cells")
        return []

    suffix_sum = [0] * (n + 1)
    for i in range(n - 1, -1, -1):
        suffix_sum[i] = suffix_sum[i + 1] + cells[i].value

    results: List[List[Cell]] = []
    current: List[Cell] = []

    def backtrack(idx: int, current_sum: int) -> None:
        if idx >= n:
            return
        if current_sum > target or current_sum + suffix_sum[idx] < target:
            return

        cell = cells[idx]
        new_sum = current_sum + cell.value

        # Include; a match is recorded but the search keeps going since
        # zero-valued cells could extend it
        current.append(cell)
        if new_sum == target:
            results.append(list(current))
        backtrack(idx + 1, new_sum)
        current.pop()

        # Exclude
        backtrack(idx + 1, current_sum)

    backtrack(0, 0)
    return results


def is_contiguous(subset: List[Cell], line: List[int], kind: MoveKind) -> bool:
    """
    True if no tile sits between the selected cells of a line.

    Gaps are allowed only where the line is already empty.

    Args:
        subset: Selected cells, all from the same row (or column)
        line: Values of that whole row (or column)
        kind: HORIZONTAL when line is a row, VERTICAL when it is a column
    """
    if not subset:
        return False
    if len(subset) == 1:
        return True

    if kind is MoveKind.HORIZONTAL:
        selected = {c.col for c in subset}
    else:
        selected = {c.row for c in subset}

    for i in range(min(selected), max(selected) + 1):
        if i not in selected and line[i] != EMPTY:
            return False
    return True


def line_cells(index: int, line: List[int], kind: MoveKind) -> List[Cell]:
    """Non-empty cells of row (HORIZONTAL) or column (VERTICAL) number index."""
    if kind is MoveKind.HORIZONTAL:
        return [Cell(index, i, v) for i, v in enumerate(line) if v != EMPTY]
    return [Cell(i, index, v) for i, v in enumerate(line) if v != EMPTY]


def grid_lines(grid: Grid) -> Iterable[Tuple[MoveKind, int, List[int]]]:
    """
    Yield every row, then every column, as (kind, index, values).

    Args:
        grid: Grid to slice
    """
    rows = grid.to_list()
    for index, line in enumerate(rows):
        yield MoveKind.HORIZONTAL, index, line
    for index in range(grid.cols):
        yield MoveKind.VERTICAL, index, [row[index] for row in rows]


def find_line_moves(grid: Grid, target: int) -> Iterable[Move]:
    """
    Yield horizontal then vertical moves (no rectangles, no deduplication).

    Args:
        grid: Grid to search
        target: Required sum

    Yields:
        Valid row moves top to bottom, then column moves left to right
    """
    for kind, index, line in grid_lines(grid):
        cells = line_cells(index, line, kind)
        if not cells:
            continue
        for subset in find_subsets_with_sum(cells, target):
            if is_contiguous(subset, line, kind):
                yield Move.create(subset, kind)


def find_rectangle_moves(grid: Grid, target: int) -> Iterable[Move]:
    """
    Yield every rectangle spanning 2+ rows and 2+ columns whose tiles sum
    to target.

    For a fixed top-left corner, per-column totals over the current row span
    are updated as max_row grows, and a running sum is accumulated as
    max_col grows. Values are non-negative, so once a rectangle overshoots
    the target every wider one does too.

    Args:
        grid: Grid to search
        target: Required sum

    Yields:
        Rectangle moves, cells in row-major order
    """
    values = grid.to_list()
    rows = grid.rows
    cols = grid.cols

    for min_row in range(rows):
        for min_col in range(cols):
            col_totals = [0] * cols
            col_cells: List[List[Cell]] = [[] for _ in range(cols)]

            for max_row in range(min_row, rows):
                row_values = values[max_row]
                for c in range(min_col, cols):
                    v = row_values[c]
                    if v != EMPTY:
                        col_totals[c] += v
                        col_cells[c].append(Cell(max_row, c, v))

                # Narrowest rectangle already too big: taller ones are too
                if col_totals[min_col] > target:
                    break

                running_sum = 0
                rect_cells: List[Cell] = []
                for max_col in range(min_col, cols):
                    running_sum += col_totals[max_col]
                    if running_sum > target:
                        break
                    rect_cells.extend(col_cells[max_col])

                    # Single rows/columns are covered by the line passes
                    if max_row == min_row or max_col == min_col:
                        continue
                    if running_sum == target and rect_cells:
                        yield Move.create(
                            sorted(rect_cells, key=lambda cell: (cell.row, cell.col)),
                            MoveKind.RECTANGLE,
                        )


def find_valid_combinations(grid: Grid, target: int = TARGET_SUM) -> List[Move]:
    """
    Find every distinct valid move on the grid.

    Args:
        grid: Current grid state
        target: Sum every move must reach

    Returns:
        Moves in discovery order: horizontal, vertical, then rectangles.
        A move already reported by an earlier pass is not repeated.
    """
    moves: List[Move] = []
    seen: Set[Tuple[Tuple[int, int], ...]] = set()

    for candidate in _all_candidates(grid, target):
        key = candidate.key
        if key not in seen:
            seen.add(key)
            moves.append(candidate)

    return moves


def _all_candidates(grid: Grid, target: int) -> Iterable[Move]:
    yield from find_line_moves(grid, target)
    yield from find_rectangle_moves(grid, target)
