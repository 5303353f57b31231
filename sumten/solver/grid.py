"""
Grid Module - Dense board representation for the Sum to 10 puzzle.
"""

from typing import Iterable, List, Sequence, Tuple

import numpy as np

# Value stored in a cleared cell
EMPTY = 0


class Grid:
    """
    Dense row-major board backed by a numpy uint8 array.

    Immutable by convention: search code never mutates a Grid that another
    branch may still hold. apply_move() returns a fresh copy instead.

    Cells contain 1-9 for tiles and 0 for empty cells.
    """
    __slots__ = ("_data",)

    def __init__(self, data: np.ndarray):
        if data.ndim != 2:
            raise ValueError(f"Grid data must be 2-dimensional, got {data.ndim}")
        self._data = np.ascontiguousarray(data, dtype=np.uint8)

    @classmethod
    def from_rows(cls, rows: Sequence[Sequence[int]]) -> 'Grid':
        """
        Create a Grid from a rectangular 2D list.

        Values are not range-checked here; use grid_io.parse_grid for
        untrusted input.

        Args:
            rows: 2D list of integers 0-9

        Returns:
            Grid instance
        """
        if len(rows) == 0:
            return cls(np.zeros((0, 0), dtype=np.uint8))
        return cls(np.array(rows, dtype=np.uint8))

    @classmethod
    def empty(cls, rows: int, cols: int) -> 'Grid':
        """Create a grid of the given size with every cell empty."""
        return cls(np.zeros((rows, cols), dtype=np.uint8))

    @property
    def rows(self) -> int:
        """Get number of rows in grid."""
        return self._data.shape[0]

    @property
    def cols(self) -> int:
        """Get number of columns in grid."""
        return self._data.shape[1]

    def get(self, row: int, col: int) -> int:
        """Value at (row, col). Caller guarantees the position is in bounds."""
        return int(self._data[row, col])

    def set(self, row: int, col: int, value: int) -> None:
        """Overwrite (row, col). Only call on a Grid no other branch holds."""
        self._data[row, col] = value

    def hash_key(self) -> int:
        """
        Fast structural digest of the cell contents.

        Equal grids always share a key. Two different grids sharing a key is
        possible but vanishingly rare; search code treats them as the same
        state.
        """
        return hash((self._data.shape, self._data.tobytes()))

    def count_remaining(self) -> int:
        """Number of non-empty cells."""
        return int(np.count_nonzero(self._data))

    def apply_move(self, positions: Iterable[Tuple[int, int]]) -> 'Grid':
        """
        Clear the given positions on a copy of this grid.

        Args:
            positions: (row, col) pairs to clear

        Returns:
            New Grid; the receiver is unchanged
        """
        new_grid = Grid(self._data.copy())
        for row, col in positions:
            new_grid._data[row, col] = EMPTY
        return new_grid

    def to_list(self) -> List[List[int]]:
        """Convert to a plain 2D list of ints."""
        return self._data.tolist()

    def copy(self) -> 'Grid':
        return Grid(self._data.copy())

    def __eq__(self, other):
        if not isinstance(other, Grid):
            return NotImplemented
        return (self._data.shape == other._data.shape
                and bool(np.array_equal(self._data, other._data)))

    def __hash__(self):
        return self.hash_key()

    def __repr__(self):
        return f"Grid({self.rows}x{self.cols}, remaining={self.count_remaining()})"
