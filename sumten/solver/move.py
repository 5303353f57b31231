"""
Move Module - Cells and the valid moves built from them.
"""

from dataclasses import dataclass
from enum import Enum
from typing import Iterable, NamedTuple, Tuple


class Cell(NamedTuple):
    """
    A tile position and the value it held before being cleared.

    Attributes:
        row: Row index
        col: Column index
        value: Tile value (1-9)
    """
    row: int
    col: int
    value: int

    @property
    def position(self) -> Tuple[int, int]:
        return (self.row, self.col)

    def to_dict(self) -> dict:
        return {"row": self.row, "col": self.col, "value": self.value}


class MoveKind(Enum):
    """Enumeration path that produced a move."""
    HORIZONTAL = "horizontal"
    VERTICAL = "vertical"
    RECTANGLE = "rectangle"


def move_score(cell_count: int) -> int:
    """
    Score for clearing cell_count cells in one move.

    Triangular: n * (n + 1) / 2, so one large move beats several small ones.
    """
    return cell_count * (cell_count + 1) // 2


@dataclass(frozen=True)
class Move:
    """
    A set of tiles forming an allowed shape whose values sum to the target.

    Two moves are the same move when their position sets are equal,
    regardless of which enumeration path found them; equality and hashing
    use the sorted position key.

    Attributes:
        cells: Cleared cells, in the order the finder produced them
        kind: Which enumeration pass produced the move
        total: Sum of cell values (always the target)
    """
    cells: Tuple[Cell, ...]
    kind: MoveKind
    total: int

    @classmethod
    def create(cls, cells: Iterable[Cell], kind: MoveKind) -> 'Move':
        """
        Create a Move, computing its total from the cells.

        Args:
            cells: Cells to clear
            kind: Enumeration path

        Returns:
            Move instance
        """
        cells = tuple(cells)
        return cls(cells=cells, kind=kind, total=sum(c.value for c in cells))

    @property
    def key(self) -> Tuple[Tuple[int, int], ...]:
        """Sorted positions, the move's identity."""
        return tuple(sorted(c.position for c in self.cells))

    @property
    def positions(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(c.position for c in self.cells)

    @property
    def cell_count(self) -> int:
        """Number of cells cleared by this move."""
        return len(self.cells)

    @property
    def score(self) -> int:
        return move_score(len(self.cells))

    @property
    def bounds(self) -> Tuple[int, int, int, int]:
        """(min_row, min_col, max_row, max_col) of the cleared cells."""
        rows = [c.row for c in self.cells]
        cols = [c.col for c in self.cells]
        return (min(rows), min(cols), max(rows), max(cols))

    def __eq__(self, other):
        if not isinstance(other, Move):
            return NotImplemented
        return self.key == other.key

    def __hash__(self):
        return hash(self.key)
