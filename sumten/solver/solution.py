"""
Solution Module - Steps of a computed solution and the solution result.
"""

from dataclasses import dataclass, field
from typing import Any, Dict, List, Optional, Tuple

from .grid import Grid
from .move import Cell, Move, move_score


@dataclass(frozen=True)
class Step:
    """
    One committed move of a solution.

    Attributes:
        cells: Cells cleared by the move (with their pre-move values)
        sum: Sum of the cleared values (always the target)
        grid_after: Full grid immediately after the move
    """
    cells: Tuple[Cell, ...]
    sum: int
    grid_after: Grid

    @classmethod
    def from_move(cls, move: Move, grid_after: Grid) -> 'Step':
        return cls(cells=move.cells, sum=move.total, grid_after=grid_after)

    @property
    def positions(self) -> Tuple[Tuple[int, int], ...]:
        return tuple(c.position for c in self.cells)

    @property
    def cell_count(self) -> int:
        return len(self.cells)

    @property
    def score(self) -> int:
        return move_score(len(self.cells))

    @property
    def selection_type(self) -> str:
        """
        Shape of the cleared cells for display.

        Returns:
            "Single", "Horizontal", "Vertical" or "Rectangle"
        """
        if len(self.cells) == 1:
            return "Single"
        if len({c.row for c in self.cells}) == 1:
            return "Horizontal"
        if len({c.col for c in self.cells}) == 1:
            return "Vertical"
        return "Rectangle"

    def to_dict(self) -> Dict[str, Any]:
        """Serialize with the external field names (cells, sum, gridAfter)."""
        return {
            "cells": [c.to_dict() for c in self.cells],
            "sum": self.sum,
            "gridAfter": self.grid_after.to_list(),
        }


@dataclass
class SolutionMetrics:
    """
    Performance metrics for solution computation.

    Attributes:
        computation_time_ms: Time taken in milliseconds
        states_explored: Number of grid states evaluated
        pruned_branches: Number of candidates dropped as dominated states
        strategy_name: Name of strategy that computed this solution
    """
    computation_time_ms: float = 0.0
    states_explored: int = 0
    pruned_branches: int = 0
    strategy_name: str = ""


@dataclass
class Solution:
    """
    Result of a strategy computation.

    Attributes:
        initial_grid: Grid the solve started from
        steps: Ordered steps from the initial grid to a terminal state
        metrics: Performance statistics
    """
    initial_grid: Grid
    steps: List[Step] = field(default_factory=list)
    metrics: SolutionMetrics = field(default_factory=SolutionMetrics)

    @property
    def move_count(self) -> int:
        """Number of moves in solution."""
        return len(self.steps)

    @property
    def has_moves(self) -> bool:
        """Check if solution has any moves."""
        return len(self.steps) > 0

    @property
    def total_score(self) -> int:
        return sum(step.score for step in self.steps)

    @property
    def total_cleared(self) -> int:
        """Total cells cleared by all moves."""
        return sum(step.cell_count for step in self.steps)

    @property
    def final_grid(self) -> Grid:
        """Grid after the last step (the initial grid if there are none)."""
        if self.steps:
            return self.steps[-1].grid_after
        return self.initial_grid

    @property
    def remaining(self) -> int:
        """Tiles left on the final grid."""
        return self.final_grid.count_remaining()

    def grid_before(self, index: int) -> Grid:
        """
        Get grid state before executing the step at index.

        Args:
            index: Step index (0-based)

        Returns:
            Initial grid for index 0, otherwise the previous step's grid_after

        Raises:
            IndexError: If index out of range
        """
        if not 0 <= index < len(self.steps):
            raise IndexError(f"Step index {index} out of range")
        if index == 0:
            return self.initial_grid
        return self.steps[index - 1].grid_after

    def to_dict(self) -> Dict[str, Any]:
        """Serialize steps plus summary figures."""
        return {
            "steps": [step.to_dict() for step in self.steps],
            "totalScore": self.total_score,
            "totalCleared": self.total_cleared,
            "remaining": self.remaining,
            "strategy": self.metrics.strategy_name,
        }


def best_terminal_key(score: int, remaining: int) -> Tuple[int, int]:
    """Ordering key for terminal states: higher score, then fewer tiles left."""
    return (score, -remaining)


def describe(solution: Optional[Solution]) -> str:
    """One-line human readable summary of a solution."""
    if solution is None:
        return "--"
    if not solution.has_moves:
        return "No valid moves found"
    return (f"{solution.move_count} moves, {solution.total_cleared} cells cleared, "
            f"score {solution.total_score}, {solution.remaining} remaining")
