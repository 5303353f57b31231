"""
Base Strategy Module - Abstract base class for solving strategies.
"""

import time
from abc import ABC, abstractmethod
from typing import List

from .combinations import find_valid_combinations
from .context import SolutionContext, TARGET_SUM
from .grid import Grid
from .move import Move
from .solution import Solution, SolutionMetrics, Step


class SolverStrategy(ABC):
    """
    Abstract base class for all solving strategies.

    Subclasses must implement the solve() method and define
    name and description class attributes.

    Attributes:
        name: Short identifier for the strategy
        description: Human-readable description for UI
    """
    name: str = "base"
    description: str = "Base strategy"

    @abstractmethod
    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute solution for the given grid.

        Runs to completion; a grid without valid moves yields a
        solution with no steps.

        Args:
            context: Solution context with grid, target and progress

        Returns:
            Solution with steps and metrics
        """
        pass

    def find_all_valid_moves(self, grid: Grid, target: int = TARGET_SUM) -> List[Move]:
        """
        Find every distinct horizontal, vertical and rectangular move
        whose tiles sum to target.

        Args:
            grid: Current grid state
            target: Required sum

        Returns:
            List of valid Move objects in discovery order
        """
        return find_valid_combinations(grid, target)

    def _build_solution(
        self,
        initial_grid: Grid,
        steps: List[Step],
        states_explored: int,
        start_time: float,
        pruned_branches: int = 0
    ) -> Solution:
        """Build Solution object from computation results."""
        elapsed_ms = (time.perf_counter() - start_time) * 1000

        return Solution(
            initial_grid=initial_grid,
            steps=steps,
            metrics=SolutionMetrics(
                computation_time_ms=elapsed_ms,
                states_explored=states_explored,
                pruned_branches=pruned_branches,
                strategy_name=self.name
            )
        )
