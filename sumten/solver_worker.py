"""
Solver Worker Module for the Sum to 10 Solver

Runs one strategy solve on a background QThread so the editor stays
responsive. Communicates with the UI via Qt signals.
"""

import logging
from typing import Any, Dict, Optional

from PyQt5.QtCore import QThread, pyqtSignal

from .solver import Grid, SolutionContext, create_strategy_from_settings


# Configure module logger
logger = logging.getLogger(__name__)


class SolverWorker(QThread):
    """
    Background worker thread for a single solve.

    Signals:
        status_changed(str): Emitted when worker status changes
        progress_changed(float, str): Strategy progress (0.0-1.0, message)
        solution_ready(object): Emitted with the Solution when done
        error_occurred(str): Emitted when the solve fails

    Example:
        worker = SolverWorker(grid, settings)
        worker.solution_ready.connect(ui.show_solution)
        worker.start()
    """

    status_changed = pyqtSignal(str)
    progress_changed = pyqtSignal(float, str)
    solution_ready = pyqtSignal(object)
    error_occurred = pyqtSignal(str)

    def __init__(self, grid: Grid, settings: Dict[str, Any],
                 strategy_name: Optional[str] = None):
        """
        Initialize the solver worker.

        Args:
            grid: Validated grid to solve
            settings: Loaded settings (target and strategy parameters)
            strategy_name: Strategy to run (defaults to the saved one)
        """
        super().__init__()
        self._grid = grid
        self._settings = settings
        self._strategy_name = strategy_name or settings.get("strategy_name", "")

    def run(self):
        """Solve the grid. Called when thread starts."""
        try:
            strategy = create_strategy_from_settings(self._settings, self._strategy_name)
            logger.info(f"Solver worker started ({strategy.name})")
            self.status_changed.emit(f"Solving ({strategy.name})...")

            context = SolutionContext(
                grid=self._grid,
                target=self._settings.get("target", 10),
                progress_callback=self.progress_changed.emit,
            )
            solution = strategy.solve(context)
        except Exception as e:
            logger.exception("Error in solver worker")
            self.error_occurred.emit(str(e))
            return

        logger.info(
            f"Solver worker finished: {solution.move_count} moves in "
            f"{solution.metrics.computation_time_ms:.1f}ms"
        )
        self.status_changed.emit("Solved")
        self.solution_ready.emit(solution)
