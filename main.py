"""
Sum to 10 Solver - Entry Point

Without arguments, opens the grid editor window. With --input, solves a
grid stored as JSON and prints the moves.

Example:
    python main.py
    python main.py --input board.json
    python main.py --input board.json --strategy beam --output steps.json --render out/
"""

import sys
import logging
import argparse
from typing import Optional

from sumten.grid_io import GridValidationError, load_grid, solution_to_json, steps_to_json
from sumten.settings import load_settings, save_settings
from sumten.solver import (
    SolutionContext,
    create_strategy_from_settings,
    get_strategy_names,
)
from sumten.solver.solution import describe


logger = logging.getLogger(__name__)


def configure_logging(debug: bool) -> None:
    """Log to both console and solver.log."""
    logging.basicConfig(
        level=logging.DEBUG if debug else logging.INFO,
        format="%(asctime)s [%(levelname)s] %(name)s: %(message)s",
        datefmt="%H:%M:%S",
        handlers=[
            logging.StreamHandler(),  # Console output
            logging.FileHandler("solver.log", mode='w', encoding='utf-8')  # File output
        ]
    )


class Application:
    """
    GUI application controller.

    Manages the lifecycle of the editor window and solver worker thread,
    connecting signals between them.
    """

    def __init__(self, settings: dict):
        """
        Initialize the application.

        Args:
            settings: Loaded settings
        """
        # Qt is imported only for the GUI
        from sumten.control_ui import ControlWindow

        self.settings = settings
        self.window = ControlWindow(
            rows=settings.get("grid_rows", 14),
            cols=settings.get("grid_cols", 8),
        )
        self.worker = None

    def setup(self):
        """Connect UI signals and restore saved state."""
        self.window.solve_requested.connect(self._on_solve)
        self.window.strategy_changed.connect(self._on_strategy_changed)
        self.window.size_changed.connect(self._on_size_changed)
        self.window.shutdown_requested.connect(self._on_shutdown)

        saved_strategy = self.settings.get("strategy_name")
        if saved_strategy and not self.window.select_strategy(saved_strategy):
            logger.debug(f"Saved strategy '{saved_strategy}' not found, using default")

        logger.info("Application initialized")

    def _on_solve(self, grid):
        """Start a worker for the validated grid."""
        from sumten.solver_worker import SolverWorker

        if self.worker and self.worker.isRunning():
            logger.warning("Solve already running")
            return

        strategy_name = self.window.strategy_combo.currentData()
        logger.info(f"Solving {grid.rows}x{grid.cols} grid with {strategy_name}")

        self.worker = SolverWorker(grid, self.settings, strategy_name)
        self.worker.status_changed.connect(self.window.set_status)
        self.worker.progress_changed.connect(self._on_progress)
        self.worker.solution_ready.connect(self.window.show_solution)
        self.worker.error_occurred.connect(self._on_error)
        self.worker.finished.connect(self._on_worker_finished)

        self.window.set_solving(True)
        self.worker.start()

    def _on_progress(self, percent: float, message: str):
        self.window.set_status(f"Solving... {percent * 100:.0f}% ({message})")

    def _on_error(self, error_msg: str):
        """Handle worker error."""
        logger.error(f"Worker error: {error_msg}")
        self.window.set_solving(False)
        self.window.set_status(f"Error: {error_msg}")

    def _on_worker_finished(self):
        self.worker = None

    def _on_strategy_changed(self, strategy_name: str):
        """Handle strategy selection change from UI."""
        logger.info(f"Strategy changed to: {strategy_name}")
        self.settings["strategy_name"] = strategy_name
        save_settings(self.settings)

    def _on_size_changed(self, rows: int, cols: int):
        self.settings["grid_rows"] = rows
        self.settings["grid_cols"] = cols
        save_settings(self.settings)

    def _on_shutdown(self):
        """Handle window close."""
        logger.info("Shutdown requested")
        if self.worker and self.worker.isRunning():
            self.worker.wait(2000)  # 2 second timeout
            if self.worker.isRunning():
                logger.warning("Worker did not stop gracefully, terminating")
                self.worker.terminate()
                self.worker.wait()

    def run(self) -> int:
        """
        Show the window.

        Returns:
            Exit code
        """
        self.window.show()
        return 0


def solve_file(args: argparse.Namespace, settings: dict) -> int:
    """
    Solve a grid file without the GUI.

    Returns:
        Exit code (0 on success, 1 on invalid input)
    """
    try:
        grid = load_grid(args.input)
    except (GridValidationError, OSError) as e:
        logger.error(f"Cannot load {args.input}: {e}")
        return 1

    strategy = create_strategy_from_settings(settings, args.strategy or "")
    solution = strategy.solve(SolutionContext(grid=grid, target=settings.get("target", 10)))

    for index, step in enumerate(solution.steps):
        cells = ", ".join(f"({c.row},{c.col})={c.value}" for c in step.cells)
        print(f"{index + 1:3d}. {step.selection_type:<10} +{step.score:<3d} {cells}")
    print(describe(solution))
    print(f"Strategy: {solution.metrics.strategy_name}, "
          f"{solution.metrics.computation_time_ms:.1f}ms, "
          f"{solution.metrics.states_explored} states explored")

    if args.output:
        with open(args.output, 'w', encoding='utf-8') as f:
            f.write(steps_to_json(solution.steps, indent=2))
        logger.info(f"Steps written to {args.output}")

    if args.summary:
        with open(args.summary, 'w', encoding='utf-8') as f:
            f.write(solution_to_json(solution, indent=2))
        logger.info(f"Solution summary written to {args.summary}")

    if args.render:
        from sumten.rendering import render_solution
        render_solution(solution, args.render)

    return 0


def parse_args(argv: Optional[list] = None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        description="Sum to 10 Solver - Find high scoring move sequences"
    )
    parser.add_argument(
        "--input", "-i",
        help="JSON grid file to solve without opening the window"
    )
    parser.add_argument(
        "--strategy", "-s",
        choices=get_strategy_names(),
        help="Strategy to use (default: saved setting)"
    )
    parser.add_argument(
        "--output", "-o",
        help="Write solution steps as JSON to this file"
    )
    parser.add_argument(
        "--summary",
        help="Write the solution with score and remaining tiles as JSON to this file"
    )
    parser.add_argument(
        "--render", "-r",
        help="Write one PNG per step into this directory"
    )
    parser.add_argument(
        "--debug", "-d",
        action="store_true",
        help="Enable debug logging"
    )
    return parser.parse_args(argv)


def main():
    """Run the solver headless or open the editor window."""
    args = parse_args()
    settings = load_settings()
    configure_logging(args.debug or settings.get("debug_enabled", False))

    if args.input:
        sys.exit(solve_file(args, settings))

    from PyQt5.QtWidgets import QApplication

    app = QApplication(sys.argv)

    application = Application(settings)
    application.setup()
    application.run()

    sys.exit(app.exec_())


if __name__ == "__main__":
    main()
