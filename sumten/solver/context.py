"""
Solution Context Module - Shared context for strategy execution.
"""

from dataclasses import dataclass
from typing import Callable, Optional

from .grid import Grid

# Value every move must sum to
TARGET_SUM = 10


@dataclass
class SolutionContext:
    """
    Context passed to strategies containing the grid, the target sum
    and progress reporting.

    Attributes:
        grid: Grid to solve
        target: Sum every move must reach
        progress_callback: Optional callback for progress updates
    """
    grid: Grid
    target: int = TARGET_SUM
    progress_callback: Optional[Callable[[float, str], None]] = None

    def report_progress(self, percent: float, message: str = "") -> None:
        """
        Report progress to UI.

        Args:
            percent: Progress from 0.0 to 1.0
            message: Optional status message
        """
        if self.progress_callback:
            self.progress_callback(percent, message)
