"""
Auto Strategy - Picks beam search or greedy lookahead from board density.
"""

import logging

from ..base import SolverStrategy
from ..context import SolutionContext
from ..solution import Solution
from ..factory import register_strategy
from .beam_search import BeamSearchStrategy
from .greedy_lookahead import GreedyLookaheadStrategy

logger = logging.getLogger(__name__)


@register_strategy
class AutoStrategy(SolverStrategy):
    """
    Chooses a strategy from the number of tiles on the initial grid.

    Default thresholds:
        <= 30 tiles: beam search, width 20
        <= 50 tiles: beam search, width 12
        otherwise:   greedy lookahead, depth 3

    Beam search finds better sequences but its cost grows quickly with the
    number of moves per state, so dense boards fall back to greedy.
    """
    name = "auto"
    description = "Auto (recommended) - Beam search or lookahead by board density"

    def __init__(self, small_board_cells: int = 30, small_beam_width: int = 20,
                 medium_board_cells: int = 50, medium_beam_width: int = 12,
                 lookahead_depth: int = 3):
        """
        Initialize auto strategy.

        Args:
            small_board_cells: Tile count up to which the wide beam is used
            small_beam_width: Beam width for small boards
            medium_board_cells: Tile count up to which the narrow beam is used
            medium_beam_width: Beam width for medium boards
            lookahead_depth: Greedy lookahead depth for larger boards
        """
        self.small_board_cells = small_board_cells
        self.small_beam_width = small_beam_width
        self.medium_board_cells = medium_board_cells
        self.medium_beam_width = medium_beam_width
        self.lookahead_depth = lookahead_depth

    def select(self, tile_count: int) -> SolverStrategy:
        """
        Build the strategy suited to a board with tile_count tiles.

        Args:
            tile_count: Non-empty cells on the initial grid

        Returns:
            Configured strategy instance
        """
        if tile_count <= self.small_board_cells:
            return BeamSearchStrategy(beam_width=self.small_beam_width)
        if tile_count <= self.medium_board_cells:
            return BeamSearchStrategy(beam_width=self.medium_beam_width)
        return GreedyLookaheadStrategy(depth=self.lookahead_depth)

    def solve(self, context: SolutionContext) -> Solution:
        """
        Delegate to the strategy chosen for this grid.

        Args:
            context: Solution context with grid and target

        Returns:
            Solution from the delegate (metrics name it, not "auto")
        """
        tile_count = context.grid.count_remaining()
        delegate = self.select(tile_count)
        logger.info(f"[Auto] {tile_count} tiles -> {delegate.name} ({self._describe(delegate)})")
        return delegate.solve(context)

    @staticmethod
    def _describe(strategy: SolverStrategy) -> str:
        if isinstance(strategy, BeamSearchStrategy):
            return f"width {strategy.beam_width}"
        if isinstance(strategy, GreedyLookaheadStrategy):
            return f"depth {strategy.depth}"
        return strategy.name
