"""
Beam Search Strategy - Bounded-width search over whole move sequences.

Each round expands every state in the beam by every valid move, drops
candidates whose grid was already reached with an equal or better score,
and keeps the beam_width most promising candidates. States without moves
are terminal; the best terminal state is the answer.
"""

import time
import logging
from dataclasses import dataclass
from typing import Dict, List, Optional, Tuple

from ..base import SolverStrategy
from ..context import SolutionContext
from ..grid import Grid
from ..heuristics import estimate_future_score
from ..move import Move
from ..solution import Solution, Step, best_terminal_key
from ..factory import register_strategy

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SearchState:
    """
    Node in the beam: a grid reachable via a sequence of steps.

    Attributes:
        grid: Grid after the steps
        steps: Steps taken to reach this grid (append-only history)
        total_score: Sum of move scores along steps
        priority: total_score + heuristic estimate (for sorting)
        remaining: Non-empty cells left on grid
    """
    grid: Grid
    steps: Tuple[Step, ...]
    total_score: int
    priority: int
    remaining: int

    @property
    def sort_key(self) -> Tuple[int, int]:
        """Ascending sort key: highest priority first, then fewest tiles left."""
        return (-self.priority, self.remaining)


@register_strategy
class BeamSearchStrategy(SolverStrategy):
    """
    Beam search over full solutions with dominated-state pruning.

    Algorithm:
        1. Start with the initial grid as the only state (score 0)
        2. For each state in the beam:
           - No valid moves: terminal, compare against best terminal
           - Otherwise apply every move; skip the result if its grid hash
             was already reached with an equal or better score
        3. Sort candidates by priority (desc), then remaining cells (asc)
        4. Keep the top beam_width and repeat until the beam is empty

    Parameters:
        beam_width: Candidates kept per round (default 20)
    """
    name = "beam"
    description = "Beam Search (thorough) - Best for sparse boards"

    def __init__(self, beam_width: int = 20):
        """
        Initialize beam search strategy.

        Args:
            beam_width: Candidates kept per round, at least 1

        Raises:
            ValueError: If beam_width < 1
        """
        if beam_width < 1:
            raise ValueError(f"beam_width must be at least 1, got {beam_width}")
        self.beam_width = beam_width

    def solve(self, context: SolutionContext) -> Solution:
        """
        Compute full solution using beam search.

        Args:
            context: Solution context with grid and target

        Returns:
            Solution holding the best terminal state's steps
        """
        start_time = time.perf_counter()
        target = context.target
        initial = context.grid
        initial_cells = initial.count_remaining()

        # Fresh per call: grid hash -> best cumulative score reaching it
        visited: Dict[int, int] = {}

        beam: List[SearchState] = [SearchState(
            grid=initial,
            steps=(),
            total_score=0,
            priority=estimate_future_score(initial, target),
            remaining=initial_cells,
        )]

        best: Optional[SearchState] = None
        states_explored = 1
        pruned = 0
        rounds = 0

        while beam:
            rounds += 1
            next_beam: List[SearchState] = []

            for state in beam:
                moves = self.find_all_valid_moves(state.grid, target)

                if not moves:
                    if best is None or (best_terminal_key(state.total_score, state.remaining)
                                        > best_terminal_key(best.total_score, best.remaining)):
                        best = state
                    continue

                for move in moves:
                    candidate = self._expand(state, move, visited, target)
                    states_explored += 1
                    if candidate is None:
                        pruned += 1
                    else:
                        next_beam.append(candidate)

            # Stable sort keeps discovery order among equal keys
            next_beam.sort(key=lambda s: s.sort_key)
            beam = next_beam[:self.beam_width]

            if beam and initial_cells > 0:
                leader = beam[0]
                context.report_progress(
                    min(0.99, 1.0 - leader.remaining / initial_cells),
                    f"Round {rounds}: best score {leader.total_score}, "
                    f"{leader.remaining} cells left"
                )

            logger.debug(
                f"[BeamSearch] Round {rounds}: kept {len(beam)} states, "
                f"{len(visited)} visited, {pruned} pruned"
            )

        steps = list(best.steps) if best is not None else []

        logger.info(
            f"[BeamSearch] Solution complete: {len(steps)} moves, "
            f"score {best.total_score if best else 0}, "
            f"{states_explored} states explored, {pruned} pruned"
        )

        return self._build_solution(
            initial, steps, states_explored, start_time, pruned_branches=pruned
        )

    def _expand(
        self,
        state: SearchState,
        move: Move,
        visited: Dict[int, int],
        target: int
    ) -> Optional[SearchState]:
        """
        Apply move to state, unless the resulting grid is dominated.

        Args:
            state: State being expanded
            move: Valid move on state.grid
            visited: Best score seen per grid hash, updated in place
            target: Sum every move must reach

        Returns:
            The new state, or None if the grid was already reached with an
            equal or better score
        """
        new_grid = state.grid.apply_move(move.positions)
        grid_key = new_grid.hash_key()
        new_total = state.total_score + move.score

        existing = visited.get(grid_key)
        if existing is not None and existing >= new_total:
            return None
        visited[grid_key] = new_total

        return SearchState(
            grid=new_grid,
            steps=state.steps + (Step.from_move(move, new_grid),),
            total_score=new_total,
            priority=new_total + estimate_future_score(new_grid, target),
            remaining=new_grid.count_remaining(),
        )
