"""
Diagnostic script comparing solver strategies on random boards.
Outputs score, remaining tiles and time per strategy for each board, to
check the auto strategy's density thresholds.

Usage:
    python tools/compare_strategies.py [boards] [rows] [cols] [seed]
"""

import sys
import time
from pathlib import Path

import numpy as np

# Add project root to path
sys.path.insert(0, str(Path(__file__).parent.parent))

from sumten.solver import Grid, SolutionContext, create_strategy, get_strategy_names

# Fraction of cells left empty on generated boards
EMPTY_RATIO = 0.2


def random_board(rng: np.random.RandomState, rows: int, cols: int) -> Grid:
    """Board of digits 1-9 with roughly EMPTY_RATIO of the cells cleared."""
    data = rng.randint(1, 10, size=(rows, cols))
    data[rng.rand(rows, cols) < EMPTY_RATIO] = 0
    return Grid(data)


def compare_board(grid: Grid, index: int):
    """Solve one board with every strategy and print a result line each."""
    print(f"\n{'='*60}")
    print(f"Board {index}: {grid.rows}x{grid.cols}, {grid.count_remaining()} tiles")
    print(f"{'='*60}")

    results = {}
    for name in get_strategy_names():
        strategy = create_strategy(name)
        start = time.perf_counter()
        solution = strategy.solve(SolutionContext(grid=grid))
        elapsed_ms = (time.perf_counter() - start) * 1000

        results[name] = solution.total_score
        print(f"  {name:<18} score {solution.total_score:>4}  "
              f"moves {solution.move_count:>3}  remaining {solution.remaining:>3}  "
              f"{elapsed_ms:>9.1f}ms  ({solution.metrics.strategy_name})")

    best = max(results.values())
    winners = [name for name, score in results.items() if score == best]
    print(f"  Best: {', '.join(winners)}")
    return results


def main():
    boards = int(sys.argv[1]) if len(sys.argv) > 1 else 3
    rows = int(sys.argv[2]) if len(sys.argv) > 2 else 6
    cols = int(sys.argv[3]) if len(sys.argv) > 3 else 6
    seed = int(sys.argv[4]) if len(sys.argv) > 4 else 0

    rng = np.random.RandomState(seed)
    totals = {name: 0 for name in get_strategy_names()}

    for index in range(1, boards + 1):
        for name, score in compare_board(random_board(rng, rows, cols), index).items():
            totals[name] += score

    print(f"\n{'='*60}")
    print("Total score per strategy:")
    for name, total in sorted(totals.items(), key=lambda item: -item[1]):
        print(f"  {name:<18} {total}")
    return 0


if __name__ == "__main__":
    sys.exit(main())
