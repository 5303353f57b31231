"""
Strategies Package - Concrete strategy implementations.

Import this module to register all built-in strategies.
"""

from .auto import AutoStrategy
from .beam_search import BeamSearchStrategy
from .greedy_lookahead import GreedyLookaheadStrategy

__all__ = [
    "AutoStrategy",
    "BeamSearchStrategy",
    "GreedyLookaheadStrategy",
]
