from typing import List, Tuple

import numpy as np

from .board_graph import HexBoard
from .config import DEFAULT_TRIALS
from .monte_carlo import MonteCarloSelector


class RandomAgent:
    """Plays a uniformly random empty cell."""
    def __init__(self, seed=None):
        self.rng = np.random.default_rng(seed)

    def select_move(self, board: List[List[int]], action_set: List[Tuple[int, int]], player: int) -> Tuple[int, int]:
        if not action_set:
            raise ValueError("No valid moves available")
        return tuple(action_set[self.rng.integers(len(action_set))])


class MonteCarloAgent:
    """
    Wraps a MonteCarloSelector behind the (board, action_set, player) interface used by the
    tournament and the interactive game. One selector per board size is kept, so repeated calls
    keep drawing from the same random stream.
    """
    def __init__(self, num_trials=DEFAULT_TRIALS, seed=None, workers=1):
        self.num_trials = num_trials
        self.seed = seed
        self.workers = workers
        self._selectors = {}

    def _selector(self, size: int) -> MonteCarloSelector:
        if size not in self._selectors:
            self._selectors[size] = MonteCarloSelector(HexBoard(size), seed=self.seed, workers=self.workers)
        return self._selectors[size]

    def select_move(self, board: List[List[int]], action_set: List[Tuple[int, int]], player: int) -> Tuple[int, int]:
        """
        Args:
            board: Current game state, a 'size*size' nested list of owner values
            action_set: List of valid moves
            player: Current player (1 for X, -1 for O)

        Returns:
            Tuple[int, int]: Recommended move coordinates
        """
        if not action_set:
            raise ValueError("No valid moves available")
        ownership = np.asarray(board, dtype=np.int8).ravel()
        selector = self._selector(len(board))
        index = selector.recommend_move(player, ownership, self.num_trials)
        return selector.board.coordinates(index)
