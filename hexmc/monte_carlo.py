import logging
import multiprocessing as mp
import time

import numpy as np

from .board_graph import HexBoard
from .config import EMPTY, PLAYER_A, PLAYER_B
from .connectivity import ConnectivityChecker
from .errors import InvariantViolation, RandomSourceError

logger = logging.getLogger(__name__)


def side_to_move (game_it):
    """Player '1' always opens, so the side to move follows the parity of the move counter."""
    return PLAYER_A if game_it % 2 == 0 else PLAYER_B


def run_trials (board, current_player, ownership, game_it, num_trials, rng, scratch=None):
    """
    Plays 'num_trials' random completions of 'ownership' and returns the per-cell score array.

    In every playout the shuffled empty cells are split in two: the first ceil(k/2) go to the
    side to move (by parity of 'game_it'), the remaining floor(k/2) to the other side. A full
    hex board has exactly one winner, so a single connectivity check for player '-1' decides it.
    When 'current_player' wins, the cells it received score +1; otherwise the cells of its
    opponent score -1.
    """
    checker = ConnectivityChecker(board)
    if scratch is None:
        scratch = checker.new_scratch()
    empty = np.flatnonzero(ownership == EMPTY)
    split = (len(empty) + 1) // 2
    mover = side_to_move(game_it)
    scores = np.zeros(board.num_vertex, dtype=np.int64)
    playout = np.array(ownership, dtype=np.int8, copy=True)
    for _ in range(num_trials):
        order = rng.permutation(empty)
        mover_cells, other_cells = order[:split], order[split:]
        playout[mover_cells] = mover
        playout[other_cells] = -mover
        winner = PLAYER_B if checker.connects(PLAYER_B, playout, scratch) else PLAYER_A
        if current_player == mover:
            own_cells, opponent_cells = mover_cells, other_cells
        else:
            own_cells, opponent_cells = other_cells, mover_cells
        if winner == current_player:
            scores[own_cells] += 1
        else:
            scores[opponent_cells] -= 1
    return scores


def _trial_worker (payload):
    size, current_player, ownership, game_it, num_trials, seed_seq = payload
    rng = np.random.default_rng(seed_seq)
    return run_trials(HexBoard(size), current_player, ownership, game_it, num_trials, rng)


class MonteCarloSelector (object):
    """
    Recommends a move by scoring every empty cell over many random playouts.

    With 'workers' > 1 the playouts are spread over a process pool; each worker draws from
    its own child seed sequence and the partial score arrays are summed afterwards.
    """
    def __init__ (self, board, seed=None, workers=1):
        self.board = board
        self.workers = max(1, int(workers))
        try:
            self.rng = np.random.default_rng(seed)
        except (TypeError, ValueError) as e:
            raise RandomSourceError(f"Cannot seed the Monte Carlo generator with {seed!r}: {e}") from e
        self._scratch = ConnectivityChecker(board).new_scratch()
    def _check_ownership (self, ownership, game_it):
        occupied = int(np.count_nonzero(ownership))
        if game_it is None:
            return occupied
        if occupied != game_it:
            raise InvariantViolation(f"{occupied} occupied cells but {game_it} moves recorded.")
        return game_it
    def score_moves (self, current_player, ownership, num_trials, game_it=None):
        """
        Returns the accumulated score of every cell after 'num_trials' playouts.
        Occupied cells keep a score of 0; every empty cell ends in [-num_trials, num_trials].
        """
        if num_trials < 1:
            raise ValueError(f"num_trials must be at least 1, got {num_trials}.")
        ownership = np.asarray(ownership, dtype=np.int8)
        game_it = self._check_ownership(ownership, game_it)
        if game_it >= self.board.num_vertex:
            raise ValueError("The board is full, there is no move to recommend.")
        if self.workers == 1 or num_trials < self.workers:
            return run_trials(self.board, current_player, ownership, game_it, num_trials,
                              self.rng, self._scratch)
        return self._score_parallel(current_player, ownership, game_it, num_trials)
    def _score_parallel (self, current_player, ownership, game_it, num_trials):
        root = np.random.SeedSequence(int(self.rng.integers(2**63)))
        chunks = [num_trials // self.workers] * self.workers
        for i in range(num_trials % self.workers):
            chunks[i] += 1
        payloads = [(self.board.size, current_player, ownership, game_it, chunk, child)
                     for chunk, child in zip(chunks, root.spawn(self.workers))]
        ctx = mp.get_context("spawn")
        with ctx.Pool(processes=self.workers) as pool:
            partials = pool.map(_trial_worker, payloads)
        return np.sum(partials, axis=0)
    def recommend_move (self, current_player, ownership, num_trials, game_it=None):
        """
        Returns the index of the empty cell with the highest score.
        Ties go to the lowest index, i.e. the first cell in row-major order.
        """
        start = time.perf_counter()
        scores = self.score_moves(current_player, ownership, num_trials, game_it=game_it)
        empty = np.flatnonzero(np.asarray(ownership) == EMPTY)
        best = int(empty[np.argmax(scores[empty])])
        logger.info("Monte Carlo: %d trials over %d empty cells in %.1f ms, best cell %d (score %d)",
                    num_trials, len(empty), (time.perf_counter() - start) * 1000.0, best, scores[best])
        return best
