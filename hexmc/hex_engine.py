from collections import namedtuple

import numpy as np

from .board_graph import HexBoard
from .config import (DEFAULT_BOARD_SIZE, DEFAULT_TRIALS, EMPTY, PLAYER_A, PLAYER_B,
                     PLAYER_SYMBOLS, validate_board_size)
from .connectivity import ConnectivityChecker
from .errors import BoardSizeError, InvariantViolation
from .monte_carlo import MonteCarloSelector, side_to_move

MoveResult = namedtuple("MoveResult", ["accepted", "reason", "ownership"])

OUT_OF_RANGE = "out_of_range"
OCCUPIED = "occupied"


class hexPosition (object):
    """
    Objects of this class correspond to a game of Hex.

    Attributes
    ----------
    size : int
        The size of the board. The board is 'size*size'.
    grid : HexBoard
        Cell indexing, adjacency and borders of the board.
    ownership : numpy.ndarray
        Flat int8 array of length 'size*size'. '0' means empty, '1' means 'X' (left-right), '-1' means 'O' (up-down).
    game_it : int
        Number of moves played so far.
    player : int
        The player who is currently required to make a move.
    winner : int
        '0' while nobody has connected their borders, otherwise the winning player.
    history : list[tuple[int, int, int]]
        The moves played so far as (row, col, player).
    """
    def __init__ (self, size=DEFAULT_BOARD_SIZE):
        if size < 1:
            raise BoardSizeError(f"Board size must be positive, got {size}.")
        self.size = size
        self.grid = HexBoard(size)
        self.checker = ConnectivityChecker(self.grid)
        self._scratch = self.checker.new_scratch()
        self.reset()
    def reset (self):
        """
        Removes all stones from the board and clears the history.
        """
        self.ownership = np.zeros(self.grid.num_vertex, dtype=np.int8)
        self.game_it = 0
        self.player = PLAYER_A
        self.winner = 0
        self.history = []
    @property
    def board (self):
        """The ownership as a 'size*size' nested list, row by row."""
        return self.ownership.reshape(self.size, self.size).tolist()
    def apply_move (self, row, col, player=None):
        """
        Puts a stone of 'player' (default: the side to move) on (row, col).
        Illegal moves are not errors: they come back as a rejected MoveResult and leave the game untouched.
        """
        if player is None:
            player = self.player
        if player not in (PLAYER_A, PLAYER_B):
            raise ValueError(f"Unknown player {player!r}, expected {PLAYER_A} or {PLAYER_B}.")
        if not self.grid.contains(row, col):
            return MoveResult(False, OUT_OF_RANGE, self.ownership)
        u = self.grid.index(row, col)
        if self.ownership[u] != EMPTY:
            return MoveResult(False, OCCUPIED, self.ownership)
        self.ownership[u] = player
        self.game_it += 1
        self.player = side_to_move(self.game_it)
        self.history.append((row, col, player))
        self._check_invariant()
        if self.winner == 0 and self.check_winner(player):
            self.winner = player
        return MoveResult(True, None, self.ownership)
    def move (self, coordinates):
        """
        Enacts a move of the side to move. The variable 'coordinates' is a tuple of board coordinates.
        """
        assert (self.winner == 0), "The game is already won."
        result = self.apply_move(coordinates[0], coordinates[1])
        assert (result.accepted), f"Illegal move {coordinates}: {result.reason}."
    def _check_invariant (self):
        occupied = int(np.count_nonzero(self.ownership))
        if occupied != self.game_it:
            raise InvariantViolation(f"{occupied} occupied cells but {self.game_it} moves recorded.")
    def check_winner (self, player):
        return self.checker.connects(player, self.ownership, self._scratch)
    def evaluate (self):
        """
        Evaluates the board position and adjusts the 'winner' attribute of the object accordingly.
        """
        for player in (PLAYER_A, PLAYER_B):
            if self.check_winner(player):
                self.winner = player
                return player
        self.winner = 0
        return 0
    def is_full (self):
        return self.game_it >= self.grid.num_vertex
    def is_draw (self):
        return self.is_full() and not self.check_winner(PLAYER_A) and not self.check_winner(PLAYER_B)
    def get_action_space (self):
        """
        Returns a list of board coordinates which are empty (on which stones may be put).
        """
        return [self.grid.coordinates(int(u)) for u in np.flatnonzero(self.ownership == EMPTY)]
    def recommend_move (self, player=None, trial_count=DEFAULT_TRIALS, seed=None, workers=1, selector=None):
        """
        Runs the Monte Carlo selector for 'player' (default: the side to move) and returns (row, col).
        Pass a 'selector' to keep drawing from the same random stream across calls.
        """
        if player is None:
            player = self.player
        if selector is None:
            selector = MonteCarloSelector(self.grid, seed=seed, workers=workers)
        index = selector.recommend_move(player, self.ownership, trial_count, game_it=self.game_it)
        return self.grid.coordinates(index)
    def coordinate_to_scalar (self, coordinates):
        assert (self.grid.contains(*coordinates)), "There is something wrong with the coordinates."
        return self.grid.index(*coordinates)
    def scalar_to_coordinates (self, scalar):
        assert (0 <= scalar < self.grid.num_vertex), "The scalar input is invalid."
        return self.grid.coordinates(scalar)
    def clone (self):
        """
        Copy of the game state without the history.
        """
        new_pos = hexPosition(self.size)
        new_pos.ownership = self.ownership.copy()
        new_pos.game_it = self.game_it
        new_pos.player = self.player
        new_pos.winner = self.winner
        return new_pos
    def render (self):
        """
        Returns the board as text, one line per row, each row shifted right to draw the rhombus.
        """
        lines = []
        last = self.size - 1
        for r in range(self.size):
            cells = "-".join(f" {PLAYER_SYMBOLS[int(v)]} " for v in self.ownership[r * self.size:(r + 1) * self.size])
            lines.append(" " * (2 * r) + cells + f" {r}")
            if r < last:
                lines.append(" " * (2 * r + 1) + " \\ /" * last + " \\")
        lines.append(" " * (2 * last) + "".join(f"{c:^3} " for c in range(self.size)))
        return "\n".join(lines)
    def print (self):
        """
        This method prints a visualization of the hex board to the standard output.
        """
        print(self.render())
    def machine_vs_machine_silent (self, machine1, machine2):
        """
        Simulates a game between two machine agents without printing to the console.
        Each machine maps (board, action_set, player) to an element of the action set. Returns the winner.
        """
        self.reset()
        while self.winner == 0 and not self.is_full():
            if self.player == PLAYER_A:
                chosen = machine1(self.board, self.get_action_space(), self.player)
            else:
                chosen = machine2(self.board, self.get_action_space(), self.player)
            self.move(chosen)
        return self.winner


def new_board (n):
    """Starts a new game on an 'n*n' board; raises BoardSizeError outside the playable range."""
    return hexPosition(validate_board_size(n))
