"""Tests for the border-to-border connectivity search."""

import numpy as np
import pytest

from hexmc.board_graph import HexBoard
from hexmc.config import PLAYER_A, PLAYER_B
from hexmc.connectivity import ConnectivityChecker, SearchScratch, connects_borders


class TestConnects:
    """Tests for ConnectivityChecker.connects."""

    def test_empty_board_has_no_connection(self, board4) -> None:
        checker = ConnectivityChecker(board4)
        ownership = np.zeros(16, dtype=np.int8)
        assert not checker.connects(PLAYER_A, ownership)
        assert not checker.connects(PLAYER_B, ownership)

    def test_straight_row_connects_left_right(self, board4, rows_to_ownership) -> None:
        ownership = rows_to_ownership([
            "....",
            "XXXX",
            "....",
            "....",
        ])
        checker = ConnectivityChecker(board4)
        assert checker.connects(PLAYER_A, ownership)
        assert not checker.connects(PLAYER_B, ownership)

    def test_diagonal_chain_connects_top_bottom(self, board4, rows_to_ownership) -> None:
        """Down-left steps are hex neighbours, so an anti-diagonal is a path."""
        ownership = rows_to_ownership([
            "...O",
            "..O.",
            ".O..",
            "O...",
        ])
        assert ConnectivityChecker(board4).connects(PLAYER_B, ownership)

    def test_main_diagonal_is_not_a_path(self, board4, rows_to_ownership) -> None:
        ownership = rows_to_ownership([
            "O...",
            ".O..",
            "..O.",
            "...O",
        ])
        assert not ConnectivityChecker(board4).connects(PLAYER_B, ownership)

    def test_winding_path(self, rows_to_ownership) -> None:
        ownership = rows_to_ownership([
            "X....",
            "XXXX.",
            "...X.",
            ".XXX.",
            ".XXXX",
        ])
        assert ConnectivityChecker(HexBoard(5)).connects(PLAYER_A, ownership)

    def test_blocked_path(self, board4, rows_to_ownership) -> None:
        ownership = rows_to_ownership([
            "....",
            "XXOX",
            "....",
            "....",
        ])
        assert not ConnectivityChecker(board4).connects(PLAYER_A, ownership)

    def test_three_by_three_middle_row_win(self, rows_to_ownership) -> None:
        ownership = rows_to_ownership([
            "XOO",
            "XXX",
            "XOO",
        ])
        checker = ConnectivityChecker(HexBoard(3))
        assert checker.connects(PLAYER_A, ownership)
        assert not checker.connects(PLAYER_B, ownership)

    def test_accepts_plain_lists(self, board4) -> None:
        ownership = [0] * 16
        for col in range(4):
            ownership[8 + col] = PLAYER_A
        assert ConnectivityChecker(board4).connects(PLAYER_A, ownership)


class TestScratch:
    """Tests for the caller-owned search buffers."""

    def test_reset_clears_in_place(self) -> None:
        scratch = SearchScratch(9)
        visited = scratch.visited
        visited[3] = True
        scratch.queue.append(4)
        scratch.reset()
        assert scratch.visited is visited
        assert not scratch.visited.any()
        assert len(scratch.queue) == 0

    def test_reused_scratch_gives_same_answers(self) -> None:
        board = HexBoard(6)
        checker = ConnectivityChecker(board)
        scratch = checker.new_scratch()
        rng = np.random.default_rng(7)
        for _ in range(50):
            ownership = rng.choice(np.array([-1, 0, 1], dtype=np.int8), size=36)
            for player in (PLAYER_A, PLAYER_B):
                assert checker.connects(player, ownership, scratch) == checker.connects(player, ownership)

    def test_connects_borders_with_explicit_borders(self, board4, rows_to_ownership) -> None:
        """Searching player 1 from right to left gives the same answer as left to right."""
        ownership = rows_to_ownership([
            "....",
            "....",
            "XXXX",
            "....",
        ])
        mask = np.zeros(16, dtype=bool)
        mask[list(board4.left)] = True
        assert connects_borders(board4, PLAYER_A, board4.right, mask, ownership, SearchScratch(16))


class TestProperties:
    """Properties that hold for any ownership snapshot."""

    @pytest.mark.parametrize("size", [4, 5, 7])
    def test_full_board_has_exactly_one_winner(self, size) -> None:
        board = HexBoard(size)
        checker = ConnectivityChecker(board)
        rng = np.random.default_rng(size)
        for _ in range(40):
            ownership = rng.choice(np.array([-1, 1], dtype=np.int8), size=board.num_vertex)
            assert checker.connects(PLAYER_A, ownership) != checker.connects(PLAYER_B, ownership)

    @pytest.mark.parametrize("player", [PLAYER_A, PLAYER_B])
    def test_adding_own_stones_is_monotonic(self, player) -> None:
        board = HexBoard(6)
        checker = ConnectivityChecker(board)
        rng = np.random.default_rng(11)
        for _ in range(20):
            ownership = np.zeros(board.num_vertex, dtype=np.int8)
            connected = False
            for cell in rng.permutation(board.num_vertex):
                ownership[cell] = player if rng.random() < 0.6 else -player
                now = checker.connects(player, ownership)
                if ownership[cell] == player:
                    assert now or not connected
                connected = now

    def test_repeated_calls_are_idempotent(self, board4, rows_to_ownership) -> None:
        ownership = rows_to_ownership([
            "X.O.",
            "XXO.",
            ".XXO",
            "O..X",
        ])
        checker = ConnectivityChecker(board4)
        first = checker.connects(PLAYER_A, ownership)
        assert checker.connects(PLAYER_A, ownership) == first
        assert checker.connects(PLAYER_A, ownership) == first
