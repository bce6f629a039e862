"""Shared fixtures for the hexmc tests."""

import numpy as np
import pytest

from hexmc.board_graph import HexBoard
from hexmc.hex_engine import hexPosition


def fill(size, cells):
    """
    Builds a game whose ownership is given as {(row, col): player}.
    The move counter is kept consistent with the number of stones.
    """
    game = hexPosition(size)
    for (row, col), player in cells.items():
        result = game.apply_move(row, col, player)
        assert result.accepted
    return game


def ownership_from_rows(rows):
    """Flat int8 ownership array from a list of strings using 'X', 'O' and '.'."""
    values = {"X": 1, "O": -1, ".": 0}
    return np.array([values[ch] for row in rows for ch in row.replace(" ", "")], dtype=np.int8)


@pytest.fixture
def board4():
    return HexBoard(4)


@pytest.fixture
def empty_game4():
    return hexPosition(4)


@pytest.fixture
def make_game():
    return fill


@pytest.fixture
def rows_to_ownership():
    return ownership_from_rows
