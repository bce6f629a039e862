"""Tests for the tournament runner and the plots."""

import argparse

import matplotlib.pyplot as plt
import pandas as pd
import pytest

from hexmc.hex_engine import hexPosition
from hexmc.plotting import draw_board, plot_board_state
from hexmc.tournament import load_player_func, play_match, run_tournament


def tournament_args(tmp_path, **overrides):
    args = dict(board_size=4, test_episodes=2, simulations=20, opponent="random",
                opponent_simulations=10, seed=5, workers=1, output_prefix=str(tmp_path / "results"))
    args.update(overrides)
    return argparse.Namespace(**args)


class TestTournament:
    def test_unknown_agent_type(self) -> None:
        with pytest.raises(ValueError):
            load_player_func("minimax", 10)

    def test_play_match_counts_every_game(self) -> None:
        env = hexPosition(4)
        p1 = load_player_func("random", 0, seed=1)
        p2 = load_player_func("random", 0, seed=2)
        wins_as_x, wins_as_o, draws = play_match(env, p1, p2, 3, "test")
        assert 0 <= wins_as_x <= 3
        assert 0 <= wins_as_o <= 3
        assert draws == 0

    def test_run_tournament_writes_outputs(self, tmp_path) -> None:
        results = run_tournament(tournament_args(tmp_path))
        assert list(results['opponent']) == ["RANDOM"]
        assert results['total_wins'][0] == results['wins_as_x'][0] + results['wins_as_o'][0]
        saved = pd.read_csv(tmp_path / "results.csv")
        assert len(saved) == 1
        assert (tmp_path / "results.png").exists()

    def test_all_opponents(self, tmp_path) -> None:
        results = run_tournament(tournament_args(tmp_path, opponent=None))
        assert list(results['opponent']) == ["RANDOM", "MC"]
        assert ((results['win_rate'] >= 0) & (results['win_rate'] <= 1)).all()


class TestPlotting:
    def test_plot_board_state(self, tmp_path) -> None:
        game = hexPosition(5)
        game.apply_move(0, 0)
        game.apply_move(4, 4)
        filename = tmp_path / "board.png"
        assert plot_board_state(game.board, str(filename)) == str(filename)
        assert filename.stat().st_size > 0

    def test_draw_board_labels_stones_and_goal_sides(self) -> None:
        game = hexPosition(4)
        game.apply_move(0, 0)
        game.apply_move(3, 3)
        fig, ax = plt.subplots()
        draw_board(ax, game.board)
        labels = [text.get_text() for text in ax.texts]
        plt.close(fig)
        # one symbol per stone, two goal sides per player, row and column numbers
        assert labels.count("X") == 1 + 2
        assert labels.count("O") == 1 + 2
        assert labels.count("3") == 2
        assert len(ax.patches) == 16 + 2
