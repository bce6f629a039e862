import logging

import matplotlib
matplotlib.use("Agg")
import matplotlib.pyplot as plt
from matplotlib.patches import RegularPolygon

from .config import PLAYER_A, PLAYER_B, PLAYER_SYMBOLS

logger = logging.getLogger(__name__)

# Pointy-top hexagons one unit wide: rows are 0.866 apart and shifted half a cell per row.
HEX_RADIUS = 0.577
ROW_HEIGHT = 0.866
STONE_COLORS = {PLAYER_A: 'tab:blue', PLAYER_B: 'tab:red'}


def cell_centre(row, col):
    return col + 0.5 * row, -row * ROW_HEIGHT


def draw_board(ax, board):
    """
    Draws the cells, the stones with their X/O symbol, the row and column numbers and the
    goal border of each player, labelled with the symbol of the player who has to reach it.
    """
    size = len(board)
    last = size - 1
    for r in range(size):
        for c in range(size):
            x, y = cell_centre(r, c)
            ax.add_patch(RegularPolygon((x, y), numVertices=6, radius=HEX_RADIUS,
                                        edgecolor='k', facecolor='lightgray'))
            owner = board[r][c]
            if owner in STONE_COLORS:
                ax.add_patch(plt.Circle((x, y), 0.3, color=STONE_COLORS[owner], ec='black'))
                ax.text(x, y, PLAYER_SYMBOLS[owner], ha='center', va='center', color='white', fontweight='bold')

    for k in range(size):
        x, y = cell_centre(0, k)
        ax.text(x, y + 0.8, str(k), ha='center', va='center', fontsize=8)
        x, y = cell_centre(k, 0)
        ax.text(x - 0.8, y, str(k), ha='center', va='center', fontsize=8)

    # X joins the left and right sides, O the top and bottom rows.
    sides = [
        (cell_centre(0, 0), cell_centre(last, 0), -1.3, 0.0, PLAYER_A),
        (cell_centre(0, last), cell_centre(last, last), 1.3, 0.0, PLAYER_A),
        (cell_centre(0, 0), cell_centre(0, last), 0.0, 1.3, PLAYER_B),
        (cell_centre(last, 0), cell_centre(last, last), 0.0, -1.3, PLAYER_B),
    ]
    for (x0, y0), (x1, y1), dx, dy, player in sides:
        ax.plot([x0 + dx, x1 + dx], [y0 + dy, y1 + dy], color=STONE_COLORS[player], linewidth=3)
        ax.text((x0 + x1) / 2 + 1.4 * dx, (y0 + y1) / 2 + 1.4 * dy, PLAYER_SYMBOLS[player],
                ha='center', va='center', color=STONE_COLORS[player], fontsize=14, fontweight='bold')

    ax.set_aspect('equal')
    ax.autoscale_view()
    ax.axis('off')
    return ax


def plot_board_state(board, filename="hex_board.png"):
    """Saves a visual representation of a Hex board state to a file."""
    fig, ax = plt.subplots(figsize=(8, 8))
    draw_board(ax, board)
    plt.savefig(filename, bbox_inches='tight')
    plt.close(fig)
    logger.info("Board state saved to %s", filename)
    return filename


def plot_tournament_results(results_df, title, filename):
    """Bar chart of the win rate against every opponent."""
    fig = plt.figure(figsize=(10, 6))
    plt.bar(results_df['opponent'], results_df['win_rate'] * 100, color=['#66b3ff', '#99ff99', '#ffcc99', '#ff9999'][:len(results_df)])
    plt.ylabel('Win Rate (%)')
    plt.xlabel('Opponent')
    plt.title(title)
    plt.ylim(0, 100)
    for index, value in enumerate(results_df['win_rate'] * 100):
        plt.text(index, value + 1, f"{value:.1f}%", ha='center')
    plt.savefig(filename)
    plt.close(fig)
    logger.info("Tournament results plot saved to %s", filename)
    return filename
