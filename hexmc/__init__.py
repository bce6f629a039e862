from .board_graph import Graph, HexBoard
from .config import EMPTY, PLAYER_A, PLAYER_B
from .connectivity import ConnectivityChecker, SearchScratch
from .errors import BoardSizeError, HexError, InvariantViolation, RandomSourceError
from .hex_engine import MoveResult, hexPosition, new_board
from .monte_carlo import MonteCarloSelector

__version__ = "0.1.0"
