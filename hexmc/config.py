"""Game-wide constants and validation of user supplied parameters."""

from .errors import BoardSizeError

MIN_BOARD_SIZE = 4
MAX_BOARD_SIZE = 25
DEFAULT_BOARD_SIZE = 7

MIN_TRIALS = 100
DEFAULT_TRIALS = 1000

# Owner values, same encoding as the board arrays: 1 connects left-right, -1 top-bottom.
EMPTY = 0
PLAYER_A = 1
PLAYER_B = -1

PLAYER_SYMBOLS = {EMPTY: ".", PLAYER_A: "X", PLAYER_B: "O"}
PLAYER_PATHS = {PLAYER_A: "left-right", PLAYER_B: "up-down"}


def validate_board_size(size):
    """Returns 'size' as an int or raises BoardSizeError when it is outside the playable range."""
    try:
        size = int(size)
    except (TypeError, ValueError):
        raise BoardSizeError(f"Board size must be an integer, got {size!r}.")
    if not MIN_BOARD_SIZE <= size <= MAX_BOARD_SIZE:
        raise BoardSizeError(f"Board size must be in [{MIN_BOARD_SIZE}, {MAX_BOARD_SIZE}], got {size}.")
    return size


def clamp_trials(num_trials):
    """The interactive game never runs fewer than MIN_TRIALS simulations."""
    return max(MIN_TRIALS, int(num_trials))
