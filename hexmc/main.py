import argparse
import logging
import sys
import time
from datetime import datetime

from .config import (DEFAULT_BOARD_SIZE, DEFAULT_TRIALS, MAX_BOARD_SIZE, MIN_BOARD_SIZE, MIN_TRIALS,
                     PLAYER_A, PLAYER_B, PLAYER_PATHS, PLAYER_SYMBOLS, clamp_trials, validate_board_size)
from .errors import BoardSizeError, HexError
from .hex_engine import new_board
from .monte_carlo import MonteCarloSelector
from .plotting import plot_board_state

logger = logging.getLogger(__name__)


def parse_board_size(text):
    """Returns the board size typed by the user, or None if it is not a playable size."""
    try:
        return validate_board_size(text.strip())
    except BoardSizeError:
        return None


def parse_trials(text):
    """Number of simulations typed by the user: 1000 when it is not a number, never below 100."""
    try:
        num_trials = clamp_trials(float(text.strip()))
    except (ValueError, OverflowError):
        print(f"Not a number -> default value chosen ({DEFAULT_TRIALS})")
        return DEFAULT_TRIALS
    if float(text) < MIN_TRIALS:
        logger.warning("Simulations raised from %s to %s", text.strip(), num_trials)
    return num_trials


def parse_move(text):
    """Parses 'row col' or 'row,col' into a tuple of ints, None if the input is malformed."""
    parts = text.replace(",", " ").split()
    if len(parts) != 2:
        return None
    try:
        return int(parts[0]), int(parts[1])
    except ValueError:
        return None


def parse_player(text):
    """'x' or 'X' selects the opening player, anything else the second one."""
    return PLAYER_A if text.strip().lower() == "x" else PLAYER_B


def ask_board_size(input_func=input):
    while True:
        size = parse_board_size(input_func(f"Please enter number of rows in range [{MIN_BOARD_SIZE}-{MAX_BOARD_SIZE}]: "))
        if size is not None:
            return size
        print("please, enter valid number")


def ask_human_move(game, input_func=input):
    """
    Prompts until the human enters a legal cell. Returns the coordinates, or None after a board snapshot was saved.
    """
    symbol = PLAYER_SYMBOLS[game.player]
    while True:
        text = input_func(f"Player {symbol}, path {PLAYER_PATHS[game.player]}, please enter 'row col' or 's' to save board: ")
        if text.strip().lower() == 's':
            filename = f"board_snapshot_{datetime.now().strftime('%Y%m%d_%H%M%S')}.png"
            plot_board_state(game.board, filename)
            print(f"Board state saved to {filename}")
            return None
        move = parse_move(text)
        if move is None:
            print("Wrong input type, please enter only numbers (row col).")
            continue
        if not game.grid.contains(*move):
            print(f"Illegal position, {symbol} please play again")
            continue
        if game.ownership[game.grid.index(*move)] != 0:
            print(f"Illegal position, {symbol} please play again")
            continue
        return move


def play_game(size, human_vs_human=False, human_player=PLAYER_A, num_trials=DEFAULT_TRIALS,
              seed=None, workers=1, input_func=input):
    """
    Runs an interactive game in the terminal and returns the winner ('0' for a draw).

    On the first move of a human-vs-machine game either side may take over the opening stone:
    if the human opens in the centre the machine swaps sides, and if the machine opens the human is offered the swap.
    """
    game = new_board(size)
    selector = None if human_vs_human else MonteCarloSelector(game.grid, seed=seed, workers=workers)
    print(f"First player is {PLAYER_SYMBOLS[PLAYER_A]} ({PLAYER_PATHS[PLAYER_A]})")
    print(f"Second player is {PLAYER_SYMBOLS[PLAYER_B]} ({PLAYER_PATHS[PLAYER_B]})\n")
    game.print()

    while game.winner == 0 and not game.is_full():
        symbol = PLAYER_SYMBOLS[game.player]
        print(f"Iteration number {game.game_it}")
        if human_vs_human or game.player == human_player:
            move = ask_human_move(game, input_func)
            if move is None:
                continue
            if not human_vs_human and game.game_it == 0 and move == (size // 2, size // 2):
                human_player = -human_player
                print("The machine has taken your position!")
        else:
            print("Simulation running, please wait...")
            start = time.perf_counter()
            move = game.recommend_move(game.player, num_trials, selector=selector)
            print(f"Machine thought for {(time.perf_counter() - start) * 1000.0:.0f} ms")
            if game.game_it == 0:
                print(f"The machine has played ({move[0]},{move[1]}).")
                answer = input_func("Would you like to take his position? y(yes), n(no): ")
                if answer.strip().lower() == "y":
                    human_player = -human_player
                    print("The human has taken the machine's position")
        game.apply_move(*move)
        print(f"Player {symbol} has played ({move[0]},{move[1]})")
        game.print()

    if game.winner != 0:
        print(f"Game over, player {PLAYER_SYMBOLS[game.winner]} wins!")
    else:
        print("Game over, draw game")
    return game.winner


def main(args, input_func=input):
    """The main entry point of the application."""
    logging.basicConfig(level=logging.INFO if args.verbose else logging.WARNING,
                        format="%(asctime)s %(name)s %(levelname)s: %(message)s")
    try:
        if args.mode == 'play':
            size = args.board_size if args.board_size is not None else ask_board_size(input_func)
            size = validate_board_size(size)
            print(f"Hex dimension {size}")
            human_player = PLAYER_A
            num_trials = DEFAULT_TRIALS
            if args.human_vs_human:
                print("Human Vs Human\n")
            else:
                print("Human Vs machine\n")
                if args.first_player is None:
                    human_player = parse_player(input_func("For X please enter 'x' or 'X', for O enter 'O' or any other input: "))
                else:
                    human_player = parse_player(args.first_player)
                if args.simulations is None:
                    num_trials = parse_trials(input_func(f"Please enter number of montecarlo simulations (min={MIN_TRIALS}, default={DEFAULT_TRIALS}): "))
                else:
                    num_trials = parse_trials(args.simulations)
                print(f"User has chosen {num_trials} Monte Carlo simulations")
            return play_game(size, args.human_vs_human, human_player, num_trials,
                             seed=args.seed, workers=args.workers, input_func=input_func)
        elif args.mode == 'tournament':
            from .tournament import run_tournament
            args.board_size = validate_board_size(args.board_size if args.board_size is not None else DEFAULT_BOARD_SIZE)
            args.simulations = DEFAULT_TRIALS if args.simulations is None else parse_trials(args.simulations)
            return run_tournament(args)
        else:
            print(f"FATAL: Unknown mode '{args.mode}'.")
            sys.exit(1)
    except HexError as e:
        print(f"FATAL: {e}")
        sys.exit(1)


def build_parser():
    parser = argparse.ArgumentParser(description="Hex with a Monte Carlo move recommendation AI.")

    # Core settings
    parser.add_argument("--mode", type=str, default="play", choices=["play", "tournament"],
                        help="The mode to run the script in.")
    parser.add_argument("--board-size", type=int, default=None,
                        help=f"Size of the Hex board, in [{MIN_BOARD_SIZE}, {MAX_BOARD_SIZE}]. Asked interactively in play mode if omitted.")
    parser.add_argument("--verbose", action="store_true", help="Log recommendation timings.")

    # Game settings
    parser.add_argument("--human-vs-human", action="store_true", help="Two humans play, the machine stays idle.")
    parser.add_argument("--first-player", type=str, default=None,
                        help="Symbol of the human player ('x' opens, anything else plays second).")

    # Monte Carlo settings
    parser.add_argument("--simulations", type=str, default=None,
                        help=f"Number of Monte Carlo simulations per move (min {MIN_TRIALS}, default {DEFAULT_TRIALS}). Asked interactively in play mode if omitted.")
    parser.add_argument("--seed", type=int, default=None, help="Seed of the Monte Carlo random generator.")
    parser.add_argument("--workers", type=int, default=1, help="Processes used to run the simulations.")

    # Tournament settings
    tournament_group = parser.add_argument_group('Tournament')
    tournament_group.add_argument("--test-episodes", type=int, default=20, help="Number of games to play against each opponent.")
    tournament_group.add_argument("--opponent", type=str, default=None, choices=["random", "mc"],
                                  help="Single opponent to play; defaults to all of them.")
    tournament_group.add_argument("--opponent-simulations", type=int, default=DEFAULT_TRIALS // 10,
                                  help="Simulations per move of the Monte Carlo opponent.")
    tournament_group.add_argument("--output-prefix", type=str, default="tournament_results",
                                  help="Path prefix of the CSV and PNG tournament outputs.")
    return parser


def cli():
    main(build_parser().parse_args())


if __name__ == '__main__':
    cli()
