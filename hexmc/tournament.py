import logging

import pandas as pd
from tqdm import trange

from .agents import MonteCarloAgent, RandomAgent
from .config import PLAYER_A, PLAYER_B
from .hex_engine import new_board
from .plotting import plot_tournament_results

logger = logging.getLogger(__name__)

OPPONENT_TYPES = ["random", "mc"]


def load_player_func(agent_type, num_trials, seed=None, workers=1):
    """Builds an agent and returns it as a (board, action_set, player) callable."""
    if agent_type == 'random':
        agent = RandomAgent(seed=seed)
    elif agent_type == 'mc':
        agent = MonteCarloAgent(num_trials=num_trials, seed=seed, workers=workers)
    else:
        raise ValueError(f"Unknown agent type: {agent_type}")
    return agent.select_move


def play_match(env, p1_func, p2_func, episodes, desc):
    """
    Plays 'episodes' games with P1 as X and as many with P1 as O.
    Returns (wins as X, wins as O, draws).
    """
    wins_as_x = wins_as_o = draws = 0
    for _ in trange(episodes, desc=f"{desc} (P1 as X)"):
        winner = env.machine_vs_machine_silent(machine1=p1_func, machine2=p2_func)
        if winner == PLAYER_A:
            wins_as_x += 1
        elif winner == 0:
            draws += 1
    for _ in trange(episodes, desc=f"{desc} (P1 as O)"):
        winner = env.machine_vs_machine_silent(machine1=p2_func, machine2=p1_func)
        if winner == PLAYER_B:
            wins_as_o += 1
        elif winner == 0:
            draws += 1
    return wins_as_x, wins_as_o, draws


def run_tournament(args):
    """Plays the Monte Carlo agent against each opponent and saves a CSV and a bar chart of the win rates."""
    env = new_board(args.board_size)
    print(f"Board Size: {args.board_size}x{args.board_size}\nSimulations: {args.simulations}\n---------------------")

    p1_func = load_player_func('mc', args.simulations, seed=args.seed, workers=args.workers)
    opponents = [args.opponent] if args.opponent else OPPONENT_TYPES
    episodes = max(1, args.test_episodes // 2)

    all_results = []
    for index, opponent in enumerate(opponents, start=1):
        print(f"\n--- Starting Match vs {opponent.upper()} ---")
        opponent_seed = None if args.seed is None else args.seed + index
        p2_func = load_player_func(opponent, args.opponent_simulations, seed=opponent_seed, workers=args.workers)
        wins_as_x, wins_as_o, draws = play_match(env, p1_func, p2_func, episodes, f"MC vs {opponent.upper()}")

        total_wins = wins_as_x + wins_as_o
        win_rate = total_wins / (2 * episodes)
        print(f"P1 Wins as X: {wins_as_x}/{episodes}")
        print(f"P1 Wins as O: {wins_as_o}/{episodes}")
        print(f"Result vs {opponent.upper()}: {total_wins}/{2 * episodes} ({win_rate:.2%})")
        all_results.append({
            'opponent': opponent.upper(),
            'wins_as_x': wins_as_x,
            'wins_as_o': wins_as_o,
            'draws': draws,
            'total_wins': total_wins,
            'win_rate': win_rate
        })

    results_df = pd.DataFrame(all_results)
    results_df.to_csv(f'{args.output_prefix}.csv', index=False)
    logger.info("Tournament results saved to %s.csv", args.output_prefix)
    title = f"MC ({args.simulations} simulations) vs opponents ({2 * episodes} games each)"
    plot_tournament_results(results_df, title, f'{args.output_prefix}.png')
    return results_df
