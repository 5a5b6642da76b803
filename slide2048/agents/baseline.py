"""
Random Baseline Agent for 2048.

Picks a uniformly random move among the ones that would change the board and
plays until the game is over (or won). Useful as a lower bound when comparing
strategies and as an end-to-end smoke run of the engine.

Usage:
    python -m slide2048.agents.baseline --n_games 100 --seed 0
"""

import argparse
import random
import time

import numpy as np
from tqdm import tqdm

from slide2048.config import DEFAULT_SIZE, MAX_STEPS_PER_GAME, WIN_TILE
from slide2048.game.game_2048 import Game2048


class RandomBaselineAgent:

    def __init__(self, seed=None):
        self.rng = random.Random(seed)

    def choose_action(self, game):
        '''
        Picks a random valid direction, or None when no move is left.
        '''
        valid_actions = game.get_valid_moves()
        return self.rng.choice(valid_actions) if valid_actions else None


def play_game(agent, game=None, print_board=False, delay=0.0,
              max_steps=MAX_STEPS_PER_GAME, stop_on_win=True):
    '''
    Plays one game with the given agent until there are no valid moves,
    the target tile is reached (if `stop_on_win`) or `max_steps` is hit.

    Returns:
        dict: score, max_tile, won and steps for the finished game.
    '''
    if game is None:
        game = Game2048()

    steps = 0
    while not game.is_game_over() and steps < max_steps:
        if print_board:
            print(game)
            print("-" * 20)
            time.sleep(delay)

        action = agent.choose_action(game)
        if action is None:
            break

        result = game.move(action)
        steps += 1

        if result.won:
            if print_board:
                print(f"Congrats, Agent reached the {game.target} tile!")
            if stop_on_win:
                break

    if print_board:
        print("Final Board:")
        print(game)
        print("=" * 30)

    return {
        "score": game.current_score(),
        "max_tile": game.get_max_tile(),
        "won": game.is_won(),
        "steps": steps
    }


def evaluate(agent, n_games=10, size=DEFAULT_SIZE, seed=None, target=WIN_TILE, show_progress=True):
    '''
    Plays `n_games` fresh games and aggregates their results.

    Game i is seeded with `seed + i` when a seed is given, so a run is reproducible.
    '''
    all_scores = []
    all_max_tiles = []
    wins = 0

    for i in tqdm(range(n_games), disable=not show_progress):
        game_seed = None if seed is None else seed + i
        game = Game2048(size=size, seed=game_seed, target=target)
        stats = play_game(agent, game=game)

        all_scores.append(stats["score"])
        all_max_tiles.append(stats["max_tile"])
        if stats["won"]:
            wins += 1

    return {
        "avg_score": float(np.mean(all_scores)),
        "avg_max_tile": float(np.mean(all_max_tiles)),
        "win_rate": wins / n_games,
        "best_score": int(np.max(all_scores)),
        "highest_max_tile": int(np.max(all_max_tiles))
    }


def main(argv=None):
    parser = argparse.ArgumentParser(description="Runs the random baseline agent on 2048.")
    parser.add_argument("--n_games", type=int, default=10, help="How many games to play.")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Board width and height.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for agent and spawns.")
    parser.add_argument("--target", type=int, default=WIN_TILE, help="Tile value that wins the game.")
    parser.add_argument("--print_board", action="store_true", help="Print every board (plays one game).")
    parser.add_argument("--delay", type=float, default=0.2, help="Seconds between printed boards.")
    args = parser.parse_args(argv)

    agent = RandomBaselineAgent(seed=args.seed)

    if args.print_board:
        game = Game2048(size=args.size, seed=args.seed, target=args.target)
        stats = play_game(agent, game=game, print_board=True, delay=args.delay)
        print(f"Final Score: {stats['score']}")
        return

    print(f"*** Starting Baseline Evaluation ***")
    print(f"Size: {args.size}, Games: {args.n_games}, Seed: {args.seed}\n")

    results = evaluate(agent, n_games=args.n_games, size=args.size, seed=args.seed, target=args.target)

    print("Avg Score:", results["avg_score"])
    print("Avg Max Tile:", results["avg_max_tile"])
    print("Win Rate:", results["win_rate"])
    print("Best Score:", results["best_score"])
    print("Highest Max Tile:", results["highest_max_tile"])


if __name__ == "__main__":
    main()
