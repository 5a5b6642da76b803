"""
Interactive terminal shell for 2048.

Maps w/a/s/d onto the four directions, 'r' onto restart and 'q' onto quit, and
prints the session after every command. The high score is kept in a JSON file
between runs.

Usage:
    python -m slide2048.play --size 4 --seed 7
"""

import argparse

from slide2048.config import DEFAULT_SIZE, HIGH_SCORE_FILE, WIN_TILE
from slide2048.game.game_2048 import Game2048
from slide2048.game.score import JsonHighScoreStore

MOVE_MAP = {
    'w': 'up',
    'a': 'left',
    's': 'down',
    'd': 'right',
}


def parse_args(argv=None):
    parser = argparse.ArgumentParser(description="Play 2048 in the terminal.")
    parser.add_argument("--size", type=int, default=DEFAULT_SIZE, help="Board width and height.")
    parser.add_argument("--seed", type=int, default=None, help="Seed for tile spawning.")
    parser.add_argument("--target", type=int, default=WIN_TILE, help="Tile value that wins the game.")
    parser.add_argument(
        "--high-score-file",
        type=str,
        default=HIGH_SCORE_FILE,
        help="JSON file the high score is read from and saved to."
    )
    return parser.parse_args(argv)


def handle_command(game, command):
    """
    Applies one line of user input to the game.

    Returns:
        (bool, list): Whether the shell should keep running, and the messages to print.
    """
    command = command.strip().lower()
    messages = []

    if command == 'q':
        return False, ["Thanks for playing!"]

    if command == 'r':
        game.restart()
        return True, ["New game started."]

    if command not in MOVE_MAP:
        return True, ["Invalid input. Please use w, a, s, d, r or q."]

    if game.over:
        return True, ["Game over. Press 'r' to restart or 'q' to quit."]

    result = game.move(MOVE_MAP[command])
    if not result.changed:
        messages.append("Invalid move. Try another direction.")
    if result.won:
        messages.append(f"Congratulations! You've reached {game.target}! You can keep playing.")
    if game.over:
        messages.append(f"Game Over! Final Score: {game.current_score()}. Press 'r' to restart or 'q' to quit.")

    return True, messages


def main(argv=None):
    args = parse_args(argv)
    store = JsonHighScoreStore(args.high_score_file)
    game = Game2048(size=args.size, seed=args.seed, store=store, target=args.target)

    print("Welcome to 2048!")
    print("Use W (up), A (left), S (down), D (right) to play. R restarts, Q quits.")

    running = True
    while running:
        print(game)
        try:
            command = input("Enter your move (w/a/s/d/r/q): ")
        except EOFError:
            break

        running, messages = handle_command(game, command)
        for message in messages:
            print(message)

    print(f"Best score: {game.high_score()}")


if __name__ == "__main__":
    main()
