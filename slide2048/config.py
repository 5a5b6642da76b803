"""
Game Configuration for slide2048.

Central place for the rule constants shared by the engine, the terminal shell,
the gymnasium environment and the baseline agent. Command-line entry points
override a few of these through argparse flags (board size, target tile,
high-score file).
"""

import os

# --- Board ---
DEFAULT_SIZE = 4
MIN_SIZE = 2

# Number of tiles placed on a fresh board.
START_TILES = 2

# The objective tile. Reaching it latches the session's `won` flag.
WIN_TILE = 2048

# --- Spawner ---
# New tiles are a 2 ninety percent of the time, otherwise a 4.
SPAWN_VALUES = (2, 4)
SPAWN_PROBABILITIES = (0.9, 0.1)

# --- High Score Persistence ---
# JSON file used by the terminal shell; override with --high-score-file.
HIGH_SCORE_FILE = os.path.join(os.path.expanduser("~"), ".slide2048", "high_score.json")

# --- Agents / Environment ---
# Safety cap so a broken agent can never loop forever.
MAX_STEPS_PER_GAME = 10_000

# Action index -> direction name, shared by the environment and agents.
ACTION_NAMES = ("up", "right", "down", "left")
