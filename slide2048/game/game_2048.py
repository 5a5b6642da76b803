"""
Core Game Session for 2048.

`Game2048` owns everything one game needs: the grid, the score tracker and the
spawner. There is no module-level state, so any number of sessions can run side
by side (the environment and the baseline agent create one per episode).

A move goes through four steps:
1.  The move engine slides every line (`apply_move`).
2.  If nothing changed the move is rejected: no spawn, no score.
3.  Otherwise the merge gain is added to the score and one tile spawns.
4.  The terminal checks run; reaching the target latches `won` and the move
    that did it is the only one whose result carries `won=True`.

Rendering and input belong to callers (see `slide2048.play`); they read the
returned MoveResult and the session state and react to it.
"""

from slide2048.config import DEFAULT_SIZE, START_TILES, WIN_TILE
from slide2048.game import rules
from slide2048.game.grid import Grid
from slide2048.game.moves import Direction, apply_move
from slide2048.game.score import ScoreTracker
from slide2048.game.spawner import Spawner


class Game2048:
    def __init__(self, size=DEFAULT_SIZE, seed=None, store=None, rng=None, target=WIN_TILE):
        """
        Args:
            size (int): Board width and height.
            seed (int): Seed for the spawner's random generator.
            store: High-score store shared across sessions (in-memory if omitted).
            rng: Replacement random generator for the spawner (tests).
            target (int): Tile value that wins the game.
        """
        self.size = size
        self.target = target
        self.scores = ScoreTracker(store)
        self.spawner = Spawner(rng=rng, seed=seed)
        self.won = False
        self.over = False
        self.restart()

    def restart(self):
        """Starts a fresh game on the same session. The high score is kept."""
        self.grid = Grid(self.size)
        self.scores.reset()
        self.won = False

        for _ in range(START_TILES):
            self.spawner.spawn(self.grid)

        self.over = rules.is_game_over(self.grid)

    @property
    def board(self):
        """The board as an int32 array of values (a copy; 0 for empty)."""
        return self.grid.values()

    @board.setter
    def board(self, values):
        # Replaces the tiles with a given position. The score is untouched and a
        # target tile already on the board latches `won`.
        self.grid = Grid.from_values(values)
        self.size = self.grid.size
        self.won = self.won or rules.is_won(self.grid, self.target)
        self.over = rules.is_game_over(self.grid)

    def move(self, direction):
        """
        Executes a move.

        Side Effects (only when the board changed):
            1. Updates the grid
            2. Updates the score and high score
            3. Spawns a new tile

        Returns:
            MoveResult: `changed`, `score_gained`, `merged_values`, the `spawned`
            tile (or None) and `won` for the move that first reached the target.
        """
        result = apply_move(self.grid, Direction.parse(direction))
        if not result.changed:
            return result

        self.scores.add_score(result.score_gained)
        spawned = self.spawner.spawn(self.grid)

        newly_won = not self.won and rules.is_won(self.grid, self.target)
        if newly_won:
            self.won = True

        self.over = rules.is_game_over(self.grid)
        return result._replace(spawned=spawned, won=newly_won)

    def get_valid_moves(self):
        return rules.valid_moves(self.board)

    def is_move_possible(self, direction):
        return Direction.parse(direction) in self.get_valid_moves()

    def is_game_over(self):
        return rules.is_game_over(self.grid)

    def is_won(self):
        return self.won

    def current_score(self):
        return self.scores.current_score()

    def high_score(self):
        return self.scores.high_score()

    @property
    def score(self):
        return self.scores.current_score()

    def get_max_tile(self):
        return self.grid.max_value()

    def __str__(self):
        """String representation for printing the board."""
        score_str = "Score: {}  Best: {}\n".format(self.current_score(), self.high_score())
        board_str = str(self.board)
        return score_str + board_str


# --- Functional interface for callers that prefer plain functions ---

def init(size=DEFAULT_SIZE, seed=None, store=None, rng=None):
    return Game2048(size=size, seed=seed, store=store, rng=rng)


def move(session, direction):
    return session.move(direction)


def is_game_over(session):
    return session.is_game_over()


def is_won(session):
    return session.is_won()


def current_score(session):
    return session.current_score()
