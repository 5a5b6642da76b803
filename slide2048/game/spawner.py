"""
Tile Spawner.

Places a new tile on a random empty cell after every move that changed the
board. The random generator is the engine's only source of randomness, so a
seeded (or fake) `rng` makes whole games reproducible.
"""

import numpy as np

from slide2048.config import SPAWN_PROBABILITIES, SPAWN_VALUES


class Spawner:
    def __init__(self, rng=None, seed=None):
        """
        Args:
            rng: Anything with numpy Generator's `integers(n)` and `random()`.
                 Defaults to `np.random.default_rng(seed)`.
            seed (int): Seed for the default generator.
        """
        self.rng = rng if rng is not None else np.random.default_rng(seed)

    def reseed(self, seed):
        self.rng = np.random.default_rng(seed)

    def _pick_value(self):
        # 90% chance of a 2, 10% chance of a 4
        return SPAWN_VALUES[0] if self.rng.random() < SPAWN_PROBABILITIES[0] else SPAWN_VALUES[1]

    def spawn(self, grid):
        """
        Adds one tile to a uniformly chosen empty cell.

        Returns:
            Tile or None: The new tile, or None when the board is full.
        """
        # Sorted so the same seed always maps to the same cell.
        empty_cells = sorted(grid.empty_cells())
        if not empty_cells:
            return None

        row, col = empty_cells[int(self.rng.integers(len(empty_cells)))]
        return self.place(grid, row, col, self._pick_value())

    def place(self, grid, row, col, value):
        """Puts a tile with a fixed value on (row, col), replacing whatever was there."""
        tile = grid.new_tile(value, row, col)
        grid.set_cell(row, col, tile)
        return tile
