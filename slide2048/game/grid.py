"""
Grid State for 2048.

The board is a square numpy array of Python objects: each cell either holds a
`Tile` or `None`. The grid only stores tiles and guards coordinates; sliding,
spawning and terminal checks live in their own modules and operate on it.
"""

import itertools

import numpy as np

from slide2048.config import MIN_SIZE


class OutOfBoundsError(IndexError):
    """Raised when a coordinate falls outside the board. Always a caller bug."""

    def __init__(self, row, col, size):
        super().__init__(f"Cell ({row}, {col}) is outside a {size}x{size} grid")
        self.row = row
        self.col = col
        self.size = size


def is_power_of_two(value):
    return value >= 2 and (value & (value - 1)) == 0


class Tile:
    """
    An occupant of one grid cell.

    Two tiles with the same value are still different tiles: `id` is unique
    within the tile's grid and `merged` marks a tile that already absorbed
    another one during the current move. The move engine clears `merged` at
    the top of every move.
    """

    __slots__ = ("id", "value", "row", "col", "merged")

    def __init__(self, tile_id, value, row, col):
        self.id = tile_id
        self.value = value
        self.row = row
        self.col = col
        self.merged = False

    @property
    def position(self):
        return self.row, self.col

    def __repr__(self):
        return f"Tile(id={self.id}, value={self.value}, position=({self.row}, {self.col}))"


class Grid:
    def __init__(self, size):
        if size < MIN_SIZE:
            raise ValueError(f"Grid size must be at least {MIN_SIZE}, got {size}")
        self.size = size
        self.cells = np.empty((size, size), dtype=object)
        self._tile_ids = itertools.count(1)

    def new_tile(self, value, row, col):
        """Creates a tile with the next id of this grid. It is not placed yet."""
        return Tile(next(self._tile_ids), value, row, col)

    @classmethod
    def from_values(cls, rows):
        """
        Builds a grid from a square nested list (or array) of ints, 0 meaning empty.

        Used to restore a board and to set up positions in tests.
        """
        values = np.asarray(rows, dtype=np.int64)
        if values.ndim != 2 or values.shape[0] != values.shape[1]:
            raise ValueError(f"Expected a square board, got shape {values.shape}")

        grid = cls(values.shape[0])
        for (row, col), value in np.ndenumerate(values):
            value = int(value)
            if value == 0:
                continue
            if not is_power_of_two(value):
                raise ValueError(f"Tile value {value} at ({row}, {col}) is not a power of two")
            grid.set_cell(row, col, grid.new_tile(value, row, col))
        return grid

    def _check_bounds(self, row, col):
        # numpy would silently wrap negative indices
        if not (0 <= row < self.size and 0 <= col < self.size):
            raise OutOfBoundsError(row, col, self.size)

    def cell_at(self, row, col):
        self._check_bounds(row, col)
        return self.cells[row, col]

    def set_cell(self, row, col, tile):
        """Stores `tile` (or None to clear) and keeps the tile's position in sync."""
        self._check_bounds(row, col)
        self.cells[row, col] = tile
        if tile is not None:
            tile.row = row
            tile.col = col

    def empty_cells(self):
        return {
            (row, col)
            for row in range(self.size)
            for col in range(self.size)
            if self.cells[row, col] is None
        }

    def tiles(self):
        """Yields occupied cells' tiles in row-major order."""
        for row in range(self.size):
            for col in range(self.size):
                tile = self.cells[row, col]
                if tile is not None:
                    yield tile

    def values(self):
        """Returns the board as an int32 array of tile values (0 for empty)."""
        board = np.zeros((self.size, self.size), dtype=np.int32)
        for tile in self.tiles():
            board[tile.row, tile.col] = tile.value
        return board

    def max_value(self):
        return max((tile.value for tile in self.tiles()), default=0)

    def __str__(self):
        return str(self.values())
