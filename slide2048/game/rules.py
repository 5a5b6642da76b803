"""
Terminal-state checks: win (target tile reached) and game over (no legal move).
"""

from slide2048.config import WIN_TILE
from slide2048.game.moves import Direction, preview_move


def is_won(grid, target=WIN_TILE):
    return any(tile.value == target for tile in grid.tiles())


def is_game_over(grid):
    """True if the board is full and no two neighbours share a value."""
    if grid.empty_cells():
        return False

    size = grid.size
    for r in range(size):
        for c in range(size):
            value = grid.cell_at(r, c).value
            # Only look right and down; the last column/row has no neighbour there.
            if c + 1 < size and grid.cell_at(r, c + 1).value == value:
                return False
            if r + 1 < size and grid.cell_at(r + 1, c).value == value:
                return False

    return True


def valid_moves(values):
    """Returns the directions that would change the given value board."""
    return [direction for direction in Direction if preview_move(values, direction)[2]]
