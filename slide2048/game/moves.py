"""
Move Engine for 2048.

Every direction is reduced to one primitive: slide a line toward index 0.
Rows are read left-to-right for LEFT and right-to-left for RIGHT, columns
top-to-bottom for UP and bottom-to-top for DOWN, so the same line routine
handles all four moves.

Two implementations of that primitive live here:
1.  `slide_line` works on Tile objects and is what a real move uses. Tiles keep
    their identity through the slide and carry the per-move `merged` flag.
2.  `slide_values` is a Numba-compiled version over plain int arrays. It never
    touches tiles or spawns, so it is used to preview moves (valid move lists,
    the environment's action mask) without mutating a session.
"""

from enum import IntEnum
from typing import NamedTuple, Optional, Tuple

import numpy as np
from numba import njit

from slide2048.game.grid import Tile


class Direction(IntEnum):
    # Integer values double as the environment's action indices.
    UP = 0
    RIGHT = 1
    DOWN = 2
    LEFT = 3

    @classmethod
    def parse(cls, value):
        """Accepts a Direction, an action index or a name like 'left'."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                raise ValueError(f"Unknown direction: {value!r}") from None
        # bool is an int subclass, floats would be truncated
        if isinstance(value, (int, np.integer)) and not isinstance(value, (bool, np.bool_)):
            try:
                return cls(int(value))
            except ValueError:
                pass
        raise ValueError(f"Unknown direction: {value!r}")


class MoveResult(NamedTuple):
    changed: bool
    score_gained: int
    merged_values: Tuple[int, ...] = ()
    spawned: Optional[Tile] = None
    won: bool = False


def line_coordinates(size, direction):
    """
    Returns one list of (row, col) pairs per line, ordered so that index 0 is
    the cell tiles slide toward.
    """
    indices = list(range(size))
    backwards = indices[::-1]

    if direction == Direction.LEFT:
        return [[(r, c) for c in indices] for r in indices]
    if direction == Direction.RIGHT:
        return [[(r, c) for c in backwards] for r in indices]
    if direction == Direction.UP:
        return [[(r, c) for r in indices] for c in indices]
    return [[(r, c) for r in backwards] for c in indices]


def slide_line(cells):
    """
    Compacts and merges one line of cells toward index 0.

    Args:
        cells (list): Tiles or None, slide target first.

    Returns:
        (list, list): The new line (padded with None) and the value of every
        merge made, in order.

    A merge needs equal values and neither tile already merged this move, and
    the scan never looks back at the tile it just produced:
    [2, 2, 2] -> [4, 2], [2, 2, 2, 2] -> [4, 4].
    """
    line = [tile for tile in cells if tile is not None]
    merged_values = []

    i = 0
    while i < len(line) - 1:
        current, following = line[i], line[i + 1]
        if current.value == following.value and not current.merged and not following.merged:
            current.value *= 2
            current.merged = True
            merged_values.append(current.value)
            del line[i + 1]
        i += 1

    line.extend([None] * (len(cells) - len(line)))
    return line, merged_values


def _line_values(cells):
    return [tile.value if tile is not None else 0 for tile in cells]


def apply_move(grid, direction):
    """
    Slides every line of `grid` in `direction`, in place.

    No spawning and no score bookkeeping happen here; the session does both
    based on the returned MoveResult.
    """
    direction = Direction.parse(direction)

    for tile in grid.tiles():
        tile.merged = False

    changed = False
    merged_values = []

    for coords in line_coordinates(grid.size, direction):
        before = [grid.cell_at(r, c) for r, c in coords]
        before_values = _line_values(before)

        after, line_merges = slide_line(before)

        for (r, c), tile in zip(coords, after):
            grid.set_cell(r, c, tile)

        if _line_values(after) != before_values:
            changed = True
        merged_values.extend(line_merges)

    return MoveResult(changed, sum(merged_values), tuple(merged_values))


@njit(fastmath=True)
def slide_values(section):
    """
    Value-only slide of a 1D int array toward index 0.

    Same rules as `slide_line`: [2, 2, 4, 4] -> [4, 8, 0, 0], [2, 0, 2, 2] -> [4, 2, 0, 0].

    Returns:
        (np.array, int): The new line and the score gained.
    """
    length = section.shape[0]
    temp = np.zeros(length, dtype=np.int32)

    # Compress: drop the gaps
    count = 0
    for i in range(length):
        if section[i] != 0:
            temp[count] = section[i]
            count += 1

    # Merge: each output cell consumes one or two inputs
    result = np.zeros(length, dtype=np.int32)
    score = 0
    write_idx = 0
    read_idx = 0

    while read_idx < count:
        current_val = temp[read_idx]

        if read_idx + 1 < count and temp[read_idx + 1] == current_val:
            merged_val = current_val * 2
            result[write_idx] = merged_val
            score += merged_val
            read_idx += 2
        else:
            result[write_idx] = current_val
            read_idx += 1

        write_idx += 1

    return result, score


# Counter-clockwise quarter turns that point each direction at index 0 of a row.
_ROTATIONS = {Direction.UP: 1, Direction.RIGHT: 2, Direction.DOWN: 3, Direction.LEFT: 0}


def preview_move(values, direction):
    """
    Computes a move on a plain value board without mutating anything.

    Args:
        values (np.ndarray): Square board of tile values, 0 for empty.
        direction: Direction, action index or name.

    Returns:
        (np.ndarray, int, bool): The new board, score gained, and whether the board changed.
    """
    board = np.asarray(values, dtype=np.int32)
    k = _ROTATIONS[Direction.parse(direction)]

    rotated_board = np.rot90(board, k=k)
    temp_board = np.zeros_like(rotated_board)
    move_score = 0

    for r in range(rotated_board.shape[0]):
        new_row, row_score = slide_values(np.ascontiguousarray(rotated_board[r]))
        temp_board[r] = new_row
        move_score += row_score

    final_board = np.rot90(temp_board, k=-k)
    board_changed = not np.array_equal(board, final_board)

    return np.ascontiguousarray(final_board), int(move_score), board_changed
