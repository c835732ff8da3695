from __future__ import annotations

import random
from dataclasses import dataclass
from enum import StrEnum

from merge2048.modes import Mode


BOARD_SIZE = 4

Board = list[list[int]]


class Direction(StrEnum):
    up = "up"
    down = "down"
    left = "left"
    right = "right"


@dataclass(frozen=True, slots=True)
class LineCollapse:
    line: list[int]
    gained: int


@dataclass(frozen=True, slots=True)
class MoveOutcome:
    """Result of sliding a board; `board` is a fresh copy, the input is never touched."""

    board: Board
    gained: int
    moved: bool


def empty_board(size: int = BOARD_SIZE) -> Board:
    return [[0] * size for _ in range(size)]


def copy_board(board: Board) -> Board:
    return [list(row) for row in board]


def empty_cells(board: Board) -> list[tuple[int, int]]:
    return [(r, c) for r, row in enumerate(board) for c, value in enumerate(row) if value == 0]


def collapse_line(line: list[int], mode: Mode) -> LineCollapse:
    """Compact a line toward index 0, merging each eligible pair at most once."""

    size = len(line)
    values = [v for v in line if v != 0]
    merged: list[int] = []
    gained = 0

    i = 0
    while i < len(values):
        current = values[i]
        if i + 1 < len(values) and mode.can_merge(current, values[i + 1]):
            result = mode.merge_result(current, values[i + 1])
            merged.append(result)
            gained += result
            i += 2
        else:
            merged.append(current)
            i += 1

    merged.extend([0] * (size - len(merged)))
    return LineCollapse(line=merged, gained=gained)


def slide(board: Board, direction: Direction, mode: Mode) -> MoveOutcome:
    size = len(board)
    new_board = empty_board(size)
    gained = 0
    moved = False
    reverse = direction in (Direction.right, Direction.down)

    for k in range(size):
        if direction in (Direction.left, Direction.right):
            original = list(board[k])
        else:
            original = [board[r][k] for r in range(size)]

        line = original[::-1] if reverse else original
        collapsed = collapse_line(line, mode)
        final = collapsed.line[::-1] if reverse else collapsed.line
        gained += collapsed.gained

        if final != original:
            moved = True

        if direction in (Direction.left, Direction.right):
            new_board[k] = final
        else:
            for r in range(size):
                new_board[r][k] = final[r]

    return MoveOutcome(board=new_board, gained=gained, moved=moved)


def spawn_tile(board: Board, mode: Mode, rng: random.Random) -> tuple[int, int, int] | None:
    """Place one tile from the mode's distribution into a random empty cell (in place).

    Returns (row, col, value), or None when the board is full.
    """

    cells = empty_cells(board)
    if not cells:
        return None
    r, c = cells[rng.randrange(len(cells))]
    value = mode.spawn_value(rng)
    board[r][c] = value
    return r, c, value


def is_game_over(board: Board, mode: Mode) -> bool:
    size = len(board)
    for r in range(size):
        for c in range(size):
            value = board[r][c]
            if value == 0:
                return False
            if r < size - 1 and mode.can_merge(value, board[r + 1][c]):
                return False
            if c < size - 1 and mode.can_merge(value, board[r][c + 1]):
                return False
    return True
