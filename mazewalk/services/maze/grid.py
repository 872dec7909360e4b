from enum import IntEnum
from typing import List, NamedTuple


class Cell(IntEnum):
    PATH = 0
    OBSTACLE = 1
    GOAL = 2
    START_MARKER = 3


class Position(NamedTuple):
    """A grid coordinate. ``x`` is the column and ``y`` the row."""
    x: int
    y: int


Grid = List[List[int]]

START = Position(0, 0)


def goal_of(grid: Grid) -> Position:
    n = len(grid)
    return Position(n - 1, n - 1)


def cell_at(grid: Grid, position: Position) -> Cell:
    return Cell(grid[position.y][position.x])


def count_cells(grid: Grid, cell: Cell) -> int:
    return sum(1 for row in grid for value in row if value == cell)


def cell_codes() -> dict:
    return {c.name.lower(): int(c) for c in Cell}
