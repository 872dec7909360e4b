from enum import Enum

from .grid import Cell, Grid, Position, cell_at


class MoveOutcome(str, Enum):
    ACCEPTED = 'accepted'
    OUT_OF_BOUNDS = 'out_of_bounds'
    OBSTACLE = 'obstacle'
    ILLEGAL_STEP = 'illegal_step'


def validate(grid: Grid, current: Position, target: Position) -> MoveOutcome:
    """Decide whether stepping from ``current`` to ``target`` is legal.

    Checks run bounds, then obstacle, then step shape; the first failure wins.
    """
    n = len(grid)
    if not (0 <= target.x < n and 0 <= target.y < n):
        return MoveOutcome.OUT_OF_BOUNDS
    if cell_at(grid, target) is Cell.OBSTACLE:
        return MoveOutcome.OBSTACLE
    dx = abs(target.x - current.x)
    dy = abs(target.y - current.y)
    if not ((dx == 1 and dy == 0) or (dx == 0 and dy == 1)):
        return MoveOutcome.ILLEGAL_STEP
    return MoveOutcome.ACCEPTED
