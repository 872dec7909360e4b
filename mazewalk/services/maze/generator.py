import logging
import math

from .errors import InvalidDimension
from .grid import Cell, Grid
from .random_source import RandomSource

logger = logging.getLogger(__name__)

# Peak per-cell obstacle probability during the row-major scan
SCAN_PROBABILITY = 0.15
DEFAULT_OBSTACLE_DIVISOR = 0.33
DEFAULT_SAFETY_RATIO = 0.5


def obstacle_target(n: int, divisor: float = DEFAULT_OBSTACLE_DIVISOR,
                    safety_ratio: float = DEFAULT_SAFETY_RATIO) -> int:
    """Number of obstacles to place on an n x n maze.

    The requested count is ceil(n^2 / divisor), which outgrows the board for
    the default divisor, so it is clamped to the interior cells (rows and
    columns 1..n-2) minus ``safety_ratio`` of them.
    """
    if n <= 0:
        raise InvalidDimension(f'Maze size must be positive, got {n}')
    requested = math.ceil(n * n / divisor)
    eligible = max(0, n - 2) ** 2
    margin = math.ceil(eligible * safety_ratio)
    return max(0, min(requested, eligible - margin))


def generate(n: int, obstacle_count: int, rng: RandomSource) -> Grid:
    """Build an n x n grid with StartMarker at (0,0) and Goal at (n-1,n-1).

    Obstacles are sprinkled during a row-major scan with a probability that
    shrinks as the target is approached, then topped up on random interior
    cells. Row 0, column 0 and the two cells beside the goal never receive
    obstacles, so both corners always have an open neighbour.
    """
    if n <= 0:
        raise InvalidDimension(f'Maze size must be positive, got {n}')
    target = max(0, int(obstacle_count))
    placed = 0
    grid: Grid = []
    for i in range(n):
        row = []
        for j in range(n):
            if i == n - 1 and j == n - 1:
                cell = Cell.GOAL
            elif i == 0 and j == 0:
                cell = Cell.START_MARKER
            else:
                cell = Cell.PATH
                if placed < target and i != 0 and j != 0 and not _beside_goal(i, j, n):
                    roll = rng.random()
                    remaining_ratio = (target - placed) / target
                    if roll < SCAN_PROBABILITY * remaining_ratio:
                        cell = Cell.OBSTACLE
                        placed += 1
            row.append(int(cell))
        grid.append(row)

    if placed < target:
        placed += _fill_interior(grid, target - placed, rng)
    if placed < target:
        logger.warning(f"[maze-generate] n={n} capped obstacles at {placed} of {target}")
    logger.debug(f"[maze-generate] n={n} obstacles={placed}")
    return grid


def _fill_interior(grid: Grid, missing: int, rng: RandomSource) -> int:
    """Turn up to ``missing`` interior Path cells into obstacles.

    Random draws first; after n*n misses the remaining free interior cells
    are enumerated so the loop always ends.
    """
    n = len(grid)
    if n < 3:
        return 0
    filled = 0
    misses = 0
    max_misses = n * n
    while filled < missing and misses < max_misses:
        row = rng.randint(1, n - 2)
        col = rng.randint(1, n - 2)
        if grid[row][col] == Cell.PATH:
            grid[row][col] = int(Cell.OBSTACLE)
            filled += 1
        else:
            misses += 1
    if filled < missing:
        free = [(r, c) for r in range(1, n - 1) for c in range(1, n - 1) if grid[r][c] == Cell.PATH]
        while filled < missing and free:
            r, c = free.pop(rng.randint(0, len(free) - 1))
            grid[r][c] = int(Cell.OBSTACLE)
            filled += 1
    return filled


def _beside_goal(i: int, j: int, n: int) -> bool:
    return (i, j) in ((n - 2, n - 1), (n - 1, n - 2))
