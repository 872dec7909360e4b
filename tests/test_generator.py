import pytest

from mazewalk.services.maze.errors import InvalidDimension
from mazewalk.services.maze.generator import generate, obstacle_target
from mazewalk.services.maze.grid import Cell, count_cells
from mazewalk.services.maze.random_source import RandomSource


def test_every_supported_size_has_start_goal_and_exact_obstacles():
    rng = RandomSource(seed=7)
    for n in range(3, 51):
        target = obstacle_target(n)
        grid = generate(n, target, rng)
        assert len(grid) == n
        assert all(len(row) == n for row in grid)
        assert grid[0][0] == Cell.START_MARKER
        assert grid[n - 1][n - 1] == Cell.GOAL
        assert count_cells(grid, Cell.OBSTACLE) == target
        assert count_cells(grid, Cell.START_MARKER) == 1
        assert count_cells(grid, Cell.GOAL) == 1


def test_first_row_and_column_stay_clear():
    grid = generate(20, obstacle_target(20), RandomSource(seed=3))
    assert all(cell != Cell.OBSTACLE for cell in grid[0])
    assert all(row[0] != Cell.OBSTACLE for row in grid)


def test_obstacle_target_is_clamped_to_interior():
    assert obstacle_target(3) == 0
    assert obstacle_target(4) == 2
    for n in range(3, 51):
        interior = (n - 2) ** 2
        assert 0 <= obstacle_target(n) <= interior
        # never a fully covered interior
        assert obstacle_target(n) < interior or interior == 0


def test_obstacle_target_honours_small_requests():
    # ceil(25 / 10) = 3 is below the interior cap of 9 - 5 = 4
    assert obstacle_target(5, divisor=10) == 3


def test_same_seed_same_maze():
    first = generate(15, obstacle_target(15), RandomSource(seed=99))
    second = generate(15, obstacle_target(15), RandomSource(seed=99))
    assert first == second


def test_impossible_obstacle_count_terminates_and_fills_interior():
    n = 5
    grid = generate(n, 1000, RandomSource(seed=1))
    interior = [grid[r][c] for r in range(1, n - 1) for c in range(1, n - 1)]
    assert all(cell == Cell.OBSTACLE for cell in interior)
    assert grid[0][0] == Cell.START_MARKER
    assert grid[n - 1][n - 1] == Cell.GOAL


def test_tiny_grids_have_no_room_for_obstacles():
    assert generate(1, 5, RandomSource(seed=1)) == [[int(Cell.GOAL)]]
    grid = generate(2, 5, RandomSource(seed=1))
    assert grid == [[Cell.START_MARKER, Cell.PATH], [Cell.PATH, Cell.GOAL]]


def test_zero_obstacles_means_plain_paths():
    grid = generate(6, 0, RandomSource(seed=1))
    assert count_cells(grid, Cell.OBSTACLE) == 0
    assert count_cells(grid, Cell.PATH) == 36 - 2


@pytest.mark.parametrize('n', [0, -1])
def test_non_positive_size_is_rejected(n):
    with pytest.raises(InvalidDimension):
        generate(n, 1, RandomSource(seed=1))
    with pytest.raises(InvalidDimension):
        obstacle_target(n)


class ScriptedRandom:
    """Always rolls zero and cycles through the given integers."""

    def __init__(self, ints):
        self.ints = list(ints)
        self.calls = 0

    def random(self):
        return 0.0

    def randint(self, a, b):
        value = self.ints[self.calls % len(self.ints)]
        self.calls += 1
        return max(a, min(b, value))


def test_scan_places_obstacles_while_target_remains():
    # roll 0.0 always beats the probability, so the first eligible cells fill up
    grid = generate(4, 2, ScriptedRandom([1]))
    assert grid[1][1] == Cell.OBSTACLE
    assert grid[1][2] == Cell.OBSTACLE
    assert count_cells(grid, Cell.OBSTACLE) == 2


@pytest.mark.parametrize('n', [4, 5, 6, 10])
def test_goal_neighbours_stay_open(n):
    for seed in range(500):
        grid = generate(n, obstacle_target(n), RandomSource(seed=seed))
        assert grid[n - 2][n - 1] == Cell.PATH, seed
        assert grid[n - 1][n - 2] == Cell.PATH, seed


def test_goal_neighbours_stay_open_under_a_greedy_scan():
    # every roll hits, so the scan would take the last row and column if allowed
    n = 5
    grid = generate(n, 13, ScriptedRandom([1, 2, 3]))
    assert grid[n - 2][n - 1] == Cell.PATH
    assert grid[n - 1][n - 2] == Cell.PATH
    assert count_cells(grid, Cell.OBSTACLE) == 13
