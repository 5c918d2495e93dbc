import random

import pytest

from maze.difficulty import get_difficulty_config, size_for, strategy_for
from maze.generator import (
    STRATEGIES, build_maze, get_maze_for_level,
    inject_dead_ends, open_random_walls,
)
from maze.maze_core import MazeGrid, is_reachable
from utils.constants import START_POS


def _carve_everything_but_goal(grid, cols, rows, level, rng):
    """Open grid whose goal corner is walled in"""
    for y in range(rows):
        for x in range(cols):
            grid.carve(x, y)
    for nx, ny in grid.neighbors(cols - 1, rows - 1):
        cell = grid.cells[ny][nx]
        cell.is_wall = True
        cell.is_path = False


def _carve_nothing(grid, cols, rows, level, rng):
    pass


@pytest.mark.parametrize("level", range(1, 31))
def test_every_level_is_solvable(level):
    rng = random.Random(level)
    for _ in range(100):
        grid = get_maze_for_level(level, rng)
        goal = (grid.cols - 1, grid.rows - 1)
        assert is_reachable(grid, START_POS, goal)


@pytest.mark.parametrize("level", range(1, 31))
def test_strategy_alone_connects_corners(level):
    """Levels should not depend on the fallback route"""
    config = get_difficulty_config(level)
    strategy = STRATEGIES[config.strategy]
    for seed in range(20):
        grid = MazeGrid(config.cols, config.rows)
        strategy(grid, config.cols, config.rows, level, random.Random(seed))
        grid.mark_start(*START_POS)
        grid.mark_goal(config.cols - 1, config.rows - 1)
        assert is_reachable(grid, START_POS, (config.cols - 1, config.rows - 1)), config


@pytest.mark.parametrize("level", [1, 4, 9, 12, 15, 20, 40])
def test_cell_flags_are_consistent(level):
    grid = get_maze_for_level(level, random.Random(5))
    cols, rows = size_for(level)
    assert (grid.cols, grid.rows) == (cols, rows)

    starts, goals = [], []
    for row in grid.cells:
        for c in row:
            assert c.is_wall != c.is_path
            if c.is_start:
                starts.append((c.x, c.y))
            if c.is_goal:
                goals.append((c.x, c.y))
    assert starts == [START_POS]
    assert goals == [(cols - 1, rows - 1)]
    assert grid.frozen


def test_same_seed_same_maze():
    first = get_maze_for_level(25, random.Random(7))
    second = get_maze_for_level(25, random.Random(7))
    assert first.to_ascii() == second.to_ascii()


def test_low_levels_are_fixed_layouts():
    assert get_maze_for_level(1, random.Random(1)).to_ascii() == "\n".join([
        "S.#",
        "#..",
        "##G",
    ])


def test_walled_goal_gets_fallback_route(caplog):
    grid = build_maze(5, 5, 1, random.Random(0), strategy=_carve_everything_but_goal)

    assert is_reachable(grid, (0, 0), (4, 4))
    assert grid.is_path(4, 3)
    assert "fallback" in caplog.text


def test_empty_strategy_gets_exactly_the_l_route():
    grid = build_maze(4, 6, 1, random.Random(0), strategy=_carve_nothing)

    assert grid.path_count() == 4 + 6 - 1
    assert all(grid.is_path(x, 0) for x in range(4))
    assert all(grid.is_path(3, y) for y in range(6))
    assert grid.cells[0][0].is_start
    assert grid.cells[5][3].is_goal


@pytest.mark.parametrize("name", sorted(STRATEGIES))
def test_strategy_names_match_bands(name):
    assert name in {strategy_for(level) for level in range(1, 51)}


def test_dead_ends_add_no_routes(rng):
    grid = MazeGrid.from_ascii([
        "S....",
        "#####",
        "#####",
    ])
    carved = inject_dead_ends(grid, rng, count=3)
    assert carved > 0
    # Each branch touches the corridor once, so row 1 never has side-by-side paths
    for x in range(4):
        assert not (grid.is_path(x, 1) and grid.is_path(x + 1, 1))


def test_open_random_walls_rate(rng):
    grid = MazeGrid(10, 10)
    open_random_walls(grid, rng, complexity=0.0)
    assert grid.path_count() == 0

    open_random_walls(grid, rng, complexity=1.0, rate=1.0)
    assert grid.path_count() == 100
