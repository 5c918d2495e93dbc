import random

import pytest

from game.collision import is_valid_move, attempt_move
from maze.generator import get_maze_for_level


def test_winding_route_moves(winding_grid):
    assert is_valid_move((0, 0), (0, 1), winding_grid)
    assert not is_valid_move((0, 0), (1, 0), winding_grid)      # wall
    assert not is_valid_move((0, 0), (1, 1), winding_grid)      # diagonal
    assert not is_valid_move((0, 1), (0, 1), winding_grid)      # no-op
    assert not is_valid_move((0, 0), (0, 2), winding_grid)      # two cells
    assert is_valid_move((1, 2), (2, 2), winding_grid)          # goal


@pytest.mark.parametrize("target", [(-1, 0), (0, -1), (3, 0), (0, 3)])
def test_out_of_bounds_moves(winding_grid, target):
    assert not is_valid_move((0, 0), target, winding_grid)


@pytest.mark.parametrize("origin, target", [
    ((-1, 0), (0, 0)),
    ((0, -1), (0, 0)),
    ((-1, 1), (0, 1)),
    ((3, 2), (2, 2)),
    ((1, 3), (1, 2)),
])
def test_moves_from_outside_the_grid(winding_grid, origin, target):
    assert not is_valid_move(origin, target, winding_grid)
    result = attempt_move(winding_grid, origin, target)
    assert not result.accepted
    assert result.position == origin


@pytest.mark.parametrize("level", [3, 10, 20])
def test_adjacent_moves_follow_walkability(level):
    grid = get_maze_for_level(level, random.Random(level))
    for y in range(grid.rows):
        for x in range(grid.cols):
            for dx, dy in [(0, -1), (1, 0), (0, 1), (-1, 0)]:
                tx, ty = x + dx, y + dy
                expected = grid.in_bounds(tx, ty) and (
                    grid.cells[ty][tx].is_path or grid.cells[ty][tx].is_goal)
                assert is_valid_move((x, y), (tx, ty), grid) == expected


def test_attempt_move(winding_grid):
    rejected = attempt_move(winding_grid, (0, 0), (1, 0))
    assert not rejected.accepted
    assert rejected.position == (0, 0)

    step = attempt_move(winding_grid, (0, 0), (0, 1))
    assert step.accepted and step.position == (0, 1) and not step.reached_goal

    arrival = attempt_move(winding_grid, (1, 2), (2, 2))
    assert arrival.accepted and arrival.reached_goal
