import numpy as np
import pytest

from maze.maze_core import (
    MazeGrid, is_reachable, bfs_shortest_path, carve_guaranteed_path, declump,
)


def test_from_ascii_sets_flags(winding_grid):
    start = winding_grid.cell(0, 0)
    goal = winding_grid.cell(2, 2)
    assert start.is_start and start.is_path and not start.is_wall
    assert goal.is_goal and goal.is_path and not goal.is_wall
    assert winding_grid.cell(1, 0).is_wall
    assert winding_grid.start_pos() == (0, 0)
    assert winding_grid.goal_pos() == (2, 2)


def test_ascii_round_trip():
    lines = ["S..#", "##.#", "##.G"]
    assert MazeGrid.from_ascii(lines).to_ascii() == "\n".join(lines)


def test_from_ascii_rejects_ragged_rows():
    with pytest.raises(ValueError):
        MazeGrid.from_ascii(["S..", ".G"])


def test_winding_route_is_reachable(winding_grid):
    assert is_reachable(winding_grid, (0, 0), (2, 2))


def test_blocked_goal_is_unreachable():
    grid = MazeGrid.from_ascii(["S#G"])
    assert not is_reachable(grid, (0, 0), (2, 0))


def test_out_of_bounds_endpoints_are_unreachable(winding_grid):
    assert not is_reachable(winding_grid, (0, 0), (3, 3))
    assert not is_reachable(winding_grid, (-1, 0), (2, 2))


def test_reachability_does_not_touch_grid(winding_grid):
    before = winding_grid.to_ascii()
    is_reachable(winding_grid, (0, 0), (2, 2))
    assert winding_grid.to_ascii() == before


def test_shortest_path(winding_grid):
    assert bfs_shortest_path(winding_grid, (0, 0), (2, 2)) == [
        (0, 0), (0, 1), (1, 1), (1, 2), (2, 2),
    ]
    assert bfs_shortest_path(MazeGrid.from_ascii(["S#G"]), (0, 0), (2, 0)) == []


def test_guaranteed_path_is_an_l_route():
    grid = MazeGrid(5, 4)
    carve_guaranteed_path(grid, (0, 0), (4, 3))
    assert is_reachable(grid, (0, 0), (4, 3))
    assert grid.path_count() == 5 + 4 - 1
    assert all(grid.is_path(x, 0) for x in range(5))
    assert all(grid.is_path(4, y) for y in range(4))


def test_frozen_grid_cannot_be_carved():
    grid = MazeGrid(3, 3).freeze()
    with pytest.raises(RuntimeError):
        grid.carve(1, 1)


def test_dimensions_must_be_positive():
    with pytest.raises(ValueError):
        MazeGrid(0, 4)


def test_walkable_mask(winding_grid):
    mask = winding_grid.walkable_mask()
    assert mask.shape == (3, 3)
    assert mask.dtype == np.uint8
    assert mask.sum() == 5
    assert mask[1, 0] == 1 and mask[0, 1] == 0


def test_declump_only_adds_paths(rng):
    grid = MazeGrid.from_ascii(["S....."] + ["######"] * 5)
    before = {(c.x, c.y) for row in grid.cells for c in row if c.is_path}

    opened = declump(grid, rng, chance=1.0)

    after = {(c.x, c.y) for row in grid.cells for c in row if c.is_path}
    assert opened > 0
    assert before < after
    for row in grid.cells:
        for c in row:
            assert c.is_wall != c.is_path


def test_declump_disabled(rng):
    grid = MazeGrid.from_ascii(["S....."] + ["######"] * 5)
    assert declump(grid, rng, chance=0.0) == 0
    assert grid.path_count() == 6
