import random

import pytest

from maze.maze_core import MazeGrid


@pytest.fixture
def rng():
    return random.Random(1234)


@pytest.fixture
def winding_grid():
    """3x3 with the single route (0,0)->(0,1)->(1,1)->(1,2)->(2,2)"""
    return MazeGrid.from_ascii([
        "S##",
        "..#",
        "#.G",
    ])
