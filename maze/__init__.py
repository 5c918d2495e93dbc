"""
Maze engine - grid model, carving strategies, difficulty policy
"""

from .maze_core import MazeGrid, Cell, is_reachable, bfs_shortest_path
from .generator import build_maze, get_maze_for_level, STRATEGIES
from .difficulty import get_difficulty_config, size_for

__all__ = ['MazeGrid', 'Cell', 'is_reachable', 'bfs_shortest_path',
           'build_maze', 'get_maze_for_level', 'STRATEGIES',
           'get_difficulty_config', 'size_for']
