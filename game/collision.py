"""
Move validation - adjacency and walkability checks for player moves
"""

from collections import namedtuple

from utils.helpers import manhattan_distance

MoveResult = namedtuple('MoveResult', ['accepted', 'position', 'reached_goal'],
                        defaults=(False,))


def is_valid_move(from_pos, to_pos, grid):
    """
    Check if a move from from_pos to to_pos is legal

    A move is legal when both cells are in bounds, the target is exactly
    one orthogonal step away, and it is a path or goal cell.
    """
    fx, fy = from_pos
    tx, ty = to_pos
    if not grid.in_bounds(fx, fy) or not grid.in_bounds(tx, ty):
        return False
    if manhattan_distance(fx, fy, tx, ty) != 1:
        return False

    cell = grid.cells[ty][tx]
    return cell.is_path or cell.is_goal


def attempt_move(grid, from_pos, to_pos):
    """
    Apply a move if it is legal

    Returns:
        MoveResult; on rejection the position is from_pos unchanged
    """
    if not is_valid_move(from_pos, to_pos, grid):
        return MoveResult(False, tuple(from_pos))

    tx, ty = to_pos
    return MoveResult(True, (tx, ty), grid.cells[ty][tx].is_goal)
