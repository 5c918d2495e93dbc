"""
Fog of War system - decides which cells a young player can see
"""

import logging

import numpy as np

from utils.constants import PLAYER_REVEAL_RADIUS, GOAL_REVEAL_RADIUS
from utils.helpers import manhattan_distance, coord_key, parse_coord_key

logger = logging.getLogger(__name__)


def _in_bounds(x, y, bounds):
    if x < 0 or y < 0:
        return False
    if bounds is None:
        return True
    cols, rows = bounds
    return 0 <= x < cols and 0 <= y < rows


def is_visible(x, y, player_pos, goal_pos, explored, enabled, bounds=None):
    """
    Check if a cell is shown to the player

    Args:
        x, y: Cell to test
        player_pos: Current player (x, y)
        goal_pos: Goal (x, y), or None
        explored: Set of "x,y" keys
        enabled: Whether fog of war is on
        bounds: Optional (cols, rows); cells outside are never visible.
            Without it only negative coordinates are rejected, so callers
            holding untrusted coordinates should pass it
    """
    if not _in_bounds(x, y, bounds):
        return False
    if not enabled:
        return True

    if manhattan_distance(x, y, *player_pos) <= PLAYER_REVEAL_RADIUS:
        return True
    if goal_pos is not None and manhattan_distance(x, y, *goal_pos) <= GOAL_REVEAL_RADIUS:
        return True
    return coord_key(x, y) in explored


def is_explored(x, y, explored, enabled, bounds=None):
    """Check if a cell is in the explored set (ignores the live reveal)"""
    if not _in_bounds(x, y, bounds):
        return False
    if not enabled:
        return True
    return coord_key(x, y) in explored


def visibility_of(grid, player_pos, explored, fog_enabled):
    """
    Per-cell fog flags for rendering

    Returns:
        (visible, explored) boolean arrays shaped (rows, cols)
    """
    shape = (grid.rows, grid.cols)
    if not fog_enabled:
        return np.ones(shape, dtype=bool), np.ones(shape, dtype=bool)

    ys, xs = np.indices(shape)
    px, py = player_pos
    visible = (np.abs(xs - px) + np.abs(ys - py)) <= PLAYER_REVEAL_RADIUS

    goal = grid.goal_pos()
    if goal is not None:
        gx, gy = goal
        visible |= (np.abs(xs - gx) + np.abs(ys - gy)) <= GOAL_REVEAL_RADIUS

    seen = np.zeros(shape, dtype=bool)
    for key in explored:
        try:
            x, y = parse_coord_key(key)
        except ValueError:
            continue
        if grid.in_bounds(x, y):
            seen[y, x] = True

    return visible | seen, seen


class FogOfWar:
    """
    Explored-cell tracker for one level

    Explored cells only ever accumulate until reset() at a level change.
    """
    def __init__(self, cols, rows, start_pos, enabled=True, explore_radius=1):
        """
        Args:
            cols, rows: Maze dimensions
            start_pos: Cell explored from the beginning
            enabled: Whether fog is on for this level
            explore_radius: Square radius revealed around each new position
        """
        self.cols = cols
        self.rows = rows
        self.enabled = enabled
        self.explore_radius = explore_radius
        self.explored = set()
        self.reset(start_pos)

    @classmethod
    def from_keys(cls, cols, rows, keys, enabled=True, explore_radius=1):
        """Resume fog state from a saved list of "x,y" keys; bad keys are dropped"""
        fog = cls(cols, rows, (0, 0), enabled, explore_radius)
        fog.explored = set()
        for key in keys:
            try:
                x, y = parse_coord_key(key)
            except ValueError:
                logger.debug("Dropping malformed explored key %r", key)
                continue
            if fog.in_bounds(x, y):
                fog.explored.add(coord_key(x, y))
        return fog

    def in_bounds(self, x, y):
        return 0 <= x < self.cols and 0 <= y < self.rows

    def reveal(self, x, y, radius=None):
        """Add (x, y) and the in-bounds square around it to the explored set"""
        if radius is None:
            radius = self.explore_radius
        for ny in range(y - radius, y + radius + 1):
            for nx in range(x - radius, x + radius + 1):
                if self.in_bounds(nx, ny):
                    self.explored.add(coord_key(nx, ny))

    def is_visible(self, x, y, player_pos, goal_pos):
        return is_visible(x, y, player_pos, goal_pos, self.explored, self.enabled,
                          bounds=(self.cols, self.rows))

    def is_explored(self, x, y):
        return is_explored(x, y, self.explored, self.enabled, bounds=(self.cols, self.rows))

    def explored_keys(self):
        """Explored keys in row-major order, for saving"""
        return sorted(self.explored, key=lambda k: parse_coord_key(k)[::-1])

    def reset(self, start_pos):
        """Forget everything except the start cell"""
        self.explored = {coord_key(*start_pos)}
