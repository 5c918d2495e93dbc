"""
Core maze functions - grid model, reachability and repair passes
"""

from collections import deque

import numpy as np
from numba import njit

from utils.constants import (
    DIRS, START_POS,
    GLYPH_WALL, GLYPH_PATH, GLYPH_START, GLYPH_GOAL,
)


class Cell:
    """
    One grid unit. Exactly one of is_wall / is_path holds.
    """
    __slots__ = ("x", "y", "is_wall", "is_path", "is_start", "is_goal")

    def __init__(self, x, y):
        self.x = x
        self.y = y
        self.is_wall = True
        self.is_path = False
        self.is_start = False
        self.is_goal = False

    @property
    def is_walkable(self):
        return self.is_path or self.is_goal or self.is_start

    def glyph(self):
        if self.is_start:
            return GLYPH_START
        if self.is_goal:
            return GLYPH_GOAL
        return GLYPH_PATH if self.is_path else GLYPH_WALL

    def __repr__(self):
        return f"Cell({self.x}, {self.y}, {self.glyph()!r})"


class MazeGrid:
    """
    Cell-based maze grid, indexed cells[y][x]

    The grid is mutable only while it is being built; freeze() ends the
    construction phase and any further carving raises RuntimeError.
    """
    def __init__(self, cols, rows):
        if cols < 1 or rows < 1:
            raise ValueError(f"grid dimensions must be positive, got {cols}x{rows}")
        self.cols = cols
        self.rows = rows
        # Initialize all cells as walls
        self.cells = [[Cell(x, y) for x in range(cols)] for y in range(rows)]
        self.frozen = False

    @classmethod
    def from_ascii(cls, lines):
        """
        Build a grid from text rows ('#' wall, '.' path, 'S' start, 'G' goal)
        """
        lines = [line.strip() for line in lines if line.strip()]
        grid = cls(len(lines[0]), len(lines))
        for y, line in enumerate(lines):
            if len(line) != grid.cols:
                raise ValueError(f"row {y} has width {len(line)}, expected {grid.cols}")
            for x, ch in enumerate(line):
                if ch == GLYPH_WALL:
                    continue
                if ch not in (GLYPH_PATH, GLYPH_START, GLYPH_GOAL):
                    raise ValueError(f"unknown glyph {ch!r} at ({x}, {y})")
                grid.carve(x, y)
                if ch == GLYPH_START:
                    grid.mark_start(x, y)
                elif ch == GLYPH_GOAL:
                    grid.mark_goal(x, y)
        return grid

    def in_bounds(self, x, y):
        """Check if coordinates are within grid bounds"""
        return 0 <= x < self.cols and 0 <= y < self.rows

    def cell(self, x, y):
        """Cell at (x, y), or None when out of bounds"""
        if not self.in_bounds(x, y):
            return None
        return self.cells[y][x]

    def is_path(self, x, y):
        return self.in_bounds(x, y) and self.cells[y][x].is_path

    def is_walkable(self, x, y):
        return self.in_bounds(x, y) and self.cells[y][x].is_walkable

    def carve(self, x, y):
        """Turn a wall cell into a path cell; out-of-bounds is ignored"""
        if self.frozen:
            raise RuntimeError("cannot carve a frozen grid")
        if not self.in_bounds(x, y):
            return False
        cell = self.cells[y][x]
        cell.is_wall = False
        cell.is_path = True
        return True

    def mark_start(self, x, y):
        self.carve(x, y)
        self.cells[y][x].is_start = True

    def mark_goal(self, x, y):
        self.carve(x, y)
        self.cells[y][x].is_goal = True

    def freeze(self):
        self.frozen = True
        return self

    def start_pos(self):
        return self._find(lambda c: c.is_start) or START_POS

    def goal_pos(self):
        return self._find(lambda c: c.is_goal)

    def _find(self, pred):
        for row in self.cells:
            for c in row:
                if pred(c):
                    return (c.x, c.y)
        return None

    def neighbors(self, x, y):
        """In-bounds orthogonal neighbours"""
        res = []
        for dx, dy in DIRS:
            nx, ny = x + dx, y + dy
            if self.in_bounds(nx, ny):
                res.append((nx, ny))
        return res

    def path_count(self):
        return sum(1 for row in self.cells for c in row if c.is_path)

    def walkable_mask(self):
        """uint8 array shaped (rows, cols), 1 where the cell can be walked"""
        mask = np.zeros((self.rows, self.cols), dtype=np.uint8)
        for y, row in enumerate(self.cells):
            for x, c in enumerate(row):
                if c.is_walkable:
                    mask[y, x] = 1
        return mask

    def to_ascii(self):
        return "\n".join("".join(c.glyph() for c in row) for row in self.cells)

    def __str__(self):
        return self.to_ascii()

    def __repr__(self):
        return f"MazeGrid({self.cols}x{self.rows}, paths={self.path_count()})"


# ========== REACHABILITY ==========

STEP_X = np.array([0, 1, 0, -1], dtype=np.int64)
STEP_Y = np.array([-1, 0, 1, 0], dtype=np.int64)


@njit(cache=True)
def bfs_reachable(walkable, sx, sy, gx, gy):
    """
    Breadth-first search over a walkable mask.

    Args:
        walkable: 2D uint8 array (rows, cols), non-zero = walkable
        sx, sy: start cell (always expanded, walkable or not)
        gx, gy: goal cell

    Returns:
        True once the goal is dequeued, False when the frontier runs out
    """
    rows, cols = walkable.shape
    seen = np.zeros((rows, cols), dtype=np.uint8)
    queue_x = np.empty(rows * cols, dtype=np.int64)
    queue_y = np.empty(rows * cols, dtype=np.int64)

    queue_x[0] = sx
    queue_y[0] = sy
    seen[sy, sx] = 1
    head = 0
    tail = 1

    while head < tail:
        x = queue_x[head]
        y = queue_y[head]
        head += 1
        if x == gx and y == gy:
            return True

        for k in range(4):
            nx = x + STEP_X[k]
            ny = y + STEP_Y[k]
            if nx < 0 or ny < 0 or nx >= cols or ny >= rows:
                continue
            if seen[ny, nx] != 0 or walkable[ny, nx] == 0:
                continue
            seen[ny, nx] = 1
            queue_x[tail] = nx
            queue_y[tail] = ny
            tail += 1

    return False


def is_reachable(grid, start, goal):
    """Check whether a walkable 4-connected route joins start and goal"""
    (sx, sy), (gx, gy) = start, goal
    if not (grid.in_bounds(sx, sy) and grid.in_bounds(gx, gy)):
        return False
    return bool(bfs_reachable(grid.walkable_mask(), sx, sy, gx, gy))


def reconstruct_path(prev, goal):
    """Reconstruct path from prev dictionary"""
    path = []
    cur = goal
    while cur is not None:
        path.append(cur)
        cur = prev[cur]
    path.reverse()
    return path


def bfs_shortest_path(grid, start, goal):
    """BFS shortest path finder, [] when unreachable"""
    if not (grid.in_bounds(*start) and grid.in_bounds(*goal)):
        return []
    if start == goal:
        return [start]

    q = deque([start])
    prev = {start: None}

    while q:
        x, y = q.popleft()
        for n in grid.neighbors(x, y):
            if n not in prev and grid.is_walkable(*n):
                prev[n] = (x, y)
                if n == goal:
                    return reconstruct_path(prev, goal)
                q.append(n)
    return []


# ========== REPAIR ==========

def carve_guaranteed_path(grid, start, goal):
    """
    Carve the deterministic L-route: along the start row to the goal column,
    then along the goal column to the goal row.
    """
    (sx, sy), (gx, gy) = start, goal
    step = 1 if gx >= sx else -1
    for x in range(sx, gx + step, step):
        grid.carve(x, sy)
    step = 1 if gy >= sy else -1
    for y in range(sy, gy + step, step):
        grid.carve(gx, y)


def _solid_block(grid, x0, y0, size):
    for y in range(y0, y0 + size):
        for x in range(x0, x0 + size):
            if not grid.in_bounds(x, y) or not grid.cells[y][x].is_wall:
                return False
    return True


def _path_facing_cells(grid, x0, y0, size):
    """Block cells with a walkable neighbour"""
    res = []
    for y in range(y0, y0 + size):
        for x in range(x0, x0 + size):
            if any(grid.is_walkable(nx, ny) for nx, ny in grid.neighbors(x, y)):
                res.append((x, y))
    return res


def declump(grid, rng, chance, sizes=(3, 2)):
    """
    Open one cell in solid wall blocks that sit next to a path.

    Only ever adds path cells, so reachability is never broken.

    Returns:
        Number of cells opened
    """
    if chance <= 0:
        return 0

    opened = 0
    for size in sizes:
        for y0 in range(grid.rows - size + 1):
            for x0 in range(grid.cols - size + 1):
                if not _solid_block(grid, x0, y0, size):
                    continue
                candidates = _path_facing_cells(grid, x0, y0, size)
                if candidates and rng.random() < chance:
                    grid.carve(*rng.choice(candidates))
                    opened += 1
    return opened
