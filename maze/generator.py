"""
Maze generation - level-indexed carving strategies and the maze assembler

Every strategy has the signature (grid, cols, rows, level, rng) and only ever
turns walls into paths. The assembler guarantees the result is solvable.
"""

import logging
import random

from utils.constants import (
    DIRS, START_POS,
    DEAD_END_MAX_LENGTH, EXTRA_PATH_MAX_STEPS, OPENING_RATE,
    DECLUMP_BLOCK_SIZES,
)
from maze.maze_core import MazeGrid, is_reachable, carve_guaranteed_path, declump
from maze.difficulty import get_difficulty_config, complexity_for

logger = logging.getLogger(__name__)


def carve_row(grid, y, x0, x1):
    """Carve cells (x0..x1, y), inclusive, in either direction"""
    for x in range(min(x0, x1), max(x0, x1) + 1):
        grid.carve(x, y)


def carve_col(grid, x, y0, y1):
    """Carve cells (x, y0..y1), inclusive, in either direction"""
    for y in range(min(y0, y1), max(y0, y1) + 1):
        grid.carve(x, y)


def link_to_network(grid, x, y):
    """
    Carve from (x, y) towards the start until it touches an existing path.
    Alternates left/up steps so the link stays short.
    """
    grid.carve(x, y)
    trail = {(x, y)}
    step = 0
    while not any(grid.is_path(nx, ny) and (nx, ny) not in trail
                  for nx, ny in grid.neighbors(x, y)):
        if (step % 2 == 0 and x > 0) or y == 0:
            x -= 1
        else:
            y -= 1
        if not grid.in_bounds(x, y):
            return
        joined = grid.is_path(x, y)
        grid.carve(x, y)
        if joined:
            return
        trail.add((x, y))
        step += 1


# ========== STRATEGY: STRAIGHT ==========

def carve_straight(grid, cols, rows, level, rng):
    """One corridor with no alternatives"""
    if cols == rows and cols <= 3:
        # Tiny grids: a single-step staircase keeps the route inside the grid
        carve_staircase(grid, cols, rows, level, rng, max_step=1)
        return

    carve_row(grid, 0, 0, cols - 1)
    carve_col(grid, cols - 1, 0, rows - 1)


# ========== STRATEGY: ONE BEND ==========

def carve_bend(grid, cols, rows, level, rng):
    """Corridor with a turn point placed about 70% of the way across"""
    if rng.randrange(2) == 0:
        turn_x = int(cols * 0.7)
        carve_row(grid, 0, 0, turn_x)
        carve_col(grid, turn_x, 0, rows - 1)
        carve_row(grid, rows - 1, turn_x, cols - 1)
    else:
        turn_y = int(rows * 0.7)
        carve_col(grid, 0, 0, turn_y)
        carve_row(grid, turn_y, 0, cols - 1)
        carve_col(grid, cols - 1, turn_y, rows - 1)


# ========== STRATEGY: ZIGZAG ==========

def carve_zigzag(grid, cols, rows, level, rng):
    """S-shaped route through the middle of the grid"""
    mid_x = cols // 2
    mid_y = rows // 2

    carve_row(grid, 0, 0, mid_x)
    carve_col(grid, mid_x, 0, mid_y)
    carve_row(grid, mid_y, mid_x, cols - 1)
    carve_col(grid, cols - 1, mid_y, rows - 1)


# ========== STRATEGY: STAIRCASE ==========

def carve_staircase(grid, cols, rows, level, rng, max_step=2):
    """
    Alternating right/down steps from start to goal.
    Any monotone route has no shortcuts, so there is exactly one way through.
    """
    x, y = START_POS
    gx, gy = cols - 1, rows - 1
    grid.carve(x, y)
    horizontal = True

    while (x, y) != (gx, gy):
        length = rng.randint(1, max_step)
        for _ in range(length):
            if (x, y) == (gx, gy):
                break
            if horizontal and x < gx:
                x += 1
            elif not horizontal and y < gy:
                y += 1
            elif x < gx:
                x += 1
            else:
                y += 1
            grid.carve(x, y)
        horizontal = not horizontal


# ========== STRATEGY: BRANCH ==========

def carve_branch(grid, cols, rows, level, rng):
    """Two disjoint routes: along the top then right, or down the left then across"""
    carve_row(grid, 0, 0, cols - 1)
    carve_col(grid, cols - 1, 0, rows - 1)

    carve_col(grid, 0, 0, rows - 1)
    carve_row(grid, rows - 1, 0, cols - 1)


# ========== STRATEGY: SERPENTINE ==========

def carve_serpentine(grid, cols, rows, level, rng):
    """
    Switchback lanes two cells apart, joined at alternating ends.
    Lanes run down columns or along rows, picked at random.
    """
    transpose = rng.random() < 0.5
    lanes, length = (rows, cols) if transpose else (cols, rows)

    def cut(lane, pos):
        if transpose:
            grid.carve(pos, lane)
        else:
            grid.carve(lane, pos)

    for i, lane in enumerate(range(0, lanes, 2)):
        for pos in range(length):
            cut(lane, pos)
        if lane + 2 < lanes:
            cut(lane + 1, length - 1 if i % 2 == 0 else 0)

    # With an even lane count the goal sits beside the last lane
    link_to_network(grid, cols - 1, rows - 1)


# ========== STRATEGY: CORRIDORS ==========

def carve_corridors(grid, cols, rows, level, rng):
    """Repeating grid of corridors every other row and column"""
    lines_y = set(range(0, rows, 2)) | {rows - 1}
    lines_x = set(range(0, cols, 2)) | {cols - 1}
    for y in lines_y:
        carve_row(grid, y, 0, cols - 1)
    for x in lines_x:
        carve_col(grid, x, 0, rows - 1)


# ========== STRATEGY: ROOMS ==========

ROOM_PITCH = 3        # 2 room cells + 1 wall line
ROOM_EXTRA_DOOR_CHANCE = 0.3


def _room_span(origin, limit):
    return range(origin, min(origin + ROOM_PITCH - 1, limit))


def carve_rooms(grid, cols, rows, level, rng):
    """
    Cluster of 2x2 rooms separated by single wall lines.
    Rooms are joined by a random spanning tree of doors plus a few extras.
    """
    origins_x = list(range(0, cols, ROOM_PITCH))
    origins_y = list(range(0, rows, ROOM_PITCH))

    for oy in origins_y:
        for ox in origins_x:
            for y in _room_span(oy, rows):
                for x in _room_span(ox, cols):
                    grid.carve(x, y)

    def door(i, j, di, dj):
        ox, oy = origins_x[i], origins_y[j]
        if di:
            wall_x = ox + ROOM_PITCH - 1
            grid.carve(wall_x, rng.choice(list(_room_span(oy, rows))))
        else:
            wall_y = oy + ROOM_PITCH - 1
            grid.carve(rng.choice(list(_room_span(ox, cols))), wall_y)

    def room_neighbors(i, j):
        res = []
        for di, dj in DIRS:
            ni, nj = i + di, j + dj
            if 0 <= ni < len(origins_x) and 0 <= nj < len(origins_y):
                res.append((ni, nj, di, dj))
        return res

    visited = {(0, 0)}
    stack = [(0, 0)]
    while stack:
        i, j = stack[-1]
        options = [n for n in room_neighbors(i, j) if (n[0], n[1]) not in visited]
        if not options:
            stack.pop()
            continue
        ni, nj, di, dj = rng.choice(options)
        # Doors are cut from the room with the lower index on that axis
        door(min(i, ni), min(j, nj), abs(di), abs(dj))
        visited.add((ni, nj))
        stack.append((ni, nj))

    for i in range(len(origins_x)):
        for j in range(len(origins_y)):
            for ni, nj, di, dj in room_neighbors(i, j):
                if (di > 0 or dj > 0) and rng.random() < ROOM_EXTRA_DOOR_CHANCE:
                    door(i, j, di, dj)

    link_to_network(grid, cols - 1, rows - 1)


# ========== STRATEGY: CROSS ==========

HUB_PITCH = 3
CROSS_EXTRA_LINK_CHANCE = 0.2
CROSS_STUB_CHANCE = 0.3


def carve_cross(grid, cols, rows, level, rng):
    """
    Plus-shaped hubs on a 3-cell lattice, linked by a random spanning tree.
    Unlinked arms are sometimes left as one-cell stubs.
    """
    hubs = [(x, y) for y in range(1, rows, HUB_PITCH) for x in range(1, cols, HUB_PITCH)]
    if not hubs:
        carve_bend(grid, cols, rows, level, rng)
        return
    hub_set = set(hubs)
    linked = set()

    def link(a, b):
        (ax, ay), (bx, by) = a, b
        if ay == by:
            carve_row(grid, ay, ax, bx)
        else:
            carve_col(grid, ax, ay, by)
        linked.add((a, b))
        linked.add((b, a))

    for hx, hy in hubs:
        grid.carve(hx, hy)

    visited = {hubs[0]}
    stack = [hubs[0]]
    while stack:
        hx, hy = stack[-1]
        options = [(hx + dx * HUB_PITCH, hy + dy * HUB_PITCH) for dx, dy in DIRS]
        options = [h for h in options if h in hub_set and h not in visited]
        if not options:
            stack.pop()
            continue
        nxt = rng.choice(options)
        link((hx, hy), nxt)
        visited.add(nxt)
        stack.append(nxt)

    for hub in hubs:
        hx, hy = hub
        for dx, dy in DIRS:
            other = (hx + dx * HUB_PITCH, hy + dy * HUB_PITCH)
            if (hub, other) in linked:
                continue
            if other in hub_set and rng.random() < CROSS_EXTRA_LINK_CHANCE:
                link(hub, other)
            elif rng.random() < CROSS_STUB_CHANCE:
                grid.carve(hx + dx, hy + dy)

    # Start joins the first hub through its upper arm
    grid.carve(1, 0)
    link_to_network(grid, cols - 1, rows - 1)


# ========== STRATEGY: DEAD ENDS ==========

def carve_dead_ends(grid, cols, rows, level, rng):
    """Single winding route with short misleading side branches"""
    carve_staircase(grid, cols, rows, level, rng, max_step=3)
    inject_dead_ends(grid, rng, count=max(2, cols * rows // 6))


# ========== STRATEGY: RECURSIVE BACKTRACKER ==========

def carve_backtracker(grid, cols, rows, level, rng):
    """
    Randomized depth-first backtracker over the even-coordinate lattice,
    then complexity-scaled dead ends, extra loops and random openings.
    """
    sx, sy = START_POS
    grid.carve(sx, sy)
    visited = {(sx, sy)}
    stack = [(sx, sy)]

    while stack:
        cx, cy = stack[-1]
        neighbors = []
        for dx, dy in DIRS:
            nx, ny = cx + dx * 2, cy + dy * 2
            if grid.in_bounds(nx, ny) and (nx, ny) not in visited:
                neighbors.append((nx, ny, dx, dy))

        if neighbors:
            nx, ny, dx, dy = rng.choice(neighbors)
            grid.carve(cx + dx, cy + dy)
            grid.carve(nx, ny)
            visited.add((nx, ny))
            stack.append((nx, ny))
        else:
            stack.pop()

    link_to_network(grid, cols - 1, rows - 1)

    complexity = complexity_for(level)
    inject_dead_ends(grid, rng, count=int(complexity * cols * rows / 12) + 1)
    inject_extra_paths(grid, rng, count=int(complexity * 3) + 1)
    open_random_walls(grid, rng, complexity)


# ========== AUGMENTATION ==========

def _wall_touching_one_path(grid, x, y):
    """The single path neighbour of a wall cell, or None"""
    if not grid.in_bounds(x, y) or grid.is_walkable(x, y):
        return None
    touching = [(nx, ny) for nx, ny in grid.neighbors(x, y) if grid.is_walkable(nx, ny)]
    return touching[0] if len(touching) == 1 else None


def inject_dead_ends(grid, rng, count, max_length=DEAD_END_MAX_LENGTH):
    """
    Grow short branches (1..max_length cells) off existing paths.
    Each new cell only touches the cell it grew from, so no route is added.

    Returns:
        Number of branches carved
    """
    carved = 0
    for _ in range(count):
        candidates = []
        for y in range(grid.rows):
            for x in range(grid.cols):
                parent = _wall_touching_one_path(grid, x, y)
                if parent is not None:
                    candidates.append((x, y, parent))
        if not candidates:
            break

        x, y, (px, py) = rng.choice(candidates)
        dx, dy = x - px, y - py
        grid.carve(x, y)
        carved += 1

        for _ in range(rng.randint(1, max_length) - 1):
            nx, ny = x + dx, y + dy
            if _wall_touching_one_path(grid, nx, ny) != (x, y):
                break
            grid.carve(nx, ny)
            x, y = nx, ny
    return carved


def inject_extra_paths(grid, rng, count, max_steps=EXTRA_PATH_MAX_STEPS):
    """Short random walks from path cells, using 1- and 2-cell strides"""
    paths = [(c.x, c.y) for row in grid.cells for c in row if c.is_path]
    if not paths:
        return

    for _ in range(count):
        x, y = rng.choice(paths)
        for _ in range(rng.randint(1, max_steps)):
            dx, dy = rng.choice(DIRS)
            stride = rng.choice((1, 2))
            nx, ny = x + dx * stride, y + dy * stride
            if not grid.in_bounds(nx, ny):
                continue
            if stride == 2:
                grid.carve(x + dx, y + dy)
            grid.carve(nx, ny)
            x, y = nx, ny


def open_random_walls(grid, rng, complexity, rate=OPENING_RATE):
    """Flip each wall cell to path with probability complexity * rate"""
    chance = complexity * rate
    if chance <= 0:
        return
    for row in grid.cells:
        for c in row:
            if c.is_wall and rng.random() < chance:
                grid.carve(c.x, c.y)


# ========== STRATEGY LIST ==========

STRATEGIES = {
    'straight': carve_straight,
    'bend': carve_bend,
    'zigzag': carve_zigzag,
    'staircase': carve_staircase,
    'branch': carve_branch,
    'serpentine': carve_serpentine,
    'corridors': carve_corridors,
    'rooms': carve_rooms,
    'cross': carve_cross,
    'dead_ends': carve_dead_ends,
    'backtracker': carve_backtracker,
}


# ========== ASSEMBLER ==========

def build_maze(cols, rows, level, rng=None, strategy=None):
    """
    Build a solvable maze

    Args:
        cols, rows: Grid dimensions
        level: Level number, picks the strategy and its complexity
        rng: random.Random source, fresh if omitted
        strategy: Optional carving callable overriding the level's strategy

    Returns:
        Frozen MazeGrid with a walkable route from START_POS to the
        opposite corner
    """
    rng = rng or random.Random()
    config = get_difficulty_config(level)
    if strategy is None:
        strategy = STRATEGIES[config.strategy]

    grid = MazeGrid(cols, rows)
    strategy(grid, cols, rows, level, rng)

    start = START_POS
    goal = (cols - 1, rows - 1)
    grid.mark_start(*start)
    grid.mark_goal(*goal)

    declump(grid, rng, config.declump_chance, DECLUMP_BLOCK_SIZES)

    if not is_reachable(grid, start, goal):
        logger.warning("Level %d maze (%dx%d, %s) is unsolvable, carving fallback path",
                       level, cols, rows, getattr(strategy, "__name__", strategy))
        carve_guaranteed_path(grid, start, goal)
        grid.mark_start(*start)
        grid.mark_goal(*goal)

    return grid.freeze()


def get_maze_for_level(level, rng=None):
    """Build the maze for a level, sized by the level sizing policy"""
    config = get_difficulty_config(level)
    return build_maze(config.cols, config.rows, config.level, rng)
