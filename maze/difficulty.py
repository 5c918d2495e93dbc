"""
Difficulty configuration per level
Maps a level number to grid size, carving strategy, fog rules and
child-friendly UI hints
"""

import math

from utils.constants import (
    MIN_LEVEL, MIN_GRID_SIZE, MAX_GRID_SIZE,
    BACKTRACKER_LEVEL, COMPLEXITY_RAMP_LEVELS,
    FOG_START_LEVEL, EXPLORE_RADIUS_EASY, EXPLORE_RADIUS_HARD,
    EXPLORE_RADIUS_EASY_MAX_LEVEL,
)
from utils.helpers import clamp


class DifficultyConfig:
    """Configuration for a single level"""
    def __init__(self, **kwargs):
        self.level = kwargs.get('level', MIN_LEVEL)

        # Maze dimensions
        self.cols = kwargs.get('cols', MIN_GRID_SIZE)
        self.rows = kwargs.get('rows', MIN_GRID_SIZE)

        # Maze generation
        self.strategy = kwargs.get('strategy', 'straight')
        self.complexity = kwargs.get('complexity', 0.0)
        self.declump_chance = kwargs.get('declump_chance', 0.0)

        # Fog of war
        self.fog_enabled = kwargs.get('fog_enabled', False)
        self.explore_radius = kwargs.get('explore_radius', EXPLORE_RADIUS_EASY)

        # UI hints for young players
        self.show_hints_easily = kwargs.get('show_hints_easily', True)
        self.allow_multiple_hints = kwargs.get('allow_multiple_hints', True)
        self.highlight_goal = kwargs.get('highlight_goal', True)
        self.larger_touch_targets = kwargs.get('larger_touch_targets', True)
        self.animated_path_hints = kwargs.get('animated_path_hints', True)
        self.celebration_duration_ms = kwargs.get('celebration_duration_ms', 3000)

    def __repr__(self):
        return (f"DifficultyConfig(level={self.level}, size={self.cols}x{self.rows}, "
                f"strategy={self.strategy!r}, complexity={self.complexity:.2f})")


# ========== LEVEL BANDS ==========

# (last level of band, grid size)
SIZE_BANDS = [
    (1, 3),
    (3, 4),
    (5, 5),
    (8, 6),
    (12, 7),
    (18, 8),
]
SIZE_GROWTH_LEVELS = 5  # levels per extra row/column past the last band

# (last level of band, carving strategy); BACKTRACKER_LEVEL and up use 'backtracker'
STRATEGY_BANDS = [
    (1, 'straight'),
    (3, 'bend'),
    (4, 'zigzag'),
    (5, 'staircase'),
    (7, 'branch'),
    (8, 'serpentine'),
    (10, 'corridors'),
    (12, 'rooms'),
    (13, 'cross'),
    (BACKTRACKER_LEVEL - 1, 'dead_ends'),
]

# Strategies whose layout leaves solid wall blocks worth breaking up
DECLUMP_STRATEGIES = {'rooms', 'cross', 'backtracker'}
DECLUMP_CHANCE = 0.25


def _normalize(level):
    return max(MIN_LEVEL, int(level))


def size_for(level):
    """
    Grid size for a level

    Returns:
        (cols, rows) tuple, non-decreasing in level and capped at MAX_GRID_SIZE
    """
    level = _normalize(level)
    for last, size in SIZE_BANDS:
        if level <= last:
            return size, size

    last_level, last_size = SIZE_BANDS[-1]
    size = min(MAX_GRID_SIZE, last_size + (level - last_level) // SIZE_GROWTH_LEVELS)
    return size, size


def strategy_for(level):
    """Carving strategy name for a level"""
    level = _normalize(level)
    for last, name in STRATEGY_BANDS:
        if level <= last:
            return name
    return 'backtracker'


def complexity_for(level):
    """
    Complexity scalar in [0, 1] for randomized carving

    Zero below BACKTRACKER_LEVEL, then ramps linearly to 1.0.
    """
    level = _normalize(level)
    if level < BACKTRACKER_LEVEL:
        return 0.0
    return clamp((level - BACKTRACKER_LEVEL + 1) / COMPLEXITY_RAMP_LEVELS, 0.0, 1.0)


def should_use_fog_of_war(level):
    return _normalize(level) >= FOG_START_LEVEL


def get_explore_radius(level):
    """Cells revealed around each new position; wider for beginners"""
    if _normalize(level) <= EXPLORE_RADIUS_EASY_MAX_LEVEL:
        return EXPLORE_RADIUS_EASY
    return EXPLORE_RADIUS_HARD


def get_difficulty_config(level):
    """
    Get configuration for a level

    Args:
        level: Positive integer, values below MIN_LEVEL are clamped

    Returns:
        DifficultyConfig object
    """
    level = _normalize(level)
    cols, rows = size_for(level)
    strategy = strategy_for(level)

    return DifficultyConfig(
        level=level,
        cols=cols,
        rows=rows,
        strategy=strategy,
        complexity=complexity_for(level),
        declump_chance=DECLUMP_CHANCE if strategy in DECLUMP_STRATEGIES else 0.0,
        fog_enabled=should_use_fog_of_war(level),
        explore_radius=get_explore_radius(level),
        show_hints_easily=level <= 6,
        allow_multiple_hints=level <= 3,
        highlight_goal=level <= 5,
        larger_touch_targets=level <= 8,
        animated_path_hints=level <= 10,
        celebration_duration_ms=3000 if level <= 3 else 2000,
    )


def get_difficulty_description(level):
    """Get detailed description of a level"""
    config = get_difficulty_config(level)

    desc = f"Level {config.level}\n"
    desc += f"Maze: {config.cols}x{config.rows} ({config.strategy})\n"
    if not math.isclose(config.complexity, 0.0):
        desc += f"Complexity: {config.complexity:.0%}\n"

    if config.fog_enabled:
        desc += f"Fog of War: {config.explore_radius} cells\n"
    else:
        desc += "Fog of War: Disabled\n"

    return desc
