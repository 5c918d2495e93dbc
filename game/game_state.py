"""
Game progress - session record carried across levels, plus scoring
"""

from utils.constants import (
    MIN_LEVEL, MAX_LEVEL, INITIAL_UNLOCKED_LEVELS, START_POS,
    SCORE_PER_LEVEL, SCORE_MOVE_BONUS,
)
from utils.helpers import clamp, coord_key, manhattan_distance


def calculate_level_score(level, moves):
    """Base score per level plus a bonus for finishing in few moves"""
    return level * SCORE_PER_LEVEL + max(0, SCORE_MOVE_BONUS - moves)


def calculate_progress(player_pos, goal_pos, maze_size):
    """
    Rough closeness to the goal as a percentage (0-100)

    Args:
        maze_size: Grid side length
    """
    distance = manhattan_distance(*player_pos, *goal_pos)
    max_distance = maze_size * 2
    return clamp((max_distance - distance) / max_distance * 100, 0, 100)


class GameProgress:
    """
    Everything the session needs to resume: level, position, fog, score
    """
    def __init__(self):
        self.current_level = MIN_LEVEL
        self.player_position = START_POS
        self.completed_levels = []
        self.total_score = 0
        self.unlocked_levels = INITIAL_UNLOCKED_LEVELS
        self.is_complete = False
        self.explored_cells = [coord_key(*START_POS)]
        self.use_fog_of_war = False

    def mark_completed(self, level, score):
        """Record a finished level; replaying a level still adds its score"""
        if level not in self.completed_levels:
            self.completed_levels.append(level)
        self.total_score += score
        self.unlocked_levels = min(MAX_LEVEL, max(self.unlocked_levels, level + 1))
        self.is_complete = True

    def is_unlocked(self, level):
        return MIN_LEVEL <= level <= self.unlocked_levels

    def to_dict(self):
        return {
            'current_level': self.current_level,
            'player_position': list(self.player_position),
            'completed_levels': list(self.completed_levels),
            'total_score': self.total_score,
            'unlocked_levels': self.unlocked_levels,
            'is_complete': self.is_complete,
            'explored_cells': list(self.explored_cells),
            'use_fog_of_war': self.use_fog_of_war,
        }

    @classmethod
    def from_dict(cls, data):
        """
        Restore progress from saved data; missing keys keep their defaults.
        Every level stays selectable regardless of what was saved.
        """
        progress = cls()
        progress.current_level = int(data.get('current_level', progress.current_level))
        progress.player_position = tuple(data.get('player_position', progress.player_position))
        progress.completed_levels = [int(lv) for lv in data.get('completed_levels', [])]
        progress.total_score = int(data.get('total_score', 0))
        progress.unlocked_levels = max(INITIAL_UNLOCKED_LEVELS,
                                       int(data.get('unlocked_levels', MIN_LEVEL)))
        progress.is_complete = bool(data.get('is_complete', False))
        progress.explored_cells = list(data.get('explored_cells') or progress.explored_cells)
        progress.use_fog_of_war = bool(data.get('use_fog_of_war', False))
        return progress

    def __repr__(self):
        return (f"GameProgress(level={self.current_level}, score={self.total_score}, "
                f"completed={len(self.completed_levels)})")
