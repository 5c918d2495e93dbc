"""
Play session - moves, fog of war, progress and saves
"""

from .collision import is_valid_move, attempt_move, MoveResult
from .fog_of_war import FogOfWar, is_visible, is_explored, visibility_of
from .level_manager import Level, LevelManager
from .save_manager import SaveManager

__all__ = ['is_valid_move', 'attempt_move', 'MoveResult',
           'FogOfWar', 'is_visible', 'is_explored', 'visibility_of',
           'Level', 'LevelManager', 'SaveManager']
