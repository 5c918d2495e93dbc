"""
Level Manager - handles maze generation, player moves and level progression
"""

import logging

from maze.generator import build_maze
from maze.maze_core import bfs_shortest_path
from maze.difficulty import get_difficulty_config
from game.collision import attempt_move, MoveResult
from game.fog_of_war import FogOfWar, visibility_of
from game.game_state import GameProgress, calculate_level_score, calculate_progress
from utils.constants import START_POS, MAX_LEVEL
from utils.helpers import as_position

logger = logging.getLogger(__name__)


class Level:
    """
    Represents a single level/maze
    """
    def __init__(self, level):
        """
        Args:
            level: Level number (1 and up)
        """
        self.config = get_difficulty_config(level)
        self.level = self.config.level

        # Maze data
        self.grid = None
        self.cols = self.config.cols
        self.rows = self.config.rows

        # Positions
        self.start_pos = START_POS
        self.goal_pos = (self.cols - 1, self.rows - 1)
        self.player_pos = self.start_pos

        # Level state
        self.moves = 0
        self.completed = False
        self.fog = FogOfWar(self.cols, self.rows, self.start_pos,
                            enabled=self.config.fog_enabled,
                            explore_radius=self.config.explore_radius)

    def generate_maze(self, rng=None):
        """Generate the maze for this level; the previous grid is discarded"""
        self.grid = build_maze(self.cols, self.rows, self.level, rng)
        return self.grid

    def move_to(self, x, y):
        """
        Try to step the player onto (x, y)

        Returns:
            MoveResult
        """
        if self.grid is None or self.completed:
            return MoveResult(False, self.player_pos)

        result = attempt_move(self.grid, self.player_pos, (x, y))
        if not result.accepted:
            return result

        self.player_pos = result.position
        self.moves += 1
        self.fog.reveal(x, y)

        if result.reached_goal:
            self.completed = True
        return result

    def get_hint(self):
        """Shortest route from the player to the goal"""
        if self.grid is None:
            return []
        return bfs_shortest_path(self.grid, self.player_pos, self.goal_pos)

    def visibility(self):
        """(visible, explored) arrays for the current fog state"""
        return visibility_of(self.grid, self.player_pos, self.fog.explored, self.fog.enabled)

    def get_progress(self):
        if self.completed:
            return 100.0
        return calculate_progress(self.player_pos, self.goal_pos, self.cols)

    def reset(self):
        """Reset level to initial state, keeping the same maze"""
        self.player_pos = self.start_pos
        self.moves = 0
        self.completed = False
        self.fog.reset(self.start_pos)

    def __repr__(self):
        return f"Level(level={self.level}, size={self.cols}x{self.rows}, strategy={self.config.strategy!r})"


class LevelManager:
    """
    Manages level progression and session progress
    """
    def __init__(self, progress=None, rng=None):
        """
        Args:
            progress: GameProgress to continue, fresh if omitted
            rng: random.Random shared by every maze this session builds
        """
        self.progress = progress or GameProgress()
        self.rng = rng
        self.current_level = None

    def select_level(self, level):
        """
        Build a new maze for a level

        Returns:
            Level object, or None when the level is locked
        """
        if not self.progress.is_unlocked(level):
            logger.debug("Level %s is locked (unlocked up to %d)", level, self.progress.unlocked_levels)
            return None

        current = Level(level)
        current.generate_maze(self.rng)
        self.current_level = current
        logger.debug("Selected %r", current)

        self.progress.current_level = current.level
        self.progress.is_complete = False
        self.progress.use_fog_of_war = current.fog.enabled
        self._sync_progress()
        return current

    def resume(self):
        """
        Rebuild the saved level and restore position and fog where possible.
        Mazes are regenerated, so a saved position that is no longer walkable
        falls back to the start, as does one that is not an (x, y) pair.
        Explored keys that do not parse are dropped.
        """
        saved_keys = list(self.progress.explored_cells or [])
        saved_pos = self.progress.player_position
        current = self.select_level(self.progress.current_level)
        if current is None:
            return None

        current.fog = FogOfWar.from_keys(current.cols, current.rows, saved_keys,
                                         enabled=current.fog.enabled,
                                         explore_radius=current.fog.explore_radius)
        if not current.fog.explored:
            current.fog.reset(current.start_pos)

        position = as_position(saved_pos)
        if position is not None and current.grid.is_walkable(*position):
            current.player_pos = position
        else:
            logger.debug("Saved position %r is unusable, starting at the entrance", saved_pos)
        self._sync_progress()
        return current

    def next_level(self):
        """Advance to the following level, None past MAX_LEVEL"""
        if self.current_level is None:
            return self.select_level(self.progress.current_level)
        if self.current_level.level + 1 > MAX_LEVEL:
            return None
        return self.select_level(self.current_level.level + 1)

    def restart_level(self):
        """Put the player back at the start of the same maze"""
        if self.current_level is None:
            return
        self.current_level.reset()
        self.progress.is_complete = False
        self._sync_progress()

    def move_player(self, x, y):
        """
        Move the player to (x, y) if legal, scoring the level on arrival

        Returns:
            MoveResult
        """
        if self.current_level is None:
            return MoveResult(False, self.progress.player_position)

        level = self.current_level
        result = level.move_to(x, y)
        if not result.accepted:
            return result

        if result.reached_goal:
            score = calculate_level_score(level.level, level.moves)
            self.progress.mark_completed(level.level, score)
            logger.debug("Level %d complete in %d moves, +%d points", level.level, level.moves, score)

        self._sync_progress()
        return result

    def get_hint(self):
        if self.current_level is None:
            return []
        return self.current_level.get_hint()

    def get_progress(self):
        if self.current_level is None:
            return 0.0
        return self.current_level.get_progress()

    def visibility(self):
        if self.current_level is None:
            return None
        return self.current_level.visibility()

    def _sync_progress(self):
        level = self.current_level
        self.progress.player_position = level.player_pos
        self.progress.explored_cells = level.fog.explored_keys()

    def __repr__(self):
        return f"LevelManager(progress={self.progress!r}, current_level={self.current_level!r})"
