"""
Toddler Maze - terminal preview

Builds the maze for a level and prints it as text, optionally under fog of
war or with the hint route drawn in.
"""

import argparse
import logging
import random
import sys

from config import GAME_TITLE, GAME_VERSION
from game.level_manager import LevelManager
from game.save_manager import SaveManager
from maze.difficulty import get_difficulty_description
from utils.constants import (
    MIN_LEVEL, MAX_LEVEL,
    SAVE_DIR, SAVE_SLOT,
    GLYPH_FOG, GLYPH_HINT, GLYPH_PLAYER,
)


def render_level(level, fog=False, hint=False):
    """
    Text picture of a level

    Args:
        level: game.level_manager.Level with a generated grid
        fog: Hide cells the player cannot see
        hint: Mark the shortest route from the player to the goal
    """
    grid = level.grid
    visible, _ = level.visibility() if fog else (None, None)
    route = set(level.get_hint()) if hint else set()

    lines = []
    for y in range(grid.rows):
        chars = []
        for x in range(grid.cols):
            cell = grid.cells[y][x]
            if (x, y) == level.player_pos:
                chars.append(GLYPH_PLAYER)
            elif visible is not None and not visible[y, x]:
                chars.append(GLYPH_FOG)
            elif (x, y) in route and not cell.is_goal:
                chars.append(GLYPH_HINT)
            else:
                chars.append(cell.glyph())
        lines.append("".join(chars))
    return "\n".join(lines)


def parse_args(argv=None):
    parser = argparse.ArgumentParser(prog="toddler-maze", description=f"{GAME_TITLE} maze preview")
    parser.add_argument("--level", type=int, default=MIN_LEVEL,
                        help=f"level to build ({MIN_LEVEL}-{MAX_LEVEL})")
    parser.add_argument("--seed", type=int, default=None, help="seed for a reproducible maze")
    parser.add_argument("--fog", action="store_true", help="hide unexplored cells on levels that use fog of war")
    parser.add_argument("--hint", action="store_true", help="draw the shortest route")
    parser.add_argument("--resume", action="store_true", help="continue the saved level instead of --level")
    parser.add_argument("--save", action="store_true", help="write session progress after building the level")
    parser.add_argument("--save-dir", default=SAVE_DIR, help="directory holding save slots")
    parser.add_argument("--slot", default=SAVE_SLOT, help="save slot name")
    parser.add_argument("-v", "--verbose", action="store_true", help="debug logging")
    parser.add_argument("--version", action="version", version=f"%(prog)s {GAME_VERSION}")
    args = parser.parse_args(argv)
    if not MIN_LEVEL <= args.level <= MAX_LEVEL:
        parser.error(f"--level must be between {MIN_LEVEL} and {MAX_LEVEL}")
    return args


def main(argv=None):
    args = parse_args(argv)
    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )

    rng = random.Random(args.seed) if args.seed is not None else None
    saves = SaveManager(args.save_dir) if args.save or args.resume else None

    level = None
    if args.resume:
        progress = saves.load_progress(args.slot)
        if progress is not None:
            manager = LevelManager(progress, rng=rng)
            level = manager.resume()
    if level is None:
        manager = LevelManager(rng=rng)
        level = manager.select_level(args.level)

    if args.save and not saves.save_progress(manager.progress, args.slot):
        print(f"Could not save progress to slot {args.slot!r}", file=sys.stderr)

    print(get_difficulty_description(level.level), end="")
    print(render_level(level, fog=args.fog, hint=args.hint))
    return 0


if __name__ == "__main__":
    sys.exit(main())
