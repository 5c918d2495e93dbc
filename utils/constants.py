"""
Global constants for the maze engine
"""

# Direction vectors (up, right, down, left)
DIRS = [
    (0, -1),
    (1, 0),
    (0, 1),
    (-1, 0),
]

# Cell glyphs for text dumps
GLYPH_WALL = "#"
GLYPH_PATH = "."
GLYPH_START = "S"
GLYPH_GOAL = "G"
GLYPH_FOG = "?"
GLYPH_HINT = "*"
GLYPH_PLAYER = "@"

# Start corner (goal is always the opposite corner)
START_POS = (0, 0)

# Levels
MIN_LEVEL = 1
MAX_LEVEL = 50
INITIAL_UNLOCKED_LEVELS = MAX_LEVEL  # any level can be picked from the menu

# Grid sizing
MIN_GRID_SIZE = 3
MAX_GRID_SIZE = 10

# First level that uses the randomized backtracker
BACKTRACKER_LEVEL = 16
# Levels past BACKTRACKER_LEVEL until complexity reaches 1.0
COMPLEXITY_RAMP_LEVELS = 20

# Backtracker augmentation
OPENING_RATE = 0.1          # wall->path flip rate at complexity 1.0
DEAD_END_MAX_LENGTH = 3
EXTRA_PATH_MAX_STEPS = 4

# Declumping
DECLUMP_BLOCK_SIZES = (3, 2)

# Fog of war
FOG_START_LEVEL = 12
PLAYER_REVEAL_RADIUS = 1     # Manhattan, live around the player
GOAL_REVEAL_RADIUS = 2       # Manhattan, around the goal flag
EXPLORE_RADIUS_EASY = 2      # Chebyshev, added to the explored set per move
EXPLORE_RADIUS_HARD = 1
EXPLORE_RADIUS_EASY_MAX_LEVEL = 5

# Score constants
SCORE_PER_LEVEL = 10
SCORE_MOVE_BONUS = 50

# Save file
SAVE_DIR = "saves"
SAVE_SLOT = "progress"
