"""
Game identity used by the terminal preview and save metadata
"""

GAME_TITLE = "Toddler Maze"
GAME_VERSION = "1.0.0"
