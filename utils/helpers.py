"""
Helper utility functions for the maze engine
"""


def clamp(value, min_value, max_value):
    """Clamp a value between min and max"""
    return max(min_value, min(value, max_value))


def manhattan_distance(x1, y1, x2, y2):
    """Calculate Manhattan distance between two points"""
    return abs(x2 - x1) + abs(y2 - y1)


def coord_key(x, y):
    """Explored-set key for a cell"""
    return f"{x},{y}"


def parse_coord_key(key):
    """Inverse of coord_key, returns (x, y); raises ValueError on a malformed key"""
    try:
        xs, ys = str(key).split(",")
        return int(xs), int(ys)
    except ValueError:
        raise ValueError(f"malformed cell key: {key!r}") from None


def as_position(value):
    """(x, y) int tuple from a saved position, or None if it is not a pair of ints"""
    try:
        x, y = value
    except (TypeError, ValueError):
        return None
    if isinstance(x, bool) or isinstance(y, bool) or not isinstance(x, int) or not isinstance(y, int):
        return None
    return x, y
