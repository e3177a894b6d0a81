import math

from autonation.content.specs import BoundingBox, Cell


def simple_hash(text: str) -> int:
    """32-bit "shift-5 minus" string hash, made non-negative."""
    value = 0
    for char in text:
        value = ((value << 5) - value + ord(char)) & 0xFFFFFFFF
    if value >= 0x80000000:
        value -= 0x100000000
    return abs(value)


def round_half_up(value) -> int:
    """Round to the nearest integer, halves going up (not banker's rounding)."""
    return int(math.floor(value + 0.5))


def manhattan_dist_fn(root, dist: int):
    def _within(game, tile) -> bool:
        return game.manhattan_dist(root, tile) <= dist
    return _within


def eucl_dist_fn(root, dist: int):
    limit = dist * dist

    def _within(game, tile) -> bool:
        return game.euclidean_dist_squared(root, tile) <= limit
    return _within


def calculate_bounding_box(game, tiles) -> BoundingBox:
    min_x = min_y = math.inf
    max_x = max_y = -math.inf
    for tile in tiles:
        x, y = game.x(tile), game.y(tile)
        min_x, min_y = min(min_x, x), min(min_y, y)
        max_x, max_y = max(max_x, x), max(max_y, y)
    if min_x == math.inf:
        return BoundingBox(Cell(0, 0), Cell(0, 0))
    return BoundingBox(Cell(int(min_x), int(min_y)), Cell(int(max_x), int(max_y)))


def closest_two_tiles(game, sources, targets):
    """Returns the (source, target) pair with the smallest manhattan distance, or None."""
    sources = list(sources)
    targets = list(targets)
    if not sources or not targets:
        return None
    best = None
    best_dist = math.inf
    for src in sources:
        for dst in targets:
            dist = game.manhattan_dist(src, dst)
            if dist < best_dist:
                best_dist = dist
                best = (src, dst)
    return best
