# Position arithmetic on the wrap-around grid plus the direction vocabulary.
from __future__ import annotations


Position = tuple[int, int]

ACTIONS = ("up", "down", "left", "right")
REVERSE_DIRECTION = {"up": "down", "down": "up", "left": "right", "right": "left"}
DIRECTION_DELTAS = {
    "up": (0, -1),
    "down": (0, 1),
    "left": (-1, 0),
    "right": (1, 0),
}


def opposite(direction: str) -> str:
    """Return the 180-degree reverse of a direction."""
    try:
        return REVERSE_DIRECTION[direction]
    except KeyError:
        raise ValueError(f"Unknown direction: {direction!r}") from None


def move_by(position: Position, direction: str, width: int, height: int) -> Position:
    """Step one cell; both axes wrap so leaving an edge re-enters at the opposite one."""
    try:
        dx, dy = DIRECTION_DELTAS[direction]
    except KeyError:
        raise ValueError(f"Unknown direction: {direction!r}") from None
    x, y = position
    # Python's % is floored, so -1 lands on the high edge.
    return (x + dx) % width, (y + dy) % height


def manhattan_distance(a: Position, b: Position) -> int:
    """
    Straight-line grid distance on the unwrapped board.

    Wrap shortcuts are ignored on purpose: the planner's behavior depends on
    this estimate, so paths near the edges may be longer than the true
    toroidal optimum.
    """
    return abs(a[0] - b[0]) + abs(a[1] - b[1])


def neighbors(position: Position, width: int, height: int) -> list[tuple[str, Position]]:
    return [(direction, move_by(position, direction, width, height)) for direction in ACTIONS]
