# Grid search helpers for the autonomous snake: A* routing, flood fill, safety check.
from __future__ import annotations

from collections import deque
from collections.abc import Collection, Sequence
from dataclasses import dataclass, field
import heapq
import itertools

try:
    from .geometry import Position, manhattan_distance, move_by, neighbors, opposite
except ImportError:
    from geometry import Position, manhattan_distance, move_by, neighbors, opposite


@dataclass(order=True)
class SearchNode:
    """
    Frontier entry for A*.

    Ordering compares ``f`` first and then ``order`` (push sequence number),
    so the heap pops the lowest estimated total cost. Ties between equal ``f``
    values come out in push order; callers should not rely on which of
    several equally short routes is returned.
    """
    f: int
    order: int
    position: Position = field(compare=False)
    g: int = field(compare=False)
    h: int = field(compare=False)
    direction: str | None = field(default=None, compare=False)


def flood_fill_count(
    start: Position,
    forbidden: Collection[Position],
    width: int,
    height: int,
) -> int:
    """
    Count cells reachable from start with 4-way moves, start included.

    The start cell is always counted, even when it appears in ``forbidden``;
    every other forbidden cell is never entered. ``forbidden`` is read only.
    """
    visited = {start}
    queue: deque[Position] = deque([start])
    while queue:
        current = queue.popleft()
        for _, nxt in neighbors(current, width, height):
            if nxt in visited or nxt in forbidden:
                continue
            visited.add(nxt)
            queue.append(nxt)
    return len(visited)


def find_path(
    start: Position,
    goal: Position,
    obstacles: Collection[Position],
    width: int,
    height: int,
) -> list[str] | None:
    """
    Shortest list of directions from start to goal that never enters an obstacle.

    Returns ``[]`` when start == goal and ``None`` when goal is unreachable.
    The start cell itself is not checked against ``obstacles`` because the
    snake's head is normally part of the obstacle set.
    """
    if start == goal:
        return []

    counter = itertools.count()
    h0 = manhattan_distance(start, goal)
    frontier: list[SearchNode] = [SearchNode(h0, next(counter), start, 0, h0)]
    best_g: dict[Position, int] = {start: 0}
    came_from: dict[Position, str] = {}  # cell -> direction that first reached it
    closed: set[Position] = set()

    while frontier:
        node = heapq.heappop(frontier)
        if node.position in closed:
            continue
        if node.position == goal:
            return _reconstruct(came_from, start, goal, width, height)
        closed.add(node.position)

        for direction, nxt in neighbors(node.position, width, height):
            if nxt in obstacles or nxt in closed:
                continue
            g = node.g + 1
            if g >= best_g.get(nxt, g + 1):
                continue
            best_g[nxt] = g
            came_from[nxt] = direction
            h = manhattan_distance(nxt, goal)
            heapq.heappush(frontier, SearchNode(g + h, next(counter), nxt, g, h, direction))

    return None


def _reconstruct(
    came_from: dict[Position, str],
    start: Position,
    goal: Position,
    width: int,
    height: int,
) -> list[str]:
    path: list[str] = []
    current = goal
    while current != start:
        direction = came_from[current]
        path.append(direction)
        current = move_by(current, opposite(direction), width, height)
    path.reverse()
    return path


def is_safe_move(candidate_head: Position, body: Sequence[Position], width: int, height: int) -> bool:
    """
    True if moving the head to ``candidate_head`` leaves more free cells than the
    snake is long. The current head cell is treated as vacated.

    This is a one-step capacity heuristic, not a survival guarantee.
    """
    forbidden = set(list(body)[1:])
    return flood_fill_count(candidate_head, forbidden, width, height) > len(body)
