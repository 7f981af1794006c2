# A*-driven agent for Snake: shortest path to the apple, flood-fill safety, free-space fallback.
from __future__ import annotations

from collections import Counter

try:
    from .game_logic import SnakeGame
    from .geometry import ACTIONS, REVERSE_DIRECTION, Position, move_by, opposite
    from .pathfinding import find_path, flood_fill_count, is_safe_move
except ImportError:
    from game_logic import SnakeGame
    from geometry import ACTIONS, REVERSE_DIRECTION, Position, move_by, opposite
    from pathfinding import find_path, flood_fill_count, is_safe_move

VALID_ACTIONS_BY_DIRECTION = {
    direction: [action for action in ACTIONS if action != REVERSE_DIRECTION[direction]]
    for direction in ACTIONS
}

POLICY_PATH = "path"
POLICY_FALLBACK = "fallback"
POLICY_STAY = "stay"


class SnakeAStarAgent:
    """
    Picks one direction per decision tick.

    Primary policy follows the first step of an A* route to the apple when the
    flood-fill check says that step leaves room for the body. Otherwise the
    agent falls back to a one-ply greedy choice that maximizes reachable free
    space, and keeps its heading when every move is blocked.
    """

    def __init__(self) -> None:
        self.last_path: list[str] = []
        self.last_policy: str | None = None
        self.policy_counts: Counter[str] = Counter()

    def reset_stats(self) -> None:
        self.last_path = []
        self.last_policy = None
        self.policy_counts.clear()

    def valid_actions(self, current_direction: str) -> list[str]:
        return VALID_ACTIONS_BY_DIRECTION[current_direction]

    def select_action(self, game: SnakeGame) -> str:
        snake = game.snake
        width, height = game.config.grid_width, game.config.grid_height
        head = snake.head()
        body = list(snake.body)

        if game.apple is not None:
            # A one-cell body does not cover the cell behind the head, but
            # stepping there is still a reversal.
            obstacles = set(body)
            obstacles.add(move_by(head, opposite(snake.direction), width, height))
            path = find_path(head, game.apple, obstacles, width, height)
            if path:
                first = path[0]
                if is_safe_move(move_by(head, first, width, height), body, width, height):
                    return self._commit(POLICY_PATH, first, path)

        choice = self._most_space(snake.direction, head, body, width, height)
        if choice is None:
            return self._commit(POLICY_STAY, snake.direction, [])
        return self._commit(POLICY_FALLBACK, choice, [])

    def act(self, game: SnakeGame) -> str:
        """Decide and queue the move on the game."""
        direction = self.select_action(game)
        game.queue_direction(direction)
        return direction

    def _most_space(
        self,
        heading: str,
        head: Position,
        body: list[Position],
        width: int,
        height: int,
    ) -> str | None:
        occupied = set(body)
        # The tail vacates on a normal step.
        base_forbidden = set(body[:-1])
        best_direction: str | None = None
        best_space = -1
        for direction in self.valid_actions(heading):
            target = move_by(head, direction, width, height)
            if target in occupied:
                continue
            space = flood_fill_count(target, base_forbidden | {target}, width, height)
            # Strict comparison keeps the earliest direction on ties.
            if space > best_space:
                best_space = space
                best_direction = direction
        return best_direction

    def _commit(self, policy: str, direction: str, path: list[str]) -> str:
        self.last_policy = policy
        self.last_path = path
        self.policy_counts[policy] += 1
        return direction
