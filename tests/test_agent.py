"""Tests for the A* agent's decision policy."""

from collections import deque

from agent import POLICY_FALLBACK, POLICY_PATH, POLICY_STAY, SnakeAStarAgent
from game_logic import SnakeConfig, SnakeGame
from geometry import move_by
from pathfinding import is_safe_move


def boxed_in_game() -> SnakeGame:
    """
    4x4 board where the head's four neighbors are all body cells.

    Free cells are (3, 0) and (3, 3); the apple sits on one of them.
    """
    game = SnakeGame(SnakeConfig(grid_width=4, grid_height=4, mode="agent"))
    game.snake.body = deque([
        (1, 1), (0, 1), (0, 0), (1, 0), (2, 0), (2, 1), (3, 1),
        (3, 2), (2, 2), (1, 2), (0, 2), (0, 3), (1, 3), (2, 3),
    ])
    game.snake.direction = "right"
    game.snake.pending_direction = "right"
    game.apple = (3, 0)
    return game


def split_board_game() -> SnakeGame:
    """
    10x10 board cut into two sealed rooms by the body.

    The head at (5, 0) can turn left into a 36-cell room or right into a
    40-cell room; straight ahead wraps onto its own body.
    """
    game = SnakeGame(SnakeConfig(grid_width=10, grid_height=10, mode="agent"))
    column5 = [(5, y) for y in range(10)]
    bottom_row = [(x, 9) for x in range(4, 0, -1)]
    column0 = [(0, y) for y in range(9, -1, -1)]
    game.snake.body = deque(column5 + bottom_row + column0 + [(1, 0)])
    game.snake.direction = "up"
    game.snake.pending_direction = "up"
    game.apple = None
    return game


class TestValidActions:
    """Tests for reverse filtering."""

    def test_reverse_is_excluded(self):
        agent = SnakeAStarAgent()
        assert agent.valid_actions("right") == ["up", "down", "right"]
        assert agent.valid_actions("up") == ["up", "left", "right"]


class TestPrimaryPolicy:
    """Tests for following the A* route."""

    def test_first_move_heads_toward_apple(self):
        """From (20,15) heading right with the apple at (10,10), the only shortening move is up."""
        game = SnakeGame(SnakeConfig(mode="agent"))
        agent = SnakeAStarAgent()
        assert game.snake.head() == (20, 15)
        assert game.apple == (10, 10)

        direction = agent.select_action(game)
        assert direction == "up"
        assert agent.last_policy == POLICY_PATH
        assert len(agent.last_path) == 15
        assert agent.last_path[0] == direction

    def test_act_queues_direction(self):
        game = SnakeGame(SnakeConfig(mode="agent"))
        agent = SnakeAStarAgent()
        agent.act(game)
        assert game.snake.pending_direction == "up"

    def test_agent_eats_apple_in_straight_line(self):
        game = SnakeGame(SnakeConfig(mode="agent"))
        game.apple = (24, 15)
        agent = SnakeAStarAgent()
        for _ in range(4):
            agent.act(game)
            assert game.move() is True
        assert game.score == 1
        assert agent.policy_counts[POLICY_PATH] == 4

    def test_route_enters_room_holding_apple(self):
        """The head borders both rooms; the planner turns toward whichever holds the apple."""
        game = split_board_game()
        game.apple = (2, 4)
        agent = SnakeAStarAgent()
        assert agent.select_action(game) == "left"
        assert agent.last_policy == POLICY_PATH

        game.apple = (7, 4)
        assert agent.select_action(game) == "right"
        assert agent.last_policy == POLICY_PATH

    def test_single_cell_snake_routes_around_instead_of_reversing(self):
        """With the apple two cells behind a one-cell snake the route may not start backwards."""
        game = SnakeGame(SnakeConfig(initial_length=1, mode="agent", initial_apple=(18, 15)))
        agent = SnakeAStarAgent()
        assert list(game.snake.body) == [(20, 15)]
        assert game.snake.direction == "right"

        direction = agent.act(game)
        assert direction in ("up", "down")
        assert direction == game.snake.pending_direction
        assert agent.last_policy == POLICY_PATH
        assert len(agent.last_path) == 4

    def test_single_cell_snake_never_reverses_onto_apple(self):
        """An apple right behind the head is not reachable in one step."""
        game = SnakeGame(SnakeConfig(initial_length=1, mode="agent", initial_apple=(19, 15)))
        agent = SnakeAStarAgent()
        direction = agent.act(game)
        assert direction != "left"
        assert direction == game.snake.pending_direction


class TestFallbackPolicy:
    """Tests for the free-space fallback."""

    def test_no_apple_ties_keep_enumeration_order(self):
        """On an open board every option reaches the same space, so the first wins."""
        game = SnakeGame(SnakeConfig(mode="agent"))
        game.apple = None
        agent = SnakeAStarAgent()
        assert agent.select_action(game) == "up"
        assert agent.last_policy == POLICY_FALLBACK
        assert agent.last_path == []

    def test_picks_larger_room(self):
        game = split_board_game()
        agent = SnakeAStarAgent()
        assert agent.select_action(game) == "right"
        assert agent.last_policy == POLICY_FALLBACK

    def test_unsafe_first_step_falls_back(self):
        """
        On a 7-cell ring the route to the apple leaves exactly body-length room,
        so the path is rejected and the free-space choice is used instead.
        """
        game = SnakeGame(SnakeConfig(grid_width=7, grid_height=1, mode="agent"))
        game.snake.body = deque([(0, 0), (1, 0), (2, 0), (3, 0)])
        game.snake.direction = "left"
        game.snake.pending_direction = "left"
        game.apple = (5, 0)
        agent = SnakeAStarAgent()
        assert agent.select_action(game) == "left"
        assert agent.last_policy == POLICY_FALLBACK


class TestTrappedSnake:
    """A snake that has boxed its own head in."""

    def test_every_move_is_unsafe(self):
        game = boxed_in_game()
        body = list(game.snake.body)
        head = game.snake.head()
        for direction in ("up", "down", "left", "right"):
            candidate = move_by(head, direction, 4, 4)
            assert is_safe_move(candidate, body, 4, 4) is False

    def test_agent_keeps_heading_then_collides(self):
        game = boxed_in_game()
        game.score = 7
        agent = SnakeAStarAgent()

        assert agent.act(game) == "right"
        assert agent.last_policy == POLICY_STAY

        assert game.move() is False
        assert game.game_over is True
        assert game.score == 7
