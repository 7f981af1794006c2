# Core Snake game state and rules, independent from GUI/rendering code.
from __future__ import annotations

from collections import deque
from dataclasses import dataclass
import random
import time
from typing import Iterator

try:
    from .geometry import ACTIONS, Position, move_by, opposite
    from .input_state import InputSnapshot
except ImportError:
    from geometry import ACTIONS, Position, move_by, opposite
    from input_state import InputSnapshot


# Bounds used by the CLI when validating user input.
MIN_GRID_SIZE = 4
MAX_GRID_SIZE = 200
MIN_CELL_SIZE = 4
MAX_CELL_SIZE = 64
MIN_TICK_MS = 10
MAX_TICK_MS = 2000
MIN_INITIAL_LENGTH = 1
TARGET_FPS = 60

CONTROL_MODES = ("human", "agent")


@dataclass
class SnakeConfig:
    """Runtime settings shared between the logic layer, renderer and GUI."""
    grid_width: int = 40
    grid_height: int = 30
    cell_size: int = 20
    tick_ms: int = 120
    initial_length: int = 3
    initial_apple: Position | None = (10, 10)
    max_spawn_attempts: int = 1000
    mode: str = "human"

    @property
    def screen_width(self) -> int:
        return self.grid_width * self.cell_size

    @property
    def screen_height(self) -> int:
        return self.grid_height * self.cell_size

    def validate(self) -> None:
        """Raise ValueError with a readable message for any out-of-range field."""
        for label, value in (("Grid width", self.grid_width), ("Grid height", self.grid_height)):
            if not (MIN_GRID_SIZE <= value <= MAX_GRID_SIZE):
                raise ValueError(f"{label} must be between {MIN_GRID_SIZE} and {MAX_GRID_SIZE}.")
        if not (MIN_CELL_SIZE <= self.cell_size <= MAX_CELL_SIZE):
            raise ValueError(f"Cell size must be between {MIN_CELL_SIZE} and {MAX_CELL_SIZE}.")
        if not (MIN_TICK_MS <= self.tick_ms <= MAX_TICK_MS):
            raise ValueError(f"Tick interval must be between {MIN_TICK_MS} and {MAX_TICK_MS} ms.")
        if not (MIN_INITIAL_LENGTH <= self.initial_length <= self.grid_width):
            raise ValueError(f"Initial length must be between {MIN_INITIAL_LENGTH} and {self.grid_width}.")
        if self.max_spawn_attempts < 0:
            raise ValueError("Spawn attempts cannot be negative.")
        if self.mode not in CONTROL_MODES:
            raise ValueError(f"Mode must be one of {', '.join(CONTROL_MODES)}.")


class Snake:
    """Ordered body on the wrapped grid; head at index 0, tail last."""

    def __init__(
        self,
        head: Position,
        width: int,
        height: int,
        length: int = 3,
        direction: str = "right",
    ) -> None:
        if length < 1:
            raise ValueError("Snake length must be at least 1.")
        self.width = width
        self.height = height
        self.body: deque[Position] = deque([head])
        # Lay the body out behind the head, away from the heading.
        behind = opposite(direction)
        for _ in range(length - 1):
            self.body.append(move_by(self.body[-1], behind, width, height))
        self.direction = direction
        self.pending_direction = direction  # queued from input; applied next advance

    def __len__(self) -> int:
        return len(self.body)

    def __iter__(self) -> Iterator[Position]:
        return iter(self.body)

    def head(self) -> Position:
        if not self.body:
            raise IndexError("Snake body is empty.")
        return self.body[0]

    def tail(self) -> Position:
        if not self.body:
            raise IndexError("Snake body is empty.")
        return self.body[-1]

    def set_direction(self, direction: str) -> None:
        """Queue a direction; an exact reversal of the active heading is ignored."""
        if direction == opposite(self.direction):
            return
        self.pending_direction = direction

    def advance(self, direction: str | None = None) -> Position:
        """Commit the heading and push a new head. The tail is left for the caller."""
        self.direction = direction if direction is not None else self.pending_direction
        self.pending_direction = self.direction
        new_head = move_by(self.head(), self.direction, self.width, self.height)
        self.body.appendleft(new_head)
        return new_head

    def shrink(self) -> None:
        self.body.pop()

    def contains(self, position: Position) -> bool:
        return position in self.body

    def serialize(self) -> list[int]:
        """Flat [x0, y0, x1, y1, ...] list, head first, for the renderer."""
        data: list[int] = []
        for x, y in self.body:
            data.append(x)
            data.append(y)
        return data


class SnakeGame:
    """Pure game state + rules (no Tkinter/UI code)."""
    def __init__(self, config: SnakeConfig) -> None:
        self.config = config
        self.mode = config.mode
        self.new_session()

    def new_session(self, mode: str | None = None) -> None:
        """Start a fresh game: new snake, score zero, new apple."""
        if mode is not None:
            if mode not in CONTROL_MODES:
                raise ValueError(f"Unknown control mode: {mode!r}")
            self.mode = mode
        cfg = self.config
        self.snake = Snake(
            (cfg.grid_width // 2, cfg.grid_height // 2),
            cfg.grid_width,
            cfg.grid_height,
            length=cfg.initial_length,
        )
        self.apple: Position | None = None
        self.score = 0
        self.steps = 0
        self.game_over = False
        self.won = False
        self.last_tick = time.monotonic()

        if self._placeable(cfg.initial_apple):
            self.apple = cfg.initial_apple
        else:
            self.spawn_apple()

    def _placeable(self, pos: Position | None) -> bool:
        if pos is None:
            return False
        x, y = pos
        in_bounds = 0 <= x < self.config.grid_width and 0 <= y < self.config.grid_height
        return in_bounds and not self.snake.contains(pos)

    def toggle_mode(self) -> None:
        """Switch human <-> agent. Switching always starts a new session."""
        self.new_session("agent" if self.mode == "human" else "human")

    def handle_input(self, snapshot: InputSnapshot) -> None:
        if snapshot.toggle_mode:
            self.toggle_mode()
            return
        if snapshot.restart:
            self.new_session()
            return
        # In agent mode the keyboard only toggles; steering belongs to the agent.
        if snapshot.direction is not None and self.mode == "human":
            self.queue_direction(snapshot.direction)

    def queue_direction(self, new_direction: str) -> None:
        """Queue an input direction; reject instant 180-degree turns."""
        if new_direction not in ACTIONS:
            return
        self.snake.set_direction(new_direction)

    def tick_due(self, now: float | None = None) -> bool:
        if self.game_over:
            return False
        if now is None:
            now = time.monotonic()
        return (now - self.last_tick) * 1000.0 >= self.config.tick_ms

    def tick(self, now: float | None = None) -> bool:
        """Advance once if the tick interval elapsed. Returns True if the snake moved."""
        if now is None:
            now = time.monotonic()
        if not self.tick_due(now):
            return False
        self.last_tick = now
        self.move()
        return True

    def move(self) -> bool:
        """Advance one step. Returns False if the snake dies this tick."""
        if self.game_over:
            return False

        new_head = self.snake.advance()
        self.steps += 1

        # The tail has not moved yet, so running into it is fatal too.
        if any(cell == new_head for cell in list(self.snake.body)[1:]):
            self.game_over = True
            return False

        if new_head == self.apple:
            self.score += 1
            self.spawn_apple()
        else:
            self.snake.shrink()
        return True

    def free_cells(self) -> list[Position]:
        occupied = set(self.snake.body)
        return [
            (x, y)
            for y in range(self.config.grid_height)
            for x in range(self.config.grid_width)
            if (x, y) not in occupied
        ]

    def spawn_apple(self) -> None:
        """Place the apple on a random free cell; a full board ends the game as a win."""
        cfg = self.config
        occupied = set(self.snake.body)
        for _ in range(cfg.max_spawn_attempts):
            pos = (random.randrange(cfg.grid_width), random.randrange(cfg.grid_height))
            if pos not in occupied:
                self.apple = pos
                return

        # Near-full boards: stop sampling and choose among what is left.
        free = self.free_cells()
        if not free:
            self.apple = None
            self.won = True
            self.game_over = True
            return
        self.apple = random.choice(free)
