# Per-frame game driver shared by the window and headless callers; no Tk in here.
from __future__ import annotations

import time

try:
    from .agent import SnakeAStarAgent
    from .game_logic import SnakeConfig, SnakeGame
    from .input_state import InputSnapshot
except ImportError:
    from agent import SnakeAStarAgent
    from game_logic import SnakeConfig, SnakeGame
    from input_state import InputSnapshot


class GameSession:
    """
    Owns the game, the agent and what has already been reported on stdout.

    ``step`` is one frame minus the drawing: apply the input snapshot, let the
    agent decide if a tick is due, then tick. The agent is only consulted on
    frames that will actually advance the snake, so every decision steers the
    state it was made from and no frame holds more than one decision or move.
    """

    def __init__(self, config: SnakeConfig, agent: SnakeAStarAgent | None = None) -> None:
        self.game = SnakeGame(config)
        self.agent = agent or SnakeAStarAgent()
        self._reported_score = 0
        self._reported_game_over = False

    def step(self, snapshot: InputSnapshot, now: float | None = None) -> bool:
        """Run one frame's input, decision and tick. Returns True if the snake moved."""
        if snapshot.toggle_mode or snapshot.restart:
            # Both start a new session; stats from the old one no longer apply.
            self._reported_score = 0
            self._reported_game_over = False
            self.agent.reset_stats()
        self.game.handle_input(snapshot)

        if now is None:
            now = time.monotonic()
        if self.game.mode == "agent" and self.game.tick_due(now):
            self.agent.act(self.game)
        moved = self.game.tick(now)
        self.report()
        return moved

    def report(self) -> None:
        if self.game.score != self._reported_score:
            self._reported_score = self.game.score
            print(f"Score: {self.game.score}")
        if self.game.game_over and not self._reported_game_over:
            self._reported_game_over = True
            if self.game.won:
                print(f"Board filled! Final Score: {self.game.score}")
            else:
                print(f"Game Over! Final Score: {self.game.score}")
