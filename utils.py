# Shared helpers: game construction, headless episode simulation, and score summaries.
from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Protocol

import numpy as np

try:
    from .game_logic import SnakeConfig, SnakeGame
except ImportError:
    from game_logic import SnakeConfig, SnakeGame


OUTCOME_COLLISION = "collision"
OUTCOME_WON = "won"
OUTCOME_MAX_STEPS = "max_steps"


class AgentLike(Protocol):
    def act(self, game: SnakeGame) -> str: ...


@dataclass
class EpisodeResult:
    score: int
    length: int
    steps: int
    outcome: str


def make_game(cfg: SnakeConfig) -> SnakeGame:
    cfg.validate()
    return SnakeGame(cfg)


def run_episode(
    agent: AgentLike,
    game: SnakeGame,
    max_steps: int = 5000,
    render_step: Callable[[SnakeGame, int], None] | None = None,
) -> EpisodeResult:
    """Play one agent-controlled game without the tick timer, one decision per step."""
    if max_steps <= 0:
        raise ValueError("max_steps must be > 0")

    game.new_session("agent")
    outcome = OUTCOME_MAX_STEPS
    for step in range(max_steps):
        agent.act(game)
        alive = game.move()

        if render_step is not None:
            render_step(game, step)

        if game.won:
            outcome = OUTCOME_WON
            break
        if not alive:
            outcome = OUTCOME_COLLISION
            break

    return EpisodeResult(
        score=game.score,
        length=len(game.snake),
        steps=game.steps,
        outcome=outcome,
    )


def chunked_mean(values: list[float], chunk_size: int) -> tuple[np.ndarray, np.ndarray]:
    """Compute mean value per fixed-size chunk."""
    if chunk_size <= 0:
        raise ValueError("chunk_size must be > 0")

    arr = np.asarray(values, dtype=np.float32)
    if arr.size == 0:
        empty = np.array([], dtype=np.float32)
        return empty, empty

    x_end: list[float] = []
    means: list[float] = []
    for start in range(0, arr.size, chunk_size):
        chunk = arr[start : start + chunk_size]
        x_end.append(float(start + chunk.size))
        means.append(float(np.mean(chunk)))

    return np.asarray(x_end, dtype=np.float32), np.asarray(means, dtype=np.float32)


def score_summary(scores: list[float]) -> dict[str, float]:
    """Mean/median/extremes/spread of a score list, as plain floats."""
    if not scores:
        raise ValueError("scores cannot be empty")
    arr = np.asarray(scores, dtype=np.float32)
    return {
        "mean": float(arr.mean()),
        "median": float(np.median(arr)),
        "max": float(arr.max()),
        "min": float(arr.min()),
        "std": float(arr.std()),
        "p25": float(np.percentile(arr, 25)),
        "p75": float(np.percentile(arr, 75)),
    }
