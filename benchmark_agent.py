"""Run the A* agent headless for many games and summarize its scores."""
from __future__ import annotations

import argparse
from collections import Counter
from dataclasses import dataclass, field
import os

# Keep matplotlib cache local for environments without writable home config.
LOCAL_MPLCONFIG = os.path.join(os.path.dirname(os.path.abspath(__file__)), ".mplconfig")
os.makedirs(LOCAL_MPLCONFIG, exist_ok=True)
os.environ.setdefault("MPLCONFIGDIR", LOCAL_MPLCONFIG)

import matplotlib.pyplot as plt
from matplotlib.figure import Figure
import numpy as np

try:
    from .agent import POLICY_FALLBACK, POLICY_PATH, POLICY_STAY, SnakeAStarAgent
    from .game_logic import SnakeConfig
    from .utils import (
        OUTCOME_COLLISION,
        OUTCOME_MAX_STEPS,
        OUTCOME_WON,
        chunked_mean,
        make_game,
        run_episode,
        score_summary,
    )
except ImportError:
    from agent import POLICY_FALLBACK, POLICY_PATH, POLICY_STAY, SnakeAStarAgent
    from game_logic import SnakeConfig
    from utils import (
        OUTCOME_COLLISION,
        OUTCOME_MAX_STEPS,
        OUTCOME_WON,
        chunked_mean,
        make_game,
        run_episode,
        score_summary,
    )

OUTCOME_COLORS = {
    OUTCOME_COLLISION: "#c0392b",
    OUTCOME_WON: "#27ae60",
    OUTCOME_MAX_STEPS: "#7f8c8d",
}
POLICY_COLORS = {
    POLICY_PATH: "#2e5fd8",
    POLICY_FALLBACK: "#e69a1c",
    POLICY_STAY: "#222222",
}


@dataclass
class BenchmarkReport:
    scores: list[float] = field(default_factory=list)
    steps: list[int] = field(default_factory=list)
    outcomes: Counter[str] = field(default_factory=Counter)
    policy_counts: Counter[str] = field(default_factory=Counter)

    def mix(self) -> list[tuple[str, float, str]]:
        """(label, percent, color) rows: outcome share of games, then policy share of decisions."""
        rows = []
        games = sum(self.outcomes.values()) or 1
        for outcome, color in OUTCOME_COLORS.items():
            rows.append((f"game {outcome}", self.outcomes[outcome] / games * 100, color))
        decisions = sum(self.policy_counts.values()) or 1
        for policy, color in POLICY_COLORS.items():
            rows.append((f"decision {policy}", self.policy_counts[policy] / decisions * 100, color))
        return rows


def plot_benchmark(report: BenchmarkReport) -> Figure:
    """Scores per game with block means on the left, outcome/decision mix on the right."""
    fig, (ax_scores, ax_mix) = plt.subplots(1, 2, figsize=(12, 4.5))

    games = np.arange(1, len(report.scores) + 1)
    ax_scores.scatter(games, report.scores, s=14, color="#5d6d7e", alpha=0.6, label="Apples eaten")
    block = max(1, len(report.scores) // 10)
    block_end, block_mean = chunked_mean(report.scores, chunk_size=block)
    if block_end.size > 0:
        ax_scores.step(block_end, block_mean, where="post", color="#2e5fd8", linewidth=2,
                       label=f"Mean of each {block} games")
    ax_scores.set_title("Score per game")
    ax_scores.set_xlabel("Game")
    ax_scores.set_ylabel("Score")
    ax_scores.grid(alpha=0.25)
    ax_scores.legend(loc="upper left")

    labels, shares, colors = zip(*report.mix())
    bars = ax_mix.barh(labels, shares, color=colors)
    ax_mix.bar_label(bars, fmt="%.1f%%", fontsize=8, padding=2)
    ax_mix.invert_yaxis()
    ax_mix.set_xlim(0, 110)
    ax_mix.set_title("How games ended / which policy decided")
    ax_mix.set_xlabel("Percent")

    fig.tight_layout()
    return fig


def benchmark(
    cfg: SnakeConfig,
    num_games: int = 50,
    max_steps: int = 5000,
    plot: bool = False,
    plot_path: str | None = None,
) -> BenchmarkReport:
    """Play ``num_games`` agent games and print a summary table."""
    if num_games <= 0:
        raise ValueError("num_games must be > 0")

    agent = SnakeAStarAgent()
    game = make_game(cfg)
    report = BenchmarkReport()

    print(f"Running {num_games} games on a {cfg.grid_width}x{cfg.grid_height} grid...")
    for index in range(1, num_games + 1):
        if index % 10 == 0 or index == num_games:
            print(f"Game {index}/{num_games}", end="\r", flush=True)
        result = run_episode(agent, game, max_steps=max_steps)
        report.scores.append(float(result.score))
        report.steps.append(result.steps)
        report.outcomes[result.outcome] += 1
    print()
    report.policy_counts.update(agent.policy_counts)

    summary = score_summary(report.scores)
    print("=" * 40)
    print("AGENT BENCHMARK")
    print("=" * 40)
    for label, key in (
        ("Mean score", "mean"),
        ("Median score", "median"),
        ("Max score", "max"),
        ("Min score", "min"),
        ("Std dev", "std"),
        ("25th percentile", "p25"),
        ("75th percentile", "p75"),
    ):
        print(f"{label:<20} {summary[key]:>15.2f}")
    print(f"{'Mean steps':<20} {float(np.mean(report.steps)):>15.1f}")
    print("-" * 40)
    for label, share, _ in report.mix():
        print(f"{label:<20} {share:>14.1f}%")
    print("=" * 40)

    if plot or plot_path:
        fig = plot_benchmark(report)
        if plot_path:
            fig.savefig(plot_path)
            print(f"Plot saved to {plot_path}")
        if plot:
            plt.show()
        plt.close(fig)

    return report


def main() -> None:
    defaults = SnakeConfig()
    parser = argparse.ArgumentParser(description="Benchmark the A* Snake agent")
    parser.add_argument("--games", type=int, default=50, help="Number of games to play")
    parser.add_argument("--max-steps", type=int, default=5000, help="Step cap per game")
    parser.add_argument("--width", type=int, default=defaults.grid_width)
    parser.add_argument("--height", type=int, default=defaults.grid_height)
    parser.add_argument("--plot", action="store_true", help="Show scores and outcome/decision mix")
    parser.add_argument("--save-plot", metavar="PATH", default=None, help="Write the plot to an image file")
    args = parser.parse_args()

    cfg = SnakeConfig(grid_width=args.width, grid_height=args.height, mode="agent")
    try:
        benchmark(cfg, args.games, args.max_steps, plot=args.plot, plot_path=args.save_plot)
    except ValueError as exc:
        parser.error(str(exc))


if __name__ == "__main__":
    main()
