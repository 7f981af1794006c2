"""Tests for the benchmark report and its plot."""

from collections import Counter

import matplotlib

matplotlib.use("Agg")

import matplotlib.pyplot as plt
import pytest

from benchmark_agent import BenchmarkReport, benchmark, plot_benchmark
from game_logic import SnakeConfig


def sample_report() -> BenchmarkReport:
    return BenchmarkReport(
        scores=[3.0, 5.0, 0.0, 8.0],
        steps=[40, 61, 7, 90],
        outcomes=Counter({"collision": 3, "max_steps": 1}),
        policy_counts=Counter({"path": 150, "fallback": 45, "stay": 3}),
    )


class TestBenchmarkReport:
    """Tests for the outcome/decision mix."""

    def test_mix_rows(self):
        rows = sample_report().mix()
        shares = {label: share for label, share, _ in rows}
        assert [label for label, _, _ in rows] == [
            "game collision",
            "game won",
            "game max_steps",
            "decision path",
            "decision fallback",
            "decision stay",
        ]
        assert shares["game collision"] == pytest.approx(75.0)
        assert shares["game won"] == 0.0
        assert shares["decision path"] == pytest.approx(150 / 198 * 100)

    def test_empty_report_has_zero_shares(self):
        assert all(share == 0.0 for _, share, _ in BenchmarkReport().mix())


class TestPlotBenchmark:
    """Tests for the figure built from a report."""

    def test_figure_panels(self):
        report = sample_report()
        fig = plot_benchmark(report)
        try:
            ax_scores, ax_mix = fig.axes
            assert ax_scores.get_title() == "Score per game"
            widths = [patch.get_width() for patch in ax_mix.patches]
            assert widths == pytest.approx([share for _, share, _ in report.mix()])
            # One point per game in the scatter.
            assert len(ax_scores.collections[0].get_offsets()) == 4
        finally:
            plt.close(fig)


class TestBenchmarkRun:
    """Tests for a short end-to-end benchmark."""

    def test_small_run_writes_plot(self, tmp_path, capsys):
        target = tmp_path / "bench.png"
        report = benchmark(
            SnakeConfig(grid_width=8, grid_height=8, mode="agent"),
            num_games=3,
            max_steps=60,
            plot_path=str(target),
        )
        assert len(report.scores) == 3
        assert sum(report.outcomes.values()) == 3
        assert sum(report.policy_counts.values()) == sum(report.steps)
        assert target.exists()
        assert "AGENT BENCHMARK" in capsys.readouterr().out

    def test_rejects_no_games(self):
        with pytest.raises(ValueError):
            benchmark(SnakeConfig(), num_games=0)
