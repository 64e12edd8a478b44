"""Tests for the plotting helpers."""

import numpy as np
import pytest
import matplotlib

matplotlib.use("Agg")  # Use non-interactive backend for testing
import matplotlib.pyplot as plt

from pass_learner.evaluation.sweep import DiscountComparison, LambdaSweepResult
from pass_learner.evaluation.visualization import (
    plot_lambda_tradeoffs,
    plot_learning_curves,
    plot_power_surfaces,
    save_figure,
)


@pytest.fixture
def comparison():
    epochs = np.arange(1, 101)
    return DiscountComparison(
        baseline_success_rate=0.13,
        window=10,
        success_curves={0.9: 0.13 + 0.001 * epochs, 0.99: 0.13 + 0.0005 * epochs},
        time_curves={0.9: 24 - 0.01 * epochs, 0.99: 24 - 0.005 * epochs},
    )


@pytest.fixture
def sweep_result():
    discounts = np.linspace(0, 1, 6)
    return LambdaSweepResult(
        discounts=discounts,
        success_rates=0.3 + 0.1 * discounts,
        times_to_tx=24 - 2 * discounts,
        powers=np.full(6, 0.0034),
        baseline_success_rate=0.3,
    )


class TestPlots:
    def test_learning_curves(self, comparison):
        fig = plot_learning_curves(comparison)
        assert isinstance(fig, plt.Figure)
        assert len(fig.axes) == 2
        plt.close(fig)

    def test_lambda_tradeoffs(self, sweep_result):
        fig = plot_lambda_tradeoffs(sweep_result)
        assert len(fig.axes) == 3
        plt.close(fig)

    def test_lambda_tradeoffs_without_baseline(self, sweep_result):
        sweep_result.baseline_success_rate = None
        fig = plot_lambda_tradeoffs(sweep_result)
        assert fig.axes[0].get_legend() is None
        plt.close(fig)

    def test_power_surfaces(self):
        fig = plot_power_surfaces(
            attempt_hours=np.linspace(1, 48, 5),
            success_probabilities=np.linspace(0.1, 1, 5),
            eps_values=(0.0, 1.0),
            pass_minutes=(10.0, 60.0),
        )
        assert len(fig.axes) == 4
        plt.close(fig)


def test_save_figure(tmp_path, comparison):
    path = save_figure(plot_learning_curves(comparison), tmp_path / "plots" / "curves.png")
    assert path.exists()
    assert path.stat().st_size > 0
