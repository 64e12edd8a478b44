"""Plots for learning curves, discount tradeoffs, and the power model."""

from pathlib import Path

import numpy as np
import matplotlib.pyplot as plt

from pass_learner.evaluation.sweep import DiscountComparison, LambdaSweepResult, power_grid

BASELINE_COLOR = "#95a5a6"  # Gray
SWEEP_COLOR = "#3498db"  # Blue


def plot_learning_curves(
    comparison: DiscountComparison,
    figsize: tuple[float, float] = (10, 8),
) -> plt.Figure:
    """Moving-average success rate and time to TX per discount.

    The baseline appears as a horizontal line on the success-rate panel.
    """
    fig, (ax_s, ax_t) = plt.subplots(2, 1, figsize=figsize, sharex=True)

    ax_s.axhline(
        comparison.baseline_success_rate,
        color=BASELINE_COLOR,
        linestyle="--",
        label="baseline",
    )
    for discount, curve in comparison.success_curves.items():
        ax_s.plot(np.arange(1, len(curve) + 1), curve, label=f"λ = {discount:g}")
    for discount, curve in comparison.time_curves.items():
        ax_t.plot(np.arange(1, len(curve) + 1), curve, label=f"λ = {discount:g}")

    ax_s.set_title(f"Moving Average TX Success Rate (window = {comparison.window})")
    ax_s.set_ylabel("TX Success Rate")
    ax_s.legend()
    ax_s.grid(alpha=0.3)

    ax_t.set_title(f"Moving Average Time to TX (window = {comparison.window})")
    ax_t.set_xlabel("Epoch")
    ax_t.set_ylabel("Mean Time to TX (hours)")
    ax_t.legend()
    ax_t.grid(alpha=0.3)

    plt.tight_layout()
    return fig


def plot_lambda_tradeoffs(
    result: LambdaSweepResult,
    figsize: tuple[float, float] = (10, 12),
) -> plt.Figure:
    """Settled success rate, time to TX, and modem power against lambda."""
    fig, axes = plt.subplots(3, 1, figsize=figsize, sharex=True)
    panels = [
        (result.success_rates, "TX Success Rate", "Average TX Success Rate vs Discount Factor λ"),
        (result.times_to_tx, "Mean Time to TX (hours)", "Average Time to TX vs Discount Factor λ"),
        (result.powers, "Average Modem Power (W)", "Average Modem Power vs Discount Factor λ"),
    ]
    for ax, (values, ylabel, title) in zip(axes, panels):
        ax.scatter(result.discounts, values, color=SWEEP_COLOR, s=12)
        ax.set_title(title)
        ax.set_ylabel(ylabel)
        ax.grid(alpha=0.3)

    if result.baseline_success_rate is not None:
        axes[0].axhline(
            result.baseline_success_rate,
            color=BASELINE_COLOR,
            linestyle="--",
            label="baseline",
        )
        axes[0].legend()

    axes[-1].set_xlabel("Discount Factor λ")
    axes[-1].set_xticks(np.arange(0.0, 1.01, 0.1))

    plt.tight_layout()
    return fig


def plot_power_surfaces(
    attempt_hours=None,
    success_probabilities=None,
    eps_values=(0.0, 1.0),
    pass_minutes=(10.0, 35.0, 60.0),
    figsize: tuple[float, float] = (12, 16),
) -> plt.Figure:
    """Average power surfaces over attempt period and success probability.

    One 3D panel per (pass duration, eps) combination; rows are pass
    durations and columns are eps values.
    """
    if attempt_hours is None:
        attempt_hours = np.linspace(1, 48, 100)
    if success_probabilities is None:
        success_probabilities = np.linspace(0.01, 1, 100)
    hours_mesh, probs_mesh = np.meshgrid(attempt_hours, success_probabilities, indexing="ij")

    fig = plt.figure(figsize=figsize)
    n_rows, n_cols = len(pass_minutes), len(eps_values)
    for row, minutes in enumerate(pass_minutes):
        for col, eps in enumerate(eps_values):
            ax = fig.add_subplot(n_rows, n_cols, row * n_cols + col + 1, projection="3d")
            surface = power_grid(attempt_hours, success_probabilities, eps, minutes)
            ax.plot_surface(hours_mesh, probs_mesh, surface, cmap="viridis")
            ax.set_title(f"ε_pass = {eps:g}, t_pass = {minutes:g} min")
            ax.set_xlabel("Hours between attempts")
            ax.set_ylabel("P(TX success)")
            ax.set_zlabel("Average power (W)")

    fig.suptitle("Average Power (W)", fontsize=16)
    plt.tight_layout()
    return fig


def save_figure(fig: plt.Figure, path: str | Path) -> Path:
    """Save at publication resolution and release the figure."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    fig.savefig(path, dpi=150, bbox_inches="tight")
    plt.close(fig)
    return path
