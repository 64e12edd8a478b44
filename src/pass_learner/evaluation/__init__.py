"""Analysis harness: moving averages, discount sweeps, and plots.

Consumes the simulator's result matrices and the energy model; holds no
simulation state of its own.
"""

from pass_learner.evaluation.metrics import (
    DEFAULT_WINDOW,
    FleetSummary,
    moving_average,
    stable_value,
    per_transmitter_rates,
    compute_iqm,
    compute_bootstrap_ci,
)
from pass_learner.evaluation.sweep import (
    DEFAULT_DISCOUNTS,
    COMPARISON_DISCOUNTS,
    REFERENCE_OPERATING_POINTS,
    LambdaSweepConfig,
    LambdaSweepResult,
    DiscountComparison,
    modem_power,
    power_grid,
    run_baseline_rate,
    run_baseline_successes,
    run_lambda_sweep,
    compare_discounts,
)
from pass_learner.evaluation.visualization import (
    plot_learning_curves,
    plot_lambda_tradeoffs,
    plot_power_surfaces,
    save_figure,
)

__all__ = [
    # Metrics
    "DEFAULT_WINDOW",
    "FleetSummary",
    "moving_average",
    "stable_value",
    "per_transmitter_rates",
    "compute_iqm",
    "compute_bootstrap_ci",
    # Sweeps
    "DEFAULT_DISCOUNTS",
    "COMPARISON_DISCOUNTS",
    "REFERENCE_OPERATING_POINTS",
    "LambdaSweepConfig",
    "LambdaSweepResult",
    "DiscountComparison",
    "modem_power",
    "power_grid",
    "run_baseline_rate",
    "run_baseline_successes",
    "run_lambda_sweep",
    "compare_discounts",
    # Visualization
    "plot_learning_curves",
    "plot_lambda_tradeoffs",
    "plot_power_surfaces",
    "save_figure",
]
