"""Summary statistics over simulation result matrices.

All matrices are shaped (n_transmitters, n_epochs). Fleet-level rates are
aggregated across transmitters, with IQM and bootstrap CIs over the
per-transmitter rates for robustness to outlying transmitters.
"""

from dataclasses import dataclass, field
from typing import Any

import numpy as np

DEFAULT_WINDOW = 1000


def moving_average(matrix: np.ndarray, window: int = DEFAULT_WINDOW) -> np.ndarray:
    """Fleet-wide trailing moving average per epoch.

    Entry i is the mean over all transmitters of epochs
    max(0, i - window + 1) .. i, so early epochs average a shorter prefix.

    Args:
        matrix: Result matrix (n_transmitters, n_epochs).
        window: Number of epochs in the trailing window.

    Returns:
        Array of length n_epochs.
    """
    if window < 1:
        raise ValueError(f"window must be at least 1, got {window}")
    matrix = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
    column_means = matrix.mean(axis=0)
    csum = np.concatenate(([0.0], np.cumsum(column_means)))

    n_epochs = column_means.shape[0]
    ends = np.arange(1, n_epochs + 1)
    starts = np.maximum(0, ends - window)
    return (csum[ends] - csum[starts]) / (ends - starts)


def stable_value(matrix: np.ndarray, window: int = DEFAULT_WINDOW) -> float:
    """Last moving-average value, a settled view of a learning run."""
    return float(moving_average(matrix, window)[-1])


def per_transmitter_rates(matrix: np.ndarray, window: int | None = None) -> np.ndarray:
    """Mean of each transmitter's row, optionally over the last `window` epochs."""
    matrix = np.atleast_2d(np.asarray(matrix, dtype=np.float64))
    if window is not None:
        matrix = matrix[:, -window:]
    return matrix.mean(axis=1)


def compute_iqm(values: list[float]) -> float:
    """Interquartile mean; plain mean for fewer than four values."""
    if len(values) < 4:
        return float(np.mean(values)) if len(values) else 0.0

    sorted_vals = np.sort(values)
    n = len(sorted_vals)
    return float(np.mean(sorted_vals[n // 4 : 3 * n // 4]))


def compute_bootstrap_ci(
    values: list[float],
    confidence: float = 0.95,
    n_bootstrap: int = 2000,
    rng: np.random.Generator | None = None,
) -> tuple[float, float]:
    """Percentile bootstrap confidence interval of the mean.

    Args:
        values: Per-transmitter rates.
        confidence: Confidence level (default 0.95).
        n_bootstrap: Number of resamples.
        rng: Random generator for reproducibility.

    Returns:
        (lower_bound, upper_bound).
    """
    if len(values) < 2:
        val = float(values[0]) if len(values) else 0.0
        return (val, val)

    rng = rng or np.random.default_rng()
    arr = np.asarray(values, dtype=np.float64)
    samples = rng.choice(arr, size=(n_bootstrap, len(arr)), replace=True)
    means = samples.mean(axis=1)

    alpha = 1 - confidence
    lower = float(np.percentile(means, 100 * alpha / 2))
    upper = float(np.percentile(means, 100 * (1 - alpha / 2)))
    return (lower, upper)


@dataclass
class FleetSummary:
    """Aggregate view of one run for one policy."""

    policy_name: str
    successes: np.ndarray
    times_to_tx: np.ndarray | None = None
    window: int = DEFAULT_WINDOW
    _bootstrap_rng_seed: int = 42
    _ci: tuple[float, float] | None = field(default=None, repr=False)

    @property
    def success_rates(self) -> np.ndarray:
        """Per-transmitter success rate over the trailing window."""
        return per_transmitter_rates(self.successes, self.window)

    @property
    def success_iqm(self) -> float:
        return compute_iqm(self.success_rates.tolist())

    @property
    def success_ci(self) -> tuple[float, float]:
        if self._ci is None:
            rng = np.random.default_rng(self._bootstrap_rng_seed)
            self._ci = compute_bootstrap_ci(self.success_rates.tolist(), rng=rng)
        return self._ci

    @property
    def stable_success_rate(self) -> float:
        return stable_value(self.successes, self.window)

    @property
    def stable_time_to_tx(self) -> float:
        if self.times_to_tx is None:
            return float("nan")
        return stable_value(self.times_to_tx, self.window)

    def summary(self) -> dict[str, Any]:
        ci_low, ci_high = self.success_ci
        return {
            "policy": self.policy_name,
            "n_transmitters": int(self.successes.shape[0]),
            "n_epochs": int(self.successes.shape[1]),
            "stable_success_rate": self.stable_success_rate,
            "success_iqm": self.success_iqm,
            "success_ci_low": ci_low,
            "success_ci_high": ci_high,
            "stable_time_to_tx": self.stable_time_to_tx,
        }
