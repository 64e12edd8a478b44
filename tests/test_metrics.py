"""Tests for result-matrix statistics."""

import numpy as np
import pytest

from pass_learner.evaluation.metrics import (
    FleetSummary,
    compute_bootstrap_ci,
    compute_iqm,
    moving_average,
    per_transmitter_rates,
    stable_value,
)


@pytest.fixture
def matrix():
    # Column means: 0.5, 1.0, 0.5, 1.0
    return np.array([
        [0.0, 1.0, 0.0, 1.0],
        [1.0, 1.0, 1.0, 1.0],
    ])


class TestMovingAverage:
    def test_window_one_is_column_mean(self, matrix):
        np.testing.assert_allclose(moving_average(matrix, 1), [0.5, 1.0, 0.5, 1.0])

    def test_trailing_window(self, matrix):
        np.testing.assert_allclose(moving_average(matrix, 2), [0.5, 0.75, 0.75, 0.75])

    def test_window_longer_than_run_is_cumulative(self, matrix):
        np.testing.assert_allclose(moving_average(matrix, 100), [0.5, 0.75, 2 / 3, 0.75])

    def test_matches_direct_slices(self):
        rng = np.random.default_rng(0)
        m = (rng.random((5, 60)) < 0.3).astype(float)
        window = 7
        direct = [m[:, max(0, i - window + 1): i + 1].mean() for i in range(60)]
        np.testing.assert_allclose(moving_average(m, window), direct)

    def test_invalid_window(self, matrix):
        with pytest.raises(ValueError):
            moving_average(matrix, 0)

    def test_stable_value_is_last_entry(self, matrix):
        assert stable_value(matrix, 2) == pytest.approx(0.75)


class TestPerTransmitterRates:
    def test_full_run(self, matrix):
        np.testing.assert_allclose(per_transmitter_rates(matrix), [0.5, 1.0])

    def test_trailing_window(self, matrix):
        np.testing.assert_allclose(per_transmitter_rates(matrix, window=1), [1.0, 1.0])


class TestAggregates:
    def test_iqm(self):
        assert compute_iqm([1, 2, 3, 4, 5, 6, 7, 8]) == pytest.approx(4.5)

    def test_iqm_robust_to_outlier(self):
        assert compute_iqm([0.2, 0.2, 0.2, 0.2, 0.2, 0.2, 0.2, 50.0]) == pytest.approx(0.2)

    def test_iqm_small_samples(self):
        assert compute_iqm([1.0, 3.0]) == pytest.approx(2.0)
        assert compute_iqm([]) == 0.0

    def test_bootstrap_ci_brackets_mean(self):
        rng = np.random.default_rng(0)
        values = rng.normal(0.4, 0.05, size=100).tolist()
        low, high = compute_bootstrap_ci(values, rng=np.random.default_rng(1))
        assert low <= np.mean(values) <= high
        assert high - low < 0.05

    def test_bootstrap_ci_degenerate(self):
        assert compute_bootstrap_ci([0.3]) == (0.3, 0.3)
        assert compute_bootstrap_ci([]) == (0.0, 0.0)


class TestFleetSummary:
    def test_summary(self):
        rng = np.random.default_rng(2)
        successes = (rng.random((10, 50)) < 0.4).astype(float)
        times = rng.uniform(0, 48, size=(10, 50))
        fleet = FleetSummary("lambda=0.9", successes, times, window=20)

        summary = fleet.summary()
        assert summary["policy"] == "lambda=0.9"
        assert summary["n_transmitters"] == 10
        assert summary["n_epochs"] == 50
        assert summary["stable_success_rate"] == pytest.approx(successes[:, -20:].mean())
        assert summary["stable_time_to_tx"] == pytest.approx(times[:, -20:].mean())
        assert summary["success_ci_low"] <= summary["success_ci_high"]

    def test_without_times(self):
        fleet = FleetSummary("baseline", np.ones((2, 5)), window=5)
        assert np.isnan(fleet.stable_time_to_tx)
        assert fleet.success_iqm == 1.0
