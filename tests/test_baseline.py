"""Tests for the non-learning baseline simulator."""

import numpy as np
import pytest

from pass_learner.agents.transmitter import create_fleet
from pass_learner.environment.passes import NoiseMode
from pass_learner.environment.preference import PreferenceModel, expected_success_rate
from pass_learner.exceptions import ConfigurationError
from pass_learner.simulation import BaselineSimulator, SimulationConfig, run_baseline


class TestBaselineSimulator:
    def test_returns_success_matrix(self):
        config = SimulationConfig(n_epochs=100, seed=0)
        successes = BaselineSimulator(config).run(create_fleet(1, 5))
        assert successes.shape == (5, 100)
        assert set(np.unique(successes)) <= {0.0, 1.0}

    def test_does_not_learn(self):
        fleet = create_fleet(PreferenceModel.MODERATE, 3)
        BaselineSimulator(SimulationConfig(n_epochs=200, seed=1)).run(fleet)
        for tx in fleet:
            assert np.all(tx.value_table.current == 1.0)
            assert tx.visit_counts.sum() == 0

    def test_ignores_discount(self):
        fleet = create_fleet(2, 2)
        a = BaselineSimulator(SimulationConfig(n_epochs=100, discount=0.0, seed=4)).run(fleet)
        b = BaselineSimulator(SimulationConfig(n_epochs=100, discount=1.0, seed=4)).run(fleet)
        np.testing.assert_array_equal(a, b)

    def test_reproducible(self):
        config = SimulationConfig(n_epochs=100, noise_mode="RANDOM", seed=8)
        a = BaselineSimulator(config).run(create_fleet(3, 2))
        b = BaselineSimulator(config).run(create_fleet(3, 2))
        np.testing.assert_array_equal(a, b)

    @pytest.mark.parametrize("model,mode", [
        (PreferenceModel.HIGH_QUALITY, NoiseMode.CONSTANT),
        (PreferenceModel.MODERATE, NoiseMode.BUCKET),
        (PreferenceModel.SHORT_PASS, NoiseMode.RANDOM),
    ])
    def test_converges_to_model_expectation(self, model, mode):
        config = SimulationConfig(n_epochs=400, noise_mode=mode, seed=77)
        successes = BaselineSimulator(config).run(create_fleet(model, 50))

        expected = expected_success_rate(model, mode, 1_000_000, np.random.default_rng(0))
        assert successes.mean() == pytest.approx(expected, abs=0.015)

    def test_empty_fleet_rejected(self):
        with pytest.raises(ConfigurationError):
            BaselineSimulator(SimulationConfig(n_epochs=10)).run([])


class TestRunBaselineFunction:
    def test_keyword_interface(self):
        successes = run_baseline(create_fleet(1, 2), n_epochs=25, noise_mode="random", seed=2)
        assert successes.shape == (2, 25)

    def test_invalid_epochs(self):
        with pytest.raises(ConfigurationError):
            run_baseline(create_fleet(1, 2), n_epochs=0)
