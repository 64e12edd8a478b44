"""Tests for virtual transmitters."""

import numpy as np
import pytest

from pass_learner.agents.transmitter import Transmitter, create_fleet
from pass_learner.agents.value_table import ValueEstimateTable
from pass_learner.environment.passes import ContinuousState
from pass_learner.environment.preference import PreferenceModel
from pass_learner.exceptions import ConfigurationError


class TestTransmitter:
    def test_defaults(self):
        tx = Transmitter(PreferenceModel.MODERATE)
        assert isinstance(tx.value_table, ValueEstimateTable)
        assert tx.visit_counts.shape == (5, 5, 5)
        assert tx.visit_counts.sum() == 0

    def test_preference_resolved(self):
        assert Transmitter(3).preference is PreferenceModel.SHORT_PASS

    def test_unknown_preference(self):
        with pytest.raises(ConfigurationError):
            Transmitter(9)

    def test_record_visit(self):
        tx = Transmitter(1)
        assert tx.record_visit((2, 3, 4)) == 1
        assert tx.record_visit((2, 3, 4)) == 2
        assert tx.visit_counts[1, 2, 3] == 2
        assert tx.visit_counts.sum() == 2

    def test_reset(self):
        tx = Transmitter(1)
        tx.record_visit((1, 1, 1))
        tx.value_table.advance((1, 1, 1), 0.0, 1)
        tx.reset()
        assert tx.visit_counts.sum() == 0
        assert np.all(tx.value_table.current == 1.0)

    def test_attempt_matches_model_probability(self):
        tx = Transmitter(PreferenceModel.HIGH_QUALITY)
        state = ContinuousState(angle=72.0, duration=38.0, noise=-103)
        rng = np.random.default_rng(0)
        outcomes = [tx.attempt(state, rng) for _ in range(20_000)]

        p = PreferenceModel.HIGH_QUALITY.success_probability(72.0, 38.0, -103)
        assert set(outcomes) <= {0.0, 1.0}
        assert np.mean(outcomes) == pytest.approx(p, abs=0.015)


class TestCreateFleet:
    def test_size_and_independence(self):
        fleet = create_fleet("moderate", 4)
        assert len(fleet) == 4
        assert all(tx.preference is PreferenceModel.MODERATE for tx in fleet)
        assert len({id(tx.value_table) for tx in fleet}) == 4
        assert len({id(tx.visit_counts) for tx in fleet}) == 4

    def test_history_flag(self):
        fleet = create_fleet(1, 1, keep_history=True)
        assert fleet[0].value_table.history.shape == (5, 5, 5, 1)
