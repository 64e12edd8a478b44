"""Tests for ground-truth preference models."""

import math

import numpy as np
import pytest

from pass_learner.environment.passes import NoiseMode
from pass_learner.environment.preference import (
    LogisticGate,
    PreferenceModel,
    expected_success_rate,
    sigmoid,
)
from pass_learner.exceptions import ConfigurationError


def logistic(x: float) -> float:
    return 1.0 / (1.0 + math.exp(-x))


class TestSigmoid:
    def test_midpoint(self):
        assert sigmoid(0.0) == pytest.approx(0.5)

    def test_extremes_do_not_overflow(self):
        with np.errstate(over="raise"):
            out = sigmoid(np.array([-1000.0, 1000.0]))
        assert out[0] == pytest.approx(0.0)
        assert out[1] == pytest.approx(1.0)

    def test_gate(self):
        gate = LogisticGate(slope=-1.0, center=-102.0)
        assert gate(-102) == pytest.approx(0.5)
        assert gate(-106) == pytest.approx(logistic(4.0))


class TestPreferenceModels:
    def test_all_gates_at_center(self):
        """At every gate's center each factor is 0.5."""
        p = PreferenceModel.HIGH_QUALITY.success_probability(70.0, 35.0, -102)
        assert p == pytest.approx(0.125)

    def test_high_quality_formula(self):
        a, d, n = 80.0, 45.0, -106
        expected = logistic(0.5 * (a - 70)) * logistic(0.5 * (d - 35)) * logistic(-(n + 102))
        assert PreferenceModel.HIGH_QUALITY.success_probability(a, d, n) == pytest.approx(expected)

    def test_moderate_formula(self):
        a, d, n = 55.0, 25.0, -100
        expected = logistic(0.5 * (a - 50)) * logistic(0.5 * (d - 20)) * logistic(-(n + 99))
        assert PreferenceModel.MODERATE.success_probability(a, d, n) == pytest.approx(expected)

    def test_short_pass_formula(self):
        a, d, n = 85.0, 12.0, -105
        expected = logistic(0.5 * (a - 70)) * logistic(-0.5 * (d - 20)) * logistic(-(n + 102))
        assert PreferenceModel.SHORT_PASS.success_probability(a, d, n) == pytest.approx(expected)

    def test_permissive_formula(self):
        a, d, n = 40.0, 15.0, -95
        expected = logistic(0.5 * (a - 30)) * logistic(0.5 * (d - 10)) * logistic(-(n + 96))
        assert PreferenceModel.PERMISSIVE.success_probability(a, d, n) == pytest.approx(expected)

    def test_short_pass_prefers_short_durations(self):
        model = PreferenceModel.SHORT_PASS
        assert model.success_probability(85.0, 12.0, -106) > model.success_probability(85.0, 55.0, -106)

    def test_high_quality_prefers_long_durations(self):
        model = PreferenceModel.HIGH_QUALITY
        assert model.success_probability(85.0, 55.0, -106) > model.success_probability(85.0, 12.0, -106)

    @pytest.mark.parametrize("model", list(PreferenceModel))
    def test_lower_noise_is_better(self, model):
        assert model.success_probability(80.0, 30.0, -107) > model.success_probability(80.0, 30.0, -93)

    @pytest.mark.parametrize("model", list(PreferenceModel))
    def test_probability_bounds(self, model):
        rng = np.random.default_rng(3)
        p = model.success_probability(
            rng.uniform(15, 90, 1000),
            rng.uniform(10, 60, 1000),
            rng.integers(-107, -92, 1000),
        )
        assert p.shape == (1000,)
        assert np.all((p >= 0) & (p <= 1))

    def test_scalar_input_returns_float(self):
        p = PreferenceModel.MODERATE.success_probability(60.0, 30.0, -100)
        assert isinstance(p, float)


class TestFromValue:
    def test_member(self):
        assert PreferenceModel.from_value(PreferenceModel.MODERATE) is PreferenceModel.MODERATE

    def test_number(self):
        assert PreferenceModel.from_value(1) is PreferenceModel.HIGH_QUALITY
        assert PreferenceModel.from_value("3") is PreferenceModel.SHORT_PASS

    def test_name_case_insensitive(self):
        assert PreferenceModel.from_value("moderate") is PreferenceModel.MODERATE

    @pytest.mark.parametrize("value", [0, 7, "best", ""])
    def test_unknown_raises(self, value):
        with pytest.raises(ConfigurationError, match="Unknown preference model"):
            PreferenceModel.from_value(value)


class TestExpectedSuccessRate:
    def test_reproducible_with_seed(self):
        a = expected_success_rate(PreferenceModel.MODERATE, NoiseMode.RANDOM, 10_000, np.random.default_rng(5))
        b = expected_success_rate(PreferenceModel.MODERATE, NoiseMode.RANDOM, 10_000, np.random.default_rng(5))
        assert a == b

    def test_moderate_is_easier_than_high_quality(self):
        rng = np.random.default_rng(6)
        hq = expected_success_rate(PreferenceModel.HIGH_QUALITY, NoiseMode.CONSTANT, 200_000, rng)
        mod = expected_success_rate(PreferenceModel.MODERATE, NoiseMode.CONSTANT, 200_000, rng)
        assert 0.0 < hq < mod < 1.0
