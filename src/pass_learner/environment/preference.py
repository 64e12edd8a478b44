"""Ground-truth transmission success models.

Each model is a product of three logistic gates, one per pass feature. The
models are what a transmitter's environment really does; the learner never
sees them directly, only the Bernoulli outcomes they produce.
"""

from dataclasses import dataclass
from enum import IntEnum

import numpy as np

from pass_learner.environment.passes import NoiseMode, PassGenerator
from pass_learner.exceptions import ConfigurationError


def sigmoid(x):
    """Standard logistic function, numerically safe for large |x|."""
    x = np.asarray(x, dtype=np.float64)
    out = np.empty_like(x)
    pos = x >= 0
    out[pos] = 1.0 / (1.0 + np.exp(-x[pos]))
    ex = np.exp(x[~pos])
    out[~pos] = ex / (1.0 + ex)
    return out


@dataclass(frozen=True)
class LogisticGate:
    """One factor sigma(slope * (x - center))."""

    slope: float
    center: float

    def __call__(self, x):
        return sigmoid(self.slope * (np.asarray(x, dtype=np.float64) - self.center))


class PreferenceModel(IntEnum):
    """Closed set of ground-truth success-probability models.

    Slopes are per-unit of degrees, minutes, and dBm respectively. A negative
    noise slope means lower noise floors succeed more often.
    """

    HIGH_QUALITY = 1  # High angle, long duration, low noise
    MODERATE = 2  # Mid-high angle, mid-long duration, mid-low noise
    SHORT_PASS = 3  # High angle, SHORT duration, low noise
    PERMISSIVE = 4  # Alternate third model: almost any angle/duration, tolerant of noise

    @property
    def gates(self) -> tuple["LogisticGate", "LogisticGate", "LogisticGate"]:
        return PREFERENCE_GATES[self]

    def success_probability(self, angle, duration, noise):
        """Probability that a transmission on this pass succeeds.

        Accepts scalars or equally-shaped arrays. Returns a float for scalar
        input and an ndarray otherwise.
        """
        angle_gate, duration_gate, noise_gate = self.gates
        p = angle_gate(angle) * duration_gate(duration) * noise_gate(noise)
        if p.ndim == 0:
            return float(p)
        return p

    @classmethod
    def from_value(cls, value: "PreferenceModel | int | str") -> "PreferenceModel":
        """Resolve a model from a member, its number, or its name."""
        if isinstance(value, cls):
            return value
        try:
            if isinstance(value, str):
                if value.isdigit():
                    return cls(int(value))
                return cls[value.strip().upper()]
            return cls(value)
        except (KeyError, ValueError):
            available = ", ".join(f"{m.value}={m.name}" for m in cls)
            raise ConfigurationError(
                f"Unknown preference model {value!r}. Available: {available}"
            ) from None


PREFERENCE_GATES: dict[PreferenceModel, tuple[LogisticGate, LogisticGate, LogisticGate]] = {
    PreferenceModel.HIGH_QUALITY: (
        LogisticGate(0.5, 70.0),
        LogisticGate(0.5, 35.0),
        LogisticGate(-1.0, -102.0),
    ),
    PreferenceModel.MODERATE: (
        LogisticGate(0.5, 50.0),
        LogisticGate(0.5, 20.0),
        LogisticGate(-1.0, -99.0),
    ),
    PreferenceModel.SHORT_PASS: (
        LogisticGate(0.5, 70.0),
        LogisticGate(-0.5, 20.0),
        LogisticGate(-1.0, -102.0),
    ),
    # Earlier revision of the third model; kept under its own name.
    PreferenceModel.PERMISSIVE: (
        LogisticGate(0.5, 30.0),
        LogisticGate(0.5, 10.0),
        LogisticGate(-1.0, -96.0),
    ),
}


def expected_success_rate(
    model: PreferenceModel,
    noise_mode: "NoiseMode | str",
    n_samples: int = 1_000_000,
    rng: np.random.Generator | None = None,
) -> float:
    """Monte-Carlo expectation of the model over the candidate distribution.

    This is the long-run success rate of a transmitter that picks passes
    uniformly at random, i.e. the baseline's target.
    """
    rng = rng or np.random.default_rng()
    batch = PassGenerator(noise_mode, n_passes=n_samples).generate(rng)
    p = model.success_probability(batch.angles, batch.durations, batch.noises)
    return float(np.mean(p))
