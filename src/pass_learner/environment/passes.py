"""Candidate satellite pass generation.

Pass geometry is not propagated from ephemerides. Every epoch a transmitter
sees a fresh batch of i.i.d. candidate passes spread over a 48-hour window,
which is roughly the number of LEO passes a ground device gets in two days.
"""

from dataclasses import dataclass
from enum import Enum

import numpy as np

from pass_learner.environment.discretizer import discretize, discretize_batch
from pass_learner.exceptions import ConfigurationError

DEFAULT_N_PASSES = 100
PASS_WINDOW_HOURS = 48.0

ANGLE_RANGE = (15.0, 90.0)  # degrees
DURATION_RANGE = (10.0, 60.0)  # minutes


class NoiseMode(str, Enum):
    """How the noise floor of each candidate pass is drawn."""

    CONSTANT = "CONSTANT"  # Fixed at -106 dBm
    BUCKET = "BUCKET"  # Uniform over a single discretized bucket
    RANDOM = "RANDOM"  # Uniform over the full noise range

    @classmethod
    def parse(cls, value: "NoiseMode | str") -> "NoiseMode":
        """Resolve a mode from a member or a case-insensitive name."""
        if isinstance(value, cls):
            return value
        if isinstance(value, str):
            try:
                return cls[value.strip().upper()]
            except KeyError:
                pass
        available = ", ".join(m.value for m in cls)
        raise ConfigurationError(f"Unknown noise mode {value!r}. Available: {available}")


# Inclusive integer bounds (dBm) per mode
NOISE_RANGES: dict[NoiseMode, tuple[int, int]] = {
    NoiseMode.CONSTANT: (-106, -106),
    NoiseMode.BUCKET: (-107, -105),
    NoiseMode.RANDOM: (-107, -93),
}


@dataclass(frozen=True)
class ContinuousState:
    """Observable features of one pass."""

    angle: float  # Peak elevation, degrees
    duration: float  # Minutes above the horizon mask
    noise: int  # Noise floor, dBm

    def discretize(self) -> tuple[int, int, int]:
        return discretize(self.angle, self.duration, self.noise)


@dataclass(frozen=True)
class PassCandidate:
    """A pass the transmitter could attempt, and how long it must wait for it."""

    state: ContinuousState
    time_until_pass: float  # Hours


@dataclass(frozen=True)
class PassBatch:
    """Column-oriented batch of candidates generated for one epoch."""

    angles: np.ndarray
    durations: np.ndarray
    noises: np.ndarray
    times_until_pass: np.ndarray

    def __len__(self) -> int:
        return len(self.angles)

    def candidate(self, index: int) -> PassCandidate:
        state = ContinuousState(
            angle=float(self.angles[index]),
            duration=float(self.durations[index]),
            noise=int(self.noises[index]),
        )
        return PassCandidate(state=state, time_until_pass=float(self.times_until_pass[index]))

    def discrete_states(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        """Bucket indices (1..5) of every candidate."""
        return discretize_batch(self.angles, self.durations, self.noises)


class PassGenerator:
    """Draws candidate batches under a fixed noise mode.

    The generator is stateless apart from its configuration; all randomness
    comes from the generator passed to `generate`, so independent
    transmitters never share random state.
    """

    def __init__(self, noise_mode: NoiseMode | str = NoiseMode.CONSTANT, n_passes: int = DEFAULT_N_PASSES):
        if n_passes < 1:
            raise ConfigurationError(f"n_passes must be at least 1, got {n_passes}")
        self.noise_mode = NoiseMode.parse(noise_mode)
        self.n_passes = int(n_passes)

    def generate(self, rng: np.random.Generator) -> PassBatch:
        """Draw one batch of `n_passes` candidates."""
        n = self.n_passes
        angles = rng.uniform(*ANGLE_RANGE, size=n)
        durations = rng.uniform(*DURATION_RANGE, size=n)
        noises = self._draw_noise(rng, n)
        times = rng.uniform(0.0, PASS_WINDOW_HOURS, size=n)
        return PassBatch(
            angles=angles,
            durations=durations,
            noises=noises,
            times_until_pass=times,
        )

    def _draw_noise(self, rng: np.random.Generator, n: int) -> np.ndarray:
        low, high = NOISE_RANGES[self.noise_mode]
        if low == high:
            return np.full(n, low, dtype=np.int64)
        return rng.integers(low, high, size=n, endpoint=True)

    def __repr__(self) -> str:
        return f"PassGenerator(noise_mode={self.noise_mode.value}, n_passes={self.n_passes})"
