"""Run configuration for learning and baseline simulations."""

from dataclasses import dataclass

import numpy as np

from pass_learner.environment.passes import DEFAULT_N_PASSES, NoiseMode
from pass_learner.exceptions import ConfigurationError


@dataclass
class SimulationConfig:
    """Configuration shared by the learning simulator and the baseline.

    `discount` is ignored by the baseline. `seed` seeds one SeedSequence from
    which every transmitter gets its own child generator, so results do not
    depend on `n_workers`.
    """

    n_epochs: int = 1000
    discount: float = 0.9  # lambda
    noise_mode: NoiseMode | str = NoiseMode.CONSTANT
    n_passes: int = DEFAULT_N_PASSES  # Candidates per epoch (~passes in 48 h)
    seed: int | None = None
    n_workers: int = 1  # >1 runs transmitters in a process pool
    keep_history: bool = False  # Record every epoch's value layer
    show_progress: bool = False

    def __post_init__(self):
        self.noise_mode = NoiseMode.parse(self.noise_mode)
        if self.n_epochs < 1:
            raise ConfigurationError(f"n_epochs must be at least 1, got {self.n_epochs}")
        if self.n_passes < 1:
            raise ConfigurationError(f"n_passes must be at least 1, got {self.n_passes}")
        if not 0.0 <= self.discount <= 1.0:
            raise ConfigurationError(f"discount must be in [0, 1], got {self.discount}")
        if self.n_workers < 1:
            raise ConfigurationError(f"n_workers must be at least 1, got {self.n_workers}")

    def spawn_seeds(self, n: int) -> list[np.random.SeedSequence]:
        """One independent seed sequence per transmitter."""
        return np.random.SeedSequence(self.seed).spawn(n)
