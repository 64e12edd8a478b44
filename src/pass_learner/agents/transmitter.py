"""Virtual ground transmitters."""

from dataclasses import dataclass, field

import numpy as np

from pass_learner.agents.value_table import ValueEstimateTable
from pass_learner.environment.discretizer import STATE_SHAPE, to_index
from pass_learner.environment.passes import ContinuousState
from pass_learner.environment.preference import PreferenceModel


def _zero_counts() -> np.ndarray:
    return np.zeros(STATE_SHAPE, dtype=np.int64)


@dataclass
class Transmitter:
    """One independently simulated ground device.

    Holds the ground-truth preference model of its environment, its learned
    value table, and how often it has selected each discrete state. Both the
    table and the counts are reset at the start of each run.
    """

    preference: PreferenceModel
    value_table: ValueEstimateTable = field(default_factory=ValueEstimateTable)
    visit_counts: np.ndarray = field(default_factory=_zero_counts)

    def __post_init__(self):
        self.preference = PreferenceModel.from_value(self.preference)

    def reset(self, keep_history: bool | None = None) -> None:
        """Optimistic re-initialization before a run."""
        self.value_table.reset(keep_history=keep_history)
        self.visit_counts = _zero_counts()

    def record_visit(self, state: tuple[int, int, int]) -> int:
        """Count a selection of `state`; returns the new count."""
        idx = to_index(state)
        self.visit_counts[idx] += 1
        return int(self.visit_counts[idx])

    def attempt(self, state: ContinuousState, rng: np.random.Generator) -> float:
        """Draw a transmission outcome (1.0 success, 0.0 failure)."""
        p = self.preference.success_probability(state.angle, state.duration, state.noise)
        return 1.0 if rng.random() < p else 0.0


def create_fleet(
    preference: PreferenceModel | int | str,
    n_transmitters: int,
    keep_history: bool = False,
) -> list[Transmitter]:
    """Build `n_transmitters` optimistically initialized transmitters."""
    return [
        Transmitter(
            preference=PreferenceModel.from_value(preference),
            value_table=ValueEstimateTable(keep_history=keep_history),
        )
        for _ in range(n_transmitters)
    ]
