"""Non-learning selection policies used as controls."""

import numpy as np

from pass_learner.agents.policy import BaseSelector
from pass_learner.agents.value_table import ValueEstimateTable
from pass_learner.environment.passes import PassBatch


class UniformRandomSelector(BaseSelector):
    """Picks any candidate with equal probability.

    Ignores the discount factor and value estimates. Its long-run success
    rate is the preference model's expectation over the candidate
    distribution, which any learning policy should beat.
    """

    def select(
        self,
        batch: PassBatch,
        table: ValueEstimateTable | None,
        rng: np.random.Generator,
    ) -> int:
        return int(rng.integers(0, len(batch)))

    @property
    def name(self) -> str:
        return "baseline"
