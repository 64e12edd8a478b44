"""Discounted softmax pass selection.

A candidate's weight is its learned success estimate, discounted by how long
the transmitter would have to wait for it: weight = discount ** hours * value.
Weights are turned into a categorical distribution with a softmax and one
candidate is sampled.
"""

from abc import ABC, abstractmethod

import numpy as np

from pass_learner.agents.value_table import ValueEstimateTable
from pass_learner.environment.passes import PassBatch
from pass_learner.exceptions import ConfigurationError


def softmax(weights: np.ndarray) -> np.ndarray:
    """Numerically stable softmax.

    The maximum is subtracted before exponentiating, so large weights cannot
    overflow. Equal weights (including all zeros) give a uniform distribution.
    """
    w = np.asarray(weights, dtype=np.float64)
    z = np.exp(w - np.max(w))
    return z / np.sum(z)


class BaseSelector(ABC):
    """Chooses one candidate pass per epoch.

    Selectors only read the value table; updating it is the simulator's job.
    """

    @abstractmethod
    def select(
        self,
        batch: PassBatch,
        table: ValueEstimateTable | None,
        rng: np.random.Generator,
    ) -> int:
        """Index of the selected candidate in `batch`."""

    @property
    def name(self) -> str:
        return self.__class__.__name__


class DiscountedSoftmaxPolicy(BaseSelector):
    """Softmax over time-discounted value estimates.

    discount = 1 ignores waiting time entirely. discount = 0 zeroes the
    weight of every candidate that is not immediately available
    (0 ** 0 == 1), leaving a near-uniform choice among the rest.
    """

    def __init__(self, discount: float = 0.9):
        if not 0.0 <= discount <= 1.0:
            raise ConfigurationError(f"discount must be in [0, 1], got {discount}")
        self.discount = float(discount)

    def weights(self, batch: PassBatch, table: ValueEstimateTable) -> np.ndarray:
        values = table.lookup(*batch.discrete_states())
        return np.power(self.discount, batch.times_until_pass) * values

    def probabilities(self, batch: PassBatch, table: ValueEstimateTable) -> np.ndarray:
        return softmax(self.weights(batch, table))

    def select(
        self,
        batch: PassBatch,
        table: ValueEstimateTable | None,
        rng: np.random.Generator,
    ) -> int:
        if table is None:
            raise ValueError(f"{self.name} needs a value table")
        probs = self.probabilities(batch, table)
        return int(rng.choice(len(probs), p=probs))

    @property
    def name(self) -> str:
        return f"lambda={self.discount:g}"
