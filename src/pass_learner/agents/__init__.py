"""Transmitters, value estimates, and pass selection policies."""

from pass_learner.agents.value_table import ValueEstimateTable, OPTIMISTIC_VALUE
from pass_learner.agents.transmitter import Transmitter, create_fleet
from pass_learner.agents.policy import (
    BaseSelector,
    DiscountedSoftmaxPolicy,
    softmax,
)
from pass_learner.agents.baselines import UniformRandomSelector

__all__ = [
    "ValueEstimateTable",
    "OPTIMISTIC_VALUE",
    "Transmitter",
    "create_fleet",
    "BaseSelector",
    "DiscountedSoftmaxPolicy",
    "softmax",
    "UniformRandomSelector",
]
