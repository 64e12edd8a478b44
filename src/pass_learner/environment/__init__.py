"""Pass geometry, state discretization, and ground-truth success models."""

from pass_learner.environment.discretizer import (
    STATE_SHAPE,
    discretize,
    discretize_batch,
)
from pass_learner.environment.preference import (
    PreferenceModel,
    LogisticGate,
    expected_success_rate,
)
from pass_learner.environment.passes import (
    NoiseMode,
    ContinuousState,
    PassCandidate,
    PassBatch,
    PassGenerator,
)

__all__ = [
    "STATE_SHAPE",
    "discretize",
    "discretize_batch",
    "PreferenceModel",
    "LogisticGate",
    "expected_success_rate",
    "NoiseMode",
    "ContinuousState",
    "PassCandidate",
    "PassBatch",
    "PassGenerator",
]
