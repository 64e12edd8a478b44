"""Learning and baseline simulation of transmitter fleets."""

from pass_learner.simulation.config import SimulationConfig
from pass_learner.simulation.simulator import (
    SimulationResult,
    Simulator,
    BaselineSimulator,
    simulate,
    run_baseline,
)

__all__ = [
    "SimulationConfig",
    "SimulationResult",
    "Simulator",
    "BaselineSimulator",
    "simulate",
    "run_baseline",
]
