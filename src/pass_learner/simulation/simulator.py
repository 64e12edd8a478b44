"""Epoch loop for fleets of learning and non-learning transmitters.

Each transmitter runs its epochs strictly in order, because the value layer
used at epoch e+1 is produced by the update at epoch e. Transmitters do not
share any state, so a fleet can be spread over worker processes.
"""

from abc import ABC, abstractmethod
from concurrent.futures import ProcessPoolExecutor
from dataclasses import dataclass, replace
import logging
from typing import Iterator, Sequence

import numpy as np
from tqdm import tqdm

from pass_learner.agents.baselines import UniformRandomSelector
from pass_learner.agents.policy import BaseSelector, DiscountedSoftmaxPolicy
from pass_learner.agents.transmitter import Transmitter
from pass_learner.environment.passes import NoiseMode, PassGenerator
from pass_learner.exceptions import ConfigurationError
from pass_learner.simulation.config import SimulationConfig

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SimulationResult:
    """Outcomes of one run, shape (n_transmitters, n_epochs).

    Unpacks as `successes, times_to_tx = result`.
    """

    successes: np.ndarray  # 1.0 where the selected pass succeeded
    times_to_tx: np.ndarray  # Hours until the selected pass

    def __post_init__(self):
        self.successes.setflags(write=False)
        self.times_to_tx.setflags(write=False)

    def __iter__(self) -> Iterator[np.ndarray]:
        return iter((self.successes, self.times_to_tx))

    @property
    def n_transmitters(self) -> int:
        return self.successes.shape[0]

    @property
    def n_epochs(self) -> int:
        return self.successes.shape[1]

    @property
    def success_rate(self) -> float:
        return float(np.mean(self.successes))

    @property
    def mean_time_to_tx(self) -> float:
        return float(np.mean(self.times_to_tx))


class _FleetRunner(ABC):
    """Shared fleet orchestration: seeding, worker pool, progress."""

    def __init__(self, config: SimulationConfig | None = None, selector: BaseSelector | None = None):
        self.config = config or SimulationConfig()
        self.generator = PassGenerator(self.config.noise_mode, self.config.n_passes)
        self.selector = selector or self._default_selector()

    @abstractmethod
    def _default_selector(self) -> BaseSelector:
        """Selector used when none is passed in."""
        pass

    @abstractmethod
    def run_transmitter(
        self, transmitter: Transmitter, rng: np.random.Generator
    ) -> tuple[np.ndarray, np.ndarray]:
        """Run every epoch for one transmitter; returns (successes, times)."""
        pass

    def _run_fleet(self, transmitters: Sequence[Transmitter]) -> SimulationResult:
        if len(transmitters) == 0:
            raise ConfigurationError("At least one transmitter is required")

        cfg = self.config
        n_tx = len(transmitters)
        logger.info(
            "Running %s: %d transmitters x %d epochs (%s, noise=%s)",
            type(self).__name__,
            n_tx,
            cfg.n_epochs,
            self.selector.name,
            cfg.noise_mode.value,
        )

        successes = np.zeros((n_tx, cfg.n_epochs))
        times_to_tx = np.zeros((n_tx, cfg.n_epochs))
        seeds = cfg.spawn_seeds(n_tx)
        desc = type(self).__name__

        if cfg.n_workers == 1:
            jobs = tqdm(zip(transmitters, seeds), total=n_tx, desc=desc, disable=not cfg.show_progress)
            for i, (tx, seed) in enumerate(jobs):
                successes[i], times_to_tx[i] = self.run_transmitter(tx, np.random.default_rng(seed))
        else:
            with ProcessPoolExecutor(max_workers=cfg.n_workers) as pool:
                rows = pool.map(_run_in_worker, [self] * n_tx, transmitters, seeds)
                for i, (worked, s, t) in enumerate(
                    tqdm(rows, total=n_tx, desc=desc, disable=not cfg.show_progress)
                ):
                    # Workers mutate a pickled copy; carry the learned state back
                    transmitters[i].value_table = worked.value_table
                    transmitters[i].visit_counts = worked.visit_counts
                    successes[i] = s
                    times_to_tx[i] = t

        result = SimulationResult(successes=successes, times_to_tx=times_to_tx)
        logger.info(
            "%s done: success rate %.4f, mean time to TX %.2f h",
            type(self).__name__,
            result.success_rate,
            result.mean_time_to_tx,
        )
        return result


def _run_in_worker(
    runner: _FleetRunner, transmitter: Transmitter, seed: np.random.SeedSequence
) -> tuple[Transmitter, np.ndarray, np.ndarray]:
    s, t = runner.run_transmitter(transmitter, np.random.default_rng(seed))
    return transmitter, s, t


class Simulator(_FleetRunner):
    """Online value learning over candidate passes.

    Per epoch: draw candidates, select one with the policy, count the visit,
    draw the outcome from the ground-truth model on the continuous state,
    record it, and (except after the last epoch) move the value table to the
    next layer with the incremental sample-average update.
    """

    def _default_selector(self) -> BaseSelector:
        return DiscountedSoftmaxPolicy(self.config.discount)

    def run_transmitter(
        self, transmitter: Transmitter, rng: np.random.Generator
    ) -> tuple[np.ndarray, np.ndarray]:
        n_epochs = self.config.n_epochs
        successes = np.zeros(n_epochs)
        times_to_tx = np.zeros(n_epochs)

        transmitter.reset(keep_history=self.config.keep_history)
        table = transmitter.value_table

        for epoch in range(n_epochs):
            batch = self.generator.generate(rng)
            selected = self.selector.select(batch, table, rng)
            candidate = batch.candidate(selected)
            state = candidate.state.discretize()

            # Counted before the update reads it, so the divisor is >= 1
            count = transmitter.record_visit(state)
            outcome = transmitter.attempt(candidate.state, rng)

            successes[epoch] = outcome
            times_to_tx[epoch] = candidate.time_until_pass

            if epoch != n_epochs - 1:
                table.advance(state, outcome, count)

        return successes, times_to_tx

    def run(self, transmitters: Sequence[Transmitter]) -> SimulationResult:
        """Simulate every transmitter; their tables are left in the final state."""
        return self._run_fleet(transmitters)


class BaselineSimulator(_FleetRunner):
    """Uniform-random pass choice with no learning, as a control."""

    def _default_selector(self) -> BaseSelector:
        return UniformRandomSelector()

    def run_transmitter(
        self, transmitter: Transmitter, rng: np.random.Generator
    ) -> tuple[np.ndarray, np.ndarray]:
        n_epochs = self.config.n_epochs
        successes = np.zeros(n_epochs)
        times_to_tx = np.zeros(n_epochs)

        for epoch in range(n_epochs):
            batch = self.generator.generate(rng)
            candidate = batch.candidate(self.selector.select(batch, None, rng))
            successes[epoch] = transmitter.attempt(candidate.state, rng)
            times_to_tx[epoch] = candidate.time_until_pass

        return successes, times_to_tx

    def run(self, transmitters: Sequence[Transmitter]) -> np.ndarray:
        """Simulate every transmitter; returns the success matrix."""
        return self._run_fleet(transmitters).successes


def simulate(
    transmitters: Sequence[Transmitter],
    n_epochs: int | None = None,
    discount: float | None = None,
    noise_mode: NoiseMode | str | None = None,
    config: SimulationConfig | None = None,
    **overrides,
) -> SimulationResult:
    """Run the learning simulation on a fleet.

    Args:
        transmitters: Fleet to simulate; mutated in place.
        n_epochs: Decision epochs per transmitter (default 1000).
        discount: Discount factor lambda in [0, 1] (default 0.9).
        noise_mode: Candidate noise generation mode (default CONSTANT).
        config: Base configuration; arguments that are not None override it.
        **overrides: Other SimulationConfig fields (seed, n_passes, ...).

    Returns:
        SimulationResult with success and time-to-TX matrices.
    """
    cfg = _merge_config(config, n_epochs=n_epochs, discount=discount, noise_mode=noise_mode, **overrides)
    return Simulator(cfg).run(transmitters)


def run_baseline(
    transmitters: Sequence[Transmitter],
    n_epochs: int | None = None,
    noise_mode: NoiseMode | str | None = None,
    config: SimulationConfig | None = None,
    **overrides,
) -> np.ndarray:
    """Run the uniform-random control; returns the success matrix."""
    cfg = _merge_config(config, n_epochs=n_epochs, noise_mode=noise_mode, **overrides)
    return BaselineSimulator(cfg).run(transmitters)


def _merge_config(config: SimulationConfig | None, **fields) -> SimulationConfig:
    fields = {k: v for k, v in fields.items() if v is not None}
    if config is None:
        return SimulationConfig(**fields)
    return replace(config, **fields)
