"""Discount-factor sweeps and power operating points.

Runs the learning simulator for several values of lambda on fresh
optimistic fleets and reduces each run to its settled success rate and
time to transmit, then converts success rates into average modem power.
"""

from dataclasses import dataclass, field
import logging

import numpy as np

from pass_learner.agents.transmitter import create_fleet
from pass_learner.energy.model import DEFAULT_CONSTANTS, ModemConstants, power
from pass_learner.environment.passes import DEFAULT_N_PASSES, NoiseMode
from pass_learner.environment.preference import PreferenceModel
from pass_learner.evaluation.metrics import DEFAULT_WINDOW, FleetSummary, moving_average
from pass_learner.simulation.config import SimulationConfig
from pass_learner.simulation.simulator import BaselineSimulator, Simulator

logger = logging.getLogger(__name__)

# Coarse away from 1, finer where the success/latency tradeoff bends
DEFAULT_DISCOUNTS: np.ndarray = np.round(
    np.concatenate([
        np.arange(0.0, 0.74 + 1e-9, 0.02),
        np.arange(0.75, 0.85 + 1e-9, 0.01),
        np.arange(0.855, 1.0 + 1e-9, 0.005),
    ]),
    6,
)
COMPARISON_DISCOUNTS: tuple[float, ...] = (0.9, 0.95, 0.99)

# (model, hours between attempts, success probability) read off the sweeps.
# The 0.78/0.85 rows were measured on the permissive model (30, 10, -96 gates).
REFERENCE_OPERATING_POINTS: tuple[tuple[PreferenceModel, float, float], ...] = (
    (PreferenceModel.HIGH_QUALITY, 0.39, 0.13),
    (PreferenceModel.HIGH_QUALITY, 24.0, 0.13),
    (PreferenceModel.HIGH_QUALITY, 24.0, 0.20),
    (PreferenceModel.MODERATE, 1.26, 0.42),
    (PreferenceModel.MODERATE, 23.0, 0.42),
    (PreferenceModel.MODERATE, 23.0, 0.57),
    (PreferenceModel.PERMISSIVE, 2.34, 0.78),
    (PreferenceModel.PERMISSIVE, 22.0, 0.78),
    (PreferenceModel.PERMISSIVE, 22.0, 0.85),
)


@dataclass
class LambdaSweepConfig:
    """Configuration for discount sweeps and comparisons.

    The power operating point defaults to one attempt per day on a
    25-minute pass, listening through half of it when the attempt succeeds.
    """

    preference: PreferenceModel | int | str = PreferenceModel.MODERATE
    noise_mode: NoiseMode | str = NoiseMode.BUCKET
    n_transmitters: int = 100
    n_epochs: int = 5000
    window: int = DEFAULT_WINDOW
    n_passes: int = DEFAULT_N_PASSES
    base_seed: int = 42
    n_workers: int = 1
    show_progress: bool = False

    # Power operating point
    attempt_period_hours: float = 24.0
    eps_pass: float = 0.5
    pass_minutes: float = 25.0

    def __post_init__(self):
        self.preference = PreferenceModel.from_value(self.preference)
        self.noise_mode = NoiseMode.parse(self.noise_mode)

    def simulation_config(self, discount: float, run_index: int) -> SimulationConfig:
        # Deterministic seeding rule: one seed block per run
        return SimulationConfig(
            n_epochs=self.n_epochs,
            discount=float(discount),
            noise_mode=self.noise_mode,
            n_passes=self.n_passes,
            seed=self.base_seed + run_index * 1000,
            n_workers=self.n_workers,
            show_progress=self.show_progress,
        )


@dataclass
class LambdaSweepResult:
    """Settled metrics per discount factor."""

    discounts: np.ndarray
    success_rates: np.ndarray
    times_to_tx: np.ndarray  # Hours
    powers: np.ndarray  # Watts, NaN where the success rate is zero
    baseline_success_rate: float | None = None

    def best_discount(self) -> float:
        """Discount with the highest settled success rate."""
        return float(self.discounts[int(np.argmax(self.success_rates))])

    def as_rows(self) -> list[dict[str, float]]:
        return [
            {
                "discount": float(d),
                "success_rate": float(s),
                "time_to_tx_hours": float(t),
                "power_w": float(p),
            }
            for d, s, t, p in zip(self.discounts, self.success_rates, self.times_to_tx, self.powers)
        ]


@dataclass
class DiscountComparison:
    """Learning curves for a few discounts against the baseline.

    `summaries` holds one FleetSummary per policy, keyed by policy name
    ("baseline", "lambda=0.9", ...), in the order the runs were made.
    """

    baseline_success_rate: float
    window: int
    success_curves: dict[float, np.ndarray] = field(default_factory=dict)
    time_curves: dict[float, np.ndarray] = field(default_factory=dict)
    summaries: dict[str, FleetSummary] = field(default_factory=dict)

    def summary_rows(self) -> list[dict]:
        return [s.summary() for s in self.summaries.values()]


def modem_power(
    success_rates,
    attempt_period_hours: float = 24.0,
    eps_pass: float = 0.5,
    pass_minutes: float = 25.0,
    constants: ModemConstants = DEFAULT_CONSTANTS,
) -> np.ndarray:
    """Average modem power for each success rate at a fixed operating point.

    A success rate of zero has no finite energy per delivered packet and maps
    to NaN.
    """
    rates = np.atleast_1d(np.asarray(success_rates, dtype=np.float64))
    out = np.full(rates.shape, np.nan)
    ok = rates > 0
    if np.any(ok):
        out[ok] = power(
            1.0 / (attempt_period_hours * 3600.0),
            np.minimum(rates[ok], 1.0),
            eps_pass,
            pass_minutes * 60.0,
            constants,
        )
    return out


def power_grid(
    attempt_hours,
    success_probabilities,
    eps_pass: float,
    pass_minutes: float,
    constants: ModemConstants = DEFAULT_CONSTANTS,
) -> np.ndarray:
    """Average power surface, shape (len(attempt_hours), len(success_probabilities)).

    Args:
        attempt_hours: Mean hours between attempts.
        success_probabilities: Per-attempt success probabilities in (0, 1].
        eps_pass: Fraction of a pass spent listening before success.
        pass_minutes: Pass duration in minutes.
    """
    hours = np.asarray(attempt_hours, dtype=np.float64)[:, None]
    probs = np.asarray(success_probabilities, dtype=np.float64)[None, :]
    return np.asarray(
        power(1.0 / (hours * 3600.0), probs, eps_pass, pass_minutes * 60.0, constants)
    )


def run_baseline_successes(config: LambdaSweepConfig) -> np.ndarray:
    """Success matrix of the uniform-random control."""
    fleet = create_fleet(config.preference, config.n_transmitters)
    return BaselineSimulator(config.simulation_config(1.0, run_index=0)).run(fleet)


def run_baseline_rate(config: LambdaSweepConfig) -> float:
    """Mean success rate of the uniform-random control."""
    return float(np.mean(run_baseline_successes(config)))


def run_lambda_sweep(
    config: LambdaSweepConfig | None = None,
    discounts=None,
    include_baseline: bool = True,
) -> LambdaSweepResult:
    """Settled success rate, time to TX, and modem power for each discount."""
    config = config or LambdaSweepConfig()
    discounts = np.asarray(DEFAULT_DISCOUNTS if discounts is None else discounts, dtype=np.float64)

    success_rates = np.zeros(len(discounts))
    times_to_tx = np.zeros(len(discounts))
    for i, discount in enumerate(discounts):
        logger.info("Simulating lambda = %g (%d/%d)", discount, i + 1, len(discounts))
        fleet = create_fleet(config.preference, config.n_transmitters)
        result = Simulator(config.simulation_config(discount, run_index=i + 1)).run(fleet)
        success_rates[i] = moving_average(result.successes, config.window)[-1]
        times_to_tx[i] = moving_average(result.times_to_tx, config.window)[-1]

    powers = modem_power(
        success_rates,
        config.attempt_period_hours,
        config.eps_pass,
        config.pass_minutes,
    )
    baseline = run_baseline_rate(config) if include_baseline else None
    return LambdaSweepResult(
        discounts=discounts,
        success_rates=success_rates,
        times_to_tx=times_to_tx,
        powers=powers,
        baseline_success_rate=baseline,
    )


def compare_discounts(
    config: LambdaSweepConfig | None = None,
    discounts=COMPARISON_DISCOUNTS,
) -> DiscountComparison:
    """Moving-average learning curves per discount, plus the baseline rate.

    Every run, the baseline included, is also reduced to a FleetSummary
    (settled rate, IQM and bootstrap CI of per-transmitter success rates).
    """
    config = config or LambdaSweepConfig()
    baseline = run_baseline_successes(config)
    comparison = DiscountComparison(
        baseline_success_rate=float(np.mean(baseline)),
        window=config.window,
    )
    comparison.summaries["baseline"] = FleetSummary("baseline", baseline, window=config.window)

    for i, discount in enumerate(discounts):
        fleet = create_fleet(config.preference, config.n_transmitters)
        simulator = Simulator(config.simulation_config(discount, run_index=i + 1))
        result = simulator.run(fleet)
        comparison.success_curves[float(discount)] = moving_average(result.successes, config.window)
        comparison.time_curves[float(discount)] = moving_average(result.times_to_tx, config.window)
        comparison.summaries[simulator.selector.name] = FleetSummary(
            simulator.selector.name,
            result.successes,
            result.times_to_tx,
            window=config.window,
        )
    return comparison
