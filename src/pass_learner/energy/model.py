"""Average energy and power of a satellite-modem transmitter.

Every attempt costs sleep energy for the interval since the previous attempt,
a GPS fix, and receive time while listening for the satellite. Successful
attempts listen for only a fraction `eps_pass` of the pass and then pay the
transmission energy, amortized over how many packets one attempt carries.

All functions broadcast over numpy arrays. Units are SI: watts, joules,
seconds, hertz.
"""

from dataclasses import dataclass

import numpy as np


@dataclass(frozen=True)
class ModemConstants:
    """Physical constants of the modem and sensor.

    Grounded in a typical LEO IoT modem with a GNSS receiver:
    - Deep sleep ~550 uW
    - GPS acquisition ~230 mW for ~30 s
    - Satellite receive ~130 mW
    - One packet every 3 hours
    """

    sleep_power: float = 550e-6  # W
    gps_power: float = 230e-3  # W
    rx_power: float = 130e-3  # W
    tx_energy: float = 12.24  # J per transmission
    gps_time: float = 30.0  # s
    packet_rate: float = 1.0 / 10_800  # Hz


DEFAULT_CONSTANTS = ModemConstants()


def _validate(r_attempt, p_success, eps_pass, t_pass) -> None:
    if np.any(np.asarray(r_attempt) <= 0):
        raise ValueError("r_attempt must be positive")
    p = np.asarray(p_success)
    if np.any(p <= 0) or np.any(p > 1):
        raise ValueError("p_success must be in (0, 1]")
    eps = np.asarray(eps_pass)
    if np.any(eps < 0) or np.any(eps > 1):
        raise ValueError("eps_pass must be in [0, 1]")
    if np.any(np.asarray(t_pass) < 0):
        raise ValueError("t_pass must be non-negative")


def _scalar_or_array(x):
    x = np.asarray(x, dtype=np.float64)
    return float(x) if x.ndim == 0 else x


def energy(
    r_attempt,
    p_success,
    eps_pass,
    t_pass,
    constants: ModemConstants = DEFAULT_CONSTANTS,
):
    """Average energy E_attempt of one transmission attempt, in joules.

    Args:
        r_attempt: Attempt rate in Hz (e.g. 1 / 86400 for once a day).
        p_success: Probability an attempt succeeds, in (0, 1].
        eps_pass: Fraction of the pass spent listening before a successful
            transmission, in [0, 1].
        t_pass: Pass duration in seconds.
        constants: Modem constants.

    Returns:
        Expected energy per attempt (float, or ndarray for array input).
    """
    _validate(r_attempt, p_success, eps_pass, t_pass)
    c = constants
    r = np.asarray(r_attempt, dtype=np.float64)
    p = np.asarray(p_success, dtype=np.float64)

    overhead = c.sleep_power / r + c.gps_power * c.gps_time
    e_success = (
        overhead
        + eps_pass * c.rx_power * t_pass
        + c.tx_energy * (c.packet_rate / (p * r))
    )
    e_fail = overhead + c.rx_power * t_pass
    return _scalar_or_array(p * e_success + (1.0 - p) * e_fail)


def elapsed_time(
    r_attempt,
    p_success,
    eps_pass,
    t_pass,
    constants: ModemConstants = DEFAULT_CONSTANTS,
):
    """Expected wall-clock time covered by one attempt, in seconds."""
    _validate(r_attempt, p_success, eps_pass, t_pass)
    r = np.asarray(r_attempt, dtype=np.float64)
    p = np.asarray(p_success, dtype=np.float64)
    t = (
        1.0 / r
        + constants.gps_time
        + p * eps_pass * t_pass
        + (1.0 - p) * t_pass
    )
    return _scalar_or_array(t)


def power(
    r_attempt,
    p_success,
    eps_pass,
    t_pass,
    constants: ModemConstants = DEFAULT_CONSTANTS,
):
    """Average power draw in watts: energy per attempt over time per attempt.

    Note: an earlier revision computed `energy * r_attempt`, which ignores the
    GPS and listening time added to each attempt interval. That form is not
    equivalent and is not provided.
    """
    e = energy(r_attempt, p_success, eps_pass, t_pass, constants)
    t = elapsed_time(r_attempt, p_success, eps_pass, t_pass, constants)
    return _scalar_or_array(np.asarray(e) / np.asarray(t))
