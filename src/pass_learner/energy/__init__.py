"""Closed-form modem energy and average power model."""

from pass_learner.energy.model import (
    ModemConstants,
    DEFAULT_CONSTANTS,
    energy,
    elapsed_time,
    power,
)

__all__ = [
    "ModemConstants",
    "DEFAULT_CONSTANTS",
    "energy",
    "elapsed_time",
    "power",
]
