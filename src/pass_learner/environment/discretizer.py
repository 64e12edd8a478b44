"""Bucketing of continuous pass features into table indices.

Each feature maps onto 1..5 using strict comparisons, so a value sitting
exactly on a threshold falls into the lower-quality bucket. Values outside
the nominal ranges clamp to the extreme buckets; there is no error path.
"""

import numpy as np

# (angle, duration, noise) buckets
STATE_SHAPE: tuple[int, int, int] = (5, 5, 5)

# Ascending thresholds; bucket = 1 + number of thresholds strictly exceeded
ANGLE_THRESHOLDS = np.array([30.0, 45.0, 60.0, 75.0])  # degrees
DURATION_THRESHOLDS = np.array([20.0, 30.0, 40.0, 50.0])  # minutes
# Noise improves as it decreases; bucket = 1 + number of thresholds undercut
NOISE_THRESHOLDS = np.array([-95, -98, -101, -104])  # dBm


def discretize(angle: float, duration: float, noise: int) -> tuple[int, int, int]:
    """Map one continuous pass state onto its (a, d, n) bucket triple.

    Args:
        angle: Peak elevation angle in degrees.
        duration: Pass duration in minutes.
        noise: Noise floor in dBm.

    Returns:
        Bucket indices, each in 1..5.
    """
    a = 1 + int(np.sum(angle > ANGLE_THRESHOLDS))
    d = 1 + int(np.sum(duration > DURATION_THRESHOLDS))
    n = 1 + int(np.sum(noise < NOISE_THRESHOLDS))
    return (a, d, n)


def discretize_batch(
    angles: np.ndarray,
    durations: np.ndarray,
    noises: np.ndarray,
) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
    """Vectorized `discretize` over a batch of candidates.

    Returns:
        Three int arrays of bucket indices (1..5), same length as the inputs.
    """
    angles = np.asarray(angles, dtype=np.float64)[:, None]
    durations = np.asarray(durations, dtype=np.float64)[:, None]
    noises = np.asarray(noises)[:, None]

    a = 1 + np.sum(angles > ANGLE_THRESHOLDS, axis=1)
    d = 1 + np.sum(durations > DURATION_THRESHOLDS, axis=1)
    n = 1 + np.sum(noises < NOISE_THRESHOLDS, axis=1)
    return a.astype(np.intp), d.astype(np.intp), n.astype(np.intp)


def to_index(state: tuple[int, int, int]) -> tuple[int, int, int]:
    """Convert a 1-based bucket triple into a zero-based array index."""
    a, d, n = state
    return (a - 1, d - 1, n - 1)
