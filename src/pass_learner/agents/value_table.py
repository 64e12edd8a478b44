"""Per-transmitter estimates of transmission success, by discrete pass state.

The table is logically indexed (a, d, n, epoch): the layer for epoch e+1 is a
copy of layer e with at most one entry changed. Only two 5x5x5 layers are held
in memory (current and next); the per-epoch history is recorded only when
asked for.
"""

import numpy as np

from pass_learner.environment.discretizer import STATE_SHAPE, to_index

OPTIMISTIC_VALUE = 1.0


class ValueEstimateTable:
    """Double-buffered value table with incremental sample-average updates."""

    def __init__(self, initial_value: float = OPTIMISTIC_VALUE, keep_history: bool = False):
        self.initial_value = float(initial_value)
        self.keep_history = keep_history
        self._layers = [
            np.full(STATE_SHAPE, self.initial_value, dtype=np.float64),
            np.full(STATE_SHAPE, self.initial_value, dtype=np.float64),
        ]
        self._active = 0
        self._history: list[np.ndarray] = []
        self.reset()

    def reset(self, keep_history: bool | None = None) -> None:
        """Return every estimate to the initial value and clear the history."""
        if keep_history is not None:
            self.keep_history = keep_history
        for layer in self._layers:
            layer.fill(self.initial_value)
        self._active = 0
        self._history = [self.current.copy()] if self.keep_history else []

    @property
    def current(self) -> np.ndarray:
        """Layer used for decisions in the current epoch. Do not mutate."""
        return self._layers[self._active]

    def lookup(self, a: np.ndarray, d: np.ndarray, n: np.ndarray) -> np.ndarray:
        """Current estimates for arrays of 1-based bucket indices."""
        return self.current[np.asarray(a) - 1, np.asarray(d) - 1, np.asarray(n) - 1]

    def value(self, state: tuple[int, int, int]) -> float:
        return float(self.current[to_index(state)])

    def advance(self, state: tuple[int, int, int], outcome: float, count: int) -> float:
        """Move to the next epoch's layer, updating only `state`.

        Applies new = old + (outcome - old) / count, where `count` is the
        visit count of `state` including this visit. After k visits the
        entry equals the mean of those k outcomes.

        Returns:
            The updated estimate.
        """
        if count < 1:
            raise ValueError(f"visit count must be at least 1, got {count}")
        idx = to_index(state)
        cur = self._layers[self._active]
        nxt = self._layers[1 - self._active]
        np.copyto(nxt, cur)
        old = cur[idx]
        nxt[idx] = old + (outcome - old) / count
        self._active = 1 - self._active
        if self.keep_history:
            self._history.append(nxt.copy())
        return float(nxt[idx])

    @property
    def history(self) -> np.ndarray:
        """Recorded layers stacked as an (a, d, n, epoch) array.

        Layer 0 is the initial layer; layer e is the table consulted at
        epoch e (zero-based).
        """
        if not self.keep_history:
            raise RuntimeError("History not recorded. Construct with keep_history=True.")
        return np.stack(self._history, axis=-1)

    def __repr__(self) -> str:
        return (
            f"ValueEstimateTable(initial_value={self.initial_value}, "
            f"keep_history={self.keep_history})"
        )
