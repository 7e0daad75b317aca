# burg/window.py
# Python 3.10+
# Purpose: one estimation request (position p, order m, history length N) and its bounds.
# - samples read: [p-N, p-1] for the autocorrelation, the recursion and both predictions
# - forward prediction targets x[p], backward prediction targets x[p-N-1]
# - 1 <= m < N; p-N >= 0; p < len(signal) (the autocorrelation alone only needs p <= len(signal))
# - a backward prediction additionally needs p-N-1 >= 0

from __future__ import annotations

from dataclasses import dataclass
from numbers import Integral

from burg.errors import EstimationConfigError, WindowRangeError

__all__ = ["EstimationWindow"]


def _ensure_int(name: str, v: object) -> int:
    if isinstance(v, bool) or not isinstance(v, Integral):
        raise EstimationConfigError(f"{name} must be int (got {type(v).__name__})")
    return int(v)


@dataclass(frozen=True, slots=True)
class EstimationWindow:
    position: int
    order: int
    history_length: int

    def __post_init__(self) -> None:
        object.__setattr__(self, "position", _ensure_int("position", self.position))
        object.__setattr__(self, "order", _ensure_int("order", self.order))
        object.__setattr__(self, "history_length", _ensure_int("history_length", self.history_length))
        if self.order < 1:
            raise EstimationConfigError(f"order must be >= 1 (got {self.order})")
        if self.order >= self.history_length:
            raise EstimationConfigError(
                f"order must be < history_length (order={self.order}, history_length={self.history_length})"
            )

    @property
    def start(self) -> int:
        """First absolute sample index of the history window."""
        return self.position - self.history_length

    @property
    def backward_target(self) -> int:
        """Index of the sample a backward prediction estimates (may be negative)."""
        return self.start - 1

    def check_history(self, n_samples: int) -> None:
        """Only the history window [p-N, p-1] has to exist."""
        if self.start < 0:
            raise WindowRangeError(
                f"window starts before the signal: position - history_length = {self.start}"
            )
        if self.position > n_samples:
            raise WindowRangeError(
                f"window ends at {self.position - 1}, past the last sample (length {n_samples})"
            )

    def check_against(self, n_samples: int) -> None:
        if self.start < 0:
            raise WindowRangeError(
                f"window starts before the signal: position - history_length = {self.start}"
            )
        if self.position >= n_samples:
            raise WindowRangeError(
                f"position {self.position} is outside the signal (length {n_samples})"
            )
