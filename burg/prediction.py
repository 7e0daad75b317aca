# burg/prediction.py
# Python 3.10+
# Purpose: one-step predictions from final AR prediction coefficients a[0..m] (a[0] == 1).
#   forward : x^[p]       = -sum_{index=1}^{m} a[index] * x[p - index]
#   backward: x^[p-N-1]   = -sum_{index=1}^{m} a[index] * x[p - N - 1 + index]
# - Both read only samples inside the history window [p-N, p-1].
# - Accumulation happens in the backend's scalar type; the result is returned as float.

from __future__ import annotations

from typing import Any, Sequence

from burg.errors import WindowRangeError
from burg.window import EstimationWindow
from common.numeric import NumericBackend

__all__ = ["forward_prediction", "backward_prediction"]


def _weighted_sum(coefs: Sequence[Any], x: Sequence[Any], first: int, step: int,
                  backend: NumericBackend) -> float:
    acc = backend.convert(0)
    for index in range(1, len(coefs)):
        sample = backend.convert(x[first + step * index])
        acc = backend.subtract(acc, backend.multiply(coefs[index], sample))
    return backend.to_float(acc)


def forward_prediction(coefs: Sequence[Any], x: Sequence[Any], window: EstimationWindow,
                       backend: NumericBackend) -> float:
    """Predict ``x[window.position]`` from the ``m`` samples right before it."""
    window.check_against(len(x))
    return _weighted_sum(coefs, x, window.position, -1, backend)


def backward_prediction(coefs: Sequence[Any], x: Sequence[Any], window: EstimationWindow,
                        backend: NumericBackend) -> float:
    """
    Predict the sample just before the window, ``x[position - history_length - 1]``.
    Raises WindowRangeError when that index is negative (window starts at x[0]).
    """
    window.check_against(len(x))
    if window.backward_target < 0:
        raise WindowRangeError(
            f"backward prediction target {window.backward_target} is before the first sample"
        )
    return _weighted_sum(coefs, x, window.backward_target, +1, backend)
