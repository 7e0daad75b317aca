# burg/autocorr.py
# Python 3.10+
# Purpose: lag-indexed autocorrelation over the history window of one estimation request.
#   c[j] = sum_{index=p-N}^{p-1-j} x[index] * x[index+j],   j = 0..m
# - No normalization, no window function; O(N*m).
# - Samples must already be in the backend's scalar type (FastBurg converts them once).

from __future__ import annotations

from typing import Any, List, Sequence

from burg.window import EstimationWindow
from common.numeric import NumericBackend

__all__ = ["autocorrelation"]


def autocorrelation(x: Sequence[Any], window: EstimationWindow, backend: NumericBackend) -> List[Any]:
    """Return ``[c[0], ..., c[m]]`` for ``window`` (length ``order + 1``)."""
    window.check_history(len(x))
    start = window.start
    c: List[Any] = []
    for lag in range(window.order + 1):
        acc = backend.convert(0)
        for index in range(start, window.position - lag):
            acc = backend.add(acc, backend.multiply(x[index], x[index + lag]))
        c.append(acc)
    return c
