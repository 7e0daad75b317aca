"""Fast Burg estimation of AR prediction coefficients.

Implements the order-recursive algorithm of K. Vos, "A Fast Implementation of
Burg's Method".  Classical Burg needs O(N*m) work per order; the fast variant
computes the autocorrelation once (O(N*m)) and then advances the model order
with two auxiliary vectors ``g`` and ``r`` in O(m^2) total.

Notation follows the paper:

* ``x`` -- signal, ``p`` -- position to predict, ``N`` -- history length,
  ``m`` -- model order, ``i`` -- iteration counter (current order).
* ``c`` -- autocorrelation, ``a`` -- prediction coefficients, ``k`` --
  reflection coefficients.
* ``J`` -- the reversal matrix.  Multiplying by ``J`` is done by reading a
  vector back to front, ``v[J(index, i)] == v[i - index]``.

Every step that updates a vector in place first freezes the previous
iteration's values (``old_a``, ``old_r``, ``old_g``) and reads only from the
frozen copy.

The fast recursion does not keep ``|k[i]| <= 1`` the way classical Burg does;
values slightly above one on strongly periodic input are expected.

Precision is chosen once per :class:`FastBurg` through a
:class:`common.numeric.NumericBackend`.  A small positive epsilon from the
backend is always added to the reflection-coefficient denominator, so an
all-zero window yields zero coefficients instead of a division error.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Iterable, List, Tuple

import numpy as np

from burg.autocorr import autocorrelation
from burg.errors import NotTrainedError
from burg.prediction import backward_prediction, forward_prediction
from burg.window import EstimationWindow
from common.numeric import NumericBackend, Precision, backend_for
from common.signals import as_signal

_LOG = logging.getLogger(__name__)

__all__ = ["EngineState", "BurgEstimate", "FastBurg", "estimate"]


class EngineState(str, Enum):
    UNINITIALIZED = "uninitialized"
    INITIALIZED = "initialized"
    ITERATING = "iterating"
    DONE = "done"


@dataclass(frozen=True, slots=True)
class BurgEstimate:
    """Result of one completed train call (immutable)."""

    window: EstimationWindow
    prediction_coefs: Tuple[Any, ...]   # a[0..m], a[0] == 1
    reflection_coefs: Tuple[Any, ...]   # k[0..m-1]
    backend: NumericBackend = field(repr=False, compare=False)

    @property
    def precision(self) -> Precision:
        return self.backend.precision

    def forward_prediction(self, signal: Iterable[float] | np.ndarray) -> float:
        return forward_prediction(self.prediction_coefs, as_signal(signal), self.window, self.backend)

    def backward_prediction(self, signal: Iterable[float] | np.ndarray) -> float:
        return backward_prediction(self.prediction_coefs, as_signal(signal), self.window, self.backend)


def _j(index: int, max_index: int) -> int:
    # J-inversion: index into a reversed view of v[0..max_index]
    return max_index - index


class _Workspace:
    """Working vectors of one train call; allocated fresh, never shared."""

    __slots__ = ("a", "g", "r", "c", "k", "delta")

    def __init__(self, order: int, zero: Any) -> None:
        self.a: List[Any] = [zero] * (order + 2)
        self.g: List[Any] = [zero] * (order + 2)
        self.r: List[Any] = [zero] * (order + 1)
        self.k: List[Any] = [zero] * (order + 1)
        self.delta: List[Any] = [zero] * (order + 1)
        self.c: List[Any] = []


class FastBurg:
    """
    Fast Burg estimator bound to one signal and one numeric backend.

    ``train()`` recomputes everything from scratch for the requested window;
    nothing is carried over from a previous call.  Queries read the last
    completed estimate.  A train call that fails validation leaves that
    estimate untouched.
    """

    def __init__(self, signal: Iterable[float] | np.ndarray,
                 backend: NumericBackend | Precision | str = Precision.DOUBLE):
        if isinstance(backend, (Precision, str)):
            backend = backend_for(backend)
        self.backend: NumericBackend = backend
        self._signal = as_signal(signal)
        self._x: List[Any] = [backend.convert(v) for v in self._signal.tolist()]
        self._zero = backend.convert(0)
        self._one = backend.convert(1)
        self._two = backend.convert(2)
        self._state = EngineState.UNINITIALIZED
        self._estimate: BurgEstimate | None = None

    # ---------------- public API ----------------

    @property
    def state(self) -> EngineState:
        return self._state

    @property
    def signal(self) -> np.ndarray:
        return self._signal

    @property
    def last_estimate(self) -> BurgEstimate | None:
        return self._estimate

    def train(self, position: int, order: int, history_length: int) -> BurgEstimate:
        """
        Estimate order-``order`` coefficients from ``x[position-history_length : position]``.

        Raises EstimationConfigError for an invalid order/history combination
        and WindowRangeError when the window leaves the signal; both before
        any state changes.
        """
        window = EstimationWindow(position=position, order=order, history_length=history_length)
        window.check_against(len(self._x))

        ws = _Workspace(window.order, self._zero)
        self._initialize(ws, window)
        self._state = EngineState.INITIALIZED

        m = window.order
        i = 0
        while True:
            self._compute_reflection_coef(ws, i)
            self._update_prediction_coefs(ws, i)
            i += 1
            if i == m:
                break
            self._state = EngineState.ITERATING
            self._update_r(ws, window, i)
            self._compute_delta_r_and_a(ws, window, i)
            self._update_g(ws, i)

        est = BurgEstimate(
            window=window,
            prediction_coefs=tuple(ws.a[: m + 1]),
            reflection_coefs=tuple(ws.k[:m]),
            backend=self.backend,
        )
        self._estimate = est
        self._state = EngineState.DONE
        _LOG.debug("fast burg trained: position=%d order=%d history=%d precision=%s",
                   window.position, m, window.history_length, self.backend.precision.value)
        return est

    def forward_prediction(self) -> float:
        est = self._require_estimate()
        return forward_prediction(est.prediction_coefs, self._x, est.window, self.backend)

    def backward_prediction(self) -> float:
        est = self._require_estimate()
        return backward_prediction(est.prediction_coefs, self._x, est.window, self.backend)

    def prediction_coefs(self) -> List[Any]:
        """Copy of ``a[0..m]``."""
        return list(self._require_estimate().prediction_coefs)

    def reflection_coefs(self) -> List[Any]:
        """Copy of ``k[0..m-1]``."""
        return list(self._require_estimate().reflection_coefs)

    # ---------------- recursion steps ----------------

    def _require_estimate(self) -> BurgEstimate:
        if self._estimate is None:
            raise NotTrainedError("train() must complete before querying predictions or coefficients")
        return self._estimate

    def _initialize(self, ws: _Workspace, window: EstimationWindow) -> None:
        b = self.backend
        x = self._x
        ws.c = autocorrelation(x, window, b)
        ws.a[0] = self._one

        first = b.abs(x[window.start])
        last = b.abs(x[window.position - 1])
        ws.g[0] = b.subtract(
            b.subtract(b.multiply(self._two, ws.c[0]), b.multiply(first, first)),
            b.multiply(last, last),
        )
        ws.g[1] = b.multiply(self._two, ws.c[1])
        # the paper initializes r[1]; r[0] is the slot UpdateR shifts from
        ws.r[0] = b.multiply(self._two, ws.c[1])

    def _compute_reflection_coef(self, ws: _Workspace, i: int) -> None:
        b = self.backend
        nominator = self._zero
        denominator = self._zero
        for index in range(i + 2):
            nominator = b.add(nominator, b.multiply(ws.a[index], ws.g[_j(index, i + 1)]))
            denominator = b.add(denominator, b.multiply(ws.a[index], ws.g[index]))
        if denominator == self._zero:
            _LOG.debug("zero reflection denominator at order %d; epsilon guard applied", i)
        ws.k[i] = b.divide(
            b.subtract(self._zero, nominator),
            b.add(denominator, b.near_zero_epsilon()),
        )

    def _update_prediction_coefs(self, ws: _Workspace, i: int) -> None:
        b = self.backend
        old_a = list(ws.a)
        for index in range(i + 2):
            ws.a[index] = b.add(old_a[index], b.multiply(ws.k[i], old_a[_j(index, i + 1)]))

    def _update_r(self, ws: _Workspace, window: EstimationWindow, i: int) -> None:
        b = self.backend
        x = self._x
        start, last = window.start, window.position - 1
        old_r = list(ws.r)
        for index in range(i):
            ws.r[index + 1] = b.subtract(
                b.subtract(old_r[index], b.multiply(x[start + index], x[start + i])),
                b.multiply(x[last - index], x[last - i]),
            )
        ws.r[0] = b.multiply(self._two, ws.c[i + 1])

    def _compute_delta_r_and_a(self, ws: _Workspace, window: EstimationWindow, i: int) -> None:
        b = self.backend
        x = self._x
        start, last = window.start, window.position - 1
        # both inner products are the same for every row
        inner1 = self._zero
        inner2 = self._zero
        for column in range(i + 1):
            inner1 = b.add(inner1, b.multiply(x[start + i - column], ws.a[column]))
            inner2 = b.add(inner2, b.multiply(x[last - i + column], ws.a[column]))
        for row in range(i + 1):
            ws.delta[row] = b.subtract(
                b.subtract(self._zero, b.multiply(x[start + i - row], inner1)),
                b.multiply(x[last - i + row], inner2),
            )

    def _update_g(self, ws: _Workspace, i: int) -> None:
        b = self.backend
        old_g = list(ws.g)
        for index in range(i + 1):
            ws.g[index] = b.add(
                b.add(old_g[index], b.multiply(ws.k[i - 1], old_g[_j(index, i)])),
                ws.delta[index],
            )
        for index in range(i + 1):
            ws.g[i + 1] = b.add(ws.g[i + 1], b.multiply(ws.r[index], ws.a[index]))


def estimate(signal: Iterable[float] | np.ndarray, position: int, order: int, history_length: int,
             backend: NumericBackend | Precision | str = Precision.DOUBLE) -> BurgEstimate:
    """One-shot helper: build a :class:`FastBurg` and train it once."""
    return FastBurg(signal, backend).train(position, order, history_length)
