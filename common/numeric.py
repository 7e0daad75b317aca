"""Scalar arithmetic backends for the Burg estimator.

A backend is a stateless policy object that fixes the scalar type used for
every intermediate value of one estimation session.  The recursion never
inspects the type of the numbers it handles; it only calls the backend.

Three instantiations are provided:

* ``double``  -- IEEE-754 binary64 (Python ``float``), the default.
* ``single``  -- samples rounded to IEEE-754 binary32, arithmetic in binary64.
* ``decimal`` -- ``decimal.Decimal`` evaluated in a private context
  (34 significant digits unless configured otherwise).

Each backend also supplies ``near_zero_epsilon()``, the positive value added
to a reflection-coefficient denominator so that an exactly zero denominator
(e.g. an all-zero window) does not raise.
"""

from __future__ import annotations

import decimal
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Callable, Dict, Protocol

import numpy as np

__all__ = [
    "Precision", "NumericBackend", "UnsupportedPrecisionError",
    "Float64Backend", "Float32Backend", "DecimalBackend",
    "backend_for",
]


class UnsupportedPrecisionError(ValueError):
    """Raised when a precision selector does not name a known backend."""


class Precision(str, Enum):
    SINGLE = "single"
    DOUBLE = "double"
    DECIMAL = "decimal"


class NumericBackend(Protocol):
    """Operation set the recursion is written against."""

    precision: Precision

    def convert(self, value: Any) -> Any:
        ...

    def to_float(self, value: Any) -> float:
        ...

    def add(self, a: Any, b: Any) -> Any:
        ...

    def subtract(self, a: Any, b: Any) -> Any:
        ...

    def multiply(self, a: Any, b: Any) -> Any:
        ...

    def divide(self, a: Any, b: Any) -> Any:
        ...

    def abs(self, a: Any) -> Any:
        ...

    def near_zero_epsilon(self) -> Any:
        ...


# smallest positive subnormal double
_F64_TINY = float(np.finfo(np.float64).smallest_subnormal)

_DECIMAL_TINY = decimal.Decimal("1e-27")


@dataclass(frozen=True, slots=True)
class Float64Backend:
    precision: Precision = field(default=Precision.DOUBLE, init=False)

    def convert(self, value: Any) -> float:
        return float(value)

    def to_float(self, value: float) -> float:
        return float(value)

    def add(self, a: float, b: float) -> float:
        return a + b

    def subtract(self, a: float, b: float) -> float:
        return a - b

    def multiply(self, a: float, b: float) -> float:
        return a * b

    def divide(self, a: float, b: float) -> float:
        return a / b

    def abs(self, a: float) -> float:
        return abs(a)

    def near_zero_epsilon(self) -> float:
        return _F64_TINY


@dataclass(frozen=True, slots=True)
class Float32Backend:
    """
    Single-precision samples, double-precision arithmetic.

    ``convert`` rounds every value to binary32 and hands it back as a Python
    ``float``; sums, products and quotients are then evaluated in binary64.
    """

    precision: Precision = field(default=Precision.SINGLE, init=False)

    def convert(self, value: Any) -> float:
        return float(np.float32(value))

    def to_float(self, value: float) -> float:
        return float(value)

    def add(self, a: float, b: float) -> float:
        return a + b

    def subtract(self, a: float, b: float) -> float:
        return a - b

    def multiply(self, a: float, b: float) -> float:
        return a * b

    def divide(self, a: float, b: float) -> float:
        return a / b

    def abs(self, a: float) -> float:
        return abs(a)

    def near_zero_epsilon(self) -> float:
        return _F64_TINY


@dataclass(frozen=True, slots=True)
class DecimalBackend:
    """
    Extended precision through ``decimal.Decimal``.

    All operations go through a private :class:`decimal.Context`, so the
    thread-local default context of the caller is neither read nor modified.
    Floats are converted with correct rounding to ``digits`` significant
    digits.
    """

    digits: int = 34
    precision: Precision = field(default=Precision.DECIMAL, init=False)
    _ctx: decimal.Context = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if not isinstance(self.digits, int) or isinstance(self.digits, bool):
            raise TypeError("digits must be int")
        if self.digits < 16:
            raise ValueError("digits must be >= 16 (anything less is worse than double)")
        ctx = decimal.Context(prec=self.digits, rounding=decimal.ROUND_HALF_EVEN)
        object.__setattr__(self, "_ctx", ctx)

    def convert(self, value: Any) -> decimal.Decimal:
        if isinstance(value, decimal.Decimal):
            return self._ctx.plus(value)
        if isinstance(value, int) and not isinstance(value, bool):
            return self._ctx.create_decimal(value)
        return self._ctx.create_decimal_from_float(float(value))

    def to_float(self, value: decimal.Decimal) -> float:
        return float(value)

    def add(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self._ctx.add(a, b)

    def subtract(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self._ctx.subtract(a, b)

    def multiply(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self._ctx.multiply(a, b)

    def divide(self, a: decimal.Decimal, b: decimal.Decimal) -> decimal.Decimal:
        return self._ctx.divide(a, b)

    def abs(self, a: decimal.Decimal) -> decimal.Decimal:
        return self._ctx.abs(a)

    def near_zero_epsilon(self) -> decimal.Decimal:
        return _DECIMAL_TINY


_FACTORIES: Dict[Precision, Callable[[], NumericBackend]] = {
    Precision.SINGLE: Float32Backend,
    Precision.DOUBLE: Float64Backend,
    Precision.DECIMAL: DecimalBackend,
}


def backend_for(precision: Precision | str) -> NumericBackend:
    """
    Resolve a precision selector (enum member or its string value) to a
    backend instance.  Unknown selectors raise :class:`UnsupportedPrecisionError`
    before any computation starts.
    """
    if isinstance(precision, Precision):
        sel = precision
    else:
        try:
            sel = Precision(str(precision).strip().lower())
        except ValueError as e:
            raise UnsupportedPrecisionError(
                f"unsupported precision: {precision!r} "
                f"(expected one of {', '.join(p.value for p in Precision)})"
            ) from e
    return _FACTORIES[sel]()
