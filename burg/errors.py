"""Exceptions raised by the Burg estimator."""

from __future__ import annotations

__all__ = ["BurgError", "EstimationConfigError", "WindowRangeError", "NotTrainedError"]


class BurgError(Exception):
    """Base class for estimator errors."""


class EstimationConfigError(BurgError, ValueError):
    """Order / history length combination is not a valid model request."""


class WindowRangeError(BurgError, IndexError):
    """The requested window reaches outside the signal."""


class NotTrainedError(BurgError, RuntimeError):
    """A result was queried before any estimate completed."""
