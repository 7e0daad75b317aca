# common/signals.py
# Python 3.10+
# Purpose: build and validate the sample sequences the Burg estimator reads.
# - as_signal(): any 1-D real sequence -> read-only float64 ndarray (finite values only)
# - sine_signal(): x[t] = sin(2*pi*t / period), the reference test signal
# - load_signal_csv(): one column of a CSV file (pandas) as a signal
# The estimator never windows or normalizes the samples; what is built here is used as-is.

from __future__ import annotations

import os
from typing import Iterable

import numpy as np
import pandas as pd

__all__ = ["as_signal", "sine_signal", "zero_signal", "load_signal_csv"]


def as_signal(values: Iterable[float] | np.ndarray) -> np.ndarray:
    """
    Validate and freeze a signal.
    Returns a private float64 copy with the write flag cleared, so the samples cannot
    change while an estimate over them is running.
    """
    try:
        arr = np.array(values, dtype=np.float64, copy=True)
    except (TypeError, ValueError) as e:
        raise TypeError("signal must be a sequence of real numbers") from e
    if arr.ndim != 1:
        raise ValueError(f"signal must be 1-D (got shape {arr.shape})")
    if not np.all(np.isfinite(arr)):
        raise ValueError("signal must contain only finite samples")
    arr.setflags(write=False)
    return arr


def sine_signal(length: int, period: float) -> np.ndarray:
    if length < 0:
        raise ValueError("length must be >= 0")
    if not (period > 0):
        raise ValueError("period must be > 0")
    t = np.arange(int(length), dtype=np.float64)
    return as_signal(np.sin(2.0 * np.pi * t / float(period)))


def zero_signal(length: int) -> np.ndarray:
    if length < 0:
        raise ValueError("length must be >= 0")
    return as_signal(np.zeros(int(length), dtype=np.float64))


def load_signal_csv(path: str | os.PathLike, column: str | None = None) -> np.ndarray:
    """
    Read one column of a CSV file (utf-8, header row) as a signal.
    Without ``column`` the first numeric column is used.
    """
    df = pd.read_csv(path)
    if column is None:
        numeric = df.select_dtypes(include=[np.number]).columns
        if len(numeric) == 0:
            raise ValueError(f"no numeric column in {path}")
        column = str(numeric[0])
    elif column not in df.columns:
        raise KeyError(f"column {column!r} not found in {path} (have: {', '.join(map(str, df.columns))})")
    return as_signal(df[column].to_numpy(dtype=np.float64))
