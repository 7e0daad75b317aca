from __future__ import annotations

import math

import numpy as np
import pandas as pd
import pytest

from common.signals import as_signal, load_signal_csv, sine_signal, zero_signal


def test_as_signal_returns_read_only_copy() -> None:
    src = [0.0, 1.0, 2.0]
    sig = as_signal(src)
    assert sig.dtype == np.float64
    assert not sig.flags.writeable
    with pytest.raises(ValueError):
        sig[0] = 5.0
    src[0] = 9.0
    assert sig[0] == 0.0


def test_as_signal_rejects_bad_input() -> None:
    with pytest.raises(ValueError):
        as_signal([[1.0, 2.0], [3.0, 4.0]])
    with pytest.raises(ValueError):
        as_signal([1.0, float("nan")])
    with pytest.raises(ValueError):
        as_signal([1.0, float("inf")])
    with pytest.raises(TypeError):
        as_signal(["a", "b"])


def test_sine_signal_matches_formula() -> None:
    sig = sine_signal(20, 512 / 5.2)
    assert len(sig) == 20
    for t in (0, 3, 19):
        assert sig[t] == pytest.approx(math.sin(2 * math.pi * t / (512 / 5.2)), abs=1e-15)


def test_sine_signal_validation() -> None:
    with pytest.raises(ValueError):
        sine_signal(-1, 10.0)
    with pytest.raises(ValueError):
        sine_signal(10, 0.0)


def test_zero_signal() -> None:
    sig = zero_signal(7)
    assert sig.shape == (7,)
    assert not sig.any()


def test_load_signal_csv_first_numeric_column(tmp_path) -> None:
    path = tmp_path / "sig.csv"
    pd.DataFrame({"label": ["a", "b", "c"], "x": [0.5, -0.25, 1.0]}).to_csv(path, index=False)
    sig = load_signal_csv(path)
    assert sig.tolist() == [0.5, -0.25, 1.0]


def test_load_signal_csv_named_column(tmp_path) -> None:
    path = tmp_path / "sig.csv"
    pd.DataFrame({"x": [1.0, 2.0], "y": [3.0, 4.0]}).to_csv(path, index=False)
    assert load_signal_csv(path, "y").tolist() == [3.0, 4.0]
    with pytest.raises(KeyError):
        load_signal_csv(path, "z")
