from __future__ import annotations

import pytest

from burg.errors import WindowRangeError
from burg.prediction import backward_prediction, forward_prediction
from burg.window import EstimationWindow
from common.numeric import DecimalBackend, Float64Backend


def test_forward_prediction_uses_samples_before_position() -> None:
    x = [0.0, 0.0, 3.0, 5.0, 7.0, 100.0]
    w = EstimationWindow(position=5, order=2, history_length=4)
    # -(a1*x[4] + a2*x[3])
    assert forward_prediction([1.0, -2.0, 1.0], x, w, Float64Backend()) == pytest.approx(9.0)


def test_backward_prediction_uses_samples_after_window_start() -> None:
    x = [100.0, 7.0, 5.0, 3.0, 1.0, 0.0]
    w = EstimationWindow(position=5, order=2, history_length=4)
    # target x[0]; -(a1*x[1] + a2*x[2])
    assert backward_prediction([1.0, -2.0, 1.0], x, w, Float64Backend()) == pytest.approx(9.0)


def test_prediction_with_decimal_coefficients_returns_float() -> None:
    b = DecimalBackend()
    coefs = [b.convert(1), b.convert(-0.5)]
    w = EstimationWindow(position=3, order=1, history_length=2)
    out = forward_prediction(coefs, [1.0, 2.0, 4.0, 0.0], w, b)
    assert isinstance(out, float)
    assert out == 2.0


def test_prediction_window_outside_signal() -> None:
    w = EstimationWindow(position=6, order=2, history_length=4)
    with pytest.raises(WindowRangeError):
        forward_prediction([1.0, 0.0, 0.0], [0.0] * 6, w, Float64Backend())
