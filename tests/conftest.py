"""Test configuration for pytest."""

from __future__ import annotations

import sys
from pathlib import Path

import pytest


# Ensure the project root is on ``sys.path`` so tests can import local packages without
# requiring an editable install.
PROJECT_ROOT = Path(__file__).resolve().parents[1]
if str(PROJECT_ROOT) not in sys.path:
    sys.path.insert(0, str(PROJECT_ROOT))

ORDER = 4
HISTORY = 512
SAMPLES_TO_CHECK = 10
PERIOD = HISTORY / 5.2


@pytest.fixture
def sine():
    """x[t] = sin(2*pi*t / (512/5.2)), t = 0..522."""
    from common.signals import sine_signal

    return sine_signal(HISTORY + SAMPLES_TO_CHECK + 1, PERIOD)


@pytest.fixture
def zeros():
    from common.signals import zero_signal

    return zero_signal(HISTORY + SAMPLES_TO_CHECK + 1)
