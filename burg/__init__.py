"""Fast Burg AR estimation and one-step prediction."""

from .autocorr import autocorrelation
from .errors import BurgError, EstimationConfigError, NotTrainedError, WindowRangeError
from .fastburg import BurgEstimate, EngineState, FastBurg, estimate
from .prediction import backward_prediction, forward_prediction
from .window import EstimationWindow

__all__ = [
    "autocorrelation",
    "BurgError",
    "EstimationConfigError",
    "NotTrainedError",
    "WindowRangeError",
    "BurgEstimate",
    "EngineState",
    "FastBurg",
    "estimate",
    "backward_prediction",
    "forward_prediction",
    "EstimationWindow",
]
