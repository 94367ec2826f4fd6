"""
tleprop — TLE validation and SGP4 state vectors for Python.

Validates NORAD Two-Line Element sets and propagates them to any
requested time with SGP4, returning TEME position and velocity.
"""

from __future__ import annotations

__version__ = "0.1.0.dev0"

from tleprop.core.tle import TwoLineElement
from tleprop.core.propagation import epoch, minutes_since_epoch, propagate_to, StateVector
from tleprop.errors import MalformedTwoLineElement, PropagationError, TLEPropError, UnknownError

__all__ = [
    "__version__",
    "TwoLineElement",
    "epoch",
    "minutes_since_epoch",
    "propagate_to",
    "StateVector",
    "TLEPropError",
    "MalformedTwoLineElement",
    "PropagationError",
    "UnknownError",
]
