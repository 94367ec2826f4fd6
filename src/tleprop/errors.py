"""Exceptions raised by tleprop.

Every failure reaching a caller is one of the three concrete types below,
all of which derive from :class:`TLEPropError`.
"""

from __future__ import annotations


class TLEPropError(Exception):
    """Base class for all tleprop errors."""


class MalformedTwoLineElement(TLEPropError, ValueError):
    """The TLE text could not be turned into an element set.

    Raised for wrong line lengths, a wrong line count, or rejection by the
    SGP4 ingestion routine.

    Attributes:
        detail: Human-readable description of what was wrong.
    """

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return f"TLE was malformed: {self.detail}"


class PropagationError(TLEPropError):
    """SGP4 could not produce a state vector for the requested time.

    The message is deliberately generic. The SGP4 error code, when one was
    reported, is kept on ``code`` for diagnostics.
    """

    def __init__(self, code: int | None = None) -> None:
        super().__init__()
        self.code = code

    def __str__(self) -> str:
        return "Error in SGP4 propagator"


class UnknownError(TLEPropError):
    """A failure that fits none of the other categories."""

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    def __str__(self) -> str:
        return self.detail


__all__ = [
    "TLEPropError",
    "MalformedTwoLineElement",
    "PropagationError",
    "UnknownError",
]
