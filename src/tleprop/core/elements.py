"""Boundary to the external SGP4 propagator.

Everything that touches :mod:`sgp4` directly lives here. The rest of the
package sees an :class:`OrbitalElementSet` and the two internal exceptions
below, and translates them into the public error types.
"""

from __future__ import annotations

import logging
import math
import threading
from dataclasses import dataclass, field
from datetime import datetime, timezone

from sgp4.api import SGP4_ERRORS, WGS84, Satrec
from sgp4.conveniences import sat_epoch_datetime

from tleprop.utils.constants import OPERATION_MODE_IMPROVED, RUN_MODE_VERIFICATION

logger = logging.getLogger(__name__)

# Julian date of the SGP4 epoch origin, 1949 December 31 00:00 UT.
_SGP4INIT_EPOCH_JD = 2433281.5

_OPERATION_MODES = ("a", "i")
_RUN_MODES = (RUN_MODE_VERIFICATION,)


class IngestError(Exception):
    """SGP4 rejected a pair of element lines."""


class SGP4Error(Exception):
    """SGP4 reported a failure while propagating.

    Attributes:
        code: SGP4 error code, or None when the failure was detected by
            inspecting the returned state rather than reported by SGP4.
    """

    def __init__(self, code: int | None, message: str) -> None:
        super().__init__(message)
        self.code = code


@dataclass(frozen=True)
class PropagatorConfig:
    """How element lines are turned into an SGP4 record.

    Attributes:
        run_mode: SGP4 run type. Informational only: ``Satrec.twoline2rv``
            takes no run type, and SGP4 only reads columns past 69 for it.
            Verification (``"v"``) is the only accepted value.
        operation_mode: ``"i"`` (improved) or ``"a"`` (AFSPC compatible).
        gravity_model: Gravity constant selector from :mod:`sgp4.api`.
    """

    run_mode: str = RUN_MODE_VERIFICATION
    operation_mode: str = OPERATION_MODE_IMPROVED
    gravity_model: int = WGS84

    def __post_init__(self) -> None:
        if self.run_mode not in _RUN_MODES:
            raise ValueError(f"Unknown SGP4 run mode: {self.run_mode!r}")
        if self.operation_mode not in _OPERATION_MODES:
            raise ValueError(f"Unknown SGP4 operation mode: {self.operation_mode!r}")


DEFAULT_CONFIG = PropagatorConfig()
"""Verification run mode, improved operation mode, WGS-84 constants."""


def error_message(code: int) -> str:
    """Return the SGP4 description for an error code."""
    return SGP4_ERRORS.get(code, f"SGP4 error code {code}")


def _reinitialize(satrec: Satrec, config: PropagatorConfig) -> None:
    # Satrec.twoline2rv always initializes in improved mode.
    satrec.sgp4init(
        config.gravity_model,
        config.operation_mode,
        satrec.satnum,
        satrec.jdsatepoch + satrec.jdsatepochF - _SGP4INIT_EPOCH_JD,
        satrec.bstar,
        satrec.ndot,
        satrec.nddot,
        satrec.ecco,
        satrec.argpo,
        satrec.inclo,
        satrec.mo,
        satrec.no_kozai,
        satrec.nodeo,
    )


@dataclass(frozen=True)
class OrbitalElementSet:
    """An SGP4 record plus the configuration that built it.

    Instances are only created through :meth:`ingest`. ``satrec`` is
    never reinitialized afterwards; SGP4 does write scratch fields into it
    on every propagation, so those calls are serialized per instance.

    Attributes:
        satrec: The underlying :class:`sgp4.api.Satrec`.
        config: Configuration used at ingestion.
        epoch: Epoch of the elements as a UTC datetime.
    """

    satrec: Satrec = field(repr=False)
    config: PropagatorConfig
    epoch: datetime
    _lock: threading.Lock = field(default_factory=threading.Lock, repr=False, compare=False)

    @classmethod
    def ingest(
        cls, line1: str, line2: str, config: PropagatorConfig = DEFAULT_CONFIG
    ) -> OrbitalElementSet:
        """Build an element set from two element lines.

        Args:
            line1: TLE line 1.
            line2: TLE line 2.
            config: SGP4 configuration.

        Returns:
            The initialized element set.

        Raises:
            IngestError: If SGP4 cannot parse or initialize the elements.
        """
        try:
            satrec = Satrec.twoline2rv(line1, line2, config.gravity_model)
        except ValueError as exc:
            raise IngestError(str(exc)) from exc

        if config.operation_mode != OPERATION_MODE_IMPROVED:
            _reinitialize(satrec, config)

        if satrec.error != 0:
            raise IngestError(error_message(satrec.error))

        epoch = sat_epoch_datetime(satrec).replace(tzinfo=timezone.utc)
        return cls(satrec=satrec, config=config, epoch=epoch)

    def propagate(
        self, minutes: float
    ) -> tuple[tuple[float, float, float], tuple[float, float, float]]:
        """Run SGP4 ``minutes`` after epoch.

        Returns:
            Position (km) and velocity (km/s) in the TEME frame.

        Raises:
            SGP4Error: If SGP4 reports an error or returns a non-finite state.
        """
        with self._lock:
            code, position, velocity = self.satrec.sgp4_tsince(minutes)

        if code != 0:
            raise SGP4Error(code, error_message(code))
        if not all(math.isfinite(x) for x in (*position, *velocity)):
            raise SGP4Error(None, "SGP4 returned a non-finite state")

        return tuple(position), tuple(velocity)
