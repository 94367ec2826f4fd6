"""Orbital propagation via SGP4."""
from __future__ import annotations

import logging
from dataclasses import dataclass
from datetime import datetime, timezone

import numpy as np

logger = logging.getLogger(__name__)
from numpy.typing import NDArray
from tleprop.core.elements import SGP4Error
from tleprop.core.tle import TwoLineElement
from tleprop.errors import PropagationError, UnknownError
from tleprop.utils.constants import EARTH_RADIUS_KM, SECONDS_PER_MINUTE


@dataclass(eq=False)
class StateVector:
    """Position and velocity in TEME frame.

    Attributes:
        position_km: [x, y, z] position in km.
        velocity_km_s: [vx, vy, vz] velocity in km/s.
        time: Time of this state vector (UTC).
        minutes_since_epoch: Elapsed time passed to SGP4.
    """

    position_km: NDArray[np.float64]  # shape (3,)
    velocity_km_s: NDArray[np.float64]  # shape (3,)
    time: datetime
    minutes_since_epoch: float

    __hash__ = None  # type: ignore[assignment]

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, StateVector):
            return NotImplemented
        return (
            np.array_equal(self.position_km, other.position_km)
            and np.array_equal(self.velocity_km_s, other.velocity_km_s)
            and self.time == other.time
            and self.minutes_since_epoch == other.minutes_since_epoch
        )

    @property
    def altitude_km(self) -> float:
        """Height above the WGS-84 equatorial radius, in km."""
        return float(np.linalg.norm(self.position_km)) - EARTH_RADIUS_KM


def _as_utc(t: datetime) -> datetime:
    # Naive datetimes are taken to be UTC already.
    if t.tzinfo is None:
        return t.replace(tzinfo=timezone.utc)
    return t.astimezone(timezone.utc)


def epoch(tle: TwoLineElement) -> datetime:
    """Return the epoch of ``tle`` as a UTC datetime."""
    return tle.epoch


def minutes_since_epoch(tle: TwoLineElement, target_time: datetime) -> float:
    """Signed minutes from the TLE epoch to ``target_time``.

    Negative when ``target_time`` precedes the epoch. Microsecond precision
    is kept.
    """
    return (_as_utc(target_time) - tle.epoch).total_seconds() / SECONDS_PER_MINUTE


def propagate_to(tle: TwoLineElement, target_time: datetime) -> StateVector:
    """Propagate a TLE to a single time using SGP4.

    Args:
        tle: A validated TLE.
        target_time: Time to propagate to. Naive datetimes are read as UTC.

    Returns:
        The state vector at ``target_time``.

    Raises:
        PropagationError: If SGP4 cannot produce a state (decayed orbit,
            diverging elements and the like).
        UnknownError: If the propagator fails in an unexpected way.
    """
    t = _as_utc(target_time)
    tsince = minutes_since_epoch(tle, t)

    try:
        position, velocity = tle.elements.propagate(tsince)
    except SGP4Error as exc:
        logger.warning(
            "SGP4 propagation failed for NORAD %d at %s (%+.3f min): %s (code %s)",
            tle.norad_id, t.isoformat(), tsince, exc, exc.code,
        )
        raise PropagationError(exc.code) from exc
    except (ArithmeticError, SystemError) as exc:
        logger.warning("Unexpected propagator failure for NORAD %d: %r", tle.norad_id, exc)
        raise UnknownError(f"Unexpected propagator failure: {exc}") from exc

    logger.debug("Propagated NORAD %d to %s (%+.3f min)", tle.norad_id, t.isoformat(), tsince)
    return StateVector(
        position_km=np.array(position, dtype=np.float64),
        velocity_km_s=np.array(velocity, dtype=np.float64),
        time=t,
        minutes_since_epoch=tsince,
    )
