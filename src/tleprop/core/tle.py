"""TLE (Two-Line Element) validation and parsing.

Lines are checked for the fixed NORAD record length here and then handed to
SGP4 for field-level parsing, so a :class:`TwoLineElement` only exists once
SGP4 has accepted it.
"""

from __future__ import annotations

import logging
import math
from dataclasses import dataclass, field
from datetime import datetime
from typing import TYPE_CHECKING

from tleprop.core.elements import DEFAULT_CONFIG, IngestError, OrbitalElementSet
from tleprop.errors import MalformedTwoLineElement
from tleprop.utils.constants import MINUTES_PER_DAY, TLE_LINE_COUNT, TLE_LINE_LENGTH

if TYPE_CHECKING:
    from tleprop.core.propagation import StateVector

logger = logging.getLogger(__name__)


def _check_length(line: str, number: int) -> None:
    if len(line) != TLE_LINE_LENGTH:
        logger.warning("Invalid TLE line %d (%d chars): %r", number, len(line), line)
        raise MalformedTwoLineElement(
            f"Line {number} is the wrong length. "
            f"Expected {TLE_LINE_LENGTH}, but got {len(line)}"
        )


@dataclass(frozen=True)
class TwoLineElement:
    """A validated Two-Line Element set.

    Two instances compare equal when their element lines are equal; the
    optional name line does not take part.

    Attributes:
        line1: TLE line 1, trimmed.
        line2: TLE line 2, trimmed.
        elements: SGP4 element set built from the two lines.
        name: Satellite name (line 0), if one was given.
    """

    line1: str
    line2: str
    elements: OrbitalElementSet = field(repr=False, compare=False)
    name: str = field(default="", compare=False)

    @classmethod
    def from_lines(cls, line1: str, line2: str, name: str = "") -> TwoLineElement:
        """Validate two element lines and build a TLE.

        Args:
            line1: TLE line 1 (69 characters once trimmed).
            line2: TLE line 2 (69 characters once trimmed).
            name: Optional satellite name.

        Returns:
            The validated TLE.

        Raises:
            MalformedTwoLineElement: If a line has the wrong length or SGP4
                rejects the elements.
        """
        line1 = line1.strip()
        line2 = line2.strip()

        _check_length(line1, 1)
        _check_length(line2, 2)

        try:
            elements = OrbitalElementSet.ingest(line1, line2, DEFAULT_CONFIG)
        except IngestError as exc:
            logger.warning("SGP4 rejected TLE: %s", exc)
            raise MalformedTwoLineElement(f"SGP4 rejected the elements: {exc}") from exc

        tle = cls(line1=line1, line2=line2, elements=elements, name=name.strip())
        logger.debug("Parsed TLE for NORAD %d (epoch %s)", tle.norad_id, tle.epoch.isoformat())
        return tle

    @classmethod
    def from_text(cls, text: str) -> TwoLineElement:
        """Build a TLE from a block of text holding both lines.

        The block may start with a satellite name line. Lines are split on
        newlines; a single trailing newline is dropped, any other blank line
        counts towards the total.

        Raises:
            MalformedTwoLineElement: If the block does not hold exactly two
                element lines, or they fail validation.
        """
        if text.endswith("\n"):
            text = text[:-1]
        lines = text.split("\n")

        if len(lines) == TLE_LINE_COUNT + 1:
            name, line1, line2 = lines
        elif len(lines) == TLE_LINE_COUNT:
            name = ""
            line1, line2 = lines
        else:
            logger.warning("Expected %d TLE lines, got %d", TLE_LINE_COUNT, len(lines))
            raise MalformedTwoLineElement(
                f"Expected {TLE_LINE_COUNT} lines (optionally preceded by a name line), "
                f"but got {len(lines)}"
            )

        return cls.from_lines(line1, line2, name=name)

    @property
    def epoch(self) -> datetime:
        """Epoch of the elements as a UTC datetime."""
        return self.elements.epoch

    @property
    def norad_id(self) -> int:
        return int(self.elements.satrec.satnum)

    @property
    def inclination_deg(self) -> float:
        return math.degrees(self.elements.satrec.inclo)

    @property
    def raan_deg(self) -> float:
        return math.degrees(self.elements.satrec.nodeo)

    @property
    def eccentricity(self) -> float:
        return self.elements.satrec.ecco

    @property
    def arg_perigee_deg(self) -> float:
        return math.degrees(self.elements.satrec.argpo)

    @property
    def mean_anomaly_deg(self) -> float:
        return math.degrees(self.elements.satrec.mo)

    @property
    def mean_motion_rev_per_day(self) -> float:
        return self.elements.satrec.no_kozai * MINUTES_PER_DAY / (2 * math.pi)

    @property
    def bstar(self) -> float:
        return self.elements.satrec.bstar

    def propagate_to(self, target_time: datetime) -> StateVector:
        """Shortcut for :func:`tleprop.core.propagation.propagate_to`."""
        from tleprop.core.propagation import propagate_to

        return propagate_to(self, target_time)

    def __str__(self) -> str:
        header = f"{self.name}\n" if self.name else ""
        return f"{header}{self.line1}\n{self.line2}"
