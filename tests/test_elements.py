"""Tests for the SGP4 boundary: configuration, ingestion and raw propagation."""
from __future__ import annotations

import math
from datetime import datetime, timezone
from unittest.mock import MagicMock

import numpy as np
import pytest
from sgp4.api import WGS72, WGS84

from tleprop.core.elements import (
    DEFAULT_CONFIG,
    IngestError,
    OrbitalElementSet,
    PropagatorConfig,
    SGP4Error,
    error_message,
)

ISS_LINE1 = "1 25544U 98067A   20148.21301450  .00001715  00000-0  38778-4 0  9992"
ISS_LINE2 = "2 25544  51.6435  92.2789 0002570 358.0648 144.9972 15.49396855228767"

NAN3 = (math.nan, math.nan, math.nan)


def _fake_elements(satrec: MagicMock) -> OrbitalElementSet:
    return OrbitalElementSet(
        satrec=satrec,
        config=DEFAULT_CONFIG,
        epoch=datetime(2020, 5, 27, tzinfo=timezone.utc),
    )


class TestPropagatorConfig:
    def test_default_policy(self) -> None:
        assert DEFAULT_CONFIG.run_mode == "v"
        assert DEFAULT_CONFIG.operation_mode == "i"
        assert DEFAULT_CONFIG.gravity_model == WGS84

    def test_unknown_operation_mode(self) -> None:
        with pytest.raises(ValueError, match="operation mode"):
            PropagatorConfig(operation_mode="x")

    def test_unknown_run_mode(self) -> None:
        with pytest.raises(ValueError, match="run mode"):
            PropagatorConfig(run_mode="q")

    def test_only_verification_run_mode(self) -> None:
        with pytest.raises(ValueError, match="run mode"):
            PropagatorConfig(run_mode="c")


class TestIngest:
    def test_ingest_iss(self) -> None:
        elements = OrbitalElementSet.ingest(ISS_LINE1, ISS_LINE2)
        assert elements.config is DEFAULT_CONFIG
        assert elements.satrec.satnum == 25544
        assert elements.epoch.tzinfo is timezone.utc
        assert elements.epoch.strftime("%Y-%j") == "2020-148"

    def test_epoch_fraction(self) -> None:
        elements = OrbitalElementSet.ingest(ISS_LINE1, ISS_LINE2)
        start_of_day = elements.epoch.replace(hour=0, minute=0, second=0, microsecond=0)
        fraction = (elements.epoch - start_of_day).total_seconds() / 86400.0
        assert abs(fraction - 0.21301450) < 1e-7

    def test_afspc_mode_close_to_improved(self) -> None:
        improved = OrbitalElementSet.ingest(ISS_LINE1, ISS_LINE2)
        afspc = OrbitalElementSet.ingest(
            ISS_LINE1, ISS_LINE2, PropagatorConfig(operation_mode="a")
        )
        r_i, _ = improved.propagate(60.0)
        r_a, _ = afspc.propagate(60.0)
        assert np.linalg.norm(np.subtract(r_i, r_a)) < 1.0

    def test_gravity_model_changes_result(self) -> None:
        wgs84 = OrbitalElementSet.ingest(ISS_LINE1, ISS_LINE2)
        wgs72 = OrbitalElementSet.ingest(
            ISS_LINE1, ISS_LINE2, PropagatorConfig(gravity_model=WGS72)
        )
        r84, _ = wgs84.propagate(60.0)
        r72, _ = wgs72.propagate(60.0)
        assert r84 != r72


class TestPropagate:
    def test_returns_three_vectors(self) -> None:
        elements = OrbitalElementSet.ingest(ISS_LINE1, ISS_LINE2)
        position, velocity = elements.propagate(0.0)
        assert len(position) == 3
        assert len(velocity) == 3

    def test_error_code_raised(self) -> None:
        satrec = MagicMock()
        satrec.sgp4_tsince.return_value = (6, NAN3, NAN3)
        with pytest.raises(SGP4Error) as excinfo:
            _fake_elements(satrec).propagate(1e6)
        assert excinfo.value.code == 6
        assert str(excinfo.value) == error_message(6)

    def test_non_finite_state_raised(self) -> None:
        satrec = MagicMock()
        satrec.sgp4_tsince.return_value = (0, NAN3, (1.0, 2.0, 3.0))
        with pytest.raises(SGP4Error, match="non-finite") as excinfo:
            _fake_elements(satrec).propagate(10.0)
        assert excinfo.value.code is None

    def test_minutes_forwarded(self) -> None:
        satrec = MagicMock()
        satrec.sgp4_tsince.return_value = (0, (1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
        assert _fake_elements(satrec).propagate(-12.5) == ((1.0, 2.0, 3.0), (4.0, 5.0, 6.0))
        satrec.sgp4_tsince.assert_called_once_with(-12.5)


def test_error_message_unknown_code() -> None:
    assert error_message(99) == "SGP4 error code 99"


def test_ingest_error_is_plain_exception() -> None:
    assert not issubclass(IngestError, ValueError)
