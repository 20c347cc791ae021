"""Shared pytest fixtures for active decoy tests."""

from __future__ import annotations

import logging
from pathlib import Path

import numpy as np
import pytest
from omegaconf import OmegaConf

from activedecoy.core.clock import SimClock
from activedecoy.core.types import RadarParams, SeekerType
from activedecoy.countermeasures.config import CountermeasureConfig
from activedecoy.countermeasures.decoy import DecoyContext, DecoyEntity
from activedecoy.countermeasures.registry import DecoyRegistry
from activedecoy.sim.entities import SimAircraft, SimSeeker, UnitTable
from activedecoy.sim.terrain import FlatTerrain
from activedecoy.utils.logging import ROOT_LOGGER


@pytest.fixture(autouse=True)
def _reset_logging():
    """Undo setup_logging() so caplog sees records in later tests."""
    yield
    root = logging.getLogger(ROOT_LOGGER)
    for handler in list(root.handlers):
        handler.close()
        root.removeHandler(handler)
    root.propagate = True
    root.setLevel(logging.NOTSET)


@pytest.fixture
def project_root() -> Path:
    return Path(__file__).parent.parent


@pytest.fixture
def config_path(project_root: Path) -> Path:
    return project_root / "config" / "default.yaml"


@pytest.fixture
def default_config(config_path: Path):
    return OmegaConf.load(config_path)


@pytest.fixture
def clock() -> SimClock:
    return SimClock()


@pytest.fixture
def radar_params() -> RadarParams:
    return RadarParams(max_range_m=5000.0, max_signal=100.0)


@pytest.fixture
def aircraft() -> SimAircraft:
    """Level aircraft at 1000 m heading +Z (north), radar off."""
    return SimAircraft(
        unit_id="BLUE-1",
        name="FS-20 Vortex",
        position=np.array([0.0, 1000.0, 0.0]),
        velocity=np.array([0.0, 0.0, 250.0]),
        rcs=1.5,
    )


@pytest.fixture
def other_aircraft() -> SimAircraft:
    return SimAircraft(
        unit_id="BLUE-2",
        name="KR-67 Ifrit",
        position=np.array([0.0, 1000.0, 300.0]),
        velocity=np.array([0.0, 0.0, 250.0]),
        rcs=1.5,
    )


@pytest.fixture
def units(aircraft: SimAircraft, other_aircraft: SimAircraft) -> UnitTable:
    return UnitTable([aircraft, other_aircraft])


@pytest.fixture
def registry() -> DecoyRegistry:
    return DecoyRegistry()


@pytest.fixture
def context(registry, clock, units) -> DecoyContext:
    return DecoyContext(
        registry=registry,
        clock=clock,
        units=units,
        terrain=FlatTerrain(),
        config=CountermeasureConfig(),
    )


@pytest.fixture
def make_decoy(context, aircraft):
    """Factory creating a registered decoy owned by ``aircraft``."""

    def _make(
        position=(500.0, 1000.0, 0.0),
        velocity=(0.0, 0.0, 0.0),
        rcs: float = 4.5,
        lifetime_s: float = 12.0,
        drag: float = 0.02,
        source=None,
    ) -> DecoyEntity:
        return DecoyEntity.create(
            context,
            source or aircraft,
            position=np.array(position, dtype=float),
            launch_velocity=np.array(velocity, dtype=float),
            rcs=rcs,
            lifetime_s=lifetime_s,
            drag_coefficient=drag,
        )

    return _make


@pytest.fixture
def seeker(radar_params) -> SimSeeker:
    """ARH seeker 2500 m east of the aircraft, tracking it with lock."""
    return SimSeeker(
        seeker_type=SeekerType.ARH,
        position=np.array([2500.0, 1000.0, 0.0]),
        speed_mps=900.0,
        radar_params=radar_params,
        target_unit_id="BLUE-1",
        lock_established=True,
        known_position=np.array([0.0, 1000.0, 0.0]),
        known_velocity=np.array([0.0, 0.0, 250.0]),
    )
