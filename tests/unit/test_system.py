"""Tests for the ActiveDecoySystem facade."""

from __future__ import annotations

import numpy as np
import pytest
from omegaconf import OmegaConf

from activedecoy.core.types import AircraftType
from activedecoy.countermeasures.config import CountermeasureConfig
from activedecoy.countermeasures.system import ActiveDecoySystem
from activedecoy.sim.terrain import FlatTerrain


@pytest.fixture
def system(units, clock) -> ActiveDecoySystem:
    return ActiveDecoySystem(CountermeasureConfig(), units, clock, terrain=FlatTerrain())


def _point_seeker_at(seeker, decoy_position):
    """Put the seeker 2000 m east of a decoy at the same altitude."""
    seeker.position = np.array(decoy_position) + np.array([2000.0, 0.0, 0.0])


class TestLaunch:
    def test_launch_registers(self, system, aircraft):
        decoy = system.launch(aircraft)
        assert decoy is not None
        assert decoy in system.registry
        assert system.decoys == [decoy]

    def test_launch_disabled(self, units, clock, aircraft):
        system = ActiveDecoySystem(CountermeasureConfig(enabled=False), units, clock)
        assert system.launch(aircraft) is None
        assert len(system.registry) == 0

    def test_launch_from_dead_unit(self, system, aircraft):
        aircraft.is_alive = False
        assert system.launch(aircraft) is None


class TestTick:
    def test_tick_moves_decoys(self, system, aircraft, clock):
        decoy = system.launch(aircraft)
        start = decoy.position.copy()
        clock.step(0.1)
        system.tick(0.1)
        assert not np.array_equal(decoy.position, start)

    def test_expired_decoys_reaped_after_grace(self, system, aircraft, clock):
        decoy = system.launch(aircraft)
        for _ in range(int(12.5 / 0.5)):
            clock.step(0.5)
            system.tick(0.5)
        assert decoy not in system.registry
        assert decoy.pending_destruction
        assert system.decoys == [decoy]
        assert system.status()["pending_destruction"] == 1
        clock.step(1.0)
        system.tick(0.5)
        assert decoy.destroyed
        assert system.decoys == []

    def test_host_destroy(self, system, aircraft):
        decoy = system.launch(aircraft)
        system.destroy(decoy)
        assert decoy.destroyed
        assert system.decoys == []
        assert len(system.registry) == 0


class TestPerSeekerTick:
    def test_redirect(self, system, aircraft, seeker):
        decoy = system.launch(aircraft)
        _point_seeker_at(seeker, decoy.position)
        assert system.per_seeker_tick(seeker) is decoy
        assert seeker.target_unit_id is None
        assert system.status()["redirects"] == 1

    def test_kill_switch_stops_retargeting(self, units, clock, aircraft, seeker):
        config = CountermeasureConfig()
        system = ActiveDecoySystem(config, units, clock)
        decoy = system.launch(aircraft)
        _point_seeker_at(seeker, decoy.position)
        config.enabled = False
        assert system.per_seeker_tick(seeker) is None
        assert seeker.target_unit_id == "BLUE-1"


class TestFromConfig:
    def test_from_default_yaml(self, default_config, units, clock):
        system = ActiveDecoySystem.from_config(
            default_config.active_decoy.countermeasures, units, clock
        )
        assert system.config.enabled is True
        assert system.config.combined_penalty == 0.25
        assert system.config.decoy.lifetime_s == 12.0

    def test_stealth_enabled(self, units, clock, aircraft):
        cfg = OmegaConf.create({"stealth": {"enabled": True, "divisors": {"vortex": 50.0}}})
        system = ActiveDecoySystem.from_config(cfg, units, clock)
        aircraft.aircraft_type = AircraftType.VORTEX
        aircraft.rcs = 0.03
        assert system.launch(aircraft).rcs == pytest.approx(0.03 * 50.0 * 3.0)

    def test_status(self, system, aircraft):
        system.launch(aircraft)
        status = system.status()
        assert status == {
            "enabled": True,
            "combined_penalty": 0.25,
            "launched": 1,
            "live_decoys": 1,
            "pending_destruction": 0,
            "redirects": 0,
        }
