"""Scripted one-on-one engagement: an aircraft, a radar missile, decoys.

The runner plays the host: it steps a :class:`SimClock`, flies the units,
fires decoys at scripted times (doing the ammo bookkeeping a host would)
and calls the countermeasure system once per tick.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any, Optional

from omegaconf import OmegaConf

from activedecoy.core.clock import SimClock
from activedecoy.core.types import AircraftType, RadarParams, SeekerType
from activedecoy.countermeasures.launcher import decoy_rounds_for
from activedecoy.countermeasures.system import ActiveDecoySystem
from activedecoy.sim.entities import SimAircraft, SimSeeker, UnitTable
from activedecoy.sim.terrain import FlatTerrain, terrain_from_config
from activedecoy.utils.vectors import distance

logger = logging.getLogger(__name__)


@dataclass
class ScenarioResult:
    """Outcome of one engagement run."""

    duration_s: float
    decoys_launched: int = 0
    rounds_remaining: int = 0
    redirected_at: Optional[float] = None
    redirected_to: Optional[str] = None
    intercepted_at: Optional[float] = None
    min_miss_distance_m: float = float("inf")
    status: dict = field(default_factory=dict)

    @property
    def defeated(self) -> bool:
        """The missile was pulled off the aircraft and never hit it."""
        return self.redirected_at is not None and self.intercepted_at is None

    def to_dict(self) -> dict:
        return {
            "duration_s": self.duration_s,
            "decoys_launched": self.decoys_launched,
            "rounds_remaining": self.rounds_remaining,
            "redirected_at": self.redirected_at,
            "redirected_to": self.redirected_to,
            "intercepted_at": self.intercepted_at,
            "min_miss_distance_m": self.min_miss_distance_m,
            "defeated": self.defeated,
            "status": self.status,
        }


class EngagementScenario:
    """Runs one aircraft-versus-missile engagement against the decoy system."""

    def __init__(
        self,
        system: ActiveDecoySystem,
        clock: SimClock,
        units: UnitTable,
        aircraft: SimAircraft,
        seeker: SimSeeker,
        decoy_launch_times: list[float] | None = None,
        duration_s: float = 30.0,
        dt: float = 0.05,
    ):
        if dt <= 0:
            raise ValueError(f"dt must be > 0, got {dt}")
        self.system = system
        self.clock = clock
        self.units = units
        self.aircraft = aircraft
        self.seeker = seeker
        self.decoy_launch_times = sorted(decoy_launch_times or [])
        self.duration_s = duration_s
        self.dt = dt
        self.rounds_remaining = decoy_rounds_for(aircraft.aircraft_type)

    @classmethod
    def from_config(cls, cfg: Any, clock: SimClock | None = None) -> EngagementScenario:
        """Build from the ``active_decoy`` root section (DictConfig or dict)."""
        if OmegaConf.is_config(cfg):
            cfg = OmegaConf.to_container(cfg, resolve=True)
        cfg = cfg or {}
        scfg = cfg.get("scenario") or {}
        acfg = scfg.get("aircraft") or {}
        mcfg = scfg.get("missile") or {}

        if clock is None:
            tcfg = cfg.get("time") or {}
            clock = SimClock(start_epoch=tcfg.get("start_epoch", 1_000_000.0))

        type_str = acfg.get("aircraft_type")
        aircraft = SimAircraft.from_heading(
            unit_id=acfg.get("unit_id", "BLUE-1"),
            name=acfg.get("name", "FS-20 Vortex"),
            position=acfg.get("position", [0.0, 3000.0, 0.0]),
            heading_deg=float(acfg.get("heading_deg", 0.0)),
            speed_mps=float(acfg.get("speed_mps", 250.0)),
            rcs=float(acfg.get("rcs", 1.5)),
            aircraft_type=AircraftType(type_str) if type_str else None,
            radar_active=bool(acfg.get("radar_active", False)),
        )
        units = UnitTable([aircraft])

        seeker = SimSeeker(
            seeker_type=SeekerType(mcfg.get("seeker_type", "arh")),
            position=mcfg.get("position", [12000.0, 3000.0, 0.0]),
            speed_mps=float(mcfg.get("speed_mps", 900.0)),
            radar_params=RadarParams(
                max_range_m=float(mcfg.get("max_range_m", 5000.0)),
                max_signal=float(mcfg.get("max_signal", 100.0)),
            ),
            target_unit_id=aircraft.unit_id,
            fuze_radius_m=float(mcfg.get("fuze_radius_m", 50.0)),
        )

        terrain: FlatTerrain = terrain_from_config(scfg.get("terrain"))
        system = ActiveDecoySystem.from_config(
            cfg.get("countermeasures"), units, clock, terrain=terrain
        )
        return cls(
            system,
            clock,
            units,
            aircraft,
            seeker,
            decoy_launch_times=list(scfg.get("decoy_launch_times") or []),
            duration_s=float(scfg.get("duration_s", 30.0)),
            dt=float(scfg.get("dt", 0.05)),
        )

    def run(self) -> ScenarioResult:
        result = ScenarioResult(duration_s=self.duration_s)
        pending = list(self.decoy_launch_times)

        while self.clock.elapsed() < self.duration_s:
            t = self.clock.elapsed()

            while pending and pending[0] <= t:
                pending.pop(0)
                if self.rounds_remaining <= 0:
                    logger.info("%s is out of decoys", self.aircraft.name)
                    continue
                if self.system.launch(self.aircraft) is not None:
                    self.rounds_remaining -= 1
                    result.decoys_launched += 1

            self.aircraft.step(self.dt)
            self.system.tick(self.dt)

            self.seeker.seek(self.units)
            decoy = self.system.per_seeker_tick(self.seeker)
            if decoy is not None and result.redirected_at is None:
                result.redirected_at = round(t, 6)
                result.redirected_to = decoy.decoy_id
                logger.info("Missile decoyed at t=%.2fs by %s", t, decoy.decoy_id)

            self.seeker.step(self.dt)

            miss = distance(self.seeker.position, self.aircraft.position)
            result.min_miss_distance_m = min(result.min_miss_distance_m, miss)
            if miss <= self.seeker.fuze_radius_m:
                result.intercepted_at = round(t, 6)
                self.aircraft.is_alive = False
                self.seeker.is_alive = False
                logger.info("%s hit at t=%.2fs", self.aircraft.name, t)
                break

            self.clock.step(self.dt)

        result.rounds_remaining = self.rounds_remaining
        result.status = self.system.status()
        return result
