"""Reference host units: a simple aircraft, a missile seeker and a unit table.

These implement the collaborator protocols in
:mod:`activedecoy.core.interfaces` with straight-line flight and
pure-pursuit guidance. They exist to drive the countermeasure core from
the CLI and from scenario tests; a real host supplies its own.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from activedecoy.core.interfaces import Unit
from activedecoy.core.types import AircraftType, RadarParams, SeekerType
from activedecoy.utils.vectors import as_vec3, distance, heading_vector, normalize

WORLD_UP = np.array([0.0, 1.0, 0.0])


@dataclass
class SimAircraft:
    """Aircraft flying a constant velocity."""

    unit_id: str
    name: str
    position: np.ndarray
    velocity: np.ndarray
    rcs: float = 1.5
    aircraft_type: Optional[AircraftType] = None
    radar_active: bool = False
    is_alive: bool = True

    def __post_init__(self):
        self.position = as_vec3(self.position)
        self.velocity = as_vec3(self.velocity)

    @classmethod
    def from_heading(
        cls,
        unit_id: str,
        name: str,
        position,
        heading_deg: float,
        speed_mps: float,
        **kwargs,
    ) -> SimAircraft:
        velocity = heading_vector(heading_deg) * speed_mps
        return cls(unit_id=unit_id, name=name, position=position, velocity=velocity, **kwargs)

    @property
    def forward(self) -> np.ndarray:
        fwd = normalize(self.velocity)
        if not fwd.any():
            return np.array([0.0, 0.0, 1.0])
        return fwd

    @property
    def up(self) -> np.ndarray:
        fwd = self.forward
        up = normalize(WORLD_UP - fwd * float(np.dot(WORLD_UP, fwd)))
        if not up.any():  # flying straight up or down
            return np.array([1.0, 0.0, 0.0])
        return up

    def step(self, dt: float) -> None:
        if self.is_alive:
            self.position = self.position + self.velocity * dt


@dataclass
class SimSeeker:
    """Radar-homing missile: flies pure pursuit toward its known target position."""

    seeker_type: SeekerType
    position: np.ndarray
    speed_mps: float
    radar_params: RadarParams
    target_unit_id: Optional[str] = None
    fuze_radius_m: float = 50.0
    is_alive: bool = True
    lock_established: bool = False
    known_position: np.ndarray = field(default_factory=lambda: np.zeros(3))
    known_velocity: np.ndarray = field(default_factory=lambda: np.zeros(3))
    _heading: np.ndarray = field(default_factory=lambda: np.zeros(3), init=False, repr=False)

    def __post_init__(self):
        self.position = as_vec3(self.position)
        self.known_position = as_vec3(self.known_position)
        self.known_velocity = as_vec3(self.known_velocity)

    # -- Seeker protocol -------------------------------------------------

    def set_target(self, unit_id: Optional[str]) -> None:
        self.target_unit_id = unit_id

    def clear_lock(self) -> None:
        self.lock_established = False

    def set_known_state(self, position: np.ndarray, velocity: np.ndarray) -> None:
        self.known_position = as_vec3(position)
        self.known_velocity = as_vec3(velocity)

    # -- Host behavior ---------------------------------------------------

    def seek(self, units: UnitTable) -> None:
        """Refresh the known target state from the tracked unit, if any."""
        if not self.is_alive or self.target_unit_id is None:
            return
        target = units.lookup(self.target_unit_id)
        if target is None or not target.is_alive:
            self.lock_established = False
            return
        self.known_position = target.position.copy()
        self.known_velocity = target.velocity.copy()
        self.lock_established = (
            distance(self.position, target.position) <= self.radar_params.max_range_m
        )

    def step(self, dt: float) -> None:
        """Fly toward the known position; overfly it on the last heading."""
        if not self.is_alive:
            return
        travel = self.speed_mps * dt
        to_known = self.known_position - self.position
        remaining = float(np.linalg.norm(to_known))
        if remaining > 0.0:
            self._heading = to_known / remaining
        if remaining <= travel:
            self.position = self.known_position + self._heading * (travel - remaining)
        else:
            self.position = self.position + self._heading * travel


class UnitTable:
    """In-memory :class:`~activedecoy.core.interfaces.UnitDirectory`."""

    def __init__(self, units: list[Unit] | None = None):
        self._units: dict[str, Unit] = {}
        for unit in units or []:
            self.add(unit)

    def add(self, unit: Unit) -> None:
        self._units[unit.unit_id] = unit

    def remove(self, unit_id: str) -> None:
        self._units.pop(unit_id, None)

    def lookup(self, unit_id: str) -> Optional[Unit]:
        return self._units.get(unit_id)

    def __len__(self) -> int:
        return len(self._units)
