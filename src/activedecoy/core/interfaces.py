"""Collaborator contracts consumed by the countermeasure core.

The host integration layer (game engine, simulator, test harness) implements
these protocols. The core only ever talks to units, seekers and terrain
through them and never reaches into host internals.
"""

from __future__ import annotations

from typing import Optional, Protocol, runtime_checkable

import numpy as np

from activedecoy.core.types import AircraftType, RadarParams, SeekerType


@runtime_checkable
class Unit(Protocol):
    """An aircraft (or any radar-reflecting unit) in the host world."""

    @property
    def unit_id(self) -> str: ...

    @property
    def name(self) -> str: ...

    @property
    def aircraft_type(self) -> Optional[AircraftType]: ...

    @property
    def position(self) -> np.ndarray: ...

    @property
    def velocity(self) -> np.ndarray: ...

    @property
    def forward(self) -> np.ndarray:
        """Unit-length nose direction."""
        ...

    @property
    def up(self) -> np.ndarray:
        """Unit-length canopy direction."""
        ...

    @property
    def radar_active(self) -> bool:
        """Whether the unit's own radar emitter is radiating."""
        ...

    @property
    def is_alive(self) -> bool: ...

    @property
    def rcs(self) -> float:
        """Current (possibly stealth-reduced) radar cross section."""
        ...


@runtime_checkable
class UnitDirectory(Protocol):
    """Resolves unit identifiers owned by the host."""

    def lookup(self, unit_id: str) -> Optional[Unit]:
        """Return the unit, or None if it no longer exists."""
        ...


@runtime_checkable
class Seeker(Protocol):
    """A missile radar seeker evaluated once per simulation step."""

    @property
    def seeker_type(self) -> SeekerType: ...

    @property
    def position(self) -> np.ndarray: ...

    @property
    def is_alive(self) -> bool: ...

    @property
    def target_unit_id(self) -> Optional[str]: ...

    @property
    def known_position(self) -> np.ndarray: ...

    @property
    def known_velocity(self) -> np.ndarray: ...

    @property
    def lock_established(self) -> bool: ...

    @property
    def radar_params(self) -> RadarParams: ...

    def set_target(self, unit_id: Optional[str]) -> None: ...

    def clear_lock(self) -> None: ...

    def set_known_state(self, position: np.ndarray, velocity: np.ndarray) -> None: ...


@runtime_checkable
class LineOfSight(Protocol):
    """Terrain occlusion query."""

    def is_obstructed(self, start: np.ndarray, end: np.ndarray) -> bool: ...


@runtime_checkable
class StealthProvider(Protocol):
    """Supplies the RCS reduction a stealth model applied to a unit."""

    def rcs_divisor(self, unit: Unit) -> Optional[float]:
        """Divisor applied to the unit's RCS, or None if unaffected."""
        ...


def unit_is_valid(unit: Optional[Unit]) -> bool:
    """True if *unit* refers to a live unit."""
    return unit is not None and bool(unit.is_alive)
