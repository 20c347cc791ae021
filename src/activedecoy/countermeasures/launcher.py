"""Decoy launch: ejection geometry, RCS derivation and loadouts.

Decoys are expendable: each is ejected aft and below the aircraft,
inherits its velocity and then flies on its own.
"""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from activedecoy.core.interfaces import StealthProvider, Unit
from activedecoy.core.types import AircraftType
from activedecoy.countermeasures.config import DecoyLaunchSettings
from activedecoy.countermeasures.decoy import DecoyContext, DecoyEntity
from activedecoy.countermeasures.stealth import is_stealth_aircraft, rcs_divisor, true_rcs

logger = logging.getLogger(__name__)

EJECT_AFT_OFFSET_M = 5.0
EJECT_BELOW_OFFSET_M = 2.0
EJECT_DOWNWARD_RATIO = 0.3

DEFAULT_DECOY_ROUNDS = 64

# Rounds carried per airframe, matching each type's flare load.
DECOY_ROUNDS: dict[AircraftType, int] = {
    AircraftType.VORTEX: 72,
    AircraftType.IFRIT: 72,
    AircraftType.MEDUSA: 86,
    AircraftType.DARKREACH: 86,
    AircraftType.CHICANE: 72,
    AircraftType.IBIS: 64,
    AircraftType.REVOKER: 64,
    AircraftType.COMPASS: 64,
    AircraftType.CRICKET: 48,
    AircraftType.BRAWLER: 120,
    AircraftType.TARANTULA: 144,
}


def decoy_rounds_for(aircraft_type: Optional[AircraftType]) -> int:
    """Decoy loadout for an aircraft type (64 for unknown types)."""
    if aircraft_type is None:
        return DEFAULT_DECOY_ROUNDS
    return DECOY_ROUNDS.get(aircraft_type, DEFAULT_DECOY_ROUNDS)


class DecoyLauncher:
    """Creates decoys for a launching aircraft.

    Ammo and cooldown are the caller's business; every call to
    :meth:`launch` ejects one decoy.
    """

    def __init__(
        self,
        context: DecoyContext,
        settings: DecoyLaunchSettings | None = None,
        stealth: Optional[StealthProvider] = None,
    ):
        self._context = context
        self._settings = settings or context.config.decoy
        self._stealth = stealth

    @property
    def settings(self) -> DecoyLaunchSettings:
        return self._settings

    def decoy_rcs(self, unit: Unit) -> float:
        """``max(true_rcs * rcs_multiplier, min_rcs)``."""
        return max(
            true_rcs(unit, self._stealth) * self._settings.rcs_multiplier,
            self._settings.min_rcs,
        )

    def ejection_state(self, unit: Unit) -> tuple[np.ndarray, np.ndarray]:
        """Spawn position and velocity of a decoy ejected from *unit*."""
        forward = np.asarray(unit.forward, dtype=float)
        up = np.asarray(unit.up, dtype=float)
        position = (
            np.asarray(unit.position, dtype=float)
            - forward * EJECT_AFT_OFFSET_M
            - up * EJECT_BELOW_OFFSET_M
        )
        v_eject = self._settings.ejection_velocity_mps
        velocity = (
            np.asarray(unit.velocity, dtype=float)
            - forward * v_eject
            - up * v_eject * EJECT_DOWNWARD_RATIO
        )
        return position, velocity

    def launch(self, unit: Unit) -> DecoyEntity:
        """Eject one decoy from *unit* and register it."""
        position, velocity = self.ejection_state(unit)
        rcs = self.decoy_rcs(unit)
        if is_stealth_aircraft(unit, self._stealth):
            logger.debug(
                "%s is stealth-reduced (RCS/%g); decoy uses true RCS %.4f",
                unit.name, rcs_divisor(unit, self._stealth), true_rcs(unit, self._stealth),
            )
        return DecoyEntity.create(
            self._context,
            unit,
            position=position,
            launch_velocity=velocity,
            rcs=rcs,
            lifetime_s=self._settings.lifetime_s,
            drag_coefficient=self._settings.drag_coefficient,
        )
