"""Stealth adjustment: recover a unit's unreduced RCS.

Some hosts model stealth by dividing an aircraft's RCS. A DRFM decoy
replays the radar pulse as if it reflected off the airframe without its
stealth shaping, so decoy RCS is derived from the *true* signature. This
only feeds launch-time RCS derivation, never the live comparison (where
the seeker sees the aircraft's reduced RCS).
"""

from __future__ import annotations

import logging
from collections.abc import Mapping
from typing import Optional

from activedecoy.core.interfaces import StealthProvider, Unit
from activedecoy.core.types import AircraftType

logger = logging.getLogger(__name__)


class StaticStealthProvider:
    """Stealth divisors from an explicit per-aircraft-type table."""

    def __init__(self, divisors: Mapping[AircraftType, float]):
        for aircraft_type, divisor in divisors.items():
            if divisor <= 0:
                raise ValueError(
                    f"stealth divisor for {aircraft_type.value} must be > 0, got {divisor}"
                )
        self._divisors = dict(divisors)
        logger.info(
            "Stealth RCS divisors: %s",
            ", ".join(f"{t.value}=/{d:g}" for t, d in self._divisors.items()) or "none",
        )

    @property
    def divisors(self) -> dict[AircraftType, float]:
        return dict(self._divisors)

    def rcs_divisor(self, unit: Unit) -> Optional[float]:
        if unit is None or unit.aircraft_type is None:
            return None
        return self._divisors.get(unit.aircraft_type)


def rcs_divisor(unit: Unit, provider: Optional[StealthProvider] = None) -> float:
    """Divisor applied to *unit*'s RCS; 1.0 when absent or unaffected."""
    if provider is None or unit is None:
        return 1.0
    divisor = provider.rcs_divisor(unit)
    return 1.0 if divisor is None else float(divisor)


def is_stealth_aircraft(unit: Unit, provider: Optional[StealthProvider] = None) -> bool:
    if provider is None or unit is None:
        return False
    return provider.rcs_divisor(unit) is not None


def true_rcs(unit: Unit, provider: Optional[StealthProvider] = None) -> float:
    """Pre-reduction RCS of *unit* (``unit.rcs`` when no stealth applies)."""
    return float(unit.rcs) * rcs_divisor(unit, provider)
