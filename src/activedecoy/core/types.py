"""Core data types for the active decoy countermeasure engine."""

from __future__ import annotations

import enum
import uuid
from dataclasses import dataclass


class SeekerType(enum.Enum):
    """Radar seeker families that an active decoy can deceive."""

    ARH = "arh"  # Active radar homing
    SARH = "sarh"  # Semi-active radar homing


class AircraftType(enum.Enum):
    """Stable aircraft type identifiers.

    Used as keys for per-type tables (decoy loadout, stealth divisors)
    instead of matching on free-text display names.
    """

    VORTEX = "vortex"  # FS-20
    IFRIT = "ifrit"  # KR-67
    MEDUSA = "medusa"  # EW-25
    DARKREACH = "darkreach"  # SFB-81
    CHICANE = "chicane"  # SAH-46
    IBIS = "ibis"  # UH-90
    REVOKER = "revoker"  # FS-12
    COMPASS = "compass"  # T/A-30
    CRICKET = "cricket"  # CI-22
    BRAWLER = "brawler"  # A-19
    TARANTULA = "tarantula"  # VL-49


@dataclass(frozen=True)
class RadarParams:
    """Seeker radar parameters, read-only to the decoy engine."""

    max_range_m: float
    max_signal: float

    def __post_init__(self) -> None:
        if self.max_range_m <= 0:
            raise ValueError(f"max_range_m must be > 0, got {self.max_range_m}")
        if self.max_signal <= 0:
            raise ValueError(f"max_signal must be > 0, got {self.max_signal}")

    def to_dict(self) -> dict[str, float]:
        return {"max_range_m": self.max_range_m, "max_signal": self.max_signal}


def generate_decoy_id() -> str:
    return uuid.uuid4().hex[:8].upper()
