"""Countermeasure system configuration."""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Any

from omegaconf import OmegaConf

from activedecoy.core.types import AircraftType

logger = logging.getLogger(__name__)

DEFAULT_COMBINED_PENALTY = 0.25

DEFAULT_STEALTH_DIVISORS: dict[AircraftType, float] = {
    AircraftType.VORTEX: 100.0,
    AircraftType.IFRIT: 100.0,
    AircraftType.DARKREACH: 100.0,
}


@dataclass
class DecoyLaunchSettings:
    """Physical parameters applied to every launched decoy."""

    rcs_multiplier: float = 3.0  # decoy RCS = true aircraft RCS * this
    min_rcs: float = 0.5  # floor, keeps decoy RCS > 0
    lifetime_s: float = 12.0
    drag_coefficient: float = 0.02
    ejection_velocity_mps: float = 30.0
    destroy_grace_s: float = 1.0


@dataclass
class CountermeasureConfig:
    """Countermeasure system configuration.

    ``enabled`` is the master kill switch: when False no decoys launch,
    registry queries are skipped and seekers are never retargeted.
    """

    enabled: bool = True
    combined_penalty: float = DEFAULT_COMBINED_PENALTY
    decoy: DecoyLaunchSettings = field(default_factory=DecoyLaunchSettings)
    stealth_enabled: bool = False
    stealth_divisors: dict[AircraftType, float] = field(
        default_factory=lambda: dict(DEFAULT_STEALTH_DIVISORS)
    )

    @property
    def penalty_factor(self) -> float:
        """Per-condition effectiveness multiplier, ``sqrt(combined_penalty)``."""
        return self.combined_penalty ** 0.5

    @classmethod
    def from_omegaconf(cls, cfg: Any) -> CountermeasureConfig:
        """Build from the ``active_decoy.countermeasures`` section.

        Accepts an OmegaConf node, a plain dict, or None.
        """
        if cfg is None:
            return cls()
        if OmegaConf.is_config(cfg):
            cfg = OmegaConf.to_container(cfg, resolve=True)
        if not isinstance(cfg, dict):
            cfg = dict(cfg)

        penalty = float(cfg.get("combined_penalty", DEFAULT_COMBINED_PENALTY))
        if not 0.0 <= penalty <= 1.0:
            clamped = min(max(penalty, 0.0), 1.0)
            logger.warning(
                "combined_penalty %.3f outside [0, 1], clamping to %.3f", penalty, clamped
            )
            penalty = clamped

        dcfg = cfg.get("decoy") or {}
        decoy = DecoyLaunchSettings(
            rcs_multiplier=float(dcfg.get("rcs_multiplier", 3.0)),
            min_rcs=float(dcfg.get("min_rcs", 0.5)),
            lifetime_s=float(dcfg.get("lifetime_s", 12.0)),
            drag_coefficient=float(dcfg.get("drag_coefficient", 0.02)),
            ejection_velocity_mps=float(dcfg.get("ejection_velocity_mps", 30.0)),
            destroy_grace_s=float(dcfg.get("destroy_grace_s", 1.0)),
        )

        scfg = cfg.get("stealth") or {}
        raw_divisors = scfg.get("divisors")
        if raw_divisors is None:
            divisors = dict(DEFAULT_STEALTH_DIVISORS)
        else:
            divisors = {}
            for key, value in raw_divisors.items():
                try:
                    divisors[AircraftType(str(key).lower())] = float(value)
                except ValueError:
                    logger.warning("Unknown aircraft type in stealth divisors: %s", key)

        return cls(
            enabled=bool(cfg.get("enabled", True)),
            combined_penalty=penalty,
            decoy=decoy,
            stealth_enabled=bool(scfg.get("enabled", False)),
            stealth_divisors=divisors,
        )
