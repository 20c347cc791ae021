"""Countermeasure system: top-level entry points for the host.

Ties together the decoy registry, launcher and radar comparison engine
behind the three calls a host makes:

* :meth:`ActiveDecoySystem.launch` when an aircraft fires a decoy;
* :meth:`ActiveDecoySystem.tick` once per simulation step;
* :meth:`ActiveDecoySystem.per_seeker_tick` once per seeker per step.
"""

from __future__ import annotations

import logging
from typing import Any, Optional

from activedecoy.core.clock import Clock
from activedecoy.core.interfaces import LineOfSight, Seeker, StealthProvider, Unit, UnitDirectory, unit_is_valid
from activedecoy.countermeasures.config import CountermeasureConfig
from activedecoy.countermeasures.decoy import DecoyContext, DecoyEntity
from activedecoy.countermeasures.engine import RadarComparisonEngine
from activedecoy.countermeasures.launcher import DecoyLauncher
from activedecoy.countermeasures.registry import DecoyRegistry
from activedecoy.countermeasures.stealth import StaticStealthProvider

logger = logging.getLogger(__name__)


class ActiveDecoySystem:
    """Owns every decoy in flight and answers seeker queries."""

    def __init__(
        self,
        config: CountermeasureConfig,
        units: UnitDirectory,
        clock: Clock,
        terrain: Optional[LineOfSight] = None,
        stealth: Optional[StealthProvider] = None,
    ):
        self._config = config
        self._registry = DecoyRegistry()
        self._context = DecoyContext(
            registry=self._registry,
            clock=clock,
            units=units,
            terrain=terrain,
            config=config,
        )
        self._launcher = DecoyLauncher(self._context, config.decoy, stealth=stealth)
        self._engine = RadarComparisonEngine(self._registry, units, config)

        # Every decoy not yet destroyed, including those in their grace period
        self._decoys: list[DecoyEntity] = []
        self._launch_count = 0

        logger.info(
            "Active decoy system %s (combined penalty %.2f, stealth %s)",
            "enabled" if config.enabled else "disabled",
            config.combined_penalty,
            "on" if stealth is not None else "off",
        )

    @classmethod
    def from_config(
        cls,
        cfg: Any,
        units: UnitDirectory,
        clock: Clock,
        terrain: Optional[LineOfSight] = None,
    ) -> ActiveDecoySystem:
        """Build from the ``active_decoy.countermeasures`` config section."""
        config = CountermeasureConfig.from_omegaconf(cfg)
        stealth = None
        if config.stealth_enabled:
            stealth = StaticStealthProvider(config.stealth_divisors)
        return cls(config, units, clock, terrain=terrain, stealth=stealth)

    # ------------------------------------------------------------------
    # Properties
    # ------------------------------------------------------------------

    @property
    def config(self) -> CountermeasureConfig:
        return self._config

    @property
    def registry(self) -> DecoyRegistry:
        return self._registry

    @property
    def launcher(self) -> DecoyLauncher:
        return self._launcher

    @property
    def engine(self) -> RadarComparisonEngine:
        return self._engine

    @property
    def decoys(self) -> list[DecoyEntity]:
        return list(self._decoys)

    # ------------------------------------------------------------------
    # Host entry points
    # ------------------------------------------------------------------

    def launch(self, unit: Unit) -> Optional[DecoyEntity]:
        """Eject a decoy from *unit*. None when disabled or the unit is gone."""
        if not self._config.enabled:
            logger.debug("Decoy launch ignored: countermeasure system disabled")
            return None
        if not unit_is_valid(unit):
            logger.warning("Decoy launch rejected: launching unit is not alive")
            return None
        decoy = self._launcher.launch(unit)
        self._decoys.append(decoy)
        self._launch_count += 1
        return decoy

    def tick(self, dt: float) -> None:
        """Advance every decoy by *dt* and reap those past their grace period."""
        for decoy in self._decoys:
            decoy.tick(dt)
            if decoy.destroy_due():
                decoy.destroy()
        self._decoys = [d for d in self._decoys if not d.destroyed]

    def per_seeker_tick(self, seeker: Seeker) -> Optional[DecoyEntity]:
        """Evaluate one seeker; returns the decoy it was redirected to, if any."""
        return self._engine.retarget_if_needed(seeker)

    def destroy(self, decoy: DecoyEntity) -> None:
        """Host-initiated destruction (e.g. the decoy was shot down)."""
        decoy.destroy()
        self._decoys = [d for d in self._decoys if d is not decoy]

    def status(self) -> dict:
        self._registry.evict_inactive()
        return {
            "enabled": self._config.enabled,
            "combined_penalty": self._config.combined_penalty,
            "launched": self._launch_count,
            "live_decoys": len(self._registry),
            "pending_destruction": sum(1 for d in self._decoys if d.pending_destruction),
            "redirects": self._engine.redirect_count,
        }
