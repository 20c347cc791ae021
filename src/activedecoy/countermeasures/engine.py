"""Radar comparison engine: decide whether a seeker is pulled onto a decoy."""

from __future__ import annotations

import logging
from typing import Optional

import numpy as np

from activedecoy.core.interfaces import Seeker, Unit, UnitDirectory, unit_is_valid
from activedecoy.core.types import RadarParams
from activedecoy.countermeasures.config import CountermeasureConfig
from activedecoy.countermeasures.decoy import DecoyEntity
from activedecoy.countermeasures.registry import DecoyRegistry

logger = logging.getLogger(__name__)


class RadarComparisonEngine:
    """Scores registered decoys against a seeker's current target.

    Called once per seeker per simulation step. Every failure path
    (dead seeker, unknown target, no qualifying decoy) simply means "no
    retarget this tick".
    """

    def __init__(
        self,
        registry: DecoyRegistry,
        units: UnitDirectory,
        config: CountermeasureConfig,
    ):
        self._registry = registry
        self._units = units
        self._config = config
        self._redirect_count = 0

    @property
    def redirect_count(self) -> int:
        return self._redirect_count

    def select_best_decoy(
        self,
        seeker_position: np.ndarray,
        current_target: Optional[Unit],
        radar_params: RadarParams,
    ) -> Optional[DecoyEntity]:
        """Strongest decoy that should attract the seeker, or None.

        Inactive registry entries found along the way are evicted. Among
        qualifying decoys the strictly greatest unscaled radar return
        wins, so on a tie the earliest registered decoy is kept.
        """
        best: Optional[DecoyEntity] = None
        best_return = 0.0
        for decoy in self._registry.live():
            if not decoy.should_attract_missile(seeker_position, current_target, radar_params):
                continue
            ret = decoy.radar_return(seeker_position, radar_params)
            if best is None or ret > best_return:
                best = decoy
                best_return = ret
        return best

    def retarget_if_needed(self, seeker: Seeker) -> Optional[DecoyEntity]:
        """Redirect *seeker* onto the best decoy, if one wins.

        On a redirect the seeker's known target state is overwritten with
        the decoy's, its lock is broken (forcing reacquisition) and its
        target reference is cleared. Returns the decoy, or None.
        """
        if not self._config.enabled or not self._registry:
            return None
        if seeker is None or not seeker.is_alive:
            return None

        target_id = seeker.target_unit_id
        if target_id is None:
            return None
        target = self._units.lookup(target_id)
        if not unit_is_valid(target):
            return None

        decoy = self.select_best_decoy(seeker.position, target, seeker.radar_params)
        if decoy is None:
            return None

        seeker.set_known_state(decoy.position.copy(), decoy.velocity.copy())
        seeker.clear_lock()
        seeker.set_target(None)
        self._redirect_count += 1

        logger.debug(
            "%s seeker redirected from %s to decoy %s at %s",
            seeker.seeker_type.value.upper(),
            target.name,
            decoy.decoy_id,
            np.round(decoy.position, 1).tolist(),
        )
        return decoy
