"""Active (DRFM) decoy: flight model, radar return and effectiveness.

A decoy is ejected from an aircraft and replays the radar pulse as if it
were a larger target. It competes only for missiles locked on its own
launching aircraft. How convincing it is depends on what the aircraft is
doing: radiating with its own radar, or pointing its nose at the missile,
each make the deception less credible.

Signal model, shared by decoy and target::

    signal = min(max_range / max(distance, 1) * rcs ** 0.25, max_signal)

The fourth root compresses RCS advantage: a target 16x larger only
doubles the return.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from activedecoy.core.clock import Clock
from activedecoy.core.interfaces import LineOfSight, Unit, UnitDirectory, unit_is_valid
from activedecoy.core.types import RadarParams, generate_decoy_id
from activedecoy.countermeasures.config import CountermeasureConfig
from activedecoy.countermeasures.registry import DecoyRegistry
from activedecoy.utils.vectors import GRAVITY, as_vec3, distance, normalize

logger = logging.getLogger(__name__)

MIN_DISTANCE_M = 1.0
GROUND_CLAMP_Y = 0.1
HEADING_DOT_THRESHOLD = 0.1  # dot(forward, to_seeker) above this = nose on threat
FALLBACK_EFFECTIVENESS = 0.25  # source aircraft gone; behavior unknown
MIN_EFFECTIVENESS = 0.01


def radar_signal(distance_m: float, rcs: float, radar_params: RadarParams) -> float:
    """Clipped radar return of a reflector with *rcs* at *distance_m*."""
    d = max(distance_m, MIN_DISTANCE_M)
    signal = radar_params.max_range_m / d * max(rcs, 0.0) ** 0.25
    return min(signal, radar_params.max_signal)


@dataclass
class DecoyContext:
    """Shared collaborators every decoy needs.

    Built once by the countermeasure system; the registry is the one the
    comparison engine queries.
    """

    registry: DecoyRegistry
    clock: Clock
    units: UnitDirectory
    terrain: Optional[LineOfSight] = None
    config: CountermeasureConfig = field(default_factory=CountermeasureConfig)


class DecoyEntity:
    """One in-flight decoy.

    Registered in ``context.registry`` exactly while :attr:`active` is
    True. After expiry it lingers for ``destroy_grace_s`` (pending
    destruction) so host-side effects can clean up, then :meth:`destroy`
    finalizes it.
    """

    def __init__(
        self,
        context: DecoyContext,
        source_unit_id: str,
        position,
        velocity,
        rcs: float,
        lifetime_s: float,
        drag_coefficient: float,
        decoy_id: str | None = None,
    ):
        if rcs <= 0:
            raise ValueError(f"decoy rcs must be > 0, got {rcs}")
        if lifetime_s <= 0:
            raise ValueError(f"decoy lifetime_s must be > 0, got {lifetime_s}")
        if not 0.0 <= drag_coefficient <= 1.0:
            raise ValueError(
                f"drag_coefficient must be in [0, 1], got {drag_coefficient}"
            )
        self._context = context
        self.decoy_id = decoy_id or generate_decoy_id()
        self.source_unit_id = source_unit_id
        self.position = as_vec3(position)
        self.velocity = as_vec3(velocity)
        self.rcs = float(rcs)
        self.lifetime_s = float(lifetime_s)
        self.drag_coefficient = float(drag_coefficient)
        self.spawn_time = context.clock.elapsed()
        self.destroy_at: float | None = None
        self.destroyed = False
        self._active = True

    @classmethod
    def create(
        cls,
        context: DecoyContext,
        source_unit: Unit,
        position,
        launch_velocity,
        rcs: float,
        lifetime_s: float,
        drag_coefficient: float,
    ) -> DecoyEntity:
        """Build a decoy for *source_unit* and register it."""
        decoy = cls(
            context,
            source_unit_id=source_unit.unit_id,
            position=position,
            velocity=launch_velocity,
            rcs=rcs,
            lifetime_s=lifetime_s,
            drag_coefficient=drag_coefficient,
        )
        context.registry.add(decoy)
        logger.debug(
            "Active decoy %s launched by %s: RCS=%.4f, lifetime=%.1fs",
            decoy.decoy_id, source_unit.name, rcs, lifetime_s,
        )
        return decoy

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------

    @property
    def age_s(self) -> float:
        return self._context.clock.elapsed() - self.spawn_time

    @property
    def active(self) -> bool:
        """True while simulated and eligible for targeting.

        Re-checks the lifetime on every read, so an expired decoy is
        deactivated (and deregistered) even between ticks.
        """
        if self._active and self.age_s >= self.lifetime_s:
            self.deactivate()
        return self._active

    @property
    def pending_destruction(self) -> bool:
        return not self._active and not self.destroyed

    def destroy_due(self) -> bool:
        if self.destroyed:
            return False
        if self.destroy_at is None:
            return False
        return self._context.clock.elapsed() >= self.destroy_at

    def deactivate(self) -> None:
        """Stop simulating, deregister, and schedule destruction."""
        if not self._active:
            return
        self._active = False
        self._context.registry.discard(self)
        self.destroy_at = (
            self._context.clock.elapsed() + self._context.config.decoy.destroy_grace_s
        )
        logger.debug("Decoy %s expired after %.1fs", self.decoy_id, self.age_s)

    def destroy(self) -> None:
        """Remove the decoy for good (expiry grace elapsed or host destroyed it)."""
        if self.destroyed:
            return
        self._active = False
        self.destroyed = True
        self._context.registry.discard(self)
        logger.debug("Decoy %s destroyed", self.decoy_id)

    # ------------------------------------------------------------------
    # Motion
    # ------------------------------------------------------------------

    def tick(self, dt: float) -> None:
        """Integrate one simulation step (explicit Euler, linear drag)."""
        if dt < 0:
            raise ValueError(f"tick() requires dt >= 0, got {dt}")
        if not self.active:
            return

        self.position = self.position + self.velocity * dt
        self.velocity = self.velocity + GRAVITY * dt
        self.velocity = self.velocity - self.velocity * self.drag_coefficient * dt

        # Impact and stop, no bounce
        if self.position[1] < 0.0:
            self.velocity = np.zeros(3)
            self.position[1] = GROUND_CLAMP_Y

        if self.age_s > self.lifetime_s:
            self.deactivate()

    # ------------------------------------------------------------------
    # Radar
    # ------------------------------------------------------------------

    def source_unit(self) -> Optional[Unit]:
        """The launching aircraft, or None if it no longer exists."""
        unit = self._context.units.lookup(self.source_unit_id)
        return unit if unit_is_valid(unit) else None

    def radar_return(
        self,
        seeker_position: np.ndarray,
        radar_params: RadarParams,
        effectiveness: float = 1.0,
    ) -> float:
        """Return presented to a seeker at *seeker_position*, scaled by *effectiveness*."""
        if not self.active:
            return 0.0
        d = distance(seeker_position, self.position)
        return radar_signal(d, self.rcs, radar_params) * effectiveness

    def effectiveness(self, seeker_position: np.ndarray) -> float:
        """How convincing the decoy is, from the source aircraft's behavior.

        Each of two independent conditions multiplies by
        ``sqrt(combined_penalty)``:

        * the aircraft's radar is emitting;
        * the aircraft points at the seeker (``dot > 0.1``). Notching
          (``dot ~ 0``) and running away (``dot < 0``) are free.

        Both together give exactly ``combined_penalty``. If the aircraft
        is gone the behavior cannot be judged and the worst case (0.25) is
        assumed.
        """
        unit = self.source_unit()
        if unit is None:
            return FALLBACK_EFFECTIVENESS

        penalty_factor = self._context.config.penalty_factor
        effectiveness = 1.0

        if unit.radar_active:
            effectiveness *= penalty_factor

        to_seeker = normalize(np.asarray(seeker_position, dtype=float) - unit.position)
        dot = float(np.dot(unit.forward, to_seeker))
        if dot > HEADING_DOT_THRESHOLD:
            effectiveness *= penalty_factor

        return effectiveness

    def should_attract_missile(
        self,
        seeker_position: np.ndarray,
        current_target: Optional[Unit],
        radar_params: RadarParams,
    ) -> bool:
        """Whether this decoy pulls a seeker tracking *current_target*.

        Effectiveness raises the bar rather than shrinking the decoy's
        return: the target return is divided by it. With the fourth-root
        RCS law a 3x RCS advantage is only ~1.3x in signal, so scaling the
        decoy return down by 0.5 would make it lose every time.
        """
        if not self.active:
            return False
        source = self.source_unit()
        if source is None or not unit_is_valid(current_target):
            return False
        if current_target.unit_id != source.unit_id:
            return False

        dist_to_decoy = distance(seeker_position, self.position)
        if dist_to_decoy > radar_params.max_range_m:
            return False

        terrain = self._context.terrain
        if terrain is not None and terrain.is_obstructed(
            np.asarray(seeker_position, dtype=float), self.position
        ):
            return False

        decoy_return = self.radar_return(seeker_position, radar_params)
        target_return = radar_signal(
            distance(seeker_position, current_target.position),
            current_target.rcs,
            radar_params,
        )
        effectiveness = self.effectiveness(seeker_position)
        adjusted_threshold = target_return / max(effectiveness, MIN_EFFECTIVENESS)

        return decoy_return > adjusted_threshold

    def to_dict(self) -> dict:
        return {
            "decoy_id": self.decoy_id,
            "source_unit_id": self.source_unit_id,
            "position": self.position.tolist(),
            "velocity": self.velocity.tolist(),
            "rcs": self.rcs,
            "age_s": self.age_s,
            "lifetime_s": self.lifetime_s,
            "active": self._active,
        }

    def __repr__(self) -> str:
        return (
            f"DecoyEntity(id={self.decoy_id}, source={self.source_unit_id}, "
            f"rcs={self.rcs:.3f}, active={self._active})"
        )
