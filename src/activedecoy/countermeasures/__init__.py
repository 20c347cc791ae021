"""Active decoy countermeasures: decoy flight, radar comparison, retargeting.

Provides the in-flight decoy model with its radar-return and
effectiveness math, the registry of live decoys, the radar comparison
engine that pulls seekers off their aircraft, launch-time RCS derivation
(including stealth correction) and the system facade a host drives once
per simulation step.
"""

from activedecoy.countermeasures.config import (
    CountermeasureConfig,
    DecoyLaunchSettings,
)
from activedecoy.countermeasures.decoy import (
    DecoyContext,
    DecoyEntity,
    radar_signal,
)
from activedecoy.countermeasures.engine import RadarComparisonEngine
from activedecoy.countermeasures.launcher import (
    DecoyLauncher,
    decoy_rounds_for,
)
from activedecoy.countermeasures.registry import DecoyRegistry
from activedecoy.countermeasures.stealth import (
    StaticStealthProvider,
    is_stealth_aircraft,
    true_rcs,
)
from activedecoy.countermeasures.system import ActiveDecoySystem

__all__ = [
    "ActiveDecoySystem",
    "CountermeasureConfig",
    "DecoyContext",
    "DecoyEntity",
    "DecoyLaunchSettings",
    "DecoyLauncher",
    "DecoyRegistry",
    "RadarComparisonEngine",
    "StaticStealthProvider",
    "decoy_rounds_for",
    "is_stealth_aircraft",
    "radar_signal",
    "true_rcs",
]
