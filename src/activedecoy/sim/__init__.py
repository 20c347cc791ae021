"""Reference host: simple aircraft, missile seeker, terrain and engagement runner."""

from activedecoy.sim.entities import SimAircraft, SimSeeker, UnitTable
from activedecoy.sim.scenario import EngagementScenario, ScenarioResult
from activedecoy.sim.terrain import FlatTerrain, RidgeTerrain, terrain_from_config

__all__ = [
    "EngagementScenario",
    "FlatTerrain",
    "RidgeTerrain",
    "ScenarioResult",
    "SimAircraft",
    "SimSeeker",
    "UnitTable",
    "terrain_from_config",
]
