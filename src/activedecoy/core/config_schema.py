"""Pydantic schema for active decoy configuration validation.

Mirrors the YAML structure in config/default.yaml. Used when
``validate=True`` is passed to ``ActiveDecoyConfig.load()``.
"""

from __future__ import annotations

from typing import Literal

from pydantic import BaseModel, Field

# ---------------------------------------------------------------------------
# Leaf / shared models
# ---------------------------------------------------------------------------


class SystemConfig(BaseModel):
    name: str = "ACTIVE-DECOY"
    version: str = "0.5.0"
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = "INFO"
    validate_config: bool = False
    log_file: str | None = None
    log_json: bool = False


class TimeConfig(BaseModel):
    mode: Literal["realtime", "simulated"] = "simulated"
    start_epoch: float = 1_000_000.0


class DecoyLaunchConfig(BaseModel):
    rcs_multiplier: float = Field(default=3.0, gt=0)
    min_rcs: float = Field(default=0.5, gt=0)
    lifetime_s: float = Field(default=12.0, gt=0)
    drag_coefficient: float = Field(default=0.02, ge=0, le=1)
    ejection_velocity_mps: float = Field(default=30.0, ge=0)
    destroy_grace_s: float = Field(default=1.0, ge=0)


class StealthConfig(BaseModel):
    enabled: bool = False
    divisors: dict[str, float] = Field(
        default_factory=lambda: {"vortex": 100.0, "ifrit": 100.0, "darkreach": 100.0}
    )


class CountermeasuresConfig(BaseModel):
    enabled: bool = True
    combined_penalty: float = Field(default=0.25, ge=0, le=1)
    decoy: DecoyLaunchConfig = Field(default_factory=DecoyLaunchConfig)
    stealth: StealthConfig = Field(default_factory=StealthConfig)


# ---------------------------------------------------------------------------
# Reference-host scenario
# ---------------------------------------------------------------------------


class ScenarioAircraftConfig(BaseModel):
    unit_id: str = "BLUE-1"
    name: str = "FS-20 Vortex"
    aircraft_type: str | None = "vortex"
    position: list[float] = Field(default_factory=lambda: [0.0, 3000.0, 0.0])
    heading_deg: float = 0.0
    speed_mps: float = Field(default=250.0, ge=0)
    radar_active: bool = False
    rcs: float = Field(default=1.5, gt=0)


class ScenarioMissileConfig(BaseModel):
    seeker_type: Literal["arh", "sarh"] = "arh"
    position: list[float] = Field(default_factory=lambda: [12000.0, 3000.0, 0.0])
    speed_mps: float = Field(default=900.0, gt=0)
    max_range_m: float = Field(default=5000.0, gt=0)
    max_signal: float = Field(default=100.0, gt=0)
    fuze_radius_m: float = Field(default=50.0, gt=0)


class ScenarioTerrainConfig(BaseModel):
    type: Literal["flat", "ridge"] = "flat"
    ground_level_m: float = 0.0
    ridge_x_m: float = 0.0
    ridge_height_m: float = 0.0


class ScenarioConfig(BaseModel):
    duration_s: float = Field(default=30.0, gt=0)
    dt: float = Field(default=0.05, gt=0)
    decoy_launch_times: list[float] = Field(default_factory=list)
    aircraft: ScenarioAircraftConfig = Field(default_factory=ScenarioAircraftConfig)
    missile: ScenarioMissileConfig = Field(default_factory=ScenarioMissileConfig)
    terrain: ScenarioTerrainConfig = Field(default_factory=ScenarioTerrainConfig)


# ---------------------------------------------------------------------------
# Root
# ---------------------------------------------------------------------------


class ActiveDecoyRootConfig(BaseModel):
    system: SystemConfig = Field(default_factory=SystemConfig)
    time: TimeConfig = Field(default_factory=TimeConfig)
    countermeasures: CountermeasuresConfig = Field(default_factory=CountermeasuresConfig)
    scenario: ScenarioConfig = Field(default_factory=ScenarioConfig)

    model_config = {"extra": "allow"}


class ActiveDecoyConfigSchema(BaseModel):
    """Top-level wrapper matching YAML root key ``active_decoy:``."""

    active_decoy: ActiveDecoyRootConfig

    model_config = {"extra": "allow"}


def validate_config(cfg_dict: dict) -> ActiveDecoyConfigSchema:
    """Validate a raw config dict (e.g. from OmegaConf) against the schema.

    Raises ``pydantic.ValidationError`` on invalid config.
    """
    return ActiveDecoyConfigSchema.model_validate(cfg_dict)
