"""Terrain line-of-sight models for the reference host."""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any

import numpy as np


@dataclass
class FlatTerrain:
    """Flat ground at ``ground_level_m``.

    A straight segment between two points above a plane never dips
    below it, so only endpoints underground are obstructed.
    """

    ground_level_m: float = 0.0

    def is_obstructed(self, start: np.ndarray, end: np.ndarray) -> bool:
        return min(float(start[1]), float(end[1])) < self.ground_level_m


@dataclass
class RidgeTerrain(FlatTerrain):
    """Flat ground plus an infinitely long ridge along the plane ``x = ridge_x_m``."""

    ridge_x_m: float = 0.0
    ridge_height_m: float = 0.0

    def is_obstructed(self, start: np.ndarray, end: np.ndarray) -> bool:
        if super().is_obstructed(start, end):
            return True
        x0, x1 = float(start[0]), float(end[0])
        if (x0 - self.ridge_x_m) * (x1 - self.ridge_x_m) > 0 or x0 == x1:
            return False
        frac = (self.ridge_x_m - x0) / (x1 - x0)
        y_cross = float(start[1]) + frac * (float(end[1]) - float(start[1]))
        return y_cross < self.ridge_height_m


def terrain_from_config(cfg: Any) -> FlatTerrain:
    """Build terrain from the ``scenario.terrain`` section."""
    cfg = cfg or {}
    ground = float(cfg.get("ground_level_m", 0.0))
    if cfg.get("type", "flat") == "ridge":
        return RidgeTerrain(
            ground_level_m=ground,
            ridge_x_m=float(cfg.get("ridge_x_m", 0.0)),
            ridge_height_m=float(cfg.get("ridge_height_m", 0.0)),
        )
    return FlatTerrain(ground_level_m=ground)
