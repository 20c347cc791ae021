"""3D vector helpers (Y-up world frame)."""

from __future__ import annotations

import numpy as np

GRAVITY = np.array([0.0, -9.81, 0.0])


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    return np.array([x, y, z], dtype=float)


def as_vec3(value) -> np.ndarray:
    """Coerce a sequence to a float ``(3,)`` array (copying)."""
    arr = np.array(value, dtype=float).reshape(-1)
    if arr.shape != (3,):
        raise ValueError(f"expected a 3-vector, got shape {arr.shape}")
    return arr


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.linalg.norm(np.asarray(a) - np.asarray(b)))


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along *v*; the zero vector maps to zero."""
    n = float(np.linalg.norm(v))
    if n <= 0.0:
        return np.zeros(3)
    return np.asarray(v, dtype=float) / n


def heading_vector(heading_deg: float, climb_deg: float = 0.0) -> np.ndarray:
    """Unit direction from a compass heading and climb angle.

    Convention: heading 0 is +Z (north), 90 is +X (east); climb is
    positive up (+Y).
    """
    h = np.radians(heading_deg)
    c = np.radians(climb_deg)
    return np.array([np.sin(h) * np.cos(c), np.sin(c), np.cos(h) * np.cos(c)])
