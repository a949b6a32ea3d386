"""Small 3D vector helpers built on numpy arrays."""
from __future__ import annotations

from typing import Sequence

import numpy as np

EPSILON = 1e-12


def vec3(x: float = 0.0, y: float = 0.0, z: float = 0.0) -> np.ndarray:
    return np.array([x, y, z], dtype=float)


def as_vec3(value: Sequence[float] | np.ndarray, *, name: str = "vector") -> np.ndarray:
    """Copy *value* into a finite float 3-vector or raise ``ValueError``."""

    arr = np.array(value, dtype=float)
    if arr.shape != (3,):
        raise ValueError(f"{name} must have exactly three components, got shape {arr.shape}")
    if not np.all(np.isfinite(arr)):
        raise ValueError(f"{name} must be finite, got {arr.tolist()}")
    return arr


def add(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a + b


def subtract(a: np.ndarray, b: np.ndarray) -> np.ndarray:
    return a - b


def scale(v: np.ndarray, factor: float) -> np.ndarray:
    return v * factor


def dot(a: np.ndarray, b: np.ndarray) -> float:
    return float(np.dot(a, b))


def magnitude(v: np.ndarray) -> float:
    return float(np.linalg.norm(v))


def distance(a: np.ndarray, b: np.ndarray) -> float:
    return magnitude(a - b)


def normalize(v: np.ndarray) -> np.ndarray:
    """Unit vector along *v*, or the zero vector when *v* is degenerate."""

    length = magnitude(v)
    if length <= EPSILON or not np.isfinite(length):
        return np.zeros_like(v, dtype=float)
    return v / length


def reject_from_axis(v: np.ndarray, axis: np.ndarray) -> np.ndarray:
    """Component of *v* perpendicular to the unit vector *axis*."""

    return v - axis * dot(v, axis)


__all__ = [
    "EPSILON",
    "add",
    "as_vec3",
    "distance",
    "dot",
    "magnitude",
    "normalize",
    "reject_from_axis",
    "scale",
    "subtract",
    "vec3",
]
