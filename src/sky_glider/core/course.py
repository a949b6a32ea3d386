"""Procedural placement of the ring checkpoints."""
from __future__ import annotations

import math
from typing import Sequence

import numpy as np

from .config import FLIGHT_CFG
from .model import Ring

LATERAL_AMPLITUDE = 25.0
BASE_ALTITUDE = 15.0
ALTITUDE_AMPLITUDE = 5.0
ALTITUDE_FREQUENCY = 0.2


def ring_parameter(index: int, count: int, spacing: float) -> float:
    """Distance along the course for ring *index* out of *count*."""

    return (index / max(count - 1, 1)) * (count * spacing)


def ring_center(t: float, curve: float) -> np.ndarray:
    return np.array(
        [
            math.sin(t * curve) * LATERAL_AMPLITUDE,
            BASE_ALTITUDE + math.sin(t * ALTITUDE_FREQUENCY) * ALTITUDE_AMPLITUDE,
            t,
        ],
        dtype=float,
    )


def generate_rings(
    count: int,
    spacing: float = 12.0,
    curve: float = 0.3,
    *,
    radius: float = FLIGHT_CFG.ring_radius,
    normal: Sequence[float] | np.ndarray = (0.0, 0.0, 1.0),
) -> tuple[Ring, ...]:
    """Return *count* rings laid out along a weaving path in +Z.

    The layout depends only on the arguments, so the same inputs always give
    the same course.
    """

    if count < 0:
        raise ValueError(f"ring count must be non-negative, got {count}")
    return tuple(
        Ring(
            index=i,
            center=ring_center(ring_parameter(i, count, spacing), curve),
            normal=np.array(normal, dtype=float),
            radius=radius,
        )
        for i in range(count)
    )


__all__ = ["generate_rings", "ring_center", "ring_parameter"]
