"""Closed-form motion of the orbiting obstacles."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from .model import Obstacle

VERTICAL_BOB_FACTOR = 0.3


def orbit_phase(obstacle: Obstacle, elapsed_seconds: float) -> float:
    return elapsed_seconds * (2.0 * math.pi) / obstacle.period + obstacle.phase


def position_at(obstacle: Obstacle, elapsed_seconds: float) -> np.ndarray:
    """World position of *obstacle* at *elapsed_seconds*.

    Horizontal motion is a circle of ``obstacle.radius`` in the X/Z plane; the
    vertical bob runs at twice the orbit frequency.
    """

    phase = orbit_phase(obstacle, elapsed_seconds)
    r = obstacle.radius
    return obstacle.center + np.array(
        [
            r * math.cos(phase),
            r * VERTICAL_BOB_FACTOR * math.sin(2.0 * phase),
            r * math.sin(phase),
        ],
        dtype=float,
    )


def positions_at(obstacles: Iterable[Obstacle], elapsed_seconds: float) -> tuple[np.ndarray, ...]:
    return tuple(position_at(obstacle, elapsed_seconds) for obstacle in obstacles)


__all__ = ["VERTICAL_BOB_FACTOR", "orbit_phase", "position_at", "positions_at"]
