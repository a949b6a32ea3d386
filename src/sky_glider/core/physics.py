"""Flight dynamics for the glider."""
from __future__ import annotations

import math
from typing import Iterable

import numpy as np

from . import wind
from .config import FLIGHT_CFG, FlightCfg
from .model import InputSignal, SessionState, WindZone
from .vector import add, scale, vec3


def clamp(value: float, lo: float, hi: float) -> float:
    """Clamp *value* between *lo* and *hi*."""

    return max(lo, min(hi, value))


def forward_direction(yaw: float, pitch: float) -> np.ndarray:
    """Unit vector the glider's nose points along for ``(yaw, pitch)``."""

    cos_pitch = math.cos(pitch)
    return vec3(-math.sin(yaw) * cos_pitch, -math.sin(pitch), -math.cos(yaw) * cos_pitch)


def acceleration(
    position: np.ndarray,
    yaw: float,
    pitch: float,
    signal: InputSignal,
    zones: Iterable[WindZone],
    cfg: FlightCfg = FLIGHT_CFG,
) -> np.ndarray:
    """Gravity plus local wind plus thrust, if engaged."""

    total = add(cfg.gravity, wind.sample(position, zones))
    if signal.thrust_on:
        total = add(total, scale(forward_direction(yaw, pitch), cfg.thrust_strength))
    return total


def integrate(
    session: SessionState,
    signal: InputSignal,
    zones: Iterable[WindZone],
    dt: float,
    cfg: FlightCfg = FLIGHT_CFG,
) -> None:
    """Advance the session's glider by one explicit Euler step of size *dt*.

    Drag scales the velocity after every step. Does nothing once the run has
    crashed or finished.
    """

    if session.is_terminal:
        return

    glider = session.glider
    accel = acceleration(glider.position, glider.yaw, glider.pitch, signal, zones, cfg)

    glider.velocity = scale(add(glider.velocity, scale(accel, dt)), cfg.drag)
    glider.position = add(glider.position, scale(glider.velocity, dt))

    glider.pitch += signal.pitch_input * cfg.turn_speed * dt
    glider.yaw += signal.yaw_input * cfg.turn_speed * dt
    glider.pitch = clamp(glider.pitch, -cfg.pitch_limit, cfg.pitch_limit)


__all__ = [
    "FLIGHT_CFG",
    "FlightCfg",
    "acceleration",
    "clamp",
    "forward_direction",
    "integrate",
]
