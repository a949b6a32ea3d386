"""Data models for the glider course and run state."""
from __future__ import annotations

import math
from dataclasses import dataclass, field
from typing import Optional

import numpy as np

from .vector import EPSILON, as_vec3, magnitude

_CONTROL_VALUES = (-1, 0, 1)


@dataclass
class GliderState:
    """Mutable pose of the player's glider."""

    position: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))
    velocity: np.ndarray = field(default_factory=lambda: np.zeros(3, dtype=float))
    pitch: float = 0.0
    yaw: float = 0.0
    radius: float = 1.2

    def copy(self) -> "GliderState":
        return GliderState(
            position=self.position.copy(),
            velocity=self.velocity.copy(),
            pitch=self.pitch,
            yaw=self.yaw,
            radius=self.radius,
        )


@dataclass(frozen=True)
class InputSignal:
    """Control input for a single tick."""

    pitch_input: int = 0
    yaw_input: int = 0
    thrust_on: bool = False

    def __post_init__(self) -> None:
        if self.pitch_input not in _CONTROL_VALUES:
            raise ValueError(f"pitch_input must be -1, 0 or 1, got {self.pitch_input!r}")
        if self.yaw_input not in _CONTROL_VALUES:
            raise ValueError(f"yaw_input must be -1, 0 or 1, got {self.yaw_input!r}")


NO_INPUT = InputSignal()


@dataclass(frozen=True, eq=False)
class WindZone:
    """Axis-aligned box that pushes the glider while it is inside."""

    center: np.ndarray
    half_extents: np.ndarray
    wind: np.ndarray

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center, name="wind zone center"))
        object.__setattr__(
            self, "half_extents", as_vec3(self.half_extents, name="wind zone half extents")
        )
        object.__setattr__(self, "wind", as_vec3(self.wind, name="wind zone wind"))
        if np.any(self.half_extents <= 0.0):
            raise ValueError(
                f"wind zone half extents must be positive, got {self.half_extents.tolist()}"
            )

    def contains(self, position: np.ndarray) -> bool:
        position = np.asarray(position, dtype=float)
        lower = self.center - self.half_extents
        upper = self.center + self.half_extents
        return bool(np.all((position >= lower) & (position <= upper)))


@dataclass(frozen=True, eq=False)
class Obstacle:
    """Hazard orbiting a fixed reference center."""

    center: np.ndarray
    period: float = 8.0
    phase: float = 0.0
    radius: float = 6.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center, name="obstacle center"))
        if not math.isfinite(self.period) or self.period <= 0.0:
            raise ValueError(f"obstacle period must be positive, got {self.period}")
        if not math.isfinite(self.phase):
            raise ValueError("obstacle phase must be finite")
        if not math.isfinite(self.radius) or self.radius < 0.0:
            raise ValueError(f"obstacle orbit radius must be non-negative, got {self.radius}")


@dataclass(frozen=True, eq=False)
class Ring:
    """Checkpoint ring; the normal is stored normalised."""

    index: int
    center: np.ndarray
    normal: np.ndarray
    radius: float

    def __post_init__(self) -> None:
        object.__setattr__(self, "center", as_vec3(self.center, name="ring center"))
        normal = as_vec3(self.normal, name="ring normal")
        length = magnitude(normal)
        if length <= EPSILON:
            raise ValueError("ring normal must have non-zero length")
        object.__setattr__(self, "normal", normal / length)
        if not math.isfinite(self.radius) or self.radius <= 0.0:
            raise ValueError(f"ring radius must be positive, got {self.radius}")
        if self.index < 0:
            raise ValueError("ring index must be non-negative")


@dataclass
class SessionState:
    """Everything that changes during one run of the course."""

    glider: GliderState
    finish_z: float
    rings_passed: set[int] = field(default_factory=set)
    next_ring_index: int = 0
    crashed: bool = False
    finished: bool = False
    crash_cause: Optional[str] = None
    start_time: Optional[float] = None

    @property
    def is_terminal(self) -> bool:
        return self.crashed or self.finished

    def reset(
        self,
        position: np.ndarray,
        glider_radius: float,
        start_time: Optional[float] = None,
    ) -> None:
        self.glider = GliderState(
            position=position.copy(),
            velocity=np.zeros(3, dtype=float),
            radius=glider_radius,
        )
        self.rings_passed = set()
        self.next_ring_index = 0
        self.crashed = False
        self.finished = False
        self.crash_cause = None
        self.start_time = start_time


@dataclass(frozen=True, eq=False)
class SessionSnapshot:
    """Read-only view of a session handed to the presentation layer."""

    position: np.ndarray
    velocity: np.ndarray
    pitch: float
    yaw: float
    obstacle_positions: tuple[np.ndarray, ...]
    rings_passed: frozenset[int]
    next_ring_index: int
    crashed: bool
    finished: bool
    crash_cause: Optional[str]
    run_time: float

    @property
    def speed(self) -> float:
        return magnitude(self.velocity)


__all__ = [
    "GliderState",
    "InputSignal",
    "NO_INPUT",
    "Obstacle",
    "Ring",
    "SessionSnapshot",
    "SessionState",
    "WindZone",
]
