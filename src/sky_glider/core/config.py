"""Configuration dataclasses for the glider simulation."""
from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from .vector import EPSILON, as_vec3, magnitude

_VECTOR_FIELDS = ("gravity", "start_position", "ring_normal")
_SCALAR_FIELDS = (
    "thrust_strength",
    "drag",
    "turn_speed",
    "pitch_limit",
    "glider_radius",
    "obstacle_radius",
    "ring_radius",
    "pass_margin",
    "floor_y",
    "finish_z",
    "fallback_dt",
    "fixed_dt",
)


@dataclass(frozen=True)
class FlightCfg:
    gravity: np.ndarray = field(
        default_factory=lambda: np.array([0.0, -4.0, 0.0], dtype=float)
    )
    thrust_strength: float = 8.0
    drag: float = 0.98
    turn_speed: float = 1.2
    pitch_limit: float = 0.8
    glider_radius: float = 1.2
    start_position: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 18.0, -15.0], dtype=float)
    )
    obstacle_radius: float = 1.5
    ring_radius: float = 4.0
    ring_normal: np.ndarray = field(
        default_factory=lambda: np.array([0.0, 0.0, 1.0], dtype=float)
    )
    pass_margin: float = 2.0
    floor_y: float = 5.0
    finish_z: float = 160.0
    fallback_dt: float = 0.016
    fixed_dt: float = 1.0 / 60.0
    max_substeps: int = 8
    log_every_steps: int = 6

    def __post_init__(self) -> None:
        for name in _VECTOR_FIELDS:
            object.__setattr__(self, name, as_vec3(getattr(self, name), name=name))
        if magnitude(self.ring_normal) <= EPSILON:
            raise ValueError("ring_normal must have non-zero length")
        for name in _SCALAR_FIELDS:
            if not math.isfinite(getattr(self, name)):
                raise ValueError(f"{name} must be finite, got {getattr(self, name)}")
        if not 0.0 < self.drag <= 1.0:
            raise ValueError(f"drag must lie in (0, 1], got {self.drag}")
        if self.pitch_limit < 0.0:
            raise ValueError("pitch_limit must be non-negative")
        if self.glider_radius <= 0.0 or self.obstacle_radius <= 0.0:
            raise ValueError("collision radii must be positive")
        if self.ring_radius <= 0.0:
            raise ValueError("ring_radius must be positive")
        if self.fixed_dt <= 0.0 or self.fallback_dt <= 0.0:
            raise ValueError("time steps must be positive")
        if self.max_substeps < 1:
            raise ValueError("max_substeps must be at least 1")
        if self.log_every_steps < 1:
            raise ValueError("log_every_steps must be at least 1")


@dataclass(frozen=True)
class RenderCfg:
    width: int = 1100
    height: int = 720
    target_fps: int = 60
    sky_top_color: tuple[int, int, int] = (84, 150, 230)
    sky_bottom_color: tuple[int, int, int] = (188, 222, 255)
    glider_color: tuple[int, int, int] = (51, 153, 230)
    glider_outline_color: tuple[int, int, int] = (230, 244, 255)
    ring_color: tuple[int, int, int] = (230, 178, 51)
    ring_passed_color: tuple[int, int, int] = (120, 214, 130)
    ring_line_width: int = 3
    ring_segments: int = 40
    obstacle_color: tuple[int, int, int] = (217, 77, 51)
    island_color: tuple[int, int, int] = (77, 153, 89)
    island_half_size: tuple[float, float, float] = (6.0, 2.0, 6.0)
    wind_zone_color: tuple[int, int, int, int] = (255, 255, 255, 70)
    hud_text_color: tuple[int, int, int] = (234, 241, 255)
    hud_warning_color: tuple[int, int, int] = (255, 176, 120)
    hud_success_color: tuple[int, int, int] = (150, 240, 160)
    hud_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.45))
    banner_background_color: tuple[int, int, int, int] = (12, 18, 30, int(255 * 0.7))
    button_color: tuple[int, int, int, int] = (8, 32, 64, int(255 * 0.78))
    button_hover_color: tuple[int, int, int, int] = (18, 52, 94, int(255 * 0.88))
    button_text_color: tuple[int, int, int] = (234, 241, 255)
    button_border_color: tuple[int, int, int, int] = (88, 140, 255, int(255 * 0.55))
    button_radius: int = 14
    camera_distance: float = 14.0
    camera_height: float = 6.0
    camera_look_ahead: float = 5.0
    camera_fov: float = math.pi / 4.0
    camera_near: float = 0.5
    camera_far: float = 500.0
    camera_smoothing: float = 0.25


FLIGHT_CFG = FlightCfg()
RENDER_CFG = RenderCfg()


__all__ = ["FLIGHT_CFG", "RENDER_CFG", "FlightCfg", "RenderCfg"]
