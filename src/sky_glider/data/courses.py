"""Course definitions: ring layout parameters, wind zones and obstacles."""
from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from sky_glider.core.model import Obstacle, WindZone


@dataclass(frozen=True)
class Course:
    key: str
    name: str
    description: str
    ring_count: int = 12
    ring_spacing: float = 14.0
    ring_curve: float = 0.25
    wind_zones: tuple[WindZone, ...] = ()
    obstacles: tuple[Obstacle, ...] = ()
    islands: tuple[tuple[float, float, float], ...] = ()

    def island_positions(self) -> list[np.ndarray]:
        return [np.array(island, dtype=float) for island in self.islands]


SKY_ISLAND_WIND_ZONES: tuple[WindZone, ...] = (
    WindZone(center=(10.0, 18.0, 30.0), half_extents=(8.0, 6.0, 10.0), wind=(-2.0, 0.5, 0.0)),
    WindZone(center=(-15.0, 20.0, 80.0), half_extents=(10.0, 5.0, 12.0), wind=(1.5, -0.3, -0.5)),
)

SKY_ISLAND_OBSTACLES: tuple[Obstacle, ...] = (
    Obstacle(center=(5.0, 19.0, 40.0), period=6.0, phase=0.0, radius=5.0),
    Obstacle(center=(-8.0, 21.0, 70.0), period=8.0, phase=math.pi / 2.0, radius=6.0),
    Obstacle(center=(0.0, 17.0, 100.0), period=5.0, phase=math.pi, radius=4.0),
)

SKY_ISLANDS: tuple[tuple[float, float, float], ...] = (
    (0.0, 10.0, 20.0),
    (-12.0, 12.0, 60.0),
    (15.0, 8.0, 100.0),
)

COURSE_DEFINITIONS: tuple[Course, ...] = (
    Course(
        key="sky_islands",
        name="Sky Islands",
        description="Twelve rings, two wind zones and three orbiting hazards.",
        wind_zones=SKY_ISLAND_WIND_ZONES,
        obstacles=SKY_ISLAND_OBSTACLES,
        islands=SKY_ISLANDS,
    ),
    Course(
        key="training",
        name="Training",
        description="The same rings in still air with nothing to dodge.",
        islands=SKY_ISLANDS,
    ),
)

COURSES: dict[str, Course] = {course.key: course for course in COURSE_DEFINITIONS}
COURSE_DISPLAY_ORDER: list[str] = [course.key for course in COURSE_DEFINITIONS]
DEFAULT_COURSE_KEY = COURSE_DISPLAY_ORDER[0]


__all__ = [
    "COURSE_DEFINITIONS",
    "COURSE_DISPLAY_ORDER",
    "COURSES",
    "Course",
    "DEFAULT_COURSE_KEY",
]
