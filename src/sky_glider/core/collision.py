"""Crash, ring-pass and finish detection."""
from __future__ import annotations

from dataclasses import dataclass
from typing import Optional, Sequence

import numpy as np

from .config import FLIGHT_CFG, FlightCfg
from .model import Ring, SessionState
from .vector import distance, dot, magnitude, reject_from_axis, subtract

CRASH = "crash"
RING_PASS = "ring_pass"
FINISH = "finish"

CAUSE_FLOOR = "floor"


@dataclass(frozen=True)
class DetectionEvent:
    kind: str
    ring_index: Optional[int] = None
    cause: Optional[str] = None


def sphere_sphere_collision(
    center_a: np.ndarray, radius_a: float, center_b: np.ndarray, radius_b: float
) -> bool:
    return distance(center_a, center_b) < radius_a + radius_b


def ring_offsets(position: np.ndarray, ring: Ring) -> tuple[float, float]:
    """Distance from *position* to the ring's plane and within that plane."""

    to_ring = subtract(ring.center, position)
    along_normal = abs(dot(to_ring, ring.normal))
    in_plane = magnitude(reject_from_axis(to_ring, ring.normal))
    return along_normal, in_plane


def check_ring_pass(position: np.ndarray, ring: Ring, pass_margin: float) -> bool:
    along_normal, in_plane = ring_offsets(position, ring)
    return along_normal < pass_margin and in_plane < ring.radius + pass_margin


def first_obstacle_hit(
    position: np.ndarray,
    glider_radius: float,
    obstacle_positions: Sequence[np.ndarray],
    obstacle_radius: float,
) -> Optional[int]:
    for idx, obstacle_position in enumerate(obstacle_positions):
        if sphere_sphere_collision(position, glider_radius, obstacle_position, obstacle_radius):
            return idx
    return None


def detect(
    session: SessionState,
    rings: Sequence[Ring],
    obstacle_positions: Sequence[np.ndarray],
    cfg: FlightCfg = FLIGHT_CFG,
) -> list[DetectionEvent]:
    """Run every crash and progress test against the current glider pose.

    Updates *session* in place and returns what happened this tick, in the
    order the tests ran.
    """

    if session.is_terminal:
        return []

    events: list[DetectionEvent] = []
    glider = session.glider
    position = glider.position

    hit = first_obstacle_hit(position, glider.radius, obstacle_positions, cfg.obstacle_radius)
    if hit is not None:
        session.crashed = True
        session.crash_cause = f"obstacle:{hit}"
        events.append(DetectionEvent(CRASH, cause=session.crash_cause))

    for ring in rings:
        if ring.index in session.rings_passed:
            continue
        if check_ring_pass(position, ring, cfg.pass_margin):
            session.rings_passed.add(ring.index)
            if ring.index >= session.next_ring_index:
                session.next_ring_index = ring.index + 1
            events.append(DetectionEvent(RING_PASS, ring_index=ring.index))

    if position[2] >= session.finish_z:
        session.finished = True
        events.append(DetectionEvent(FINISH))

    if position[1] < cfg.floor_y:
        if not session.crashed:
            session.crash_cause = CAUSE_FLOOR
        session.crashed = True
        events.append(DetectionEvent(CRASH, cause=CAUSE_FLOOR))

    return events


__all__ = [
    "CAUSE_FLOOR",
    "CRASH",
    "DetectionEvent",
    "FINISH",
    "RING_PASS",
    "check_ring_pass",
    "detect",
    "first_obstacle_hit",
    "ring_offsets",
    "sphere_sphere_collision",
]
