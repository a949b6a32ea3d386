"""Game controller that owns one run of the course."""
from __future__ import annotations

import math
from typing import Optional, Sequence

import numpy as np

from sky_glider.data.courses import COURSES, DEFAULT_COURSE_KEY, Course

from . import collision, physics
from .config import FLIGHT_CFG, FlightCfg
from .course import generate_rings
from .logging_utils import RunLogger
from .model import (
    GliderState,
    InputSignal,
    Obstacle,
    Ring,
    SessionSnapshot,
    SessionState,
    WindZone,
)
from .obstacles import positions_at
from .timekeeping import FixedStepAccumulator

RESET_EVENT = "reset"


class GliderGame:
    """Runs the per-tick pipeline: integrate, move obstacles, detect.

    ``step`` integrates with the caller's frame delta by default. Passing
    ``fixed_step`` switches to whole fixed-size sub-ticks, which makes runs
    independent of the host's frame rate.
    """

    def __init__(
        self,
        course: Course | None = None,
        cfg: FlightCfg = FLIGHT_CFG,
        *,
        fixed_step: Optional[float] = None,
        logger: Optional[RunLogger] = None,
    ) -> None:
        self._course = course or COURSES[DEFAULT_COURSE_KEY]
        self._cfg = cfg
        self._rings = generate_rings(
            self._course.ring_count,
            self._course.ring_spacing,
            self._course.ring_curve,
            radius=cfg.ring_radius,
            normal=cfg.ring_normal,
        )
        self._state = SessionState(glider=self._default_glider(), finish_z=cfg.finish_z)
        self._obstacle_positions = positions_at(self._course.obstacles, 0.0)
        self._accumulator: Optional[FixedStepAccumulator] = None
        if fixed_step is not None:
            self._accumulator = FixedStepAccumulator(fixed_step, cfg.max_substeps)
        self._last_elapsed = 0.0
        self._end_time: Optional[float] = None
        self._tick_count = 0
        self._logger: Optional[RunLogger] = None
        if logger is not None:
            self.attach_logger(logger)

    @property
    def course(self) -> Course:
        return self._course

    @property
    def cfg(self) -> FlightCfg:
        return self._cfg

    @property
    def rings(self) -> tuple[Ring, ...]:
        return self._rings

    @property
    def wind_zones(self) -> tuple[WindZone, ...]:
        return self._course.wind_zones

    @property
    def obstacles(self) -> tuple[Obstacle, ...]:
        return self._course.obstacles

    @property
    def state(self) -> SessionState:
        return self._state

    @property
    def obstacle_positions(self) -> tuple[np.ndarray, ...]:
        return self._obstacle_positions

    @property
    def fixed_step(self) -> Optional[float]:
        return None if self._accumulator is None else self._accumulator.step

    def _default_glider(self) -> GliderState:
        return GliderState(
            position=np.array(self._cfg.start_position, dtype=float),
            velocity=np.zeros(3, dtype=float),
            radius=self._cfg.glider_radius,
        )

    def step(
        self,
        signal: InputSignal,
        elapsed_seconds: float,
        delta_seconds: Optional[float] = None,
    ) -> SessionSnapshot:
        """Advance the run to *elapsed_seconds* and return the new snapshot."""

        if delta_seconds is None:
            delta_seconds = self._cfg.fallback_dt
        if not math.isfinite(delta_seconds) or delta_seconds < 0.0:
            raise ValueError(f"delta_seconds must be finite and non-negative, got {delta_seconds}")
        if not math.isfinite(elapsed_seconds):
            raise ValueError(f"elapsed_seconds must be finite, got {elapsed_seconds}")

        state = self._state
        if state.start_time is None:
            state.start_time = elapsed_seconds
        self._last_elapsed = elapsed_seconds

        if self._accumulator is None:
            self._tick(signal, elapsed_seconds, delta_seconds)
            return self.snapshot()

        acc = self._accumulator
        if state.is_terminal:
            acc.clear()
            return self.snapshot()
        acc.accrue(delta_seconds)
        steps = acc.consume()
        remainder = acc.value
        for i in range(steps):
            if state.is_terminal:
                acc.clear()
                break
            tick_time = elapsed_seconds - remainder - (steps - 1 - i) * acc.step
            self._tick(signal, tick_time, acc.step)
        return self.snapshot()

    def _tick(self, signal: InputSignal, elapsed: float, dt: float) -> None:
        state = self._state
        if state.is_terminal:
            return

        physics.integrate(state, signal, self._course.wind_zones, dt, self._cfg)
        self._obstacle_positions = positions_at(self._course.obstacles, elapsed)
        events = collision.detect(state, self._rings, self._obstacle_positions, self._cfg)
        self._tick_count += 1
        if state.is_terminal:
            self._end_time = elapsed

        self._log_tick(elapsed, dt, events)

    def reset(self, now: Optional[float] = None) -> None:
        """Return to the start pose and clear all progress."""

        start = self._last_elapsed if now is None else now
        self._state.reset(
            np.array(self._cfg.start_position, dtype=float),
            self._cfg.glider_radius,
            start_time=start,
        )
        self._obstacle_positions = positions_at(self._course.obstacles, start)
        if self._accumulator is not None:
            self._accumulator.clear()
        self._end_time = None
        self._tick_count = 0
        self._last_elapsed = start
        self._log_event(start, RESET_EVENT, None)

    def run_time(self) -> float:
        start = self._state.start_time
        if start is None:
            return 0.0
        end = self._end_time if self._end_time is not None else self._last_elapsed
        return max(0.0, end - start)

    def snapshot(self) -> SessionSnapshot:
        state = self._state
        glider = state.glider
        return SessionSnapshot(
            position=glider.position.copy(),
            velocity=glider.velocity.copy(),
            pitch=glider.pitch,
            yaw=glider.yaw,
            obstacle_positions=tuple(p.copy() for p in self._obstacle_positions),
            rings_passed=frozenset(state.rings_passed),
            next_ring_index=state.next_ring_index,
            crashed=state.crashed,
            finished=state.finished,
            crash_cause=state.crash_cause,
            run_time=self.run_time(),
        )

    # -- logging -------------------------------------------------------

    def attach_logger(self, logger: RunLogger) -> None:
        self._logger = logger
        logger.write_meta(self.describe())

    def describe(self) -> dict:
        cfg = self._cfg
        return {
            "course": self._course.key,
            "course_name": self._course.name,
            "rings": [ring.center.tolist() for ring in self._rings],
            "ring_radius": cfg.ring_radius,
            "pass_margin": cfg.pass_margin,
            "floor_y": cfg.floor_y,
            "finish_z": cfg.finish_z,
            "gravity": np.asarray(cfg.gravity).tolist(),
            "thrust_strength": cfg.thrust_strength,
            "drag": cfg.drag,
            "turn_speed": cfg.turn_speed,
            "start_position": np.asarray(cfg.start_position).tolist(),
            "wind_zones": len(self._course.wind_zones),
            "obstacles": len(self._course.obstacles),
            "fixed_step": self.fixed_step,
        }

    def _log_tick(
        self, elapsed: float, dt: float, events: Sequence[collision.DetectionEvent]
    ) -> None:
        logger = self._logger
        if logger is None:
            return
        state = self._state
        glider = state.glider
        if self._tick_count % self._cfg.log_every_steps == 0 or state.is_terminal:
            logger.log_ts(
                [
                    elapsed,
                    *glider.position,
                    *glider.velocity,
                    float(np.linalg.norm(glider.velocity)),
                    glider.pitch,
                    glider.yaw,
                    len(state.rings_passed),
                    dt,
                ]
            )
        for event in events:
            details = event.ring_index if event.ring_index is not None else event.cause
            self._log_event(elapsed, event.kind, details)

    def _log_event(self, elapsed: float, kind: str, details: object) -> None:
        logger = self._logger
        if logger is None:
            return
        x, y, z = self._state.glider.position
        logger.log_event([elapsed, kind, x, y, z, details])

    def close(self) -> None:
        if self._logger is not None:
            self._logger.close()


__all__ = ["GliderGame", "RESET_EVENT"]
