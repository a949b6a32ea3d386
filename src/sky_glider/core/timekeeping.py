"""Frame timing and fixed-step accumulation."""
from __future__ import annotations

import time
from dataclasses import dataclass, field


@dataclass
class FrameTimer:
    """High resolution timer based on :func:`time.perf_counter`."""

    last_time: float = field(default_factory=time.perf_counter)
    start_time: float = field(init=False)

    def __post_init__(self) -> None:
        self.start_time = self.last_time

    def tick(self) -> float:
        now = time.perf_counter()
        dt = now - self.last_time
        self.last_time = now
        return dt

    @property
    def elapsed(self) -> float:
        return self.last_time - self.start_time


@dataclass
class FixedStepAccumulator:
    """Accumulates real time and hands it out in whole fixed steps.

    Time beyond ``max_substeps`` steps in one frame is dropped; anything
    smaller than one step is carried over to the next frame.
    """

    step: float
    max_substeps: int
    value: float = 0.0

    def __post_init__(self) -> None:
        if self.step <= 0.0:
            raise ValueError(f"fixed step must be positive, got {self.step}")
        if self.max_substeps < 1:
            raise ValueError("max_substeps must be at least 1")

    def accrue(self, delta: float) -> None:
        if delta > 0.0:
            self.value += delta

    def clear(self) -> None:
        self.value = 0.0

    def consume(self) -> int:
        steps = int(self.value // self.step)
        if steps > self.max_substeps:
            self.value = 0.0
            return self.max_substeps
        self.value -= steps * self.step
        return steps


__all__ = ["FixedStepAccumulator", "FrameTimer"]
