from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from sky_glider.core.vector import normalize

WORLD_UP = np.array([0.0, 1.0, 0.0], dtype=float)


@dataclass
class CameraState:
    eye: np.ndarray
    target: np.ndarray


def chase_back_vector(yaw: float, pitch: float) -> np.ndarray:
    return np.array(
        [
            -math.sin(yaw) * math.cos(pitch),
            -math.sin(pitch),
            -math.cos(yaw) * math.cos(pitch),
        ],
        dtype=float,
    )


class Camera:
    """Chase camera that sits behind and above the glider."""

    def __init__(
        self,
        size: tuple[int, int],
        *,
        fov: float,
        near: float,
        far: float,
        distance: float,
        height: float,
        look_ahead: float,
        smoothing: float = 1.0,
    ) -> None:
        if not 0.0 < fov < math.pi:
            raise ValueError("fov must lie in (0, pi)")
        self._size = size
        self._fov = fov
        self._near = near
        self._far = far
        self._distance = distance
        self._height = height
        self._look_ahead = look_ahead
        self._smoothing = smoothing
        self._state = CameraState(
            eye=np.array([0.0, height, -distance], dtype=float),
            target=np.zeros(3, dtype=float),
        )

    @property
    def size(self) -> tuple[int, int]:
        return self._size

    def update_size(self, size: tuple[int, int]) -> None:
        self._size = size

    @property
    def eye(self) -> np.ndarray:
        return self._state.eye

    @property
    def target(self) -> np.ndarray:
        return self._state.target

    @property
    def focal_length(self) -> float:
        return (self._size[1] / 2.0) / math.tan(self._fov / 2.0)

    def follow(self, position: np.ndarray, yaw: float, pitch: float, *, snap: bool = False) -> None:
        back = chase_back_vector(yaw, pitch)
        eye = position + back * self._distance + WORLD_UP * self._height
        target = position - back * self._look_ahead
        if snap or self._smoothing >= 1.0:
            self._state.eye = eye
            self._state.target = target
            return
        self._state.eye = self._state.eye + (eye - self._state.eye) * self._smoothing
        self._state.target = self._state.target + (target - self._state.target) * self._smoothing

    def _basis(self) -> tuple[np.ndarray, np.ndarray, np.ndarray]:
        forward = normalize(self._state.target - self._state.eye)
        right = normalize(np.cross(forward, WORLD_UP))
        if not right.any():
            right = np.array([1.0, 0.0, 0.0])
        up = np.cross(right, forward)
        return right, up, forward

    def to_view(self, point: np.ndarray) -> np.ndarray:
        """Camera-space ``(right, up, depth)`` coordinates of *point*."""

        right, up, forward = self._basis()
        rel = np.asarray(point, dtype=float) - self._state.eye
        return np.array([rel @ right, rel @ up, rel @ forward], dtype=float)

    def depth(self, point: np.ndarray) -> float:
        return float(self.to_view(point)[2])

    def world_to_screen(self, point: np.ndarray) -> tuple[int, int] | None:
        x, y, depth = self.to_view(point)
        if depth < self._near or depth > self._far:
            return None
        width, height = self._size
        f = self.focal_length
        sx = width // 2 + int(f * x / depth)
        sy = height // 2 - int(f * y / depth)
        return sx, sy

    def projected_radius(self, point: np.ndarray, radius: float) -> int:
        depth = self.depth(point)
        if depth < self._near:
            return 0
        return max(1, int(self.focal_length * radius / depth))
