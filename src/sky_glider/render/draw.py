from __future__ import annotations

import math
from itertools import product
from typing import Callable, Sequence, TYPE_CHECKING

import numpy as np
import pygame

from sky_glider.core.model import Ring, SessionSnapshot, WindZone
from sky_glider.core.physics import forward_direction
from sky_glider.core.vector import normalize

from .camera import Camera

if TYPE_CHECKING:  # pragma: no cover
    from sky_glider.core.config import RenderCfg
    from sky_glider.core.session import GliderGame

# Corner index pairs that form the twelve edges of a box.
_BOX_EDGES = (
    (0, 1), (0, 2), (0, 4), (1, 3), (1, 5), (2, 3),
    (2, 6), (3, 7), (4, 5), (4, 6), (5, 7), (6, 7),
)


def _box_corners(center: np.ndarray, half: Sequence[float]) -> list[np.ndarray]:
    return [
        center + np.array([sx * half[0], sy * half[1], sz * half[2]], dtype=float)
        for sx, sy, sz in product((-1.0, 1.0), repeat=3)
    ]


def _ring_basis(normal: np.ndarray) -> tuple[np.ndarray, np.ndarray]:
    helper = np.array([0.0, 1.0, 0.0]) if abs(normal[1]) < 0.9 else np.array([1.0, 0.0, 0.0])
    u = normalize(np.cross(normal, helper))
    v = np.cross(normal, u)
    return u, v


def draw_sky(surface: pygame.Surface, *, render_cfg: RenderCfg) -> None:
    width, height = surface.get_size()
    top = render_cfg.sky_top_color
    bottom = render_cfg.sky_bottom_color
    span = max(1, height - 1)
    for y in range(height):
        t = y / span
        color = tuple(int(top[i] + (bottom[i] - top[i]) * t) for i in range(3))
        pygame.draw.line(surface, color, (0, y), (width, y))


def draw_box_edges(
    surface: pygame.Surface,
    camera: Camera,
    center: np.ndarray,
    half: Sequence[float],
    color: tuple[int, ...],
    width: int = 1,
) -> None:
    projected = [camera.world_to_screen(corner) for corner in _box_corners(center, half)]
    for a, b in _BOX_EDGES:
        pa, pb = projected[a], projected[b]
        if pa is None or pb is None:
            continue
        pygame.draw.line(surface, color, pa, pb, width)


def draw_island(
    surface: pygame.Surface,
    camera: Camera,
    center: np.ndarray,
    *,
    render_cfg: RenderCfg,
) -> None:
    half = render_cfg.island_half_size
    corners = _box_corners(center, half)
    # +y corners, walked around the top face.
    top = [camera.world_to_screen(corners[i]) for i in (2, 3, 7, 6)]
    if all(point is not None for point in top):
        pygame.draw.polygon(surface, render_cfg.island_color, top)
    shade = tuple(max(0, int(c * 0.7)) for c in render_cfg.island_color)
    draw_box_edges(surface, camera, center, half, shade, 2)


def draw_wind_zone(
    overlay: pygame.Surface,
    camera: Camera,
    zone: WindZone,
    *,
    render_cfg: RenderCfg,
) -> None:
    draw_box_edges(overlay, camera, zone.center, zone.half_extents, render_cfg.wind_zone_color)
    start = camera.world_to_screen(zone.center)
    tip = camera.world_to_screen(zone.center + normalize(zone.wind) * min(zone.half_extents))
    if start is not None and tip is not None and start != tip:
        pygame.draw.line(overlay, render_cfg.wind_zone_color, start, tip, 3)


def draw_ring(
    surface: pygame.Surface,
    camera: Camera,
    ring: Ring,
    color: tuple[int, int, int],
    *,
    render_cfg: RenderCfg,
) -> None:
    u, v = _ring_basis(ring.normal)
    segments = max(8, render_cfg.ring_segments)
    run: list[tuple[int, int]] = []
    for k in range(segments + 1):
        angle = 2.0 * math.pi * k / segments
        point = ring.center + ring.radius * (math.cos(angle) * u + math.sin(angle) * v)
        screen = camera.world_to_screen(point)
        if screen is None:
            if len(run) >= 2:
                pygame.draw.lines(surface, color, False, run, render_cfg.ring_line_width)
            run = []
            continue
        run.append(screen)
    if len(run) >= 2:
        pygame.draw.lines(surface, color, False, run, render_cfg.ring_line_width)


def draw_sphere(
    surface: pygame.Surface,
    camera: Camera,
    center: np.ndarray,
    radius: float,
    color: tuple[int, int, int],
) -> None:
    screen = camera.world_to_screen(center)
    if screen is None:
        return
    pygame.draw.circle(surface, color, screen, camera.projected_radius(center, radius))


def draw_glider(
    surface: pygame.Surface,
    camera: Camera,
    snapshot: SessionSnapshot,
    glider_radius: float,
    *,
    render_cfg: RenderCfg,
) -> None:
    center = snapshot.position
    screen = camera.world_to_screen(center)
    if screen is None:
        return
    radius = camera.projected_radius(center, glider_radius)
    pygame.draw.circle(surface, render_cfg.glider_color, screen, radius)
    pygame.draw.circle(surface, render_cfg.glider_outline_color, screen, radius, 2)
    nose = camera.world_to_screen(
        center + forward_direction(snapshot.yaw, snapshot.pitch) * glider_radius * 2.0
    )
    if nose is not None:
        pygame.draw.line(surface, render_cfg.glider_outline_color, screen, nose, 2)


def draw_scene(
    surface: pygame.Surface,
    camera: Camera,
    game: GliderGame,
    snapshot: SessionSnapshot,
    *,
    render_cfg: RenderCfg,
) -> None:
    """Draw the course back to front as seen from *camera*."""

    draw_sky(surface, render_cfg=render_cfg)

    drawables: list[tuple[float, Callable[[], None]]] = []
    for island in game.course.island_positions():
        drawables.append(
            (camera.depth(island), lambda c=island: draw_island(surface, camera, c, render_cfg=render_cfg))
        )
    for ring in game.rings:
        color = (
            render_cfg.ring_passed_color
            if ring.index in snapshot.rings_passed
            else render_cfg.ring_color
        )
        drawables.append(
            (
                camera.depth(ring.center),
                lambda r=ring, col=color: draw_ring(surface, camera, r, col, render_cfg=render_cfg),
            )
        )
    obstacle_radius = game.cfg.obstacle_radius
    for position in snapshot.obstacle_positions:
        drawables.append(
            (
                camera.depth(position),
                lambda p=position: draw_sphere(
                    surface, camera, p, obstacle_radius, render_cfg.obstacle_color
                ),
            )
        )
    drawables.append(
        (
            camera.depth(snapshot.position),
            lambda: draw_glider(
                surface, camera, snapshot, game.cfg.glider_radius, render_cfg=render_cfg
            ),
        )
    )

    for _, draw in sorted(drawables, key=lambda item: item[0], reverse=True):
        draw()

    if game.wind_zones:
        overlay = pygame.Surface(surface.get_size(), pygame.SRCALPHA)
        for zone in game.wind_zones:
            draw_wind_zone(overlay, camera, zone, render_cfg=render_cfg)
        surface.blit(overlay, (0, 0))
