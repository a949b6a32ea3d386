from __future__ import annotations

from dataclasses import dataclass
from typing import Callable, Sequence

import pygame

from sky_glider.core.config import RenderCfg
from sky_glider.core.model import SessionSnapshot

from .assets import Color, get_text_surface

Line = tuple[str, tuple[int, int, int]]


@dataclass(frozen=True)
class ButtonVisualStyle:
    base_color: Color
    hover_color: Color
    text_color: tuple[int, int, int]
    radius: int
    border_color: Color | None = None
    border_width: int = 0

    @classmethod
    def from_cfg(cls, render_cfg: RenderCfg) -> "ButtonVisualStyle":
        return cls(
            base_color=render_cfg.button_color,
            hover_color=render_cfg.button_hover_color,
            text_color=render_cfg.button_text_color,
            radius=render_cfg.button_radius,
            border_color=render_cfg.button_border_color,
            border_width=1,
        )


class Button:
    """Rectangular on-screen button with hover feedback."""

    def __init__(
        self,
        rect: tuple[int, int, int, int],
        text: str,
        callback: Callable[[], None],
        *,
        style: ButtonVisualStyle,
    ) -> None:
        self.rect = pygame.Rect(rect)
        self.text = text
        self._callback = callback
        self._style = style

    def draw(
        self,
        surface: pygame.Surface,
        font: pygame.font.Font,
        mouse_pos: tuple[int, int] | None = None,
    ) -> None:
        if mouse_pos is None:
            mouse_pos = pygame.mouse.get_pos()
        style = self._style
        color = style.hover_color if self.rect.collidepoint(mouse_pos) else style.base_color
        button_surface = pygame.Surface(self.rect.size, pygame.SRCALPHA)
        pygame.draw.rect(button_surface, color, button_surface.get_rect(), border_radius=style.radius)
        if style.border_color is not None and style.border_width > 0:
            pygame.draw.rect(
                button_surface,
                style.border_color,
                button_surface.get_rect(),
                style.border_width,
                border_radius=style.radius,
            )
        surface.blit(button_surface, self.rect.topleft)
        text_surf = get_text_surface(font, self.text, style.text_color)
        surface.blit(text_surf, text_surf.get_rect(center=self.rect.center))

    def handle_event(self, event: pygame.event.Event) -> bool:
        if event.type == pygame.MOUSEBUTTONDOWN and event.button == 1:
            if self.rect.collidepoint(event.pos):
                self._callback()
                return True
        return False


def status_text(snapshot: SessionSnapshot, ring_count: int) -> str:
    text = (
        f"Rings: {len(snapshot.rings_passed)} / {ring_count}"
        f"  |  Crashed: {'Yes' if snapshot.crashed else 'No'}"
    )
    if snapshot.finished:
        text += "  |  Finished!"
    return text


def hud_lines(
    snapshot: SessionSnapshot,
    ring_count: int,
    course_name: str,
    *,
    render_cfg: RenderCfg,
) -> list[Line]:
    if snapshot.crashed:
        status_color = render_cfg.hud_warning_color
    elif snapshot.finished:
        status_color = render_cfg.hud_success_color
    else:
        status_color = render_cfg.hud_text_color
    altitude = float(snapshot.position[1])
    return [
        (course_name, render_cfg.hud_text_color),
        (status_text(snapshot, ring_count), status_color),
        (f"Time {snapshot.run_time:6.1f} s   Speed {snapshot.speed:5.1f}", render_cfg.hud_text_color),
        (f"Altitude {altitude:5.1f}   Next ring {snapshot.next_ring_index + 1}", render_cfg.hud_text_color),
    ]


def banner_lines(snapshot: SessionSnapshot, ring_count: int, *, render_cfg: RenderCfg) -> list[Line]:
    if snapshot.crashed:
        cause = snapshot.crash_cause or "unknown"
        reason = "Hit the ground" if cause == "floor" else "Hit an obstacle"
        return [
            ("Crashed", render_cfg.hud_warning_color),
            (reason, render_cfg.hud_text_color),
            ("Press R to try again", render_cfg.hud_text_color),
        ]
    if snapshot.finished:
        return [
            ("Finished!", render_cfg.hud_success_color),
            (
                f"{len(snapshot.rings_passed)} of {ring_count} rings in {snapshot.run_time:.1f} s",
                render_cfg.hud_text_color,
            ),
            ("Press R to fly again", render_cfg.hud_text_color),
        ]
    return []


def build_text_panel(
    font: pygame.font.Font,
    lines: Sequence[Line],
    *,
    background_color: Color,
    padding: tuple[int, int] = (14, 12),
) -> pygame.Surface:
    if not lines:
        raise ValueError("lines must not be empty")
    padding_x, padding_y = padding
    line_height = font.get_linesize()
    width = max(font.size(text)[0] for text, _ in lines) + padding_x * 2
    height = line_height * len(lines) + padding_y * 2
    panel = pygame.Surface((width, height), pygame.SRCALPHA)
    pygame.draw.rect(panel, background_color, panel.get_rect(), border_radius=12)
    for idx, (text, color) in enumerate(lines):
        if not text:
            continue
        panel.blit(get_text_surface(font, text, color), (padding_x, padding_y + idx * line_height))
    return panel
