"""Rendering helpers for the glider game."""

from .camera import Camera, chase_back_vector
from .assets import get_text_surface, load_font
from .draw import (
    draw_box_edges,
    draw_glider,
    draw_island,
    draw_ring,
    draw_scene,
    draw_sky,
    draw_sphere,
    draw_wind_zone,
)
from .ui import (
    Button,
    ButtonVisualStyle,
    banner_lines,
    build_text_panel,
    hud_lines,
    status_text,
)

__all__ = [
    "Button",
    "ButtonVisualStyle",
    "Camera",
    "banner_lines",
    "build_text_panel",
    "chase_back_vector",
    "draw_box_edges",
    "draw_glider",
    "draw_island",
    "draw_ring",
    "draw_scene",
    "draw_sky",
    "draw_sphere",
    "draw_wind_zone",
    "get_text_surface",
    "hud_lines",
    "load_font",
    "status_text",
]
