from __future__ import annotations

from collections import OrderedDict
from typing import Iterable

import pygame


Color = tuple[int, int, int] | tuple[int, int, int, int]

_TEXT_CACHE_MAX_SIZE = 128
_TEXT_CACHE: OrderedDict[tuple[int, str, Color], pygame.Surface] = OrderedDict()

DEFAULT_FONT_NAMES = ("Inter", "Segoe UI", "DejaVu Sans", "Arial")


def get_text_surface(font: pygame.font.Font, text: str, color: Color) -> pygame.Surface:
    """Render *text*, reusing the surface while HUD strings stay the same."""

    key = (id(font), text, color)
    cached = _TEXT_CACHE.get(key)
    if cached is not None:
        _TEXT_CACHE.move_to_end(key)
        return cached
    rendered = font.render(text, True, color)
    _TEXT_CACHE[key] = rendered
    if len(_TEXT_CACHE) > _TEXT_CACHE_MAX_SIZE:
        _TEXT_CACHE.popitem(last=False)
    return rendered


def load_font(
    size: int, preferred_names: Iterable[str] = DEFAULT_FONT_NAMES, *, bold: bool = False
) -> pygame.font.Font:
    names = list(preferred_names)
    for name in names:
        match = pygame.font.match_font(name, bold=bold)
        if match:
            return pygame.font.Font(match, size)
    return pygame.font.SysFont(names[0] if names else None, size, bold=bold)
