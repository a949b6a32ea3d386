"""Wind field made of axis-aligned zones."""
from __future__ import annotations

from typing import Iterable

import numpy as np

from .model import WindZone
from .vector import vec3


def active_zones(position: np.ndarray, zones: Iterable[WindZone]) -> list[WindZone]:
    return [zone for zone in zones if zone.contains(position)]


def sample(position: np.ndarray, zones: Iterable[WindZone]) -> np.ndarray:
    """Total wind acceleration at *position*.

    Overlapping zones add up.
    """

    total = vec3()
    for zone in active_zones(position, zones):
        total += zone.wind
    return total


__all__ = ["active_zones", "sample"]
