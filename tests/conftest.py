from __future__ import annotations

import numpy as np
import pytest

from sky_glider.core.config import FLIGHT_CFG
from sky_glider.core.model import GliderState, SessionState


def make_session(position=(0.0, 18.0, -15.0), velocity=(0.0, 0.0, 0.0), finish_z=FLIGHT_CFG.finish_z):
    glider = GliderState(
        position=np.array(position, dtype=float),
        velocity=np.array(velocity, dtype=float),
        radius=FLIGHT_CFG.glider_radius,
    )
    return SessionState(glider=glider, finish_z=finish_z)


@pytest.fixture
def session():
    return make_session()
