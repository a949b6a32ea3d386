from __future__ import annotations

from collections import defaultdict

import numpy as np
import pygame
import pytest

from sky_glider.core.config import RENDER_CFG
from sky_glider.core.model import SessionSnapshot
from sky_glider.main import input_from_keys
from sky_glider.render import Camera, banner_lines, status_text


def make_camera():
    camera = Camera(
        (800, 600),
        fov=RENDER_CFG.camera_fov,
        near=RENDER_CFG.camera_near,
        far=RENDER_CFG.camera_far,
        distance=14.0,
        height=6.0,
        look_ahead=5.0,
    )
    camera.follow(np.zeros(3), 0.0, 0.0, snap=True)
    return camera


def make_snapshot(**overrides):
    values = dict(
        position=np.array([0.0, 18.0, -15.0]),
        velocity=np.zeros(3),
        pitch=0.0,
        yaw=0.0,
        obstacle_positions=(),
        rings_passed=frozenset({0, 2}),
        next_ring_index=3,
        crashed=False,
        finished=False,
        crash_cause=None,
        run_time=12.5,
    )
    values.update(overrides)
    return SessionSnapshot(**values)


def test_chase_camera_sits_behind_and_above():
    camera = make_camera()
    np.testing.assert_allclose(camera.eye, [0.0, 6.0, -14.0], atol=1e-12)
    np.testing.assert_allclose(camera.target, [0.0, 0.0, 5.0], atol=1e-12)


def test_look_target_projects_to_screen_center():
    camera = make_camera()
    assert camera.world_to_screen(camera.target) == (400, 300)


def test_points_behind_the_camera_are_culled():
    camera = make_camera()
    assert camera.world_to_screen(np.array([0.0, 6.0, -30.0])) is None


def test_nearer_objects_look_bigger():
    camera = make_camera()
    near = camera.projected_radius(np.array([0.0, 0.0, 0.0]), 1.5)
    far = camera.projected_radius(np.array([0.0, 0.0, 60.0]), 1.5)
    assert near > far >= 1


def test_status_text():
    assert status_text(make_snapshot(), 12) == "Rings: 2 / 12  |  Crashed: No"
    finished = make_snapshot(finished=True)
    assert status_text(finished, 12).endswith("|  Finished!")
    assert status_text(make_snapshot(crashed=True), 12) == "Rings: 2 / 12  |  Crashed: Yes"


def test_banner_lines():
    assert banner_lines(make_snapshot(), 12, render_cfg=RENDER_CFG) == []
    crashed = banner_lines(make_snapshot(crashed=True, crash_cause="floor"), 12, render_cfg=RENDER_CFG)
    assert crashed[1][0] == "Hit the ground"


@pytest.mark.parametrize(
    "held, expected",
    [
        ((), (0, 0, False)),
        ((pygame.K_w, pygame.K_a), (1, 1, False)),
        ((pygame.K_s, pygame.K_d, pygame.K_SPACE), (-1, -1, True)),
        ((pygame.K_w, pygame.K_s), (0, 0, False)),
    ],
)
def test_input_from_keys(held, expected):
    pressed = defaultdict(bool, {key: True for key in held})
    signal = input_from_keys(pressed)
    assert (signal.pitch_input, signal.yaw_input, signal.thrust_on) == expected
