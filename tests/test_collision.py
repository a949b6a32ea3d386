from __future__ import annotations

import numpy as np
import pytest

from sky_glider.core.collision import (
    CAUSE_FLOOR,
    CRASH,
    FINISH,
    RING_PASS,
    check_ring_pass,
    detect,
    ring_offsets,
    sphere_sphere_collision,
)
from sky_glider.core.config import FLIGHT_CFG
from sky_glider.core.model import Ring

from conftest import make_session

RING = Ring(index=0, center=(0.0, 15.0, 0.0), normal=(0.0, 0.0, 1.0), radius=4.0)


def make_rings(count):
    return [
        Ring(index=i, center=(0.0, 15.0, 10.0 * i), normal=(0.0, 0.0, 1.0), radius=4.0)
        for i in range(count)
    ]


def test_glider_at_ring_center_passes():
    session = make_session(position=(0.0, 15.0, 0.0))
    assert ring_offsets(session.glider.position, RING) == (0.0, 0.0)
    events = detect(session, [RING], [], FLIGHT_CFG)
    assert session.rings_passed == {0}
    assert session.next_ring_index == 1
    assert [event.kind for event in events] == [RING_PASS]


@pytest.mark.parametrize(
    "position, expected",
    [
        ((5.9, 15.0, 0.0), True),
        ((6.1, 15.0, 0.0), False),
        ((0.0, 15.0, 1.9), True),
        ((0.0, 15.0, -2.0), False),
    ],
)
def test_ring_pass_margins(position, expected):
    assert check_ring_pass(np.array(position), RING, pass_margin=2.0) is expected


def test_ring_is_only_counted_once():
    session = make_session(position=(0.0, 15.0, 0.0))
    detect(session, [RING], [], FLIGHT_CFG)
    events = detect(session, [RING], [], FLIGHT_CFG)
    assert events == []
    assert session.rings_passed == {0}


def test_rings_can_be_passed_out_of_order():
    rings = make_rings(5)
    session = make_session(position=(0.0, 15.0, 30.0))
    detect(session, rings, [], FLIGHT_CFG)
    assert session.rings_passed == {3}
    assert session.next_ring_index == 4

    session.glider.position = np.array([0.0, 15.0, 10.0])
    detect(session, rings, [], FLIGHT_CFG)
    assert session.rings_passed == {1, 3}
    assert session.next_ring_index == 4


def test_obstacle_hit_crashes_on_first_overlap():
    session = make_session(position=(0.0, 15.0, 0.0))
    obstacles = [np.array([0.0, 15.0, 2.6]), np.array([0.0, 15.0, -1.0])]
    events = detect(session, [], obstacles, FLIGHT_CFG)
    assert session.crashed
    assert session.crash_cause == "obstacle:0"
    assert [event.kind for event in events] == [CRASH]


def test_obstacle_just_out_of_reach_is_safe():
    session = make_session(position=(0.0, 15.0, 0.0))
    detect(session, [], [np.array([0.0, 15.0, 2.75])], FLIGHT_CFG)
    assert not session.crashed


def test_sphere_sphere_collision_is_strict():
    a = np.zeros(3)
    assert sphere_sphere_collision(a, 1.0, np.array([1.9, 0.0, 0.0]), 1.0)
    assert not sphere_sphere_collision(a, 1.0, np.array([2.0, 0.0, 0.0]), 1.0)


def test_dropping_below_floor_crashes():
    session = make_session(position=(0.0, 4.9, 0.0))
    events = detect(session, [], [], FLIGHT_CFG)
    assert session.crashed
    assert session.crash_cause == CAUSE_FLOOR
    assert events[-1].cause == CAUSE_FLOOR


def test_altitude_exactly_at_floor_is_safe():
    session = make_session(position=(0.0, FLIGHT_CFG.floor_y, 0.0))
    events = detect(session, [], [], FLIGHT_CFG)
    assert not session.crashed
    assert session.crash_cause is None
    assert events == []


def test_crash_and_finish_on_the_same_tick():
    session = make_session(position=(0.0, 4.9, FLIGHT_CFG.finish_z))
    events = detect(session, [], [], FLIGHT_CFG)
    assert session.crashed
    assert session.finished
    assert session.crash_cause == CAUSE_FLOOR
    assert [event.kind for event in events] == [FINISH, CRASH]


def test_reaching_finish_line_exactly_finishes():
    session = make_session(position=(0.0, 18.0, FLIGHT_CFG.finish_z))
    events = detect(session, [], [], FLIGHT_CFG)
    assert session.finished
    assert not session.crashed
    assert [event.kind for event in events] == [FINISH]


def test_terminal_session_is_left_alone():
    session = make_session(position=(0.0, 15.0, 0.0))
    session.crashed = True
    assert detect(session, [RING], [], FLIGHT_CFG) == []
    assert session.rings_passed == set()


def test_ring_normal_is_validated():
    with pytest.raises(ValueError):
        Ring(index=0, center=(0.0, 0.0, 0.0), normal=(0.0, 0.0, 0.0), radius=4.0)
    ring = Ring(index=0, center=(0.0, 0.0, 0.0), normal=(0.0, 0.0, 3.0), radius=4.0)
    np.testing.assert_allclose(ring.normal, [0.0, 0.0, 1.0])
