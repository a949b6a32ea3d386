from __future__ import annotations

import math

import numpy as np
import pytest

from sky_glider.core.course import generate_rings


def test_same_parameters_give_same_course():
    first = generate_rings(12, 14, 0.25)
    second = generate_rings(12, 14, 0.25)
    assert len(first) == len(second) == 12
    for a, b in zip(first, second):
        assert a.index == b.index
        assert np.array_equal(a.center, b.center)
        assert np.array_equal(a.normal, b.normal)
        assert a.radius == b.radius


def test_single_ring_sits_at_origin_of_course():
    rings = generate_rings(1, 30.0, 0.7)
    assert len(rings) == 1
    np.testing.assert_allclose(rings[0].center, [0.0, 15.0, 0.0], atol=1e-12)


def test_ring_positions_follow_course_path():
    rings = generate_rings(12, 14, 0.25)
    last = rings[-1]
    t = 12 * 14
    assert last.center[2] == pytest.approx(t)
    assert last.center[0] == pytest.approx(math.sin(t * 0.25) * 25)
    assert last.center[1] == pytest.approx(15 + math.sin(t * 0.2) * 5)
    assert [ring.index for ring in rings] == list(range(12))


def test_rings_share_normal_and_radius():
    rings = generate_rings(5, 10, 0.3, radius=3.5)
    for ring in rings:
        np.testing.assert_allclose(ring.normal, [0.0, 0.0, 1.0])
        assert ring.radius == 3.5


def test_empty_and_negative_counts():
    assert generate_rings(0) == ()
    with pytest.raises(ValueError):
        generate_rings(-1)
