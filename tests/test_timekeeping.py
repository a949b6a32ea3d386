from __future__ import annotations

import pytest

from sky_glider.core.timekeeping import FixedStepAccumulator, FrameTimer


def test_consume_keeps_the_remainder():
    acc = FixedStepAccumulator(step=0.1, max_substeps=5)
    acc.accrue(0.35)
    assert acc.consume() == 3
    assert acc.value == pytest.approx(0.05)
    assert acc.consume() == 0


def test_overflow_is_dropped():
    acc = FixedStepAccumulator(step=0.1, max_substeps=4)
    acc.accrue(10.0)
    assert acc.consume() == 4
    assert acc.value == 0.0


def test_non_positive_delta_is_ignored():
    acc = FixedStepAccumulator(step=0.1, max_substeps=4)
    acc.accrue(-1.0)
    acc.accrue(0.0)
    assert acc.value == 0.0


def test_invalid_step_is_rejected():
    with pytest.raises(ValueError):
        FixedStepAccumulator(step=0.0, max_substeps=4)
    with pytest.raises(ValueError):
        FixedStepAccumulator(step=0.1, max_substeps=0)


def test_frame_timer_moves_forward():
    timer = FrameTimer()
    first = timer.tick()
    second = timer.tick()
    assert first >= 0.0 and second >= 0.0
    assert timer.elapsed == pytest.approx(first + second)
