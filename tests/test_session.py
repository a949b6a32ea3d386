from __future__ import annotations

import json
from dataclasses import replace

import numpy as np
import pytest

from sky_glider.core.config import FLIGHT_CFG
from sky_glider.core.logging_utils import RunLogger
from sky_glider.core.model import NO_INPUT, InputSignal, Obstacle
from sky_glider.core.session import GliderGame
from sky_glider.data.courses import COURSES, Course

START = (0.0, 18.0, -15.0)


def hazard_course():
    # A stationary hazard parked on the start position.
    return Course(
        key="hazard",
        name="Hazard",
        description="",
        obstacles=(Obstacle(center=START, period=1.0, radius=0.0),),
    )


def scripted_inputs():
    pattern = [
        InputSignal(thrust_on=True),
        InputSignal(pitch_input=1, thrust_on=True),
        InputSignal(yaw_input=-1),
        InputSignal(pitch_input=-1, yaw_input=1, thrust_on=True),
    ]
    return [pattern[i % len(pattern)] for i in range(120)]


def run_script(game):
    trajectory = []
    elapsed = 0.0
    for idx, signal in enumerate(scripted_inputs()):
        dt = 0.016 if idx % 3 else 0.033
        elapsed += dt
        trajectory.append(game.step(signal, elapsed, dt))
    return trajectory


def test_default_course_accessors():
    game = GliderGame()
    assert len(game.rings) == 12
    assert len(game.wind_zones) == 2
    assert len(game.obstacles) == 3
    np.testing.assert_allclose(game.state.glider.position, START)


def test_runs_are_deterministic():
    first = run_script(GliderGame())
    second_game = GliderGame()
    second_game.step(NO_INPUT, 0.0, 0.5)
    second_game.reset(0.0)
    second = run_script(second_game)
    for a, b in zip(first, second):
        assert np.array_equal(a.position, b.position)
        assert np.array_equal(a.velocity, b.velocity)
        assert a.pitch == b.pitch and a.yaw == b.yaw
        assert a.rings_passed == b.rings_passed
        assert (a.crashed, a.finished) == (b.crashed, b.finished)


def test_crash_freezes_the_run():
    game = GliderGame(hazard_course())
    snapshot = game.step(NO_INPUT, 0.0, 0.016)
    assert snapshot.crashed
    assert snapshot.crash_cause == "obstacle:0"

    frozen = snapshot
    for i in range(1, 20):
        snapshot = game.step(InputSignal(pitch_input=1, thrust_on=True), i * 0.1, 0.1)
        assert snapshot.crashed
        assert not snapshot.finished
        assert np.array_equal(snapshot.position, frozen.position)
        assert np.array_equal(snapshot.velocity, frozen.velocity)
        assert snapshot.pitch == frozen.pitch
        assert snapshot.rings_passed == frozen.rings_passed


def test_finish_at_threshold_freezes_the_run():
    cfg = replace(FLIGHT_CFG, finish_z=-15.0)
    game = GliderGame(COURSES["training"], cfg)
    snapshot = game.step(NO_INPUT, 0.0, 0.016)
    assert snapshot.finished
    later = game.step(InputSignal(thrust_on=True), 1.0, 1.0)
    assert np.array_equal(later.position, snapshot.position)


def test_crash_and_finish_together_freeze_the_run():
    cfg = replace(FLIGHT_CFG, finish_z=-15.0, floor_y=100.0)
    game = GliderGame(COURSES["training"], cfg)
    snapshot = game.step(NO_INPUT, 0.0, 0.016)
    assert snapshot.crashed and snapshot.finished
    assert snapshot.crash_cause == "floor"

    for i in range(1, 10):
        later = game.step(InputSignal(pitch_input=-1, yaw_input=1, thrust_on=True), i * 0.1, 0.1)
        assert later.crashed and later.finished
        assert later.crash_cause == "floor"
        assert np.array_equal(later.position, snapshot.position)
        assert np.array_equal(later.velocity, snapshot.velocity)
        assert later.pitch == snapshot.pitch and later.yaw == snapshot.yaw
        assert later.rings_passed == snapshot.rings_passed


def test_reset_restores_defaults():
    game = GliderGame(hazard_course())
    game.step(NO_INPUT, 2.0, 0.016)
    assert game.state.crashed

    game.reset(5.0)
    state = game.state
    assert not state.crashed and not state.finished
    assert state.crash_cause is None
    assert state.rings_passed == set()
    assert state.next_ring_index == 0
    assert state.start_time == 5.0
    np.testing.assert_allclose(state.glider.position, START)
    assert not state.glider.velocity.any()
    assert state.glider.pitch == 0.0 and state.glider.yaw == 0.0


def test_passing_a_ring_through_the_session():
    cfg = replace(FLIGHT_CFG, start_position=np.array([0.0, 15.0, 0.0]))
    game = GliderGame(COURSES["training"], cfg)
    snapshot = game.step(NO_INPUT, 0.0, 0.016)
    assert snapshot.rings_passed == frozenset({0})
    assert snapshot.next_ring_index == 1
    again = game.step(NO_INPUT, 0.016, 0.016)
    assert again.rings_passed == frozenset({0})


def test_passed_set_never_shrinks_during_a_run():
    game = GliderGame()
    previous = 0
    for snapshot in run_script(game):
        assert len(snapshot.rings_passed) >= previous
        previous = len(snapshot.rings_passed)


def test_run_time_tracks_start_and_stops_at_crash():
    game = GliderGame(COURSES["training"])
    game.step(NO_INPUT, 1.0, 0.016)
    snapshot = game.step(NO_INPUT, 3.0, 0.016)
    assert snapshot.run_time == pytest.approx(2.0)

    crash_game = GliderGame(hazard_course())
    crash_game.step(NO_INPUT, 1.0, 0.016)
    assert crash_game.step(NO_INPUT, 9.0, 0.016).run_time == pytest.approx(0.0)


def test_fixed_step_matches_equal_variable_steps():
    fixed = GliderGame(COURSES["training"], fixed_step=0.1)
    variable = GliderGame(COURSES["training"])
    signal = InputSignal(thrust_on=True, yaw_input=1)

    snapshot = fixed.step(signal, 0.25, 0.25)
    variable.step(signal, 0.1, 0.1)
    expected = variable.step(signal, 0.2, 0.1)
    np.testing.assert_allclose(snapshot.position, expected.position)
    np.testing.assert_allclose(snapshot.velocity, expected.velocity)
    assert snapshot.yaw == pytest.approx(expected.yaw)


def test_fixed_step_waits_for_a_whole_step():
    game = GliderGame(COURSES["training"], fixed_step=0.1)
    snapshot = game.step(InputSignal(thrust_on=True), 0.05, 0.05)
    np.testing.assert_allclose(snapshot.position, START)


def test_fixed_step_caps_substeps():
    cfg = replace(FLIGHT_CFG, max_substeps=3)
    fixed = GliderGame(COURSES["training"], cfg, fixed_step=0.1)
    variable = GliderGame(COURSES["training"], cfg)
    snapshot = fixed.step(NO_INPUT, 5.0, 5.0)
    for i in range(3):
        expected = variable.step(NO_INPUT, 0.1 * (i + 1), 0.1)
    np.testing.assert_allclose(snapshot.position, expected.position)


@pytest.mark.parametrize("delta", [-0.1, float("nan"), float("inf")])
def test_bad_delta_is_rejected(delta):
    game = GliderGame()
    with pytest.raises(ValueError):
        game.step(NO_INPUT, 0.0, delta)


def test_missing_delta_uses_fallback():
    game = GliderGame(COURSES["training"])
    other = GliderGame(COURSES["training"])
    a = game.step(NO_INPUT, 0.0)
    b = other.step(NO_INPUT, 0.0, FLIGHT_CFG.fallback_dt)
    assert np.array_equal(a.position, b.position)


def test_logger_records_meta_and_events(tmp_path):
    logger = RunLogger(tmp_path, run_id="crash")
    game = GliderGame(hazard_course(), logger=logger)
    game.step(NO_INPUT, 0.0, 0.016)
    game.reset(1.0)
    game.close()

    meta = json.loads((tmp_path / "crash" / "meta.json").read_text(encoding="utf-8"))
    assert meta["course"] == "hazard"
    assert len(meta["rings"]) == 12

    events = (tmp_path / "crash" / "events.csv").read_text().splitlines()
    kinds = [line.split(",")[1] for line in events[1:]]
    assert kinds == ["crash", "reset"]
    assert events[1].endswith("obstacle:0")

    rows = (tmp_path / "crash" / "timeseries.csv").read_text().splitlines()
    assert len(rows) == 2


def test_game_without_logger_steps_and_resets():
    game = GliderGame(hazard_course())
    assert game.step(NO_INPUT, 0.0, 0.016).crashed
    game.reset(1.0)
    snapshot = game.step(NO_INPUT, 1.5, 0.016)
    assert snapshot.crashed
    assert snapshot.run_time == pytest.approx(0.5)
    game.close()
