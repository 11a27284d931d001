"""Tests for TriangulationEngine tick/advance behaviour."""

from __future__ import annotations

import math

import pytest

from core.measurement.distance import DistanceStatus
from core.measurement.engine import TriangulationEngine
from core.measurement.session import MeasuringState
from core.orientation.sampler import OrientationSampler
from utils.config_sections import MeasurementConfig


@pytest.fixture()
def sampler() -> OrientationSampler:
    return OrientationSampler()


@pytest.fixture()
def engine(sampler: OrientationSampler) -> TriangulationEngine:
    return TriangulationEngine(sampler, known_distance=10.0, config=MeasurementConfig())


def point(sampler: OrientationSampler, heading, tilt=-30.0) -> None:
    sampler.on_orientation(heading, tilt)


def measure(engine: TriangulationEngine, sampler: OrientationSampler, far: float, close: float) -> None:
    point(sampler, far)
    engine.tick()
    engine.advance()
    point(sampler, close)
    engine.tick()
    engine.advance()


def test_initial_view(engine: TriangulationEngine) -> None:
    view = engine.tick()

    assert view.state is MeasuringState.STARTED
    assert view.button_label == "Mark"
    assert view.live_heading is None
    assert view.distance_text is None
    assert not view.requires_rotation


def test_full_measurement(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)
    point(sampler, 80.0)

    view = engine.tick()

    assert view.state is MeasuringState.CLOSE_ANCHOR_MARKED
    assert view.far_anchor_heading == 20.0
    assert view.close_anchor_heading == 50.0
    assert view.distance_text == "5.8 m"
    assert view.prompt == "5.8 m"
    assert view.button_label == "Measure Again"


def test_just_after_close_mark_shows_invalid(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)

    view = engine.view()

    assert view.shows_invalid_distance
    assert view.prompt == "Invalid distance"


def test_live_heading_on_far_anchor_is_invalid_not_fault(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)
    point(sampler, 20.0)

    view = engine.tick()

    assert view.distance.status is not DistanceStatus.VALID
    assert view.shows_invalid_distance


def test_distance_updates_continuously(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)

    point(sampler, 80.0)
    first = engine.tick().distance.value
    point(sampler, 95.0)
    second = engine.tick().distance.value

    expected = 10.0 * math.sin(math.radians(45.0)) / math.sin(math.radians(75.0))
    assert second == pytest.approx(expected)
    assert first != pytest.approx(second)


def test_portrait_tick_keeps_last_distance(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)
    point(sampler, 80.0)
    before = engine.tick()

    sampler.on_screen_mode("portrait")
    point(sampler, 140.0)
    after = engine.tick()

    assert after.requires_rotation
    assert after.prompt == "Rotate your device to landscape"
    assert after.live_heading == 80.0
    assert after.distance == before.distance
    assert after.distance_text == "5.8 m"


def test_incomplete_sample_keeps_heading(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    point(sampler, 33.0)
    engine.tick()

    point(sampler, 99.0, tilt=None)
    view = engine.tick()

    assert view.live_heading == 33.0


def test_inverted_device_is_normalized(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    point(sampler, 200.0, tilt=15.0)

    assert engine.tick().live_heading == pytest.approx(20.0)


def test_advance_uses_latest_sample(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    point(sampler, 20.0)
    engine.tick()
    point(sampler, 30.0)

    engine.advance()

    assert engine.view().far_anchor_heading == 30.0


def test_mark_on_incomplete_sample_leaves_anchor_unset(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    point(sampler, 20.0)
    engine.tick()
    point(sampler, None)

    state = engine.advance()

    view = engine.view()
    assert state is MeasuringState.FAR_ANCHOR_MARKED
    assert view.far_anchor_heading is None
    assert view.live_heading == 20.0


def test_mark_ignored_while_portrait(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    point(sampler, 20.0)
    engine.tick()
    sampler.on_screen_mode("portrait")
    point(sampler, 140.0)

    state = engine.advance()

    view = engine.view()
    assert state is MeasuringState.STARTED
    assert view.far_anchor_heading is None
    assert view.requires_rotation

    sampler.on_screen_mode("landscape")
    point(sampler, 60.0)
    assert engine.advance() is MeasuringState.FAR_ANCHOR_MARKED
    assert engine.view().far_anchor_heading == 60.0


def test_measure_again_ignored_while_portrait(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)
    sampler.on_screen_mode("portrait")

    assert engine.advance() is MeasuringState.CLOSE_ANCHOR_MARKED
    assert engine.view().close_anchor_heading == 50.0


def test_three_actions_reset_regardless_of_ticks(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    for heading in (10.0, 40.0, 70.0):
        point(sampler, heading)
        engine.tick()
        engine.tick()
        engine.advance()

    view = engine.tick()
    assert view.state is MeasuringState.STARTED
    assert view.far_anchor_heading is None
    assert view.close_anchor_heading is None


def test_repeated_identical_ticks_are_stable(engine: TriangulationEngine, sampler: OrientationSampler) -> None:
    measure(engine, sampler, far=20.0, close=50.0)
    point(sampler, 80.0)

    views = [engine.tick() for _ in range(5)]

    assert all(view == views[0] for view in views)


def test_known_distance_from_config(sampler: OrientationSampler) -> None:
    engine = TriangulationEngine(sampler, config=MeasurementConfig(known_distance=4.0))

    assert engine.known_distance == 4.0


@pytest.mark.parametrize("bad", [float("nan"), float("inf"), "10"])
def test_bad_known_distance_rejected(sampler: OrientationSampler, bad) -> None:
    with pytest.raises(ValueError):
        TriangulationEngine(sampler, known_distance=bad, config=MeasurementConfig())


def test_closed_engine_refuses_actions(engine: TriangulationEngine) -> None:
    engine.close()
    engine.close()

    assert engine.closed
    with pytest.raises(RuntimeError):
        engine.advance()
    with pytest.raises(RuntimeError):
        engine.tick()
