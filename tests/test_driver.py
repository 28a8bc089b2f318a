from __future__ import annotations

import logging

import numpy as np
import pytest

from vistas.driver import (
    FixedStepClock,
    FrameSnapshot,
    FrameTime,
    PropSlot,
    SceneContext,
    SceneDriver,
)
from vistas.geometry import Point3
from vistas.lighting import LightRig, OrbitParams, PulseParams, light_state
from vistas.particles import AxisBounds, Boundary, BoundaryPolicy, ParticleField
from vistas.props import AssetSlot, SpinPolicy
from vistas.surface import SurfaceGrid, hex_to_rgb, surface_height


def _context() -> SceneContext:
    context = SceneContext(
        name="test_scene",
        particles=ParticleField(
            positions=[[0.0, 9.99, 0.0], [1.0, 0.0, 1.0]],
            velocities=[[0.0, 0.02, 0.0], [0.0, 0.0, 0.0]],
        ),
        boundary=Boundary(BoundaryPolicy.WRAP, (AxisBounds("y", -10.0, 10.0),)),
        surface=SurfaceGrid(width=4.0, depth=4.0, segments_x=4, segments_z=4),
        lights=(
            LightRig(name="key", orbit=OrbitParams(radius=15.0, speed=1.0, base_y=10.0)),
            LightRig(name="glow", pulse=PulseParams(base=2.0, amplitude=0.5, frequency=2.0)),
        ),
    )
    context.add_prop(
        PropSlot(
            name="planet",
            asset=AssetSlot("models/planet.glb"),
            policies=(SpinPolicy(rates=(0.0, 0.5, 0.0)),),
        )
    )
    return context


def test_step_updates_every_component() -> None:
    context = _context()
    driver = SceneDriver(context)

    snapshot = driver.step(FrameTime(elapsed=1.5, delta=0.016, frame=1))

    assert snapshot.scene == "test_scene"
    assert snapshot.boundary_resets == 1
    assert snapshot.particle_positions[0, 1] == -10.0
    expected = surface_height(context.surface.x, context.surface.z, 1.5, context.surface.params)
    np.testing.assert_allclose(snapshot.surface_heights, expected)
    assert snapshot.lights == tuple(light_state(rig, 1.5) for rig in context.lights)
    assert snapshot.aspect == pytest.approx(context.viewport.aspect)


def test_absent_prop_is_skipped_until_published() -> None:
    context = _context()
    driver = SceneDriver(context)
    clock = FixedStepClock(step=0.5)

    first = driver.step(clock.tick())
    assert "planet" not in first.props
    assert context.props["planet"].frames_animated == 0

    context.props["planet"].asset.publish({"mesh": "planet"})
    driver.step(clock.tick())
    third = driver.step(clock.tick())

    assert context.props["planet"].frames_animated == 2
    assert third.props["planet"].rotation[1] == pytest.approx(0.5)


def test_renderer_receives_each_snapshot() -> None:
    frames: list[FrameSnapshot] = []
    driver = SceneDriver(_context(), renderer=frames.append)

    driver.run(FixedStepClock(), max_frames=5)

    assert [snapshot.time.frame for snapshot in frames] == [0, 1, 2, 3, 4]
    assert driver.frames_rendered == 5


def test_run_paces_frames_with_sleep() -> None:
    naps: list[float] = []
    driver = SceneDriver(_context())

    frames = driver.run(FixedStepClock(), max_frames=3, frame_interval=10.0, sleep=naps.append)

    assert frames == 3
    assert len(naps) == 3
    assert all(0 < nap <= 10.0 for nap in naps)


def test_run_stops_cleanly_on_interrupt(caplog: pytest.LogCaptureFixture) -> None:
    calls = {"count": 0}

    def renderer(snapshot: FrameSnapshot) -> None:
        calls["count"] += 1
        if calls["count"] == 3:
            raise KeyboardInterrupt

    driver = SceneDriver(_context(), renderer=renderer)
    with caplog.at_level(logging.INFO, logger="vistas"):
        frames = driver.run(FixedStepClock())

    assert frames == 2
    assert "interrupted" in caplog.text


def test_resize_changes_reported_aspect() -> None:
    driver = SceneDriver(_context())
    driver.resize(500, 250)

    snapshot = driver.step(FrameTime(elapsed=0.0, delta=0.0, frame=0))

    assert snapshot.aspect == 2.0


def test_time_going_backwards_is_rejected() -> None:
    driver = SceneDriver(_context())
    driver.step(FrameTime(elapsed=2.0, delta=0.0, frame=0))
    with pytest.raises(ValueError):
        driver.step(FrameTime(elapsed=1.0, delta=0.016, frame=1))
    with pytest.raises(ValueError):
        driver.step(FrameTime(elapsed=3.0, delta=-0.1, frame=2))


def test_empty_scene_still_steps() -> None:
    snapshot = SceneDriver(SceneContext(name="empty")).step(FrameTime(0.0, 0.0, 0))
    assert snapshot.particle_positions is None
    assert snapshot.surface_heights is None
    assert snapshot.lights == ()


def test_duplicate_prop_names_are_rejected() -> None:
    context = _context()
    with pytest.raises(ValueError):
        context.add_prop(PropSlot(name="planet", asset=AssetSlot("other.glb"), policies=()))


def test_non_finite_frame_time_is_rejected() -> None:
    driver = SceneDriver(_context())
    with pytest.raises(ValueError):
        driver.step(FrameTime(elapsed=float("nan"), delta=0.0, frame=0))
    with pytest.raises(ValueError):
        driver.step(FrameTime(elapsed=1.0, delta=float("inf"), frame=0))


def test_snapshot_carries_backdrop_and_camera() -> None:
    context = _context()
    context.background = 0x000000
    context.sky_inner = 0x000080
    context.sky_outer = 0x1E90FF
    context.camera_position = Point3(0.0, 5.0, 15.0)

    snapshot = SceneDriver(context).step(FrameTime(0.0, 0.0, 0))

    assert snapshot.background == (0.0, 0.0, 0.0)
    assert snapshot.sky == (hex_to_rgb(0x000080), hex_to_rgb(0x1E90FF))
    assert snapshot.camera_position == Point3(0.0, 5.0, 15.0)
    assert snapshot.surface_shape == (5, 5)


def test_snapshot_without_sky() -> None:
    snapshot = SceneDriver(_context()).step(FrameTime(0.0, 0.0, 0))
    assert snapshot.sky is None
