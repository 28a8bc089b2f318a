from __future__ import annotations

import json
import math

import pytest

from vistas.driver import FixedStepClock, SceneDriver
from vistas.scenes import build_scene, get_preset
from vistas.surface import hex_to_rgb
from vistas.timeline import build_visual_frame, run_timeline, snapshot_row


def _loader(url: str) -> dict[str, str]:
    return {"url": url}


def test_run_timeline_has_one_row_per_frame() -> None:
    df = run_timeline(get_preset("crystal_cave"), seconds=1.0, fps=30, seed=2)

    assert len(df) == 31
    assert df["frame"].iloc[-1] == 30
    assert df["elapsed_s"].iloc[-1] == pytest.approx(1.0)
    assert df["delta_s"].iloc[0] == 0.0
    assert df.attrs["scene"] == "crystal_cave"
    assert df.attrs["fps"] == 30
    for column in (
        "particle_mean_y",
        "surface_max",
        "light_key_intensity",
        "light_ambient_x",
        "cum_boundary_resets",
    ):
        assert column in df.columns
    assert (df["surface_max"] <= 1.0 + 1e-9).all()
    assert (df["light_key_intensity"] == 2.0).all()


def test_timeline_tracks_orbit_and_pulse() -> None:
    df = run_timeline(get_preset("nebula"), seconds=2.0, fps=10, seed=0, loader=_loader)

    radius = (df["light_star_x"] ** 2 + df["light_star_z"] ** 2) ** 0.5
    assert radius.to_numpy() == pytest.approx(15.0)
    assert df["light_star_intensity"].between(1.0, 2.0).all()
    assert (df["prop_planet_present"] == 1.0).all()
    assert df["prop_planet_ry"].iloc[-1] == pytest.approx(0.2)


def test_missing_prop_is_reported_absent() -> None:
    df = run_timeline(get_preset("desert"), seconds=0.5, fps=10, seed=0)

    assert (df["prop_cactus_present"] == 0.0).all()
    assert df["prop_cactus_rz"].isna().all()


def test_run_timeline_validates_arguments() -> None:
    with pytest.raises(ValueError):
        run_timeline(get_preset("crystal_cave"), seconds=0.0)
    with pytest.raises(ValueError):
        run_timeline(get_preset("crystal_cave"), seconds=1.0, fps=0)


def test_visual_frame_is_json_serialisable() -> None:
    context = build_scene(get_preset("nebula"), seed=4, loader=_loader)
    driver = SceneDriver(context)
    clock = FixedStepClock(step=0.1)
    driver.step(clock.tick())
    snapshot = driver.step(clock.tick())

    payload = build_visual_frame(snapshot, max_particles=100)
    decoded = json.loads(json.dumps(payload))

    assert decoded["scene"] == "nebula"
    assert decoded["frame"] == 1
    assert len(decoded["particles"]) == 100
    assert decoded["surface_heights"] == []
    assert [light["name"] for light in decoded["lights"]] == ["ambient", "star"]
    assert "planet" in decoded["props"]


def test_visual_frame_decimates_surface() -> None:
    context = build_scene(get_preset("snowfield"), seed=0)
    snapshot = SceneDriver(context).step(FixedStepClock().tick())

    payload = build_visual_frame(snapshot, surface_stride=4)

    # 121 x 121 vertices keep rows and columns 0, 4, ..., 120.
    assert payload["surface_shape"] == [31, 31]
    assert len(payload["surface_heights"]) == 31 * 31
    grid = context.surface.height_grid()
    assert payload["surface_heights"][1] == grid[0, 4]
    assert payload["surface_heights"][31] == grid[4, 0]
    with pytest.raises(ValueError):
        build_visual_frame(snapshot, surface_stride=0)


def test_snapshot_row_without_particles_uses_nan() -> None:
    context = build_scene(get_preset("nebula"), seed=0)
    context.particles = None
    snapshot = SceneDriver(context).step(FixedStepClock().tick())

    row = snapshot_row(snapshot, ("planet",))

    assert math.isnan(row["particle_mean_y"])
    assert math.isnan(row["surface_min"])
    assert row["prop_planet_present"] == 0.0


def test_visual_frame_reports_backdrop_and_camera() -> None:
    cave = build_scene(get_preset("crystal_cave"), seed=0)
    payload = build_visual_frame(SceneDriver(cave).step(FixedStepClock().tick()))

    assert payload["sky"] == {
        "inner": list(hex_to_rgb(0x000080)),
        "outer": list(hex_to_rgb(0x1E90FF)),
    }
    assert payload["camera_position"] == [0.0, 5.0, 15.0]
    assert payload["surface_shape"] == [301, 301]

    nebula = build_scene(get_preset("nebula"), seed=0)
    payload = build_visual_frame(SceneDriver(nebula).step(FixedStepClock().tick()))

    assert payload["sky"] is None
    assert payload["background"] == list(hex_to_rgb(0x05010F))
    assert payload["surface_shape"] == [0, 0]
