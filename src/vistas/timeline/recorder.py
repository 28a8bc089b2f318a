from __future__ import annotations

import math

import numpy as np
import pandas as pd

from vistas.driver.clock import FixedStepClock
from vistas.driver.loop import FrameSnapshot, SceneDriver
from vistas.props.assets import AssetLoader
from vistas.scenes.builder import build_scene
from vistas.scenes.config import SceneConfig


def _particle_stats(positions: np.ndarray | None) -> dict[str, float]:
    if positions is None:
        nan = float("nan")
        return {"particle_mean_y": nan, "particle_min_y": nan, "particle_max_y": nan}
    heights = positions[:, 1]
    return {
        "particle_mean_y": float(heights.mean()),
        "particle_min_y": float(heights.min()),
        "particle_max_y": float(heights.max()),
    }


def _surface_stats(heights: np.ndarray | None) -> dict[str, float]:
    if heights is None:
        nan = float("nan")
        return {"surface_min": nan, "surface_max": nan, "surface_mean": nan}
    return {
        "surface_min": float(heights.min()),
        "surface_max": float(heights.max()),
        "surface_mean": float(heights.mean()),
    }


def snapshot_row(snapshot: FrameSnapshot, prop_names: tuple[str, ...] = ()) -> dict[str, float]:
    """Flatten one frame into scalar columns."""
    row: dict[str, float] = {
        "frame": float(snapshot.time.frame),
        "elapsed_s": snapshot.time.elapsed,
        "delta_s": snapshot.time.delta,
        "boundary_resets": float(snapshot.boundary_resets),
    }
    row.update(_particle_stats(snapshot.particle_positions))
    row.update(_surface_stats(snapshot.surface_heights))
    for light in snapshot.lights:
        x, y, z = light.position.as_tuple()
        row[f"light_{light.name}_x"] = x
        row[f"light_{light.name}_y"] = y
        row[f"light_{light.name}_z"] = z
        row[f"light_{light.name}_intensity"] = light.intensity
    for name in prop_names:
        transform = snapshot.props.get(name)
        row[f"prop_{name}_present"] = float(transform is not None)
        rotation = transform.rotation if transform is not None else (math.nan,) * 3
        position = transform.position if transform is not None else (math.nan,) * 3
        row[f"prop_{name}_rx"] = rotation[0]
        row[f"prop_{name}_ry"] = rotation[1]
        row[f"prop_{name}_rz"] = rotation[2]
        row[f"prop_{name}_y"] = position[1]
    return row


def run_timeline(
    config: SceneConfig,
    *,
    seconds: float,
    fps: int = 60,
    seed: int | None = None,
    loader: AssetLoader | None = None,
) -> pd.DataFrame:
    """Run ``config`` on a fixed-step clock and summarise every frame."""
    if seconds <= 0:
        msg = "seconds must be positive"
        raise ValueError(msg)
    if fps <= 0:
        msg = "fps must be positive"
        raise ValueError(msg)

    context = build_scene(config, seed=seed, loader=loader)
    driver = SceneDriver(context)
    clock = FixedStepClock(step=1.0 / float(fps))
    prop_names = tuple(context.props)
    total_frames = int(round(seconds * fps)) + 1

    rows: list[dict[str, float]] = []
    for _ in range(total_frames):
        snapshot = driver.step(clock.tick())
        rows.append(snapshot_row(snapshot, prop_names))

    df = pd.DataFrame(rows)
    df["cum_boundary_resets"] = df["boundary_resets"].cumsum()
    df.attrs["scene"] = config.name
    df.attrs["fps"] = fps
    return df


def build_visual_frame(
    snapshot: FrameSnapshot,
    *,
    max_particles: int | None = None,
    surface_stride: int = 1,
) -> dict[str, object]:
    """Map one snapshot into a JSON-serialisable renderer payload."""
    if max_particles is not None and max_particles < 0:
        msg = "max_particles must be non-negative"
        raise ValueError(msg)
    if surface_stride < 1:
        msg = "surface_stride must be at least 1"
        raise ValueError(msg)

    particles: list[list[float]] = []
    if snapshot.particle_positions is not None:
        positions = snapshot.particle_positions
        if max_particles is not None and len(positions) > max_particles:
            stride = math.ceil(len(positions) / max(max_particles, 1))
            positions = positions[::stride][:max_particles]
        particles = positions.tolist()

    heights: list[float] = []
    surface_shape: list[int] = [0, 0]
    if snapshot.surface_heights is not None:
        grid = snapshot.surface_heights.reshape(snapshot.surface_shape or (1, -1))
        decimated = grid[::surface_stride, ::surface_stride]
        surface_shape = list(decimated.shape)
        heights = decimated.ravel().tolist()

    sky = None
    if snapshot.sky is not None:
        sky = {"inner": list(snapshot.sky[0]), "outer": list(snapshot.sky[1])}

    return {
        "scene": snapshot.scene,
        "frame": snapshot.time.frame,
        "elapsed": snapshot.time.elapsed,
        "delta": snapshot.time.delta,
        "aspect": snapshot.aspect,
        "particles": particles,
        "surface_heights": heights,
        "surface_shape": surface_shape,
        "surface_stride": surface_stride,
        "surface_time": snapshot.time.elapsed,
        "lights": [light.to_dict() for light in snapshot.lights],
        "props": {name: transform.to_dict() for name, transform in snapshot.props.items()},
        "boundary_resets": snapshot.boundary_resets,
        "background": list(snapshot.background),
        "sky": sky,
        "camera_position": list(snapshot.camera_position.as_tuple()),
    }


__all__ = ["build_visual_frame", "run_timeline", "snapshot_row"]
