from __future__ import annotations

import logging
import math
import time
from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Protocol

import numpy as np

from vistas.driver.clock import FrameTime
from vistas.driver.context import SceneContext
from vistas.geometry import Point3
from vistas.lighting.rig import LightState, light_state
from vistas.particles.field import advance_field
from vistas.props.animator import PropTransform
from vistas.surface.shading import hex_to_rgb

RGB = tuple[float, float, float]

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class FrameSnapshot:
    """Read-only view of the scene state handed to the renderer.

    Array members reference the live buffers; renderers that keep frames
    around must copy them.
    """

    scene: str
    time: FrameTime
    particle_positions: np.ndarray | None
    particle_rotations: np.ndarray | None
    surface_heights: np.ndarray | None
    lights: tuple[LightState, ...]
    props: dict[str, PropTransform] = field(default_factory=dict)
    boundary_resets: int = 0
    aspect: float = 1.0
    background: RGB = (0.0, 0.0, 0.0)
    sky: tuple[RGB, RGB] | None = None
    camera_position: Point3 = Point3()
    surface_shape: tuple[int, int] | None = None


class Clock(Protocol):
    def tick(self) -> FrameTime: ...


Renderer = Callable[[FrameSnapshot], None]


class SceneDriver:
    def __init__(self, context: SceneContext, renderer: Renderer | None = None) -> None:
        self.context = context
        self.renderer = renderer
        self.frames_rendered = 0
        self._last_elapsed: float | None = None

    def step(self, frame_time: FrameTime) -> FrameSnapshot:
        """Advance every component to ``frame_time`` and hand the result to the renderer."""
        if not (math.isfinite(frame_time.delta) and math.isfinite(frame_time.elapsed)):
            msg = "frame times must be finite"
            raise ValueError(msg)
        if frame_time.delta < 0 or frame_time.elapsed < 0:
            msg = "frame times must be non-negative"
            raise ValueError(msg)
        if self._last_elapsed is not None and frame_time.elapsed < self._last_elapsed:
            msg = "elapsed time went backwards"
            raise ValueError(msg)
        self._last_elapsed = frame_time.elapsed

        ctx = self.context
        t = frame_time.elapsed
        resets = 0
        if ctx.particles is not None:
            resets = advance_field(ctx.particles, frame_time.delta, ctx.boundary)

        if ctx.surface is not None:
            ctx.surface.update(t)

        lights = tuple(light_state(rig, t) for rig in ctx.lights)

        props: dict[str, PropTransform] = {}
        for name, slot in ctx.props.items():
            transform = slot.update(t, frame_time.delta)
            if transform is not None:
                props[name] = transform

        snapshot = FrameSnapshot(
            scene=ctx.name,
            time=frame_time,
            particle_positions=None if ctx.particles is None else ctx.particles.positions,
            particle_rotations=None if ctx.particles is None else ctx.particles.rotations,
            surface_heights=None if ctx.surface is None else ctx.surface.heights,
            lights=lights,
            props=props,
            boundary_resets=resets,
            aspect=ctx.viewport.aspect,
            background=hex_to_rgb(ctx.background),
            sky=(hex_to_rgb(ctx.sky_inner), hex_to_rgb(ctx.sky_outer)) if ctx.has_sky else None,
            camera_position=ctx.camera_position,
            surface_shape=None if ctx.surface is None else ctx.surface.shape,
        )
        if self.renderer is not None:
            self.renderer(snapshot)
        self.frames_rendered += 1
        return snapshot

    def resize(self, width: int, height: int) -> None:
        self.context.viewport = self.context.viewport.resize(width, height)
        aspect = self.context.viewport.aspect
        logger.debug(f"Viewport resized to {width}x{height} (aspect {aspect:.3f})")

    def run(
        self,
        clock: Clock,
        *,
        max_frames: int | None = None,
        frame_interval: float | None = None,
        sleep: Callable[[float], None] = time.sleep,
    ) -> int:
        """Drive frames until ``max_frames`` is reached or the process is interrupted.

        ``frame_interval`` paces the loop like a display refresh; without it
        frames run back to back.
        """
        if max_frames is not None and max_frames < 0:
            msg = "max_frames must be non-negative"
            raise ValueError(msg)
        if frame_interval is not None and frame_interval <= 0:
            msg = "frame_interval must be positive"
            raise ValueError(msg)

        logger.info(f"Starting scene '{self.context.name}'")
        frames = 0
        try:
            while max_frames is None or frames < max_frames:
                started = time.perf_counter()
                self.step(clock.tick())
                frames += 1
                if frame_interval is not None:
                    remaining = frame_interval - (time.perf_counter() - started)
                    if remaining > 0:
                        sleep(remaining)
        except KeyboardInterrupt:
            logger.info("Frame loop interrupted")
        logger.info(f"Stopped scene '{self.context.name}' after {frames} frames")
        return frames


__all__ = ["Clock", "FrameSnapshot", "Renderer", "SceneDriver"]
