from __future__ import annotations

import logging
from concurrent.futures import Executor

from vistas.driver.context import PropSlot, SceneContext
from vistas.driver.viewport import Viewport
from vistas.particles.field import initialize_field
from vistas.props.assets import AssetLoader, AssetSlot, load_asset, load_asset_async
from vistas.scenes.config import SceneConfig
from vistas.surface.grid import SurfaceGrid

logger = logging.getLogger(__name__)


def build_scene(
    config: SceneConfig,
    *,
    seed: int | None = None,
    loader: AssetLoader | None = None,
    executor: Executor | None = None,
    viewport: Viewport | None = None,
) -> SceneContext:
    """Allocate the mutable state for ``config``.

    Props are requested from ``loader`` in the background when an
    ``executor`` is given, synchronously otherwise. Without a loader every
    prop stays absent and the driver skips it.
    """
    particles = None
    boundary = None
    if config.particles is not None:
        particle_config = config.particles
        particles = initialize_field(
            particle_config.count,
            particle_config.spawn,
            particle_config.velocity,
            spin=particle_config.spin,
            random_orientation=particle_config.random_orientation,
            time_scaled=particle_config.time_scaled,
            seed=seed,
        )
        boundary = particle_config.boundary

    surface = None
    if config.surface is not None:
        surface = SurfaceGrid(
            width=config.surface.width,
            depth=config.surface.depth,
            segments_x=config.surface.segments_x,
            segments_z=config.surface.segments_z,
            params=config.surface.params,
        )

    context = SceneContext(
        name=config.name,
        particles=particles,
        boundary=boundary,
        surface=surface,
        lights=config.lights,
        viewport=viewport or Viewport(fov_deg=config.fov_deg),
        background=config.background,
        sky_inner=config.sky_inner,
        sky_outer=config.sky_outer,
        camera_position=config.camera_position,
    )

    for prop in config.props:
        slot = AssetSlot(prop.url)
        if loader is not None:
            if executor is not None:
                load_asset_async(loader, prop.url, executor, slot)
            else:
                load_asset(loader, prop.url, slot)
        context.add_prop(
            PropSlot(
                name=prop.name,
                asset=slot,
                policies=prop.policies,
                transform=prop.transform,
            )
        )

    logger.info(
        f"Built scene '{config.name}': "
        f"{0 if particles is None else particles.count} particles, "
        f"{0 if surface is None else surface.vertex_count} surface vertices, "
        f"{len(config.lights)} lights, {len(config.props)} props"
    )
    return context


__all__ = ["build_scene"]
