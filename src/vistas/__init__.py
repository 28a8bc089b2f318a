"""vistas: per-frame animation core for decorative 3D scenes."""

from vistas.driver.clock import FixedStepClock, FrameClock, FrameTime
from vistas.driver.context import PropSlot, SceneContext
from vistas.driver.loop import FrameSnapshot, SceneDriver
from vistas.driver.viewport import Viewport
from vistas.errors import AssetLoadError, ConfigurationError
from vistas.geometry import Point3
from vistas.lighting.rig import LightRig, LightState, OrbitParams, PulseParams, light_state
from vistas.logging_config import setup_logging
from vistas.particles.boundary import AxisBounds, Boundary, BoundaryPolicy
from vistas.particles.field import (
    ParticleField,
    SpawnVolume,
    VelocityDistribution,
    advance_field,
    initialize_field,
)
from vistas.props.animator import BobPolicy, PropTransform, SpinPolicy, SwayPolicy, step_prop
from vistas.props.assets import AssetSlot, load_asset, load_asset_async
from vistas.scenes.builder import build_scene
from vistas.scenes.config import SceneConfig, load_scene_config, save_scene_config
from vistas.scenes.presets import PRESETS, get_preset
from vistas.surface.grid import SurfaceGrid, SurfaceParams, surface_height
from vistas.timeline.recorder import build_visual_frame, run_timeline

__version__ = "0.1.0"

__all__ = [
    "__version__",
    "Point3",
    "ConfigurationError",
    "AssetLoadError",
    "setup_logging",
    "ParticleField",
    "SpawnVolume",
    "VelocityDistribution",
    "AxisBounds",
    "Boundary",
    "BoundaryPolicy",
    "initialize_field",
    "advance_field",
    "SurfaceParams",
    "SurfaceGrid",
    "surface_height",
    "LightRig",
    "LightState",
    "OrbitParams",
    "PulseParams",
    "light_state",
    "PropTransform",
    "SpinPolicy",
    "SwayPolicy",
    "BobPolicy",
    "step_prop",
    "AssetSlot",
    "load_asset",
    "load_asset_async",
    "FrameTime",
    "FrameClock",
    "FixedStepClock",
    "PropSlot",
    "SceneContext",
    "FrameSnapshot",
    "SceneDriver",
    "Viewport",
    "SceneConfig",
    "load_scene_config",
    "save_scene_config",
    "PRESETS",
    "get_preset",
    "build_scene",
    "run_timeline",
    "build_visual_frame",
]
