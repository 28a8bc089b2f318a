from vistas.scenes.builder import build_scene
from vistas.scenes.config import (
    ParticleConfig,
    PropConfig,
    SceneConfig,
    SurfaceConfig,
    load_scene_config,
    save_scene_config,
)
from vistas.scenes.presets import PRESETS, get_preset

__all__ = [
    "build_scene",
    "ParticleConfig",
    "PropConfig",
    "SceneConfig",
    "SurfaceConfig",
    "load_scene_config",
    "save_scene_config",
    "PRESETS",
    "get_preset",
]
