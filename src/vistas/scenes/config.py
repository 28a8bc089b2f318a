from __future__ import annotations

import json
from dataclasses import dataclass, field
from pathlib import Path

from vistas.errors import ConfigurationError
from vistas.geometry import Point3
from vistas.lighting.rig import LightRig
from vistas.particles.boundary import Boundary
from vistas.particles.field import SpawnVolume, VelocityDistribution
from vistas.props.animator import PropPolicy, PropTransform, policy_from_dict, policy_to_dict
from vistas.surface.grid import SurfaceParams
from vistas.surface.shading import hex_to_rgb

FORMAT_VERSION = 1


@dataclass(frozen=True)
class ParticleConfig:
    count: int
    spawn: SpawnVolume = field(default_factory=SpawnVolume)
    velocity: VelocityDistribution = field(default_factory=VelocityDistribution)
    boundary: Boundary = field(default_factory=Boundary)
    spin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    random_orientation: bool = False
    time_scaled: bool = False
    color: int | str = 0x87CEEB

    def __post_init__(self) -> None:
        if isinstance(self.count, bool) or not isinstance(self.count, int):
            msg = "particle count must be an integer"
            raise ConfigurationError(msg)
        if self.count <= 0:
            msg = "particle count must be positive"
            raise ConfigurationError(msg)
        object.__setattr__(self, "spin", tuple(float(value) for value in self.spin))
        if len(self.spin) != 3:
            msg = "spin must hold one angular rate per axis"
            raise ConfigurationError(msg)
        hex_to_rgb(self.color)

    def to_dict(self) -> dict[str, object]:
        return {
            "count": self.count,
            "spawn": self.spawn.to_dict(),
            "velocity": self.velocity.to_dict(),
            "boundary": self.boundary.to_dict(),
            "spin": list(self.spin),
            "random_orientation": self.random_orientation,
            "time_scaled": self.time_scaled,
            "color": self.color,
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> ParticleConfig:
        return ParticleConfig(
            count=payload["count"],
            spawn=SpawnVolume.from_dict(dict(payload["spawn"])),
            velocity=VelocityDistribution.from_dict(dict(payload["velocity"])),
            boundary=Boundary.from_dict(dict(payload["boundary"])),
            spin=tuple(payload.get("spin", (0.0, 0.0, 0.0))),
            random_orientation=bool(payload.get("random_orientation", False)),
            time_scaled=bool(payload.get("time_scaled", False)),
            color=payload.get("color", 0x87CEEB),
        )


@dataclass(frozen=True)
class SurfaceConfig:
    width: float = 100.0
    depth: float = 100.0
    segments_x: int = 300
    segments_z: int = 300
    params: SurfaceParams = field(default_factory=SurfaceParams)
    color1: int | str = 0x6A0DAD
    color2: int | str = 0x8A2BE2

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0:
            msg = "surface width and depth must be positive"
            raise ConfigurationError(msg)
        for name in ("segments_x", "segments_z"):
            value = getattr(self, name)
            if isinstance(value, bool) or not isinstance(value, int):
                msg = f"{name} must be an integer"
                raise ConfigurationError(msg)
        if self.segments_x < 1 or self.segments_z < 1:
            msg = "surface needs at least one segment along each axis"
            raise ConfigurationError(msg)
        hex_to_rgb(self.color1)
        hex_to_rgb(self.color2)

    def to_dict(self) -> dict[str, object]:
        return {
            "width": self.width,
            "depth": self.depth,
            "segments_x": self.segments_x,
            "segments_z": self.segments_z,
            "params": self.params.to_dict(),
            "color1": self.color1,
            "color2": self.color2,
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> SurfaceConfig:
        return SurfaceConfig(
            width=float(payload.get("width", 100.0)),
            depth=float(payload.get("depth", 100.0)),
            segments_x=payload.get("segments_x", 300),
            segments_z=payload.get("segments_z", 300),
            params=SurfaceParams.from_dict(dict(payload.get("params", {}))),
            color1=payload.get("color1", 0x6A0DAD),
            color2=payload.get("color2", 0x8A2BE2),
        )


@dataclass(frozen=True)
class PropConfig:
    name: str
    url: str
    policies: tuple[PropPolicy, ...]
    transform: PropTransform = field(default_factory=PropTransform)

    def __post_init__(self) -> None:
        if not self.name:
            msg = "prop name must be non-empty"
            raise ConfigurationError(msg)
        if not self.url:
            msg = f"prop {self.name!r} needs an asset url"
            raise ConfigurationError(msg)
        object.__setattr__(self, "policies", tuple(self.policies))
        if not self.policies:
            msg = f"prop {self.name!r} needs at least one animation policy"
            raise ConfigurationError(msg)

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "url": self.url,
            "policies": [policy_to_dict(policy) for policy in self.policies],
            "transform": self.transform.to_dict(),
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> PropConfig:
        return PropConfig(
            name=str(payload["name"]),
            url=str(payload["url"]),
            policies=tuple(policy_from_dict(dict(item)) for item in payload["policies"]),
            transform=PropTransform.from_dict(dict(payload.get("transform", {}))),
        )


@dataclass(frozen=True)
class SceneConfig:
    name: str
    description: str = ""
    particles: ParticleConfig | None = None
    surface: SurfaceConfig | None = None
    lights: tuple[LightRig, ...] = ()
    props: tuple[PropConfig, ...] = ()
    background: int | str = 0x202020
    sky_inner: int | str | None = None
    sky_outer: int | str | None = None
    camera_position: Point3 = Point3(0.0, 5.0, 15.0)
    fov_deg: float = 75.0

    def __post_init__(self) -> None:
        if not self.name:
            msg = "scene name must be non-empty"
            raise ConfigurationError(msg)
        object.__setattr__(self, "lights", tuple(self.lights))
        object.__setattr__(self, "props", tuple(self.props))
        light_names = [rig.name for rig in self.lights]
        if len(light_names) != len(set(light_names)):
            msg = f"light names must be unique in scene {self.name!r}"
            raise ConfigurationError(msg)
        prop_names = [prop.name for prop in self.props]
        if len(prop_names) != len(set(prop_names)):
            msg = f"prop names must be unique in scene {self.name!r}"
            raise ConfigurationError(msg)
        for color in (self.background, self.sky_inner, self.sky_outer):
            if color is not None:
                hex_to_rgb(color)

    def to_dict(self) -> dict[str, object]:
        return {
            "format_version": FORMAT_VERSION,
            "name": self.name,
            "description": self.description,
            "particles": None if self.particles is None else self.particles.to_dict(),
            "surface": None if self.surface is None else self.surface.to_dict(),
            "lights": [rig.to_dict() for rig in self.lights],
            "props": [prop.to_dict() for prop in self.props],
            "background": self.background,
            "sky_inner": self.sky_inner,
            "sky_outer": self.sky_outer,
            "camera_position": list(self.camera_position.as_tuple()),
            "fov_deg": self.fov_deg,
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> SceneConfig:
        version = int(payload.get("format_version", FORMAT_VERSION))
        if version != FORMAT_VERSION:
            msg = f"unsupported scene format_version {version}; expected {FORMAT_VERSION}"
            raise ConfigurationError(msg)
        particles = payload.get("particles")
        surface = payload.get("surface")
        return SceneConfig(
            name=str(payload["name"]),
            description=str(payload.get("description", "")),
            particles=None if particles is None else ParticleConfig.from_dict(dict(particles)),
            surface=None if surface is None else SurfaceConfig.from_dict(dict(surface)),
            lights=tuple(LightRig.from_dict(dict(item)) for item in payload.get("lights", [])),
            props=tuple(PropConfig.from_dict(dict(item)) for item in payload.get("props", [])),
            background=payload.get("background", 0x202020),
            sky_inner=payload.get("sky_inner"),
            sky_outer=payload.get("sky_outer"),
            camera_position=Point3.from_sequence(payload.get("camera_position", (0.0, 5.0, 15.0))),
            fov_deg=float(payload.get("fov_deg", 75.0)),
        )


def save_scene_config(config: SceneConfig, path: str | Path) -> Path:
    target = Path(path)
    target.parent.mkdir(parents=True, exist_ok=True)
    target.write_text(json.dumps(config.to_dict(), indent=2), encoding="utf-8")
    return target


def load_scene_config(path: str | Path) -> SceneConfig:
    source = Path(path)
    if not source.exists():
        msg = f"Scene config file does not exist: {source}"
        raise FileNotFoundError(msg)
    try:
        payload = json.loads(source.read_text(encoding="utf-8"))
    except json.JSONDecodeError as exc:
        msg = f"Scene config {source} is not valid JSON: {exc}"
        raise ConfigurationError(msg) from exc
    if not isinstance(payload, dict):
        msg = f"Scene config {source} must hold a JSON object, got {type(payload).__name__}"
        raise ConfigurationError(msg)
    try:
        return SceneConfig.from_dict(payload)
    except ConfigurationError:
        raise
    except (KeyError, TypeError, ValueError, AttributeError) as exc:
        msg = f"Scene config {source} is malformed: {exc}"
        raise ConfigurationError(msg) from exc


__all__ = [
    "FORMAT_VERSION",
    "ParticleConfig",
    "PropConfig",
    "SceneConfig",
    "SurfaceConfig",
    "load_scene_config",
    "save_scene_config",
]
