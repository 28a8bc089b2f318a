from __future__ import annotations

from dataclasses import dataclass, field

from vistas.driver.viewport import Viewport
from vistas.geometry import Point3
from vistas.lighting.rig import LightRig
from vistas.particles.boundary import Boundary
from vistas.particles.field import ParticleField
from vistas.props.animator import PropPolicy, PropTransform, step_prop
from vistas.props.assets import AssetSlot
from vistas.surface.grid import SurfaceGrid


@dataclass
class PropSlot:
    """A loadable prop plus the transform the frame loop owns for it."""

    name: str
    asset: AssetSlot
    policies: tuple[PropPolicy, ...]
    transform: PropTransform = field(default_factory=PropTransform)
    frames_animated: int = 0

    @property
    def present(self) -> bool:
        return self.asset.current() is not None

    def update(self, t: float, delta: float) -> PropTransform | None:
        if not self.present:
            return None
        self.transform = step_prop(self.policies, self.transform, t, delta)
        self.frames_animated += 1
        return self.transform


@dataclass
class SceneContext:
    """Everything the frame driver mutates, created once per scene."""

    name: str
    particles: ParticleField | None = None
    boundary: Boundary | None = None
    surface: SurfaceGrid | None = None
    lights: tuple[LightRig, ...] = ()
    props: dict[str, PropSlot] = field(default_factory=dict)
    viewport: Viewport = field(default_factory=Viewport)
    background: int | str = 0x202020
    sky_inner: int | str | None = None
    sky_outer: int | str | None = None
    camera_position: Point3 = Point3(0.0, 5.0, 15.0)

    @property
    def has_sky(self) -> bool:
        return self.sky_inner is not None and self.sky_outer is not None

    def add_prop(self, slot: PropSlot) -> PropSlot:
        if slot.name in self.props:
            msg = f"prop {slot.name!r} already registered"
            raise ValueError(msg)
        self.props[slot.name] = slot
        return slot

    def describe(self) -> dict[str, object]:
        return {
            "name": self.name,
            "particle_count": 0 if self.particles is None else self.particles.count,
            "boundary": None if self.boundary is None else self.boundary.policy.value,
            "surface_vertices": 0 if self.surface is None else self.surface.vertex_count,
            "lights": [rig.name for rig in self.lights],
            "props": sorted(self.props),
        }


__all__ = ["PropSlot", "SceneContext"]
