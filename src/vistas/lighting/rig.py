from __future__ import annotations

import math
from dataclasses import asdict, dataclass
from enum import Enum

from vistas.errors import ConfigurationError
from vistas.geometry import Point3, require_finite
from vistas.surface.shading import hex_to_rgb

TAU = 2.0 * math.pi


class LightKind(str, Enum):
    AMBIENT = "ambient"
    POINT = "point"


@dataclass(frozen=True)
class OrbitParams:
    radius: float = 15.0
    speed: float = 1.0
    base_y: float = 10.0
    bob_frequency: float = 1.0
    bob_amplitude: float = 0.0
    phase: float = 0.0

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            require_finite(name, value)
        if self.radius < 0:
            msg = "orbit radius must be non-negative"
            raise ConfigurationError(msg)
        if self.speed == 0:
            msg = "orbit speed must be non-zero; use a static light instead"
            raise ConfigurationError(msg)
        if self.bob_frequency == 0 and self.bob_amplitude != 0:
            msg = "bob_frequency must be non-zero when bob_amplitude is set"
            raise ConfigurationError(msg)

    @property
    def period(self) -> float:
        return TAU / abs(self.speed)

    def position(self, t: float) -> Point3:
        angle = (t * self.speed) + self.phase
        return Point3(
            math.sin(angle) * self.radius,
            self.base_y + math.sin(t * self.bob_frequency) * self.bob_amplitude,
            math.cos(angle) * self.radius,
        )


@dataclass(frozen=True)
class PulseParams:
    base: float = 2.0
    amplitude: float = 0.5
    frequency: float = 2.0

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            require_finite(name, value)
        if self.frequency <= 0:
            msg = "pulse frequency must be positive"
            raise ConfigurationError(msg)
        if self.base - abs(self.amplitude) < 0:
            msg = "pulse would drive intensity negative (base < |amplitude|)"
            raise ConfigurationError(msg)

    @property
    def period(self) -> float:
        return TAU / self.frequency

    def intensity(self, t: float) -> float:
        return self.base + math.sin(t * self.frequency) * self.amplitude


@dataclass(frozen=True)
class LightState:
    name: str
    kind: LightKind
    position: Point3
    intensity: float
    color: tuple[float, float, float]

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "position": list(self.position.as_tuple()),
            "intensity": self.intensity,
            "color": list(self.color),
        }


@dataclass(frozen=True)
class LightRig:
    """A light whose position and intensity are closed-form functions of time."""

    name: str = "key"
    kind: LightKind = LightKind.POINT
    color: int | str = 0xFFFFFF
    intensity: float = 1.0
    position: Point3 = Point3()
    center: Point3 = Point3()
    orbit: OrbitParams | None = None
    pulse: PulseParams | None = None
    distance: float = 0.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "kind", LightKind(self.kind))
        hex_to_rgb(self.color)
        require_finite("intensity", self.intensity)
        if self.intensity < 0:
            msg = "intensity must be non-negative"
            raise ConfigurationError(msg)
        if self.distance < 0:
            msg = "distance must be non-negative"
            raise ConfigurationError(msg)

    @property
    def is_static(self) -> bool:
        return self.orbit is None and self.pulse is None

    def to_dict(self) -> dict[str, object]:
        return {
            "name": self.name,
            "kind": self.kind.value,
            "color": self.color,
            "intensity": self.intensity,
            "position": list(self.position.as_tuple()),
            "center": list(self.center.as_tuple()),
            "orbit": None if self.orbit is None else asdict(self.orbit),
            "pulse": None if self.pulse is None else asdict(self.pulse),
            "distance": self.distance,
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> LightRig:
        orbit = payload.get("orbit")
        pulse = payload.get("pulse")
        return LightRig(
            name=str(payload.get("name", "key")),
            kind=LightKind(str(payload.get("kind", LightKind.POINT.value))),
            color=payload.get("color", 0xFFFFFF),
            intensity=float(payload.get("intensity", 1.0)),
            position=Point3.from_sequence(payload.get("position", (0.0, 0.0, 0.0))),
            center=Point3.from_sequence(payload.get("center", (0.0, 0.0, 0.0))),
            orbit=None if orbit is None else OrbitParams(**dict(orbit)),
            pulse=None if pulse is None else PulseParams(**dict(pulse)),
            distance=float(payload.get("distance", 0.0)),
        )


def light_state(rig: LightRig, t: float) -> LightState:
    """Evaluate ``rig`` at elapsed time ``t``; the same ``t`` gives the same state."""
    position = rig.position if rig.orbit is None else rig.center + rig.orbit.position(t)
    intensity = rig.intensity if rig.pulse is None else rig.pulse.intensity(t)
    return LightState(
        name=rig.name,
        kind=rig.kind,
        position=position,
        intensity=intensity,
        color=hex_to_rgb(rig.color),
    )


__all__ = [
    "LightKind",
    "LightRig",
    "LightState",
    "OrbitParams",
    "PulseParams",
    "light_state",
]
