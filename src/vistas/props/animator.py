from __future__ import annotations

import math
from dataclasses import asdict, dataclass, replace

from vistas.errors import ConfigurationError
from vistas.geometry import axis_index, require_finite

Vec3 = tuple[float, float, float]


def _vec3(name: str, values) -> Vec3:
    if len(values) != 3:
        msg = f"{name} must have three components"
        raise ConfigurationError(msg)
    return tuple(require_finite(name, float(value)) for value in values)


@dataclass(frozen=True)
class PropTransform:
    rotation: Vec3 = (0.0, 0.0, 0.0)
    position: Vec3 = (0.0, 0.0, 0.0)
    scale: float = 1.0

    def __post_init__(self) -> None:
        object.__setattr__(self, "rotation", _vec3("rotation", self.rotation))
        object.__setattr__(self, "position", _vec3("position", self.position))
        if self.scale <= 0:
            msg = "scale must be positive"
            raise ConfigurationError(msg)

    def to_dict(self) -> dict[str, object]:
        return {"rotation": list(self.rotation), "position": list(self.position), "scale": self.scale}

    @staticmethod
    def from_dict(payload: dict[str, object]) -> PropTransform:
        return PropTransform(
            rotation=tuple(payload.get("rotation", (0.0, 0.0, 0.0))),
            position=tuple(payload.get("position", (0.0, 0.0, 0.0))),
            scale=float(payload.get("scale", 1.0)),
        )


@dataclass(frozen=True)
class SpinPolicy:
    """Constant angular rate; the result depends on every delta applied so far."""

    rates: Vec3 = (0.0, 0.5, 0.0)

    def __post_init__(self) -> None:
        object.__setattr__(self, "rates", _vec3("rates", self.rates))

    @property
    def stateful(self) -> bool:
        return True

    def apply(self, transform: PropTransform, t: float, delta: float) -> PropTransform:
        rotation = tuple(
            angle + (rate * delta) for angle, rate in zip(transform.rotation, self.rates)
        )
        return replace(transform, rotation=rotation)


@dataclass(frozen=True)
class SwayPolicy:
    axis: str = "z"
    amplitude: float = 0.1
    frequency: float = 0.5
    phase: float = 0.0

    def __post_init__(self) -> None:
        axis_index(self.axis)
        for name in ("amplitude", "frequency", "phase"):
            require_finite(name, getattr(self, name))
        if self.frequency <= 0:
            msg = "sway frequency must be positive"
            raise ConfigurationError(msg)

    @property
    def stateful(self) -> bool:
        return False

    def apply(self, transform: PropTransform, t: float, delta: float) -> PropTransform:
        rotation = list(transform.rotation)
        angle = math.sin((t * self.frequency) + self.phase) * self.amplitude
        rotation[axis_index(self.axis)] = angle
        return replace(transform, rotation=tuple(rotation))


@dataclass(frozen=True)
class BobPolicy:
    amplitude: float = 0.25
    frequency: float = 1.0
    base_y: float = 0.0

    def __post_init__(self) -> None:
        for name in ("amplitude", "frequency", "base_y"):
            require_finite(name, getattr(self, name))
        if self.frequency <= 0:
            msg = "bob frequency must be positive"
            raise ConfigurationError(msg)

    @property
    def stateful(self) -> bool:
        return False

    def apply(self, transform: PropTransform, t: float, delta: float) -> PropTransform:
        x, _, z = transform.position
        y = self.base_y + math.sin(t * self.frequency) * self.amplitude
        return replace(transform, position=(x, y, z))


PropPolicy = SpinPolicy | SwayPolicy | BobPolicy

_POLICY_TYPES: dict[str, type] = {
    "spin": SpinPolicy,
    "sway": SwayPolicy,
    "bob": BobPolicy,
}


def policy_to_dict(policy: PropPolicy) -> dict[str, object]:
    for name, policy_type in _POLICY_TYPES.items():
        if isinstance(policy, policy_type):
            payload = asdict(policy)
            payload["type"] = name
            return payload
    msg = f"unsupported prop policy: {type(policy).__name__}"
    raise ConfigurationError(msg)


def policy_from_dict(payload: dict[str, object]) -> PropPolicy:
    data = dict(payload)
    kind = str(data.pop("type", ""))
    if kind not in _POLICY_TYPES:
        msg = f"unknown prop policy type {kind!r}; expected one of {sorted(_POLICY_TYPES)}"
        raise ConfigurationError(msg)
    if "rates" in data:
        data["rates"] = tuple(data["rates"])
    return _POLICY_TYPES[kind](**data)


def step_prop(
    policies: PropPolicy | tuple[PropPolicy, ...],
    transform: PropTransform,
    t: float,
    delta: float,
) -> PropTransform:
    """Return ``transform`` advanced to elapsed time ``t``.

    Spin policies accumulate ``delta`` and must see frames in chronological
    order; sway and bob policies only read ``t``.
    """
    if not math.isfinite(delta) or delta < 0:
        msg = "delta must be finite and non-negative"
        raise ValueError(msg)
    if not isinstance(policies, tuple):
        policies = (policies,)
    for policy in policies:
        transform = policy.apply(transform, t, delta)
    return transform


__all__ = [
    "BobPolicy",
    "PropPolicy",
    "PropTransform",
    "SpinPolicy",
    "SwayPolicy",
    "policy_from_dict",
    "policy_to_dict",
    "step_prop",
]
