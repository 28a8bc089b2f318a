from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum

import numpy as np

from vistas.errors import ConfigurationError
from vistas.geometry import axis_index, require_finite


class BoundaryPolicy(str, Enum):
    WRAP = "wrap"
    BOUNCE = "bounce"
    RESPAWN = "respawn"


@dataclass(frozen=True)
class AxisBounds:
    axis: str = "y"
    lower: float = -10.0
    upper: float = 10.0

    def __post_init__(self) -> None:
        axis_index(self.axis)
        require_finite("lower", self.lower)
        require_finite("upper", self.upper)
        if self.lower >= self.upper:
            msg = f"{self.axis} bounds must satisfy lower < upper, got {self.lower} >= {self.upper}"
            raise ConfigurationError(msg)

    @property
    def index(self) -> int:
        return axis_index(self.axis)

    @property
    def span(self) -> float:
        return self.upper - self.lower

    def to_dict(self) -> dict[str, object]:
        return {"axis": self.axis, "lower": self.lower, "upper": self.upper}

    @staticmethod
    def from_dict(payload: dict[str, object]) -> AxisBounds:
        return AxisBounds(
            axis=str(payload.get("axis", "y")),
            lower=float(payload["lower"]),
            upper=float(payload["upper"]),
        )


@dataclass(frozen=True)
class Boundary:
    """Out-of-range handling for a particle field.

    ``wrap`` sends a coordinate above ``upper`` to ``lower`` and one below
    ``lower`` to ``upper``. ``bounce`` clamps to the crossed bound and negates
    the velocity component. ``respawn`` only watches the floor and resets to
    the ceiling. All comparisons are strict: a coordinate sitting exactly on a
    bound is left alone.
    """

    policy: BoundaryPolicy = BoundaryPolicy.WRAP
    axes: tuple[AxisBounds, ...] = field(default_factory=lambda: (AxisBounds(),))

    def __post_init__(self) -> None:
        object.__setattr__(self, "policy", BoundaryPolicy(self.policy))
        object.__setattr__(self, "axes", tuple(self.axes))
        if not self.axes:
            msg = "boundary needs at least one axis"
            raise ConfigurationError(msg)
        indices = [bounds.index for bounds in self.axes]
        if len(indices) != len(set(indices)):
            msg = "each axis may appear only once in a boundary"
            raise ConfigurationError(msg)

    def to_dict(self) -> dict[str, object]:
        return {
            "policy": self.policy.value,
            "axes": [bounds.to_dict() for bounds in self.axes],
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> Boundary:
        return Boundary(
            policy=BoundaryPolicy(str(payload.get("policy", BoundaryPolicy.WRAP.value))),
            axes=tuple(AxisBounds.from_dict(dict(item)) for item in payload["axes"]),
        )


def apply_boundary(positions: np.ndarray, velocities: np.ndarray, boundary: Boundary) -> int:
    """Apply ``boundary`` in place and return how many coordinates were reset."""
    scalar_velocity = velocities.ndim == 1
    fired = 0
    for bounds in boundary.axes:
        column = positions[:, bounds.index]
        above = column > bounds.upper
        below = column < bounds.lower

        if boundary.policy is BoundaryPolicy.WRAP:
            column[above] = bounds.lower
            column[below] = bounds.upper
            fired += int(above.sum() + below.sum())
        elif boundary.policy is BoundaryPolicy.BOUNCE:
            column[above] = bounds.upper
            column[below] = bounds.lower
            crossed = above | below
            if scalar_velocity:
                if bounds.index == 1:
                    velocities[crossed] = -velocities[crossed]
            else:
                velocities[crossed, bounds.index] = -velocities[crossed, bounds.index]
            fired += int(crossed.sum())
        else:
            column[below] = bounds.upper
            fired += int(below.sum())
    return fired


__all__ = ["AxisBounds", "Boundary", "BoundaryPolicy", "apply_boundary"]
