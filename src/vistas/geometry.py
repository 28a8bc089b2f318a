from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np

from vistas.errors import ConfigurationError

AXES = ("x", "y", "z")


def axis_index(axis: str | int) -> int:
    if isinstance(axis, int):
        if axis not in (0, 1, 2):
            msg = f"axis index must be 0, 1 or 2, got {axis}"
            raise ConfigurationError(msg)
        return axis
    if axis not in AXES:
        msg = f"axis must be one of {AXES}, got {axis!r}"
        raise ConfigurationError(msg)
    return AXES.index(axis)


def require_finite(name: str, value: float) -> float:
    if not math.isfinite(value):
        msg = f"{name} must be finite"
        raise ConfigurationError(msg)
    return float(value)


def require_range(name: str, bounds: tuple[float, float]) -> tuple[float, float]:
    if len(bounds) != 2:
        msg = f"{name} must be a (low, high) pair"
        raise ConfigurationError(msg)
    low = require_finite(f"{name}[0]", bounds[0])
    high = require_finite(f"{name}[1]", bounds[1])
    if low > high:
        msg = f"{name} lower bound {low} exceeds upper bound {high}"
        raise ConfigurationError(msg)
    return low, high


@dataclass(frozen=True)
class Point3:
    x: float = 0.0
    y: float = 0.0
    z: float = 0.0

    def __post_init__(self) -> None:
        for name in AXES:
            require_finite(name, getattr(self, name))

    def as_tuple(self) -> tuple[float, float, float]:
        return (self.x, self.y, self.z)

    def as_array(self) -> np.ndarray:
        return np.array(self.as_tuple(), dtype=np.float64)

    def __add__(self, other: Point3) -> Point3:
        return Point3(self.x + other.x, self.y + other.y, self.z + other.z)

    @staticmethod
    def from_sequence(values: Sequence[float]) -> Point3:
        if len(values) != 3:
            msg = f"Point3 needs exactly three coordinates, got {len(values)}"
            raise ConfigurationError(msg)
        return Point3(float(values[0]), float(values[1]), float(values[2]))


__all__ = ["AXES", "Point3", "axis_index", "require_finite", "require_range"]
