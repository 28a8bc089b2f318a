from __future__ import annotations

import math
from dataclasses import dataclass, replace

import numpy as np

from vistas.errors import ConfigurationError


@dataclass(frozen=True)
class Viewport:
    width: int = 1280
    height: int = 720
    fov_deg: float = 75.0
    near: float = 0.1
    far: float = 1000.0

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            msg = "viewport width and height must be positive"
            raise ConfigurationError(msg)
        if not 0 < self.fov_deg < 180:
            msg = "fov_deg must be in (0, 180)"
            raise ConfigurationError(msg)
        if not 0 < self.near < self.far:
            msg = "clip planes must satisfy 0 < near < far"
            raise ConfigurationError(msg)

    @property
    def aspect(self) -> float:
        return self.width / self.height

    def resize(self, width: int, height: int) -> Viewport:
        return replace(self, width=int(width), height=int(height))

    def projection_matrix(self) -> np.ndarray:
        """OpenGL-style perspective matrix (column vectors, right-handed)."""
        focal = 1.0 / math.tan(math.radians(self.fov_deg) / 2.0)
        depth = self.near - self.far
        return np.array(
            [
                [focal / self.aspect, 0.0, 0.0, 0.0],
                [0.0, focal, 0.0, 0.0],
                [0.0, 0.0, (self.far + self.near) / depth, (2.0 * self.far * self.near) / depth],
                [0.0, 0.0, -1.0, 0.0],
            ]
        )


__all__ = ["Viewport"]
