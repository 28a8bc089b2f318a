from __future__ import annotations

import math
from dataclasses import asdict, dataclass, field

import numpy as np

from vistas.errors import ConfigurationError
from vistas.geometry import require_finite

TAU = 2.0 * math.pi


@dataclass(frozen=True)
class SurfaceParams:
    freq_x: float = 0.8
    freq_z: float = 1.2
    amplitude_x: float = 0.5
    amplitude_z: float = 0.5
    phase_x: float = 0.0
    phase_z: float = 0.0
    speed: float = 1.0

    def __post_init__(self) -> None:
        for name, value in asdict(self).items():
            require_finite(name, value)
        if self.freq_x == 0 or self.freq_z == 0:
            msg = "surface frequencies must be non-zero"
            raise ConfigurationError(msg)

    @property
    def wavelength_x(self) -> float:
        return TAU / abs(self.freq_x)

    @property
    def wavelength_z(self) -> float:
        return TAU / abs(self.freq_z)

    @property
    def peak_height(self) -> float:
        return abs(self.amplitude_x) + abs(self.amplitude_z)

    def to_dict(self) -> dict[str, float]:
        return asdict(self)

    @staticmethod
    def from_dict(payload: dict[str, object]) -> SurfaceParams:
        return SurfaceParams(**{key: float(value) for key, value in payload.items()})


def _time_phase(t: float, speed: float) -> float:
    # sin and cos are 2*pi periodic in the time term.
    return math.fmod(float(t) * speed, TAU)


def surface_height(x, z, t: float, params: SurfaceParams):
    """Height of the surface at ``(x, z)`` after ``t`` seconds.

    ``x`` and ``z`` may be floats or broadcastable numpy arrays; a float pair
    returns a float.
    """
    phase_t = _time_phase(t, params.speed)
    height = (
        np.sin(np.multiply(x, params.freq_x) + params.phase_x + phase_t) * params.amplitude_x
        + np.cos(np.multiply(z, params.freq_z) + params.phase_z + phase_t) * params.amplitude_z
    )
    if np.ndim(height) == 0:
        return float(height)
    return height


@dataclass
class SurfaceGrid:
    """Plane of ``(segments_x + 1) * (segments_z + 1)`` vertices lying in XZ.

    Vertex order matches a plane geometry rotated flat: rows run from -z to
    +z, columns from -x to +x. Only ``heights`` changes after construction.
    """

    width: float = 100.0
    depth: float = 100.0
    segments_x: int = 300
    segments_z: int = 300
    params: SurfaceParams = field(default_factory=SurfaceParams)
    x: np.ndarray = field(init=False, repr=False)
    z: np.ndarray = field(init=False, repr=False)
    heights: np.ndarray = field(init=False, repr=False)
    last_time: float | None = field(default=None, init=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.depth <= 0:
            msg = "surface width and depth must be positive"
            raise ConfigurationError(msg)
        if int(self.segments_x) < 1 or int(self.segments_z) < 1:
            msg = "surface needs at least one segment along each axis"
            raise ConfigurationError(msg)
        self.segments_x = int(self.segments_x)
        self.segments_z = int(self.segments_z)

        xs = np.linspace(-self.width / 2.0, self.width / 2.0, self.segments_x + 1)
        zs = np.linspace(-self.depth / 2.0, self.depth / 2.0, self.segments_z + 1)
        grid_x, grid_z = np.meshgrid(xs, zs)
        self.x = grid_x.ravel()
        self.z = grid_z.ravel()
        self.x.setflags(write=False)
        self.z.setflags(write=False)
        self.heights = np.zeros_like(self.x)

    @property
    def vertex_count(self) -> int:
        return int(self.x.size)

    @property
    def shape(self) -> tuple[int, int]:
        return (self.segments_z + 1, self.segments_x + 1)

    def uv(self) -> tuple[np.ndarray, np.ndarray]:
        rows, cols = self.shape
        u = np.tile(np.linspace(0.0, 1.0, cols), rows)
        v = np.repeat(np.linspace(1.0, 0.0, rows), cols)
        return u, v

    def update(self, t: float) -> np.ndarray:
        """Recompute every vertex height for time ``t`` in place."""
        self.heights[:] = surface_height(self.x, self.z, t, self.params)
        self.last_time = float(t)
        return self.heights

    def triangles(self) -> np.ndarray:
        """Vertex indices of two triangles per grid cell, shape ``(2 * cells, 3)``."""
        rows, cols = self.shape
        corner = (np.arange(rows - 1)[:, np.newaxis] * cols + np.arange(cols - 1)).ravel()
        upper = np.column_stack((corner, corner + cols, corner + 1))
        lower = np.column_stack((corner + 1, corner + cols, corner + cols + 1))
        return np.concatenate((upper, lower))

    def vertices(self) -> np.ndarray:
        return np.column_stack((self.x, self.heights, self.z))

    def height_grid(self) -> np.ndarray:
        return self.heights.reshape(self.shape)


__all__ = ["SurfaceParams", "SurfaceGrid", "surface_height", "TAU"]
