from __future__ import annotations

from dataclasses import dataclass, field
import math

import numpy as np

from vistas.errors import ConfigurationError
from vistas.geometry import require_finite, require_range
from vistas.particles.boundary import Boundary, apply_boundary


@dataclass(frozen=True)
class SpawnVolume:
    x: tuple[float, float] = (-15.0, 15.0)
    y: tuple[float, float] = (0.0, 10.0)
    z: tuple[float, float] = (-15.0, 15.0)

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, require_range(name, tuple(getattr(self, name))))

    def sample(self, count: int, rng: np.random.Generator) -> np.ndarray:
        lows = np.array([self.x[0], self.y[0], self.z[0]])
        highs = np.array([self.x[1], self.y[1], self.z[1]])
        return rng.uniform(lows, highs, size=(count, 3))

    def to_dict(self) -> dict[str, list[float]]:
        return {"x": list(self.x), "y": list(self.y), "z": list(self.z)}

    @staticmethod
    def from_dict(payload: dict[str, object]) -> SpawnVolume:
        return SpawnVolume(
            x=tuple(float(value) for value in payload["x"]),
            y=tuple(float(value) for value in payload["y"]),
            z=tuple(float(value) for value in payload["z"]),
        )


@dataclass(frozen=True)
class VelocityDistribution:
    """Per-particle velocity ranges.

    When ``vertical`` is set the field stores one signed vertical speed per
    particle and the per-axis ranges are ignored.
    """

    x: tuple[float, float] = (-0.01, 0.01)
    y: tuple[float, float] = (-0.01, 0.01)
    z: tuple[float, float] = (-0.01, 0.01)
    vertical: tuple[float, float] | None = None

    def __post_init__(self) -> None:
        for name in ("x", "y", "z"):
            object.__setattr__(self, name, require_range(name, tuple(getattr(self, name))))
        if self.vertical is not None:
            object.__setattr__(self, "vertical", require_range("vertical", tuple(self.vertical)))

    @property
    def is_scalar(self) -> bool:
        return self.vertical is not None

    def sample(self, count: int, rng: np.random.Generator) -> np.ndarray:
        if self.vertical is not None:
            return rng.uniform(self.vertical[0], self.vertical[1], size=count)
        lows = np.array([self.x[0], self.y[0], self.z[0]])
        highs = np.array([self.x[1], self.y[1], self.z[1]])
        return rng.uniform(lows, highs, size=(count, 3))

    def to_dict(self) -> dict[str, object]:
        return {
            "x": list(self.x),
            "y": list(self.y),
            "z": list(self.z),
            "vertical": None if self.vertical is None else list(self.vertical),
        }

    @staticmethod
    def from_dict(payload: dict[str, object]) -> VelocityDistribution:
        vertical = payload.get("vertical")
        return VelocityDistribution(
            x=tuple(float(value) for value in payload.get("x", (0.0, 0.0))),
            y=tuple(float(value) for value in payload.get("y", (0.0, 0.0))),
            z=tuple(float(value) for value in payload.get("z", (0.0, 0.0))),
            vertical=None if vertical is None else tuple(float(value) for value in vertical),
        )


@dataclass
class ParticleField:
    positions: np.ndarray
    velocities: np.ndarray
    rotations: np.ndarray | None = None
    spin: tuple[float, float, float] = (0.0, 0.0, 0.0)
    time_scaled: bool = False
    frames_advanced: int = field(default=0, init=False)

    def __post_init__(self) -> None:
        self.positions = np.array(self.positions, dtype=np.float64)
        self.velocities = np.array(self.velocities, dtype=np.float64)
        if self.positions.ndim != 2 or self.positions.shape[1] != 3:
            msg = f"positions must have shape (N, 3), got {self.positions.shape}"
            raise ConfigurationError(msg)
        count = self.positions.shape[0]
        if count == 0:
            msg = "particle field must contain at least one particle"
            raise ConfigurationError(msg)
        if self.velocities.shape not in {(count, 3), (count,)}:
            msg = (
                f"velocities must have shape ({count}, 3) or ({count},), "
                f"got {self.velocities.shape}"
            )
            raise ConfigurationError(msg)
        if not np.isfinite(self.positions).all() or not np.isfinite(self.velocities).all():
            msg = "particle positions and velocities must be finite"
            raise ConfigurationError(msg)
        if self.rotations is not None:
            self.rotations = np.array(self.rotations, dtype=np.float64)
            if self.rotations.shape != (count, 3):
                msg = f"rotations must have shape ({count}, 3), got {self.rotations.shape}"
                raise ConfigurationError(msg)
        if len(self.spin) != 3:
            msg = "spin must hold one angular rate per axis"
            raise ConfigurationError(msg)
        self.spin = tuple(require_finite("spin", value) for value in self.spin)

    @property
    def count(self) -> int:
        return int(self.positions.shape[0])

    @property
    def scalar_velocity(self) -> bool:
        return self.velocities.ndim == 1


def initialize_field(
    count: int,
    spawn_volume: SpawnVolume,
    velocity_distribution: VelocityDistribution,
    *,
    spin: tuple[float, float, float] = (0.0, 0.0, 0.0),
    random_orientation: bool = False,
    time_scaled: bool = False,
    seed: int | None = None,
) -> ParticleField:
    """Allocate a field of ``count`` particles spread over ``spawn_volume``."""
    if isinstance(count, bool) or not isinstance(count, (int, np.integer)):
        msg = f"count must be an integer, got {type(count).__name__}"
        raise ConfigurationError(msg)
    if count <= 0:
        msg = "count must be positive"
        raise ConfigurationError(msg)

    rng = np.random.default_rng(seed)
    positions = spawn_volume.sample(int(count), rng)
    velocities = velocity_distribution.sample(int(count), rng)
    rotations = None
    if random_orientation or any(spin):
        rotations = (
            rng.uniform(0.0, math.pi, size=(int(count), 3))
            if random_orientation
            else np.zeros((int(count), 3))
        )
    return ParticleField(
        positions=positions,
        velocities=velocities,
        rotations=rotations,
        spin=spin,
        time_scaled=time_scaled,
    )


def advance_field(particles: ParticleField, delta: float, boundary: Boundary | None = None) -> int:
    """Move every particle by its velocity, then apply ``boundary``.

    Returns the number of coordinates reset by the boundary policy.
    """
    if not math.isfinite(delta) or delta < 0:
        msg = "delta must be finite and non-negative"
        raise ValueError(msg)

    step = particles.velocities * delta if particles.time_scaled else particles.velocities
    if particles.scalar_velocity:
        particles.positions[:, 1] += step
    else:
        particles.positions += step

    if particles.rotations is not None and any(particles.spin):
        particles.rotations += np.asarray(particles.spin) * delta

    particles.frames_advanced += 1
    if boundary is None:
        return 0
    return apply_boundary(particles.positions, particles.velocities, boundary)


__all__ = [
    "ParticleField",
    "SpawnVolume",
    "VelocityDistribution",
    "advance_field",
    "initialize_field",
]
