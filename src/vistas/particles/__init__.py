from vistas.particles.boundary import AxisBounds, Boundary, BoundaryPolicy, apply_boundary
from vistas.particles.field import (
    ParticleField,
    SpawnVolume,
    VelocityDistribution,
    advance_field,
    initialize_field,
)

__all__ = [
    "AxisBounds",
    "Boundary",
    "BoundaryPolicy",
    "apply_boundary",
    "ParticleField",
    "SpawnVolume",
    "VelocityDistribution",
    "advance_field",
    "initialize_field",
]
