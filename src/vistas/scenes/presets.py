from __future__ import annotations

from vistas.errors import ConfigurationError
from vistas.geometry import Point3
from vistas.lighting.rig import LightKind, LightRig, OrbitParams, PulseParams
from vistas.particles.boundary import AxisBounds, Boundary, BoundaryPolicy
from vistas.particles.field import SpawnVolume, VelocityDistribution
from vistas.props.animator import BobPolicy, PropTransform, SpinPolicy, SwayPolicy
from vistas.scenes.config import ParticleConfig, PropConfig, SceneConfig, SurfaceConfig
from vistas.surface.grid import SurfaceParams

CRYSTAL_CAVE = SceneConfig(
    name="crystal_cave",
    description="Purple crystal floor with drifting, tumbling shards.",
    particles=ParticleConfig(
        count=50,
        spawn=SpawnVolume(x=(-15.0, 15.0), y=(0.0, 10.0), z=(-15.0, 15.0)),
        velocity=VelocityDistribution(x=(-0.01, 0.01), y=(-0.01, 0.01), z=(-0.01, 0.01)),
        boundary=Boundary(BoundaryPolicy.WRAP, (AxisBounds("y", -10.0, 10.0),)),
        spin=(0.5, 0.5, 0.0),
        random_orientation=True,
        color=0x87CEEB,
    ),
    surface=SurfaceConfig(
        width=100.0,
        depth=100.0,
        segments_x=300,
        segments_z=300,
        params=SurfaceParams(freq_x=0.8, freq_z=1.2, amplitude_x=0.5, amplitude_z=0.5),
        color1=0x6A0DAD,
        color2=0x8A2BE2,
    ),
    lights=(
        LightRig(name="ambient", kind=LightKind.AMBIENT, color=0x8888FF, intensity=0.5),
        LightRig(
            name="key",
            kind=LightKind.POINT,
            color=0xFFFFFF,
            intensity=2.0,
            position=Point3(0.0, 10.0, 0.0),
            distance=50.0,
        ),
    ),
    background=0x202020,
    sky_inner=0x000080,
    sky_outer=0x1E90FF,
)

NEBULA = SceneConfig(
    name="nebula",
    description="Gas cloud of bouncing motes around a slowly turning planet.",
    particles=ParticleConfig(
        count=5000,
        spawn=SpawnVolume(x=(-40.0, 40.0), y=(-40.0, 40.0), z=(-40.0, 40.0)),
        velocity=VelocityDistribution(x=(-0.05, 0.05), y=(-0.05, 0.05), z=(-0.05, 0.05)),
        boundary=Boundary(
            BoundaryPolicy.BOUNCE,
            (
                AxisBounds("x", -40.0, 40.0),
                AxisBounds("y", -40.0, 40.0),
                AxisBounds("z", -40.0, 40.0),
            ),
        ),
        color=0xFF77FF,
    ),
    lights=(
        LightRig(name="ambient", kind=LightKind.AMBIENT, color=0x332255, intensity=0.4),
        LightRig(
            name="star",
            kind=LightKind.POINT,
            color=0xFFD0A0,
            intensity=1.5,
            orbit=OrbitParams(
                radius=15.0, speed=0.5, base_y=5.0, bob_frequency=0.7, bob_amplitude=2.0
            ),
            pulse=PulseParams(base=1.5, amplitude=0.5, frequency=2.0),
            distance=120.0,
        ),
    ),
    props=(
        PropConfig(
            name="planet",
            url="models/planet.glb",
            policies=(SpinPolicy(rates=(0.0, 0.1, 0.0)),),
        ),
    ),
    background=0x05010F,
    camera_position=Point3(0.0, 10.0, 60.0),
)

DESERT = SceneConfig(
    name="desert",
    description="Rolling dunes, drifting sand and a swaying cactus under a circling sun.",
    particles=ParticleConfig(
        count=2000,
        spawn=SpawnVolume(x=(-50.0, 50.0), y=(0.0, 20.0), z=(-50.0, 50.0)),
        velocity=VelocityDistribution(x=(0.01, 0.04), y=(-0.05, -0.01), z=(-0.01, 0.01)),
        boundary=Boundary(BoundaryPolicy.RESPAWN, (AxisBounds("y", 0.0, 20.0),)),
        color=0xE2C290,
    ),
    surface=SurfaceConfig(
        width=200.0,
        depth=200.0,
        segments_x=200,
        segments_z=200,
        params=SurfaceParams(
            freq_x=0.1, freq_z=0.15, amplitude_x=2.0, amplitude_z=1.5, speed=0.2
        ),
        color1=0xC2A15A,
        color2=0xEDC98A,
    ),
    lights=(
        LightRig(name="ambient", kind=LightKind.AMBIENT, color=0xFFE0B0, intensity=0.6),
        LightRig(
            name="sun",
            kind=LightKind.POINT,
            color=0xFFF1D0,
            intensity=2.5,
            orbit=OrbitParams(radius=50.0, speed=0.05, base_y=40.0),
            distance=300.0,
        ),
    ),
    props=(
        PropConfig(
            name="cactus",
            url="models/cactus.glb",
            policies=(SwayPolicy(axis="z", amplitude=0.05, frequency=1.5),),
            transform=PropTransform(position=(5.0, 0.0, -5.0)),
        ),
    ),
    background=0xF4D9A6,
    sky_inner=0xF7C07A,
    sky_outer=0x8FC9F0,
    camera_position=Point3(0.0, 8.0, 30.0),
)

SNOWFIELD = SceneConfig(
    name="snowfield",
    description="Snow falling onto a softly heaving field around a bobbing lantern.",
    particles=ParticleConfig(
        count=10000,
        spawn=SpawnVolume(x=(-60.0, 60.0), y=(0.0, 30.0), z=(-60.0, 60.0)),
        velocity=VelocityDistribution(vertical=(-0.08, -0.02)),
        boundary=Boundary(BoundaryPolicy.RESPAWN, (AxisBounds("y", 0.0, 30.0),)),
        color=0xFFFFFF,
    ),
    surface=SurfaceConfig(
        width=120.0,
        depth=120.0,
        segments_x=120,
        segments_z=120,
        params=SurfaceParams(
            freq_x=0.2, freq_z=0.25, amplitude_x=0.3, amplitude_z=0.2, speed=0.3
        ),
        color1=0xDDE8F5,
        color2=0xFFFFFF,
    ),
    lights=(
        LightRig(name="ambient", kind=LightKind.AMBIENT, color=0xA0B8FF, intensity=0.5),
        LightRig(
            name="lantern_glow",
            kind=LightKind.POINT,
            color=0xFFB347,
            intensity=1.2,
            position=Point3(0.0, 3.0, 0.0),
            pulse=PulseParams(base=1.2, amplitude=0.3, frequency=3.0),
            distance=25.0,
        ),
    ),
    props=(
        PropConfig(
            name="lantern",
            url="models/lantern.glb",
            policies=(BobPolicy(amplitude=0.2, frequency=1.2, base_y=2.5),),
        ),
    ),
    background=0x0B1626,
    sky_inner=0x0B1626,
    sky_outer=0x4A6A8F,
)

PRESETS: dict[str, SceneConfig] = {
    config.name: config for config in (CRYSTAL_CAVE, NEBULA, DESERT, SNOWFIELD)
}


def get_preset(name: str) -> SceneConfig:
    try:
        return PRESETS[name]
    except KeyError as exc:
        msg = f"unknown scene preset {name!r}; available: {sorted(PRESETS)}"
        raise ConfigurationError(msg) from exc


__all__ = ["CRYSTAL_CAVE", "DESERT", "NEBULA", "PRESETS", "SNOWFIELD", "get_preset"]
