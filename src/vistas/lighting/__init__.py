from vistas.lighting.rig import (
    LightKind,
    LightRig,
    LightState,
    OrbitParams,
    PulseParams,
    light_state,
)

__all__ = [
    "LightKind",
    "LightRig",
    "LightState",
    "OrbitParams",
    "PulseParams",
    "light_state",
]
