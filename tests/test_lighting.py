from __future__ import annotations

import math

import numpy as np
import pytest

from vistas.errors import ConfigurationError
from vistas.geometry import Point3
from vistas.lighting import LightKind, LightRig, OrbitParams, PulseParams, light_state


def _orbiting_rig(**orbit_overrides: float) -> LightRig:
    orbit = OrbitParams(**{"radius": 15.0, "speed": 1.0, "base_y": 4.0, **orbit_overrides})
    return LightRig(name="key", orbit=orbit, intensity=2.0)


def test_orbit_start_and_quarter_turn_positions() -> None:
    rig = _orbiting_rig()

    start = light_state(rig, 0.0).position
    assert start.as_tuple() == pytest.approx((0.0, 4.0, 15.0))

    quarter = light_state(rig, math.pi / 2.0).position
    assert quarter.as_tuple() == pytest.approx((15.0, 4.0, 0.0), abs=1e-9)


def test_orbit_stays_on_circle() -> None:
    rig = _orbiting_rig(speed=0.7, bob_amplitude=1.5, bob_frequency=2.0, phase=0.4)
    for t in np.linspace(0.0, 500.0, 257):
        position = light_state(rig, float(t)).position
        assert math.hypot(position.x, position.z) == pytest.approx(15.0)
        assert 2.5 - 1e-9 <= position.y <= 5.5 + 1e-9


def test_orbit_is_offset_by_rig_center() -> None:
    rig = LightRig(
        name="key",
        center=Point3(1.0, 2.0, 3.0),
        orbit=OrbitParams(radius=5.0, speed=1.0, base_y=0.0),
    )
    assert light_state(rig, 0.0).position.as_tuple() == pytest.approx((1.0, 2.0, 8.0))


def test_pulse_intensity_follows_sine() -> None:
    rig = LightRig(name="glow", pulse=PulseParams(base=1.5, amplitude=0.5, frequency=2.0))
    assert light_state(rig, 0.0).intensity == pytest.approx(1.5)
    assert light_state(rig, math.pi / 4.0).intensity == pytest.approx(2.0)
    assert light_state(rig, 3.0 * math.pi / 4.0).intensity == pytest.approx(1.0)


def test_light_state_is_idempotent_for_same_time() -> None:
    rig = LightRig(
        name="star",
        orbit=OrbitParams(radius=15.0, speed=0.5, base_y=5.0, bob_amplitude=2.0),
        pulse=PulseParams(),
    )
    assert light_state(rig, 12.34) == light_state(rig, 12.34)


def test_static_rig_keeps_base_position_and_intensity() -> None:
    rig = LightRig(
        name="key",
        kind=LightKind.POINT,
        color=0xFFFFFF,
        intensity=2.0,
        position=Point3(0.0, 10.0, 0.0),
        distance=50.0,
    )
    state = light_state(rig, 99.0)
    assert rig.is_static
    assert state.position == Point3(0.0, 10.0, 0.0)
    assert state.intensity == 2.0
    assert state.color == (1.0, 1.0, 1.0)


def test_invalid_light_parameters_fail_fast() -> None:
    with pytest.raises(ConfigurationError):
        OrbitParams(speed=0.0)
    with pytest.raises(ConfigurationError):
        OrbitParams(radius=-1.0)
    with pytest.raises(ConfigurationError):
        OrbitParams(bob_frequency=0.0, bob_amplitude=1.0)
    with pytest.raises(ConfigurationError):
        PulseParams(frequency=0.0)
    with pytest.raises(ConfigurationError):
        PulseParams(base=0.2, amplitude=0.5)
    with pytest.raises(ConfigurationError):
        LightRig(intensity=-1.0)
    with pytest.raises(ConfigurationError):
        LightRig(color="#nothex")


def test_rig_round_trips_through_dict() -> None:
    rig = LightRig(
        name="star",
        kind=LightKind.POINT,
        color=0xFFD0A0,
        orbit=OrbitParams(radius=15.0, speed=0.5, base_y=5.0),
        pulse=PulseParams(base=1.5, amplitude=0.5, frequency=2.0),
        distance=120.0,
    )
    assert LightRig.from_dict(rig.to_dict()) == rig
    assert OrbitParams(speed=0.5).period == pytest.approx(4.0 * math.pi)
