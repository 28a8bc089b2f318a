from __future__ import annotations

import math

import pytest

from vistas.errors import ConfigurationError
from vistas.props import (
    BobPolicy,
    PropTransform,
    SpinPolicy,
    SwayPolicy,
    policy_from_dict,
    policy_to_dict,
    step_prop,
)


def test_spin_total_is_independent_of_frame_granularity() -> None:
    spin = SpinPolicy(rates=(0.0, 0.5, 0.0))
    total = 3.0

    coarse = step_prop(spin, PropTransform(), total, total)

    fine = PropTransform()
    steps = 600
    for frame in range(1, steps + 1):
        fine = step_prop(spin, fine, frame * total / steps, total / steps)

    assert coarse.rotation[1] == pytest.approx(1.5)
    assert fine.rotation[1] == pytest.approx(coarse.rotation[1])
    assert fine.rotation[0] == 0.0 and fine.rotation[2] == 0.0


def test_zero_delta_leaves_spin_unchanged() -> None:
    start = PropTransform(rotation=(0.1, 0.2, 0.3))
    assert step_prop(SpinPolicy(), start, 10.0, 0.0) == start


def test_sway_depends_only_on_elapsed_time() -> None:
    sway = SwayPolicy(axis="z", amplitude=0.1, frequency=0.5)
    first = step_prop(sway, PropTransform(rotation=(0.0, 1.0, 0.0)), 2.0, 0.016)
    second = step_prop(sway, PropTransform(rotation=(0.0, 1.0, 0.0)), 2.0, 0.5)

    assert first == second
    assert first.rotation[2] == pytest.approx(math.sin(1.0) * 0.1)
    assert first.rotation[1] == 1.0


def test_bob_moves_only_vertical_position() -> None:
    bob = BobPolicy(amplitude=0.25, frequency=1.0, base_y=2.0)
    moved = step_prop(bob, PropTransform(position=(1.0, 0.0, -3.0)), math.pi / 2.0, 0.1)
    assert moved.position == pytest.approx((1.0, 2.25, -3.0))


def test_policies_compose_in_order() -> None:
    policies = (SpinPolicy(rates=(0.0, 1.0, 0.0)), BobPolicy(amplitude=1.0, base_y=0.0))
    moved = step_prop(policies, PropTransform(), math.pi / 2.0, 0.5)
    assert moved.rotation == pytest.approx((0.0, 0.5, 0.0))
    assert moved.position[1] == pytest.approx(1.0)


def test_negative_delta_is_rejected() -> None:
    with pytest.raises(ValueError):
        step_prop(SpinPolicy(), PropTransform(), 1.0, -0.01)


def test_invalid_policies_fail_fast() -> None:
    with pytest.raises(ConfigurationError):
        SwayPolicy(axis="w")
    with pytest.raises(ConfigurationError):
        SwayPolicy(frequency=0.0)
    with pytest.raises(ConfigurationError):
        BobPolicy(frequency=-1.0)
    with pytest.raises(ConfigurationError):
        SpinPolicy(rates=(0.0, 1.0))
    with pytest.raises(ConfigurationError):
        PropTransform(scale=0.0)


def test_policies_round_trip_through_dict() -> None:
    for policy in (SpinPolicy(rates=(0.1, 0.2, 0.3)), SwayPolicy(axis="x"), BobPolicy(base_y=1.0)):
        payload = policy_to_dict(policy)
        assert policy_from_dict(payload) == policy

    with pytest.raises(ConfigurationError):
        policy_from_dict({"type": "teleport"})


def test_transform_round_trips_through_dict() -> None:
    transform = PropTransform(rotation=(0.1, 0.2, 0.3), position=(1.0, 2.0, 3.0), scale=2.0)
    assert PropTransform.from_dict(transform.to_dict()) == transform


def test_nan_delta_is_rejected() -> None:
    with pytest.raises(ValueError):
        step_prop(SpinPolicy(), PropTransform(), 1.0, float("nan"))
