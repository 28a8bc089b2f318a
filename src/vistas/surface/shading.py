"""Colour functions mirroring the demo fragment shaders."""

from __future__ import annotations

import numpy as np

from vistas.errors import ConfigurationError

UP = np.array([0.0, 1.0, 0.0])


def hex_to_rgb(value: int | str) -> tuple[float, float, float]:
    """Convert ``0xRRGGBB`` or ``"#rrggbb"`` to floats in [0, 1]."""
    if isinstance(value, str):
        text = value.strip().removeprefix("#").removeprefix("0x")
        if len(text) != 6:
            msg = f"colour must have six hex digits, got {value!r}"
            raise ConfigurationError(msg)
        try:
            value = int(text, 16)
        except ValueError as exc:
            msg = f"invalid hex colour {value!r}"
            raise ConfigurationError(msg) from exc
    if not 0 <= int(value) <= 0xFFFFFF:
        msg = f"colour out of range: {value}"
        raise ConfigurationError(msg)
    value = int(value)
    return (
        ((value >> 16) & 0xFF) / 255.0,
        ((value >> 8) & 0xFF) / 255.0,
        (value & 0xFF) / 255.0,
    )


def rgb_to_hex(rgb: tuple[float, float, float]) -> str:
    channels = [int(round(float(np.clip(channel, 0.0, 1.0)) * 255.0)) for channel in rgb]
    return "#{:02x}{:02x}{:02x}".format(*channels)


def mix(a, b, weight):
    """GLSL ``mix`` broadcast over trailing RGB channels."""
    a = np.asarray(a, dtype=np.float64)
    b = np.asarray(b, dtype=np.float64)
    weight = np.asarray(weight, dtype=np.float64)[..., np.newaxis]
    return a * (1.0 - weight) + b * weight


def floor_color(u, v, color1, color2) -> np.ndarray:
    blend = np.sin(np.asarray(v) * 10.0 + np.asarray(u) * 10.0) * 0.5 + 0.5
    return mix(color1, color2, blend)


def sky_color(direction, inner, outer) -> np.ndarray:
    direction = np.asarray(direction, dtype=np.float64)
    norms = np.linalg.norm(direction, axis=-1, keepdims=True)
    if np.any(norms == 0):
        msg = "sky direction must be non-zero"
        raise ValueError(msg)
    intensity = (direction / norms) @ UP * 0.5 + 0.5
    return mix(inner, outer, intensity)


__all__ = ["hex_to_rgb", "rgb_to_hex", "mix", "floor_color", "sky_color"]
