from __future__ import annotations

from dataclasses import dataclass, field

import numpy as np

from sdfmarch.math_utils import clamp_float
from sdfmarch.protocols import NORMAL_EPS
from sdfmarch.vector import Vector3


@dataclass(frozen=True, slots=True)
class ShadingConfig:
    """Phong lighting parameters: one point light, one base color."""

    light_position: Vector3 = field(default_factory=lambda: Vector3(-1.0, 5.0, -2.0))
    base_color: Vector3 = field(default_factory=lambda: Vector3(1.0, 0.5, 0.5))
    background: Vector3 = field(default_factory=Vector3.zero)
    ambient: float = 0.05
    shininess: float = 32.0
    normal_eps: float = NORMAL_EPS


def phong_intensity(
        normal: Vector3,
        light_dir: Vector3,
        view_dir: Vector3,
        shininess: float,
        ambient: float,
) -> float:
    """Diffuse + specular + ambient, clamped to [0, 1].

    ``light_dir`` points from the surface to the light, ``view_dir`` from the
    surface to the eye.
    """
    diffuse = max(normal.dot(light_dir), 0.0)
    reflect_dir = (-light_dir).reflect(normal)
    specular = max(view_dir.dot(reflect_dir), 0.0) ** shininess
    return clamp_float(diffuse + specular + ambient, 0.0, 1.0)


def shade(hit: Vector3, normal: Vector3, view_dir: Vector3, config: ShadingConfig) -> Vector3:
    """Color of a surface point. ``view_dir`` is the unit direction toward the eye."""
    light_dir = (config.light_position - hit).normalize()
    intensity = phong_intensity(normal, light_dir, view_dir, config.shininess, config.ambient)
    return config.base_color * intensity


def ambient_color(config: ShadingConfig) -> Vector3:
    """Color of a hit whose normal is undefined (flat field, e.g. inside a box)."""
    return config.base_color * config.ambient


def _channel(c: float) -> int:
    return int(round(clamp_float(c, 0.0, 1.0) * 255.0))


def pack_color(color: Vector3) -> int:
    """Pack an RGB color in [0, 1] into 0x00RRGGBB."""
    return (_channel(color.x) << 16) | (_channel(color.y) << 8) | _channel(color.z)


def unpack_color(packed: int) -> Vector3:
    return Vector3(
        ((packed >> 16) & 0xFF) / 255.0,
        ((packed >> 8) & 0xFF) / 255.0,
        (packed & 0xFF) / 255.0,
    )


def unpack_buffer(buffer: np.ndarray) -> np.ndarray:
    """Convert an (H, W) packed buffer into an (H, W, 3) float RGB image."""
    buf = np.asarray(buffer, dtype=np.uint32)
    rgb = np.stack([(buf >> 16) & 0xFF, (buf >> 8) & 0xFF, buf & 0xFF], axis=-1)
    return rgb.astype(np.float64) / 255.0
