from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from sdfmarch.matrix import Matrix4
from sdfmarch.vector import Vector3


@dataclass(frozen=True, slots=True)
class Camera3D:
    """Pinhole camera looking down +z before rotation.

    Parameters
    ----------
    position:
        Ray origin for every pixel.
    rotation:
        Euler angles in radians (pitch about x, yaw about y, roll about z),
        applied X first, then Y, then Z.
    width, height:
        Frame size in pixels.
    fov_deg:
        Vertical field of view in degrees; the horizontal extent is scaled by
        the aspect ratio.

    """

    position: Vector3
    rotation: Vector3
    width: int
    height: int
    fov_deg: float = 90.0
    rotation_matrix: Matrix4 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            msg = f"Camera frame must be non-empty, got {self.width}x{self.height}"
            raise ValueError(msg)
        object.__setattr__(self, "rotation_matrix", Matrix4.rotate(self.rotation))

    @property
    def aspect_ratio(self) -> float:
        return self.width / self.height

    @property
    def view_angle(self) -> float:
        return math.tan(math.pi * 0.5 * self.fov_deg / 180.0)

    def ray_direction(self, x: int, y: int) -> Vector3:
        """Unit world-space direction through pixel (x, y), y growing downward."""
        va = self.view_angle
        local = Vector3(
            (2.0 * (x / self.width) - 1.0) * va * self.aspect_ratio,
            (1.0 - 2.0 * (y / self.height)) * va,
            1.0,
        ).normalize()
        return self.rotation_matrix.transform_direction(local)

    def ray(self, x: int, y: int) -> tuple[Vector3, Vector3]:
        return self.position, self.ray_direction(x, y)

    def ray_directions_grid(self) -> np.ndarray:
        """Return directions of shape (H, W, 3), row-major like the frame buffer."""
        va = self.view_angle
        xs = (2.0 * (np.arange(self.width) / self.width) - 1.0) * va * self.aspect_ratio
        ys = (1.0 - 2.0 * (np.arange(self.height) / self.height)) * va

        rd = np.empty((self.height, self.width, 3), dtype=np.float64)
        rd[..., 0] = xs[None, :]
        rd[..., 1] = ys[:, None]
        rd[..., 2] = 1.0
        rd /= np.linalg.norm(rd, axis=-1, keepdims=True)

        rot = self.rotation_matrix.to_array()[:3, :3]
        return rd @ rot

    @classmethod
    def looking_along(
            cls,
            position: Vector3,
            pitch: float,
            yaw: float,
            width: int,
            height: int,
            fov_deg: float = 90.0,
    ) -> Camera3D:
        return cls(
            position=position,
            rotation=Vector3(pitch, yaw, 0.0),
            width=width,
            height=height,
            fov_deg=fov_deg,
        )
