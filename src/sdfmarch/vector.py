from __future__ import annotations

import math
from dataclasses import dataclass
from typing import TYPE_CHECKING, Any

import numpy as np

if TYPE_CHECKING:
    from collections.abc import Callable


@dataclass(frozen=True, slots=True)
class Vector3:
    """Immutable 3-component float vector.

    Copied by value; every operation returns a new vector.
    Normalizing the zero vector is a precondition violation and raises
    ``ZeroDivisionError``.
    """

    x: float
    y: float
    z: float

    def __add__(self, other: Vector3) -> Vector3:
        return Vector3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vector3) -> Vector3:
        return Vector3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, s: float) -> Vector3:
        return Vector3(self.x * s, self.y * s, self.z * s)

    __rmul__ = __mul__

    def __truediv__(self, s: float) -> Vector3:
        return Vector3(self.x / s, self.y / s, self.z / s)

    def __neg__(self) -> Vector3:
        return Vector3(-self.x, -self.y, -self.z)

    def dot(self, other: Vector3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def magnitude(self) -> float:
        return math.sqrt(self.x * self.x + self.y * self.y + self.z * self.z)

    def normalize(self) -> Vector3:
        mag = self.magnitude()
        return Vector3(self.x / mag, self.y / mag, self.z / mag)

    def apply(self, fn: Callable[[float], float]) -> Vector3:
        """Apply ``fn`` to every component."""
        return Vector3(fn(self.x), fn(self.y), fn(self.z))

    def max(self, value: float) -> Vector3:
        return self.apply(lambda c: max(c, value))

    def min(self, value: float) -> Vector3:
        return self.apply(lambda c: min(c, value))

    def abs(self) -> Vector3:
        return self.apply(abs)

    def reflect(self, normal: Vector3) -> Vector3:
        """Reflect about ``normal`` (expected unit length): v - 2 (v . n) n."""
        return self - normal * (2.0 * self.dot(normal))

    def to_array(self) -> np.ndarray:
        return np.array([self.x, self.y, self.z], dtype=np.float64)

    @classmethod
    def from_array(cls, a: Any) -> Vector3:
        """Build from any length-3 array-like."""
        x, y, z = (float(c) for c in a)
        return cls(x, y, z)

    @classmethod
    def zero(cls) -> Vector3:
        return cls(0.0, 0.0, 0.0)
