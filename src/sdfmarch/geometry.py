from __future__ import annotations

from dataclasses import dataclass

from sdfmarch.protocols import SDF
from sdfmarch.vector import Vector3


@dataclass(frozen=True, slots=True)
class Sphere(SDF):
    """Sphere of ``radius`` centered at the local origin."""

    radius: float

    def sdf(self, p: Vector3) -> float:
        return p.magnitude() - self.radius


@dataclass(frozen=True, slots=True)
class Cube(SDF):
    """Axis-aligned box centered at the local origin.

    Uses the inexact box field: the outside distance is exact, every interior
    point reports 0.
    """

    half_extents: Vector3

    def sdf(self, p: Vector3) -> float:
        return (p.abs() - self.half_extents).max(0.0).magnitude()


@dataclass(frozen=True, slots=True)
class Plane(SDF):
    """Infinite plane through the local origin. ``n`` is its unit normal."""

    n: Vector3

    def sdf(self, p: Vector3) -> float:
        return p.dot(self.n)
