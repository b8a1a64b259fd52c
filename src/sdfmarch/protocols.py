from __future__ import annotations

from typing import TYPE_CHECKING, Protocol

from sdfmarch.vector import Vector3

if TYPE_CHECKING:
    from sdfmarch.raymarch.config import RayMarchResult

NORMAL_EPS: float = 1e-4

_DX = Vector3(1.0, 0.0, 0.0)
_DY = Vector3(0.0, 1.0, 0.0)
_DZ = Vector3(0.0, 0.0, 1.0)


class SDF(Protocol):
    """Pure signed distance field contract.

    Implementations subclass this explicitly to share the default
    finite-difference ``normal``.
    """

    def sdf(self, p: Vector3) -> float:
        """Signed distance to surface at point p (negative inside)."""
        ...

    def gradient(self, p: Vector3, eps: float = NORMAL_EPS) -> Vector3:
        """Unnormalized central-difference gradient of ``sdf`` at p.

        Zero where the field is locally flat, e.g. inside a ``Cube``.
        """
        dx = _DX * eps
        dy = _DY * eps
        dz = _DZ * eps
        return Vector3(
            self.sdf(p + dx) - self.sdf(p - dx),
            self.sdf(p + dy) - self.sdf(p - dy),
            self.sdf(p + dz) - self.sdf(p - dz),
        )

    def normal(self, p: Vector3, eps: float = NORMAL_EPS) -> Vector3:
        """Surface normal at p: the normalized ``gradient``."""
        return self.gradient(p, eps).normalize()


class RayTracer(Protocol):
    """Ray tracer interface producing a RayMarchResult."""

    def trace(self, origin: Vector3, direction: Vector3) -> RayMarchResult:
        ...
