from __future__ import annotations

import math
from dataclasses import dataclass, field
from enum import Enum

from sdfmarch.math_utils import difference, smooth_difference, smooth_max, smooth_min
from sdfmarch.matrix import Matrix4
from sdfmarch.protocols import SDF
from sdfmarch.vector import Vector3


class CSGOperator(Enum):
    UNION = "union"
    INTERSECT = "intersect"
    DIFFERENCE = "difference"
    UNION_SMOOTH = "union_smooth"
    INTERSECT_SMOOTH = "intersect_smooth"
    DIFFERENCE_SMOOTH = "difference_smooth"

    @property
    def is_smooth(self) -> bool:
        return self in (
            CSGOperator.UNION_SMOOTH,
            CSGOperator.INTERSECT_SMOOTH,
            CSGOperator.DIFFERENCE_SMOOTH,
        )


@dataclass(frozen=True, slots=True)
class CSG(SDF):
    """Boolean combination of two child fields.

    ``k`` is the blend radius of the smooth operators and is ignored by the
    hard ones.
    """

    a: SDF
    b: SDF
    op: CSGOperator = CSGOperator.UNION
    k: float = 0.0

    def __post_init__(self) -> None:
        if self.op.is_smooth and self.k == 0.0:
            msg = f"{self.op.name} needs a non-zero smoothing radius"
            raise ValueError(msg)

    def sdf(self, p: Vector3) -> float:
        da = self.a.sdf(p)
        db = self.b.sdf(p)
        match self.op:
            case CSGOperator.UNION:
                return min(da, db)
            case CSGOperator.INTERSECT:
                return max(da, db)
            case CSGOperator.DIFFERENCE:
                return difference(da, db)
            case CSGOperator.UNION_SMOOTH:
                return smooth_min(da, db, self.k)
            case CSGOperator.INTERSECT_SMOOTH:
                return smooth_max(da, db, self.k)
            case CSGOperator.DIFFERENCE_SMOOTH:
                return smooth_difference(da, db, self.k)


@dataclass(frozen=True, slots=True)
class Transform(SDF):
    """Evaluate ``child`` in its own frame placed in the world by ``matrix``.

    The inverse is computed once here and reused for every query.
    """

    child: SDF
    matrix: Matrix4
    inverse: Matrix4 = field(init=False, repr=False, compare=False)

    def __post_init__(self) -> None:
        object.__setattr__(self, "inverse", self.matrix.inverse())

    def sdf(self, p: Vector3) -> float:
        return self.child.sdf(self.inverse.transform_point(p))


@dataclass(frozen=True, slots=True)
class Scale(SDF):
    """Uniform scale. ``factor`` must be positive."""

    child: SDF
    factor: float

    def sdf(self, p: Vector3) -> float:
        return self.child.sdf(p / self.factor) * self.factor


@dataclass(frozen=True, slots=True)
class Repeat(SDF):
    """Infinite tiling of ``child`` with cell size ``period`` per axis.

    Coordinates are folded as ``(|p| mod period) - period / 2``. Taking the
    absolute value first mirrors the tiling about each axis plane. The
    remainder takes the sign of the dividend, as ``math.fmod`` does.
    """

    child: SDF
    period: Vector3

    def sdf(self, p: Vector3) -> float:
        cell = Vector3(
            math.fmod(abs(p.x), self.period.x) - 0.5 * self.period.x,
            math.fmod(abs(p.y), self.period.y) - 0.5 * self.period.y,
            math.fmod(abs(p.z), self.period.z) - 0.5 * self.period.z,
        )
        return self.child.sdf(cell)


def union(a: SDF, b: SDF) -> CSG:
    return CSG(a, b, CSGOperator.UNION)


def intersect(a: SDF, b: SDF) -> CSG:
    return CSG(a, b, CSGOperator.INTERSECT)


def subtract(a: SDF, b: SDF) -> CSG:
    """``a`` with ``b`` carved out."""
    return CSG(a, b, CSGOperator.DIFFERENCE)


def smooth_union(a: SDF, b: SDF, k: float) -> CSG:
    return CSG(a, b, CSGOperator.UNION_SMOOTH, k)


def smooth_intersect(a: SDF, b: SDF, k: float) -> CSG:
    return CSG(a, b, CSGOperator.INTERSECT_SMOOTH, k)


def smooth_subtract(a: SDF, b: SDF, k: float) -> CSG:
    return CSG(a, b, CSGOperator.DIFFERENCE_SMOOTH, k)


def translate(child: SDF, offset: Vector3) -> Transform:
    return Transform(child, Matrix4.translate(offset))


def rotate(child: SDF, angles: Vector3) -> Transform:
    """Rotate by euler angles in radians, X first, then Y, then Z."""
    return Transform(child, Matrix4.rotate(angles))


def scale(child: SDF, factor: float) -> Scale:
    return Scale(child, factor)


def repeat(child: SDF, period: Vector3) -> Repeat:
    return Repeat(child, period)
