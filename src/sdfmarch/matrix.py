from __future__ import annotations

import math
from typing import Any

import numpy as np

from sdfmarch.vector import Vector3


class Matrix4:
    """4x4 homogeneous transform.

    Storage is a read-only row-major ``(4, 4)`` float64 array. Points are
    treated as row vectors, ``[x, y, z, 1] @ M``, so the translation lives in
    the last row and ``A * B`` applies ``A`` first, then ``B``.

    ``A * v`` transforms ``v`` as a point (translation applies). Use
    ``transform_direction`` for directions.
    """

    __slots__ = ("_m",)

    def __init__(self, data: Any) -> None:
        """Build from 16 values in row-major order or any (4, 4) array-like."""
        m = np.array(data, dtype=np.float64).reshape(4, 4)
        m.setflags(write=False)
        self._m = m

    @classmethod
    def identity(cls) -> Matrix4:
        return cls(np.eye(4))

    @classmethod
    def translate(cls, v: Vector3) -> Matrix4:
        return cls([
            1.0, 0.0, 0.0, 0.0,
            0.0, 1.0, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            v.x, v.y, v.z, 1.0,
        ])

    @classmethod
    def rotate_x(cls, a: float) -> Matrix4:
        c, s = math.cos(a), math.sin(a)
        return cls([
            1.0, 0.0, 0.0, 0.0,
            0.0, c, -s, 0.0,
            0.0, s, c, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @classmethod
    def rotate_y(cls, a: float) -> Matrix4:
        c, s = math.cos(a), math.sin(a)
        return cls([
            c, 0.0, s, 0.0,
            0.0, 1.0, 0.0, 0.0,
            -s, 0.0, c, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @classmethod
    def rotate_z(cls, a: float) -> Matrix4:
        c, s = math.cos(a), math.sin(a)
        return cls([
            c, -s, 0.0, 0.0,
            s, c, 0.0, 0.0,
            0.0, 0.0, 1.0, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    @classmethod
    def rotate(cls, angles: Vector3) -> Matrix4:
        """Composed rotation Rx * Ry * Rz (X applied first, then Y, then Z)."""
        return cls.rotate_x(angles.x) * cls.rotate_y(angles.y) * cls.rotate_z(angles.z)

    @classmethod
    def scale(cls, f: float) -> Matrix4:
        return cls([
            f, 0.0, 0.0, 0.0,
            0.0, f, 0.0, 0.0,
            0.0, 0.0, f, 0.0,
            0.0, 0.0, 0.0, 1.0,
        ])

    def get(self, col: int, row: int) -> float:
        return float(self._m[row, col])

    def row(self, n: int) -> np.ndarray:
        return self._m[n, :]

    def col(self, n: int) -> np.ndarray:
        return self._m[:, n]

    def to_array(self) -> np.ndarray:
        return self._m.copy()

    def transform_point(self, v: Vector3) -> Vector3:
        h = np.array([v.x, v.y, v.z, 1.0]) @ self._m
        w = h[3]
        return Vector3(float(h[0] / w), float(h[1] / w), float(h[2] / w))

    def transform_direction(self, v: Vector3) -> Vector3:
        """Transform ``v`` with w=0: rotation and scale only, no translation."""
        h = np.array([v.x, v.y, v.z, 0.0]) @ self._m
        return Vector3(float(h[0]), float(h[1]), float(h[2]))

    def inverse(self) -> Matrix4:
        """Closed-form inverse via the adjugate and the 2x2 sub-determinants.

        The matrix must be non-singular. An exactly zero determinant raises
        ``ValueError``; a nearly singular one gives meaningless values.
        """
        (a00, a01, a02, a03), (a10, a11, a12, a13), (a20, a21, a22, a23), (a30, a31, a32, a33) = (
            (float(c) for c in r) for r in self._m
        )

        s0 = a00 * a11 - a10 * a01
        s1 = a00 * a12 - a10 * a02
        s2 = a00 * a13 - a10 * a03
        s3 = a01 * a12 - a11 * a02
        s4 = a01 * a13 - a11 * a03
        s5 = a02 * a13 - a12 * a03

        c5 = a22 * a33 - a32 * a23
        c4 = a21 * a33 - a31 * a23
        c3 = a21 * a32 - a31 * a22
        c2 = a20 * a33 - a30 * a23
        c1 = a20 * a32 - a30 * a22
        c0 = a20 * a31 - a30 * a21

        det = s0 * c5 - s1 * c4 + s2 * c3 + s3 * c2 - s4 * c1 + s5 * c0
        if det == 0.0:
            msg = "Matrix is singular and cannot be inverted"
            raise ValueError(msg)
        inv = 1.0 / det

        return Matrix4([
            (a11 * c5 - a12 * c4 + a13 * c3) * inv,
            (-a01 * c5 + a02 * c4 - a03 * c3) * inv,
            (a31 * s5 - a32 * s4 + a33 * s3) * inv,
            (-a21 * s5 + a22 * s4 - a23 * s3) * inv,

            (-a10 * c5 + a12 * c2 - a13 * c1) * inv,
            (a00 * c5 - a02 * c2 + a03 * c1) * inv,
            (-a30 * s5 + a32 * s2 - a33 * s1) * inv,
            (a20 * s5 - a22 * s2 + a23 * s1) * inv,

            (a10 * c4 - a11 * c2 + a13 * c0) * inv,
            (-a00 * c4 + a01 * c2 - a03 * c0) * inv,
            (a30 * s4 - a31 * s2 + a33 * s0) * inv,
            (-a20 * s4 + a21 * s2 - a23 * s0) * inv,

            (-a10 * c3 + a11 * c1 - a12 * c0) * inv,
            (a00 * c3 - a01 * c1 + a02 * c0) * inv,
            (-a30 * s3 + a31 * s1 - a32 * s0) * inv,
            (a20 * s3 - a21 * s1 + a22 * s0) * inv,
        ])

    def __mul__(self, other: Any) -> Any:
        if isinstance(other, Matrix4):
            return Matrix4(self._m @ other._m)
        if isinstance(other, Vector3):
            return self.transform_point(other)
        if isinstance(other, (int, float)):
            return Matrix4(self._m * float(other))
        return NotImplemented

    def __rmul__(self, other: Any) -> Any:
        if isinstance(other, (int, float)):
            return Matrix4(self._m * float(other))
        return NotImplemented

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, Matrix4):
            return NotImplemented
        return bool(np.array_equal(self._m, other._m))

    __hash__ = None  # type: ignore[assignment]

    def allclose(self, other: Matrix4, atol: float = 1e-9) -> bool:
        return bool(np.allclose(self._m, other._m, atol=atol))

    def __repr__(self) -> str:
        rows = ", ".join(str([float(c) for c in r]) for r in self._m)
        return f"Matrix4([{rows}])"

    def __getstate__(self) -> tuple[float, ...]:
        return tuple(self._m.ravel().tolist())

    def __setstate__(self, state: tuple[float, ...]) -> None:
        m = np.array(state, dtype=np.float64).reshape(4, 4)
        m.setflags(write=False)
        self._m = m
