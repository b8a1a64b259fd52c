from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Literal

from sdfmarch.vector import Vector3


@dataclass(frozen=True, slots=True)
class RayMarchConfig:
    """Sphere-tracing parameters.

    ``max_steps`` only guards against rays that never settle (grazing hits,
    non-finite directions); well-formed rays stop on ``eps`` or
    ``max_distance`` first.
    """

    eps: float = 1e-3
    max_distance: float = 30.0
    max_steps: int = 1000
    record_path: bool = False


Termination = Literal["hit", "missed", "max_steps"]


@dataclass(frozen=True, slots=True)
class RayMarchResult:
    hit: bool
    termination: Termination
    depth: float
    point: Vector3
    steps: int
    points: Any = None
