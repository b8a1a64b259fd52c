from __future__ import annotations

from typing import TYPE_CHECKING

import numpy as np

from sdfmarch.protocols import RayTracer
from sdfmarch.raymarch.config import RayMarchConfig, RayMarchResult
from sdfmarch.shading import ShadingConfig, ambient_color, pack_color, shade

if TYPE_CHECKING:
    from sdfmarch.protocols import SDF
    from sdfmarch.vector import Vector3


class RayMarcher(RayTracer):
    """Sphere tracer over a scene field.

    States: marching -> hit | missed. Each step advances by the distance the
    field reports at the current sample point. On a miss ``point`` is
    ``origin + direction * depth`` at the final, already advanced depth.
    """

    def __init__(self, config: RayMarchConfig, scene: SDF) -> None:
        """Initialise the marcher."""
        self.cfg = config
        self.scene = scene

    def _result(
            self,
            termination: str,
            depth: float,
            point: Vector3,
            steps: int,
            points: list[Vector3] | None,
    ) -> RayMarchResult:
        path = None
        if points is not None:
            path = np.array([[q.x, q.y, q.z] for q in points], dtype=np.float64)
        return RayMarchResult(
            hit=termination == "hit",
            termination=termination,  # type: ignore[arg-type]
            depth=depth,
            point=point,
            steps=steps,
            points=path,
        )

    def trace(self, origin: Vector3, direction: Vector3) -> RayMarchResult:
        """March from ``origin`` along unit ``direction``."""
        cfg = self.cfg
        points: list[Vector3] | None = [] if cfg.record_path else None

        depth = 0.0
        for step in range(1, cfg.max_steps + 1):
            p = origin + direction * depth
            if points is not None:
                points.append(p)

            dist = self.scene.sdf(p)
            if abs(dist) < cfg.eps:
                return self._result("hit", depth, p, step, points)

            depth += dist
            if depth >= cfg.max_distance:
                return self._result("missed", depth, origin + direction * depth, step, points)

        return self._result("max_steps", depth, origin + direction * depth, cfg.max_steps, points)


def trace_ray(
        scene: SDF,
        origin: Vector3,
        direction: Vector3,
        march: RayMarchConfig | None = None,
        shading: ShadingConfig | None = None,
) -> int:
    """Trace one primary ray and return its packed 0x00RRGGBB color."""
    march = march or RayMarchConfig()
    shading = shading or ShadingConfig()

    result = RayMarcher(march, scene).trace(origin, direction)
    if not result.hit:
        return pack_color(shading.background)

    gradient = scene.gradient(result.point, shading.normal_eps)
    length = gradient.magnitude()
    if length == 0.0:
        return pack_color(ambient_color(shading))
    return pack_color(shade(result.point, gradient / length, -direction, shading))
