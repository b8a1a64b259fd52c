from __future__ import annotations

import logging

import numpy as np

from sdfmarch.camera.camera3d import Camera3D
from sdfmarch.frame import FrameRenderer
from sdfmarch.geometry import Cube, Plane, Sphere
from sdfmarch.operators import repeat, smooth_subtract, smooth_union, translate
from sdfmarch.raymarch.config import RayMarchConfig
from sdfmarch.raymarch.marcher import RayMarcher
from sdfmarch.scene import Scene
from sdfmarch.vector import Vector3
from sdfmarch.viz.plot2d import RayPathPlotter
from sdfmarch.viz.plot3d import FramePlotter

logger = logging.getLogger(__name__)


def build_scene() -> Scene:
    """Ground plane with a grid of dimples, plus a blob of cube and sphere."""
    ground = translate(Plane(Vector3(0.0, 1.0, 0.0)), Vector3(0.0, -1.0, 0.0))
    dimples = repeat(Sphere(0.3), Vector3(1.0, 1.0, 1.0))
    floor = smooth_subtract(ground, translate(dimples, Vector3(0.0, -1.0, 0.0)), 0.1)

    blob = smooth_union(
        translate(Cube(Vector3(0.4, 0.4, 0.4)), Vector3(-0.3, 0.0, 3.0)),
        translate(Sphere(0.5), Vector3(0.4, 0.2, 3.0)),
        0.3,
    )
    return Scene.of(floor, blob)


def main() -> None:
    logging.basicConfig(level=logging.INFO)
    scene = build_scene()

    camera = Camera3D(
        position=Vector3(0.0, 0.5, 0.0),
        rotation=Vector3(-0.2, 0.0, 0.0),
        width=200,
        height=150,
    )
    frame = FrameRenderer(scene, camera).render()

    # Debug fan of rays along the middle scanline
    marcher = RayMarcher(RayMarchConfig(record_path=True), scene)
    y = camera.height // 2
    results = [marcher.trace(*camera.ray(int(x), y)) for x in np.linspace(0, camera.width - 1, 21)]
    hits = sum(r.hit for r in results)
    logger.info("Debug fan: %d/%d rays hit", hits, len(results))

    paths = RayPathPlotter()
    paths.draw_slice(scene, xlim=(-3.0, 3.0), zlim=(-1.0, 8.0), y=0.0)
    paths.draw_rays(results)

    FramePlotter(title="Smooth CSG").draw(frame)
    paths.show(xlim=(-3.0, 3.0), zlim=(-1.0, 8.0))


if __name__ == "__main__":
    main()
