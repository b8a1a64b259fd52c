from __future__ import annotations

import logging
import math

from sdfmarch.camera.camera3d import Camera3D
from sdfmarch.frame import FrameConfig, FrameRenderer
from sdfmarch.geometry import Sphere
from sdfmarch.operators import repeat
from sdfmarch.raymarch.config import RayMarchConfig
from sdfmarch.scene import Scene
from sdfmarch.shading import ShadingConfig
from sdfmarch.vector import Vector3
from sdfmarch.viz.plot3d import FramePlotter


def build_scene() -> Scene:
    """Infinite grid of spheres, 2 units apart."""
    return Scene.of(repeat(Sphere(0.5), Vector3(2.0, 2.0, 2.0)))


def main() -> None:
    logging.basicConfig(level=logging.INFO)

    width, height = 240, 240
    camera = Camera3D(
        position=Vector3(0.0, 1.0, -2.0),
        rotation=Vector3(-math.pi / 12.0, math.pi / 8.0, 0.0),
        width=width,
        height=height,
        fov_deg=90.0,
    )

    renderer = FrameRenderer(
        scene=build_scene(),
        camera=camera,
        march=RayMarchConfig(eps=1e-3, max_distance=30.0),
        shading=ShadingConfig(),
        config=FrameConfig(),
    )
    frame = renderer.render()

    plotter = FramePlotter(title="Domain repetition")
    plotter.show(frame)


if __name__ == "__main__":
    main()
