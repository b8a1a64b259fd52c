"""Unit tests for scene aggregation."""

import pytest

from sdfmarch.geometry import Cube, Plane, Sphere
from sdfmarch.operators import translate
from sdfmarch.scene import Scene
from sdfmarch.vector import Vector3


class TestScene:
    def test_min_over_shapes(self):
        a = translate(Sphere(1.0), Vector3(-3.0, 0.0, 0.0))
        b = translate(Cube(Vector3(0.5, 0.5, 0.5)), Vector3(3.0, 0.0, 0.0))
        c = Plane(Vector3(0.0, 1.0, 0.0))
        scene = Scene.of(a, b, c)
        for p in (Vector3(0.0, 4.0, 0.0), Vector3(-3.0, 0.5, 0.0), Vector3(2.0, 2.0, 0.0)):
            assert scene.sdf(p) == min(a.sdf(p), b.sdf(p), c.sdf(p))

    def test_empty_scene_rejected(self):
        with pytest.raises(ValueError, match="at least one shape"):
            Scene(shapes=())

    def test_empty_generator_rejected(self):
        with pytest.raises(ValueError, match="at least one shape"):
            Scene(shapes=(s for s in ()))  # type: ignore[arg-type]

    def test_generator_input_is_kept(self):
        scene = Scene(shapes=(Sphere(r) for r in (1.0, 2.0)))  # type: ignore[arg-type]
        assert len(scene) == 2
        assert scene.sdf(Vector3(0.0, 0.0, 3.0)) == 1.0

    def test_iteration_keeps_insertion_order(self):
        shapes = [Sphere(1.0), Sphere(2.0), Sphere(3.0)]
        scene = Scene(shapes=tuple(shapes))
        assert list(scene) == shapes
        assert len(scene) == 3

    def test_list_input_becomes_tuple(self):
        scene = Scene(shapes=[Sphere(1.0)])  # type: ignore[arg-type]
        assert isinstance(scene.shapes, tuple)

    def test_scene_normal(self, unit_sphere_scene):
        p = Vector3(0.0, 0.0, -1.001)
        n = unit_sphere_scene.normal(p)
        assert (n - Vector3(0.0, 0.0, -1.0)).magnitude() < 1e-6
