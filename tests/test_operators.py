"""Unit tests for CSG combinators and spatial operators."""

import math
import pickle

import pytest

from sdfmarch.geometry import Cube, Plane, Sphere
from sdfmarch.matrix import Matrix4
from sdfmarch.operators import (
    CSG,
    CSGOperator,
    Repeat,
    Scale,
    Transform,
    intersect,
    repeat,
    rotate,
    scale,
    smooth_intersect,
    smooth_subtract,
    smooth_union,
    subtract,
    translate,
    union,
)
from sdfmarch.vector import Vector3

SAMPLES = [
    Vector3(0.0, 0.0, 0.0),
    Vector3(0.8, 0.1, 0.0),
    Vector3(1.5, -0.3, 0.2),
    Vector3(-2.0, 1.0, 3.0),
    Vector3(0.4, 0.4, -0.4),
]


@pytest.fixture
def pair():
    a = Sphere(1.0)
    b = translate(Cube(Vector3(0.5, 0.5, 0.5)), Vector3(1.0, 0.0, 0.0))
    return a, b


class TestHardCSG:
    """Union / intersect / difference identities."""

    @pytest.mark.parametrize("p", SAMPLES)
    def test_union_is_min(self, pair, p):
        a, b = pair
        assert union(a, b).sdf(p) == min(a.sdf(p), b.sdf(p))

    @pytest.mark.parametrize("p", SAMPLES)
    def test_intersect_is_max(self, pair, p):
        a, b = pair
        assert intersect(a, b).sdf(p) == max(a.sdf(p), b.sdf(p))

    @pytest.mark.parametrize("p", SAMPLES)
    def test_difference_is_max_of_a_and_negated_b(self, pair, p):
        a, b = pair
        assert subtract(a, b).sdf(p) == max(a.sdf(p), -b.sdf(p))

    def test_default_operator_is_union(self, pair):
        a, b = pair
        assert CSG(a, b).op is CSGOperator.UNION


class TestSmoothCSG:
    """Smooth variants and radius validation."""

    @pytest.mark.parametrize("op", [
        CSGOperator.UNION_SMOOTH,
        CSGOperator.INTERSECT_SMOOTH,
        CSGOperator.DIFFERENCE_SMOOTH,
    ])
    def test_zero_radius_rejected(self, pair, op):
        a, b = pair
        with pytest.raises(ValueError, match="smoothing radius"):
            CSG(a, b, op, 0.0)

    def test_hard_operators_ignore_radius(self, pair):
        a, b = pair
        assert not CSGOperator.UNION.is_smooth
        CSG(a, b, CSGOperator.INTERSECT, 0.0)

    @pytest.mark.parametrize("p", SAMPLES)
    def test_smooth_union_below_hard_union(self, pair, p):
        a, b = pair
        assert smooth_union(a, b, 0.3).sdf(p) <= union(a, b).sdf(p) + 1e-12

    @pytest.mark.parametrize("p", SAMPLES)
    def test_smooth_union_converges_to_union(self, pair, p):
        a, b = pair
        assert smooth_union(a, b, 1e-9).sdf(p) == pytest.approx(union(a, b).sdf(p), abs=1e-9)

    @pytest.mark.parametrize("p", SAMPLES)
    def test_smooth_intersect_and_subtract_bound_hard_ones(self, pair, p):
        a, b = pair
        assert smooth_intersect(a, b, 0.3).sdf(p) >= intersect(a, b).sdf(p) - 1e-12
        assert smooth_subtract(a, b, 0.3).sdf(p) >= subtract(a, b).sdf(p) - 1e-12


class TestTransform:
    """Rigid transforms with a cached inverse."""

    def test_translated_sphere_center_is_interior(self):
        t = Vector3(1.0, -2.0, 3.0)
        node = Transform(Sphere(0.75), Matrix4.translate(t))
        assert node.sdf(t) == pytest.approx(-0.75)
        assert node.sdf(t + Vector3(2.0, 0.0, 0.0)) == pytest.approx(1.25)

    def test_inverse_is_cached_once(self, monkeypatch):
        m = Matrix4.rotate(Vector3(0.2, 0.4, 0.6)) * Matrix4.translate(Vector3(1.0, 1.0, 1.0))
        node = Transform(Sphere(1.0), m)
        assert node.inverse.allclose(m.inverse())

        def _no_inverse(self):
            raise AssertionError("inverse recomputed during a query")

        monkeypatch.setattr(Matrix4, "inverse", _no_inverse)
        node.sdf(Vector3(0.5, 0.5, 0.5))

    def test_rotated_box(self):
        # 90 degrees about z swaps the x and y extents
        node = rotate(Cube(Vector3(2.0, 0.5, 0.5)), Vector3(0.0, 0.0, math.pi / 2.0))
        assert node.sdf(Vector3(0.0, 3.0, 0.0)) == pytest.approx(1.0)
        assert node.sdf(Vector3(3.0, 0.0, 0.0)) == pytest.approx(2.5)

    def test_singular_matrix_rejected(self):
        with pytest.raises(ValueError):
            Transform(Sphere(1.0), Matrix4.scale(0.0))


class TestScale:
    def test_scaled_sphere(self):
        node = Scale(Sphere(1.0), 2.0)
        assert node.sdf(Vector3(4.0, 0.0, 0.0)) == 2.0
        assert node.sdf(Vector3(0.0, 0.0, 0.0)) == -2.0

    def test_helper(self):
        assert scale(Sphere(1.0), 0.5).sdf(Vector3(0.0, 1.0, 0.0)) == pytest.approx(0.5)


class TestRepeat:
    """Mirrored domain repetition."""

    def test_cell_centers_are_interior(self):
        node = Repeat(Sphere(0.5), Vector3(2.0, 2.0, 2.0))
        for p in (Vector3(1.0, 1.0, 1.0), Vector3(3.0, 1.0, 5.0), Vector3(-1.0, -3.0, 1.0)):
            assert node.sdf(p) == pytest.approx(-0.5)

    def test_cell_corner(self):
        node = repeat(Sphere(0.5), Vector3(2.0, 2.0, 2.0))
        assert node.sdf(Vector3(0.0, 0.0, 0.0)) == pytest.approx(math.sqrt(3.0) - 0.5)

    @pytest.mark.parametrize("p", SAMPLES)
    def test_tiling_is_mirrored_about_origin(self, p):
        node = Repeat(translate(Sphere(0.3), Vector3(0.2, 0.0, 0.0)), Vector3(1.5, 2.0, 2.5))
        assert node.sdf(p) == node.sdf(Vector3(-p.x, -p.y, -p.z))

    def test_periodic_in_positive_half_space(self):
        node = Repeat(Sphere(0.3), Vector3(1.0, 1.0, 1.0))
        p = Vector3(0.2, 0.7, 0.4)
        shifted = p + Vector3(3.0, 1.0, 2.0)
        assert node.sdf(shifted) == pytest.approx(node.sdf(p))

    def test_negative_period_folds_with_dividend_sign(self):
        node = Repeat(Sphere(0.5), Vector3(-2.0, -2.0, -2.0))
        # fmod(0.5, -2) == 0.5, so the cell point is (0.5 + 1, 0 + 1, 0 + 1)
        expected = math.sqrt(1.5 ** 2 + 1.0 + 1.0) - 0.5
        assert node.sdf(Vector3(0.5, 0.0, 0.0)) == pytest.approx(expected)


class TestTreeValueSemantics:
    def test_tree_pickles(self):
        tree = smooth_subtract(
            translate(Plane(Vector3(0.0, 1.0, 0.0)), Vector3(0.0, -1.0, 0.0)),
            repeat(Sphere(0.3), Vector3(1.0, 1.0, 1.0)),
            0.1,
        )
        restored = pickle.loads(pickle.dumps(tree))
        for p in SAMPLES:
            assert restored.sdf(p) == tree.sdf(p)

    def test_nodes_are_frozen(self):
        node = Sphere(1.0)
        with pytest.raises(AttributeError):
            node.radius = 2.0  # type: ignore[misc]
