"""Unit tests for triangle intersection.

Tests cover:
- Barycentric coordinates at the vertices and the centroid
- Rays outside the triangle and behind the origin
- Flat face normal orientation
- Phong-interpolated vertex normals
- Degenerate (singular) configurations
"""

import math

import numpy as np
import pytest


def _triangle(material, **normals):
    from whitted.geometry import Triangle

    return Triangle((0.0, 0.0, -1.0), (1.0, 0.0, -1.0), (0.0, 1.0, -1.0), material, **normals)


class TestTriangleBarycentric:
    """Tests for the barycentric solve."""

    @pytest.mark.parametrize(
        "vertex, expected",
        [
            ((0.0, 0.0, -1.0), (1.0, 0.0, 0.0)),
            ((1.0, 0.0, -1.0), (0.0, 1.0, 0.0)),
            ((0.0, 1.0, -1.0), (0.0, 0.0, 1.0)),
        ],
    )
    def test_vertices(self, diffuse_material, vertex, expected):
        """A ray aimed at vertex Pk yields the k-th unit barycentric weight."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        solution = tri.barycentric(Ray((0.0, 0.0, 0.0), vertex))

        assert solution is not None
        t, alpha, beta, gamma = solution
        assert t == pytest.approx(np.linalg.norm(vertex))
        assert (alpha, beta, gamma) == pytest.approx(expected, abs=1e-9)

    def test_centroid(self, diffuse_material):
        """The centroid has equal weights."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        _, alpha, beta, gamma = tri.barycentric(Ray((0.0, 0.0, 0.0), (1 / 3, 1 / 3, -1.0)))
        assert (alpha, beta, gamma) == pytest.approx((1 / 3, 1 / 3, 1 / 3))

    def test_parallel_ray_is_singular(self, diffuse_material):
        """A ray in the triangle's plane direction has no solution."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        assert tri.barycentric(Ray((0.0, 0.0, 0.0), (1.0, 1.0, 0.0))) is None
        assert tri.intersect(Ray((0.0, 0.0, 0.0), (1.0, 1.0, 0.0)), 1e-4, math.inf) is None


class TestTriangleIntersection:
    """Tests for ray-triangle intersection."""

    def test_interior_hit(self, diffuse_material):
        """A ray through the interior hits with the flat face normal."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        hit = tri.intersect(Ray((0.25, 0.25, 0.0), (0.0, 0.0, -1.0)), 1e-4, math.inf)

        assert hit is not None
        assert hit.t == pytest.approx(1.0)
        np.testing.assert_allclose(hit.position, [0.25, 0.25, -1.0])
        # (P2 - P0) x (P2 - P1) faces the +z side for this winding
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0])

    def test_outside_misses(self, diffuse_material):
        """Rays through the plane outside the triangle miss."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        for x, y in ((0.8, 0.8), (-0.1, 0.5), (0.5, -0.1)):
            assert tri.intersect(Ray((x, y, 0.0), (0.0, 0.0, -1.0)), 1e-4, math.inf) is None

    def test_behind_origin_misses(self, diffuse_material):
        """A triangle behind the ray origin is not hit."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        assert tri.intersect(Ray((0.25, 0.25, 0.0), (0.0, 0.0, 1.0)), 1e-4, math.inf) is None

    def test_t_max_respected(self, diffuse_material):
        """Hits beyond t_max are rejected."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material)
        assert tri.intersect(Ray((0.25, 0.25, 0.0), (0.0, 0.0, -1.0)), 1e-4, 0.5) is None

    def test_interpolated_normals(self, diffuse_material):
        """With all vertex normals set, the shading normal is interpolated."""
        from whitted.core.ray import Ray

        tri = _triangle(
            diffuse_material,
            n0=(0.0, 0.0, 1.0),
            n1=(0.0, 0.0, 1.0),
            n2=(0.0, 1.0, 0.0),
        )
        assert tri.has_vertex_normals

        hit = tri.intersect(Ray((0.0, 0.0, 0.0), (1 / 3, 1 / 3, -1.0)), 1e-4, math.inf)
        assert hit is not None
        expected = np.array([0.0, 1.0, 2.0]) / math.sqrt(5.0)
        np.testing.assert_allclose(hit.normal, expected, atol=1e-9)

    def test_partial_normals_fall_back_to_face(self, diffuse_material):
        """Only a complete set of vertex normals enables smoothing."""
        from whitted.core.ray import Ray

        tri = _triangle(diffuse_material, n0=(0.0, 1.0, 0.0), n1=(0.0, 1.0, 0.0))
        assert not tri.has_vertex_normals

        hit = tri.intersect(Ray((0.25, 0.25, 0.0), (0.0, 0.0, -1.0)), 1e-4, math.inf)
        np.testing.assert_allclose(hit.normal, [0.0, 0.0, 1.0])
