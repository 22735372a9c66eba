"""Unit tests for plane intersection."""

import math

import numpy as np
import pytest


class TestPlane:
    """Tests for ray-plane intersection."""

    def test_normal_is_normalized(self, diffuse_material):
        """The plane normal is stored with unit length."""
        from whitted.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (0.0, 3.0, 0.0), diffuse_material)
        np.testing.assert_allclose(plane.normal, [0.0, 1.0, 0.0])

    def test_zero_normal_rejected(self, diffuse_material):
        """A zero normal raises ValueError."""
        from whitted.geometry import Plane

        with pytest.raises(ValueError):
            Plane((0.0, 0.0, 0.0), (0.0, 0.0, 0.0), diffuse_material)

    def test_hit_from_above(self, diffuse_material):
        """A downward ray hits the floor at the expected distance."""
        from whitted.core.ray import Ray
        from whitted.geometry import Plane

        plane = Plane((0.0, -1.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        hit = plane.intersect(Ray((2.0, 3.0, -1.0), (0.0, -1.0, 0.0)), 1e-4, math.inf)

        assert hit is not None
        assert hit.t == pytest.approx(4.0)
        np.testing.assert_allclose(hit.position, [2.0, -1.0, -1.0])
        np.testing.assert_allclose(hit.normal, [0.0, 1.0, 0.0])

    def test_hit_from_behind_keeps_normal(self, diffuse_material):
        """The normal is not flipped toward the viewer."""
        from whitted.core.ray import Ray
        from whitted.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        hit = plane.intersect(Ray((0.0, -2.0, 0.0), (0.0, 1.0, 0.0)), 1e-4, math.inf)

        assert hit is not None
        assert hit.t == pytest.approx(2.0)
        np.testing.assert_allclose(hit.normal, [0.0, 1.0, 0.0])

    def test_parallel_ray_misses(self, diffuse_material):
        """A ray parallel to the plane never hits, even if it lies in the plane."""
        from whitted.core.ray import Ray
        from whitted.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        assert plane.intersect(Ray((0.0, 1.0, 0.0), (1.0, 0.0, 0.0)), 1e-4, math.inf) is None
        assert plane.intersect(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)), 1e-4, math.inf) is None

    def test_plane_behind_ray(self, diffuse_material):
        """Negative t is outside the valid range."""
        from whitted.core.ray import Ray
        from whitted.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        assert plane.intersect(Ray((0.0, 1.0, 0.0), (0.0, 1.0, 0.0)), 1e-4, math.inf) is None

    def test_range_is_open(self, diffuse_material):
        """Hits at exactly t_min or t_max are rejected."""
        from whitted.core.ray import Ray
        from whitted.geometry import Plane

        plane = Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        ray = Ray((0.0, 2.0, 0.0), (0.0, -1.0, 0.0))
        assert plane.intersect(ray, 2.0, math.inf) is None
        assert plane.intersect(ray, 1e-4, 2.0) is None
        assert plane.intersect(ray, 1e-4, 2.5) is not None
