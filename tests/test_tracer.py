"""Tests for the recursive Whitted tracer.

Tests cover:
- Background color for rays that escape
- Ambient plus direct lighting on a diffuse sphere
- Hard shadows from an occluding plane
- Phong specular highlight
- Mirror reflection and the recursion bound
- Refraction through a glass sphere
"""

import math

import numpy as np
import pytest


def _sphere_scene(material, lights=(), background=(0.0, 0.0, 0.0), ambient=(1.0, 1.0, 1.0)):
    from whitted.geometry import Sphere
    from whitted.scene import Scene

    return Scene(
        primitives=[Sphere((0.0, 0.0, -5.0), 1.0, material)],
        lights=list(lights),
        ambient_light=ambient,
        background_color=background,
    )


class TestTracerBasics:
    """Tests for escaped rays and construction."""

    def test_miss_returns_background(self, diffuse_material):
        """A ray that hits nothing returns the background color."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer

        scene = _sphere_scene(diffuse_material, background=(0.2, 0.3, 0.4))
        result = Tracer(scene).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)))
        np.testing.assert_allclose(result, [0.2, 0.3, 0.4])

    def test_background_not_aliased(self, diffuse_material):
        """The returned background color is a fresh array."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer

        scene = _sphere_scene(diffuse_material, background=(0.2, 0.3, 0.4))
        result = Tracer(scene).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, 1.0)))
        result += 1.0
        np.testing.assert_allclose(scene.background_color, [0.2, 0.3, 0.4])

    def test_negative_depth_rejected(self, diffuse_material):
        """max_depth must be non-negative."""
        from whitted.core.tracer import Tracer

        with pytest.raises(ValueError):
            Tracer(_sphere_scene(diffuse_material), max_depth=-1)


class TestDirectLighting:
    """Tests for ambient, diffuse and specular shading."""

    def test_ambient_only_without_lights(self, diffuse_material):
        """With no lights a diffuse surface shows ambient * ka."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer

        scene = _sphere_scene(diffuse_material, ambient=(0.5, 0.5, 0.5))
        result = Tracer(scene).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        np.testing.assert_allclose(result, [0.05, 0.05, 0.05])

    def test_lit_sphere_exceeds_ambient(self, diffuse_material):
        """A point light adds the Lambertian term on top of the ambient term."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.lights import PointLight

        light = PointLight((2.0, 2.0, 0.0), (10.0, 10.0, 10.0))
        scene = _sphere_scene(diffuse_material, lights=[light])
        result = Tracer(scene).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))

        # Hit at (0, 0, -4) with normal +z; light vector (2, 2, 4)
        n_dot_l = 4.0 / math.sqrt(24.0)
        expected = 0.1 + 10.0 / 24.0 * 0.8 * n_dot_l
        np.testing.assert_allclose(result, np.full(3, expected))
        assert np.all(result > 0.1)

    def test_light_behind_surface_adds_nothing(self, diffuse_material):
        """n.l < 0 is clamped to zero."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.geometry import Plane
        from whitted.lights import PointLight
        from whitted.scene import Scene

        scene = Scene(
            primitives=[Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)],
            lights=[PointLight((0.0, -3.0, 0.0), (5.0, 5.0, 5.0))],
            ambient_light=(1.0, 1.0, 1.0),
        )
        result = Tracer(scene).trace(Ray((0.0, 2.0, 0.0), (0.0, -1.0, 0.0)))
        np.testing.assert_allclose(result, [0.1, 0.1, 0.1])

    def test_occluded_light_gives_ambient(self, diffuse_material):
        """A plane between the surface and the light casts a hard shadow."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.geometry import Plane
        from whitted.lights import PointLight
        from whitted.scene import Scene

        floor = Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        # Parallel to the primary ray, so only the shadow ray can hit it
        blocker = Plane((5.0, 0.0, 0.0), (1.0, 0.0, 0.0), diffuse_material)
        light = PointLight((10.0, 2.0, 0.0), (100.0, 100.0, 100.0))
        ray = Ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0))

        lit = Tracer(Scene(primitives=[floor], lights=[light], ambient_light=(1.0, 1.0, 1.0))).trace(ray)
        shadowed = Tracer(
            Scene(primitives=[floor, blocker], lights=[light], ambient_light=(1.0, 1.0, 1.0))
        ).trace(ray)

        assert np.all(lit > 0.1)
        np.testing.assert_array_equal(shadowed, np.full(3, 0.1))

    def test_light_on_surface_adds_nothing(self, diffuse_material):
        """Lights sitting exactly on the hit point contribute nothing and do not fail."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.geometry import Plane
        from whitted.lights import PointLight, SpotLight
        from whitted.scene import Scene

        scene = Scene(
            primitives=[Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)],
            lights=[
                PointLight((0.0, 0.0, 0.0), (5.0, 5.0, 5.0)),
                SpotLight((0.0, 0.0, 0.0), (0.0, -1.0, 0.0), (5.0, 5.0, 5.0), 1.0, 90.0),
            ],
            ambient_light=(1.0, 1.0, 1.0),
        )
        result = Tracer(scene).trace(Ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0)))
        np.testing.assert_allclose(result, [0.1, 0.1, 0.1])

    def test_blocker_beyond_light_does_not_shadow(self, diffuse_material):
        """Only hits closer than the light occlude it."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.geometry import Plane
        from whitted.lights import PointLight
        from whitted.scene import Scene

        floor = Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), diffuse_material)
        beyond = Plane((20.0, 0.0, 0.0), (1.0, 0.0, 0.0), diffuse_material)
        light = PointLight((10.0, 2.0, 0.0), (100.0, 100.0, 100.0))
        scene = Scene(primitives=[floor, beyond], lights=[light], ambient_light=(1.0, 1.0, 1.0))

        result = Tracer(scene).trace(Ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0)))
        assert np.all(result > 0.1)

    def test_specular_highlight(self):
        """A light mirrored about the normal into the viewer adds ks * I."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.geometry import Plane
        from whitted.lights import PointLight
        from whitted.materials import Material
        from whitted.scene import Scene

        shiny = Material(ks=(0.5, 0.5, 0.5), p=10.0)
        scene = Scene(
            primitives=[Plane((0.0, 0.0, 0.0), (0.0, 1.0, 0.0), shiny)],
            lights=[PointLight((0.0, 2.0, 0.0), (4.0, 4.0, 4.0))],
        )
        result = Tracer(scene).trace(Ray((0.0, 1.0, 0.0), (0.0, -1.0, 0.0)))
        # Intensity 4 / 2^2 = 1; r.v = 1; kd and ka are black
        np.testing.assert_allclose(result, [0.5, 0.5, 0.5])


class TestRecursion:
    """Tests for mirror reflection, refraction and max_depth."""

    def test_mirror_reflects_background(self):
        """With max_depth=1 a mirror returns kr * background."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.materials import Material

        mirror = Material(kr=(0.5, 0.6, 0.7))
        scene = _sphere_scene(mirror, background=(0.2, 0.4, 1.0))
        result = Tracer(scene, max_depth=1).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        np.testing.assert_allclose(result, [0.1, 0.24, 0.7])

    def test_zero_depth_mirror_is_black(self):
        """With max_depth=0 no secondary rays are traced."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.materials import Material

        mirror = Material(ka=(1.0, 1.0, 1.0), kd=(1.0, 1.0, 1.0), kr=(0.5, 0.5, 0.5))
        scene = _sphere_scene(mirror, background=(1.0, 1.0, 1.0))
        result = Tracer(scene, max_depth=0).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        np.testing.assert_array_equal(result, np.zeros(3))

    def test_mirror_skips_local_shading(self, diffuse_material):
        """A mirror ignores ambient and direct light at its own hit."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.lights import PointLight
        from whitted.materials import Material

        mirror = Material(ka=(1.0, 1.0, 1.0), kd=(1.0, 1.0, 1.0), kr=(1.0, 1.0, 1.0))
        scene = _sphere_scene(mirror, lights=[PointLight((0.0, 0.0, 0.0), (9.0, 9.0, 9.0))])
        result = Tracer(scene, max_depth=3).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        np.testing.assert_array_equal(result, np.zeros(3))

    def test_mirror_sees_diffuse_object(self, diffuse_material):
        """A reflection ray picks up the shading of what it hits."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.geometry import Plane, Sphere
        from whitted.materials import Material
        from whitted.scene import Scene

        mirror = Material(kr=(0.5, 0.5, 0.5))
        scene = Scene(
            primitives=[
                Sphere((0.0, 0.0, -5.0), 1.0, mirror),
                Plane((0.0, 0.0, 2.0), (0.0, 0.0, -1.0), diffuse_material),
            ],
            ambient_light=(1.0, 1.0, 1.0),
        )
        result = Tracer(scene, max_depth=1).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        # The reflected ray travels +z and hits the plane, shaded ambient-only
        np.testing.assert_allclose(result, [0.05, 0.05, 0.05])

    def test_glass_sphere_transmits_background(self):
        """A transmission-only sphere refracts the incident ray straight through.

        With no kr the central ray is still refracted along its own direction,
        so it crosses both surfaces and is scaled by kt twice.
        """
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.materials import Material

        glass = Material(kt=(0.9, 0.9, 0.9), ior=1.5)
        scene = _sphere_scene(glass, background=(1.0, 0.5, 0.25))
        result = Tracer(scene, max_depth=5).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        # kt on entry and kt on exit, not a single kt
        np.testing.assert_allclose(result, np.array([1.0, 0.5, 0.25]) * 0.81, atol=1e-9)

    def test_glass_needs_two_levels(self):
        """With max_depth=1 the ray inside the glass cannot leave it."""
        from whitted.core.ray import Ray
        from whitted.core.tracer import Tracer
        from whitted.materials import Material

        glass = Material(kt=(0.9, 0.9, 0.9), ior=1.5)
        scene = _sphere_scene(glass, background=(1.0, 1.0, 1.0))
        result = Tracer(scene, max_depth=1).trace(Ray((0.0, 0.0, 0.0), (0.0, 0.0, -1.0)))
        np.testing.assert_array_equal(result, np.zeros(3))
