"""Recursive Whitted ray tracer.

This module implements the tracing kernel: for a ray it finds the nearest
surface and either shades it locally or follows the mirror and refraction
rays recursively.

Per-hit behavior depends on the material:

    - Mirror/transmissive surfaces (kr or kt present): no local shading. While
      depth < max_depth, a reflection ray (kr) and a refraction ray (kt) are
      traced and their colors weighted component-wise by kr and kt. Total
      internal reflection drops the refraction term. At max_depth the result
      is black.
    - Other surfaces: ambient_light * ka plus direct lighting from every
      unoccluded light (Lambertian diffuse and optional Phong specular).

Rays that hit nothing return the scene's background color.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.core.tracer import Tracer
    >>> from whitted.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene()
    >>> tracer = Tracer(scene, max_depth=5)
    >>> radiance = tracer.trace(camera.get_camera_ray(0.5, 0.5))
"""

from __future__ import annotations

import numpy as np

from whitted.core.ray import Ray, Vector, dot, length, reflect, refract
from whitted.geometry.primitive import Intersection
from whitted.scene.scene import T_MAX, T_MIN, Scene, intersect_scene

# Default recursion bound for reflection/refraction rays
MAX_DEPTH = 5


class Tracer:
    """Whitted-style tracer bound to one immutable scene.

    Attributes:
        scene: The scene to render.
        max_depth: Maximum number of reflection/refraction bounces. With
            max_depth=0 no secondary rays are ever spawned.
    """

    def __init__(self, scene: Scene, max_depth: int = MAX_DEPTH) -> None:
        if max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {max_depth}")
        self.scene = scene
        self.max_depth = max_depth

    def trace(self, ray: Ray, depth: int = 0) -> Vector:
        """Compute the radiance arriving along a ray.

        Args:
            ray: The ray to trace.
            depth: The current recursion depth (0 for primary rays).

        Returns:
            Linear RGB radiance.
        """
        isect = intersect_scene(self.scene, ray, T_MIN, T_MAX)
        if isect is None:
            return self.scene.background_color.copy()

        material = isect.material
        if material.is_specular:
            result = np.zeros(3, dtype=np.float64)
            if depth < self.max_depth:
                if material.kr is not None:
                    reflected = Ray(isect.position, reflect(-ray.direction, isect.normal))
                    result += material.kr * self.trace(reflected, depth + 1)
                if material.kt is not None:
                    # Always the incident direction, whether or not kr is set
                    refracted = refract(ray.direction, isect.normal, material.ior)
                    if refracted is not None:
                        result += material.kt * self.trace(Ray(isect.position, refracted), depth + 1)
            return result

        ambient = self.scene.ambient_light * material.ka
        return ambient + self.shade(ray, isect)

    def shade(self, ray: Ray, isect: Intersection) -> Vector:
        """Sum the direct illumination at an intersection.

        Each light is sampled at the hit position. Samples with zero intensity
        are skipped. For the rest a shadow ray is cast toward the light; if
        something is hit closer than the light, that light contributes nothing.
        Otherwise it adds

            diffuse:  I * kd * max(n.l, 0)
            specular: I * ks * max(r.v, 0)^p   (only when ks is present)

        where r is l mirrored about n and v points back along the ray.

        Args:
            ray: The ray that produced the intersection.
            isect: The intersection to shade.

        Returns:
            The summed diffuse and specular contribution (without ambient).
        """
        material = isect.material
        n = isect.normal
        v = -ray.direction
        result = np.zeros(3, dtype=np.float64)

        for light in self.scene.lights:
            sample = light.get_light(isect.position)
            if not sample.intensity.any():
                continue
            if self._occluded(isect.position, sample.direction, sample.position):
                continue

            l = sample.direction  # noqa: E741
            result += sample.intensity * material.kd * max(dot(n, l), 0.0)

            if material.ks is not None:
                r = reflect(l, n)
                result += sample.intensity * material.ks * max(dot(r, v), 0.0) ** material.p

        return result

    def _occluded(self, point: Vector, direction: Vector, light_position: Vector) -> bool:
        """Return True if a primitive blocks the segment from point to the light."""
        distance = length(light_position - point)
        blocker = intersect_scene(self.scene, Ray(point, direction), T_MIN, T_MAX)
        return blocker is not None and blocker.t < distance

    def __repr__(self) -> str:
        return f"Tracer(scene={self.scene!r}, max_depth={self.max_depth})"
