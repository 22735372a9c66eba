"""Sphere primitive with closed-form ray-sphere intersection.

The ray-sphere intersection is found by solving

    |O + t*d - C|^2 = r^2

which, for a unit direction d, is the quadratic

    A*t^2 + B*t + C' = 0
    A  = 1
    B  = 2 * (O - C) . d
    C' = |O - C|^2 - r^2

A negative discriminant means the ray misses. Otherwise the smaller root is
taken if it lies in (t_min, t_max), else the larger one. The second case is
the one that fires when the ray starts inside the sphere.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.geometry.sphere import Sphere
    >>> from whitted.materials import Material
    >>> sphere = Sphere(center=(0, 0, -5), radius=1.0, material=Material(kd=(1, 0, 0)))
    >>> hit = sphere.intersect(Ray((0, 0, 0), (0, 0, -1)), 1e-4, float("inf"))
    >>> hit.t
    4.0
"""

from __future__ import annotations

import math

from whitted.core.ray import Ray, VectorLike, as_vec3, dot, length_squared, normalize
from whitted.geometry.primitive import Intersection, Primitive
from whitted.materials.material import Material


class Sphere(Primitive):
    """A sphere defined by center point and radius.

    Attributes:
        center: The center point of the sphere.
        radius: The radius of the sphere (positive).
        radius_squared: Cached r^2, reused by every intersection test.
        material: The surface material.

    Raises:
        ValueError: If the radius is not positive.
    """

    def __init__(self, center: VectorLike, radius: float, material: Material) -> None:
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.center = as_vec3(center)
        self.radius = float(radius)
        self.radius_squared = self.radius * self.radius
        self.material = material

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> Intersection | None:
        """Test for ray-sphere intersection.

        Args:
            ray: The ray to test (unit direction, so A = 1).
            t_min: Minimum t value to consider a valid hit (exclusive).
            t_max: Maximum t value to consider a valid hit (exclusive).

        Returns:
            The nearest Intersection in range, or None.
        """
        oc = ray.origin - self.center
        b = 2.0 * dot(oc, ray.direction)
        c = length_squared(oc) - self.radius_squared

        discriminant = b * b - 4.0 * c
        if discriminant < 0.0:
            return None

        sqrt_d = math.sqrt(discriminant)
        t1 = (-b - sqrt_d) / 2.0
        t2 = (-b + sqrt_d) / 2.0

        if t_min < t1 < t_max:
            t = t1
        elif t_min < t2 < t_max:
            t = t2
        else:
            return None

        position = ray.point_at(t)
        return Intersection(
            t=t,
            position=position,
            normal=normalize(position - self.center),
            material=self.material,
        )

    def __repr__(self) -> str:
        return f"Sphere(center={self.center.tolist()}, radius={self.radius})"
