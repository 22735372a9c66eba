"""Infinite plane primitive.

A plane is defined by a point P0 it passes through and a unit normal n.
The ray-plane intersection solves

    (O + t*d - P0) . n = 0   =>   t = (P0 - O) . n / (d . n)

A ray parallel to the plane (d . n == 0) never hits it, whatever its origin.

Example:
    >>> from whitted.geometry.plane import Plane
    >>> from whitted.materials import Material
    >>> floor = Plane(point=(0, -1, 0), normal=(0, 1, 0), material=Material(kd=(0.5, 0.5, 0.5)))
"""

from __future__ import annotations

from whitted.core.ray import Ray, VectorLike, as_vec3, dot, length
from whitted.geometry.primitive import Intersection, Primitive
from whitted.materials.material import Material


class Plane(Primitive):
    """An infinite plane.

    Attributes:
        point: A point on the plane (P0).
        normal: The unit plane normal. It is used as-is for shading and is
            not flipped toward the viewer.
        material: The surface material.

    Raises:
        ValueError: If the normal has zero length.
    """

    def __init__(self, point: VectorLike, normal: VectorLike, material: Material) -> None:
        self.point = as_vec3(point)
        n = as_vec3(normal)
        n_len = length(n)
        if n_len == 0.0:
            raise ValueError("Plane normal must have non-zero length")
        self.normal = n / n_len
        self.material = material

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> Intersection | None:
        denom = dot(ray.direction, self.normal)
        if denom == 0.0:
            return None

        t = dot(self.point - ray.origin, self.normal) / denom
        if not (t_min < t < t_max):
            return None

        return Intersection(
            t=t,
            position=ray.point_at(t),
            normal=self.normal,
            material=self.material,
        )

    def __repr__(self) -> str:
        return f"Plane(point={self.point.tolist()}, normal={self.normal.tolist()})"
