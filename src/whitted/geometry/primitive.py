"""Intersection record and the primitive interface.

Every shape in a scene implements ``intersect(ray, t_min, t_max)`` and returns
either an Intersection or None. None is the only representation of a miss;
callers never compare against sentinel ``t`` values.

The valid range is open on both ends: a hit at exactly ``t_min`` is rejected
so that secondary rays spawned on a surface do not re-hit it, and the scene
query shrinks ``t_max`` to the closest hit found so far.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whitted.core.ray import Ray, Vector
    from whitted.materials.material import Material


@dataclass(frozen=True, eq=False)
class Intersection:
    """Record of a successful ray-primitive intersection.

    Attributes:
        t: The ray parameter (distance along the unit-direction ray).
        position: The intersection point, equal to ray.point_at(t).
        normal: The unit surface normal at the hit. Outward for spheres, the
            fixed normal for planes, face or interpolated normal for triangles.
            It is not flipped toward the viewer.
        material: The material of the primitive that was hit.
    """

    t: float
    position: Vector
    normal: Vector
    material: Material


class Primitive(ABC):
    """A geometric object that can be intersected by a ray.

    Attributes:
        material: The (shared, read-only) material of the surface.
    """

    material: Material

    @abstractmethod
    def intersect(self, ray: Ray, t_min: float, t_max: float) -> Intersection | None:
        """Compute the nearest intersection with t in (t_min, t_max).

        Args:
            ray: The ray to test (unit direction).
            t_min: Lower bound (exclusive) on the ray parameter.
            t_max: Upper bound (exclusive) on the ray parameter.

        Returns:
            The nearest Intersection in range, or None.
        """
