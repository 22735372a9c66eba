"""Triangle primitive with barycentric intersection and optional smooth normals.

The intersection solves a 3x3 linear system for the ray parameter t and the
barycentric weights (alpha, beta) of the hit point, anchored at vertex P2:

    t * d + alpha * (P2 - P0) + beta * (P2 - P1) = P2 - O

so that O + t*d = alpha*P0 + beta*P1 + gamma*P2 with gamma = 1 - alpha - beta.
The hit is inside the triangle when alpha >= 0, beta >= 0 and
alpha + beta <= 1.

A near-singular system (ray parallel to the triangle, or a degenerate
triangle) is reported as a miss.

Shading normals:
    - If all three per-vertex normals n0, n1, n2 are provided, the normal is
      the interpolation alpha*n0 + beta*n1 + gamma*n2, normalized (Phong
      shading).
    - Otherwise the flat face normal (P2 - P0) x (P2 - P1), normalized, is
      used. Its orientation follows the vertex winding.

Example:
    >>> from whitted.geometry.triangle import Triangle
    >>> from whitted.materials import Material
    >>> tri = Triangle((0, 0, -1), (1, 0, -1), (0, 1, -1), Material(kd=(1, 1, 1)))
"""

from __future__ import annotations

import numpy as np

from whitted.core.ray import Ray, Vector, VectorLike, as_vec3, cross, normalize
from whitted.geometry.primitive import Intersection, Primitive
from whitted.materials.material import Material

# Determinant magnitude below which the system is treated as singular
SINGULAR_EPSILON = 1e-12


class Triangle(Primitive):
    """A triangle with optional per-vertex normals.

    Attributes:
        p0, p1, p2: The three vertices.
        n0, n1, n2: Optional per-vertex unit normals (all three or none
            take effect; a partial set falls back to the face normal).
        face_normal: The precomputed flat normal (P2 - P0) x (P2 - P1), normalized.
        material: The surface material.
    """

    def __init__(
        self,
        p0: VectorLike,
        p1: VectorLike,
        p2: VectorLike,
        material: Material,
        n0: VectorLike | None = None,
        n1: VectorLike | None = None,
        n2: VectorLike | None = None,
    ) -> None:
        self.p0 = as_vec3(p0)
        self.p1 = as_vec3(p1)
        self.p2 = as_vec3(p2)
        self.material = material
        self.n0 = None if n0 is None else as_vec3(n0)
        self.n1 = None if n1 is None else as_vec3(n1)
        self.n2 = None if n2 is None else as_vec3(n2)

        # Edges anchored at P2, shared by every intersection test
        self._edge0 = self.p2 - self.p0
        self._edge1 = self.p2 - self.p1
        self.face_normal = normalize(cross(self._edge0, self._edge1))

    @property
    def has_vertex_normals(self) -> bool:
        """True when all three per-vertex normals are present."""
        return self.n0 is not None and self.n1 is not None and self.n2 is not None

    def barycentric(self, ray: Ray) -> tuple[float, float, float, float] | None:
        """Solve for (t, alpha, beta, gamma) without any range checks.

        Args:
            ray: The ray to test.

        Returns:
            The ray parameter and barycentric weights of the point where the
            ray meets the triangle's plane, or None if the system is singular.
        """
        m = np.column_stack((ray.direction, self._edge0, self._edge1))
        if abs(np.linalg.det(m)) < SINGULAR_EPSILON:
            return None
        t, alpha, beta = np.linalg.solve(m, self.p2 - ray.origin)
        return float(t), float(alpha), float(beta), float(1.0 - alpha - beta)

    def intersect(self, ray: Ray, t_min: float, t_max: float) -> Intersection | None:
        solution = self.barycentric(ray)
        if solution is None:
            return None

        t, alpha, beta, gamma = solution
        if t <= t_min or t >= t_max or t < 0.0:
            return None
        if alpha < 0.0 or beta < 0.0 or alpha + beta > 1.0:
            return None

        return Intersection(
            t=t,
            position=ray.point_at(t),
            normal=self._shading_normal(alpha, beta, gamma),
            material=self.material,
        )

    def _shading_normal(self, alpha: float, beta: float, gamma: float) -> Vector:
        if self.has_vertex_normals:
            return normalize(alpha * self.n0 + beta * self.n1 + gamma * self.n2)
        return self.face_normal

    def __repr__(self) -> str:
        return (
            f"Triangle(p0={self.p0.tolist()}, p1={self.p1.tolist()}, p2={self.p2.tolist()}, "
            f"smooth={self.has_vertex_normals})"
        )
