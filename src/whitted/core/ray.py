"""Ray data structure and vector utilities for recursive ray tracing.

This module provides the fundamental Ray dataclass and the small set of vector
helpers the tracer needs. Vectors and colors are plain NumPy arrays of shape
(3,) with dtype float64; the arithmetic itself is delegated to NumPy.

Reflection and refraction live here as well, since both the shader (specular
highlights) and the tracer (secondary rays) use them.

Example:
    >>> from whitted.core.ray import Ray, vec3
    >>> ray = Ray(origin=vec3(0.0, 0.0, 0.0), direction=vec3(0.0, 0.0, -2.0))
    >>> ray.direction  # normalized at construction
    array([ 0.,  0., -1.])
    >>> ray.point_at(5.0)
    array([ 0.,  0., -5.])
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from dataclasses import dataclass

import numpy as np
import numpy.typing as npt

# Type alias for 3D vectors and RGB colors
Vector = npt.NDArray[np.float64]

# Anything convertible to a 3-vector: tuples, lists or arrays
VectorLike = Vector | Sequence[float]


def vec3(x: float, y: float, z: float) -> Vector:
    """Create a 3D vector.

    Args:
        x: X component.
        y: Y component.
        z: Z component.

    Returns:
        A float64 NumPy array of shape (3,).
    """
    return np.array([x, y, z], dtype=np.float64)


def color(r: float, g: float, b: float) -> Vector:
    """Create a linear RGB color (same representation as a vector)."""
    return np.array([r, g, b], dtype=np.float64)


def as_vec3(value: VectorLike) -> Vector:
    """Coerce a tuple, list or array into a float64 3-vector (always a copy).

    Raises:
        ValueError: If the value does not have exactly three components.
    """
    result = np.array(value, dtype=np.float64).reshape(-1)
    if result.shape != (3,):
        raise ValueError(f"Expected 3 components, got shape {result.shape}")
    return result


# =============================================================================
# Vector Utility Functions
# =============================================================================


def dot(a: Vector, b: Vector) -> float:
    """Compute the dot product of two vectors."""
    return float(np.dot(a, b))


def cross(a: Vector, b: Vector) -> Vector:
    """Compute the cross product of two vectors."""
    return np.cross(a, b)


def length_squared(v: Vector) -> float:
    """Compute the squared length of a vector.

    Cheaper than length() when only comparing magnitudes.
    """
    return float(np.dot(v, v))


def length(v: Vector) -> float:
    """Compute the Euclidean length of a vector."""
    return math.sqrt(length_squared(v))


def normalize(v: Vector) -> Vector:
    """Normalize a vector to unit length.

    Args:
        v: The input vector.

    Returns:
        A unit vector in the same direction as v. A zero-length vector is
        returned unchanged (as zeros).
    """
    n = length(v)
    if n == 0.0:
        return np.zeros(3, dtype=np.float64)
    return v / n


# =============================================================================
# Ray
# =============================================================================


@dataclass(frozen=True, eq=False)
class Ray:
    """A ray with an origin point and a unit direction vector.

    The direction is normalized at construction, so ``t`` values returned by
    intersection routines are distances along the ray.

    Attributes:
        origin: The starting point of the ray.
        direction: The unit direction of the ray.

    Raises:
        ValueError: If the direction has zero length.
    """

    origin: Vector
    direction: Vector

    def __post_init__(self) -> None:
        origin = as_vec3(self.origin)
        direction = as_vec3(self.direction)
        n = length(direction)
        if n == 0.0:
            raise ValueError("Ray direction must have non-zero length")
        object.__setattr__(self, "origin", origin)
        object.__setattr__(self, "direction", direction / n)

    def point_at(self, t: float) -> Vector:
        """Compute the point along the ray at parameter t.

        Args:
            t: The parameter value. Positive values are in front of the origin.

        Returns:
            The point origin + t * direction.
        """
        return self.origin + t * self.direction

    def __repr__(self) -> str:
        return f"Ray(origin={self.origin.tolist()}, direction={self.direction.tolist()})"


# =============================================================================
# Reflection and Refraction
# =============================================================================


def reflect(l: Vector, n: Vector) -> Vector:  # noqa: E741
    """Mirror a direction about a normal: r = 2(n.l)n - l.

    Here ``l`` points away from the surface (toward the light or the viewer),
    and so does the result. Applying reflect twice with the same normal
    returns the original vector.

    Args:
        l: Direction to mirror, pointing away from the surface.
        n: The unit surface normal.

    Returns:
        The mirrored direction.
    """
    return 2.0 * dot(n, l) * n - l


def refract(l: Vector, n: Vector, ior: float) -> Vector | None:  # noqa: E741
    """Refract a direction through a surface using Snell's law.

    ``l`` is the incident ray direction (travelling toward the surface) and
    ``n`` the outward surface normal. The side of the surface is read from the
    sign of n.l: a negative value means the ray enters the medium and the
    relative index is 1/ior, otherwise it leaves and the index is ior.

    Args:
        l: The incident direction (unit length).
        n: The outward unit surface normal.
        ior: Index of refraction of the medium behind the surface.

    Returns:
        The unit refracted direction, or None on total internal reflection.
    """
    mu = 1.0 / ior if dot(n, l) < 0.0 else ior
    cos_i = dot(l, n)
    sin_i2 = 1.0 - cos_i * cos_i
    if mu * mu * sin_i2 > 1.0:
        return None

    sin_r = mu * math.sqrt(max(sin_i2, 0.0))
    cos_r = math.sqrt(max(1.0 - sin_r * sin_r, 0.0))
    if cos_i > 0.0:
        r = n * (-mu * cos_i + cos_r) + mu * l
    else:
        r = n * (-mu * cos_i - cos_r) + mu * l
    return normalize(r)
