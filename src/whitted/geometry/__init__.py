"""Geometry module for shape primitives.

This module provides geometric primitives and intersection algorithms:

Components:
    primitive: Intersection record and the Primitive interface
    plane: Infinite plane with a fixed normal
    sphere: Sphere with closed-form quadratic intersection
    triangle: Triangle with barycentric intersection and optional
        per-vertex (Phong-interpolated) normals

Ray-object intersection follows the pattern:
    hit = primitive.intersect(ray, t_min, t_max)   # Intersection or None
"""

from .plane import Plane
from .primitive import Intersection, Primitive
from .sphere import Sphere
from .triangle import Triangle

__all__ = [
    "Intersection",
    "Primitive",
    "Plane",
    "Sphere",
    "Triangle",
]
