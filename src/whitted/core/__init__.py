"""Core rendering module.

This module contains the fundamental building blocks for ray tracing:

Components:
    ray: Ray data structure, vector utilities, reflection and refraction
    tracer: Recursive Whitted tracer and direct-illumination shader
    progressive: Row-chunked renderer filling a film buffer

The tracer combines a nearest-hit scene query, Phong direct lighting with
hard shadows, and recursive mirror reflection/refraction bounded by a
maximum depth.
"""

from .ray import (
    Ray,
    Vector,
    VectorLike,
    as_vec3,
    color,
    cross,
    dot,
    length,
    length_squared,
    normalize,
    reflect,
    refract,
    vec3,
)

# Note: tracer and progressive are NOT imported here to avoid circular imports
# (they depend on the scene package, which depends on this module).
#
#   from whitted.core.tracer import Tracer
#   from whitted.core.progressive import ProgressiveRenderer

__all__ = [
    "Ray",
    "Vector",
    "VectorLike",
    "vec3",
    "color",
    "as_vec3",
    "dot",
    "cross",
    "length",
    "length_squared",
    "normalize",
    "reflect",
    "refract",
]
