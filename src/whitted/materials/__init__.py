"""Materials module for the Whitted shading model.

Components:
    material: Immutable Phong/Whitted material (ambient, diffuse, specular,
        reflective and transmissive coefficients)

Materials carry no behavior of their own; the tracer reads their
coefficients to decide between local shading and recursive
reflection/refraction.
"""

from .material import Material

__all__ = [
    "Material",
]
