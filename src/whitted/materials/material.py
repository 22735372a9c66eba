"""Phong/Whitted surface material.

A material describes how a surface responds to light in the Whitted model:

    - ka: ambient reflectance, multiplied by the scene's ambient light
    - kd: diffuse (Lambertian) reflectance for direct lighting
    - ks, p: Phong specular reflectance and shininess exponent
    - kr: mirror reflectance, spawns a reflection ray
    - kt, ior: transmittance and index of refraction, spawns a refraction ray

``ks``, ``kr`` and ``kt`` are optional. An absent coefficient means "no
contribution of that kind", which is different from a black color: a material
with ``kr`` set (even to black) is treated as a mirror by the tracer and skips
local shading altogether.

Materials are immutable and are shared by reference between primitives.

Example:
    >>> from whitted.materials.material import Material
    >>> red_plastic = Material(ka=(0.1, 0.0, 0.0), kd=(0.6, 0.1, 0.1), ks=(0.4, 0.4, 0.4), p=32)
    >>> glass = Material(kr=(0.1, 0.1, 0.1), kt=(0.9, 0.9, 0.9), ior=1.5)
    >>> glass.is_specular
    True
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.core.ray import Vector, VectorLike, as_vec3


def _optional_color(value: VectorLike | None) -> Vector | None:
    return None if value is None else as_vec3(value)


@dataclass(frozen=True, eq=False)
class Material:
    """Surface description consumed by the shader and the tracer.

    Attributes:
        ka: Ambient coefficient (RGB). Defaults to black.
        kd: Diffuse coefficient (RGB). Defaults to black.
        ks: Specular coefficient (RGB), or None for no highlight.
        p: Phong shininess exponent.
        kr: Reflectivity (RGB), or None for a non-mirror surface.
        kt: Transmissivity (RGB), or None for an opaque surface.
        ior: Index of refraction. Required when kt is set.

    Raises:
        ValueError: If kt is set without an ior, or ior is not positive.
    """

    ka: Vector = (0.0, 0.0, 0.0)  # type: ignore[assignment]
    kd: Vector = (0.0, 0.0, 0.0)  # type: ignore[assignment]
    ks: Vector | None = None
    p: float = 1.0
    kr: Vector | None = None
    kt: Vector | None = None
    ior: float | None = None

    def __post_init__(self) -> None:
        if self.kt is not None and self.ior is None:
            raise ValueError("Transmissive material (kt) requires an index of refraction (ior)")
        if self.ior is not None and self.ior <= 0.0:
            raise ValueError(f"Index of refraction must be positive, got {self.ior}")

        object.__setattr__(self, "ka", as_vec3(self.ka))
        object.__setattr__(self, "kd", as_vec3(self.kd))
        object.__setattr__(self, "ks", _optional_color(self.ks))
        object.__setattr__(self, "kr", _optional_color(self.kr))
        object.__setattr__(self, "kt", _optional_color(self.kt))
        object.__setattr__(self, "p", float(self.p))

    @property
    def is_specular(self) -> bool:
        """True if the surface is a mirror or transmissive (kr or kt present)."""
        return self.kr is not None or self.kt is not None
