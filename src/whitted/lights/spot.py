"""Spot light: a point light restricted to a cone.

The spot light sits at ``source`` and points toward ``target``. A shading
point receives light only if the angle between the cone axis and the
light-to-point direction is within half of the ``cutoff`` angle. Inside the
cone the intensity is

    intensity * cos(angle)^exponent / distance^2

so ``exponent`` controls how quickly the beam fades toward its edge, much like
a specular shininess.

Example:
    >>> from whitted.lights.spot import SpotLight
    >>> spot = SpotLight(source=(0, 5, 0), target=(0, 0, 0), intensity=(20, 20, 20),
    ...                  exponent=2.0, cutoff=60.0)
"""

from __future__ import annotations

import math

import numpy as np

from whitted.core.ray import Vector, VectorLike, as_vec3, dot, length_squared, normalize
from whitted.lights.light import Light, LightSample


class SpotLight(Light):
    """A cone-restricted point light.

    Attributes:
        source: Position of the light.
        target: Point the light is aimed at.
        intensity: Base intensity (RGB).
        exponent: Falloff exponent applied to cos(angle) inside the cone.
        cutoff: Full cone angle in degrees.
    """

    def __init__(
        self,
        source: VectorLike,
        target: VectorLike,
        intensity: VectorLike,
        exponent: float,
        cutoff: float,
    ) -> None:
        self.source = as_vec3(source)
        self.target = as_vec3(target)
        self.intensity = as_vec3(intensity)
        self.exponent = float(exponent)
        self.cutoff = float(cutoff)

        self.axis = normalize(self.target - self.source)
        self._cos_half_cutoff = math.cos(math.radians(self.cutoff) / 2.0)

    def get_light(self, shading_point: Vector) -> LightSample:
        """Sample the spot light at a shading point.

        The returned direction always points from the shading point toward
        the light, even when the point lies outside the cone (in which case
        the intensity is zero).
        """
        to_point = normalize(shading_point - self.source)
        cos_alpha = dot(self.axis, to_point)

        if cos_alpha > self._cos_half_cutoff:
            distance_squared = length_squared(self.source - shading_point)
            intensity = self.intensity * (cos_alpha**self.exponent / distance_squared)
        else:
            intensity = np.zeros(3, dtype=np.float64)

        return LightSample(
            intensity=intensity,
            position=self.source.copy(),
            direction=-to_point,
        )

    def __repr__(self) -> str:
        return (
            f"SpotLight(source={self.source.tolist()}, target={self.target.tolist()}, "
            f"exponent={self.exponent}, cutoff={self.cutoff})"
        )
