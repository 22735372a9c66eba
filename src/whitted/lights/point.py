"""Point light with inverse-square falloff."""

from __future__ import annotations

import numpy as np

from whitted.core.ray import Vector, VectorLike, as_vec3, length_squared, normalize
from whitted.lights.light import Light, LightSample


class PointLight(Light):
    """An isotropic point light.

    The intensity reaching a point at distance r is intensity / r^2.

    Attributes:
        position: World-space position of the light.
        intensity: Emitted intensity (RGB).
    """

    def __init__(self, position: VectorLike, intensity: VectorLike) -> None:
        self.position = as_vec3(position)
        self.intensity = as_vec3(intensity)

    def get_light(self, shading_point: Vector) -> LightSample:
        delta = self.position - shading_point
        distance_squared = length_squared(delta)
        if distance_squared == 0.0:
            # No direction toward a light sitting on the point itself
            return LightSample(
                intensity=np.zeros(3, dtype=np.float64),
                position=self.position.copy(),
                direction=np.zeros(3, dtype=np.float64),
            )

        # Falloff uses the un-normalized vector before it is turned into a direction
        falloff = 1.0 / distance_squared
        return LightSample(
            intensity=self.intensity * falloff,
            position=self.position.copy(),
            direction=normalize(delta),
        )

    def __repr__(self) -> str:
        return f"PointLight(position={self.position.tolist()}, intensity={self.intensity.tolist()})"
