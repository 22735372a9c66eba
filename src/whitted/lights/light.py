"""Light sample record and the light interface."""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from whitted.core.ray import Vector


@dataclass(frozen=True, eq=False)
class LightSample:
    """A light's contribution as seen from one shading point.

    Attributes:
        intensity: Incident intensity (RGB) after distance falloff.
        position: Position of the light, used for the shadow-ray distance.
        direction: Unit vector from the shading point toward the light.
    """

    intensity: Vector
    position: Vector
    direction: Vector


class Light(ABC):
    """A light source that can be sampled at a shading point."""

    @abstractmethod
    def get_light(self, shading_point: Vector) -> LightSample:
        """Sample the light at a shading point.

        Args:
            shading_point: The surface point being shaded.

        Returns:
            A fresh LightSample. Lights that do not reach the point return a
            sample with zero intensity rather than None.
        """
