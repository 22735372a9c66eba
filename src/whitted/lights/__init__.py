"""Lights module.

Components:
    light: LightSample record and the Light interface
    point: Point light with inverse-square falloff
    spot: Cone-restricted spot light
    area: Area light discretized into a grid of point lights

Every light answers ``get_light(shading_point)`` with a LightSample carrying
the attenuated intensity, the light position and the unit direction toward
the light.
"""

from .area import create_area_light
from .light import Light, LightSample
from .point import PointLight
from .spot import SpotLight

__all__ = [
    "Light",
    "LightSample",
    "PointLight",
    "SpotLight",
    "create_area_light",
]
