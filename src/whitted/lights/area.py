"""Area light approximated by a regular grid of point lights.

A square area light of side ``size``, lying in the horizontal (xz) plane and
centered at ``center``, is discretized into ``samples x samples`` point
lights. Each one carries ``intensity * size^2 / samples^2`` so that the grid
sums to the emitted power of the whole area.

The expansion happens once, at scene construction; there is no area-light
type at render time.
"""

from __future__ import annotations

import logging

from whitted.core.ray import VectorLike, as_vec3
from whitted.lights.point import PointLight

logger = logging.getLogger(__name__)


def create_area_light(
    center: VectorLike,
    size: float,
    intensity: VectorLike,
    samples: int,
) -> list[PointLight]:
    """Expand a square area light into a grid of point lights.

    Lights are produced row by row: the outer loop walks z (index j) and the
    inner loop walks x (index i). Light (i, j) sits at

        (cx + (i / N - 0.5) * size, cy, cz + (j / N - 0.5) * size)

    Args:
        center: Center of the square light.
        size: Side length of the square.
        intensity: Total intensity (RGB) per unit area. Not modified.
        samples: Grid resolution N along each side.

    Returns:
        A list of N*N PointLight instances.

    Raises:
        ValueError: If samples < 1.
    """
    if samples < 1:
        raise ValueError(f"Area light needs at least one sample per side, got {samples}")

    c = as_vec3(center)
    per_light = as_vec3(intensity) * (size * size / samples / samples)

    lights = []
    for j in range(samples):
        for i in range(samples):
            position = (
                c[0] + (i / samples - 0.5) * size,
                c[1],
                c[2] + (j / samples - 0.5) * size,
            )
            lights.append(PointLight(position, per_light))

    logger.debug("Area light at %s expanded into %d point lights", c.tolist(), len(lights))
    return lights
