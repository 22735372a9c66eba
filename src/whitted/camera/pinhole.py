"""Pinhole camera: maps normalized image coordinates to primary rays.

The camera is placed with a look-at triple (lookfrom, lookat, vup) and a
vertical field of view. From these it derives a right-handed frame:

- w: unit vector pointing back out of the screen, toward the eye
- u: unit vector pointing to the right of the image
- v: unit vector pointing to the top of the image

and an image rectangle one unit in front of the eye, spanned by
``horizontal`` and ``vertical`` from its ``lower_left`` corner.

Example:
    >>> from whitted.camera.pinhole import PinholeCamera
    >>>
    >>> camera = PinholeCamera(
    ...     lookfrom=(0.0, 1.0, 4.0),
    ...     lookat=(0.0, 0.5, 0.0),
    ...     vup=(0.0, 1.0, 0.0),
    ...     vfov=45.0,
    ...     aspect_ratio=4.0 / 3.0,
    ... )
    >>> ray = camera.get_camera_ray(0.25, 0.75)  # upper-left quadrant
"""

from __future__ import annotations

import math
from dataclasses import dataclass, field

import numpy as np

from whitted.core.ray import Ray, Vector

# =============================================================================
# Camera
# =============================================================================


def _unit(vec: Vector, message: str) -> Vector:
    length = np.linalg.norm(vec)
    if length == 0.0:
        raise ValueError(message)
    return vec / length


@dataclass(eq=False)
class PinholeCamera:
    """Perspective camera with an infinitely small aperture.

    Everything is in focus; there is no lens model. The frame and image
    rectangle are derived once in ``__post_init__`` and never change.

    Attributes:
        lookfrom: Eye position in world space.
        lookat: World-space point that lands at the image center.
        vup: Rough "up" hint; only its component orthogonal to the view
            direction matters.
        vfov: Full vertical opening angle in degrees.
        aspect_ratio: Image width over image height.

    Raises:
        ValueError: If lookfrom and lookat coincide, vup lies along the view
            direction, or vfov is not strictly between 0 and 180.
    """

    lookfrom: tuple[float, float, float]
    lookat: tuple[float, float, float]
    vup: tuple[float, float, float]
    vfov: float
    aspect_ratio: float

    origin: Vector = field(init=False, repr=False)
    u: Vector = field(init=False, repr=False)
    v: Vector = field(init=False, repr=False)
    w: Vector = field(init=False, repr=False)
    horizontal: Vector = field(init=False, repr=False)
    vertical: Vector = field(init=False, repr=False)
    lower_left: Vector = field(init=False, repr=False)

    def __post_init__(self) -> None:
        if not 0.0 < self.vfov < 180.0:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")

        eye = np.array(self.lookfrom, dtype=np.float64)
        target = np.array(self.lookat, dtype=np.float64)
        up_hint = np.array(self.vup, dtype=np.float64)

        w = _unit(eye - target, "lookfrom and lookat must be different points")
        u = _unit(np.cross(up_hint, w), "vup must not be parallel to the view direction")
        v = np.cross(w, u)

        # Image rectangle at distance 1 along -w
        half_height = math.tan(math.radians(self.vfov) / 2.0)
        half_width = self.aspect_ratio * half_height

        self.origin = eye
        self.u, self.v, self.w = u, v, w
        self.horizontal = (2.0 * half_width) * u
        self.vertical = (2.0 * half_height) * v
        self.lower_left = eye - w - half_width * u - half_height * v

    # =========================================================================
    # Ray Generation
    # =========================================================================

    def get_camera_ray(self, x: float, y: float) -> Ray:
        """Ray from the eye through a point of the image rectangle.

        Args:
            x: Fraction of the image width, 0 at the left edge.
            y: Fraction of the image height, 0 at the bottom edge.

        Returns:
            Ray starting at ``origin``; its direction is normalized by Ray.
        """
        target = self.lower_left + x * self.horizontal + y * self.vertical
        return Ray(self.origin, target - self.origin)

    def get_camera_info(self) -> dict[str, tuple[float, float, float]]:
        """Derived frame and image rectangle as plain float tuples."""
        names = ("origin", "u", "v", "w", "horizontal", "vertical", "lower_left")
        return {name: tuple(float(c) for c in getattr(self, name)) for name in names}
