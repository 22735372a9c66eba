"""Immutable scene and the nearest-hit scene query.

A Scene bundles everything a render reads: the primitives, the lights, the
ambient light color and the background color. It is frozen and its
collections are tuples, so nothing can change while rays are being traced.

The scene query is a linear scan. The upper bound ``t_max`` shrinks to the
closest hit found so far, so every later primitive is only asked for hits
strictly closer than the current best.

Example:
    >>> from whitted.core.ray import Ray
    >>> from whitted.geometry import Sphere
    >>> from whitted.lights import PointLight
    >>> from whitted.materials import Material
    >>> from whitted.scene.scene import Scene, intersect_scene
    >>> scene = Scene(
    ...     primitives=[Sphere((0, 0, -5), 1.0, Material(kd=(1, 1, 1)))],
    ...     lights=[PointLight((2, 2, 0), (1, 1, 1))],
    ... )
    >>> intersect_scene(scene, Ray((0, 0, 0), (0, 0, -1))).t
    4.0
"""

from __future__ import annotations

import math
from collections.abc import Iterable
from dataclasses import dataclass, field

from whitted.core.ray import Ray, Vector, VectorLike, as_vec3
from whitted.geometry.primitive import Intersection, Primitive
from whitted.lights.light import Light

# Self-intersection epsilon: hits closer than this to a ray origin are ignored
T_MIN = 1e-4
T_MAX = math.inf


@dataclass(frozen=True, eq=False)
class Scene:
    """A fixed collection of primitives and lights.

    Attributes:
        primitives: The scene's primitives, in insertion order.
        lights: The scene's lights, in insertion order.
        ambient_light: Ambient light color, multiplied by each material's ka.
        background_color: Color returned for rays that hit nothing.
    """

    primitives: tuple[Primitive, ...] = ()
    lights: tuple[Light, ...] = ()
    ambient_light: Vector = field(default=(0.0, 0.0, 0.0))  # type: ignore[assignment]
    background_color: Vector = field(default=(0.0, 0.0, 0.0))  # type: ignore[assignment]

    def __post_init__(self) -> None:
        object.__setattr__(self, "primitives", tuple(self.primitives))
        object.__setattr__(self, "lights", tuple(self.lights))
        object.__setattr__(self, "ambient_light", _read_only(self.ambient_light))
        object.__setattr__(self, "background_color", _read_only(self.background_color))

    def intersect(self, ray: Ray, t_min: float = T_MIN, t_max: float = T_MAX) -> Intersection | None:
        """Find the nearest intersection along a ray (see intersect_scene)."""
        return intersect_scene(self, ray, t_min, t_max)

    def __repr__(self) -> str:
        return f"Scene(primitives={len(self.primitives)}, lights={len(self.lights)})"


def _read_only(value: VectorLike) -> Vector:
    result = as_vec3(value)
    result.flags.writeable = False
    return result


def intersect_primitives(
    primitives: Iterable[Primitive],
    ray: Ray,
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> Intersection | None:
    """Test a ray against a sequence of primitives and keep the closest hit.

    Args:
        primitives: The primitives to scan, in order.
        ray: The ray to test.
        t_min: Minimum t value to consider a valid hit (exclusive).
        t_max: Initial maximum t value (exclusive); shrinks as hits are found.

    Returns:
        The nearest Intersection, or None if nothing was hit.
    """
    closest_t = t_max
    result = None
    for primitive in primitives:
        hit = primitive.intersect(ray, t_min, closest_t)
        if hit is not None:
            closest_t = hit.t
            result = hit
    return result


def intersect_scene(
    scene: Scene,
    ray: Ray,
    t_min: float = T_MIN,
    t_max: float = T_MAX,
) -> Intersection | None:
    """Test a ray against all primitives in the scene.

    Args:
        scene: The scene to query.
        ray: The ray to test.
        t_min: Minimum t value to consider a valid hit (exclusive).
        t_max: Maximum t value to consider a valid hit (exclusive).

    Returns:
        The nearest Intersection, or None if no primitive was hit.
    """
    return intersect_primitives(scene.primitives, ray, t_min, t_max)
