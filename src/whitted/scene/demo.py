"""Demo scene configuration.

This module provides a factory for a small showcase scene exercising every
feature of the tracer:

- A diffuse floor plane and back wall plane
- A matte sphere, a glossy (Phong) sphere, a mirror sphere and a glass sphere
- A small triangle pyramid with smooth (per-vertex) normals
- A square area light overhead (discretized into point lights) and a
  spot light aimed at the glossy sphere

The camera sits half a unit above the origin looking toward (0, 0, -6),
with the scene laid out around it.

Example:
    >>> from whitted.scene.demo import create_demo_scene
    >>> scene, camera = create_demo_scene()
"""

from __future__ import annotations

from dataclasses import dataclass

from whitted.camera.pinhole import PinholeCamera
from whitted.scene.manager import SceneManager
from whitted.scene.scene import Scene

# =============================================================================
# Demo Scene Parameters
# =============================================================================


@dataclass
class DemoSceneParams:
    """Parameters for configuring the demo scene.

    Attributes:
        aspect_ratio: Camera aspect ratio (width / height).
        vfov: Camera vertical field of view in degrees.
        area_light_samples: Grid resolution of the overhead area light
            (samples x samples point lights). 1 gives a single point light.
        area_light_intensity: Intensity per unit area of the overhead light.
        ambient_light: Ambient light color.
        background_color: Background color for rays that escape.
        glass_ior: Index of refraction of the glass sphere.
    """

    aspect_ratio: float = 4.0 / 3.0
    vfov: float = 60.0
    area_light_samples: int = 4
    area_light_intensity: tuple[float, float, float] = (6.0, 6.0, 6.0)
    ambient_light: tuple[float, float, float] = (0.08, 0.08, 0.08)
    background_color: tuple[float, float, float] = (0.05, 0.05, 0.1)
    glass_ior: float = 1.5


# =============================================================================
# Demo Scene Constants
# =============================================================================

FLOOR_Y = -1.0
BACK_WALL_Z = -12.0

FLOOR_KD = (0.6, 0.6, 0.6)
WALL_KD = (0.5, 0.55, 0.7)
MATTE_KD = (0.75, 0.2, 0.2)
GLOSSY_KD = (0.2, 0.4, 0.8)
GLOSSY_KS = (0.6, 0.6, 0.6)
GLOSSY_SHININESS = 40.0
PYRAMID_KD = (0.9, 0.75, 0.2)

MIRROR_KR = (0.9, 0.9, 0.9)
GLASS_KR = (0.1, 0.1, 0.1)
GLASS_KT = (0.9, 0.9, 0.9)

# A square pyramid (apex up) as an OBJ document; loaded with smooth normals
PYRAMID_OBJ = """\
# square pyramid
v -0.6 -1.0 -4.4
v  0.6 -1.0 -4.4
v  0.6 -1.0 -5.6
v -0.6 -1.0 -5.6
v  0.0  0.2 -5.0
f 1 2 5
f 2 3 5
f 3 4 5
f 4 1 5
"""


# =============================================================================
# Demo Scene Factory
# =============================================================================


def create_demo_scene_manager(params: DemoSceneParams | None = None) -> SceneManager:
    """Assemble the demo scene description.

    Args:
        params: Optional DemoSceneParams. If None, defaults are used.

    Returns:
        A SceneManager holding the demo's materials, primitives and lights.
    """
    if params is None:
        params = DemoSceneParams()

    manager = SceneManager(
        ambient_light=params.ambient_light,
        background_color=params.background_color,
    )

    floor = manager.add_material(ka=FLOOR_KD, kd=FLOOR_KD)
    wall = manager.add_material(ka=WALL_KD, kd=WALL_KD)
    matte = manager.add_material(ka=MATTE_KD, kd=MATTE_KD)
    glossy = manager.add_material(ka=GLOSSY_KD, kd=GLOSSY_KD, ks=GLOSSY_KS, p=GLOSSY_SHININESS)
    mirror = manager.add_material(kr=MIRROR_KR)
    glass = manager.add_material(kr=GLASS_KR, kt=GLASS_KT, ior=params.glass_ior)
    gold = manager.add_material(ka=PYRAMID_KD, kd=PYRAMID_KD, ks=(0.3, 0.3, 0.3), p=20.0)

    # Walls
    manager.add_plane(point=(0.0, FLOOR_Y, 0.0), normal=(0.0, 1.0, 0.0), material_id=floor)
    manager.add_plane(point=(0.0, 0.0, BACK_WALL_Z), normal=(0.0, 0.0, 1.0), material_id=wall)

    # Spheres resting on the floor
    manager.add_sphere(center=(-2.2, -0.2, -7.0), radius=0.8, material_id=matte)
    manager.add_sphere(center=(2.2, -0.2, -7.0), radius=0.8, material_id=glossy)
    manager.add_sphere(center=(0.0, 0.5, -8.5), radius=1.5, material_id=mirror)
    manager.add_sphere(center=(1.0, -0.4, -4.0), radius=0.6, material_id=glass)

    # Smooth-shaded pyramid
    manager.add_obj_mesh(PYRAMID_OBJ, gold, smooth_normals=True)

    # Lights
    manager.add_area_light(
        center=(0.0, 4.0, -6.0),
        size=2.0,
        intensity=params.area_light_intensity,
        samples=params.area_light_samples,
    )
    manager.add_spot_light(
        source=(4.0, 3.0, -3.0),
        target=(2.2, -0.2, -7.0),
        intensity=(20.0, 20.0, 18.0),
        exponent=4.0,
        cutoff=30.0,
    )

    return manager


def create_demo_scene(params: DemoSceneParams | None = None) -> tuple[Scene, PinholeCamera]:
    """Create the demo scene and a camera framing it.

    Args:
        params: Optional DemoSceneParams. If None, defaults are used.

    Returns:
        A tuple of (Scene, PinholeCamera).
    """
    if params is None:
        params = DemoSceneParams()

    scene = create_demo_scene_manager(params).build()
    camera = PinholeCamera(
        lookfrom=(0.0, 0.5, 0.0),
        lookat=(0.0, 0.0, -6.0),
        vup=(0.0, 1.0, 0.0),
        vfov=params.vfov,
        aspect_ratio=params.aspect_ratio,
    )
    return scene, camera
