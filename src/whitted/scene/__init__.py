"""Scene module for scene representation and ray-scene queries.

Components:
    scene: Immutable Scene container and the nearest-hit query
    manager: SceneManager builder, scene serialization and RenderConfig
    obj_loader: Wavefront OBJ parsing into triangles
    demo: Demo scene factory

The scene module manages:
    - Material registration and sharing between primitives
    - Light expansion (area lights become grids of point lights)
    - The linear-scan closest-hit query used by primary, secondary and
      shadow rays
"""

from .demo import DemoSceneParams, create_demo_scene, create_demo_scene_manager
from .manager import (
    LightInfo,
    PlaneInfo,
    RenderConfig,
    SceneConfig,
    SceneManager,
    SphereInfo,
    TriangleInfo,
)
from .obj_loader import ObjMesh, ObjParseError, load_obj, load_obj_file, parse_obj
from .scene import T_MAX, T_MIN, Scene, intersect_primitives, intersect_scene

__all__ = [
    # Scene and query
    "Scene",
    "intersect_scene",
    "intersect_primitives",
    "T_MIN",
    "T_MAX",
    # Manager module
    "SceneManager",
    "SceneConfig",
    "RenderConfig",
    "SphereInfo",
    "PlaneInfo",
    "TriangleInfo",
    "LightInfo",
    # OBJ loading
    "ObjMesh",
    "ObjParseError",
    "parse_obj",
    "load_obj",
    "load_obj_file",
    # Demo scene
    "DemoSceneParams",
    "create_demo_scene",
    "create_demo_scene_manager",
]
