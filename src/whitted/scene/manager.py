"""Scene builder, scene serialization and render configuration.

This module provides a high-level API for assembling scenes. The
SceneManager keeps a registry of materials (addressed by integer
material_id, so that many primitives share one Material instance) and
records every primitive and light added to it. ``build()`` turns those
records into an immutable Scene.

The SceneManager maintains:
- A material registry indexed by material_id
- Descriptions of spheres, planes, triangles and lights
- The order primitives were added in, which ``build()`` keeps so that
  equal-distance hits resolve to the earlier primitive
- Area lights in their compact form (center, size, samples); they are
  expanded into point lights only when the scene is built
- Round-tripping to and from plain dictionaries (SceneConfig)

Example:
    >>> from whitted.scene.manager import SceneManager
    >>> manager = SceneManager(ambient_light=(0.1, 0.1, 0.1), background_color=(0.2, 0.2, 0.3))
    >>> red = manager.add_material(ka=(0.2, 0.0, 0.0), kd=(0.8, 0.1, 0.1))
    >>> manager.add_sphere(center=(0, 0, -5), radius=1.0, material_id=red)
    0
    >>> manager.add_point_light(position=(2, 2, 0), intensity=(5, 5, 5))
    0
    >>> scene = manager.build()
"""

from __future__ import annotations

import logging
from dataclasses import asdict, dataclass, field
from typing import Any

from whitted.core.ray import VectorLike, as_vec3
from whitted.geometry.plane import Plane
from whitted.geometry.primitive import Primitive
from whitted.geometry.sphere import Sphere
from whitted.geometry.triangle import Triangle
from whitted.lights.area import create_area_light
from whitted.lights.light import Light
from whitted.lights.point import PointLight
from whitted.lights.spot import SpotLight
from whitted.materials.material import Material
from whitted.scene.obj_loader import load_obj
from whitted.scene.scene import Scene

logger = logging.getLogger(__name__)

Triple = tuple[float, float, float]


def _triple(value: VectorLike) -> Triple:
    x, y, z = as_vec3(value).tolist()
    return (x, y, z)


def _optional_triple(value: VectorLike | None) -> Triple | None:
    return None if value is None else _triple(value)


# =============================================================================
# Render Configuration
# =============================================================================


@dataclass(frozen=True)
class RenderConfig:
    """Settings that fix a render, read-only while it runs.

    Attributes:
        width: Image width in pixels.
        height: Image height in pixels.
        max_depth: Maximum reflection/refraction recursion depth.
        exposure: Scalar multiplier applied before clamping and gamma.
        chunk_size: Number of image rows rendered between progress updates.

    Raises:
        ValueError: If any value is out of range.
    """

    width: int = 640
    height: int = 480
    max_depth: int = 5
    exposure: float = 1.0
    chunk_size: int = 10

    def __post_init__(self) -> None:
        if self.width <= 0 or self.height <= 0:
            raise ValueError(f"Image dimensions must be positive, got {self.width}x{self.height}")
        if self.max_depth < 0:
            raise ValueError(f"max_depth must be non-negative, got {self.max_depth}")
        if self.exposure <= 0.0:
            raise ValueError(f"exposure must be positive, got {self.exposure}")
        if self.chunk_size <= 0:
            raise ValueError(f"chunk_size must be positive, got {self.chunk_size}")

    @property
    def aspect_ratio(self) -> float:
        """Width divided by height."""
        return self.width / self.height


# =============================================================================
# Scene Records
# =============================================================================


@dataclass
class SphereInfo:
    """Information about a sphere in the scene."""

    center: Triple
    radius: float
    material_id: int


@dataclass
class PlaneInfo:
    """Information about a plane in the scene."""

    point: Triple
    normal: Triple
    material_id: int


@dataclass
class TriangleInfo:
    """Information about a triangle in the scene.

    Attributes:
        vertices: The three vertex positions.
        material_id: The material ID assigned to the triangle.
        normals: Optional per-vertex normals (all three, or None).
    """

    vertices: tuple[Triple, Triple, Triple]
    material_id: int
    normals: tuple[Triple, Triple, Triple] | None = None


@dataclass
class LightInfo:
    """Information about a light in the scene.

    ``kind`` is one of "point", "spot" or "area"; ``params`` holds the
    keyword arguments of the corresponding constructor.
    """

    kind: str
    params: dict[str, Any]


@dataclass
class SceneConfig:
    """Plain-data description of a whole scene, suitable for serialization.

    Attributes:
        materials: Material keyword arguments, indexed by material_id.
        spheres: Sphere records.
        planes: Plane records.
        triangles: Triangle records.
        lights: Light records.
        primitive_order: Kind of each primitive ("sphere", "plane" or
            "triangle") in insertion order. Empty means spheres, then planes,
            then triangles.
        ambient_light: Ambient light color.
        background_color: Background color.
    """

    materials: list[dict[str, Any]] = field(default_factory=list)
    spheres: list[dict[str, Any]] = field(default_factory=list)
    planes: list[dict[str, Any]] = field(default_factory=list)
    triangles: list[dict[str, Any]] = field(default_factory=list)
    lights: list[dict[str, Any]] = field(default_factory=list)
    primitive_order: list[str] = field(default_factory=list)
    ambient_light: Triple = (0.0, 0.0, 0.0)
    background_color: Triple = (0.0, 0.0, 0.0)


_LIGHT_KINDS = ("point", "spot", "area")
_PRIMITIVE_KINDS = ("sphere", "plane", "triangle")


# =============================================================================
# Scene Manager
# =============================================================================


class SceneManager:
    """Builder that collects materials, primitives and lights.

    Attributes:
        materials: Registered materials; the list index is the material_id.
        spheres: SphereInfo records in insertion order.
        planes: PlaneInfo records in insertion order.
        triangles: TriangleInfo records in insertion order.
        lights: LightInfo records in insertion order.
        primitive_order: (kind, index) of every primitive in insertion order.
        ambient_light: Ambient light color of the built scene.
        background_color: Background color of the built scene.
    """

    def __init__(
        self,
        ambient_light: VectorLike = (0.0, 0.0, 0.0),
        background_color: VectorLike = (0.0, 0.0, 0.0),
    ) -> None:
        self.materials: list[Material] = []
        self._material_params: list[dict[str, Any]] = []
        self.spheres: list[SphereInfo] = []
        self.planes: list[PlaneInfo] = []
        self.triangles: list[TriangleInfo] = []
        self.lights: list[LightInfo] = []
        self.primitive_order: list[tuple[str, int]] = []
        self.ambient_light = _triple(ambient_light)
        self.background_color = _triple(background_color)

    def clear(self) -> None:
        """Remove all materials, primitives and lights."""
        self.materials.clear()
        self._material_params.clear()
        self.spheres.clear()
        self.planes.clear()
        self.triangles.clear()
        self.lights.clear()
        self.primitive_order.clear()

    # -------------------------------------------------------------------------
    # Materials
    # -------------------------------------------------------------------------

    def add_material(
        self,
        ka: VectorLike = (0.0, 0.0, 0.0),
        kd: VectorLike = (0.0, 0.0, 0.0),
        ks: VectorLike | None = None,
        p: float = 1.0,
        kr: VectorLike | None = None,
        kt: VectorLike | None = None,
        ior: float | None = None,
    ) -> int:
        """Register a material and return its material_id.

        Raises:
            ValueError: If the coefficients are invalid (see Material).
        """
        params = {
            "ka": _triple(ka),
            "kd": _triple(kd),
            "ks": _optional_triple(ks),
            "p": float(p),
            "kr": _optional_triple(kr),
            "kt": _optional_triple(kt),
            "ior": None if ior is None else float(ior),
        }
        self.materials.append(Material(**params))
        self._material_params.append(params)
        return len(self.materials) - 1

    def get_material(self, material_id: int) -> Material:
        """Look up a registered material.

        Raises:
            ValueError: If the material_id is not registered.
        """
        self._check_material_id(material_id)
        return self.materials[material_id]

    def get_material_count(self) -> int:
        """Get the number of registered materials."""
        return len(self.materials)

    def _check_material_id(self, material_id: int) -> None:
        if not 0 <= material_id < len(self.materials):
            raise ValueError(
                f"Unknown material_id {material_id} ({len(self.materials)} materials registered)"
            )

    # -------------------------------------------------------------------------
    # Primitives
    # -------------------------------------------------------------------------

    def add_sphere(self, center: VectorLike, radius: float, material_id: int) -> int:
        """Add a sphere and return its index among spheres.

        Raises:
            ValueError: If the radius is not positive or the material is unknown.
        """
        self._check_material_id(material_id)
        if radius <= 0.0:
            raise ValueError(f"Sphere radius must be positive, got {radius}")
        self.spheres.append(SphereInfo(_triple(center), float(radius), material_id))
        self.primitive_order.append(("sphere", len(self.spheres) - 1))
        return len(self.spheres) - 1

    def add_plane(self, point: VectorLike, normal: VectorLike, material_id: int) -> int:
        """Add an infinite plane and return its index among planes."""
        self._check_material_id(material_id)
        self.planes.append(PlaneInfo(_triple(point), _triple(normal), material_id))
        self.primitive_order.append(("plane", len(self.planes) - 1))
        return len(self.planes) - 1

    def add_triangle(
        self,
        p0: VectorLike,
        p1: VectorLike,
        p2: VectorLike,
        material_id: int,
        normals: tuple[VectorLike, VectorLike, VectorLike] | None = None,
    ) -> int:
        """Add a triangle (optionally with per-vertex normals) and return its index."""
        self._check_material_id(material_id)
        vertex_normals = None
        if normals is not None:
            n0, n1, n2 = normals
            vertex_normals = (_triple(n0), _triple(n1), _triple(n2))
        self.triangles.append(
            TriangleInfo((_triple(p0), _triple(p1), _triple(p2)), material_id, vertex_normals)
        )
        self.primitive_order.append(("triangle", len(self.triangles) - 1))
        return len(self.triangles) - 1

    def add_obj_mesh(self, text: str, material_id: int, smooth_normals: bool = False) -> int:
        """Add every triangle of an OBJ document.

        Args:
            text: The OBJ document.
            material_id: Material shared by the whole mesh.
            smooth_normals: Use per-vertex normals for Phong shading.

        Returns:
            The number of triangles added.
        """
        material = self.get_material(material_id)
        triangles = load_obj(text, material, smooth_normals)
        for tri in triangles:
            normals = (tri.n0, tri.n1, tri.n2) if tri.has_vertex_normals else None
            self.add_triangle(tri.p0, tri.p1, tri.p2, material_id, normals)
        return len(triangles)

    def get_primitive_count(self) -> int:
        """Get the total number of primitives."""
        return len(self.spheres) + len(self.planes) + len(self.triangles)

    # -------------------------------------------------------------------------
    # Lights
    # -------------------------------------------------------------------------

    def add_point_light(self, position: VectorLike, intensity: VectorLike) -> int:
        """Add a point light and return its index among light records."""
        params = {"position": _triple(position), "intensity": _triple(intensity)}
        self.lights.append(LightInfo("point", params))
        return len(self.lights) - 1

    def add_spot_light(
        self,
        source: VectorLike,
        target: VectorLike,
        intensity: VectorLike,
        exponent: float,
        cutoff: float,
    ) -> int:
        """Add a spot light (cutoff is the full cone angle in degrees)."""
        params = {
            "source": _triple(source),
            "target": _triple(target),
            "intensity": _triple(intensity),
            "exponent": float(exponent),
            "cutoff": float(cutoff),
        }
        self.lights.append(LightInfo("spot", params))
        return len(self.lights) - 1

    def add_area_light(
        self,
        center: VectorLike,
        size: float,
        intensity: VectorLike,
        samples: int,
    ) -> int:
        """Add a square area light, expanded into samples^2 point lights on build.

        Raises:
            ValueError: If samples < 1.
        """
        if samples < 1:
            raise ValueError(f"Area light needs at least one sample per side, got {samples}")
        params = {
            "center": _triple(center),
            "size": float(size),
            "intensity": _triple(intensity),
            "samples": int(samples),
        }
        self.lights.append(LightInfo("area", params))
        return len(self.lights) - 1

    # -------------------------------------------------------------------------
    # Building
    # -------------------------------------------------------------------------

    def build_primitives(self) -> list[Primitive]:
        """Instantiate primitives in the order they were added."""
        primitives: list[Primitive] = []
        for kind, index in self.primitive_order:
            if kind == "sphere":
                s = self.spheres[index]
                primitives.append(Sphere(s.center, s.radius, self.materials[s.material_id]))
            elif kind == "plane":
                p = self.planes[index]
                primitives.append(Plane(p.point, p.normal, self.materials[p.material_id]))
            else:
                t = self.triangles[index]
                normals = t.normals if t.normals is not None else (None, None, None)
                primitives.append(Triangle(*t.vertices, self.materials[t.material_id], *normals))
        return primitives

    def build_lights(self) -> list[Light]:
        """Instantiate lights in record order, expanding area lights."""
        lights: list[Light] = []
        for info in self.lights:
            if info.kind == "point":
                lights.append(PointLight(**info.params))
            elif info.kind == "spot":
                lights.append(SpotLight(**info.params))
            elif info.kind == "area":
                lights.extend(create_area_light(**info.params))
            else:
                raise ValueError(f"Unknown light kind: {info.kind}")
        return lights

    def build(self) -> Scene:
        """Create the immutable Scene described by this manager."""
        scene = Scene(
            primitives=self.build_primitives(),
            lights=self.build_lights(),
            ambient_light=self.ambient_light,
            background_color=self.background_color,
        )
        logger.debug(
            "Built scene: %d materials, %d primitives, %d lights",
            len(self.materials),
            len(scene.primitives),
            len(scene.lights),
        )
        return scene

    # -------------------------------------------------------------------------
    # Serialization
    # -------------------------------------------------------------------------

    def to_config(self) -> SceneConfig:
        """Export the scene description as a SceneConfig."""
        return SceneConfig(
            materials=[dict(params) for params in self._material_params],
            spheres=[asdict(s) for s in self.spheres],
            planes=[asdict(p) for p in self.planes],
            triangles=[asdict(t) for t in self.triangles],
            lights=[{"kind": info.kind, **info.params} for info in self.lights],
            primitive_order=[kind for kind, _ in self.primitive_order],
            ambient_light=self.ambient_light,
            background_color=self.background_color,
        )

    def from_config(self, config: SceneConfig) -> None:
        """Replace the current contents with a SceneConfig.

        Raises:
            ValueError: If a record is invalid, names an unknown light or
                primitive kind, or primitive_order disagrees with the records.
        """
        self.clear()
        self.ambient_light = _triple(config.ambient_light)
        self.background_color = _triple(config.background_color)

        for params in config.materials:
            self.add_material(**params)
        records = {
            "sphere": iter(config.spheres),
            "plane": iter(config.planes),
            "triangle": iter(config.triangles),
        }
        order = config.primitive_order or (
            ["sphere"] * len(config.spheres)
            + ["plane"] * len(config.planes)
            + ["triangle"] * len(config.triangles)
        )
        total = len(config.spheres) + len(config.planes) + len(config.triangles)
        if len(order) != total:
            raise ValueError(f"primitive_order lists {len(order)} primitives but {total} are recorded")
        for kind in order:
            if kind not in _PRIMITIVE_KINDS:
                raise ValueError(f"Unknown primitive kind: {kind}")
            record = next(records[kind], None)
            if record is None:
                raise ValueError(f"primitive_order names more {kind}s than are recorded")
            if kind == "sphere":
                self.add_sphere(record["center"], record["radius"], record["material_id"])
            elif kind == "plane":
                self.add_plane(record["point"], record["normal"], record["material_id"])
            else:
                self.add_triangle(*record["vertices"], record["material_id"], record.get("normals"))
        for record in config.lights:
            params = dict(record)
            kind = params.pop("kind")
            if kind not in _LIGHT_KINDS:
                raise ValueError(f"Unknown light kind: {kind}")
            getattr(self, f"add_{kind}_light")(**params)

    def to_dict(self) -> dict[str, Any]:
        """Export the scene description as a plain dictionary."""
        return asdict(self.to_config())

    def from_dict(self, data: dict[str, Any]) -> None:
        """Load a scene description from a plain dictionary."""
        self.from_config(SceneConfig(**data))

    def __repr__(self) -> str:
        return (
            f"SceneManager(materials={len(self.materials)}, "
            f"primitives={self.get_primitive_count()}, lights={len(self.lights)})"
        )
