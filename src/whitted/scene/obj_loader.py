"""Wavefront OBJ loading into triangle primitives.

Only geometry is read: ``v`` (positions), ``vn`` (normals) and ``f`` (faces).
Texture coordinates, groups, materials and any other records are ignored.
Polygonal faces are fan-triangulated around their first vertex. Indices are
1-based; negative indices count back from the most recent vertex.

With ``smooth_normals=True`` every triangle receives per-vertex normals:
the file's own ``vn`` normals when each face vertex references one, and
otherwise area-weighted averages of the adjacent face normals.

Example:
    >>> from whitted.materials import Material
    >>> from whitted.scene.obj_loader import load_obj
    >>> text = "v 0 0 0\\nv 1 0 0\\nv 0 1 0\\nf 1 2 3\\n"
    >>> triangles = load_obj(text, Material(kd=(0.8, 0.8, 0.8)))
    >>> len(triangles)
    1
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from pathlib import Path

import numpy as np

from whitted.core.ray import Vector, cross, normalize
from whitted.geometry.triangle import Triangle
from whitted.materials.material import Material

logger = logging.getLogger(__name__)


class ObjParseError(ValueError):
    """Raised when an OBJ document contains a malformed record."""

    def __init__(self, line_number: int, message: str) -> None:
        super().__init__(f"line {line_number}: {message}")
        self.line_number = line_number


@dataclass
class ObjMesh:
    """Raw mesh data read from an OBJ document.

    Attributes:
        vertices: Vertex positions.
        normals: Normals from ``vn`` records.
        faces: Triangles as ((v0, v1, v2), (n0, n1, n2)) zero-based index
            tuples. A normal index is None when the face vertex has none.
    """

    vertices: list[Vector] = field(default_factory=list)
    normals: list[Vector] = field(default_factory=list)
    faces: list[tuple[tuple[int, int, int], tuple[int | None, int | None, int | None]]] = field(
        default_factory=list
    )

    def compute_vertex_normals(self) -> list[Vector]:
        """Average the (area-weighted) face normals around each vertex."""
        accumulated = np.zeros((len(self.vertices), 3), dtype=np.float64)
        for (a, b, c), _ in self.faces:
            # Unnormalized cross product is proportional to the face area
            face = cross(self.vertices[b] - self.vertices[a], self.vertices[c] - self.vertices[a])
            accumulated[a] += face
            accumulated[b] += face
            accumulated[c] += face
        return [normalize(n) for n in accumulated]


def _resolve_index(token: str, count: int, line_number: int, kind: str) -> int:
    try:
        index = int(token)
    except ValueError:
        raise ObjParseError(line_number, f"invalid {kind} index {token!r}") from None
    resolved = index - 1 if index > 0 else count + index
    if index == 0 or not 0 <= resolved < count:
        raise ObjParseError(line_number, f"{kind} index {index} out of range (have {count})")
    return resolved


def _parse_floats(parts: list[str], line_number: int) -> Vector:
    if len(parts) < 3:
        raise ObjParseError(line_number, f"expected 3 coordinates, got {len(parts)}")
    try:
        return np.array([float(p) for p in parts[:3]], dtype=np.float64)
    except ValueError:
        raise ObjParseError(line_number, f"invalid coordinates {parts[:3]}") from None


def parse_obj(text: str) -> ObjMesh:
    """Parse OBJ text into an ObjMesh.

    Raises:
        ObjParseError: On malformed vertex or face records.
    """
    mesh = ObjMesh()
    for line_number, raw in enumerate(text.splitlines(), start=1):
        line = raw.split("#", 1)[0].strip()
        if not line:
            continue
        keyword, *parts = line.split()

        if keyword == "v":
            mesh.vertices.append(_parse_floats(parts, line_number))
        elif keyword == "vn":
            mesh.normals.append(_parse_floats(parts, line_number))
        elif keyword == "f":
            if len(parts) < 3:
                raise ObjParseError(line_number, f"face needs at least 3 vertices, got {len(parts)}")
            corners = []
            for part in parts:
                fields = part.split("/")
                v = _resolve_index(fields[0], len(mesh.vertices), line_number, "vertex")
                n = None
                if len(fields) >= 3 and fields[2]:
                    n = _resolve_index(fields[2], len(mesh.normals), line_number, "normal")
                corners.append((v, n))
            for i in range(1, len(corners) - 1):
                tri = (corners[0], corners[i], corners[i + 1])
                mesh.faces.append(
                    (
                        (tri[0][0], tri[1][0], tri[2][0]),
                        (tri[0][1], tri[1][1], tri[2][1]),
                    )
                )

    return mesh


def load_obj(text: str, material: Material, smooth_normals: bool = False) -> list[Triangle]:
    """Build triangles from OBJ text.

    Args:
        text: The OBJ document.
        material: Material shared by every triangle.
        smooth_normals: Attach per-vertex normals for Phong-interpolated shading.

    Returns:
        The mesh triangles, in face order.

    Raises:
        ObjParseError: On malformed input.
    """
    mesh = parse_obj(text)
    computed: list[Vector] | None = None
    triangles = []

    for (a, b, c), normal_indices in mesh.faces:
        p0, p1, p2 = mesh.vertices[a], mesh.vertices[b], mesh.vertices[c]
        if not smooth_normals:
            triangles.append(Triangle(p0, p1, p2, material))
            continue

        if all(i is not None for i in normal_indices):
            n0, n1, n2 = (mesh.normals[i] for i in normal_indices)
        else:
            if computed is None:
                computed = mesh.compute_vertex_normals()
            n0, n1, n2 = computed[a], computed[b], computed[c]
        triangles.append(Triangle(p0, p1, p2, material, n0, n1, n2))

    logger.debug(
        "Loaded OBJ mesh: %d vertices, %d triangles (smooth=%s)",
        len(mesh.vertices),
        len(triangles),
        smooth_normals,
    )
    return triangles


def load_obj_file(path: str | Path, material: Material, smooth_normals: bool = False) -> list[Triangle]:
    """Read an OBJ file from disk and build its triangles (see load_obj)."""
    return load_obj(Path(path).read_text(), material, smooth_normals)
