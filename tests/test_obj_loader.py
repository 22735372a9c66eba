"""Tests for Wavefront OBJ parsing and loading."""

import numpy as np
import pytest

QUAD_OBJ = """\
# unit quad in the z = -2 plane
v 0 0 -2
v 1 0 -2
v 1 1 -2
v 0 1 -2
vt 0 0
f 1/1 2/1 3/1 4/1
"""

NORMALS_OBJ = """\
v 0 0 0
v 1 0 0
v 0 1 0
vn 0 0 1
vn 1 0 0
vn 0 1 0
f 1//1 2//2 3//3
"""


class TestParseObj:
    """Tests for parse_obj."""

    def test_fan_triangulation(self):
        """A quad is split into two triangles around its first vertex."""
        from whitted.scene import parse_obj

        mesh = parse_obj(QUAD_OBJ)
        assert len(mesh.vertices) == 4
        assert [face for face, _ in mesh.faces] == [(0, 1, 2), (0, 2, 3)]

    def test_normal_indices(self):
        """v//vn references are resolved to zero-based normal indices."""
        from whitted.scene import parse_obj

        mesh = parse_obj(NORMALS_OBJ)
        assert mesh.faces == [((0, 1, 2), (0, 1, 2))]
        assert len(mesh.normals) == 3

    def test_negative_indices(self):
        """Negative indices count back from the latest vertex."""
        from whitted.scene import parse_obj

        mesh = parse_obj("v 0 0 0\nv 1 0 0\nv 0 1 0\nf -3 -2 -1\n")
        assert mesh.faces[0][0] == (0, 1, 2)

    def test_comments_and_unknown_records_ignored(self):
        """Comments, blank lines and other keywords are skipped."""
        from whitted.scene import parse_obj

        mesh = parse_obj("# header\n\no thing\ng group\nusemtl red\nv 0 0 0 # inline\n")
        assert len(mesh.vertices) == 1
        assert mesh.faces == []

    @pytest.mark.parametrize(
        "text, line",
        [
            ("v 0 0\n", 1),
            ("v 0 0 0\nv a b c\n", 2),
            ("v 0 0 0\nv 1 0 0\nf 1 2\n", 3),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1 2 4\n", 4),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 0 1 2\n", 4),
            ("v 0 0 0\nv 1 0 0\nv 0 1 0\nf 1//1 2//1 3//1\n", 4),
        ],
    )
    def test_malformed_input(self, text, line):
        """Malformed records raise ObjParseError with the line number."""
        from whitted.scene import ObjParseError, parse_obj

        with pytest.raises(ObjParseError) as excinfo:
            parse_obj(text)
        assert excinfo.value.line_number == line
        assert isinstance(excinfo.value, ValueError)


class TestLoadObj:
    """Tests for building triangles from OBJ text."""

    def test_flat_triangles(self, diffuse_material):
        """Without smoothing the triangles use their face normals."""
        from whitted.scene import load_obj

        triangles = load_obj(QUAD_OBJ, diffuse_material)
        assert len(triangles) == 2
        assert not any(t.has_vertex_normals for t in triangles)
        assert all(t.material is diffuse_material for t in triangles)

    def test_file_normals_used(self, diffuse_material):
        """With smoothing, normals from vn records are attached."""
        from whitted.scene import load_obj

        (tri,) = load_obj(NORMALS_OBJ, diffuse_material, smooth_normals=True)
        np.testing.assert_allclose(tri.n0, [0.0, 0.0, 1.0])
        np.testing.assert_allclose(tri.n1, [1.0, 0.0, 0.0])
        np.testing.assert_allclose(tri.n2, [0.0, 1.0, 0.0])

    def test_computed_normals(self, diffuse_material):
        """Missing vn records are replaced by averaged face normals."""
        from whitted.scene import load_obj

        triangles = load_obj(QUAD_OBJ, diffuse_material, smooth_normals=True)
        for tri in triangles:
            assert tri.has_vertex_normals
            for n in (tri.n0, tri.n1, tri.n2):
                np.testing.assert_allclose(n, [0.0, 0.0, 1.0])

    def test_load_obj_file(self, tmp_path, diffuse_material):
        """OBJ files are read from disk."""
        from whitted.scene import load_obj_file

        path = tmp_path / "quad.obj"
        path.write_text(QUAD_OBJ)
        assert len(load_obj_file(path, diffuse_material)) == 2

    def test_loaded_mesh_is_hit(self, diffuse_material):
        """A ray through the quad hits one of its triangles."""
        from whitted.core.ray import Ray
        from whitted.scene import intersect_primitives, load_obj

        triangles = load_obj(QUAD_OBJ, diffuse_material)
        hit = intersect_primitives(triangles, Ray((0.75, 0.25, 0.0), (0.0, 0.0, -1.0)))
        assert hit is not None
        assert hit.t == pytest.approx(2.0)
