import math
import struct

import pytest

from modelgen.mesh import Face, Model, Vertex
from modelgen.stl import export_binary_stl, export_stl, fan_triangles, triangle_normal


def _quad_model(name="quad"):
    model = Model(name)
    for pos in [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.0)]:
        model.mesh.add_vertex(Vertex(pos, (0.0, 0.0, 1.0)))
    model.mesh.add_face(Face([0, 1, 2, 3]))
    return model


@pytest.mark.parametrize(
    "indices, expected",
    [
        ([], []),
        ([0, 1], []),
        ([0, 1, 2], [(0, 1, 2)]),
        ([0, 1, 2, 3, 4], [(0, 1, 2), (0, 2, 3), (0, 3, 4)]),
    ],
)
def test_fan_triangles(indices, expected):
    assert list(fan_triangles(indices)) == expected


def test_fan_triangle_count_is_sides_minus_two():
    for sides in range(3, 10):
        assert len(list(fan_triangles(list(range(sides))))) == sides - 2


def test_triangle_normal_is_unit_and_perpendicular():
    v0, v1, v2 = (0.0, 0.0, 0.0), (2.0, 1.0, 0.5), (-1.0, 3.0, 2.0)
    n = triangle_normal(v0, v1, v2)
    assert math.isclose(math.sqrt(sum(c * c for c in n)), 1.0)
    for edge in (v1, v2):
        assert math.isclose(sum(a * b for a, b in zip(n, edge)), 0.0, abs_tol=1e-9)


def test_triangle_normal_reverses_with_winding():
    a, b, c = (0.0, 0.0, 0.0), (1.0, 0.0, 2.0), (0.0, 1.0, 1.0)
    forward = triangle_normal(a, b, c)
    backward = triangle_normal(a, c, b)
    assert all(math.isclose(f, -r) for f, r in zip(forward, backward))


def test_degenerate_triangle_defaults_to_up():
    p = (1.0, 1.0, 1.0)
    assert triangle_normal(p, p, (2.0, 2.0, 2.0)) == (0.0, 1.0, 0.0)


def test_ascii_export_structure(tmp_path):
    model = _quad_model()
    model.mesh.add_face(Face([0, 1]))
    path = tmp_path / "quad.stl"
    export_stl(model, path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[0] == "solid quad"
    assert lines[-1] == "endsolid quad"
    facets = [line for line in lines if line.startswith("  facet normal")]
    assert len(facets) == 2
    assert sum(line.startswith("      vertex") for line in lines) == 6
    assert lines.count("    outer loop") == lines.count("    endloop") == 2


def test_ascii_facet_normal_for_flat_quad(tmp_path):
    path = tmp_path / "quad.stl"
    export_stl(_quad_model(), path)
    lines = path.read_text(encoding="utf-8").splitlines()
    assert lines[1] == "  facet normal 0 0 1"


def test_ascii_vertices_round_trip(tmp_path):
    path = tmp_path / "quad.stl"
    model = _quad_model()
    export_stl(model, path)
    coords = [
        tuple(float(x) for x in line.split()[1:])
        for line in path.read_text(encoding="utf-8").splitlines()
        if line.strip().startswith("vertex")
    ]
    positions = [v.position for v in model.mesh.vertices]
    assert coords == [positions[i] for tri in fan_triangles([0, 1, 2, 3]) for i in tri]


def test_binary_export_layout(tmp_path):
    path = tmp_path / "quad.stl"
    model = _quad_model()
    export_binary_stl(model, path)
    data = path.read_bytes()
    (count,) = struct.unpack_from("<I", data, 80)
    assert count == 2
    assert len(data) == 84 + 50 * count
    assert data.startswith(b"Binary STL")
    assert b"quad" in data[:80]
    first = struct.unpack_from("<12fH", data, 84)
    assert first[3:12] == (0.0, 0.0, 0.0, 1.0, 0.0, 0.0, 1.0, 1.0, 0.0)
    assert first[12] == 0


def test_binary_header_truncated_to_eighty_bytes(tmp_path):
    path = tmp_path / "long.stl"
    export_binary_stl(_quad_model("x" * 200), path)
    data = path.read_bytes()
    assert data[79:80] == b"x"
    assert struct.unpack_from("<I", data, 80)[0] == 2


def test_out_of_range_index_raises(tmp_path):
    model = _quad_model()
    model.mesh.add_face(Face.triangle(0, 1, 9))
    with pytest.raises(IndexError):
        export_stl(model, tmp_path / "bad.stl")