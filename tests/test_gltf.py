import json
import struct

import pytest

from modelgen.gltf import buffer_size, export_gltf, index_count
from modelgen.mesh import Face, Mesh, Model, Vertex


def _model(tex=False, faces=None):
    mesh = Mesh()
    positions = [(0.0, 0.0, 0.0), (1.0, 0.0, 0.0), (1.0, 1.0, 0.0), (0.0, 1.0, 0.5)]
    for i, p in enumerate(positions):
        tc = (0.5 * (i % 2), 0.25) if tex else None
        mesh.add_vertex(Vertex(p, (0.0, 0.0, 1.0), tc))
    for f in faces if faces is not None else [[0, 1, 2, 3]]:
        mesh.add_face(Face(f))
    return Model("quad", mesh)


@pytest.mark.parametrize(
    "faces,expected",
    [([[0, 1, 2]], 3), ([[0, 1, 2, 3]], 6), ([[0, 1]], 0), ([[0, 1, 2], [0, 2, 3]], 6), ([], 0)],
)
def test_index_count(faces, expected):
    assert index_count(_model(faces=faces)) == expected


def test_buffer_size_without_tex_coords():
    model = _model()
    assert buffer_size(model) == 4 * 12 * 2 + index_count(model) * 2


def test_buffer_size_with_tex_coords():
    plain = _model()
    textured = _model(tex=True)
    assert buffer_size(textured) - buffer_size(plain) == 4 * 8


def test_export_writes_json_and_binary(tmp_path):
    model = _model()
    export_gltf(model, tmp_path / "quad.gltf")
    doc = json.loads((tmp_path / "quad.gltf").read_text())
    data = (tmp_path / "quad.bin").read_bytes()

    assert doc["asset"]["version"] == "2.0"
    assert doc["nodes"][0]["name"] == "quad"
    assert doc["buffers"][0]["uri"] == "quad.bin"
    assert doc["buffers"][0]["byteLength"] == len(data) == buffer_size(model)
    prim = doc["meshes"][0]["primitives"][0]
    assert prim["mode"] == 4
    assert prim["attributes"] == {"POSITION": 0, "NORMAL": 1}
    assert [a["componentType"] for a in doc["accessors"]] == [5126, 5126, 5123]
    assert [v["target"] for v in doc["bufferViews"]] == [34962, 34962, 34963]


def test_bounds_in_position_accessor(tmp_path):
    export_gltf(_model(), tmp_path / "quad.gltf")
    doc = json.loads((tmp_path / "quad.gltf").read_text())
    acc = doc["accessors"][0]
    assert acc["min"] == [0.0, 0.0, 0.0]
    assert acc["max"] == [1.0, 1.0, 0.5]
    assert acc["count"] == 4


def test_binary_contents_round_trip(tmp_path):
    model = _model()
    export_gltf(model, tmp_path / "quad.gltf")
    data = (tmp_path / "quad.bin").read_bytes()
    n = len(model.mesh.vertices)
    positions = struct.unpack_from(f"<{3 * n}f", data, 0)
    normals = struct.unpack_from(f"<{3 * n}f", data, 12 * n)
    indices = struct.unpack_from("<6H", data, 24 * n)
    assert positions == tuple(c for v in model.mesh.vertices for c in v.position)
    assert normals == tuple(c for v in model.mesh.vertices for c in v.normal)
    assert indices == (0, 1, 2, 0, 2, 3)


def test_tex_coords_appended(tmp_path):
    model = _model(tex=True)
    export_gltf(model, tmp_path / "t.gltf")
    doc = json.loads((tmp_path / "t.gltf").read_text())
    data = (tmp_path / "t.bin").read_bytes()
    prim = doc["meshes"][0]["primitives"][0]
    assert prim["attributes"]["TEXCOORD_0"] == 3
    view = doc["bufferViews"][3]
    assert view["byteOffset"] + view["byteLength"] == len(data)
    uvs = struct.unpack_from("<8f", data, view["byteOffset"])
    assert uvs == tuple(c for v in model.mesh.vertices for c in v.tex_coords)


def test_extension_replaced(tmp_path):
    export_gltf(_model(), tmp_path / "scene.txt")
    assert (tmp_path / "scene.gltf").exists()
    assert (tmp_path / "scene.bin").exists()
    assert not (tmp_path / "scene.txt").exists()