"""glTF 2.0 export: a JSON document plus a separate binary buffer."""

from __future__ import annotations

import json
import os
import struct
from pathlib import Path
from typing import Any, Dict, Iterator, List, Union

from .mesh import Model, _format_float
from .stl import fan_triangles

PathLike = Union[str, "os.PathLike[str]"]

_FLOAT = 5126
_UNSIGNED_SHORT = 5123
_ARRAY_BUFFER = 34962
_ELEMENT_ARRAY_BUFFER = 34963
_TRIANGLES = 4

_VEC3_BYTES = 12
_VEC2_BYTES = 8
_INDEX_BYTES = 2


def index_count(model: Model) -> int:
    """Number of triangle indices after fan-triangulating every face."""
    return sum(3 * (len(face.indices) - 2) for face in model.mesh.faces if len(face.indices) >= 3)


def buffer_size(model: Model) -> int:
    """Total size in bytes of the binary buffer written for the model."""
    count = len(model.mesh.vertices)
    size = count * _VEC3_BYTES * 2 + index_count(model) * _INDEX_BYTES
    if model.mesh.has_tex_coords():
        size += count * _VEC2_BYTES
    return size


def _triangle_indices(model: Model) -> Iterator[int]:
    for face in model.mesh.faces:
        for triangle in fan_triangles(face.indices):
            yield from triangle


def _binary_buffer(model: Model) -> bytes:
    vertices = model.mesh.vertices
    parts: List[bytes] = [struct.pack("<3f", *v.position) for v in vertices]
    parts.extend(struct.pack("<3f", *v.normal) for v in vertices)
    parts.extend(struct.pack("<H", idx & 0xFFFF) for idx in _triangle_indices(model))
    if model.mesh.has_tex_coords():
        parts.extend(struct.pack("<2f", *(v.tex_coords or (0.0, 0.0))) for v in vertices)
    return b"".join(parts)


def _number(value: float) -> float:
    return float(_format_float(value))


def _document(model: Model, bin_filename: str) -> Dict[str, Any]:
    count = len(model.mesh.vertices)
    indices = index_count(model)
    has_tex = model.mesh.has_tex_coords()
    low, high = model.mesh.bounds()

    attributes: Dict[str, int] = {"POSITION": 0, "NORMAL": 1}
    accessors: List[Dict[str, Any]] = [
        {
            "bufferView": 0,
            "componentType": _FLOAT,
            "count": count,
            "type": "VEC3",
            "min": [_number(c) for c in low],
            "max": [_number(c) for c in high],
        },
        {"bufferView": 1, "componentType": _FLOAT, "count": count, "type": "VEC3"},
        {"bufferView": 2, "componentType": _UNSIGNED_SHORT, "count": indices, "type": "SCALAR"},
    ]
    buffer_views: List[Dict[str, Any]] = [
        {
            "buffer": 0,
            "byteOffset": 0,
            "byteLength": count * _VEC3_BYTES,
            "target": _ARRAY_BUFFER,
        },
        {
            "buffer": 0,
            "byteOffset": count * _VEC3_BYTES,
            "byteLength": count * _VEC3_BYTES,
            "target": _ARRAY_BUFFER,
        },
        {
            "buffer": 0,
            "byteOffset": count * _VEC3_BYTES * 2,
            "byteLength": indices * _INDEX_BYTES,
            "target": _ELEMENT_ARRAY_BUFFER,
        },
    ]
    if has_tex:
        attributes["TEXCOORD_0"] = 3
        accessors.append(
            {"bufferView": 3, "componentType": _FLOAT, "count": count, "type": "VEC2"}
        )
        buffer_views.append(
            {
                "buffer": 0,
                "byteOffset": count * _VEC3_BYTES * 2 + indices * _INDEX_BYTES,
                "byteLength": count * _VEC2_BYTES,
                "target": _ARRAY_BUFFER,
            }
        )

    return {
        "asset": {"version": "2.0", "generator": "modelgen"},
        "scene": 0,
        "scenes": [{"nodes": [0]}],
        "nodes": [{"mesh": 0, "name": model.name}],
        "meshes": [
            {
                "primitives": [
                    {"attributes": attributes, "indices": 2, "mode": _TRIANGLES}
                ]
            }
        ],
        "accessors": accessors,
        "bufferViews": buffer_views,
        "buffers": [{"uri": bin_filename, "byteLength": buffer_size(model)}],
    }


def export_gltf(model: Model, path: PathLike) -> None:
    """Write the model as a .gltf file with a .bin buffer beside it.

    The path's extension is replaced with ``.gltf`` if it is anything else.
    """
    gltf_path = Path(path)
    if gltf_path.suffix != ".gltf":
        gltf_path = gltf_path.with_suffix(".gltf")
    bin_path = gltf_path.with_suffix(".bin")

    bin_path.write_bytes(_binary_buffer(model))
    document = _document(model, bin_path.name)
    with gltf_path.open("w", encoding="utf-8", newline="\n") as fh:
        json.dump(document, fh, indent=2)