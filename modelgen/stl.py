"""STL export in ASCII and binary form."""

from __future__ import annotations

import math
import os
import struct
from pathlib import Path
from typing import Iterator, Sequence, Tuple, Union

from .mesh import Model, Vec3, _format_float

PathLike = Union[str, "os.PathLike[str]"]

_HEADER_SIZE = 80
_TRIANGLE = struct.Struct("<12fH")


def fan_triangles(indices: Sequence[int]) -> Iterator[Tuple[int, int, int]]:
    """Split a polygon into a triangle fan around its first index.

    Polygons with fewer than three indices yield nothing.
    """
    if len(indices) < 3:
        return
    first = indices[0]
    for b, c in zip(indices[1:], indices[2:]):
        yield first, b, c


def triangle_normal(v0: Vec3, v1: Vec3, v2: Vec3) -> Vec3:
    """Unit normal of a triangle, or +Y when the triangle is degenerate."""
    e1 = (v1[0] - v0[0], v1[1] - v0[1], v1[2] - v0[2])
    e2 = (v2[0] - v0[0], v2[1] - v0[1], v2[2] - v0[2])
    n = (
        e1[1] * e2[2] - e1[2] * e2[1],
        e1[2] * e2[0] - e1[0] * e2[2],
        e1[0] * e2[1] - e1[1] * e2[0],
    )
    length = math.sqrt(n[0] ** 2 + n[1] ** 2 + n[2] ** 2)
    if length > 1e-6:
        return (n[0] / length, n[1] / length, n[2] / length)
    return (0.0, 1.0, 0.0)


def _triangles(model: Model) -> Iterator[Tuple[Vec3, Vec3, Vec3]]:
    vertices = model.mesh.vertices
    for face in model.mesh.faces:
        for a, b, c in fan_triangles(face.indices):
            yield vertices[a].position, vertices[b].position, vertices[c].position


def _numbers(v: Vec3) -> str:
    return " ".join(_format_float(c) for c in v)


def export_stl(model: Model, path: PathLike) -> None:
    """Write the model as an ASCII STL file."""
    with Path(path).open("w", encoding="utf-8", newline="\n") as fh:
        fh.write(f"solid {model.name}\n")
        for v0, v1, v2 in _triangles(model):
            normal = triangle_normal(v0, v1, v2)
            fh.write(f"  facet normal {_numbers(normal)}\n")
            fh.write("    outer loop\n")
            for vertex in (v0, v1, v2):
                fh.write(f"      vertex {_numbers(vertex)}\n")
            fh.write("    endloop\n")
            fh.write("  endfacet\n")
        fh.write(f"endsolid {model.name}\n")


def export_binary_stl(model: Model, path: PathLike) -> None:
    """Write the model as a binary STL file."""
    header = f"Binary STL generated by modelgen - Model: {model.name}".encode("utf-8")
    header = header[:_HEADER_SIZE].ljust(_HEADER_SIZE, b"\0")
    triangles = list(_triangles(model))
    with Path(path).open("wb") as fh:
        fh.write(header)
        fh.write(struct.pack("<I", len(triangles)))
        for v0, v1, v2 in triangles:
            normal = triangle_normal(v0, v1, v2)
            fh.write(_TRIANGLE.pack(*normal, *v0, *v1, *v2, 0))