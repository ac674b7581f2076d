"""Wavefront OBJ and MTL export."""

from __future__ import annotations

import os
from pathlib import Path
from typing import Iterator, Optional, Union

from .mesh import Model, TextureType, _format_float

PathLike = Union[str, "os.PathLike[str]"]

_TEXTURE_KEYWORDS = (
    (TextureType.DIFFUSE, "map_Kd"),
    (TextureType.NORMAL, "map_Bump"),
    (TextureType.SPECULAR, "map_Ks"),
)


def _numbers(*values: float) -> str:
    return " ".join(_format_float(v) for v in values)


def _obj_lines(model: Model, mtl_filename: Optional[str]) -> Iterator[str]:
    mesh = model.mesh
    yield "# OBJ file generated by modelgen"
    yield f"# Model name: {model.name}"
    yield ""
    if mtl_filename is not None:
        yield f"mtllib {mtl_filename}"

    for vertex in mesh.vertices:
        yield f"v {_numbers(*vertex.position)}"

    has_tex_coords = mesh.has_tex_coords()
    if has_tex_coords:
        for vertex in mesh.vertices:
            yield f"vt {_numbers(*(vertex.tex_coords or (0.0, 0.0)))}"

    for vertex in mesh.vertices:
        yield f"vn {_numbers(*vertex.normal)}"

    current_material: Optional[str] = None
    for face_idx, face in enumerate(mesh.faces):
        face_material = (
            mesh.face_materials[face_idx] if face_idx < len(mesh.face_materials) else None
        )
        if face_material != current_material:
            if face_material is not None:
                yield f"usemtl {face_material}"
            current_material = face_material

        if has_tex_coords:
            refs = (f"{i + 1}/{i + 1}/{i + 1}" for i in face.indices)
        else:
            refs = (f"{i + 1}//{i + 1}" for i in face.indices)
        yield " ".join(["f", *refs])


def export_obj(model: Model, path: PathLike) -> None:
    """Write the model as an OBJ file, plus an MTL file beside it if it has materials."""
    path = Path(path)
    mtl_filename = None
    if model.mesh.materials:
        mtl_filename = f"{path.stem}.mtl"
    with path.open("w", encoding="utf-8", newline="\n") as fh:
        for line in _obj_lines(model, mtl_filename):
            fh.write(line + "\n")
    if mtl_filename is not None:
        export_mtl(model, path.with_name(mtl_filename))


def _mtl_lines(model: Model) -> Iterator[str]:
    yield "# MTL file generated by modelgen"
    yield f"# Model name: {model.name}"
    yield ""
    for name, material in model.mesh.materials.items():
        yield f"newmtl {name}"
        yield f"Ka {_numbers(*material.ambient[:3])}"
        yield f"Kd {_numbers(*material.diffuse[:3])}"
        yield f"Ks {_numbers(*material.specular[:3])}"
        yield f"d {_format_float(material.diffuse[3])}"
        yield f"Ns {_format_float(material.shininess)}"
        yield "illum 2"
        for texture_type, keyword in _TEXTURE_KEYWORDS:
            texture = material.textures.get(texture_type)
            if texture is not None:
                yield f"{keyword} {texture}"
        yield ""


def export_mtl(model: Model, path: PathLike) -> None:
    """Write the model's materials as an MTL file."""
    with Path(path).open("w", encoding="utf-8", newline="\n") as fh:
        for line in _mtl_lines(model):
            fh.write(line + "\n")