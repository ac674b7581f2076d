"""Core mesh data structures: vertices, faces, materials, meshes and models."""

from __future__ import annotations

import enum
import math
import struct
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Callable, Dict, List, Optional, Tuple

Vec3 = Tuple[float, float, float]
Color3 = Tuple[float, float, float]
Color4 = Tuple[float, float, float, float]
TexCoord = Tuple[float, float]


class TextureType(enum.Enum):
    """Kinds of texture map a material can reference."""

    DIFFUSE = "diffuse"
    NORMAL = "normal"
    SPECULAR = "specular"


@dataclass
class Material:
    """Surface appearance of a group of faces."""

    name: str
    ambient: Color3 = (0.1, 0.1, 0.1)
    diffuse: Color4 = (0.8, 0.8, 0.8, 1.0)
    specular: Color3 = (0.5, 0.5, 0.5)
    shininess: float = 32.0
    textures: Dict[TextureType, str] = field(default_factory=dict)


@dataclass
class Vertex:
    """A mesh vertex with position, normal and optional texture coordinates."""

    position: Vec3
    normal: Vec3
    tex_coords: Optional[TexCoord] = None


@dataclass
class Face:
    """A polygon given by indices into the mesh's vertex list."""

    indices: List[int]

    @classmethod
    def triangle(cls, a: int, b: int, c: int) -> "Face":
        """Create a three-sided face."""
        return cls([a, b, c])


@dataclass
class Mesh:
    """Vertices, faces and the materials assigned to those faces."""

    vertices: List[Vertex] = field(default_factory=list)
    faces: List[Face] = field(default_factory=list)
    face_materials: List[Optional[str]] = field(default_factory=list)
    materials: Dict[str, Material] = field(default_factory=dict)

    def add_vertex(self, vertex: Vertex) -> int:
        """Append a vertex and return its index."""
        self.vertices.append(vertex)
        return len(self.vertices) - 1

    def add_face(self, face: Face, material: Optional[str] = None) -> int:
        """Append a face with an optional material name and return its index."""
        self.faces.append(face)
        self.face_materials.append(material)
        return len(self.faces) - 1

    def has_tex_coords(self) -> bool:
        """Whether any vertex carries texture coordinates."""
        return any(v.tex_coords is not None for v in self.vertices)

    def bounds(self) -> Tuple[Vec3, Vec3]:
        """Axis-aligned bounding box as (minimum, maximum) corners.

        An empty mesh yields infinite bounds (min at +inf, max at -inf).
        """
        if not self.vertices:
            inf = math.inf
            return (inf, inf, inf), (-inf, -inf, -inf)
        xs, ys, zs = zip(*(v.position for v in self.vertices))
        return (min(xs), min(ys), min(zs)), (max(xs), max(ys), max(zs))


@dataclass
class Model:
    """A named mesh that transforms can be applied to."""

    name: str
    mesh: Mesh = field(default_factory=Mesh)

    def apply(self, transform: Callable[["Model"], object]) -> "Model":
        """Apply a transform in place and return the model for chaining."""
        transform(self)
        return self


def _to_f32(value: float) -> float:
    try:
        return struct.unpack("<f", struct.pack("<f", value))[0]
    except OverflowError:
        return math.copysign(math.inf, value)


def _format_float(value: float) -> str:
    """Format a number as the shortest decimal that identifies it in single precision.

    Integral values have no fractional part and no exponent notation is used.
    """
    if math.isnan(value):
        return "NaN"
    single = _to_f32(value)
    if math.isinf(single):
        return "inf" if single > 0 else "-inf"
    text = f"{single:.9g}"
    for digits in range(1, 10):
        candidate = f"{single:.{digits}g}"
        if _to_f32(float(candidate)) == single:
            text = candidate
            break
    result = format(Decimal(text), "f")
    if "." in result:
        result = result.rstrip("0").rstrip(".")
    return result