"""Primitive shapes that build ready-made models: cubes, UV spheres and cylinders."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import List, Tuple

from .mesh import Face, Model, Vec3, Vertex

# Each cube side: outward normal and its four unit corners, counter-clockwise seen from outside.
_CUBE_SIDES: Tuple[Tuple[Vec3, Tuple[Vec3, Vec3, Vec3, Vec3]], ...] = (
    ((1.0, 0.0, 0.0), ((1, -1, -1), (1, 1, -1), (1, 1, 1), (1, -1, 1))),
    ((-1.0, 0.0, 0.0), ((-1, -1, -1), (-1, -1, 1), (-1, 1, 1), (-1, 1, -1))),
    ((0.0, 1.0, 0.0), ((-1, 1, -1), (-1, 1, 1), (1, 1, 1), (1, 1, -1))),
    ((0.0, -1.0, 0.0), ((-1, -1, -1), (1, -1, -1), (1, -1, 1), (-1, -1, 1))),
    ((0.0, 0.0, 1.0), ((-1, -1, 1), (1, -1, 1), (1, 1, 1), (-1, 1, 1))),
    ((0.0, 0.0, -1.0), ((-1, -1, -1), (-1, 1, -1), (1, 1, -1), (1, -1, -1))),
)
_QUAD_UVS = ((0.0, 0.0), (1.0, 0.0), (1.0, 1.0), (0.0, 1.0))


@dataclass
class Cube:
    """An axis-aligned cube with edge length ``size`` around ``center``."""

    size: float = 1.0
    center: Vec3 = (0.0, 0.0, 0.0)

    def build(self) -> Model:
        """Create the cube as six quads with flat normals."""
        model = Model("Cube")
        half = self.size / 2.0
        cx, cy, cz = self.center
        for normal, corners in _CUBE_SIDES:
            indices = [
                model.mesh.add_vertex(
                    Vertex((cx + x * half, cy + y * half, cz + z * half), normal, uv)
                )
                for (x, y, z), uv in zip(corners, _QUAD_UVS)
            ]
            model.mesh.add_face(Face(indices))
        return model


@dataclass
class Sphere:
    """A UV sphere with its poles on the Y axis."""

    radius: float = 1.0
    segments: int = 32
    rings: int = 16
    center: Vec3 = (0.0, 0.0, 0.0)

    def build(self) -> Model:
        """Create the sphere as outward-facing triangles."""
        if self.segments < 3:
            raise ValueError("a sphere needs at least 3 segments")
        if self.rings < 2:
            raise ValueError("a sphere needs at least 2 rings")
        model = Model("Sphere")
        cx, cy, cz = self.center
        columns = self.segments + 1
        for ring in range(self.rings + 1):
            theta = math.pi * ring / self.rings
            sin_t, cos_t = math.sin(theta), math.cos(theta)
            for seg in range(columns):
                phi = 2.0 * math.pi * seg / self.segments
                normal = (sin_t * math.cos(phi), cos_t, sin_t * math.sin(phi))
                position = (
                    cx + self.radius * normal[0],
                    cy + self.radius * normal[1],
                    cz + self.radius * normal[2],
                )
                uv = (seg / self.segments, 1.0 - ring / self.rings)
                model.mesh.add_vertex(Vertex(position, normal, uv))

        last_ring = self.rings - 1
        for ring in range(self.rings):
            for seg in range(self.segments):
                a = ring * columns + seg
                b = a + columns
                if ring != 0:
                    model.mesh.add_face(Face.triangle(a, a + 1, b))
                if ring != last_ring:
                    model.mesh.add_face(Face.triangle(a + 1, b + 1, b))
        return model


@dataclass
class Cylinder:
    """A cylinder whose axis runs along Z, optionally closed by end caps."""

    radius: float = 1.0
    height: float = 2.0
    segments: int = 32
    center: Vec3 = (0.0, 0.0, 0.0)
    caps: bool = True

    def build(self) -> Model:
        """Create the cylinder: a quad side wall plus triangle-fan caps."""
        if self.segments < 3:
            raise ValueError("a cylinder needs at least 3 segments")
        model = Model("Cylinder")
        mesh = model.mesh
        cx, cy, cz = self.center
        half = self.height / 2.0
        angles = [2.0 * math.pi * seg / self.segments for seg in range(self.segments + 1)]

        side: List[Tuple[int, int]] = []
        for seg, angle in enumerate(angles):
            c, s = math.cos(angle), math.sin(angle)
            x, y = cx + self.radius * c, cy + self.radius * s
            u = seg / self.segments
            bottom = mesh.add_vertex(Vertex((x, y, cz - half), (c, s, 0.0), (u, 0.0)))
            top = mesh.add_vertex(Vertex((x, y, cz + half), (c, s, 0.0), (u, 1.0)))
            side.append((bottom, top))
        for (b0, t0), (b1, t1) in zip(side, side[1:]):
            mesh.add_face(Face([b0, b1, t1, t0]))

        if self.caps:
            self._add_cap(model, cz - half, -1.0, angles[:-1])
            self._add_cap(model, cz + half, 1.0, angles[:-1])
        return model

    def _add_cap(self, model: Model, z: float, direction: float, angles: List[float]) -> None:
        mesh = model.mesh
        cx, cy, _ = self.center
        normal = (0.0, 0.0, direction)
        hub = mesh.add_vertex(Vertex((cx, cy, z), normal, (0.5, 0.5)))
        ring = [
            mesh.add_vertex(
                Vertex(
                    (cx + self.radius * math.cos(a), cy + self.radius * math.sin(a), z),
                    normal,
                    (0.5 + 0.5 * math.cos(a), 0.5 + 0.5 * math.sin(a)),
                )
            )
            for a in angles
        ]
        for current, following in zip(ring, ring[1:] + ring[:1]):
            if direction > 0:
                mesh.add_face(Face.triangle(hub, current, following))
            else:
                mesh.add_face(Face.triangle(hub, following, current))