"""Affine transforms that act on a model in place: scaling, translation, rotation."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Tuple

from .mesh import Model, Vec3


def _normalized(v: Vec3) -> Vec3:
    length = math.sqrt(v[0] ** 2 + v[1] ** 2 + v[2] ** 2)
    if length == 0.0:
        return v
    return (v[0] / length, v[1] / length, v[2] / length)


@dataclass(frozen=True)
class Scale:
    """Scale positions along each axis about the origin."""

    x: float
    y: float
    z: float

    @classmethod
    def uniform(cls, factor: float) -> "Scale":
        """Scale by the same factor on every axis."""
        return cls(factor, factor, factor)

    def __call__(self, model: Model) -> None:
        sx, sy, sz = self.x, self.y, self.z
        # Normals follow the inverse transpose, i.e. the cofactor matrix up to sign of det.
        cofactor = (sy * sz, sx * sz, sx * sy)
        sign = -1.0 if sx * sy * sz < 0 else 1.0
        for vertex in model.mesh.vertices:
            px, py, pz = vertex.position
            vertex.position = (px * sx, py * sy, pz * sz)
            nx, ny, nz = vertex.normal
            scaled = (
                nx * cofactor[0] * sign,
                ny * cofactor[1] * sign,
                nz * cofactor[2] * sign,
            )
            if any(scaled):
                vertex.normal = _normalized(scaled)


@dataclass(frozen=True)
class Translate:
    """Move positions by a fixed offset; normals are unchanged."""

    x: float
    y: float
    z: float

    def __call__(self, model: Model) -> None:
        for vertex in model.mesh.vertices:
            px, py, pz = vertex.position
            vertex.position = (px + self.x, py + self.y, pz + self.z)


@dataclass(frozen=True)
class Rotate:
    """Rotate counter-clockwise by an angle in degrees about an axis through the origin."""

    axis: Vec3
    degrees: float

    def __post_init__(self) -> None:
        if not any(self.axis):
            raise ValueError("rotation axis must not be the zero vector")

    @classmethod
    def around_x(cls, degrees: float) -> "Rotate":
        """Rotation about the X axis."""
        return cls((1.0, 0.0, 0.0), degrees)

    @classmethod
    def around_y(cls, degrees: float) -> "Rotate":
        """Rotation about the Y axis."""
        return cls((0.0, 1.0, 0.0), degrees)

    @classmethod
    def around_z(cls, degrees: float) -> "Rotate":
        """Rotation about the Z axis."""
        return cls((0.0, 0.0, 1.0), degrees)

    def _rotate(self, v: Vec3, k: Vec3, cos_a: float, sin_a: float) -> Tuple[float, float, float]:
        dot = k[0] * v[0] + k[1] * v[1] + k[2] * v[2]
        cross = (
            k[1] * v[2] - k[2] * v[1],
            k[2] * v[0] - k[0] * v[2],
            k[0] * v[1] - k[1] * v[0],
        )
        return tuple(
            v[i] * cos_a + cross[i] * sin_a + k[i] * dot * (1.0 - cos_a) for i in range(3)
        )  # type: ignore[return-value]

    def __call__(self, model: Model) -> None:
        k = _normalized(self.axis)
        angle = math.radians(self.degrees)
        cos_a, sin_a = math.cos(angle), math.sin(angle)
        for vertex in model.mesh.vertices:
            vertex.position = self._rotate(vertex.position, k, cos_a, sin_a)
            vertex.normal = self._rotate(vertex.normal, k, cos_a, sin_a)