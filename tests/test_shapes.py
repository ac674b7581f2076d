import math

import pytest

from modelgen.shapes import Cube, Cylinder, Sphere
from modelgen.stl import fan_triangles, triangle_normal


def _dot(a, b):
    return sum(x * y for x, y in zip(a, b))


def _assert_outward(model):
    vertices = model.mesh.vertices
    for face in model.mesh.faces:
        for a, b, c in fan_triangles(face.indices):
            tn = triangle_normal(vertices[a].position, vertices[b].position, vertices[c].position)
            assert _dot(tn, vertices[a].normal) > 0


@pytest.mark.parametrize(
    "shape",
    [
        Cube(),
        Cube(size=3.0, center=(1.0, -2.0, 0.5)),
        Sphere(segments=8, rings=4),
        Sphere(radius=2.0, segments=5, rings=3, center=(1.0, 1.0, 1.0)),
        Cylinder(segments=6),
        Cylinder(segments=6, caps=False),
    ],
)
def test_faces_point_outward_and_indices_valid(shape):
    model = shape.build()
    count = len(model.mesh.vertices)
    assert all(0 <= i < count for face in model.mesh.faces for i in face.indices)
    assert len(model.mesh.face_materials) == len(model.mesh.faces)
    _assert_outward(model)


def test_cube_bounds_follow_size_and_center():
    cube = Cube(size=4.0, center=(1.0, 2.0, 3.0)).build()
    low, high = cube.mesh.bounds()
    assert low == pytest.approx((-1.0, 0.0, 1.0))
    assert high == pytest.approx((3.0, 4.0, 5.0))


def test_cube_has_six_quads_and_name():
    cube = Cube().build()
    assert cube.name == "Cube"
    assert len(cube.mesh.faces) == 6
    assert all(len(face.indices) == 4 for face in cube.mesh.faces)
    assert cube.mesh.has_tex_coords()


def test_sphere_vertices_lie_on_surface():
    center = (0.5, -1.0, 2.0)
    sphere = Sphere(radius=2.5, segments=12, rings=6, center=center).build()
    for vertex in sphere.mesh.vertices:
        assert math.dist(vertex.position, center) == pytest.approx(2.5)
        assert math.hypot(*vertex.normal) == pytest.approx(1.0)


def test_sphere_more_segments_more_faces():
    coarse = Sphere(segments=6, rings=4).build()
    fine = Sphere(segments=12, rings=4).build()
    assert len(fine.mesh.faces) > len(coarse.mesh.faces)
    assert all(len(face.indices) == 3 for face in fine.mesh.faces)


def test_sphere_rejects_too_few_segments_or_rings():
    with pytest.raises(ValueError):
        Sphere(segments=2).build()
    with pytest.raises(ValueError):
        Sphere(rings=1).build()


def test_cylinder_side_vertices_on_radius_and_height():
    cyl = Cylinder(radius=1.5, height=3.0, segments=10, caps=False).build()
    for vertex in cyl.mesh.vertices:
        x, y, z = vertex.position
        assert math.hypot(x, y) == pytest.approx(1.5)
        assert abs(z) == pytest.approx(1.5)


def test_cylinder_caps_add_faces_and_close_ends():
    open_cyl = Cylinder(segments=8, caps=False).build()
    closed = Cylinder(segments=8).build()
    assert len(closed.mesh.faces) > len(open_cyl.mesh.faces)
    low, high = closed.mesh.bounds()
    assert low[2] == pytest.approx(-1.0)
    assert high[2] == pytest.approx(1.0)
    cap_normals = {v.normal for v in closed.mesh.vertices if v.normal[2] != 0.0}
    assert cap_normals == {(0.0, 0.0, 1.0), (0.0, 0.0, -1.0)}


def test_cylinder_rejects_too_few_segments():
    with pytest.raises(ValueError):
        Cylinder(segments=2).build()