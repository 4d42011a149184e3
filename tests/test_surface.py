import math

import pytest

from mcblocks.geometry.aabb import Aabb
from mcblocks.geometry.surface import (
    BoundaryCondition,
    ConeX,
    ConeY,
    ConeZ,
    CylinderX,
    CylinderY,
    CylinderZ,
    Plane,
    PlaneX,
    PlaneY,
    PlaneZ,
    Sphere,
    SurfaceId,
)
from mcblocks.geometry.vec3 import Vec3

ORIGIN = Vec3(0.0, 0.0, 0.0)
VAC = BoundaryCondition.VACUUM
TRANS = BoundaryCondition.TRANSMISSION


def sphere5():
    return Sphere(ORIGIN, 5.0, VAC)


def test_sphere_evaluate_inside_outside():
    s = sphere5()
    assert s.evaluate(Vec3(1.0, 0.0, 0.0)) < 0.0
    assert abs(s.evaluate(Vec3(5.0, 0.0, 0.0))) < 1e-10
    assert s.evaluate(Vec3(6.0, 0.0, 0.0)) > 0.0


def test_sphere_distance_from_outside():
    t = sphere5().distance(Vec3(-10.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0))
    assert t == pytest.approx(5.0, abs=1e-10)


def test_sphere_distance_from_inside():
    t = sphere5().distance(ORIGIN, Vec3(1.0, 0.0, 0.0))
    assert t == pytest.approx(5.0, abs=1e-10)


def test_sphere_miss_and_behind():
    s = sphere5()
    assert s.distance(Vec3(-10.0, 10.0, 0.0), Vec3(1.0, 0.0, 0.0)) is None
    assert s.distance(Vec3(-10.0, 0.0, 0.0), Vec3(-1.0, 0.0, 0.0)) is None


def test_plane_x_distance():
    s = PlaneX(3.0, VAC)
    t = s.distance(ORIGIN, Vec3(1.0, 0.0, 0.0))
    assert t == pytest.approx(3.0, abs=1e-10)


def test_axis_planes_parallel_or_behind_return_none():
    assert PlaneX(3.0, VAC).distance(ORIGIN, Vec3(0.0, 1.0, 0.0)) is None
    assert PlaneY(3.0, VAC).distance(ORIGIN, Vec3(0.0, -1.0, 0.0)) is None
    assert PlaneZ(-2.0, VAC).distance(ORIGIN, Vec3(0.0, 0.0, 1.0)) is None


def test_plane_y_and_z_distance():
    assert PlaneY(2.0, VAC).distance(ORIGIN, Vec3(0.0, 1.0, 0.0)) == pytest.approx(2.0)
    assert PlaneZ(-4.0, VAC).distance(ORIGIN, Vec3(0.0, 0.0, -1.0)) == pytest.approx(4.0)


def test_general_plane_matches_axis_plane():
    general = Plane(Vec3(1.0, 0.0, 0.0), 3.0, VAC)
    axis = PlaneX(3.0, VAC)
    p = Vec3(0.5, 1.0, -2.0)
    d = Vec3(1.0, 1.0, 0.0).normalized()
    assert general.evaluate(p) == pytest.approx(axis.evaluate(p))
    assert general.distance(p, d) == pytest.approx(axis.distance(p, d))
    assert general.distance(p, Vec3(0.0, 1.0, 0.0)) is None


def test_cylinder_z_distance():
    s = CylinderZ(0.0, 0.0, 1.0, VAC)
    t = s.distance(Vec3(-5.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0))
    assert t == pytest.approx(4.0, abs=1e-10)


def test_cylinder_z_parallel_to_axis_misses():
    s = CylinderZ(0.0, 0.0, 1.0, VAC)
    assert s.distance(ORIGIN, Vec3(0.0, 0.0, 1.0)) is None


def test_cylinder_x_and_y_agree_with_rotated_z():
    cz = CylinderZ(0.0, 0.0, 1.0, VAC)
    cx = CylinderX(0.0, 0.0, 1.0, VAC)
    cy = CylinderY(0.0, 0.0, 1.0, VAC)
    t_z = cz.distance(Vec3(-5.0, 0.0, 0.0), Vec3(1.0, 0.0, 0.0))
    t_x = cx.distance(Vec3(0.0, -5.0, 0.0), Vec3(0.0, 1.0, 0.0))
    t_y = cy.distance(Vec3(0.0, 0.0, -5.0), Vec3(0.0, 0.0, 1.0))
    assert t_x == pytest.approx(t_z)
    assert t_y == pytest.approx(t_z)
    assert cx.evaluate(Vec3(100.0, 0.0, 0.0)) < 0.0
    assert cy.evaluate(Vec3(0.0, 100.0, 0.0)) < 0.0


def test_cone_z_45deg_side_hit():
    s = ConeZ(0.0, 0.0, 0.0, 1.0, TRANS)
    p = Vec3(2.0, 0.0, -5.0)
    t = s.distance(p, Vec3(0.0, 0.0, 1.0))
    assert t == pytest.approx(3.0, abs=1e-10)
    assert s.evaluate(p) < 0.0


def test_cone_z_generatrix_parallel_diverging_misses():
    s = ConeZ(0.0, 0.0, 0.0, 1.0, TRANS)
    p = Vec3(1.0, 0.0, 0.0)
    d = Vec3(1.0, 0.0, 1.0).normalized()
    assert s.distance(p, d) is None


def test_cone_x_equivalent_under_axis_swap():
    s_z = ConeZ(0.0, 0.0, 0.0, 1.0, TRANS)
    s_x = ConeX(0.0, 0.0, 0.0, 1.0, TRANS)
    t_z = s_z.distance(Vec3(2.0, 0.0, -5.0), Vec3(0.0, 0.0, 1.0))
    t_x = s_x.distance(Vec3(-5.0, 0.0, 2.0), Vec3(1.0, 0.0, 0.0))
    assert t_z is not None and t_x is not None
    assert abs(t_z - t_x) < 1e-10


def test_cone_y_equivalent_under_axis_swap():
    s_z = ConeZ(0.0, 0.0, 0.0, 1.0, TRANS)
    s_y = ConeY(0.0, 0.0, 0.0, 1.0, TRANS)
    t_z = s_z.distance(Vec3(2.0, 0.0, -5.0), Vec3(0.0, 0.0, 1.0))
    t_y = s_y.distance(Vec3(2.0, -5.0, 0.0), Vec3(0.0, 1.0, 0.0))
    assert t_y == pytest.approx(t_z, abs=1e-10)


def test_cone_normal_points_outward():
    s = ConeZ(0.0, 0.0, 0.0, 1.0, TRANS)
    n = s.normal_at(Vec3(1.0, 0.0, 1.0))
    assert n.x > 0.5
    assert abs(n.x - 1.0 / math.sqrt(2.0)) < 1e-10
    assert abs(n.z + 1.0 / math.sqrt(2.0)) < 1e-10


def test_godiva_sphere():
    s = Sphere(ORIGIN, 8.7407, VAC)
    t = s.distance(ORIGIN, Vec3(0.0, 0.0, 1.0))
    assert t == pytest.approx(8.7407, abs=1e-10)


def test_normals_are_unit_length():
    surfaces = [
        Sphere(ORIGIN, 5.0, VAC),
        CylinderZ(0.0, 0.0, 1.0, VAC),
        CylinderX(0.0, 0.0, 1.0, VAC),
        CylinderY(0.0, 0.0, 1.0, VAC),
        ConeX(0.0, 0.0, 0.0, 1.0, TRANS),
        ConeY(0.0, 0.0, 0.0, 1.0, TRANS),
    ]
    p = Vec3(0.3, 0.7, 0.5)
    for s in surfaces:
        assert s.normal_at(p).length() == pytest.approx(1.0)


def test_axis_plane_normals():
    assert PlaneX(0.0, VAC).normal_at(ORIGIN) == Vec3(1.0, 0.0, 0.0)
    assert PlaneY(0.0, VAC).normal_at(ORIGIN) == Vec3(0.0, 1.0, 0.0)
    assert PlaneZ(0.0, VAC).normal_at(ORIGIN) == Vec3(0.0, 0.0, 1.0)


def test_boundary_condition_is_reported():
    assert PlaneX(0.0, BoundaryCondition.REFLECTIVE).boundary_condition is BoundaryCondition.REFLECTIVE
    assert sphere5().boundary_condition is BoundaryCondition.VACUUM


def test_sphere_aabb():
    box = Sphere(Vec3(1.0, 2.0, 3.0), 2.0, VAC).aabb()
    assert box.min == Vec3(-1.0, 0.0, 1.0)
    assert box.max == Vec3(3.0, 4.0, 5.0)


def test_cylinder_z_aabb_is_infinite_in_z():
    box = CylinderZ(1.0, -1.0, 0.5, TRANS).aabb()
    assert box.min.x == pytest.approx(0.5)
    assert box.max.y == pytest.approx(-0.5)
    assert box.min.z == -math.inf
    assert box.max.z == math.inf


def test_unbounded_surfaces_get_infinite_aabb():
    assert PlaneX(1.0, VAC).aabb() == Aabb.INFINITE
    assert CylinderX(0.0, 0.0, 1.0, VAC).aabb() == Aabb.INFINITE
    assert ConeZ(0.0, 0.0, 0.0, 1.0, TRANS).aabb() == Aabb.INFINITE


def test_surface_id_equality_and_hash():
    assert SurfaceId(4) == SurfaceId(4)
    assert len({SurfaceId(4), SurfaceId(4), SurfaceId(5)}) == 2