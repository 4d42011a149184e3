"""Surfaces that split space into a positive and a negative half-space.

``evaluate`` is positive on the positive side and negative on the
negative side. ``distance`` gives the distance along a ray to the
surface, or ``None`` when the surface lies only behind the ray or is
never met.
"""

from __future__ import annotations

import abc
import enum
import math
from dataclasses import dataclass

from mcblocks.geometry.aabb import Aabb
from mcblocks.geometry.vec3 import Vec3

COINCIDENCE_TOL = 1.0e-12


@dataclass(frozen=True)
class SurfaceId:
    """Identifier of a surface."""

    value: int


class BoundaryCondition(enum.Enum):
    """What happens to a particle that reaches the surface."""

    TRANSMISSION = "transmission"
    REFLECTIVE = "reflective"
    VACUUM = "vacuum"


class Surface(abc.ABC):
    """Common interface of every surface kind."""

    bc: BoundaryCondition

    @abc.abstractmethod
    def evaluate(self, p: Vec3) -> float:
        """Surface function at ``p``: > 0 on the positive side, < 0 on the negative."""

    @abc.abstractmethod
    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        """Distance along ``direction`` from ``p`` to the surface, if ahead of the ray."""

    @abc.abstractmethod
    def normal_at(self, p: Vec3) -> Vec3:
        """Unit normal at a point on the surface."""

    def aabb(self) -> Aabb:
        """Bounding box of the negative half-space; infinite unless bounded."""
        return Aabb.INFINITE

    @property
    def boundary_condition(self) -> BoundaryCondition:
        return self.bc


def _axis_plane_distance(offset: float, p: float, d: float) -> float | None:
    if abs(d) < COINCIDENCE_TOL:
        return None
    t = (offset - p) / d
    return t if t > COINCIDENCE_TOL else None


def _first_root_ahead(a: float, b: float, c: float) -> float | None:
    """Nearer root of ``a t^2 + b t + c`` ahead of the ray, for ``a > 0``."""
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None
    sqrt_disc = math.sqrt(disc)
    inv_2a = 0.5 / a
    for t in ((-b - sqrt_disc) * inv_2a, (-b + sqrt_disc) * inv_2a):
        if t > COINCIDENCE_TOL:
            return t
    return None


def _sphere_intersect(p: Vec3, d: Vec3, center: Vec3, radius: float) -> float | None:
    oc = p - center
    a = d.dot(d)
    b = 2.0 * oc.dot(d)
    c = oc.dot(oc) - radius * radius
    return _first_root_ahead(a, b, c)


def _cylinder_z_intersect(p: Vec3, d: Vec3, cx: float, cy: float, r: float) -> float | None:
    ox = p.x - cx
    oy = p.y - cy
    a = d.x * d.x + d.y * d.y
    if a < COINCIDENCE_TOL:
        return None  # parallel to the axis
    b = 2.0 * (ox * d.x + oy * d.y)
    c = ox * ox + oy * oy - r * r
    return _first_root_ahead(a, b, c)


def _smallest_positive_root(a: float, b: float, c: float) -> float | None:
    """Smallest ``t > tol`` with ``a t^2 + b t + c = 0``; handles the linear case."""
    if abs(a) < COINCIDENCE_TOL:
        if abs(b) < COINCIDENCE_TOL:
            return None
        t = -c / b
        return t if t > COINCIDENCE_TOL else None
    disc = b * b - 4.0 * a * c
    if disc < 0.0:
        return None
    sqrt_disc = math.sqrt(disc)
    inv_2a = 0.5 / a
    for t in sorted(((-b - sqrt_disc) * inv_2a, (-b + sqrt_disc) * inv_2a)):
        if t > COINCIDENCE_TOL:
            return t
    return None


def _cone_z_intersect(
    p: Vec3, d: Vec3, x0: float, y0: float, z0: float, r_sq: float
) -> float | None:
    dx = p.x - x0
    dy = p.y - y0
    dz = p.z - z0
    a = d.x * d.x + d.y * d.y - r_sq * d.z * d.z
    b = 2.0 * (dx * d.x + dy * d.y - r_sq * dz * d.z)
    c = dx * dx + dy * dy - r_sq * dz * dz
    return _smallest_positive_root(a, b, c)


@dataclass(frozen=True)
class Plane(Surface):
    """General plane ``normal . p = offset`` with a unit normal."""

    normal: Vec3
    offset: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        return self.normal.dot(p) - self.offset

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        denom = self.normal.dot(direction)
        if abs(denom) < COINCIDENCE_TOL:
            return None
        t = (self.offset - self.normal.dot(p)) / denom
        return t if t > COINCIDENCE_TOL else None

    def normal_at(self, p: Vec3) -> Vec3:
        return self.normal


@dataclass(frozen=True)
class PlaneX(Surface):
    """Plane ``x = x0``."""

    x0: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        return p.x - self.x0

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        return _axis_plane_distance(self.x0, p.x, direction.x)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(1.0, 0.0, 0.0)


@dataclass(frozen=True)
class PlaneY(Surface):
    """Plane ``y = y0``."""

    y0: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        return p.y - self.y0

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        return _axis_plane_distance(self.y0, p.y, direction.y)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(0.0, 1.0, 0.0)


@dataclass(frozen=True)
class PlaneZ(Surface):
    """Plane ``z = z0``."""

    z0: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        return p.z - self.z0

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        return _axis_plane_distance(self.z0, p.z, direction.z)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(0.0, 0.0, 1.0)


@dataclass(frozen=True)
class Sphere(Surface):
    """Sphere of ``radius`` about ``center``."""

    center: Vec3
    radius: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        d = p - self.center
        return d.dot(d) - self.radius * self.radius

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        return _sphere_intersect(p, direction, self.center, self.radius)

    def normal_at(self, p: Vec3) -> Vec3:
        return (p - self.center).normalized()

    def aabb(self) -> Aabb:
        r = Vec3(self.radius, self.radius, self.radius)
        return Aabb(self.center - r, self.center + r)


@dataclass(frozen=True)
class CylinderZ(Surface):
    """Infinite cylinder along z through ``(center_x, center_y)``."""

    center_x: float
    center_y: float
    radius: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        dx = p.x - self.center_x
        dy = p.y - self.center_y
        return dx * dx + dy * dy - self.radius * self.radius

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        return _cylinder_z_intersect(p, direction, self.center_x, self.center_y, self.radius)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(p.x - self.center_x, p.y - self.center_y, 0.0).normalized()

    def aabb(self) -> Aabb:
        r = self.radius
        return Aabb(
            Vec3(self.center_x - r, self.center_y - r, -math.inf),
            Vec3(self.center_x + r, self.center_y + r, math.inf),
        )


@dataclass(frozen=True)
class CylinderX(Surface):
    """Infinite cylinder along x through ``(center_y, center_z)``."""

    center_y: float
    center_z: float
    radius: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        dy = p.y - self.center_y
        dz = p.z - self.center_z
        return dy * dy + dz * dz - self.radius * self.radius

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        p_rot = Vec3(p.y, p.z, p.x)
        d_rot = Vec3(direction.y, direction.z, direction.x)
        return _cylinder_z_intersect(p_rot, d_rot, self.center_y, self.center_z, self.radius)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(0.0, p.y - self.center_y, p.z - self.center_z).normalized()


@dataclass(frozen=True)
class CylinderY(Surface):
    """Infinite cylinder along y through ``(center_x, center_z)``."""

    center_x: float
    center_z: float
    radius: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        dx = p.x - self.center_x
        dz = p.z - self.center_z
        return dx * dx + dz * dz - self.radius * self.radius

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        p_rot = Vec3(p.x, p.z, p.y)
        d_rot = Vec3(direction.x, direction.z, direction.y)
        return _cylinder_z_intersect(p_rot, d_rot, self.center_x, self.center_z, self.radius)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(p.x - self.center_x, 0.0, p.z - self.center_z).normalized()


@dataclass(frozen=True)
class ConeZ(Surface):
    """Double cone along z with apex ``(x0, y0, z0)``; ``r_sq`` is tan^2 of the half-angle.

    The negative half-space is the interior of both sheets.
    """

    x0: float
    y0: float
    z0: float
    r_sq: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        dx = p.x - self.x0
        dy = p.y - self.y0
        dz = p.z - self.z0
        return dx * dx + dy * dy - self.r_sq * dz * dz

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        return _cone_z_intersect(p, direction, self.x0, self.y0, self.z0, self.r_sq)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(p.x - self.x0, p.y - self.y0, -self.r_sq * (p.z - self.z0)).normalized()


@dataclass(frozen=True)
class ConeX(Surface):
    """Double cone along x with apex ``(x0, y0, z0)``."""

    x0: float
    y0: float
    z0: float
    r_sq: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        dx = p.x - self.x0
        dy = p.y - self.y0
        dz = p.z - self.z0
        return dy * dy + dz * dz - self.r_sq * dx * dx

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        p_rot = Vec3(p.y, p.z, p.x)
        d_rot = Vec3(direction.y, direction.z, direction.x)
        return _cone_z_intersect(p_rot, d_rot, self.y0, self.z0, self.x0, self.r_sq)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(-self.r_sq * (p.x - self.x0), p.y - self.y0, p.z - self.z0).normalized()


@dataclass(frozen=True)
class ConeY(Surface):
    """Double cone along y with apex ``(x0, y0, z0)``."""

    x0: float
    y0: float
    z0: float
    r_sq: float
    bc: BoundaryCondition

    def evaluate(self, p: Vec3) -> float:
        dx = p.x - self.x0
        dy = p.y - self.y0
        dz = p.z - self.z0
        return dx * dx + dz * dz - self.r_sq * dy * dy

    def distance(self, p: Vec3, direction: Vec3) -> float | None:
        p_rot = Vec3(p.x, p.z, p.y)
        d_rot = Vec3(direction.x, direction.z, direction.y)
        return _cone_z_intersect(p_rot, d_rot, self.x0, self.z0, self.y0, self.r_sq)

    def normal_at(self, p: Vec3) -> Vec3:
        return Vec3(p.x - self.x0, -self.r_sq * (p.y - self.y0), p.z - self.z0).normalized()