"""Axis-aligned bounding boxes for cell culling and BVH traversal."""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import ClassVar

from mcblocks.geometry.vec3 import Vec3, _fmax, _fmin


def _inverse(v: float) -> float:
    """IEEE-style reciprocal: zero maps to a signed infinity."""
    if v == 0.0:
        return math.copysign(math.inf, v)
    return 1.0 / v


@dataclass(frozen=True)
class Aabb:
    """Box spanning ``min`` to ``max`` on every axis."""

    min: Vec3
    max: Vec3

    INFINITE: ClassVar[Aabb]

    def union(self, other: Aabb) -> Aabb:
        """Smallest box enclosing both boxes."""
        return Aabb(self.min.component_min(other.min), self.max.component_max(other.max))

    def intersection(self, other: Aabb) -> Aabb:
        """Overlap of both boxes; empty (min > max on some axis) when they are disjoint."""
        return Aabb(self.min.component_max(other.min), self.max.component_min(other.max))

    def contains(self, p: Vec3) -> bool:
        return (
            self.min.x <= p.x <= self.max.x
            and self.min.y <= p.y <= self.max.y
            and self.min.z <= p.z <= self.max.z
        )

    def surface_area(self) -> float:
        d = self.max - self.min
        return 2.0 * (d.x * d.y + d.y * d.z + d.z * d.x)

    def center(self) -> Vec3:
        return (self.min + self.max) * 0.5

    def ray_intersects(self, origin: Vec3, direction: Vec3) -> bool:
        """True if the ray hits the box at some non-negative distance."""
        inv = Vec3(_inverse(direction.x), _inverse(direction.y), _inverse(direction.z))
        return self.ray_intersects_inv(origin, inv)

    def ray_intersects_inv(self, origin: Vec3, inv_dir: Vec3) -> bool:
        """As :meth:`ray_intersects`, with the reciprocal direction precomputed."""
        tmin, tmax = self.ray_interval(origin, inv_dir)
        return tmax >= _fmax(tmin, 0.0)

    def ray_interval(self, origin: Vec3, inv_dir: Vec3) -> tuple[float, float]:
        """Entry and exit distances ``(tmin, tmax)`` of the ray through the slabs."""
        t1x = (self.min.x - origin.x) * inv_dir.x
        t2x = (self.max.x - origin.x) * inv_dir.x
        t1y = (self.min.y - origin.y) * inv_dir.y
        t2y = (self.max.y - origin.y) * inv_dir.y
        t1z = (self.min.z - origin.z) * inv_dir.z
        t2z = (self.max.z - origin.z) * inv_dir.z

        tmin = _fmax(_fmax(_fmin(t1x, t2x), _fmin(t1y, t2y)), _fmin(t1z, t2z))
        tmax = _fmin(_fmin(_fmax(t1x, t2x), _fmax(t1y, t2y)), _fmax(t1z, t2z))
        return tmin, tmax


Aabb.INFINITE = Aabb(
    Vec3(-math.inf, -math.inf, -math.inf),
    Vec3(math.inf, math.inf, math.inf),
)