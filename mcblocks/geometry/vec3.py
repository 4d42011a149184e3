"""Three-component vector used for positions and directions."""

from __future__ import annotations

import math
from dataclasses import dataclass
from numbers import Real


@dataclass(frozen=True)
class Vec3:
    """Immutable 3D vector."""

    x: float
    y: float
    z: float

    def dot(self, other: Vec3) -> float:
        return self.x * other.x + self.y * other.y + self.z * other.z

    def cross(self, other: Vec3) -> Vec3:
        return Vec3(
            self.y * other.z - self.z * other.y,
            self.z * other.x - self.x * other.z,
            self.x * other.y - self.y * other.x,
        )

    def length(self) -> float:
        return math.sqrt(self.dot(self))

    def normalized(self) -> Vec3:
        """Unit vector along ``self``; a zero vector yields non-finite components."""
        length = self.length()
        inv_len = 1.0 / length if length != 0.0 else math.inf
        return Vec3(self.x * inv_len, self.y * inv_len, self.z * inv_len)

    def component_min(self, other: Vec3) -> Vec3:
        return Vec3(_fmin(self.x, other.x), _fmin(self.y, other.y), _fmin(self.z, other.z))

    def component_max(self, other: Vec3) -> Vec3:
        return Vec3(_fmax(self.x, other.x), _fmax(self.y, other.y), _fmax(self.z, other.z))

    def __add__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x + other.x, self.y + other.y, self.z + other.z)

    def __sub__(self, other: Vec3) -> Vec3:
        if not isinstance(other, Vec3):
            return NotImplemented
        return Vec3(self.x - other.x, self.y - other.y, self.z - other.z)

    def __mul__(self, scale: float) -> Vec3:
        if not isinstance(scale, Real):
            return NotImplemented
        return Vec3(self.x * scale, self.y * scale, self.z * scale)

    def __neg__(self) -> Vec3:
        return Vec3(-self.x, -self.y, -self.z)


def _fmin(a: float, b: float) -> float:
    """Minimum that ignores a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a <= b else b


def _fmax(a: float, b: float) -> float:
    """Maximum that ignores a NaN operand."""
    if math.isnan(a):
        return b
    if math.isnan(b):
        return a
    return a if a >= b else b