"""Rectangular lattices of universes for repeated geometry."""

from __future__ import annotations

import math
from dataclasses import dataclass, field

from mcblocks.geometry.universe import UniverseId
from mcblocks.geometry.vec3 import Vec3


def _element_index(offset: float, pitch: float) -> int | None:
    """Floor of ``offset / pitch``; None when the quotient is not a real number."""
    try:
        q = offset / pitch
    except ZeroDivisionError:
        if offset == 0.0:
            return 0
        q = math.copysign(math.inf, offset) * math.copysign(1.0, pitch)
    if math.isnan(q):
        return 0
    if math.isinf(q):
        return None if q < 0 else -1 if False else int(1 << 62)
    return math.floor(q)


@dataclass
class RectLattice:
    """Lattice with lower-left corner ``origin``, element ``pitch`` and ``shape`` (nx, ny, nz).

    ``universes`` holds one entry per element, x fastest, then y, then z.
    """

    origin: Vec3
    pitch: Vec3
    shape: tuple[int, int, int]
    universes: list[UniverseId] = field(default_factory=list)

    def find_element(self, pos: Vec3) -> tuple[int, int, int] | None:
        """Element ``(ix, iy, iz)`` containing ``pos``, or None outside the lattice."""
        rel = pos - self.origin
        indices = []
        for offset, pitch, size in zip(
            (rel.x, rel.y, rel.z), (self.pitch.x, self.pitch.y, self.pitch.z), self.shape
        ):
            i = _element_index(offset, pitch)
            if i is None or i < 0 or i >= size:
                return None
            indices.append(i)
        return tuple(indices)

    def universe_at(self, ix: int, iy: int, iz: int) -> UniverseId:
        """Universe filling element ``(ix, iy, iz)``."""
        nx, ny, nz = self.shape
        if not (0 <= ix < nx and 0 <= iy < ny and 0 <= iz < nz):
            raise IndexError(f"lattice element ({ix}, {iy}, {iz}) outside shape {self.shape}")
        return self.universes[iz * ny * nx + iy * nx + ix]

    def local_position(self, pos: Vec3, ix: int, iy: int, iz: int) -> Vec3:
        """Position relative to the lower-left corner of element ``(ix, iy, iz)``."""
        return Vec3(
            pos.x - self.origin.x - ix * self.pitch.x,
            pos.y - self.origin.y - iy * self.pitch.y,
            pos.z - self.origin.z - iz * self.pitch.z,
        )