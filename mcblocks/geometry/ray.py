"""Ray tracing: nearest surface crossing along a direction and cell lookup.

This is the inner geometry step of particle transport: how far a
particle can travel before meeting a surface of its current cell, and
which cell it enters on the other side.
"""

from __future__ import annotations

import dataclasses
import math
from collections.abc import Iterable, Sequence
from dataclasses import dataclass, field

from mcblocks.geometry.bvh import Bvh
from mcblocks.geometry.cell import Cell
from mcblocks.geometry.surface import Surface
from mcblocks.geometry.vec3 import Vec3

CROSSING_NUDGE = 1e-10


def _reciprocal(v: float) -> float:
    if v == 0.0:
        return math.copysign(math.inf, v)
    return 1.0 / v


@dataclass(frozen=True)
class Ray:
    """Origin and direction, with the reciprocal direction precomputed for box tests."""

    origin: Vec3
    direction: Vec3
    inv_dir: Vec3 = field(init=False)

    def __post_init__(self) -> None:
        d = self.direction
        object.__setattr__(
            self, "inv_dir", Vec3(_reciprocal(d.x), _reciprocal(d.y), _reciprocal(d.z))
        )


@dataclass(frozen=True)
class RayHit:
    """Distance to the surface met, its index, and the cell entered beyond it."""

    distance: float
    surface_idx: int
    next_cell_idx: int | None = None


def find_nearest_surface(
    pos: Vec3,
    direction: Vec3,
    surfaces: Sequence[Surface],
    surface_indices: Iterable[int],
) -> RayHit | None:
    """Closest crossing among the surfaces at ``surface_indices``, or None if none lie ahead."""
    best: RayHit | None = None
    for idx in surface_indices:
        t = surfaces[idx].distance(pos, direction)
        if t is not None and (best is None or t < best.distance):
            best = RayHit(distance=t, surface_idx=idx)
    return best


def find_cell(pos: Vec3, surfaces: Sequence[Surface], cells: Sequence[Cell]) -> int | None:
    """Index of the first cell containing ``pos``, by a linear scan with box rejection."""
    evals = [s.evaluate(pos) for s in surfaces]
    return next(
        (
            idx
            for idx, cell in enumerate(cells)
            if cell.aabb.contains(pos) and cell.contains(evals)
        ),
        None,
    )


def find_cell_bvh(
    pos: Vec3, surfaces: Sequence[Surface], cells: Sequence[Cell], bvh: Bvh
) -> int | None:
    """Cell lookup through ``bvh``; same result as :func:`find_cell`."""
    return bvh.find_cell(pos, surfaces, cells)


def find_cell_opt(
    pos: Vec3, surfaces: Sequence[Surface], cells: Sequence[Cell], bvh: Bvh | None
) -> int | None:
    """Cell lookup through ``bvh`` when given, otherwise by linear scan."""
    if bvh is None:
        return find_cell(pos, surfaces, cells)
    return find_cell_bvh(pos, surfaces, cells, bvh)


def trace_step(
    pos: Vec3,
    direction: Vec3,
    current_cell_idx: int,
    surfaces: Sequence[Surface],
    cells: Sequence[Cell],
) -> RayHit | None:
    """Distance to the nearest boundary of the current cell and the cell beyond it."""
    return trace_step_opt(pos, direction, current_cell_idx, surfaces, cells, None)


def trace_step_opt(
    pos: Vec3,
    direction: Vec3,
    current_cell_idx: int,
    surfaces: Sequence[Surface],
    cells: Sequence[Cell],
    bvh: Bvh | None,
) -> RayHit | None:
    """As :func:`trace_step`, using ``bvh`` (if given) for the next-cell lookup."""
    cell = cells[current_cell_idx]
    indices = sorted(set(cell.region.surface_indices()))
    hit = find_nearest_surface(pos, direction, surfaces, indices)
    if hit is None:
        return None
    cross_point = pos + direction * (hit.distance + CROSSING_NUDGE)
    return dataclasses.replace(
        hit, next_cell_idx=find_cell_opt(cross_point, surfaces, cells, bvh)
    )