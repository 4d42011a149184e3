"""Bounding volume hierarchy over cell bounding boxes for fast cell lookup."""

from __future__ import annotations

import functools
import math
from collections.abc import Sequence
from dataclasses import dataclass

from mcblocks.geometry.aabb import Aabb
from mcblocks.geometry.cell import Cell
from mcblocks.geometry.surface import Surface
from mcblocks.geometry.vec3 import Vec3


@dataclass(frozen=True)
class _Leaf:
    cell_idx: int
    aabb: Aabb


@dataclass(frozen=True)
class _Internal:
    aabb: Aabb
    left: _Leaf | _Internal
    right: _Leaf | _Internal


@dataclass(frozen=True)
class _Entry:
    cell_idx: int
    aabb: Aabb
    centroid: tuple[float, float, float]


def _finite_or_zero(v: float) -> float:
    return v if math.isfinite(v) else 0.0


def _finite_or_neg_inf(v: float) -> float:
    return v if math.isfinite(v) else -math.inf


def _build(entries: list[_Entry]) -> _Leaf | _Internal:
    if len(entries) == 1:
        return _Leaf(entries[0].cell_idx, entries[0].aabb)

    overall = functools.reduce(Aabb.union, (e.aabb for e in entries))

    if len(entries) == 2:
        return _Internal(
            overall,
            _Leaf(entries[0].cell_idx, entries[0].aabb),
            _Leaf(entries[1].cell_idx, entries[1].aabb),
        )

    # Split along the largest finite axis; infinite extents are shared by
    # every entry and would make the sort meaningless.
    extent = overall.max - overall.min
    ex, ey, ez = (_finite_or_neg_inf(v) for v in (extent.x, extent.y, extent.z))
    if ex >= ey and ex >= ez:
        axis = 0
    elif ey >= ez:
        axis = 1
    else:
        axis = 2

    ordered = sorted(entries, key=lambda e: e.centroid[axis])
    mid = len(ordered) // 2
    return _Internal(overall, _build(ordered[:mid]), _build(ordered[mid:]))


class Bvh:
    """Binary tree of cell bounding boxes, split at the median centroid."""

    def __init__(self, root: _Leaf | _Internal | None = None) -> None:
        self._root = root

    @classmethod
    def build(cls, cells: Sequence[Cell]) -> Bvh:
        """Build the hierarchy over ``cells``; boxes may be infinite on some axes."""
        if not cells:
            return cls(None)
        entries = []
        for idx, cell in enumerate(cells):
            c = cell.aabb.center()
            centroid = (_finite_or_zero(c.x), _finite_or_zero(c.y), _finite_or_zero(c.z))
            entries.append(_Entry(idx, cell.aabb, centroid))
        return cls(_build(entries))

    def find_cell(
        self, pos: Vec3, surfaces: Sequence[Surface], cells: Sequence[Cell]
    ) -> int | None:
        """Index of the cell containing ``pos``.

        When several cells contain the point, the lowest index wins, as in
        a linear scan over ``cells``.
        """
        if self._root is None:
            return None
        evals = [s.evaluate(pos) for s in surfaces]
        best: int | None = None
        stack: list[_Leaf | _Internal] = [self._root]
        while stack:
            node = stack.pop()
            if isinstance(node, _Leaf):
                if best is not None and node.cell_idx >= best:
                    continue
                if node.aabb.contains(pos) and cells[node.cell_idx].contains(evals):
                    best = node.cell_idx
            elif node.aabb.contains(pos):
                stack.append(node.right)
                stack.append(node.left)
        return best