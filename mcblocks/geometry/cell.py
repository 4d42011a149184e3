"""Cells: regions of space built from boolean combinations of surface half-spaces.

A region is an expression tree of :class:`HalfSpace`, :class:`Intersection`,
:class:`Union` and :class:`Complement` nodes.
"""

from __future__ import annotations

import abc
import dataclasses
import functools
from collections.abc import Iterable, Sequence
from dataclasses import dataclass

from mcblocks.geometry.aabb import Aabb
from mcblocks.geometry.surface import Surface

DEFAULT_TEMPERATURE = 293.6

_MATERIAL = "material"
_UNIVERSE = "universe"
_VOID = "void"


@dataclass(frozen=True)
class CellId:
    """Identifier of a cell."""

    value: int


@dataclass(frozen=True)
class CellFill:
    """What fills a cell: a material index, a nested universe index, or nothing."""

    kind: str
    index: int | None = None

    def __post_init__(self) -> None:
        if self.kind not in (_MATERIAL, _UNIVERSE, _VOID):
            raise ValueError(f"unknown cell fill kind: {self.kind!r}")
        if (self.kind == _VOID) != (self.index is None):
            raise ValueError("a void fill has no index; material and universe fills need one")

    @classmethod
    def material(cls, index: int) -> CellFill:
        """Fill with the material at ``index`` in the materials list."""
        return cls(_MATERIAL, index)

    @classmethod
    def universe(cls, index: int) -> CellFill:
        """Fill with the universe at ``index`` (nested geometry)."""
        return cls(_UNIVERSE, index)

    @classmethod
    def void(cls) -> CellFill:
        """Empty cell."""
        return cls(_VOID)

    @property
    def is_material(self) -> bool:
        return self.kind == _MATERIAL

    @property
    def is_universe(self) -> bool:
        return self.kind == _UNIVERSE

    @property
    def is_void(self) -> bool:
        return self.kind == _VOID


class Region(abc.ABC):
    """Boolean region expression over surface half-spaces."""

    @abc.abstractmethod
    def contains(self, surface_evals: Sequence[float]) -> bool:
        """Whether the point whose surface evaluations are given lies in the region."""

    @abc.abstractmethod
    def aabb(self, surfaces: Sequence[Surface]) -> Aabb:
        """A box enclosing every point of the region; not always tight."""

    @abc.abstractmethod
    def surface_indices(self) -> list[int]:
        """Indices of all surfaces referenced, in traversal order (may repeat)."""


@dataclass(frozen=True)
class HalfSpace(Region):
    """One side of a surface: positive (``evaluate > 0``) or negative (``< 0``)."""

    surface_idx: int
    positive: bool

    def contains(self, surface_evals: Sequence[float]) -> bool:
        value = surface_evals[self.surface_idx]
        return value > 0.0 if self.positive else value < 0.0

    def aabb(self, surfaces: Sequence[Surface]) -> Aabb:
        if self.positive:
            # The outside of a bounded surface still reaches infinity.
            return Aabb.INFINITE
        return surfaces[self.surface_idx].aabb()

    def surface_indices(self) -> list[int]:
        return [self.surface_idx]


@dataclass(frozen=True)
class Intersection(Region):
    """Points in both sub-regions."""

    a: Region
    b: Region

    def contains(self, surface_evals: Sequence[float]) -> bool:
        return self.a.contains(surface_evals) and self.b.contains(surface_evals)

    def aabb(self, surfaces: Sequence[Surface]) -> Aabb:
        return self.a.aabb(surfaces).intersection(self.b.aabb(surfaces))

    def surface_indices(self) -> list[int]:
        return self.a.surface_indices() + self.b.surface_indices()


@dataclass(frozen=True)
class Union(Region):
    """Points in either sub-region."""

    a: Region
    b: Region

    def contains(self, surface_evals: Sequence[float]) -> bool:
        return self.a.contains(surface_evals) or self.b.contains(surface_evals)

    def aabb(self, surfaces: Sequence[Surface]) -> Aabb:
        return self.a.aabb(surfaces).union(self.b.aabb(surfaces))

    def surface_indices(self) -> list[int]:
        return self.a.surface_indices() + self.b.surface_indices()


@dataclass(frozen=True)
class Complement(Region):
    """Points not in the sub-region."""

    a: Region

    def contains(self, surface_evals: Sequence[float]) -> bool:
        return not self.a.contains(surface_evals)

    def aabb(self, surfaces: Sequence[Surface]) -> Aabb:
        return Aabb.INFINITE

    def surface_indices(self) -> list[int]:
        return self.a.surface_indices()


@dataclass(frozen=True)
class Cell:
    """A cell: its region, its fill, its temperature (K) and a bounding box."""

    id: CellId
    region: Region
    fill: CellFill
    temperature: float = DEFAULT_TEMPERATURE
    aabb: Aabb = Aabb.INFINITE

    def with_temperature(self, temp: float) -> Cell:
        return dataclasses.replace(self, temperature=temp)

    def with_aabb(self, aabb: Aabb) -> Cell:
        return dataclasses.replace(self, aabb=aabb)

    def with_aabb_from_region(self, surfaces: Sequence[Surface]) -> Cell:
        """Copy of the cell with its box computed from the region."""
        return dataclasses.replace(self, aabb=self.region.aabb(surfaces))

    def contains(self, surface_evals: Sequence[float]) -> bool:
        return self.region.contains(surface_evals)


def inside_both(s1: int, s2: int) -> Region:
    """Inside both surfaces: -s1 and -s2."""
    return Intersection(HalfSpace(s1, False), HalfSpace(s2, False))


def between(inner: int, outer: int) -> Region:
    """Outside ``inner`` and inside ``outer``: +inner and -outer."""
    return Intersection(HalfSpace(inner, True), HalfSpace(outer, False))


def inside(s: int) -> Region:
    """Negative half-space of a surface."""
    return HalfSpace(s, False)


def outside(s: int) -> Region:
    """Positive half-space of a surface."""
    return HalfSpace(s, True)


def intersect_all(regions: Iterable[Region]) -> Region:
    """Intersection of all given regions; at least one is required."""
    regions = list(regions)
    if not regions:
        raise ValueError("need at least one region")
    return functools.reduce(Intersection, regions)