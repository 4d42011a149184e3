"""Universes: sets of cells that together tile a region of space."""

from __future__ import annotations

from dataclasses import dataclass, field


@dataclass(frozen=True)
class UniverseId:
    """Identifier of a universe."""

    value: int


@dataclass
class Universe:
    """A universe and the indices of its cells in the global cell list."""

    id: UniverseId
    cell_indices: list[int] = field(default_factory=list)