"""Energy-dependent fission-product yields.

Yield tables are stored per incident energy; queries interpolate
linearly in energy between the bracketing tables and saturate outside
the tabulated range.
"""

from __future__ import annotations

import bisect
from collections.abc import Iterator
from dataclasses import dataclass, field


@dataclass
class YieldTable:
    """Fission-product yields (atoms per fission) at one incident energy."""

    products: list[str] = field(default_factory=list)
    yields: list[float] = field(default_factory=list)

    def __iter__(self) -> Iterator[tuple[str, float]]:
        return zip(self.products, self.yields)


@dataclass
class FissionYields:
    """Yield tables keyed by incident energy in eV."""

    tables: dict[float, YieldTable] = field(default_factory=dict)

    def insert(self, energy_ev: float, table: YieldTable) -> None:
        """Store ``table`` at ``energy_ev``, replacing any table already there."""
        self.tables[float(energy_ev)] = table

    def energies(self) -> Iterator[float]:
        """Tabulated energies in ascending order."""
        return iter(sorted(self.tables))

    def products_at_energy(self, energy_ev: float) -> list[tuple[str, float]]:
        """All ``(product, yield)`` pairs at ``energy_ev``, sorted by product name.

        Products present in only one bracketing table still receive that
        table's linear share.
        """
        if not self.tables:
            return []
        energies = list(self.energies())
        if energy_ev <= energies[0]:
            lo_e = hi_e = energies[0]
            w = 0.0
        elif energy_ev >= energies[-1]:
            lo_e = hi_e = energies[-1]
            w = 0.0
        else:
            upper = bisect.bisect_left(energies, energy_ev)
            lo_e, hi_e = energies[upper - 1], energies[upper]
            w = (energy_ev - lo_e) / (hi_e - lo_e)

        acc: dict[str, float] = {}
        for product, y in self.tables[lo_e]:
            acc[product] = acc.get(product, 0.0) + (1.0 - w) * y
        for product, y in self.tables[hi_e]:
            acc[product] = acc.get(product, 0.0) + w * y
        return sorted(acc.items())