# mcblocks

Reusable building blocks for Monte Carlo particle-transport codes.

| Module | What it provides |
| --- | --- |
| `mcblocks.geometry.vec3` | `Vec3`, an immutable 3D vector with `dot`, `cross`, `length`, `normalized`, `component_min`, `component_max`, `+`, `-`, `*` (by a scalar) and unary `-`. |
| `mcblocks.geometry.aabb` | `Aabb` boxes: `union`, `intersection`, `contains`, `surface_area`, `center`, slab ray tests (`ray_intersects`, `ray_intersects_inv`, `ray_interval`) and `Aabb.INFINITE`. |
| `mcblocks.geometry.surface` | Surfaces `Plane`, `PlaneX`, `PlaneY`, `PlaneZ`, `Sphere`, `CylinderX`/`Y`/`Z` and `ConeX`/`Y`/`Z`, each with `evaluate`, `distance`, `normal_at` and `aabb`; `BoundaryCondition` (`TRANSMISSION`, `REFLECTIVE`, `VACUUM`); `SurfaceId`. |
| `mcblocks.geometry.cell` | Regions built from `HalfSpace`, `Intersection`, `Union` and `Complement`; helpers `inside`, `outside`, `inside_both`, `between`, `intersect_all`; `Cell`, `CellId`, `CellFill`. |
| `mcblocks.geometry.universe` | `Universe` and `UniverseId`. |
| `mcblocks.geometry.lattice` | `RectLattice` with `find_element`, `universe_at` and `local_position`. |
| `mcblocks.geometry.bvh` | `Bvh`, a bounding-volume hierarchy over cell boxes for fast cell lookup. |
| `mcblocks.geometry.ray` | `Ray`, `RayHit`, `find_nearest_surface`, `find_cell`, `find_cell_bvh`, `find_cell_opt`, `trace_step`, `trace_step_opt`. |
| `mcblocks.ducru` | Doppler reconstruction weights: `ducru_weights`, `ducru_unity_weights`, `ducru_constrained_weights`, `nearest_k_columns`. |
| `mcblocks.expm` | `expm_pade`, the matrix exponential through Padé(13) with scaling and squaring. |
| `mcblocks.kinetics` | Six-group point kinetics: `KineticsParams`, `KineticsState`, `equilibrium_state`, `PointKinetics`. |
| `mcblocks.fission_yields` | `YieldTable` and `FissionYields`, yields interpolated linearly in incident energy. |
| `mcblocks.errors` | `NuclearError` and its subclasses `Hdf5Error`, `DimensionMismatchError`, `NuclearIOError`. |

## Installation

```
pip install .
```

The only runtime dependency is numpy.

## Examples

### Tracing a particle through a sphere

```python
from mcblocks.geometry.vec3 import Vec3
from mcblocks.geometry.surface import Sphere, BoundaryCondition
from mcblocks.geometry.cell import Cell, CellId, CellFill, inside, outside
from mcblocks.geometry.ray import find_cell, trace_step

surfaces = [Sphere(center=Vec3(0.0, 0.0, 0.0), radius=8.7407, bc=BoundaryCondition.VACUUM)]
cells = [
    Cell(CellId(0), inside(0), CellFill.material(0)),
    Cell(CellId(1), outside(0), CellFill.void()),
]

origin = Vec3(0.0, 0.0, 0.0)
assert find_cell(origin, surfaces, cells) == 0

hit = trace_step(origin, Vec3(1.0, 0.0, 0.0), 0, surfaces, cells)
print(hit.distance, hit.surface_idx, hit.next_cell_idx)  # about 8.7407, 0, 1
```

`trace_step` looks only at the surfaces that bound the current cell, finds the
nearest crossing ahead of the particle, and then locates the cell just beyond
it. `distance` returns `None` when a surface lies only behind the ray or is
never met.

Cells are immutable; `with_temperature`, `with_aabb` and
`with_aabb_from_region` return changed copies. A cell's box defaults to
`Aabb.INFINITE`, and `with_aabb_from_region(surfaces)` computes one from the
region: the inside of a sphere or z-cylinder bounds it, while outsides,
complements and other surfaces leave it unbounded.

For geometries with many cells, build a `Bvh` once with `Bvh.build(cells)` and
pass it to `find_cell_bvh`, `find_cell_opt` or `trace_step_opt`. When several
cells contain the point, the cell listed first wins, whether or not a BVH is
used.

### Lattices

```python
from mcblocks.geometry.lattice import RectLattice
from mcblocks.geometry.universe import UniverseId
from mcblocks.geometry.vec3 import Vec3

lattice = RectLattice(
    origin=Vec3(0.0, 0.0, 0.0),
    pitch=Vec3(1.26, 1.26, 10.0),
    shape=(2, 2, 1),
    universes=[UniverseId(1), UniverseId(2), UniverseId(3), UniverseId(4)],
)
element = lattice.find_element(Vec3(1.5, 0.2, 3.0))   # (1, 0, 0)
print(lattice.universe_at(*element))                   # UniverseId(value=2)
```

Universes are stored x fastest, then y, then z. `find_element` returns `None`
outside the lattice; `universe_at` raises `IndexError` for an element outside
the shape.

### Doppler weights at an off-grid temperature

```python
from mcblocks.ducru import nearest_k_columns, ducru_unity_weights

temps = [294.0, 600.0, 900.0, 1200.0, 2500.0]
chosen = nearest_k_columns(temps, 800.0, 3)          # [1, 2, 3]
weights = ducru_unity_weights([temps[i] for i in chosen], 800.0)
```

All three weight functions return a one-hot vector when the target lies within
0.01 of a tabulated column. `ducru_unity_weights` normalises the raw weights to
sum to one (falling back to a uniform split if they sum to zero);
`ducru_constrained_weights` solves for the least-squares weights constrained to
sum to one.

### Matrix exponential

```python
import numpy as np
from mcblocks.expm import expm_pade

e = expm_pade(np.diag([-1.0, -2.0]))   # diag(exp(-1), exp(-2))
```

Anything that is not a square matrix raises `ValueError`.

### Point kinetics

```python
from mcblocks.kinetics import KineticsParams, PointKinetics, equilibrium_state

params = KineticsParams.keepin_u235_thermal()
reactor = PointKinetics(params, equilibrium_state(1.0, params))
state = reactor.step(0.5 * params.beta_total(), 0.0, 1.0)
print(state.n, state.time)
```

Reactivity is given in absolute units, not in dollars. Each step is exact for
constant reactivity and source over the interval. `KineticsParams` requires
exactly six delayed groups and raises `ValueError` otherwise.

### Fission yields

```python
from mcblocks.fission_yields import FissionYields, YieldTable

yields = FissionYields()
yields.insert(0.0253, YieldTable(products=["Cs137"], yields=[0.06]))
yields.insert(5.0e5, YieldTable(products=["Cs137"], yields=[0.07]))
print(yields.products_at_energy(2.5e5))  # [('Cs137', ~0.065)]
```

Results are sorted by product name. Outside the tabulated energy range the
nearest table is used as it is.

## What this package does not do

- It reads no nuclear data files. The exceptions in `mcblocks.errors` are
  provided for code that does, but no reader is included.
- It has no transport driver: no particle sources, collision physics, tallies
  or eigenvalue iteration. The geometry and ray-tracing functions are the
  pieces such a driver would call.
- Lattices are rectangular only, and there is no command-line tool or
  geometry viewer.

## Running the tests

```
pip install .[test]
pytest
```