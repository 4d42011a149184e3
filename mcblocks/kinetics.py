"""Six-group point kinetics.

The system::

    dn/dt  = (rho - beta) / Lambda * n + sum_i lambda_i C_i + S
    dC_i/dt = beta_i / Lambda * n - lambda_i C_i

is advanced over an interval of constant reactivity and source as the
homogeneous 8x8 system ``y' = M y`` with ``M = [[A, b], [0, 0]]``. The
step is the matrix exponential ``exp(M dt)``, which handles the prompt
jump and the full stiffness range without special treatment.
"""

from __future__ import annotations

from dataclasses import dataclass

import numpy as np

from mcblocks.expm import expm_pade

_GROUPS = 6


@dataclass(frozen=True)
class KineticsParams:
    """Delayed-neutron group fractions, decay constants (1/s) and generation time (s)."""

    beta_i: tuple[float, ...]
    lambda_i: tuple[float, ...]
    gen_time: float

    def __post_init__(self) -> None:
        if len(self.beta_i) != _GROUPS or len(self.lambda_i) != _GROUPS:
            raise ValueError(f"point kinetics needs exactly {_GROUPS} delayed groups")
        object.__setattr__(self, "beta_i", tuple(float(b) for b in self.beta_i))
        object.__setattr__(self, "lambda_i", tuple(float(lam) for lam in self.lambda_i))

    def beta_total(self) -> float:
        """Total delayed-neutron fraction."""
        return sum(self.beta_i)

    @classmethod
    def keepin_u235_thermal(cls) -> KineticsParams:
        """Keepin thermal U-235 set (total beta = 0.0065)."""
        return cls(
            beta_i=(0.000215, 0.001424, 0.001274, 0.002568, 0.000748, 0.000273),
            lambda_i=(0.0124, 0.0305, 0.111, 0.301, 1.14, 3.01),
            gen_time=1.0e-4,
        )


@dataclass(frozen=True)
class KineticsState:
    """Neutron density, the six precursor concentrations and the elapsed time."""

    n: float
    c: tuple[float, ...]
    time: float = 0.0


def equilibrium_state(n: float, params: KineticsParams) -> KineticsState:
    """State with stationary precursors: C_i = beta_i n / (lambda_i Lambda)."""
    c = tuple(
        beta * n / (lam * params.gen_time)
        for beta, lam in zip(params.beta_i, params.lambda_i)
    )
    return KineticsState(n=n, c=c, time=0.0)


@dataclass
class PointKinetics:
    """Point-kinetics integrator under a piecewise-constant (rho, S) program."""

    params: KineticsParams
    state: KineticsState

    def step(self, rho: float, s: float, dt: float) -> KineticsState:
        """Advance by ``dt`` at reactivity ``rho`` (absolute) and source ``s``."""
        p = self.params
        m = np.zeros((_GROUPS + 2, _GROUPS + 2))
        m[0, 0] = (rho - p.beta_total()) / p.gen_time
        for i, (beta, lam) in enumerate(zip(p.beta_i, p.lambda_i), start=1):
            m[0, i] = lam
            m[i, 0] = beta / p.gen_time
            m[i, i] = -lam
        m[0, _GROUPS + 1] = s

        y = np.array([self.state.n, *self.state.c, 1.0])
        y_new = expm_pade(m * dt) @ y

        self.state = KineticsState(
            n=float(y_new[0]),
            c=tuple(float(v) for v in y_new[1 : _GROUPS + 1]),
            time=self.state.time + dt,
        )
        return self.state