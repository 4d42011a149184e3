"""Matrix exponential via Padé(13) with scaling and squaring (Higham 2005)."""

from __future__ import annotations

import math

import numpy as np

_THETA_13 = 5.371920351148152

_PADE_13 = (
    64764752532480000.0,
    32382376266240000.0,
    7771770303897600.0,
    1187353796428800.0,
    129060195264000.0,
    10559470521600.0,
    670442572800.0,
    33522128640.0,
    1323241920.0,
    40840800.0,
    960960.0,
    16380.0,
    182.0,
    1.0,
)


def expm_pade(a) -> np.ndarray:
    """Return ``exp(a)`` for a real square matrix."""
    a = np.array(a, dtype=float)
    if a.ndim != 2 or a.shape[0] != a.shape[1]:
        raise ValueError("expm requires a square matrix")
    n = a.shape[0]
    if n == 0:
        return np.zeros((0, 0))

    norm = float(np.abs(a).sum(axis=0).max())
    if norm <= _THETA_13:
        s = 0
    else:
        s = max(math.ceil(math.log2(norm / _THETA_13)), 0)
    a_scaled = a / (2.0**s) if s > 0 else a

    b = _PADE_13
    ident = np.eye(n)
    a2 = a_scaled @ a_scaled
    a4 = a2 @ a2
    a6 = a4 @ a2

    u_inner = a6 @ (b[13] * a6 + b[11] * a4 + b[9] * a2)
    u_inner = u_inner + b[7] * a6 + b[5] * a4 + b[3] * a2 + b[1] * ident
    u = a_scaled @ u_inner

    v = a6 @ (b[12] * a6 + b[10] * a4 + b[8] * a2)
    v = v + b[6] * a6 + b[4] * a4 + b[2] * a2 + b[0] * ident

    r = np.linalg.solve(v - u, v + u)
    for _ in range(s):
        r = r @ r
    return r