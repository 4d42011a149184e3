"""Ducru free-Doppler reconstruction weights.

Raw (Eq. 31), partition-of-unity and constrained L2-optimal (Eq. 27)
variants. The 3-point unity form over the nearest three columns is the
recommended production choice.
"""

from __future__ import annotations

import math
from collections.abc import Sequence

import numpy as np

_EXACT_MATCH_TOL = 0.01


def _one_hot_if_exact(column_values: Sequence[float], target: float) -> list[float] | None:
    for idx, t_j in enumerate(column_values):
        if abs(target - t_j) < _EXACT_MATCH_TOL:
            weights = [0.0] * len(column_values)
            weights[idx] = 1.0
            return weights
    return None


def _kernel_overlap(a: float, b: float) -> float:
    return 2.0 * math.sqrt(a * b) / (a + b)


def ducru_weights(column_values: Sequence[float], target: float) -> list[float]:
    """Raw, unnormalised Ducru (2017) Eq. 31 weights, one per training column.

    If ``target`` lies within 0.01 of a training column, a one-hot vector
    at that column is returned.
    """
    one_hot = _one_hot_if_exact(column_values, target)
    if one_hot is not None:
        return one_hot

    t = target
    weights = []
    for j, t_j in enumerate(column_values):
        leading = math.sqrt(t_j * t) / (t_j + t)
        product = 1.0
        for i, t_i in enumerate(column_values):
            if i == j:
                continue
            den2 = t_j - t_i
            if abs(den2) < 1e-10:
                continue
            product *= ((t - t_i) / (t + t_i)) * ((t_j + t_i) / den2)
        weights.append(leading * product)
    return weights


def ducru_unity_weights(column_values: Sequence[float], target: float) -> list[float]:
    """Ducru weights normalised so that they sum to one.

    Falls back to a uniform split when the raw weights sum to zero.
    """
    if not column_values:
        return []
    raw = ducru_weights(column_values, target)
    total = sum(raw)
    if abs(total) < 1e-12:
        n = len(column_values)
        return [1.0 / n] * n
    return [w / total for w in raw]


def ducru_constrained_weights(column_values: Sequence[float], target: float) -> list[float]:
    """L2-optimal Doppler weights constrained to sum to one (Ducru 2017, Eq. 27).

    The last column is used as the reference column when reducing the
    constrained problem to an (N-1) x (N-1) Gram system.
    """
    n = len(column_values)
    if n == 0:
        return []
    one_hot = _one_hot_if_exact(column_values, target)
    if one_hot is not None:
        return one_hot
    if n == 1:
        return [1.0]

    t_n = column_values[-1]
    free = column_values[:-1]
    g = _kernel_overlap
    a_mat = np.array(
        [[g(t_i, t_j) - g(t_i, t_n) - g(t_n, t_j) + 1.0 for t_j in free] for t_i in free]
    )
    rhs = np.array([g(t_i, target) - g(t_i, t_n) - g(t_n, target) + 1.0 for t_i in free])
    solution = np.linalg.solve(a_mat, rhs)

    weights = [float(c) for c in solution]
    weights.append(1.0 - sum(weights))
    return weights


def nearest_k_columns(column_values: Sequence[float], target: float, k: int) -> list[int]:
    """Indices of the ``k`` columns closest to ``target``, in ascending order."""
    by_distance = sorted(
        range(len(column_values)), key=lambda i: abs(column_values[i] - target)
    )
    return sorted(by_distance[:k])