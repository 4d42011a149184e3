import math

import pytest

from mcblocks.ducru import (
    ducru_constrained_weights,
    ducru_unity_weights,
    ducru_weights,
    nearest_k_columns,
)


def _gram(a, b):
    return 2.0 * math.sqrt(a * b) / (a + b)


def _gram_err(sub, w, target):
    e = 1.0
    for wj, t_j in zip(w, sub):
        e -= 2.0 * wj * _gram(t_j, target)
    for wi, t_i in zip(w, sub):
        for wj, t_j in zip(w, sub):
            e += wi * wj * _gram(t_i, t_j)
    return e


def _max_rel_error(weight_fn):
    temps = [300.0, 600.0, 900.0, 1200.0, 1500.0]

    def f(t):
        return math.exp(-t / 1000.0)

    f_train = [f(t) for t in temps]
    max_rel = 0.0
    for target in (450.0, 750.0, 1050.0, 1350.0):
        chosen = nearest_k_columns(temps, target, 3)
        sub = [temps[i] for i in chosen]
        w = weight_fn(sub, target)
        est = sum(wj * f_train[i] for i, wj in zip(chosen, w))
        truth = f(target)
        max_rel = max(max_rel, abs((est - truth) / truth))
    return max_rel


@pytest.mark.parametrize("index", [0, 1, 2, 3])
def test_raw_weights_are_one_hot_at_exact_match(index):
    temps = [300.0, 600.0, 900.0, 1200.0]
    expected = [1.0 if k == index else 0.0 for k in range(len(temps))]
    w = ducru_weights(temps, temps[index])
    assert w == pytest.approx(expected, abs=1e-12)


@pytest.mark.parametrize("target", [450.0, 750.0, 1100.0, 1800.0])
def test_unity_weights_sum_to_one(target):
    temps = [294.0, 600.0, 900.0, 1200.0, 2500.0]
    w = ducru_unity_weights(temps, target)
    assert sum(w) == pytest.approx(1.0, rel=1e-12, abs=1e-12)


def test_unity_weights_at_exact_match_one_hot():
    w = ducru_unity_weights([294.0, 600.0, 900.0], 600.0)
    assert w == pytest.approx([0.0, 1.0, 0.0], abs=1e-12)


def test_nearest_k_returns_correct_subset():
    temps = [294.0, 600.0, 900.0, 1200.0, 2500.0]
    assert nearest_k_columns(temps, 800.0, 3) == [1, 2, 3]


def test_nearest_k_larger_than_len_returns_all():
    assert nearest_k_columns([5.0, 1.0, 3.0], 2.0, 10) == [0, 1, 2]


@pytest.mark.parametrize("target", [450.0, 750.0, 1100.0, 1800.0])
def test_constrained_weights_sum_to_one(target):
    temps = [294.0, 600.0, 900.0, 1200.0, 2500.0]
    w = ducru_constrained_weights(temps, target)
    assert sum(w) == pytest.approx(1.0, rel=1e-12, abs=1e-12)


def test_constrained_at_exact_match_one_hot():
    w = ducru_constrained_weights([294.0, 600.0, 900.0], 600.0)
    assert w == pytest.approx([0.0, 1.0, 0.0], abs=1e-12)


def test_constrained_degenerate_sizes():
    assert ducru_constrained_weights([], 500.0) == []
    assert ducru_constrained_weights([300.0], 500.0) == [1.0]


def test_constrained_3point_reproduces_smooth_function_to_high_accuracy():
    assert _max_rel_error(ducru_constrained_weights) < 0.01


def test_unity_3point_reproduces_smooth_function_to_high_accuracy():
    assert _max_rel_error(ducru_unity_weights) < 0.01


@pytest.mark.parametrize("target", [450.0, 750.0, 1050.0, 1350.0])
def test_constrained_beats_post_hoc_unity_in_kernel_gram_norm(target):
    temps = [300.0, 600.0, 900.0, 1200.0, 1500.0]
    chosen = nearest_k_columns(temps, target, 3)
    sub = [temps[i] for i in chosen]
    err_unity = _gram_err(sub, ducru_unity_weights(sub, target), target)
    err_con = _gram_err(sub, ducru_constrained_weights(sub, target), target)
    assert err_con <= err_unity + 1e-12


def test_raw_weights_length_matches_columns():
    temps = [294.0, 600.0, 900.0, 1200.0]
    assert len(ducru_weights(temps, 750.0)) == len(temps)