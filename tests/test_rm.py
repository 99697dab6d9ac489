import numpy as np
import pytest

from rm import (
    dot,
    normalize,
    normalize_by_sum,
    positive_part,
    strategy_from_regret,
    uniform_weights,
)


@pytest.mark.parametrize("n", range(1, 11))
def test_uniform_weights_sums_to_one(n):
    w = uniform_weights(n)
    assert w.shape == (n,)
    assert w.sum() == pytest.approx(1.0)
    assert np.all(w == w[0])


def test_uniform_weights_empty_for_zero():
    assert uniform_weights(0).shape == (0,)


def test_dot():
    assert dot([1.0, 2.0, 3.0], [4.0, 5.0, 6.0]) == pytest.approx(32.0)
    assert dot([0.0, 0.0], [1.0, 2.0]) == pytest.approx(0.0)
    assert dot([3.0], [7.0]) == pytest.approx(21.0)


def test_positive_part():
    np.testing.assert_array_equal(positive_part(np.array([-1.0, 0.0, 2.0])), [0.0, 0.0, 2.0])


def test_normalize_positive():
    np.testing.assert_allclose(normalize(np.array([2.0, 3.0, 5.0])), [0.2, 0.3, 0.5])


def test_normalize_zero_falls_back_to_uniform():
    np.testing.assert_allclose(normalize(np.zeros(3)), [1 / 3] * 3)


def test_normalize_in_place():
    x = np.array([1.0, 3.0])
    out = normalize(x, out=x)
    assert out is x
    np.testing.assert_allclose(x, [0.25, 0.75])


def test_normalize_by_sum_leaves_input_untouched():
    sum_p = np.array([1.0, 3.0])
    np.testing.assert_allclose(normalize_by_sum(sum_p), [0.25, 0.75])
    np.testing.assert_array_equal(sum_p, [1.0, 3.0])
    np.testing.assert_allclose(normalize_by_sum(np.zeros(4)), [0.25] * 4)


def test_regret_matching_mixed_regrets():
    np.testing.assert_allclose(strategy_from_regret(np.array([-5.0, 3.0, 7.0])), [0.0, 0.3, 0.7])


def test_regret_matching_positive_regrets():
    np.testing.assert_allclose(strategy_from_regret(np.array([2.0, 0.0, 8.0])), [0.2, 0.0, 0.8])


def test_regret_matching_all_nonpositive_is_uniform():
    np.testing.assert_allclose(strategy_from_regret(np.array([-1.0, -2.0, -3.0])), [1 / 3] * 3)
    np.testing.assert_allclose(strategy_from_regret(np.zeros(2)), [0.5, 0.5])


def test_regret_matching_writes_into_out():
    R = np.array([-1.0, 1.0])
    out = np.empty(2)
    strategy_from_regret(R, out=out)
    np.testing.assert_allclose(out, [0.0, 1.0])
    np.testing.assert_array_equal(R, [-1.0, 1.0])
