import pytest

from discount import DiscountParams, discount_factor, strategy_discount


@pytest.mark.parametrize("t", [1, 2, 10, 100, 12345])
def test_zero_exponent_is_one_half(t):
    assert discount_factor(t, 0.0) == pytest.approx(0.5)


def test_unit_exponent():
    assert discount_factor(1, 1.0) == pytest.approx(0.5)
    assert discount_factor(2, 1.0) == pytest.approx(2.0 / 3.0)
    assert discount_factor(9, 1.0) == pytest.approx(0.9)


@pytest.mark.parametrize("exp", [0.5, 1.0, 1.5, 2.0, 2.3])
def test_increasing_in_t_for_positive_exponent(exp):
    values = [discount_factor(t, exp) for t in (1, 2, 10, 100, 1000)]
    assert all(a < b for a, b in zip(values, values[1:]))
    assert all(0.0 < v < 1.0 for v in values)


def test_negative_exponent_decays_towards_zero():
    assert discount_factor(1000, -1.0) < discount_factor(10, -1.0) < 0.5
    assert discount_factor(1000, -1.0) == pytest.approx(1.0 / 1001.0)


def test_strategy_discount():
    assert strategy_discount(1, 2.0) == pytest.approx(0.25)
    assert strategy_discount(3, 1.0) == pytest.approx(0.75)
    assert strategy_discount(5, 0.0) == pytest.approx(1.0)


def test_presets():
    assert DiscountParams.LCFR == DiscountParams(1.0, 1.0, 1.0)
    assert DiscountParams.RECOMMENDED == DiscountParams(1.5, 0.0, 2.0)
    assert DiscountParams.PRUNING_SAFE == DiscountParams(1.5, 0.5, 2.0)


def test_params_are_frozen():
    params = DiscountParams(1.0, 2.0, 3.0)
    with pytest.raises(AttributeError):
        params.alpha = 5.0


def test_params_helpers():
    params = DiscountParams.PRUNING_SAFE
    assert params.positive(4) == pytest.approx(discount_factor(4, 1.5))
    assert params.negative(4) == pytest.approx(discount_factor(4, 0.5))
    assert params.strategy(4) == pytest.approx((4 / 5) ** 2)
