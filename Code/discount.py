# discount.py
"""
Discount schedules for the discounted regret matchers.

Discount factor at iteration t for exponent e:
  d(t, e) = t^e / (t^e + 1)

  d(t, 0) = 1/2 for every t > 0
  e > 0  : d -> 1 as t grows (old regret is kept)
  e < 0  : d -> 0 as t grows (old regret is forgotten)

DCFR_{alpha,beta,gamma} uses
  alpha : exponent for positive cumulative regret
  beta  : exponent for non-positive cumulative regret
  gamma : exponent for the average-strategy weight (t/(t+1))^gamma
"""
from dataclasses import dataclass


def discount_factor(t, exp):
    """d(t, exp) = t^exp / (t^exp + 1)."""
    t_pow = float(t) ** exp
    return t_pow / (t_pow + 1.0)


def strategy_discount(t, gamma):
    """Weight (t / (t+1))^gamma applied to the previous cumulative strategy."""
    return (t / (t + 1.0)) ** gamma


@dataclass(frozen=True)
class DiscountParams:
    alpha: float
    beta: float
    gamma: float

    def positive(self, t):
        return discount_factor(t, self.alpha)

    def negative(self, t):
        return discount_factor(t, self.beta)

    def strategy(self, t):
        return strategy_discount(t, self.gamma)


# DCFR_{1,1,1}: linear discounting everywhere
DiscountParams.LCFR = DiscountParams(1.0, 1.0, 1.0)
# DCFR_{1.5,0,2}: fast in practice
DiscountParams.RECOMMENDED = DiscountParams(1.5, 0.0, 2.0)
# DCFR_{1.5,0.5,2}: negative regret also decays, safe with regret pruning
DiscountParams.PRUNING_SAFE = DiscountParams(1.5, 0.5, 2.0)
