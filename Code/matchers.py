# matchers.py
"""
Regret-matching variants. They differ only in how regret is discounted / weighted
and how the average strategy is accumulated. With t = number of updates so far + 1,
r = instantaneous regret, d(t, e) = t^e / (t^e + 1):

  CFR+       R   = (E - c)^+   with E += u, c += p.u      sum_p += p
  DCFR       R_i = R_i * d(t, alpha if R_i > 0 else beta) + r_i
                                                           sum_p = sum_p * (t/(t+1))^gamma + p
  DCFR+      R   = (R * d(t-1, alpha) + r)^+               sum_p = sum_p * ((t-1)/t)^gamma + p
  Linear CFR R   = R + t * r                               sum_p += t * p
  PCFR+      R   = (R + r)^+,  p from (R + r)^+            sum_p += t^2 * p
  PDCFR+     R   = (R * d(t-1, alpha) + r)^+,
             p from (R * d(t, alpha) + r)^+                sum_p = sum_p * ((t-1)/t)^gamma + p

d(0, .) and ((t-1)/t)^gamma are taken as 0 at t = 1.

Degenerate regret (no strictly positive entry) gives a uniform strategy for that
iteration. Only CFR+ also forgets its history (rewards, counter); the discounted
variants keep theirs.
"""
import logging

import numpy as np

from discount import DiscountParams, discount_factor
from sampler import check_weights
from rm import RegretMinimizer, dot, normalize, positive_part, strategy_from_regret

logger = logging.getLogger(__name__)


class CfrPlusRegretMatcher(RegretMinimizer):
    """Regret matching on cumulative rewards, reset when every regret is nonpositive."""

    def __init__(self, num_experts):
        super().__init__(num_experts)
        self.expert_reward = np.zeros(num_experts)
        self.cumulative_reward = 0.0

    @classmethod
    def from_strategy(cls, p):
        """Start from an arbitrary initial strategy instead of uniform."""
        p = np.asarray(p, dtype=float)
        matcher = cls(p.shape[0])
        matcher.p[:] = normalize(check_weights(p))
        matcher._strategy_changed()
        return matcher

    def update_regret(self, rewards):
        u = self._rewards(rewards)

        self.cumulative_reward += dot(self.p, u)
        self.expert_reward += u

        np.subtract(self.expert_reward, self.cumulative_reward, out=self.p)
        np.maximum(self.p, 0.0, out=self.p)
        regret_sum = self.p.sum()

        if regret_sum <= 0.0:
            logger.debug(
                "%s: no positive regret after %d updates, resetting",
                type(self).__name__,
                self._num_updates,
            )
            self.p[:] = 1.0 / self.num_experts
            self.cumulative_reward = 0.0
            self.expert_reward[:] = 0.0
            self._num_updates = 0
        else:
            self.p /= regret_sum
            self.sum_p += self.p
            self._num_updates += 1

        self._strategy_changed()


class DiscountedRegretMatcher(RegretMinimizer):
    """DCFR_{alpha,beta,gamma}: sign-dependent regret discount, discounted average."""

    def __init__(self, num_experts, params=DiscountParams.RECOMMENDED):
        super().__init__(num_experts)
        self.params = params
        self.cumulative_regret = np.zeros(num_experts)

    @classmethod
    def lcfr(cls, num_experts):
        return cls(num_experts, DiscountParams.LCFR)

    @classmethod
    def recommended(cls, num_experts):
        return cls(num_experts, DiscountParams.RECOMMENDED)

    @classmethod
    def pruning_safe(cls, num_experts):
        return cls(num_experts, DiscountParams.PRUNING_SAFE)

    def update_regret(self, rewards):
        u = self._rewards(rewards)
        t = self._num_updates + 1

        discount = np.where(
            self.cumulative_regret > 0.0,
            self.params.positive(t),
            self.params.negative(t),
        )
        expected = dot(self.p, u)

        self.cumulative_regret *= discount
        self.cumulative_regret += u - expected

        strategy_from_regret(self.cumulative_regret, out=self.p)

        self.sum_p *= self.params.strategy(t)
        self.sum_p += self.p
        self._num_updates += 1
        self._strategy_changed()


class DcfrPlusRegretMatcher(RegretMinimizer):
    """DCFR+: discount previous regret, add the new one, then clip at zero."""

    def __init__(self, num_experts, alpha=1.5, gamma=4.0):
        super().__init__(num_experts)
        self.alpha = alpha
        self.gamma = gamma
        self.cumulative_regret = np.zeros(num_experts)

    @classmethod
    def recommended(cls, num_experts):
        return cls(num_experts, 1.5, 4.0)

    def update_regret(self, rewards):
        u = self._rewards(rewards)
        t = self._num_updates + 1

        if t > 1:
            regret_discount = discount_factor(t - 1, self.alpha)
            avg_discount = ((t - 1) / t) ** self.gamma
        else:
            regret_discount = 0.0
            avg_discount = 0.0

        expected = dot(self.p, u)

        self.cumulative_regret *= regret_discount
        self.cumulative_regret += u - expected
        np.maximum(self.cumulative_regret, 0.0, out=self.cumulative_regret)

        strategy_from_regret(self.cumulative_regret, out=self.p)

        self.sum_p *= avg_discount
        self.sum_p += self.p
        self._num_updates += 1
        self._strategy_changed()


class LinearCfrRegretMatcher(RegretMinimizer):
    """Linear CFR: iteration t contributes t * r to regret and t * p to the average."""

    def __init__(self, num_experts):
        super().__init__(num_experts)
        self.cumulative_regret = np.zeros(num_experts)

    def update_regret(self, rewards):
        u = self._rewards(rewards)
        t = float(self._num_updates + 1)

        expected = dot(self.p, u)
        self.cumulative_regret += t * (u - expected)

        strategy_from_regret(self.cumulative_regret, out=self.p)

        self.sum_p += t * self.p
        self._num_updates += 1
        self._strategy_changed()


class PcfrPlusRegretMatcher(RegretMinimizer):
    """
    Predictive CFR+.

    The latest instantaneous regret is used as the prediction of the next one,
    so the next strategy comes from (R + r)^+ rather than R. The average is
    weighted quadratically.
    """

    def __init__(self, num_experts):
        super().__init__(num_experts)
        self.cumulative_regret = np.zeros(num_experts)
        self.last_instantaneous_regret = np.zeros(num_experts)

    def update_regret(self, rewards):
        u = self._rewards(rewards)
        t = self._num_updates + 1

        expected = dot(self.p, u)
        np.subtract(u, expected, out=self.last_instantaneous_regret)

        self.cumulative_regret += self.last_instantaneous_regret
        np.maximum(self.cumulative_regret, 0.0, out=self.cumulative_regret)

        predicted = positive_part(self.cumulative_regret + self.last_instantaneous_regret)
        normalize(predicted, out=self.p)

        self.sum_p += float(t * t) * self.p
        self._num_updates += 1
        self._strategy_changed()


class PdcfrPlusRegretMatcher(RegretMinimizer):
    """
    Predictive discounted CFR+.

    Regret follows DCFR+; the strategy is derived from the prediction
    (R * d(t, alpha) + r)^+, i.e. the regret as DCFR+ would have it next round
    if the instantaneous regret repeated.
    """

    def __init__(self, num_experts, alpha=2.3, gamma=5.0):
        super().__init__(num_experts)
        self.alpha = alpha
        self.gamma = gamma
        self.cumulative_regret = np.zeros(num_experts)
        self.last_instantaneous_regret = np.zeros(num_experts)

    @classmethod
    def recommended(cls, num_experts):
        return cls(num_experts, 2.3, 5.0)

    def update_regret(self, rewards):
        u = self._rewards(rewards)
        t = self._num_updates + 1

        if t > 1:
            prev_discount = discount_factor(t - 1, self.alpha)
            avg_discount = ((t - 1) / t) ** self.gamma
        else:
            prev_discount = 0.0
            avg_discount = 0.0
        curr_discount = discount_factor(t, self.alpha)

        expected = dot(self.p, u)
        np.subtract(u, expected, out=self.last_instantaneous_regret)

        self.cumulative_regret *= prev_discount
        self.cumulative_regret += self.last_instantaneous_regret
        np.maximum(self.cumulative_regret, 0.0, out=self.cumulative_regret)

        predicted = positive_part(
            self.cumulative_regret * curr_discount + self.last_instantaneous_regret
        )
        normalize(predicted, out=self.p)

        self.sum_p *= avg_discount
        self.sum_p += self.p
        self._num_updates += 1
        self._strategy_changed()


ALGORITHMS = {
    "cfr+": CfrPlusRegretMatcher,
    "dcfr": DiscountedRegretMatcher,
    "dcfr+": DcfrPlusRegretMatcher,
    "lcfr": LinearCfrRegretMatcher,
    "pcfr+": PcfrPlusRegretMatcher,
    "pdcfr+": PdcfrPlusRegretMatcher,
}

LABELS = {
    "cfr+": "CFR+",
    "dcfr": "DCFR",
    "dcfr+": "DCFR+",
    "lcfr": "Linear CFR",
    "pcfr+": "PCFR+",
    "pdcfr+": "PDCFR+",
}


def make_matcher(name, num_experts):
    """Default-configured matcher for a short algorithm name (see ALGORITHMS)."""
    try:
        cls = ALGORITHMS[name]
    except KeyError:
        raise KeyError(
            f"unknown algorithm {name!r}, expected one of {sorted(ALGORITHMS)}"
        ) from None
    return cls(num_experts)
