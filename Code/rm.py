# rm.py
"""
Regret minimizer interface and the regret-matching helpers shared by every variant.

Each minimizer owns, for N actions ("experts"):
  p     : current strategy, a point of the simplex
  sum_p : cumulative (possibly discounted / weighted) strategy
  a regret state specific to the algorithm

One update with full-information rewards u (u_i = reward action i would have earned):
  v   = p . u                 expected reward under p
  r_i = u_i - v               instantaneous regret
  R   <- variant rule(R, r)
  p   <- normalize((R)^+)     or uniform if all nonpositive
  sum_p <- variant weighting(sum_p, p)

Average strategy (Nash approximation):
  p_avg = sum_p / sum(sum_p)  or uniform if sum(sum_p) <= 0
"""
from abc import ABC, abstractmethod

import numpy as np

from sampler import AliasSampler


def uniform_weights(n):
    """Uniform distribution over n actions (empty for n < 1)."""
    if n < 1:
        return np.zeros(0)
    return np.ones(n) / n


def positive_part(x):
    """(x)^+ elementwise."""
    return np.maximum(x, 0.0)


def dot(p, u):
    """Expected reward p . u."""
    return float(np.dot(p, u))


def normalize(x, out=None):
    """
    Scale a nonnegative vector to sum to 1, in place into `out` when given.
    Falls back to uniform if the sum is nonpositive.
    """
    if out is None:
        out = np.array(x, dtype=float)
    elif out is not x:
        out[:] = x
    s = out.sum()
    if s > 0.0:
        out /= s
    else:
        out[:] = 1.0 / out.shape[0]
    return out


def normalize_by_sum(sum_p):
    """Fresh normalized copy of sum_p, uniform if its total is nonpositive."""
    return normalize(np.asarray(sum_p, dtype=float).copy())


def strategy_from_regret(R, out=None):
    """
    Convert a regret vector R into a mixed strategy.
    If all entries are nonpositive, return uniform strategy.
    """
    if out is None:
        out = np.empty(np.shape(R))
    np.maximum(R, 0.0, out=out)
    return normalize(out, out=out)


class RegretMinimizer(ABC):
    """
    Shared state and queries of a regret minimizer over `num_experts` actions.

    Subclasses implement `update_regret`; they mutate `self.p` / `self.sum_p`
    in place and call `_strategy_changed()` afterwards so the sampler is rebuilt.
    """

    def __init__(self, num_experts):
        self.num_experts = num_experts
        self.p = uniform_weights(num_experts)
        # raises InvalidWeights for num_experts < 1
        self._sampler = AliasSampler(self.p)
        self.sum_p = np.zeros(num_experts)
        self._num_updates = 0

    @abstractmethod
    def update_regret(self, rewards):
        """Fold in one vector of per-action rewards and move to the next strategy."""

    def _rewards(self, rewards):
        u = np.asarray(rewards, dtype=float)
        if u.shape != (self.num_experts,):
            raise ValueError(
                f"expected {self.num_experts} rewards, got shape {u.shape}"
            )
        if not np.all(np.isfinite(u)):
            raise ValueError(f"rewards must be finite: {u}")
        return u

    def _strategy_changed(self):
        self._sampler = AliasSampler(self.p)

    def next_action(self, rng):
        """Sample an action index from the current strategy."""
        return self._sampler.sample(rng)

    def best_weight(self):
        """Average strategy: sum_p normalized, uniform before any mass was accumulated."""
        return normalize_by_sum(self.sum_p)

    def num_updates(self):
        return self._num_updates

    def current_strategy(self):
        view = self.p.view()
        view.flags.writeable = False
        return view

    def cumulative_strategy(self):
        view = self.sum_p.view()
        view.flags.writeable = False
        return view

    def __repr__(self):
        return (
            f"{type(self).__name__}(num_experts={self.num_experts}, "
            f"num_updates={self._num_updates})"
        )
