# selfplay.py
"""
Two regret minimizers playing a zero-sum matrix game against each other.

Play (may be repeated before an update, giving mini-batches):
  i ~ p (player one),  j ~ q (player two)
  pending_one += A[:, j]      reward of each of one's actions against j
  pending_two += -A[i, :]     reward of each of two's actions against i

Update:
  one.update_regret(pending_one)
  two.update_regret(pending_two)
  pending_one = pending_two = 0

The averaged strategies one.best_weight(), two.best_weight() approach a Nash
equilibrium of A.
"""
import logging

import numpy as np

from game import RPS_PAYOFF, clamp_action
from matchers import make_matcher

logger = logging.getLogger(__name__)


class SelfPlay:

    def __init__(self, matcher_one, matcher_two, payoff=RPS_PAYOFF):
        A = np.asarray(payoff, dtype=float)
        n, m = A.shape
        if matcher_one.num_experts != n or matcher_two.num_experts != m:
            raise ValueError(
                f"payoff shape {A.shape} does not match matchers "
                f"({matcher_one.num_experts}, {matcher_two.num_experts})"
            )

        self.A = A
        self.matcher_one = matcher_one
        self.matcher_two = matcher_two
        self.pending_one = np.zeros(n)
        self.pending_two = np.zeros(m)
        self.plays = 0

    @classmethod
    def with_algorithm(cls, name, payoff=RPS_PAYOFF):
        """Both seats use a default-configured matcher of the named algorithm."""
        n, m = np.shape(payoff)
        return cls(make_matcher(name, n), make_matcher(name, m), payoff)

    def run_one(self, rng):
        """Sample one pure action per side and accumulate the resulting rewards."""
        n, m = self.A.shape
        i = clamp_action(self.matcher_one.next_action(rng), n)
        j = clamp_action(self.matcher_two.next_action(rng), m)

        self.pending_one += self.A[:, j]
        self.pending_two -= self.A[i, :]
        self.plays += 1
        return i, j

    def update_regret(self):
        """Flush the pending rewards into both minimizers."""
        logger.debug("flushing %d plays into both minimizers", self.plays)
        self.matcher_one.update_regret(self.pending_one)
        self.matcher_two.update_regret(self.pending_two)

        self.pending_one[:] = 0.0
        self.pending_two[:] = 0.0
        self.plays = 0

    def pending_rewards(self):
        return self.pending_one.copy(), self.pending_two.copy()

    def best_weight(self):
        return self.matcher_one.best_weight()

    def opponent_best_weight(self):
        return self.matcher_two.best_weight()


def train(harness, iterations, rng, plays_per_update=1):
    """
    Run `iterations` update rounds of `plays_per_update` plays each.

    Returns the harness for chaining.
    """
    for _ in range(iterations):
        for _ in range(plays_per_update):
            harness.run_one(rng)
        harness.update_regret()
    return harness
