# game.py

"""
Payoff structures for two-player zero-sum self-play.

Reward table R (learner's view): R[j, i] = reward to a player choosing action i
when the opponent chooses action j. Row j is therefore the full-information
reward vector handed to the learner after the opponent played j.

Payoff matrix A (row player's view): A[i, j] = reward to the row player for
(i, j). The column player gets -A[i, j]. For a table R, A = R^T.

Rock-paper-scissors:
  R = [[ 0,  1, -1],     opponent plays Rock
       [-1,  0,  1],     opponent plays Paper
       [ 1, -1,  0]]     opponent plays Scissors
"""
from enum import IntEnum

import numpy as np


def _constant(rows):
    a = np.array(rows, dtype=float)
    a.flags.writeable = False
    return a


RPS_REWARDS = _constant([[0.0, 1.0, -1.0], [-1.0, 0.0, 1.0], [1.0, -1.0, 0.0]])


def payoff_matrix_from_rewards(R):
    """
    Build A where A[i,j] = R[j,i].
    """
    R = np.asarray(R, dtype=float)
    n = R.shape[0]
    assert R.shape == (n, n)
    return _constant(R.T)


RPS_PAYOFF = payoff_matrix_from_rewards(RPS_REWARDS)


def clamp_action(i, n):
    """Clamp a sampled index into [0, n-1]."""
    return max(0, min(int(i), n - 1))


class RPSAction(IntEnum):
    ROCK = 0
    PAPER = 1
    SCISSORS = 2

    @classmethod
    def from_index(cls, i):
        """Action for index i; out-of-range indices are clamped to Rock / Scissors."""
        return cls(clamp_action(i, len(cls)))

    def to_reward(self):
        """Reward vector handed to the other player when this action is played against them."""
        return RPS_REWARDS[int(self)]


if __name__ == "__main__":
    print("R =\n", RPS_REWARDS)
    print("A =\n", RPS_PAYOFF)
    for a in RPSAction:
        print(a.name, a.to_reward())
