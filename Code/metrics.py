# metrics.py
"""
Convergence metrics for self-play.

1) Deviation from a known equilibrium:
      dev(w, w*) = max_i |w_i - w*_i|
   For rock-paper-scissors w* = (1/3, 1/3, 1/3).

2) Exploitability / Nash gap for a pair (p,q) in a zero-sum matrix game A:
      eps_A(p,q) = max_i (A q)_i  -  p^T A q
      eps_B(p,q) = p^T A q  -  min_j (p^T A)_j
      eps(p,q)   = max(eps_A, eps_B)
"""

import numpy as np


def max_deviation(weights, target=None):
    """
    L-infinity distance between `weights` and `target`.
    With no target, the uniform distribution over len(weights) actions is used.
    """
    w = np.asarray(weights, dtype=float)
    if target is None:
        target = np.ones(w.shape[0]) / w.shape[0]
    target = np.asarray(target, dtype=float)
    return float(np.max(np.abs(w - target)))


def value(p, q, A):
    """Game value under mixed strategies (p,q): v = p^T A q."""
    p = np.asarray(p, dtype=float)
    q = np.asarray(q, dtype=float)
    A = np.asarray(A, dtype=float)
    return float(p @ (A @ q))


def exploitability(p, q, A):
    """
    Compute eps_A, eps_B, eps for (p,q) in a zero-sum matrix game with
    payoff A for Player A.

    eps_A: how much Player A can gain by best-responding to q
    eps_B: how much Player B can gain by best-responding to p

    Returns:
        eps, eps_A, eps_B, v
    """
    p = np.asarray(p, dtype=float)
    q = np.asarray(q, dtype=float)
    A = np.asarray(A, dtype=float)

    Aq = A @ q          # (n,) expected payoff of each pure row vs q
    pTA = p @ A         # (m,) expected payoff vs each pure column when mixing with p
    v = p @ Aq          # scalar game value under (p,q)

    eps_A = float(np.max(Aq) - v)
    eps_B = float(v - np.min(pTA))
    eps = max(eps_A, eps_B)

    return eps, eps_A, eps_B, float(v)


def qstats(a):
    """Return (min, q25, median, q75, max)."""
    a = np.asarray(a, dtype=float)
    return (
        float(np.min(a)),
        float(np.quantile(a, 0.25)),
        float(np.median(a)),
        float(np.quantile(a, 0.75)),
        float(np.max(a)),
    )


if __name__ == "__main__":
    from game import RPS_PAYOFF
    from selfplay import SelfPlay, train

    harness = train(SelfPlay.with_algorithm("cfr+"), 5000, np.random.default_rng(0))
    p, q = harness.best_weight(), harness.opponent_best_weight()
    print("p_avg:", p, "q_avg:", q)
    print("deviation from uniform:", max_deviation(p), max_deviation(q))
    eps, epsA, epsB, v = exploitability(p, q, RPS_PAYOFF)
    print("exploitability:", eps, "(epsA:", epsA, "epsB:", epsB, ") value:", v)
