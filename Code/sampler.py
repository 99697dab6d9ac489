# sampler.py
"""
O(1) weighted sampling of an action index (Vose's alias method).

Build, for weights w_0..w_{n-1} with W = sum_i w_i:
  scaled_i = n * w_i / W
  split indices into small (scaled < 1) and large (scaled >= 1);
  repeatedly pair one small s with one large l:
    prob[s]  = scaled_s,  alias[s] = l
    scaled_l = scaled_l - (1 - scaled_s)
  leftovers get prob = 1.

Sample:
  i ~ U{0..n-1},  u ~ U[0,1)
  return i if u < prob[i] else alias[i]
"""
import numpy as np


class InvalidWeights(ValueError):
    """Weight vector is empty, has a negative or non-finite entry, or does not sum to > 0."""


def check_weights(weights):
    """Validate a weight vector and return it as a float array."""
    w = np.asarray(weights, dtype=float)
    if w.ndim != 1 or w.shape[0] == 0:
        raise InvalidWeights("weights must be a non-empty 1-d vector")
    if not np.all(np.isfinite(w)):
        raise InvalidWeights(f"weights must be finite: {w}")
    if np.any(w < 0.0):
        raise InvalidWeights(f"weights must be non-negative: {w}")
    if w.sum() <= 0.0:
        raise InvalidWeights(f"weights must sum to a positive value: {w}")
    return w


class AliasSampler:
    """Alias table over a fixed weight vector. Rebuild whenever the weights change."""

    def __init__(self, weights):
        w = check_weights(weights)
        n = w.shape[0]

        self.n = n
        self.prob = np.zeros(n)
        self.alias = np.arange(n)

        scaled = w * (n / w.sum())
        small = [i for i in range(n) if scaled[i] < 1.0]
        large = [i for i in range(n) if scaled[i] >= 1.0]

        while small and large:
            s = small.pop()
            b = large.pop()
            self.prob[s] = scaled[s]
            self.alias[s] = b
            scaled[b] = (scaled[b] + scaled[s]) - 1.0
            if scaled[b] < 1.0:
                small.append(b)
            else:
                large.append(b)

        # whatever is left is 1 up to rounding
        for i in large:
            self.prob[i] = 1.0
        heaviest = int(np.argmax(w))
        for i in small:
            # only reachable through rounding; zero weights stay unreachable
            if w[i] > 0.0:
                self.prob[i] = 1.0
            else:
                self.prob[i] = 0.0
                self.alias[i] = heaviest

    def sample(self, rng):
        i = int(rng.integers(self.n))
        if rng.random() < self.prob[i]:
            return i
        return int(self.alias[i])
