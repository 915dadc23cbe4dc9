import math
import numbers
import random
from dataclasses import dataclass
from typing import NamedTuple, Tuple


class AliasSamplerError(ValueError):
    """Base class for errors raised while building or sampling a table."""


class InvalidWeights(AliasSamplerError):
    """Weights are negative, not finite, or sum to zero."""


class EmptyDistribution(AliasSamplerError):
    """Sampling was requested from a distribution with no outcomes."""


class Bucket(NamedTuple):
    outcome_a: int
    outcome_b: int
    threshold: float


@dataclass(frozen=True)
class AliasTable:
    """
    The buckets of a Vose alias table.

    Bucket k owns the draws in [k/n, (k+1)/n). A draw below the bucket's
    threshold picks outcome_a, any other draw picks outcome_b. An empty
    distribution (size 0) still holds one degenerate bucket.
    """
    size: int
    buckets: Tuple[Bucket, ...]

    @property
    def empty(self):
        return self.size == 0


def normalize_weights(weights):
    """
    Args:
        weights (iterable of float): Non-negative weight per outcome.

    Returns:
        tuple of float: The weights rescaled to sum to 1.
    """
    weights = [float(w) for w in weights]
    for i, w in enumerate(weights):
        if not math.isfinite(w):
            raise InvalidWeights(f"Weight {i} is not finite: {w}")
        if w < 0:
            raise InvalidWeights(f"Weight {i} is negative: {w}")
    if not weights:
        return ()

    # Scaled by the largest weight so the sum cannot overflow.
    m = max(weights)
    if m <= 0:
        raise InvalidWeights(
            f"Weights must have a positive sum. "
            f"Got {len(weights)} zero weights."
            )
    weights = [w / m for w in weights]
    total = math.fsum(weights)
    return tuple(w / total for w in weights)


def build(weights):
    """Builds the alias table for the given weights in O(n) time."""
    probs = normalize_weights(weights)
    n = len(probs)
    if n == 0:
        return AliasTable(size=0, buckets=(Bucket(0, 0, 0.0),))

    share = 1.0 / n
    light, big = [], []
    for i, p in enumerate(probs):
        if p < share:
            light.append((p, i))
        else:
            big.append((p, i))

    buckets = []
    while light and big:
        s_mass, s_idx = light.pop()
        b_mass, b_idx = big.pop()
        i = len(buckets)

        # Zero-mass outcomes must stay unreachable even when n * draw
        # rounds up into this bucket.
        outcome_a = s_idx if s_mass > 0 else b_idx
        buckets.append(Bucket(outcome_a, b_idx, s_mass + i / n))

        left_over = s_mass + b_mass - share
        if left_over < share:
            light.append((left_over, b_idx))
        else:
            big.append((left_over, b_idx))

    while big:
        _, idx = big.pop()
        buckets.append(Bucket(idx, idx, 0.0))

    # Only reached through rounding in left_over.
    while light:
        _, idx = light.pop()
        buckets.append(Bucket(idx, idx, 0.0))

    return AliasTable(size=n, buckets=tuple(buckets))


def sample(table, draw):
    """
    Maps one uniform draw in [0, 1) to an outcome index in O(1).

    Raises EmptyDistribution for a table built from no weights. An empty
    distribution has no index to return, so it never falls back to 0.
    """
    if table.size == 0:
        raise EmptyDistribution("Cannot sample from an empty distribution.")
    if not 0.0 <= draw < 1.0:
        raise ValueError(f"Draw must lie in [0, 1). Got {draw}.")

    n = table.size
    index = int(n * draw)
    if index >= n:
        index = n - 1
    outcome_a, outcome_b, threshold = table.buckets[index]
    return outcome_a if draw < threshold else outcome_b


def probabilities(table):
    """Recovers each outcome's probability from the buckets."""
    n = table.size
    probs = [0.0] * n
    for k, (outcome_a, outcome_b, threshold) in enumerate(table.buckets[:n]):
        if outcome_a == outcome_b:
            probs[outcome_a] += 1.0 / n
            continue
        mass_a = threshold - k / n
        probs[outcome_a] += mass_a
        probs[outcome_b] += 1.0 / n - mass_a
    return tuple(probs)


def min_index(table):
    if table.empty:
        raise EmptyDistribution("An empty distribution has no outcomes.")
    return 0


def max_index(table):
    if table.empty:
        raise EmptyDistribution("An empty distribution has no outcomes.")
    return table.size - 1


def describe_buckets(table):
    lines = [f"buckets = {len(table.buckets)}"]
    for bucket in table.buckets:
        lines.append(
            f"{bucket.outcome_a}  {bucket.outcome_b}  {bucket.threshold}"
            )
    return "\n".join(lines)


class AliasSampler:
    """
    A discrete distribution over outcomes 0..n-1 with O(1) sampling.

    The table is built once in the constructor and never changes. Each
    sampler owns its own random.Random, so two samplers never share state.
    """
    def __init__(self, weights, rng=None):
        """
        Args:
            weights (iterable of float): Non-negative weight per outcome.
            rng (random.Random or int, optional): Random source, or a seed
                for a new one.
        """
        self.table = build(weights)
        if rng is None:
            rng = random.Random()
        elif isinstance(rng, numbers.Integral):
            rng = random.Random(int(rng))
        elif not callable(getattr(rng, "random", None)):
            raise TypeError(
                f"rng must be a seed or have a random() method. Got {rng!r}."
                )
        self.rng = rng

    @property
    def buckets(self):
        return self.table.buckets

    def sample(self):
        return sample(self.table, self.rng.random())

    def sample_from(self, draw):
        return sample(self.table, draw)

    def sample_n(self, k):
        if k < 0:
            raise ValueError(f"Number of samples must be non-negative. Got {k}.")
        table = self.table
        rand = self.rng.random
        return [sample(table, rand()) for _ in range(k)]

    def probabilities(self):
        return probabilities(self.table)

    def min(self):
        return min_index(self.table)

    def max(self):
        return max_index(self.table)

    def reset(self):
        # Draws are independent, there is nothing cached between them.
        pass

    def __len__(self):
        return self.table.size

    def __repr__(self):
        return f"AliasSampler(size={self.table.size})"
