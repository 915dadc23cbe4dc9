import numpy as np
import torch
import torch.nn as nn

from alias_sampler import AliasTable, EmptyDistribution, build

if torch.backends.mps.is_available():
    device = torch.device('mps')
elif torch.cuda.is_available():
    device = torch.device('cuda')
else:
    device = torch.device('cpu')


def _as_table(table_or_weights):
    if isinstance(table_or_weights, AliasTable):
        return table_or_weights
    return build(table_or_weights)


class NumpyAliasSampler:
    """Samples many outcomes at once from an alias table with numpy.
    """
    def __init__(self, table_or_weights, seed=None):
        """
        Args:
            table_or_weights (AliasTable or array-like): A built table, or
                the weights to build one from.
            seed (int, optional): Seed for the sampler's own generator.
        """
        self.table = _as_table(table_or_weights)
        self.n = self.table.size
        buckets = self.table.buckets
        self.outcome_a = np.array([b.outcome_a for b in buckets], dtype=np.int64)
        self.outcome_b = np.array([b.outcome_b for b in buckets], dtype=np.int64)
        self.threshold = np.array([b.threshold for b in buckets], dtype=np.float64)
        self.rng = np.random.default_rng(seed)

    def sample_draws(self, draws):
        """Maps an array of uniform draws in [0, 1) to outcome indices."""
        if self.n == 0:
            raise EmptyDistribution("Cannot sample from an empty distribution.")
        draws = np.asarray(draws, dtype=np.float64)
        if not np.all((draws >= 0.0) & (draws < 1.0)):
            raise ValueError("Draws must lie in [0, 1).")
        idx = np.floor(self.n * draws).astype(np.int64)
        np.minimum(idx, self.n - 1, out=idx)
        return np.where(
            draws < self.threshold[idx],
            self.outcome_a[idx],
            self.outcome_b[idx]
            )

    def sample(self, size=1):
        return self.sample_draws(self.rng.random(size))


class TorchAliasSampler(nn.Module):
    """Alias table kept on a torch device.

    Draws a batch of outcomes with one kernel per step instead of
    torch.multinomial, e.g. for negative sampling against a fixed marginal
    distribution.
    """
    def __init__(self, table_or_weights, device=device, dtype=None):
        """
        Input:
        ------
        table_or_weights: A built AliasTable, or the weights to build one from.
        device: Device to hold the table on.
        dtype: Floating type of thresholds and draws. Defaults to float64,
            or float32 on mps which has no float64 support.
        """
        super(TorchAliasSampler, self).__init__()
        table = _as_table(table_or_weights)
        if dtype is None:
            dtype = torch.float32 if torch.device(device).type == 'mps' \
                else torch.float64
        self.n = table.size
        self.register_buffer('outcome_a', torch.tensor(
            [b.outcome_a for b in table.buckets],
            dtype=torch.long,
            device=device
            ))
        self.register_buffer('outcome_b', torch.tensor(
            [b.outcome_b for b in table.buckets],
            dtype=torch.long,
            device=device
            ))
        self.register_buffer('threshold', torch.tensor(
            [b.threshold for b in table.buckets],
            dtype=dtype,
            device=device
            ))

    def forward(self, draws):
        """
        Input:
        ------
        draws: Tensor of uniform draws in [0, 1), any shape.

        Returns a long tensor of outcome indices with the shape of draws.
        """
        if self.n == 0:
            raise EmptyDistribution("Cannot sample from an empty distribution.")
        if not torch.all((draws >= 0) & (draws < 1)):
            raise ValueError("Draws must lie in [0, 1).")
        draws = draws.to(device=self.threshold.device, dtype=self.threshold.dtype)
        # A draw just below 1 can round up to 1 in a narrower dtype.
        one = torch.ones((), dtype=draws.dtype)
        draws = draws.clamp(max=torch.nextafter(one, torch.zeros_like(one)).item())
        idx = torch.floor(self.n * draws).long().clamp_(max=self.n - 1)
        return torch.where(
            draws < self.threshold[idx],
            self.outcome_a[idx],
            self.outcome_b[idx]
            )

    def sample(self, num_samples, generator=None):
        draws = torch.rand(
            num_samples,
            generator=generator,
            dtype=self.threshold.dtype,
            device=self.threshold.device
            )
        return self(draws)
