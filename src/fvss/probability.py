"""Reliability bounds and statistical secrecy checks.

Reliability: holders reconstruct iff at least t of n shares arrive intact,
so P[success] is a binomial tail. Secrecy: the y-values seen by any t-1
holders are uniform on GF(q)^(t-1) whatever the secret; the chi-square
tests below check that empirically.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass

import numpy as np
from scipy.stats import binom, chi2_contingency, chisquare

MAX_HISTOGRAM_BINS = 1_000_000


def reconstruction_probability(n: int, t: int, p_fault: float) -> float:
    """P[Bin(n, 1 - p_fault) >= t]: at least t shares survive verification."""
    if not 1 <= t <= n:
        raise ValueError(f"Need 1 <= t <= n, got t={t}, n={n}")
    if not 0.0 <= p_fault <= 1.0:
        raise ValueError(f"p_fault must be in [0, 1], got {p_fault}")
    return float(binom.sf(t - 1, n, 1.0 - p_fault))


def min_shares_for_reliability(
    t: int,
    p_fault: float,
    sigma: float,
    n_max: int = 255,
) -> int | None:
    """Smallest n in [t, n_max] with reconstruction probability >= sigma.

    Returns:
        Smallest valid n, or None if no such n exists.
    """
    if not 0.0 < sigma <= 1.0:
        raise ValueError(f"sigma must be in (0, 1], got {sigma}")
    for n in range(t, n_max + 1):
        if reconstruction_probability(n, t, p_fault) >= sigma:
            return n
    return None


def share_histogram(samples: np.ndarray, q: int) -> np.ndarray:
    """Counts of each observed (y_1, ..., y_k) tuple, flattened base q.

    Args:
        samples: Integer array of shape (trials, k) with entries in [0, q).
        q: Subgroup order.

    Returns:
        Array of length q**k.
    """
    samples = np.asarray(samples, dtype=np.int64)
    if samples.ndim != 2:
        raise ValueError(f"samples must be 2-D, got shape {samples.shape}")
    k = samples.shape[1]
    n_bins = q**k
    if n_bins > MAX_HISTOGRAM_BINS:
        raise ValueError(f"q**k = {n_bins} bins exceeds {MAX_HISTOGRAM_BINS}")
    if samples.size and (samples.min() < 0 or samples.max() >= q):
        raise ValueError("samples must lie in [0, q)")

    weights = q ** np.arange(k, dtype=np.int64)
    index = samples @ weights
    return np.bincount(index, minlength=n_bins)


@dataclass
class SecrecyReport:
    """Outcome of the coalition secrecy test.

    Attributes:
        p_uniform: Per-secret chi-square p-value against the uniform law.
        p_independent: Contingency-test p-value that the observation law
            does not depend on the secret.
        n_bins: Histogram size q**(t-1).
    """

    p_uniform: dict[int, float]
    p_independent: float
    n_bins: int

    def passes(self, alpha: float = 0.001) -> bool:
        """No test rejects at level alpha."""
        return self.p_independent > alpha and all(
            p > alpha for p in self.p_uniform.values()
        )


def secrecy_test(samples_by_secret: Mapping[int, np.ndarray], q: int) -> SecrecyReport:
    """Check that fewer than t shares carry no information on the secret.

    Args:
        samples_by_secret: For each secret, the (trials, t-1) observations of
            a fixed coalition over repeated dealings.
        q: Subgroup order.
    """
    if len(samples_by_secret) < 2:
        raise ValueError("Need observations for at least two secrets")

    hists = {s: share_histogram(obs, q) for s, obs in samples_by_secret.items()}
    sizes = {len(h) for h in hists.values()}
    if len(sizes) != 1:
        raise ValueError("All secrets must be observed by the same coalition size")
    if sizes == {1}:
        raise ValueError("Coalition observes no shares; secrecy is trivial for t=1")

    p_uniform = {s: float(chisquare(h).pvalue) for s, h in hists.items()}

    table = np.vstack(list(hists.values()))
    table = table[:, table.sum(axis=0) > 0]
    if table.shape[1] < 2:
        # Every secret produced one identical observation: no evidence either way.
        p_independent = 1.0
    else:
        p_independent = float(chi2_contingency(table).pvalue)

    return SecrecyReport(
        p_uniform=p_uniform,
        p_independent=p_independent,
        n_bins=sizes.pop(),
    )
