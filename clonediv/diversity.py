"""
Diversity indices for a vector of counts.

Counts are treated as abundances of categories (e.g. cells per clonotype). The
Gini index takes every entry into account, including zeros, while Hill numbers
only depend on the relative abundances of categories which were observed.
"""

from typing import Sequence

import numpy as np
from scipy.special import entr, logsumexp

from .errors import InvalidInputError
from .metrics import Gini, HillOrder


def _as_float_counts(counts) -> np.ndarray:
    counts = np.asarray(counts, dtype=float)
    if counts.ndim != 1:
        raise InvalidInputError(
            f"Counts must be one dimensional, had shape {counts.shape}"
        )
    if counts.size == 0 or counts.sum() <= 0:
        raise InvalidInputError("Can't compute diversity of counts with a total of zero")
    return counts


def gini(counts) -> float:
    """
    Gini index of a vector of counts.

    Zero for a perfectly even vector, approaching one as a single category
    takes up all of the counts.

    Example
    -------
    >>> gini([10, 0, 0, 0, 0])
    0.8
    """
    x = np.sort(_as_float_counts(counts))
    n = len(x)
    ranks = np.arange(1, n + 1)
    g = 2 * np.dot(ranks, x) / (n * x.sum()) - (n + 1) / n
    # Rounding can push a perfectly even vector slightly below zero
    return float(max(g, 0.0))


def hill_numbers(counts, orders: Sequence[float]) -> np.ndarray:
    """
    Hill numbers (effective number of categories) for each order in ``orders``.

    Parameters
    ----------
    counts
        Counts per category.
    orders
        Non-negative orders. ``0`` gives richness, ``1`` the exponential of
        Shannon entropy, ``2`` the inverse Simpson index and ``inf`` the inverse
        Berger-Parker index.

    Returns
    -------
    Array with one value per order.
    """
    x = _as_float_counts(counts)
    p = x[x > 0] / x.sum()
    logp = np.log(p)
    out = np.empty(len(orders), dtype=float)
    for i, q in enumerate(orders):
        if q < 0:
            raise InvalidInputError(f"Hill orders must be non-negative, got {q}")
        if q == 0:
            out[i] = len(p)
        elif q == 1:
            out[i] = np.exp(entr(p).sum())
        elif np.isinf(q):
            out[i] = 1 / p.max()
        else:
            out[i] = np.exp(logsumexp(q * logp) / (1 - q))
    return out


def compute_metrics(counts, metrics) -> np.ndarray:
    """Values of ``metrics`` for ``counts``, in the same order as ``metrics``."""
    out = np.empty(len(metrics), dtype=float)
    hill_pos = []
    hill_orders = []
    for i, metric in enumerate(metrics):
        if isinstance(metric, Gini):
            out[i] = gini(counts)
        elif isinstance(metric, HillOrder):
            hill_pos.append(i)
            hill_orders.append(metric.order)
        else:
            raise InvalidInputError(f"Unknown metric {metric!r}")
    if hill_orders:
        out[hill_pos] = hill_numbers(counts, hill_orders)
    return out
