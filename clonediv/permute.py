"""
Permutation test for differences in diversity between two groups.

Under the null hypothesis, both groups are drawn from a single pool of cells
with the same clonotype composition. We randomly sample without replacement to
obtain two permuted groups that match the sizes of the original groups,
recompute the diversity indices for these and take the absolute difference
between groups. The observed absolute difference is compared against this null
distribution, using the approach of Phipson and Smyth (2010) to avoid p-values of
zero.
"""

import logging

import numpy as np
import pandas as pd

from .diversity import compute_metrics
from .errors import InvalidInputError
from .metrics import DEFAULT_METRICS, check_metrics
from .runs import RunList
from .utils import as_count_vector, check_iterations

logger = logging.getLogger(__name__)

# Permuted statistics within this distance of the observed one count as exceeding it
_TOLERANCE = 1e-10


def shuffled_diversity_pvalues(
    x,
    y,
    iterations: int = 2000,
    metrics=DEFAULT_METRICS,
    random_state=None,
) -> pd.Series:
    """
    Permutation p-values for the difference in diversity between two groups.

    Metrics are evaluated on ``x`` and ``y`` exactly as given, but a permuted group
    only contains the clonotypes it received cells from. The Gini index counts zero
    entries, so padding a group with zeros makes it look less even than any
    permuted group, and the Gini test significant. Drop zero counts before testing
    unless they are meaningful, and downsample groups to the same size.

    Parameters
    ----------
    x, y
        Counts per clonotype for each group. Clonotypes are local to a group,
        position ``i`` of ``x`` has nothing to do with position ``i`` of ``y``.
    iterations
        Number of permutations.
    metrics
        Metrics to test, see :func:`~clonediv.metrics.requested_metrics`.
    random_state
        Seed, ``numpy.random.SeedSequence`` or ``numpy.random.Generator`` used
        for sampling.

    Returns
    -------
    ``pd.Series`` of p-values, indexed by metric name.

    Example
    -------
    >>> pvals = shuffled_diversity_pvalues([10, 0, 0, 0, 0], [2, 2, 2, 2, 2], random_state=0)
    >>> pvals["gini"] < 0.05
    True
    """
    iterations = check_iterations(iterations)
    metrics = check_metrics(metrics)
    x = as_count_vector(x)
    y = as_count_vector(y)
    n_x = int(x.sum())
    n_total = n_x + int(y.sum())
    if n_x == 0 or n_total == n_x:
        raise InvalidInputError(
            "Both groups must have a positive total count, "
            f"had {n_x} and {n_total - n_x}"
        )
    rng = np.random.default_rng(random_state)

    # Clonotypes from different groups are separate things, so they get
    # different labels in the pool.
    pool = RunList.pool(x, y)
    ref = np.abs(compute_metrics(x, metrics) - compute_metrics(y, metrics))
    exceeded = np.zeros(len(metrics), dtype=np.int64)

    for _ in range(iterations):
        # Sorting lets the split read counts straight off the runs
        chosen = np.sort(rng.choice(n_total, size=n_x, replace=False))
        left, right = pool.split_by_sorted_indices(chosen)
        null = np.abs(
            compute_metrics(left.lengths, metrics)
            - compute_metrics(right.lengths, metrics)
        )
        exceeded += null >= ref - _TOLERANCE

    pvals = (exceeded + 1) / (iterations + 1)
    logger.debug(
        "Permutation test on groups of %d and %d cells: %s",
        n_x,
        n_total - n_x,
        dict(zip((m.name for m in metrics), pvals)),
    )
    return pd.Series(pvals, index=[m.name for m in metrics])
