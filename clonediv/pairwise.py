"""
Pairwise tests for differences in clonotype diversity between groups.
"""

import logging
from typing import Collection, Dict, Optional

import numpy as np
import pandas as pd

from .downsample import downsample_counts
from .errors import CloneDivError, ConfigurationError, InvalidInputError
from .metrics import requested_metrics
from .multitest import adjust_pvalues, check_method
from .parallel import dispatch, spawn_streams
from .permute import shuffled_diversity_pvalues
from .utils import as_group_collection, check_iterations

logger = logging.getLogger(__name__)


def test_clonotype_counts_pairwise(
    counts,
    downsample: bool = True,
    down_ncells: Optional[int] = None,
    iterations: int = 2000,
    adj_method: str = "holm",
    use_gini: bool = True,
    use_hill: Collection[float] = (0, 1, 2),
    nprocs: int = 1,
    map_func=None,
    random_state=None,
) -> Dict[str, pd.DataFrame]:
    """
    Test for significant differences in clonotype diversity between groups.

    Every pair of groups is compared with a permutation test (see
    :func:`~clonediv.permute.shuffled_diversity_pvalues`) for each diversity
    index. Within each index, p-values are corrected for multiple testing across
    all pairwise comparisons.

    It is a good idea to downsample so all groups are the same size. Otherwise
    the permutation test is not symmetric, and will only ever be significant if
    the larger group has the larger index.

    Parameters
    ----------
    counts
        Mapping from group to counts per clonotype, or a sequence of counts. Order
        of groups sets the order of rows and columns in the output.
    downsample
        Whether to downsample all groups to the same number of cells first.
    down_ncells
        Number of cells to downsample to. Defaults to the size of the smallest
        group.
    iterations
        Number of permutations per pair of groups.
    adj_method
        Multiple testing correction, see :func:`~clonediv.multitest.adjust_pvalues`.
    use_gini
        Whether to test the Gini index.
    use_hill
        Orders of Hill numbers to test.
    nprocs
        Number of processes to use.
    map_func
        ``map``-like callable to distribute tasks with, instead of ``nprocs``.
    random_state
        Seed or ``numpy.random.SeedSequence``. Each group's comparisons get an
        independent stream derived from it, so results don't depend on how tasks
        are distributed.

    Returns
    -------
    Dict from metric name (``"gini"``, ``"hill0"``, ...) to a ``pd.DataFrame`` of
    adjusted p-values. Rows and columns are groups. Only the lower triangle is
    filled, as the tests do not consider directionality.

    Example
    -------
    >>> out = test_clonotype_counts_pairwise(
            {"a": [10, 0, 0, 0, 0], "b": [2, 2, 2, 2, 2], "c": [4, 3, 2, 1]},
            iterations=500,
            random_state=0,
        )
    >>> out["gini"]
    """
    groups = as_group_collection(counts)
    if len(groups) < 2:
        raise InvalidInputError(
            f"`counts` should contain at least two groups, had {len(groups)}"
        )
    iterations = check_iterations(iterations)
    check_method(adj_method)
    metrics = requested_metrics(use_gini=use_gini, use_hill=use_hill)

    down_stream, *task_streams = spawn_streams(random_state, len(groups) + 1)
    if downsample:
        groups = downsample_counts(groups, down_ncells, random_state=down_stream)
    empty = [k for k, v in groups.items() if v.sum() == 0]
    if empty:
        raise InvalidInputError(f"Groups {empty} contain no cells")

    names = list(groups.keys())
    values = list(groups.values())
    logger.info(
        "Testing %d groups with %d iterations per pair, metrics %s, correction '%s'",
        len(names),
        iterations,
        [m.name for m in metrics],
        adj_method,
    )

    tasks = [
        (names[: i + 1], values[: i + 1], iterations, metrics, task_streams[i])
        for i in range(len(names))
    ]
    res = dispatch(_call_compare_group, tasks, nprocs=nprocs, map_func=map_func)

    all_stat_names = _check_stat_names(res)

    output = {}
    for stat in all_stat_names:
        current = np.full((len(names), len(names)), np.nan)
        for x, results in enumerate(res):
            for y, pvals in enumerate(results):
                current[x, y] = pvals[stat]
        current = adjust_pvalues(current.ravel(), method=adj_method).reshape(current.shape)
        output[stat] = pd.DataFrame(
            current,
            index=pd.Index(names, tupleize_cols=False),
            columns=pd.Index(names, tupleize_cols=False),
        )
    return output


# Not a test, despite the name
test_clonotype_counts_pairwise.__test__ = False


def _check_stat_names(res) -> list:
    """Metric names shared by every result, in order."""
    all_stat_names = None
    for results in res:
        for pvals in results:
            names = list(pvals.index)
            if all_stat_names is None:
                all_stat_names = names
            elif set(names) != set(all_stat_names):
                raise ConfigurationError(
                    f"Comparisons returned different metrics: {all_stat_names} and {names}"
                )
    if all_stat_names is None:
        raise ConfigurationError("No comparisons were returned")
    return all_stat_names


def _call_compare_group(args):
    """Helper function for Pool.map"""
    return _compare_group(*args)


def _compare_group(names, counts, iterations, metrics, seed_seq):
    """Compare the last group in ``counts`` against all earlier groups."""
    x = len(counts) - 1
    rng = np.random.default_rng(seed_seq)
    results = []
    for y in range(x):
        logger.debug("Comparing %r with %r", names[x], names[y])
        try:
            pvals = shuffled_diversity_pvalues(
                counts[x], counts[y], iterations=iterations, metrics=metrics,
                random_state=rng,
            )
        except CloneDivError as e:
            raise type(e)(
                f"Failed comparing group {names[x]!r} with {names[y]!r}: {e}"
            ) from e
        results.append(pvals)
    return results
