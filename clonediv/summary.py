"""
Descriptive diversity indices for each group.
"""

from typing import Collection, Optional

import pandas as pd

from .diversity import compute_metrics
from .downsample import downsample_counts
from .errors import InvalidInputError
from .metrics import requested_metrics
from .utils import as_group_collection


def summarize_clonotype_counts(
    counts,
    use_gini: bool = True,
    use_hill: Collection[float] = (0, 1, 2),
    downsample: bool = True,
    down_ncells: Optional[int] = None,
    random_state=None,
) -> pd.DataFrame:
    """
    Compute diversity indices for each group.

    Parameters
    ----------
    counts
        Mapping from group to counts per clonotype, or a sequence of counts.
    use_gini
        Whether to compute the Gini index.
    use_hill
        Orders of Hill numbers to compute.
    downsample
        Whether to downsample all groups to the same number of cells first. Most
        diversity indices depend on the number of cells, so this makes groups
        comparable.
    down_ncells
        Number of cells to downsample to. Defaults to the size of the smallest
        group.
    random_state
        Seed, ``numpy.random.SeedSequence`` or ``numpy.random.Generator`` used for
        downsampling.

    Returns
    -------
    ``pd.DataFrame`` with one row per group and one column per metric.

    Example
    -------
    >>> summarize_clonotype_counts({"a": [10, 0, 0], "b": [4, 3, 3]}, use_hill=[0])
           gini  hill0
    a  0.666667    1.0
    b  0.066667    3.0
    """
    groups = as_group_collection(counts)
    metrics = requested_metrics(use_gini=use_gini, use_hill=use_hill)
    if downsample:
        groups = downsample_counts(groups, down_ncells, random_state=random_state)
    rows = []
    for k, v in groups.items():
        if v.sum() == 0:
            raise InvalidInputError(f"Group {k!r} contains no cells")
        rows.append(compute_metrics(v, metrics))
    return pd.DataFrame(
        rows,
        index=pd.Index(list(groups.keys()), tupleize_cols=False),
        columns=[m.name for m in metrics],
    )
