"""
Downsampling groups of cells to a common size.

Permutation tests between groups of different sizes are not symmetric, so
groups are usually downsampled to the same number of cells before testing.
"""

import logging
from typing import Dict, Hashable, Optional

import numpy as np

from .errors import InvalidInputError
from .utils import as_group_collection

logger = logging.getLogger(__name__)


def downsample_counts(
    counts, ncells: Optional[int] = None, random_state=None
) -> Dict[Hashable, np.ndarray]:
    """
    Downsample each group to the same total number of cells.

    Cells are drawn without replacement, so each group is a random subset of its
    original cells. Clonotypes keep their positions, and may end up with a count
    of zero.

    Parameters
    ----------
    counts
        Mapping from group to counts per clonotype, or a sequence of counts.
    ncells
        Number of cells to keep per group. Defaults to the size of the smallest
        group.
    random_state
        Seed, ``numpy.random.SeedSequence`` or ``numpy.random.Generator``.

    Returns
    -------
    Dict from group to downsampled counts, in input order.

    Example
    -------
    >>> down = downsample_counts({"a": [5, 5], "b": [1, 2, 3]}, random_state=0)
    >>> {k: v.sum() for k, v in down.items()}
    {'a': 6, 'b': 6}
    """
    groups = as_group_collection(counts)
    totals = {k: int(v.sum()) for k, v in groups.items()}
    if ncells is None:
        if not totals:
            return {}
        ncells = min(totals.values())
    elif isinstance(ncells, (bool, np.bool_)) or not isinstance(
        ncells, (int, np.integer)
    ):
        raise InvalidInputError(f"`ncells` must be an integer, got {ncells!r}")
    if ncells < 0:
        raise InvalidInputError(f"`ncells` must be non-negative, got {ncells}")
    too_small = [k for k, t in totals.items() if t < ncells]
    if too_small:
        raise InvalidInputError(
            f"Can't downsample to {ncells} cells, groups {too_small} have fewer cells"
        )

    rng = np.random.default_rng(random_state)
    out = {}
    for k, v in groups.items():
        if totals[k] == ncells:
            out[k] = v.copy()
        else:
            out[k] = rng.multivariate_hypergeometric(v, ncells)
    logger.info("Downsampled %d groups to %d cells", len(out), ncells)
    return out
