from collections.abc import Mapping
from typing import Dict, Hashable

import numpy as np
import pandas as pd

from .errors import InvalidInputError


def as_count_vector(counts, name=None) -> np.ndarray:
    """Coerce ``counts`` to a 1d array of non-negative integers."""
    what = "Counts" if name is None else f"Counts for group {name!r}"
    if isinstance(counts, pd.Series):
        counts = counts.values
    arr = np.asarray(counts)
    if arr.ndim != 1:
        raise InvalidInputError(f"{what} must be one dimensional, had shape {arr.shape}")
    if arr.size == 0:
        return np.zeros(0, dtype=np.int64)
    if arr.dtype == bool or not np.issubdtype(arr.dtype, np.number):
        raise InvalidInputError(f"{what} must be numeric, got dtype {arr.dtype}")
    if not np.all(np.isfinite(arr)) or np.any(arr != np.round(arr)):
        raise InvalidInputError(f"{what} must be whole numbers")
    if np.any(arr < 0):
        raise InvalidInputError(f"{what} must be non-negative")
    return arr.astype(np.int64)


def as_group_collection(counts) -> Dict[Hashable, np.ndarray]:
    """
    Coerce a collection of groups to an ordered dict of count vectors.

    Parameters
    ----------
    counts
        Either a mapping from group name to counts, or a sequence of counts, in
        which case groups are named by position.
    """
    if isinstance(counts, Mapping):
        items = counts.items()
    elif isinstance(counts, (str, bytes, np.ndarray, pd.Series)):
        raise InvalidInputError(
            "`counts` must be a mapping or sequence of count vectors, "
            f"got {type(counts).__name__}"
        )
    else:
        items = enumerate(counts)
    return {k: as_count_vector(v, name=k) for k, v in items}


def check_iterations(iterations) -> int:
    if isinstance(iterations, (bool, np.bool_)) or not isinstance(
        iterations, (int, np.integer)
    ):
        raise InvalidInputError(
            f"`iterations` must be a positive integer, got {iterations!r}"
        )
    if iterations <= 0:
        raise InvalidInputError(
            f"`iterations` must be a positive integer, got {iterations}"
        )
    return int(iterations)
