"""
Run-length encoded label sequences.

A pool of cells from two groups is stored as runs of labels, one run per
clonotype. Taking a sorted subset of positions from such a sequence yields runs
which are a sub-partition of the original runs, so the counts per clonotype on
either side of a split can be read off in one pass without re-tabulating.
"""

from typing import Tuple

import numba
import numpy as np

from .utils import as_count_vector


class RunList(object):
    """
    A sequence of labels, stored as runs.

    Attributes
    ----------
    labels : numpy.ndarray[int]
        Label of each run.
    lengths : numpy.ndarray[int]
        Length of each run. Zero length runs are allowed.
    """

    def __init__(self, labels, lengths):
        labels = np.asarray(labels, dtype=np.int64)
        lengths = as_count_vector(lengths)
        if labels.shape != lengths.shape:
            raise ValueError(
                f"`labels` and `lengths` must have the same shape, had {labels.shape} "
                f"and {lengths.shape}"
            )
        self.labels = labels
        self.lengths = lengths

    @classmethod
    def pool(cls, *count_vectors) -> "RunList":
        """
        Pool several count vectors into one sequence.

        Every category of every vector gets its own label, numbered consecutively
        across vectors, so categories from different vectors are never merged.

        Example
        -------
        >>> RunList.pool([2, 1], [3]).decode()
        array([0, 0, 1, 2, 2, 2])
        """
        lengths = np.concatenate(
            [as_count_vector(c) for c in count_vectors] or [np.zeros(0, np.int64)]
        )
        return cls(np.arange(len(lengths)), lengths)

    @property
    def total(self) -> int:
        return int(self.lengths.sum())

    def __len__(self):
        return len(self.lengths)

    def __repr__(self):
        return f"<RunList n_runs={len(self)}, total={self.total}>"

    def __eq__(self, other):
        if not isinstance(other, RunList):
            return NotImplemented
        return np.array_equal(self.labels, other.labels) and np.array_equal(
            self.lengths, other.lengths
        )

    def decode(self) -> np.ndarray:
        return np.repeat(self.labels, self.lengths)

    def split_by_sorted_indices(self, indices) -> Tuple["RunList", "RunList"]:
        """
        Split into the runs at ``indices`` and the runs everywhere else.

        Parameters
        ----------
        indices
            Ascending, unique positions into the decoded sequence.

        Returns
        -------
        Pair of ``RunList``, the selected positions and their complement. Both keep
        the order of labels and contain no empty runs.
        """
        indices = np.asarray(indices, dtype=np.int64)
        if np.any(np.diff(indices) <= 0):
            raise ValueError("`indices` must be sorted and unique")
        total = self.total
        if len(indices) and (indices[0] < 0 or indices[-1] >= total):
            raise ValueError(f"`indices` must lie within [0, {total})")
        left_lengths = _split_runs(self.lengths, indices)
        right_lengths = self.lengths - left_lengths
        return (
            _nonempty(self.labels, left_lengths),
            _nonempty(self.labels, right_lengths),
        )


def _nonempty(labels, lengths) -> RunList:
    keep = lengths > 0
    return RunList(labels[keep], lengths[keep])


@numba.njit(cache=True)
def _split_runs(lengths: np.ndarray, indices: np.ndarray) -> np.ndarray:
    """Number of positions in ``indices`` falling within each run."""
    selected = np.zeros(len(lengths), dtype=np.int64)
    run = -1
    run_end = 0
    prev = -1
    for idx in indices:
        if idx <= prev:
            raise ValueError("indices must be sorted and unique")
        prev = idx
        while idx >= run_end:
            run += 1
            run_end += lengths[run]
        selected[run] += 1
    return selected
