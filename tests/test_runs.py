import numpy as np
import pytest

from clonediv import RunList
from clonediv.runs import _split_runs


def test_pool_labels_are_unique():
    pool = RunList.pool([2, 1], [3, 0, 1])
    np.testing.assert_array_equal(pool.labels, np.arange(5))
    np.testing.assert_array_equal(pool.lengths, [2, 1, 3, 0, 1])
    assert pool.total == 7
    assert len(pool) == 5
    np.testing.assert_array_equal(pool.decode(), [0, 0, 1, 2, 2, 2, 4])


def test_split_matches_decoded():
    rng = np.random.default_rng(0)
    pool = RunList.pool(rng.integers(0, 5, 20), rng.integers(0, 5, 15))
    decoded = pool.decode()
    for _ in range(20):
        chosen = np.sort(rng.choice(pool.total, size=pool.total // 3, replace=False))
        left, right = pool.split_by_sorted_indices(chosen)
        mask = np.zeros(pool.total, dtype=bool)
        mask[chosen] = True
        np.testing.assert_array_equal(left.decode(), decoded[mask])
        np.testing.assert_array_equal(right.decode(), decoded[~mask])
        assert np.all(left.lengths > 0)
        assert np.all(right.lengths > 0)
        assert left.total + right.total == pool.total


def test_split_drops_empty_runs():
    pool = RunList.pool([3, 0], [2])
    left, right = pool.split_by_sorted_indices([0, 1, 2])
    assert left == RunList([0], [3])
    assert right == RunList([2], [2])


@pytest.mark.parametrize(
    "indices", [[3, 1], [1, 1], [-1], [7]], ids=["unsorted", "repeated", "negative", "too_large"]
)
def test_split_bad_indices(indices):
    pool = RunList.pool([2, 1], [3])
    with pytest.raises(ValueError):
        pool.split_by_sorted_indices(indices)


def test_split_runs_kernel():
    lengths = np.array([2, 0, 3, 1], dtype=np.int64)
    counts = _split_runs(lengths, np.array([1, 2, 4, 5], dtype=np.int64))
    np.testing.assert_array_equal(counts, [1, 0, 2, 1])


def test_split_unsorted_checked_before_kernel():
    # Range check only looks at the ends, so a large middle index must be caught first
    pool = RunList.pool([2, 1], [3])
    with pytest.raises(ValueError, match="sorted"):
        pool.split_by_sorted_indices([0, 10 ** 6, 1])
