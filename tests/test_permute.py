import numpy as np
import pandas as pd
import pytest

from clonediv import (
    Gini,
    HillOrder,
    InvalidInputError,
    requested_metrics,
    shuffled_diversity_pvalues,
)


@pytest.fixture(params=[0, 1, 2])
def seed(request):
    return request.param


def test_index_and_range(seed):
    pvals = shuffled_diversity_pvalues(
        [5, 3, 1, 1], [2, 2, 2, 1, 1, 1], iterations=200, random_state=seed
    )
    assert list(pvals.index) == ["gini", "hill0", "hill1", "hill2"]
    assert np.all(pvals > 0)
    assert np.all(pvals <= 1)
    # p-values lie on the grid of possible permutation p-values
    scaled = pvals.values * 201
    np.testing.assert_allclose(scaled, np.round(scaled))


def test_detects_gini_difference(seed):
    pvals = shuffled_diversity_pvalues(
        [10, 0, 0, 0, 0], [2, 2, 2, 2, 2], iterations=2000, random_state=seed
    )
    assert pvals["gini"] < 0.05


def test_identical_groups():
    pvals = shuffled_diversity_pvalues([5, 5, 5, 5], [5, 5, 5, 5], iterations=500)
    np.testing.assert_allclose(pvals.values, 1)


def test_duplicated_group(seed):
    counts = pd.Series([12, 5, 3, 1, 1, 1], index=list("abcdef"))
    pvals = shuffled_diversity_pvalues(
        counts, counts.copy(), iterations=1000, random_state=seed
    )
    assert np.all(pvals > 0.5)


def test_hill_reference_uses_both_groups():
    # Richness of 1 vs richness of 20 can't be matched by most permutations
    pvals = shuffled_diversity_pvalues(
        [20], [1] * 20, iterations=500, random_state=0,
        metrics=requested_metrics(use_gini=False, use_hill=[0]),
    )
    assert pvals["hill0"] < 0.05


def test_minimum_pvalue():
    # The observed Gini difference is never reached, so only the +1 remains
    pvals = shuffled_diversity_pvalues(
        [10, 0, 0, 0, 0], [2, 2, 2, 2, 2], iterations=99, metrics=[Gini()],
        random_state=0,
    )
    assert pvals["gini"] == pytest.approx(1 / 100)


def test_reproducible():
    args = ([6, 2, 1, 1], [3, 3, 2, 2])
    kwargs = dict(iterations=300, random_state=42)
    pd.testing.assert_series_equal(
        shuffled_diversity_pvalues(*args, **kwargs),
        shuffled_diversity_pvalues(*args, **kwargs),
    )
    rng = np.random.default_rng(42)
    pd.testing.assert_series_equal(
        shuffled_diversity_pvalues(*args, iterations=300, random_state=rng),
        shuffled_diversity_pvalues(*args, **kwargs),
    )


def test_custom_metrics():
    pvals = shuffled_diversity_pvalues(
        [4, 3, 2], [3, 3, 3], iterations=50, metrics=[HillOrder(0.5)]
    )
    assert list(pvals.index) == ["hill0.5"]


@pytest.mark.parametrize(
    "x,y,kwargs",
    [
        ([0, 0], [1, 2], {}),
        ([1, 2], [], {}),
        ([1, 2], [3], {"iterations": 0}),
        ([1, 2], [3], {"iterations": -5}),
        ([1, 2], [3], {"iterations": 2.5}),
        ([1, 2], [3], {"metrics": []}),
        ([1, -2], [3], {}),
        ([1, 2.5], [3], {}),
    ],
    ids=[
        "zero_total",
        "empty",
        "zero_iterations",
        "negative_iterations",
        "float_iterations",
        "no_metrics",
        "negative_counts",
        "fractional_counts",
    ],
)
def test_invalid_input(x, y, kwargs):
    with pytest.raises(InvalidInputError):
        shuffled_diversity_pvalues(x, y, **kwargs)


def test_more_iterations_less_variance():
    def spread(iterations):
        pvals = [
            shuffled_diversity_pvalues(
                [6, 3, 2, 1], [3, 3, 3, 3], iterations=iterations, metrics=[Gini()],
                random_state=seed,
            )["gini"]
            for seed in range(30)
        ]
        return np.var(pvals, ddof=1)

    assert spread(2000) < spread(50)


def test_gini_zero_padding():
    # Zeros count towards the observed Gini index, but never appear in permuted groups
    padded = shuffled_diversity_pvalues(
        [5, 5, 0, 0, 0, 0], [5, 5], iterations=500, metrics=[Gini()], random_state=0
    )
    assert padded["gini"] < 0.05
    stripped = shuffled_diversity_pvalues(
        [5, 5], [5, 5], iterations=500, metrics=[Gini()], random_state=0
    )
    assert stripped["gini"] == 1
