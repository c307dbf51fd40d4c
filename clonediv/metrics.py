"""
Tags for the diversity metrics a test should compute.
"""

from numbers import Real
from dataclasses import dataclass
from typing import Collection, Tuple, Union

import numpy as np

from .errors import InvalidInputError


@dataclass(frozen=True)
class Gini:
    """The Gini inequality index."""

    @property
    def name(self) -> str:
        return "gini"


@dataclass(frozen=True)
class HillOrder:
    """A Hill number of order ``order``."""

    order: float

    @property
    def name(self) -> str:
        return f"hill{self.order:g}"


Metric = Union[Gini, HillOrder]


def hill_order(order) -> HillOrder:
    if isinstance(order, bool) or not isinstance(order, Real) or np.isnan(order):
        raise InvalidInputError(f"Hill orders must be real numbers, got {order!r}")
    if order < 0:
        raise InvalidInputError(f"Hill orders must be non-negative, got {order!r}")
    return HillOrder(float(order))


def requested_metrics(
    use_gini: bool = True, use_hill: Collection[float] = (0, 1, 2)
) -> Tuple[Metric, ...]:
    """
    Build the set of metrics to compute.

    Parameters
    ----------
    use_gini
        Whether to compute the Gini index.
    use_hill
        Orders of the Hill numbers to compute. Can be empty.

    Returns
    -------
    Tuple of metric tags, Gini first, then Hill numbers in the order given.
    Repeated orders only appear once.

    Example
    -------
    >>> requested_metrics(use_gini=False, use_hill=[0, 0.5])
    (HillOrder(order=0.0), HillOrder(order=0.5))
    """
    metrics = []
    if use_gini:
        metrics.append(Gini())
    for order in use_hill:
        metric = hill_order(order)
        if metric not in metrics:
            metrics.append(metric)
    if not metrics:
        raise InvalidInputError("At least one diversity metric must be requested")
    return tuple(metrics)


def check_metrics(metrics) -> Tuple[Metric, ...]:
    """Validate an explicitly passed collection of metric tags."""
    metrics = tuple(metrics)
    if not metrics:
        raise InvalidInputError("At least one diversity metric must be requested")
    for m in metrics:
        if not isinstance(m, (Gini, HillOrder)):
            raise InvalidInputError(f"Unknown metric {m!r}")
    names = [m.name for m in metrics]
    if len(set(names)) != len(names):
        raise InvalidInputError(f"Metric names must be unique, got {names}")
    return metrics


DEFAULT_METRICS = requested_metrics()
