"""
Running independent tasks, possibly in parallel.
"""

from multiprocessing import Pool
from typing import Callable, Iterable, List, Optional

import numpy as np


def dispatch(
    func: Callable,
    tasks: Iterable,
    nprocs: int = 1,
    map_func: Optional[Callable] = None,
) -> List:
    """
    Apply ``func`` to every task, keeping the order of ``tasks``.

    Parameters
    ----------
    func
        Module level function, so it can be pickled.
    tasks
        Arguments for each call of ``func``.
    nprocs
        Number of processes to use. Ignored if ``map_func`` is passed.
    map_func
        ``map``-like callable to use instead, e.g. ``executor.map`` of a
        ``concurrent.futures`` executor.
    """
    if map_func is not None:
        return list(map_func(func, tasks))
    if nprocs > 1:
        with Pool(nprocs) as p:
            return p.map(func, tasks)
    return list(map(func, tasks))


def spawn_streams(random_state, n: int) -> List[np.random.SeedSequence]:
    """
    Independent seed sequences for ``n`` tasks.

    ``random_state`` can be ``None``, an int, a ``SeedSequence`` or a
    ``Generator``. Passing a ``Generator`` draws a seed from it.
    """
    if isinstance(random_state, np.random.SeedSequence):
        seq = random_state
    elif isinstance(random_state, np.random.Generator):
        seq = np.random.SeedSequence(int(random_state.integers(np.iinfo(np.int64).max)))
    else:
        seq = np.random.SeedSequence(random_state)
    return seq.spawn(n)
