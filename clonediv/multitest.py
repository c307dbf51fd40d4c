"""
Multiple testing correction of p-values.
"""

import numpy as np
from statsmodels.stats.multitest import multipletests

from .errors import ConfigurationError

# Names used by R's p.adjust, mapped to their statsmodels equivalents
_ALIASES = {
    "hochberg": "simes-hochberg",
    "BH": "fdr_bh",
    "fdr": "fdr_bh",
    "BY": "fdr_by",
}
_METHODS = {
    "bonferroni",
    "sidak",
    "holm-sidak",
    "holm",
    "simes-hochberg",
    "hommel",
    "fdr_bh",
    "fdr_by",
    "fdr_tsbh",
    "fdr_tsbky",
}


def check_method(method: str) -> str:
    """Resolve ``method`` to a statsmodels method name, or ``"none"``."""
    if not isinstance(method, str):
        raise ConfigurationError(f"Correction method must be a string, got {method!r}")
    method = _ALIASES.get(method, method)
    if method != "none" and method not in _METHODS:
        known = sorted(_METHODS | set(_ALIASES) | {"none"}, key=str.lower)
        raise ConfigurationError(
            f"Unknown correction method '{method}', must be one of {known}"
        )
    return method


def adjust_pvalues(pvalues, method: str = "holm") -> np.ndarray:
    """
    Correct p-values for multiple testing.

    Parameters
    ----------
    pvalues
        Raw p-values. ``NaN`` entries are kept as is and don't count towards the
        number of tests.
    method
        Either a method accepted by ``statsmodels.stats.multitest.multipletests``
        or one of R's ``p.adjust`` names (``"holm"``, ``"hochberg"``, ``"hommel"``,
        ``"bonferroni"``, ``"BH"``, ``"fdr"``, ``"BY"``, ``"none"``).

    Returns
    -------
    Adjusted p-values, in the same order as ``pvalues``.

    Example
    -------
    >>> adjust_pvalues([0.01, 0.02, 0.5], method="bonferroni")
    array([0.03, 0.06, 1.  ])
    """
    method = check_method(method)
    pvalues = np.asarray(pvalues, dtype=float)
    out = pvalues.copy()
    mask = ~np.isnan(pvalues)
    if method == "none" or not mask.any():
        return out
    _, corrected, _, _ = multipletests(pvalues[mask], method=method)
    out[mask] = corrected
    return out
