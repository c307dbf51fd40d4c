# Top level functions
__version__ = "0.1.0"

from .errors import CloneDivError, ConfigurationError, InvalidInputError
from .metrics import DEFAULT_METRICS, Gini, HillOrder, requested_metrics
from .diversity import gini, hill_numbers, compute_metrics
from .runs import RunList
from .permute import shuffled_diversity_pvalues
from .downsample import downsample_counts
from .multitest import adjust_pvalues
from .pairwise import test_clonotype_counts_pairwise
from .summary import summarize_clonotype_counts
