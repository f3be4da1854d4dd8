from __future__ import annotations

from importlib.metadata import PackageNotFoundError
from importlib.metadata import version as _pkg_version

# Version
try:
    __version__ = _pkg_version("primeform")
except PackageNotFoundError:
    __version__ = "0+unknown"

# Public API re-exports
from .classify import classify, explain
from .form import DEFAULT_FORM, QuadraticForm, compute_candidate
from .output_manager import RecordWriter, read_records
from .primality import DEFAULT_ROUNDS, PrimalityEngine, is_prime
from .records import GERMAIN, PRIME, SAFE, SearchRecord, Tags
from .search import SearchSummary, iter_records, iter_triples, search
from .seeds import DEFAULT_SEEDS

__all__ = [
    "DEFAULT_FORM",
    "DEFAULT_ROUNDS",
    "DEFAULT_SEEDS",
    "GERMAIN",
    "PRIME",
    "SAFE",
    "PrimalityEngine",
    "QuadraticForm",
    "RecordWriter",
    "SearchRecord",
    "SearchSummary",
    "Tags",
    "__version__",
    "classify",
    "compute_candidate",
    "explain",
    "is_prime",
    "iter_records",
    "iter_triples",
    "read_records",
    "search",
]
