"""pyprefetch - Markov-driven predictive prefetching for asyncio."""

from importlib.metadata import PackageNotFoundError, version

try:
    __version__ = version("pyprefetch")
except PackageNotFoundError:
    __version__ = "0+local"
from pyprefetch._transport import Fetcher, HttpFetcher
from pyprefetch.client import PredictivePrefetcher
from pyprefetch.config import PrefetchConfig
from pyprefetch.exceptions import (
    MalformedCandidateError,
    PrefetchConfigError,
    PrefetchError,
    PrefetchTransportError,
)
from pyprefetch.models import (
    OptimizeStatus,
    Prediction,
    PrefetchReport,
    ResourceEntry,
    ScoredCandidate,
)
from pyprefetch.predictor import Predictor, rank_transitions
from pyprefetch.scorer import ResourceMatcher, Scorer, compute_score, substring_match
from pyprefetch.state.registry import ResourceRegistry
from pyprefetch.state.transitions import TransitionModel

__all__ = [
    "__version__",
    "Fetcher",
    "HttpFetcher",
    "MalformedCandidateError",
    "OptimizeStatus",
    "Prediction",
    "PredictivePrefetcher",
    "Predictor",
    "PrefetchConfig",
    "PrefetchConfigError",
    "PrefetchError",
    "PrefetchReport",
    "PrefetchTransportError",
    "ResourceEntry",
    "ResourceMatcher",
    "ResourceRegistry",
    "ScoredCandidate",
    "Scorer",
    "TransitionModel",
    "compute_score",
    "rank_transitions",
    "substring_match",
]
