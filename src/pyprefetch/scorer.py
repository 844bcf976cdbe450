"""Cost/benefit scoring of resources against next-state predictions.

Each (prediction, resource) match is scored as::

    decay = exp(-decay_rate * elapsed_seconds)
    cost  = size * latency            (1 when the product is 0 or NaN)
    score = probability * decay / cost
"""

from __future__ import annotations

import logging
import math
from collections.abc import Iterable
from typing import Protocol

from pyprefetch._constants import DEFAULT_DECAY_RATE, MIN_COST
from pyprefetch.models.candidate import ScoredCandidate
from pyprefetch.models.prediction import Prediction
from pyprefetch.state.registry import ResourceRegistry

_logger = logging.getLogger(__name__)


class ResourceMatcher(Protocol):
    """Decides whether a resource belongs to a predicted state."""

    def __call__(self, state: str, url: str) -> bool:
        ...


def substring_match(state: str, url: str) -> bool:
    """Default association: the state string appears inside the URL."""
    return state in url


def compute_score(
    probability: float,
    elapsed_seconds: float,
    size: float,
    latency: float,
    decay_rate: float = DEFAULT_DECAY_RATE,
) -> float:
    """Score a single match; see the module docstring for the formula."""
    decay = math.exp(-decay_rate * elapsed_seconds)
    cost = size * latency
    if cost == 0 or math.isnan(cost):
        cost = MIN_COST
    return (probability * decay) / cost


class Scorer:
    """Ranks registered resources for a list of predictions.

    The scorer only reads the registry. A resource matching several
    predictions yields one candidate per match; they are not merged.
    """

    def __init__(
        self,
        registry: ResourceRegistry,
        *,
        decay_rate: float = DEFAULT_DECAY_RATE,
        matcher: ResourceMatcher = substring_match,
    ) -> None:
        self._registry = registry
        self._decay_rate = decay_rate
        self._matcher = matcher

    def score_resources(self, predictions: Iterable[Prediction]) -> list[ScoredCandidate]:
        """Score every matching resource, highest score first."""
        now = self._registry.now()
        entries = list(self._registry)
        candidates: list[ScoredCandidate] = []

        for prediction in predictions:
            for entry in entries:
                if not self._matcher(prediction.state, entry.url):
                    continue
                # Clock skew must not turn decay into growth.
                elapsed = max(0.0, now - entry.last_accessed)
                score = compute_score(
                    prediction.probability,
                    elapsed,
                    entry.size,
                    entry.latency,
                    self._decay_rate,
                )
                candidates.append(
                    ScoredCandidate(
                        url=entry.url,
                        score=score,
                        state=prediction.state,
                        probability=prediction.probability,
                    )
                )

        candidates.sort(key=lambda c: c.score, reverse=True)
        _logger.debug("Scored %d candidates from %d resources", len(candidates), len(entries))
        return candidates
