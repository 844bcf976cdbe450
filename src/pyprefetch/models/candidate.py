"""Scored prefetch candidate model."""

from __future__ import annotations

from pyprefetch.models._base import PrefetchBaseModel


class ScoredCandidate(PrefetchBaseModel):
    """One (prediction, resource) pairing with its admission score.

    ``state`` and ``probability`` record which prediction produced the
    pairing; a resource matching several predictions appears once per
    prediction.
    """

    url: str
    score: float
    state: str = ""
    probability: float = 0.0
