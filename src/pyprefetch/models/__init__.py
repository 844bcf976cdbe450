"""Typed models for pyprefetch predictions, resources and reports."""

from pyprefetch.models.candidate import ScoredCandidate
from pyprefetch.models.prediction import Prediction
from pyprefetch.models.report import OptimizeStatus, PrefetchReport
from pyprefetch.models.resource import ResourceEntry

__all__ = [
    "OptimizeStatus",
    "Prediction",
    "PrefetchReport",
    "ResourceEntry",
    "ScoredCandidate",
]
