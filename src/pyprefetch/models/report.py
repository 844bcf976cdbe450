"""Outcome of an optimize/prefetch pass."""

from __future__ import annotations

from enum import StrEnum

from pydantic import Field

from pyprefetch.models._base import PrefetchBaseModel
from pyprefetch.models.candidate import ScoredCandidate
from pyprefetch.models.prediction import Prediction


class OptimizeStatus(StrEnum):
    INSUFFICIENT_DATA = "insufficient_data"
    NO_MATCHING_RESOURCES = "no_matching_resources"
    PREFETCHED = "prefetched"


class PrefetchReport(PrefetchBaseModel):
    """What an ``optimize()`` or ``prefetch()`` call did."""

    status: OptimizeStatus
    predictions: list[Prediction] = Field(default_factory=list)
    candidates: list[ScoredCandidate] = Field(default_factory=list)
    dispatched: list[str] = Field(default_factory=list, description="URLs a fetch was issued for")
    fetched: list[str] = Field(default_factory=list, description="URLs fetched successfully")
    failed: dict[str, str] = Field(default_factory=dict, description="URL -> failure message")

    @property
    def ok(self) -> bool:
        """Whether every dispatched fetch succeeded."""
        return not self.failed
