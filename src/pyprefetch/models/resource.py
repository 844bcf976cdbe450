"""Registered resource metadata."""

from __future__ import annotations

from pydantic import Field

from pyprefetch._constants import DEFAULT_RESOURCE_LATENCY, DEFAULT_RESOURCE_SIZE
from pyprefetch.models._base import PrefetchBaseModel


class ResourceEntry(PrefetchBaseModel):
    """Metadata the scorer needs to weigh a resource.

    ``size`` and ``latency`` are deliberately unconstrained: zero and
    negative values are stored as given and only a zero cost is
    floored at scoring time.
    """

    url: str
    size: float = DEFAULT_RESOURCE_SIZE
    latency: float = DEFAULT_RESOURCE_LATENCY
    last_accessed: float = Field(..., description="Epoch seconds of the last registration or fetch")
