"""Next-state prediction model."""

from __future__ import annotations

from pydantic import Field

from pyprefetch.models._base import PrefetchBaseModel


class Prediction(PrefetchBaseModel):
    """A candidate next state with its transition probability."""

    state: str = Field(..., description="Predicted next state")
    probability: float = Field(..., ge=0.0, le=1.0)
