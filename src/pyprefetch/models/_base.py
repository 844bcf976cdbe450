"""Base model shared by pyprefetch value objects.

Every model is frozen: stores hand out immutable values and replace
them wholesale (``model_copy(update=...)``) instead of mutating them
in place.
"""

from __future__ import annotations

from pydantic import BaseModel, ConfigDict


class PrefetchBaseModel(BaseModel):
    """Frozen, strict base for pyprefetch models."""

    model_config = ConfigDict(
        frozen=True,
        extra="forbid",
        validate_default=True,
    )
