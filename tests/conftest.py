from __future__ import annotations

from dataclasses import dataclass

import pytest


@dataclass
class ManualClock:
    """Settable epoch-seconds clock for deterministic decay."""

    now: float = 1_000.0

    def __call__(self) -> float:
        return self.now

    def advance(self, seconds: float) -> None:
        self.now += seconds


@pytest.fixture
def clock() -> ManualClock:
    return ManualClock()
