"""First-order Markov transition counts over observed states."""

from __future__ import annotations

import copy
import logging
from collections.abc import Iterable

_logger = logging.getLogger(__name__)


class TransitionModel:
    """Counts observed ``source -> destination`` state transitions.

    The table is a two-level mapping ``{source: {destination: count}}``.
    Counts are only ever incremented; a stored count is always >= 1.
    Time-based relevance is applied downstream by the scorer, never to
    the stored counts.

    ``event_type`` is accepted by :meth:`track` as a caller tag but does
    not partition the counts: every event type feeds the same chain.
    """

    def __init__(self) -> None:
        self._table: dict[str, dict[str, int]] = {}
        self._current: str | None = None

    @property
    def current_state(self) -> str | None:
        """The most recently tracked state, or ``None`` before any event."""
        return self._current

    def track(self, event_type: str, state: str) -> None:
        """Record a move to *state* and make it the current state.

        A transition is counted only when a current state exists and
        differs from *state*; revisiting the current state adds no
        self-loop edge.
        """
        previous = self._current
        if previous is not None and previous != state:
            destinations = self._table.setdefault(previous, {})
            destinations[state] = destinations.get(state, 0) + 1
            _logger.debug(
                "Transition %s -> %s (%s), count=%d",
                previous,
                state,
                event_type,
                destinations[state],
            )
        self._current = state

    def fit_from_sequence(self, states: Iterable[str], *, event_type: str = "replay") -> None:
        """Replay a historical sequence of states in order."""
        for state in states:
            self.track(event_type, state)

    def transitions(self, source: str) -> dict[str, int]:
        """Return a copy of the outgoing counts recorded for *source*."""
        return dict(self._table.get(source, {}))

    def snapshot(self) -> dict[str, dict[str, int]]:
        """Return a deep copy of the whole transition table."""
        return copy.deepcopy(self._table)

    def transition_count(self) -> int:
        """Total number of transitions observed."""
        return sum(sum(destinations.values()) for destinations in self._table.values())

    def reset(self) -> None:
        """Forget every count and the current state."""
        self._table.clear()
        self._current = None

    def __len__(self) -> int:
        return len(self._table)
