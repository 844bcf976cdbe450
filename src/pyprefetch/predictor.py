"""Next-state prediction from observed transition counts."""

from __future__ import annotations

from collections.abc import Mapping

from pyprefetch.models.prediction import Prediction
from pyprefetch.state.transitions import TransitionModel


def rank_transitions(counts: Mapping[str, int]) -> list[Prediction]:
    """Turn destination counts into predictions ordered by probability.

    Equal probabilities keep the insertion order of *counts* (the sort is
    stable), so rankings are reproducible.
    """
    total = sum(counts.values())
    if total <= 0:
        return []
    predictions = [Prediction(state=state, probability=count / total) for state, count in counts.items()]
    predictions.sort(key=lambda p: p.probability, reverse=True)
    return predictions


class Predictor:
    """Reads a :class:`TransitionModel` and ranks likely next states."""

    def __init__(self, model: TransitionModel) -> None:
        self._model = model

    def predict_next(self) -> list[Prediction]:
        """Rank the successors of the current state.

        Returns an empty list before any state was tracked or when the
        current state has no recorded outgoing transitions.
        """
        current = self._model.current_state
        if current is None:
            return []
        return rank_transitions(self._model.transitions(current))
