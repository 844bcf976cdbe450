from __future__ import annotations

import math

import pytest

from pyprefetch.predictor import Predictor, rank_transitions
from pyprefetch.state.transitions import TransitionModel


def _home_history() -> TransitionModel:
    model = TransitionModel()
    model.fit_from_sequence(
        ["/home", "/products", "/home", "/products", "/home", "/products", "/home", "/about", "/home"]
    )
    return model


def test_predict_next_empty_before_tracking() -> None:
    assert Predictor(TransitionModel()).predict_next() == []


def test_predict_next_empty_without_outgoing_transitions() -> None:
    model = TransitionModel()
    model.fit_from_sequence(["/home", "/products"])

    assert Predictor(model).predict_next() == []


def test_predict_next_ranks_by_probability() -> None:
    predictions = Predictor(_home_history()).predict_next()

    assert [p.state for p in predictions] == ["/products", "/about"]
    assert predictions[0].probability == pytest.approx(0.75)
    assert predictions[1].probability == pytest.approx(0.25)


@pytest.mark.parametrize(
    "counts",
    [
        {"a": 1},
        {"a": 1, "b": 2, "c": 3},
        {"a": 7, "b": 11, "c": 13, "d": 17, "e": 19},
        {str(i): i + 1 for i in range(50)},
    ],
)
def test_probabilities_sum_to_one(counts: dict[str, int]) -> None:
    predictions = rank_transitions(counts)

    assert math.isclose(sum(p.probability for p in predictions), 1.0, abs_tol=1e-9)
    assert all(0.0 <= p.probability <= 1.0 for p in predictions)


def test_ties_keep_insertion_order() -> None:
    predictions = rank_transitions({"first": 2, "second": 2, "top": 5, "third": 2})

    assert [p.state for p in predictions] == ["top", "first", "second", "third"]


def test_rank_transitions_empty_counts() -> None:
    assert rank_transitions({}) == []
