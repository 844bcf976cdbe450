from __future__ import annotations

import math

import pytest

from pyprefetch.models.prediction import Prediction
from pyprefetch.scorer import Scorer, compute_score, substring_match
from pyprefetch.state.registry import ResourceRegistry


def test_compute_score_formula() -> None:
    score = compute_score(0.75, 10.0, 500, 200, decay_rate=0.1)

    assert score == pytest.approx(0.75 * math.exp(-1) / 100_000, rel=0.01)
    assert score == pytest.approx(2.76e-6, rel=0.01)


def test_compute_score_floors_zero_cost() -> None:
    assert compute_score(0.5, 0.0, 0, 100) == pytest.approx(0.5)
    assert compute_score(0.5, 0.0, 100, 0) == pytest.approx(0.5)


def test_compute_score_floors_undefined_cost() -> None:
    # inf * 0 is NaN; it must not leak into the ranking.
    assert compute_score(0.5, 0.0, float("inf"), 0) == pytest.approx(0.5)


def test_zero_decay_rate_ignores_elapsed_time() -> None:
    assert compute_score(1.0, 1e9, 1, 1, decay_rate=0.0) == 1.0


def test_substring_match() -> None:
    assert substring_match("/products", "/api/products")
    assert not substring_match("/about", "/api/products")


def test_score_resources_scenario(clock) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("/api/products", size=500, latency=200)
    clock.advance(10)

    scorer = Scorer(registry, decay_rate=0.1)
    candidates = scorer.score_resources(
        [Prediction(state="/products", probability=0.75), Prediction(state="/about", probability=0.25)]
    )

    assert len(candidates) == 1
    assert candidates[0].url == "/api/products"
    assert candidates[0].state == "/products"
    assert candidates[0].score == pytest.approx(2.76e-6, rel=0.01)


def test_scores_sorted_descending(clock) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("/big/page", size=1000, latency=1000)
    registry.add_resource("/small/page", size=1, latency=1)
    registry.add_resource("/medium/page", size=10, latency=10)

    candidates = Scorer(registry).score_resources([Prediction(state="page", probability=1.0)])

    assert [c.url for c in candidates] == ["/small/page", "/medium/page", "/big/page"]


def test_resource_matching_multiple_predictions_is_not_deduplicated(clock) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("/shop/products/list")

    candidates = Scorer(registry).score_resources(
        [Prediction(state="/shop", probability=0.6), Prediction(state="/products", probability=0.4)]
    )

    assert [c.url for c in candidates] == ["/shop/products/list", "/shop/products/list"]
    assert [c.state for c in candidates] == ["/shop", "/products"]


def test_no_matches_yields_empty_list(clock) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("/api/users")

    assert Scorer(registry).score_resources([Prediction(state="/products", probability=1.0)]) == []


@pytest.mark.parametrize(
    ("size", "latency", "elapsed"),
    [
        (0, 0, 0.0),
        (0, 500, 3.0),
        (1e6, 1e6, 1e6),
        (100, 100, 1e12),
        (1e-9, 1e-9, 0.0),
        (float("inf"), 0, 0.0),
        (0, float("inf"), 5.0),
        (float("inf"), float("inf"), 0.0),
    ],
)
def test_scores_are_finite_and_non_negative(clock, size: float, latency: float, elapsed: float) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("/r", size=size, latency=latency)
    clock.advance(elapsed)

    candidates = Scorer(registry).score_resources([Prediction(state="/r", probability=1.0)])

    assert len(candidates) == 1
    assert math.isfinite(candidates[0].score)
    assert candidates[0].score >= 0.0


def test_clock_going_backwards_does_not_amplify(clock) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("/r", size=1, latency=1)
    clock.advance(-1e6)

    candidates = Scorer(registry).score_resources([Prediction(state="/r", probability=0.5)])

    assert candidates[0].score == pytest.approx(0.5)


def test_custom_matcher(clock) -> None:
    registry = ResourceRegistry(clock=clock)
    registry.add_resource("https://cdn.example/products.json")
    registry.add_resource("https://cdn.example/products-archive.json")

    def exact_stem(state: str, url: str) -> bool:
        return url.rsplit("/", 1)[-1] == f"{state}.json"

    candidates = Scorer(registry, matcher=exact_stem).score_resources([Prediction(state="products", probability=1.0)])

    assert [c.url for c in candidates] == ["https://cdn.example/products.json"]
