"""High-level async predictive prefetcher."""

from __future__ import annotations

import asyncio
import logging
import time
from collections.abc import Callable, Mapping, Sequence
from typing import Any

import aiohttp
from pydantic import ValidationError

from pyprefetch._transport import Fetcher, HttpFetcher
from pyprefetch.config import PrefetchConfig
from pyprefetch.exceptions import MalformedCandidateError, PrefetchError
from pyprefetch.models.candidate import ScoredCandidate
from pyprefetch.models.prediction import Prediction
from pyprefetch.models.report import OptimizeStatus, PrefetchReport
from pyprefetch.models.resource import ResourceEntry
from pyprefetch.predictor import Predictor
from pyprefetch.scorer import ResourceMatcher, Scorer, substring_match
from pyprefetch.state.registry import ResourceRegistry
from pyprefetch.state.transitions import TransitionModel

_logger = logging.getLogger(__name__)


def _coerce_candidate(candidate: Any) -> ScoredCandidate:
    """Accept a :class:`ScoredCandidate` or a mapping with at least ``url``."""
    if isinstance(candidate, ScoredCandidate):
        result = candidate
    elif isinstance(candidate, Mapping):
        try:
            result = ScoredCandidate(
                url=candidate["url"],
                score=candidate.get("score", 0.0),
                state=candidate.get("state", ""),
                probability=candidate.get("probability", 0.0),
            )
        except (KeyError, ValidationError) as exc:
            raise MalformedCandidateError(f"Invalid candidate {candidate!r}: {exc}") from exc
    else:
        raise MalformedCandidateError(f"Unsupported candidate type: {type(candidate).__name__}")

    if not result.url:
        raise MalformedCandidateError("Candidate has an empty url")
    return result


class PredictivePrefetcher:
    """Predicts the next navigation target and prefetches its resources.

    Usage::

        async with PredictivePrefetcher(PrefetchConfig(max_prefetch=2)) as prefetcher:
            prefetcher.add_resource("/api/products", size=500, latency=200)
            prefetcher.track("navigate", "/home")
            prefetcher.track("navigate", "/products")
            prefetcher.track("navigate", "/home")
            report = await prefetcher.optimize()

    One instance holds one tracking session. ``track`` and
    ``add_resource`` are plain synchronous calls; only fetching is async.
    Calls to ``track`` while ``optimize()`` is awaiting fetches are not
    synchronized: the last tracked state wins.
    """

    def __init__(
        self,
        config: PrefetchConfig | None = None,
        *,
        session: aiohttp.ClientSession | None = None,
        fetcher: Fetcher | None = None,
        matcher: ResourceMatcher = substring_match,
        clock: Callable[[], float] = time.time,
    ) -> None:
        self._config = config if config is not None else PrefetchConfig()
        self._external_session = session is not None
        self._http_session = session
        self._fetcher = fetcher
        self._owns_fetcher = fetcher is None

        self._model = TransitionModel()
        self._registry = ResourceRegistry(
            clock=clock,
            default_size=self._config.default_size,
            default_latency=self._config.default_latency,
        )
        self._predictor = Predictor(self._model)
        self._scorer = Scorer(
            self._registry,
            decay_rate=self._config.decay_rate,
            matcher=matcher,
        )

        self._attempted = 0
        self._succeeded = 0
        self._failed = 0

    # ------------------------------------------------------------------
    # Context manager lifecycle
    # ------------------------------------------------------------------

    async def __aenter__(self) -> PredictivePrefetcher:
        if self._owns_fetcher:
            if self._http_session is None:
                self._http_session = aiohttp.ClientSession()
            self._fetcher = HttpFetcher(self._config, self._http_session)
        return self

    async def __aexit__(self, *exc: Any) -> None:
        if not self._external_session and self._http_session is not None:
            await self._http_session.close()
            self._http_session = None
        if self._owns_fetcher:
            self._fetcher = None

    # ------------------------------------------------------------------
    # Accessors
    # ------------------------------------------------------------------

    @property
    def config(self) -> PrefetchConfig:
        return self._config

    @property
    def model(self) -> TransitionModel:
        return self._model

    @property
    def registry(self) -> ResourceRegistry:
        return self._registry

    @property
    def current_state(self) -> str | None:
        return self._model.current_state

    # ------------------------------------------------------------------
    # Tracking and registration
    # ------------------------------------------------------------------

    def track(self, event_type: str, state: str) -> None:
        """Record a navigation event; see :meth:`TransitionModel.track`."""
        self._model.track(event_type, state)

    def add_resource(
        self,
        url: str,
        *,
        size: float | None = None,
        latency: float | None = None,
    ) -> ResourceEntry:
        """Register or replace a prefetchable resource."""
        return self._registry.add_resource(url, size=size, latency=latency)

    def touch(self, url: str) -> None:
        self._registry.touch(url)

    # ------------------------------------------------------------------
    # Prediction and scoring
    # ------------------------------------------------------------------

    def predict_next(self) -> list[Prediction]:
        return self._predictor.predict_next()

    def score_resources(self, predictions: Sequence[Prediction]) -> list[ScoredCandidate]:
        return self._scorer.score_resources(predictions)

    # ------------------------------------------------------------------
    # Fetching
    # ------------------------------------------------------------------

    def _require_fetcher(self) -> Fetcher:
        if self._fetcher is None and self._http_session is not None:
            self._fetcher = HttpFetcher(self._config, self._http_session)
        if self._fetcher is None:
            raise PrefetchError(
                "Prefetcher not initialized. Use 'async with PredictivePrefetcher(...) as prefetcher:'"
            )
        return self._fetcher

    async def _fetch_one(self, fetcher: Fetcher, url: str) -> str | None:
        """Fetch *url*, returning an error message instead of raising."""
        try:
            await fetcher.fetch(url)
        except Exception as exc:  # noqa: BLE001
            self._failed += 1
            _logger.warning("Prefetch failed: %s (%s)", url, exc)
            return str(exc) or type(exc).__name__
        self._succeeded += 1
        self._registry.touch(url)
        _logger.info("Prefetched: %s", url)
        return None

    async def prefetch(self, candidates: Sequence[ScoredCandidate | Mapping[str, Any]]) -> PrefetchReport:
        """Fetch the top ``max_prefetch`` candidates concurrently.

        Only the first ``max_prefetch`` candidates are selected and
        validated; entries past that bound are never looked at. Every
        selected fetch is dispatched before any is awaited, and the call
        returns once all of them have settled. A failing fetch is logged
        and listed in ``report.failed``; it neither cancels its siblings
        nor refreshes its resource's recency. ``report.candidates`` holds
        the selection.

        Raises
        ------
        MalformedCandidateError
            If a selected candidate has no usable URL. Nothing is
            dispatched in that case.
        PrefetchError
            If fetches are due but the prefetcher has neither a fetcher
            nor an HTTP session (used outside ``async with``).
        """
        selected = [_coerce_candidate(c) for c in candidates[: self._config.max_prefetch]]
        urls = [c.url for c in selected]

        if not urls:
            return PrefetchReport(status=OptimizeStatus.PREFETCHED)

        fetcher = self._require_fetcher()
        self._attempted += len(urls)
        errors = await asyncio.gather(*(self._fetch_one(fetcher, url) for url in urls))

        fetched = [url for url, error in zip(urls, errors) if error is None]
        failed = {url: error for url, error in zip(urls, errors) if error is not None}
        return PrefetchReport(
            status=OptimizeStatus.PREFETCHED,
            candidates=selected,
            dispatched=urls,
            fetched=fetched,
            failed=failed,
        )

    async def optimize(self) -> PrefetchReport:
        """Predict, score and prefetch in one pass.

        Returns without side effects when there is nothing to predict or
        no registered resource matches a prediction. ``report.candidates``
        holds the full ranking, not only the dispatched head.

        Raises
        ------
        PrefetchError
            If resources match but the prefetcher was constructed without
            a fetcher or session and is used outside ``async with``. This
            is a lifecycle misuse; fetch failures themselves never raise.
        """
        predictions = self.predict_next()
        if not predictions:
            _logger.info("No predictions yet, insufficient tracking data")
            return PrefetchReport(status=OptimizeStatus.INSUFFICIENT_DATA)

        candidates = self.score_resources(predictions)
        if not candidates:
            _logger.info("No matching resources to prefetch")
            return PrefetchReport(
                status=OptimizeStatus.NO_MATCHING_RESOURCES,
                predictions=predictions,
            )

        report = await self.prefetch(candidates)
        return report.model_copy(update={"predictions": predictions, "candidates": candidates})

    def summary(self) -> dict[str, Any]:
        """Return tracking and prefetch counters."""
        return {
            "current_state": self._model.current_state,
            "tracked_states": len(self._model),
            "transitions": self._model.transition_count(),
            "resources": len(self._registry),
            "prefetch_attempted": self._attempted,
            "prefetch_succeeded": self._succeeded,
            "prefetch_failed": self._failed,
        }
