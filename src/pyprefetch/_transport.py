"""HTTP transport used to warm caches with prefetch requests."""

from __future__ import annotations

import asyncio
import logging
from typing import Any, Protocol

import aiohttp

from pyprefetch.config import PrefetchConfig
from pyprefetch.exceptions import PrefetchTransportError

_logger = logging.getLogger(__name__)


class Fetcher(Protocol):
    """Structural fetch interface used by the prefetcher.

    Having a protocol here makes it easy to pass test doubles while
    keeping the production implementation (`HttpFetcher`) concrete.
    Implementations return on success and raise on failure.
    """

    async def fetch(self, url: str) -> None:
        ...


class HttpFetcher:
    """Issues fire-and-forget GET requests through an aiohttp session.

    The response body is never read; the request exists only for its
    caching side effects, like an opaque ``no-cors`` browser fetch.
    """

    def __init__(self, config: PrefetchConfig, http_session: aiohttp.ClientSession) -> None:
        self._config = config
        self._http = http_session
        self._timeout = (
            aiohttp.ClientTimeout(total=config.request_timeout) if config.request_timeout is not None else None
        )

    async def fetch(self, url: str) -> None:
        kwargs: dict[str, Any] = {"headers": {"user-agent": self._config.user_agent}}
        if self._timeout is not None:
            kwargs["timeout"] = self._timeout

        _logger.debug("GET %s", url)

        try:
            async with self._http.get(url, **kwargs) as resp:
                status = resp.status
                resp.release()
        except aiohttp.ClientError as exc:
            raise PrefetchTransportError(f"Prefetch of {url} failed: {exc}", url=url) from exc
        except asyncio.TimeoutError as exc:
            raise PrefetchTransportError(f"Prefetch of {url} timed out", url=url) from exc

        if self._config.fail_on_http_error and status >= 400:
            raise PrefetchTransportError(
                f"HTTP {status} from {url}",
                url=url,
                status_code=status,
            )
        _logger.debug("GET %s -> %d", url, status)
