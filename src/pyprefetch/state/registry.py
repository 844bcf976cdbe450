"""In-memory registry of prefetchable resources."""

from __future__ import annotations

import logging
import time
from collections.abc import Callable, Iterator

from pyprefetch._constants import DEFAULT_RESOURCE_LATENCY, DEFAULT_RESOURCE_SIZE
from pyprefetch.models.resource import ResourceEntry

_logger = logging.getLogger(__name__)


class ResourceRegistry:
    """Stores :class:`ResourceEntry` records keyed by URL.

    This is the only component allowed to change resource metadata.
    Entries are immutable; upserts and recency refreshes replace them.
    """

    def __init__(
        self,
        *,
        clock: Callable[[], float] = time.time,
        default_size: float = DEFAULT_RESOURCE_SIZE,
        default_latency: float = DEFAULT_RESOURCE_LATENCY,
    ) -> None:
        self._clock = clock
        self._default_size = default_size
        self._default_latency = default_latency
        self._entries: dict[str, ResourceEntry] = {}

    def now(self) -> float:
        """Current time according to the registry clock (epoch seconds)."""
        return self._clock()

    def add_resource(
        self,
        url: str,
        *,
        size: float | None = None,
        latency: float | None = None,
    ) -> ResourceEntry:
        """Register *url*, replacing any existing entry.

        Omitted ``size``/``latency`` fall back to the registry defaults.
        Zero or negative values are stored as given.
        """
        entry = ResourceEntry(
            url=url,
            size=self._default_size if size is None else size,
            latency=self._default_latency if latency is None else latency,
            last_accessed=self._clock(),
        )
        if entry.size <= 0 or entry.latency <= 0:
            _logger.debug("Resource %s registered with non-positive cost input", url)
        self._entries[url] = entry
        return entry

    def touch(self, url: str) -> None:
        """Refresh ``last_accessed`` for *url*; unknown URLs are ignored."""
        entry = self._entries.get(url)
        if entry is None:
            return
        self._entries[url] = entry.model_copy(update={"last_accessed": self._clock()})

    def remove(self, url: str) -> None:
        """Drop *url* from the registry if present."""
        self._entries.pop(url, None)

    def get(self, url: str) -> ResourceEntry | None:
        return self._entries.get(url)

    def urls(self) -> list[str]:
        return list(self._entries)

    def __contains__(self, url: object) -> bool:
        return url in self._entries

    def __iter__(self) -> Iterator[ResourceEntry]:
        return iter(list(self._entries.values()))

    def __len__(self) -> int:
        return len(self._entries)
