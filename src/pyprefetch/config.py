"""Prefetcher configuration for pyprefetch."""

from __future__ import annotations

import dataclasses
import os
from typing import Any

from pyprefetch._constants import (
    DEFAULT_DECAY_RATE,
    DEFAULT_MAX_PREFETCH,
    DEFAULT_RESOURCE_LATENCY,
    DEFAULT_RESOURCE_SIZE,
    USER_AGENT,
)
from pyprefetch.exceptions import PrefetchConfigError


def _env_bool(value: str | None, default: bool) -> bool:
    if value is None:
        return default
    normalized = value.strip().lower()
    if normalized in {"1", "true", "yes", "y", "on"}:
        return True
    if normalized in {"0", "false", "no", "n", "off"}:
        return False
    return default


@dataclasses.dataclass(frozen=True)
class PrefetchConfig:
    """Prefetcher configuration.

    Parameters
    ----------
    max_prefetch : int
        Upper bound on fetches dispatched per ``optimize()`` call.
        ``0`` disables fetching entirely.
    decay_rate : float
        Exponential decay coefficient (lambda) applied to the seconds
        elapsed since a resource was last accessed.
    default_size : float
        Size in bytes assumed for resources registered without one.
    default_latency : float
        Latency in milliseconds assumed for resources registered without one.
    request_timeout : float or None
        Total timeout in seconds for a single prefetch request.  ``None``
        leaves requests unbounded; a hung request then delays the
        settlement of ``optimize()`` until the transport gives up.
    fail_on_http_error : bool
        Treat HTTP error statuses (>= 400) as fetch failures.  Off by
        default: a prefetch only cares that the request was delivered.
    user_agent : str
        ``User-Agent`` header sent with prefetch requests.
    """

    max_prefetch: int = DEFAULT_MAX_PREFETCH
    decay_rate: float = DEFAULT_DECAY_RATE
    default_size: float = DEFAULT_RESOURCE_SIZE
    default_latency: float = DEFAULT_RESOURCE_LATENCY
    request_timeout: float | None = None
    fail_on_http_error: bool = False
    user_agent: str = USER_AGENT

    def __post_init__(self) -> None:
        if self.max_prefetch < 0:
            raise PrefetchConfigError(f"max_prefetch must be >= 0, got {self.max_prefetch}")
        if self.decay_rate < 0:
            raise PrefetchConfigError(f"decay_rate must be >= 0, got {self.decay_rate}")
        if self.request_timeout is not None and self.request_timeout <= 0:
            raise PrefetchConfigError(f"request_timeout must be > 0, got {self.request_timeout}")

    @classmethod
    def from_env(cls, **overrides: Any) -> PrefetchConfig:
        """Create configuration from environment variables.

        Reads optional ``PREFETCH_*`` variables. Explicit keyword
        arguments override environment values.

        Parameters
        ----------
        **overrides
            Explicit field values that take precedence over env vars.

        Returns
        -------
        PrefetchConfig
            Populated configuration.

        Raises
        ------
        PrefetchConfigError
            If a numeric variable cannot be parsed or a value is out of range.
        """
        env = os.environ

        _ENV_NUMERIC_MAP: dict[str, tuple[str, type]] = {
            "PREFETCH_MAX_PREFETCH": ("max_prefetch", int),
            "PREFETCH_DECAY_RATE": ("decay_rate", float),
            "PREFETCH_DEFAULT_SIZE": ("default_size", float),
            "PREFETCH_DEFAULT_LATENCY": ("default_latency", float),
            "PREFETCH_REQUEST_TIMEOUT": ("request_timeout", float),
        }
        config_kwargs: dict[str, Any] = {}
        for env_key, (field_name, cast) in _ENV_NUMERIC_MAP.items():
            val = env.get(env_key)
            if val is None or field_name in overrides:
                continue
            try:
                config_kwargs[field_name] = cast(val)
            except ValueError as exc:
                raise PrefetchConfigError(f"{env_key} is not a valid {cast.__name__}: {val!r}") from exc

        if "fail_on_http_error" not in overrides:
            config_kwargs["fail_on_http_error"] = _env_bool(
                env.get("PREFETCH_FAIL_ON_HTTP_ERROR"),
                False,
            )

        user_agent = env.get("PREFETCH_USER_AGENT")
        if user_agent is not None:
            config_kwargs["user_agent"] = user_agent

        config_kwargs.update(overrides)

        return cls(**config_kwargs)
