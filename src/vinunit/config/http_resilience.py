"""Knobs for the outbound HTTP client: retries, throttling and caching."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, field
from typing import Literal

import httpx

# Receives the decoded JSON body; a falsy result keeps the response out of the cache.
PayloadPredicate = Callable[[object], bool]

CacheBackend = Literal["sqlite", "memory"]


@dataclass(slots=True, frozen=True)
class RetryPolicy:
    """Retry schedule for idempotent reads."""

    attempts: int = 3
    backoff_factor: float = 0.5
    max_wait_seconds: float = 30.0
    jitter: float = 1.0
    honor_retry_after: bool = True
    retry_statuses: frozenset[int] = frozenset({429, 500, 502, 503, 504})
    retry_exceptions: tuple[type[httpx.HTTPError], ...] = (
        httpx.TimeoutException,
        httpx.NetworkError,
        httpx.RemoteProtocolError,
    )


@dataclass(slots=True, frozen=True)
class RateLimit:
    max_calls: int
    per_seconds: float


@dataclass(slots=True, frozen=True)
class CacheConfig:
    backend: CacheBackend = "memory"
    # only read for the sqlite backend; defaults to the file in the data directory
    sqlite_path: str | None = None
    ttl_seconds: float | None = None
    cache_if: PayloadPredicate | None = None


@dataclass(slots=True, frozen=True)
class ResilienceConfig:
    name: str
    base_url: str | None = None
    timeout_seconds: float = 30.0
    retry: RetryPolicy = field(default_factory=RetryPolicy)
    ratelimit: RateLimit | None = None
    cache: CacheConfig | None = field(default_factory=CacheConfig)
