"""Async GET client combining a rate limiter, a retrying transport and a hishel cache."""

from __future__ import annotations

import json
from logging import getLogger
from typing import TYPE_CHECKING

import httpx
from aiolimiter import AsyncLimiter
from hishel import AsyncSqliteStorage, FilterPolicy
from hishel import Response as HishelCacheResponse
from hishel._policies import BaseFilter
from hishel.httpx import AsyncCacheClient
from httpx_retries import Retry, RetryTransport

from vinunit.config.http_resilience import (
    CacheConfig,
    PayloadPredicate,
    RateLimit,
    ResilienceConfig,
    RetryPolicy,
)
from vinunit.config.storage import get_storage_config

if TYPE_CHECKING:
    from types import TracebackType

    from httpx._types import QueryParamTypes

__all__ = [
    "CacheConfig",
    "RateLimit",
    "ResilienceConfig",
    "ResilientClient",
    "RetryPolicy",
    "build_retry",
]

log = getLogger(__name__)


def build_retry(policy: RetryPolicy) -> Retry:
    return Retry(
        total=policy.attempts,
        backoff_factor=policy.backoff_factor,
        backoff_jitter=policy.jitter,
        max_backoff_wait=policy.max_wait_seconds,
        respect_retry_after_header=policy.honor_retry_after,
        allowed_methods=("GET",),
        status_forcelist=tuple(sorted(policy.retry_statuses)),
        retry_on_exceptions=policy.retry_exceptions,
    )


class _PayloadFilter(BaseFilter[HishelCacheResponse]):
    """Let ``CacheConfig.cache_if`` veto storing a JSON response."""

    def __init__(self, predicate: PayloadPredicate) -> None:
        self._predicate = predicate

    def needs_body(self) -> bool:
        return True

    def apply(self, item: HishelCacheResponse, body: bytes | None) -> bool:  # noqa: ARG002
        if body is None:
            return True
        try:
            payload = json.loads(body)
        except (UnicodeDecodeError, json.JSONDecodeError):
            # not JSON, nothing for the predicate to judge
            return True
        return bool(self._predicate(payload))


def _open_storage(cache: CacheConfig) -> AsyncSqliteStorage:
    match cache.backend:
        case "memory":
            path = ":memory:"
        case "sqlite":
            path = cache.sqlite_path or str(get_storage_config().http_cache_path())
        case other:
            raise ValueError(f"Unsupported cache backend: {other}")
    return AsyncSqliteStorage(database_path=path, default_ttl=cache.ttl_seconds)


def _build_client(config: ResilienceConfig) -> httpx.AsyncClient:
    transport = RetryTransport(retry=build_retry(config.retry))
    base_url = config.base_url or ""
    if config.cache is None:
        return httpx.AsyncClient(
            base_url=base_url, timeout=config.timeout_seconds, transport=transport
        )

    log.debug(f"{config.name}: caching responses in {config.cache.backend} storage")
    policy = (
        FilterPolicy(response_filters=[_PayloadFilter(config.cache.cache_if)])
        if config.cache.cache_if is not None
        else None
    )
    return AsyncCacheClient(
        base_url=base_url,
        timeout=config.timeout_seconds,
        transport=transport,
        storage=_open_storage(config.cache),
        policy=policy,
    )


class ResilientClient:
    """Throttled, retrying and optionally caching ``httpx.AsyncClient``.

    Use as an async context manager; the underlying client is closed on exit.
    """

    def __init__(self, config: ResilienceConfig) -> None:
        self.config = config
        limit = config.ratelimit
        self._limiter = AsyncLimiter(limit.max_calls, limit.per_seconds) if limit else None
        self._client = _build_client(config)

    async def __aenter__(self) -> ResilientClient:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()

    async def aclose(self) -> None:
        await self._client.aclose()

    async def get(self, url: str, *, params: QueryParamTypes | None = None) -> httpx.Response:
        if self._limiter is None:
            return await self._client.get(url, params=params)
        async with self._limiter:
            return await self._client.get(url, params=params)
