"""NHTSA vPIC (VIN decoding) configuration values."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import cast

from .env import env_float, env_int, optional_env_var
from .errors import ConfigurationError
from .http_resilience import (
    CacheBackend,
    CacheConfig,
    PayloadPredicate,
    RateLimit,
    ResilienceConfig,
)

VPIC_BASE_URL = "https://vpic.nhtsa.dot.gov/api/"

_CACHE_CHOICES = ("memory", "sqlite", "off")


class VinDecodeDialect(StrEnum):
    """Naming convention of the decode payload.

    ``VARIABLE`` is the ``DecodeVin`` endpoint: a list of rows keyed by spaced
    variable names ("Model Year"). ``VALUES`` is ``DecodeVinValues``: one flat
    object keyed by camel-case names ("ModelYear").
    """

    VARIABLE = "variable"
    VALUES = "values"


@dataclass(frozen=True, slots=True)
class VpicConfig:
    dialect: VinDecodeDialect
    resilience: ResilienceConfig


def _dialect_from_env() -> VinDecodeDialect:
    raw = optional_env_var("VPIC_DIALECT", VinDecodeDialect.VARIABLE.value).lower()
    try:
        return VinDecodeDialect(raw)
    except ValueError as exc:
        raise ConfigurationError(f"Unsupported VPIC_DIALECT: {raw!r}") from exc


def _cache_from_env(cache_if: PayloadPredicate | None) -> CacheConfig | None:
    backend = optional_env_var("VPIC_CACHE", "memory").lower()
    if backend not in _CACHE_CHOICES:
        raise ConfigurationError(f"Unsupported VPIC_CACHE: {backend!r}")
    if backend == "off":
        return None
    return CacheConfig(backend=cast(CacheBackend, backend), cache_if=cache_if)


def get_vpic_config(
    *,
    resilience: ResilienceConfig | None = None,
    cache_if: PayloadPredicate | None = None,
) -> VpicConfig:
    """Read ``VPIC_*`` settings.

    ``cache_if`` decides per decoded payload whether a response may be cached.
    Passing ``resilience`` skips every HTTP-related variable.
    """

    dialect = _dialect_from_env()
    if resilience is not None:
        return VpicConfig(dialect=dialect, resilience=resilience)

    base_url = optional_env_var("VPIC_BASE_URL", VPIC_BASE_URL).rstrip("/") + "/"
    return VpicConfig(
        dialect=dialect,
        resilience=ResilienceConfig(
            name="vpic",
            base_url=base_url,
            timeout_seconds=env_float("VPIC_TIMEOUT_SECONDS", 30.0),
            ratelimit=RateLimit(max_calls=env_int("VPIC_MAX_CALLS_PER_SECOND", 5), per_seconds=1.0),
            cache=_cache_from_env(cache_if),
        ),
    )
