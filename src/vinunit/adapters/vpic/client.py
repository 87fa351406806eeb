"""HTTP client for the NHTSA vPIC VIN decoding API."""

from __future__ import annotations

import asyncio
from dataclasses import dataclass, field
from logging import getLogger
from typing import TYPE_CHECKING
from urllib.parse import quote

import httpx
from pydantic import ValidationError

from vinunit.adapters.http_resilience import ResilienceConfig, ResilientClient
from vinunit.config.vpic import VPIC_BASE_URL, VinDecodeDialect, VpicConfig, get_vpic_config
from vinunit.domain.ports.decoding import VinDecoder

from .schema import DecodeVinResponse, DecodeVinValuesResponse
from .translator import (
    DecodePair,
    normalize,
    pairs_from_decode_vin,
    pairs_from_decode_vin_values,
)

if TYPE_CHECKING:
    from collections.abc import Callable
    from types import TracebackType

    from vinunit.domain.model import Vehicle

log = getLogger(__name__)

_ENDPOINTS: dict[VinDecodeDialect, str] = {
    VinDecodeDialect.VARIABLE: "vehicles/DecodeVin/{vin}",
    VinDecodeDialect.VALUES: "vehicles/DecodeVinValues/{vin}",
}


def _should_cache_payload(payload: object) -> bool:
    if not isinstance(payload, dict):
        return False
    results = payload.get("Results")  # pyright: ignore[reportUnknownMemberType]
    return isinstance(results, list) and bool(results)


def _default_config() -> VpicConfig:
    return get_vpic_config(cache_if=_should_cache_payload)


def _default_client_factory(config: ResilienceConfig) -> ResilientClient:
    return ResilientClient(config)


class VpicAPIError(RuntimeError):
    """Raised when vPIC answers with a payload we cannot interpret."""


@dataclass(slots=True)
class VpicClient:
    """Fetch decode payloads and reduce them to ``(name, value)`` pairs.

    One event loop and one HTTP client are kept for the lifetime of the
    instance, so the rate limit and the response cache span every decode.
    Call ``close()`` (or use it as a context manager) when done.
    """

    config: VpicConfig = field(default_factory=_default_config)
    client_factory: Callable[[ResilienceConfig], ResilientClient] = field(
        default=_default_client_factory
    )
    _runner: asyncio.Runner | None = field(default=None, init=False, repr=False)
    _http: ResilientClient | None = field(default=None, init=False, repr=False)

    def __enter__(self) -> VpicClient:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        self.close()

    def decode_pairs(self, vin: str) -> list[DecodePair]:
        if self._runner is None:
            self._runner = asyncio.Runner()
        return self._runner.run(self._decode_pairs_async(vin))

    def close(self) -> None:
        if self._runner is None:
            return
        try:
            if self._http is not None:
                self._runner.run(self._http.aclose())
        finally:
            self._http = None
            self._runner.close()
            self._runner = None

    async def _decode_pairs_async(self, vin: str) -> list[DecodePair]:
        dialect = self.config.dialect
        base_url = self.config.resilience.base_url or VPIC_BASE_URL
        url = base_url + _ENDPOINTS[dialect].format(vin=quote(vin, safe=""))
        params = httpx.QueryParams({"format": "json"})

        if self._http is None:
            # built inside the runner's loop so the limiter and cache bind to it
            self._http = self.client_factory(self.config.resilience)
        response = await self._http.get(url, params=params)
        response.raise_for_status()

        payload = response.json()
        if not isinstance(payload, dict) or "Results" not in payload:
            raise VpicAPIError("Unexpected vPIC response payload")

        try:
            if dialect is VinDecodeDialect.VARIABLE:
                return pairs_from_decode_vin(DecodeVinResponse.model_validate(payload))
            return pairs_from_decode_vin_values(DecodeVinValuesResponse.model_validate(payload))
        except ValidationError as exc:
            log.error(f"vPIC payload for {vin} failed validation: {exc}")
            raise VpicAPIError(f"Invalid vPIC response payload for {vin}") from exc


@dataclass(slots=True)
class VpicVinDecoder:
    """VIN decoder backed by vPIC."""

    client: VpicClient = field(default_factory=VpicClient)

    def __call__(self, vin: str) -> Vehicle | None:
        pairs = self.client.decode_pairs(vin)
        vehicle = normalize(pairs, self.client.config.dialect, vin=vin)
        if vehicle is None:
            log.warning(f"vPIC returned no results for VIN {vin}")
        else:
            log.info(f"Decoded VIN {vin}: {vehicle.year} {vehicle.make} {vehicle.model}")
        return vehicle

    def close(self) -> None:
        self.client.close()


if TYPE_CHECKING:
    _decoder_check: VinDecoder = VpicVinDecoder()
