"""Unit lifecycle against vPIC payloads and a real SQLite store."""

from __future__ import annotations

from collections.abc import Callable  # noqa: TC003
from typing import Any

import httpx
import pytest
from sqlalchemy import func, select

from vinunit.adapters.http_resilience import ResilienceConfig, ResilientClient
from vinunit.adapters.sqlalchemy import ItemRecord, unit_key, vehicle_key
from vinunit.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork
from vinunit.adapters.vpic import VpicClient, VpicVinDecoder
from vinunit.config.vpic import VinDecodeDialect, VpicConfig
from vinunit.domain.errors import DuplicateVinError, VinDecodeError
from vinunit.domain.units import UnitService
from tests.helpers.units import HONDA_VIN, sequential_ids


def _decoder(payload: dict[str, Any], requests: list[httpx.Request]) -> VpicVinDecoder:
    async def handler(request: httpx.Request) -> httpx.Response:
        requests.append(request)
        return httpx.Response(200, json=payload)

    def factory(resilience: ResilienceConfig) -> ResilientClient:
        client = ResilientClient(resilience)
        client._client = httpx.AsyncClient(transport=httpx.MockTransport(handler))  # noqa: SLF001  # type: ignore[reportPrivateUsage]
        return client

    config = VpicConfig(
        dialect=VinDecodeDialect.VARIABLE,
        resilience=ResilienceConfig(
            name="vpic-test",
            base_url="https://vpic.test/api/",
            cache=None,
        ),
    )
    return VpicVinDecoder(VpicClient(config=config, client_factory=factory))


def _count_items(uow_factory: Callable[[], SqlAlchemyUnitOfWork]) -> int:
    with uow_factory() as uow:
        return uow.session.scalar(select(func.count()).select_from(ItemRecord)) or 0


def test_create_and_read_back_enriched_units(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    decode_vin_payload: dict[str, Any],
) -> None:
    requests: list[httpx.Request] = []
    service = UnitService(
        unit_of_work_factory=sqlite_unit_of_work,
        decoder=_decoder(decode_vin_payload, requests),
        id_factory=sequential_ids(),
    )

    created = service.create_unit_from_vin("cust-1", HONDA_VIN, attributes={"fleet": "north"})
    second = service.create_unit_from_vin("cust-2", HONDA_VIN)

    assert (created.year, created.make, created.model) == (2003, "HONDA", "Accord")
    assert created.make_id == 474
    assert second.make == "HONDA"
    assert len(requests) == 1
    assert _count_items(sqlite_unit_of_work) == 3

    fetched = service.get_unit(created.unit_id)
    assert fetched.attributes == {"fleet": "north"}
    assert fetched.trim == "EX-V6"

    by_vin = service.get_units_by_vin(HONDA_VIN)
    assert [unit.customer_id for unit in by_vin] == ["cust-1", "cust-2"]

    with pytest.raises(DuplicateVinError):
        service.create_unit_from_vin("cust-1", HONDA_VIN)

    service.delete_unit(created.unit_id)
    assert _count_items(sqlite_unit_of_work) == 2
    assert [unit.customer_id for unit in service.get_units_by_vin(HONDA_VIN)] == ["cust-2"]


def test_empty_decode_leaves_store_untouched(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
) -> None:
    requests: list[httpx.Request] = []
    service = UnitService(
        unit_of_work_factory=sqlite_unit_of_work,
        decoder=_decoder({"Count": 0, "Message": "", "Results": []}, requests),
    )

    with pytest.raises(VinDecodeError):
        service.create_unit_from_vin("cust-1", HONDA_VIN)

    assert _count_items(sqlite_unit_of_work) == 0


def test_stored_unit_holds_only_association_fields(
    sqlite_unit_of_work: Callable[[], SqlAlchemyUnitOfWork],
    decode_vin_payload: dict[str, Any],
) -> None:
    service = UnitService(
        unit_of_work_factory=sqlite_unit_of_work,
        decoder=_decoder(decode_vin_payload, []),
        id_factory=sequential_ids(),
    )

    created = service.create_unit_from_vin("cust-1", HONDA_VIN, attributes={"fleet": "north"})

    with sqlite_unit_of_work() as uow:
        unit_record = uow.session.get(ItemRecord, (unit_key(created.unit_id),) * 2)
        vehicle_record = uow.session.get(ItemRecord, (vehicle_key(HONDA_VIN),) * 2)

    assert created.make == "HONDA"
    assert unit_record is not None
    assert set(unit_record.data) == {
        "unit_id",
        "customer_id",
        "vin",
        "attributes",
        "created_at",
        "updated_at",
    }
    assert vehicle_record is not None
    assert vehicle_record.data["make"] == "HONDA"
    assert "customer_id" not in vehicle_record.data
