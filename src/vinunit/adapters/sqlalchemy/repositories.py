"""Repository implementations backed by SQLAlchemy sessions."""

from __future__ import annotations

from dataclasses import fields
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Any, Final

from sqlalchemy import select

from vinunit.adapters.sqlalchemy.mappings import (
    UNIT_KEY_PREFIX,
    ItemRecord,
    unit_key,
    vehicle_key,
)
from vinunit.domain.model import Unit, Vehicle

if TYPE_CHECKING:
    from collections.abc import Iterable, Iterator, Sequence

    from sqlalchemy.orm import Session

log = getLogger(__name__)

BATCH_GET_CHUNK_SIZE: Final[int] = 100

_DATETIME_FIELDS: Final[frozenset[str]] = frozenset({"created_at", "updated_at"})
_VEHICLE_FIELDS: Final[frozenset[str]] = frozenset(field.name for field in fields(Vehicle))


def _chunked(values: Sequence[str], size: int) -> Iterator[Sequence[str]]:
    for start in range(0, len(values), size):
        yield values[start : start + size]


def _dump_value(name: str, value: object) -> object:
    if name in _DATETIME_FIELDS and isinstance(value, datetime):
        return value.isoformat()
    return value


def _load_datetime(value: object) -> datetime | None:
    if not isinstance(value, str):
        return None
    parsed = datetime.fromisoformat(value)
    return parsed if parsed.tzinfo else parsed.replace(tzinfo=UTC)


def _vehicle_to_data(vehicle: Vehicle) -> dict[str, Any]:
    data: dict[str, Any] = {}
    for name in _VEHICLE_FIELDS:
        value = getattr(vehicle, name)
        if value is not None:
            data[name] = _dump_value(name, value)
    return data


def _vehicle_from_data(data: dict[str, Any]) -> Vehicle:
    values = {name: value for name, value in data.items() if name in _VEHICLE_FIELDS}
    for name in _DATETIME_FIELDS:
        values[name] = _load_datetime(values.get(name))
    return Vehicle(**values)


def _unit_to_data(unit: Unit) -> dict[str, Any]:
    return {
        "unit_id": unit.unit_id,
        "customer_id": unit.customer_id,
        "vin": unit.vin,
        "attributes": dict(unit.attributes),
        "created_at": _dump_value("created_at", unit.created_at),
        "updated_at": _dump_value("updated_at", unit.updated_at),
    }


def _unit_from_data(data: dict[str, Any]) -> Unit:
    return Unit(
        unit_id=data["unit_id"],
        customer_id=data["customer_id"],
        vin=data["vin"],
        attributes=dict(data.get("attributes") or {}),
        created_at=_load_datetime(data.get("created_at")),
        updated_at=_load_datetime(data.get("updated_at")),
    )


def _put(session: Session, record: ItemRecord) -> None:
    """Write ``record`` as a whole-record replacement of any item with the same key."""

    session.merge(record)
    session.flush()


class SqlAlchemyVehicleRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, vehicle: Vehicle) -> None:
        key = vehicle_key(vehicle.vin)
        _put(
            self.session,
            ItemRecord(
                pk=key,
                sk=key,
                data=_vehicle_to_data(vehicle),
                updated_at=vehicle.updated_at,
            ),
        )

    def get(self, vin: str) -> Vehicle | None:
        key = vehicle_key(vin)
        record = self.session.get(ItemRecord, (key, key))
        return _vehicle_from_data(record.data) if record is not None else None

    def get_many(self, vins: Iterable[str]) -> dict[str, Vehicle]:
        keys = list(dict.fromkeys(vehicle_key(vin) for vin in vins))
        found: dict[str, Vehicle] = {}
        for chunk in _chunked(keys, BATCH_GET_CHUNK_SIZE):
            statement = select(ItemRecord).where(
                ItemRecord.pk.in_(chunk)  # pyright: ignore[reportAttributeAccessIssue]
            )
            for record in self.session.scalars(statement):
                vehicle = _vehicle_from_data(record.data)
                found[vehicle.vin] = vehicle
        log.debug("Batch loaded %s of %s vehicles", len(found), len(keys))
        return found


class SqlAlchemyUnitRepository:
    def __init__(self, session: Session) -> None:
        self.session = session

    def save(self, unit: Unit) -> None:
        key = unit_key(unit.unit_id)
        _put(
            self.session,
            ItemRecord(
                pk=key,
                sk=key,
                customer_id=unit.customer_id,
                vin=unit.vin,
                data=_unit_to_data(unit),
                updated_at=unit.updated_at,
            ),
        )

    def get(self, unit_id: str) -> Unit | None:
        key = unit_key(unit_id)
        record = self.session.get(ItemRecord, (key, key))
        return _unit_from_data(record.data) if record is not None else None

    def find_by_customer_and_vin(self, customer_id: str, vin: str) -> list[Unit]:
        return self._query(
            ItemRecord.customer_id == customer_id,  # pyright: ignore[reportArgumentType]
            ItemRecord.vin == vin,  # pyright: ignore[reportArgumentType]
        )

    def find_by_customer(self, customer_id: str) -> list[Unit]:
        return self._query(ItemRecord.customer_id == customer_id)  # pyright: ignore[reportArgumentType]

    def find_by_vin(self, vin: str) -> list[Unit]:
        return self._query(ItemRecord.vin == vin)  # pyright: ignore[reportArgumentType]

    def delete(self, unit_id: str) -> None:
        key = unit_key(unit_id)
        record = self.session.get(ItemRecord, (key, key))
        if record is not None:
            self.session.delete(record)
            self.session.flush()

    def _query(self, *criteria: Any) -> list[Unit]:
        statement = (
            select(ItemRecord)
            .where(
                ItemRecord.pk.startswith(UNIT_KEY_PREFIX),  # pyright: ignore[reportAttributeAccessIssue]
                *criteria,
            )
            .order_by(ItemRecord.pk)  # pyright: ignore[reportArgumentType]
        )
        return [_unit_from_data(record.data) for record in self.session.scalars(statement)]

