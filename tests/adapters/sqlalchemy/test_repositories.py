"""Tests for SQLAlchemy repositories."""

from __future__ import annotations

from typing import Any

from sqlalchemy import event, select
from sqlalchemy.engine import Engine  # noqa: TC002
from sqlalchemy.orm import Session  # noqa: TC002

from vinunit.adapters.sqlalchemy import (
    BATCH_GET_CHUNK_SIZE,
    ItemRecord,
    SqlAlchemyUnitRepository,
    SqlAlchemyVehicleRepository,
    vehicle_key,
)
from tests.helpers.units import FIXED_NOW, HONDA_VIN, make_unit, make_vehicle


def test_vehicle_round_trips_through_storage(sqlite_session: Session) -> None:
    repository = SqlAlchemyVehicleRepository(sqlite_session)
    vehicle = make_vehicle(make_id=474, base_vehicle_id=5911, trim="EX-V6")

    repository.save(vehicle)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    assert repository.get(HONDA_VIN) == vehicle


def test_vehicle_save_replaces_the_whole_record(sqlite_session: Session) -> None:
    repository = SqlAlchemyVehicleRepository(sqlite_session)
    repository.save(make_vehicle(trim="EX-V6", base_vehicle_id=5911))
    repository.save(make_vehicle(trim="LX"))
    sqlite_session.commit()
    sqlite_session.expunge_all()

    stored = repository.get(HONDA_VIN)
    records = sqlite_session.scalars(select(ItemRecord)).all()

    assert stored is not None
    assert stored.trim == "LX"
    assert stored.base_vehicle_id is None
    assert len(records) == 1
    assert records[0].pk == records[0].sk == vehicle_key(HONDA_VIN)


def test_vehicle_data_omits_empty_fields(sqlite_session: Session) -> None:
    SqlAlchemyVehicleRepository(sqlite_session).save(make_vehicle())
    sqlite_session.commit()

    record = sqlite_session.get(ItemRecord, (vehicle_key(HONDA_VIN), vehicle_key(HONDA_VIN)))

    assert record is not None
    assert "trim" not in record.data
    assert record.data["make"] == "HONDA"
    assert record.data["created_at"] == FIXED_NOW.isoformat()


def test_get_missing_vehicle_returns_none(sqlite_session: Session) -> None:
    assert SqlAlchemyVehicleRepository(sqlite_session).get("NOPE12345") is None


def test_get_many_omits_unknown_vins(sqlite_session: Session) -> None:
    repository = SqlAlchemyVehicleRepository(sqlite_session)
    repository.save(make_vehicle("VIN0000001"))
    repository.save(make_vehicle("VIN0000002"))
    sqlite_session.commit()

    found = repository.get_many(["VIN0000001", "VIN0000002", "VIN0000003", "VIN0000001"])

    assert set(found) == {"VIN0000001", "VIN0000002"}
    assert repository.get_many([]) == {}


def test_get_many_reads_in_chunks(sqlite_engine: Engine, sqlite_session: Session) -> None:
    repository = SqlAlchemyVehicleRepository(sqlite_session)
    vins = [f"VIN{index:07d}" for index in range(150)]
    for vin in vins:
        repository.save(make_vehicle(vin))
    sqlite_session.commit()

    statements: list[str] = []

    def record_select(*args: Any) -> None:
        statement = args[2]
        if statement.lstrip().upper().startswith("SELECT"):
            statements.append(statement)

    event.listen(sqlite_engine, "before_cursor_execute", record_select)
    try:
        found = repository.get_many(vins)
    finally:
        event.remove(sqlite_engine, "before_cursor_execute", record_select)

    assert BATCH_GET_CHUNK_SIZE == 100
    assert len(found) == 150
    assert len(statements) == 2


def test_unit_queries_by_customer_and_vin(sqlite_session: Session) -> None:
    repository = SqlAlchemyUnitRepository(sqlite_session)
    repository.save(make_unit("unt_0000001", customer_id="cust-1", vin=HONDA_VIN))
    repository.save(make_unit("unt_0000002", customer_id="cust-1", vin="VIN0000002"))
    repository.save(make_unit("unt_0000003", customer_id="cust-2", vin=HONDA_VIN))
    sqlite_session.commit()

    by_pair = repository.find_by_customer_and_vin("cust-1", HONDA_VIN)
    by_customer = repository.find_by_customer("cust-1")
    by_vin = repository.find_by_vin(HONDA_VIN)

    assert [unit.unit_id for unit in by_pair] == ["unt_0000001"]
    assert [unit.unit_id for unit in by_customer] == ["unt_0000001", "unt_0000002"]
    assert [unit.unit_id for unit in by_vin] == ["unt_0000001", "unt_0000003"]


def test_vehicle_records_never_show_up_as_units(sqlite_session: Session) -> None:
    SqlAlchemyVehicleRepository(sqlite_session).save(make_vehicle())
    repository = SqlAlchemyUnitRepository(sqlite_session)
    sqlite_session.commit()

    assert repository.find_by_vin(HONDA_VIN) == []


def test_unit_round_trip_keeps_attributes(sqlite_session: Session) -> None:
    repository = SqlAlchemyUnitRepository(sqlite_session)
    unit = make_unit(attributes={"nickname": "Daily", "odometer": 120500, "tags": ["fleet"]})

    repository.save(unit)
    sqlite_session.commit()
    sqlite_session.expunge_all()

    assert repository.get(unit.unit_id) == unit


def test_unit_delete_leaves_vehicle(sqlite_session: Session) -> None:
    vehicles = SqlAlchemyVehicleRepository(sqlite_session)
    units = SqlAlchemyUnitRepository(sqlite_session)
    vehicles.save(make_vehicle())
    units.save(make_unit("unt_0000001"))
    sqlite_session.commit()

    units.delete("unt_0000001")
    units.delete("unt_missing")
    sqlite_session.commit()

    assert units.get("unt_0000001") is None
    assert vehicles.get(HONDA_VIN) is not None
