"""Builders and in-memory fakes for unit service tests."""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import UTC, datetime
from typing import TYPE_CHECKING, Literal

from vinunit.domain.model import Unit, Vehicle
from vinunit.domain.ports.catalog import QueryState, QueryStatus, ResultRow
from vinunit.domain.ports.unit_of_work import UnitRepositories

if TYPE_CHECKING:
    from collections.abc import Callable, Iterable, Iterator
    from types import TracebackType

FIXED_NOW = datetime(2025, 3, 1, 12, 0, tzinfo=UTC)
HONDA_VIN = "1HGCM82633A004352"


def make_vehicle(vin: str = HONDA_VIN, **overrides: object) -> Vehicle:
    values: dict[str, object] = {
        "year": 2003,
        "make": "HONDA",
        "model": "Accord",
        "displacement_liters": 3.0,
        "engine_cylinders": 6,
        "engine_configuration": "V-Shaped",
        "created_at": FIXED_NOW,
        "updated_at": FIXED_NOW,
    }
    values.update(overrides)
    return Vehicle(vin=vin, **values)  # pyright: ignore[reportArgumentType]


def make_unit(
    unit_id: str = "unt_abc1234",
    *,
    customer_id: str = "cust-1",
    vin: str = HONDA_VIN,
    attributes: dict[str, object] | None = None,
) -> Unit:
    return Unit(
        unit_id=unit_id,
        customer_id=customer_id,
        vin=vin,
        attributes=attributes or {},
        created_at=FIXED_NOW,
        updated_at=FIXED_NOW,
    )


def sequential_ids(prefix: str = "unt_") -> Callable[[], str]:
    counter = iter(range(1, 10_000))

    def factory() -> str:
        return f"{prefix}{next(counter):07d}"

    return factory


class InMemoryVehicleRepository:
    def __init__(self) -> None:
        self.items: dict[str, Vehicle] = {}
        self.saved: list[Vehicle] = []
        self.get_many_calls: list[list[str]] = []

    def save(self, vehicle: Vehicle) -> None:
        self.items[vehicle.vin] = vehicle
        self.saved.append(vehicle)

    def get(self, vin: str) -> Vehicle | None:
        return self.items.get(vin)

    def get_many(self, vins: Iterable[str]) -> dict[str, Vehicle]:
        requested = list(vins)
        self.get_many_calls.append(requested)
        return {vin: self.items[vin] for vin in requested if vin in self.items}


class InMemoryUnitRepository:
    def __init__(self) -> None:
        self.items: dict[str, Unit] = {}
        self.saved: list[Unit] = []

    def save(self, unit: Unit) -> None:
        self.items[unit.unit_id] = unit
        self.saved.append(unit)

    def get(self, unit_id: str) -> Unit | None:
        return self.items.get(unit_id)

    def find_by_customer_and_vin(self, customer_id: str, vin: str) -> list[Unit]:
        return [u for u in self._sorted() if u.customer_id == customer_id and u.vin == vin]

    def find_by_customer(self, customer_id: str) -> list[Unit]:
        return [u for u in self._sorted() if u.customer_id == customer_id]

    def find_by_vin(self, vin: str) -> list[Unit]:
        return [u for u in self._sorted() if u.vin == vin]

    def delete(self, unit_id: str) -> None:
        self.items.pop(unit_id, None)

    def _sorted(self) -> Iterator[Unit]:
        return (self.items[key] for key in sorted(self.items))


@dataclass
class FakeUnitOfWork:
    """Shares repositories across instances; writes count only once committed."""

    repositories: UnitRepositories
    commits: int = 0
    rollbacks: int = 0

    def __enter__(self) -> FakeUnitOfWork:
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        return False

    def commit(self) -> None:
        self.commits += 1

    def rollback(self) -> None:
        self.rollbacks += 1


@dataclass
class FakeUnitOfWorkFactory:
    units: InMemoryUnitRepository = field(default_factory=InMemoryUnitRepository)
    vehicles: InMemoryVehicleRepository = field(default_factory=InMemoryVehicleRepository)
    created: list[FakeUnitOfWork] = field(default_factory=list[FakeUnitOfWork])

    def __call__(self) -> FakeUnitOfWork:
        uow = FakeUnitOfWork(UnitRepositories(units=self.units, vehicles=self.vehicles))
        self.created.append(uow)
        return uow

    @property
    def commits(self) -> int:
        return sum(uow.commits for uow in self.created)


class FakeDecoder:
    def __init__(self, vehicle: Vehicle | None = None) -> None:
        self.vehicle = vehicle
        self.calls: list[str] = []

    def __call__(self, vin: str) -> Vehicle | None:
        self.calls.append(vin)
        if self.vehicle is None:
            return None
        return make_vehicle(vin) if self.vehicle.vin != vin else self.vehicle


class FakeQueryService:
    """Scripted query service: statuses are served in order, the last one repeats."""

    def __init__(
        self,
        *,
        statuses: Iterable[QueryState | QueryStatus] = (QueryState.SUCCEEDED,),
        rows: list[ResultRow] | None = None,
        error: Exception | None = None,
    ) -> None:
        self.statuses = [
            status if isinstance(status, QueryStatus) else QueryStatus(state=status)
            for status in statuses
        ]
        self.rows = rows if rows is not None else [["id"]]
        self.error = error
        self.queries: list[str] = []
        self.status_calls = 0
        self.row_calls = 0

    def start_query(self, sql: str) -> str:
        if self.error is not None:
            raise self.error
        self.queries.append(sql)
        return f"exec-{len(self.queries)}"

    def get_status(self, execution_id: str) -> QueryStatus:
        del execution_id
        index = min(self.status_calls, len(self.statuses) - 1)
        self.status_calls += 1
        return self.statuses[index]

    def get_rows(self, execution_id: str) -> list[ResultRow]:
        del execution_id
        self.row_calls += 1
        return self.rows
