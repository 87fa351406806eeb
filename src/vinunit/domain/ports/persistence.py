"""Ports for persisting vehicles and units."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from collections.abc import Iterable

    from vinunit.domain.model import Unit, Vehicle


@runtime_checkable
class VehicleRepository(Protocol):
    """Vehicle records keyed by VIN; saving replaces the whole record."""

    def save(self, vehicle: Vehicle) -> None: ...

    def get(self, vin: str) -> Vehicle | None: ...

    def get_many(self, vins: Iterable[str]) -> dict[str, Vehicle]:
        """Return the stored vehicles keyed by VIN; unknown VINs are left out."""
        ...


@runtime_checkable
class UnitRepository(Protocol):
    """Unit records keyed by unit id, queryable by customer and VIN."""

    def save(self, unit: Unit) -> None: ...

    def get(self, unit_id: str) -> Unit | None: ...

    def find_by_customer_and_vin(self, customer_id: str, vin: str) -> list[Unit]: ...

    def find_by_customer(self, customer_id: str) -> list[Unit]: ...

    def find_by_vin(self, vin: str) -> list[Unit]: ...

    def delete(self, unit_id: str) -> None: ...
