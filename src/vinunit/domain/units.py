"""Unit lifecycle: create from a VIN, read enriched, update and delete."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import replace
from datetime import UTC, datetime
from logging import getLogger
from typing import TYPE_CHECKING, Final

from vinunit.domain.errors import (
    DuplicateVinError,
    InvalidVinError,
    UnitNotFoundError,
    VinDecodeError,
)
from vinunit.domain.ids import generate_unit_id
from vinunit.domain.merge import enrich_units, merge_unit
from vinunit.domain.model import Unit
from vinunit.domain.ports.unit_of_work import UnitOfWork

if TYPE_CHECKING:
    from collections.abc import Mapping

    from vinunit.domain.catalog import FitmentLookup, Part, VehicleResolver
    from vinunit.domain.model import EnrichedUnit, Vehicle
    from vinunit.domain.ports.decoding import VinDecoder

log = getLogger(__name__)

UnitOfWorkFactory = Callable[[], UnitOfWork]

MIN_VIN_LENGTH: Final[int] = 5
MAX_VIN_LENGTH: Final[int] = 50


def _utcnow() -> datetime:
    return datetime.now(UTC)


def normalize_vin(vin: str) -> str:
    normalized = vin.strip().upper()
    if not MIN_VIN_LENGTH <= len(normalized) <= MAX_VIN_LENGTH:
        raise InvalidVinError(
            f"VIN must be {MIN_VIN_LENGTH}-{MAX_VIN_LENGTH} characters, got {normalized!r}"
        )
    return normalized


class UnitService:
    """Coordinates decoding, catalog resolution and persistence of units.

    Uniqueness of (customer, VIN) is checked by reading before writing, in a
    separate transaction from the write. Two concurrent creates for the same
    pair can both pass the check and both be stored.
    """

    def __init__(
        self,
        *,
        unit_of_work_factory: UnitOfWorkFactory,
        decoder: VinDecoder,
        resolver: VehicleResolver | None = None,
        fitment: FitmentLookup | None = None,
        clock: Callable[[], datetime] = _utcnow,
        id_factory: Callable[[], str] = generate_unit_id,
    ) -> None:
        self._uow_factory = unit_of_work_factory
        self._decoder = decoder
        self._resolver = resolver
        self._fitment = fitment
        self._clock = clock
        self._id_factory = id_factory

    def create_unit_from_vin(
        self,
        customer_id: str,
        vin: str,
        *,
        attributes: Mapping[str, object] | None = None,
        refresh: bool = False,
    ) -> EnrichedUnit:
        """Create a unit, decoding the VIN unless a vehicle record already exists.

        ``refresh=True`` decodes and resolves again and overwrites the stored
        vehicle record.
        """

        vin = normalize_vin(vin)
        with self._uow_factory() as uow:
            self._ensure_unique(uow, customer_id, vin)
            vehicle = None if refresh else uow.repositories.vehicles.get(vin)

        save_vehicle = vehicle is None
        if vehicle is None:
            vehicle = self._decode(vin)
        else:
            log.info(f"Reusing stored vehicle for VIN {vin}")

        now = self._clock()
        unit = Unit(
            unit_id=self._id_factory(),
            customer_id=customer_id,
            vin=vin,
            attributes=dict(attributes or {}),
            created_at=now,
            updated_at=now,
        )
        with self._uow_factory() as uow:
            if save_vehicle:
                uow.repositories.vehicles.save(vehicle)
            uow.repositories.units.save(unit)
            uow.commit()

        log.info(f"Created unit {unit.unit_id} for customer {customer_id} (VIN {vin})")
        return merge_unit(unit, vehicle)

    def create_unit(
        self,
        customer_id: str,
        vin: str,
        *,
        attributes: Mapping[str, object] | None = None,
    ) -> EnrichedUnit:
        """Store an association only; enrichment uses whatever vehicle is on file."""

        vin = normalize_vin(vin)
        now = self._clock()
        unit = Unit(
            unit_id=self._id_factory(),
            customer_id=customer_id,
            vin=vin,
            attributes=dict(attributes or {}),
            created_at=now,
            updated_at=now,
        )
        with self._uow_factory() as uow:
            self._ensure_unique(uow, customer_id, vin)
            uow.repositories.units.save(unit)
            uow.commit()
            vehicle = uow.repositories.vehicles.get(vin)

        log.info(f"Created unit {unit.unit_id} for customer {customer_id} (VIN {vin})")
        return merge_unit(unit, vehicle)

    def get_unit(self, unit_id: str) -> EnrichedUnit:
        with self._uow_factory() as uow:
            unit = self._require(uow, unit_id)
            return merge_unit(unit, uow.repositories.vehicles.get(unit.vin))

    def get_units_by_customer_and_vin(self, customer_id: str, vin: str) -> list[EnrichedUnit]:
        vin = normalize_vin(vin)
        with self._uow_factory() as uow:
            units = uow.repositories.units.find_by_customer_and_vin(customer_id, vin)
            return enrich_units(units, uow.repositories.vehicles)

    def get_units_by_customer(self, customer_id: str) -> list[EnrichedUnit]:
        with self._uow_factory() as uow:
            units = uow.repositories.units.find_by_customer(customer_id)
            return enrich_units(units, uow.repositories.vehicles)

    def get_units_by_vin(self, vin: str) -> list[EnrichedUnit]:
        vin = normalize_vin(vin)
        with self._uow_factory() as uow:
            units = uow.repositories.units.find_by_vin(vin)
            return enrich_units(units, uow.repositories.vehicles)

    def update_unit(
        self,
        unit_id: str,
        *,
        customer_id: str | None = None,
        vin: str | None = None,
        attributes: Mapping[str, object] | None = None,
    ) -> EnrichedUnit:
        """Change association fields; vehicle data is never written here."""

        with self._uow_factory() as uow:
            existing = self._require(uow, unit_id)
            target_customer = customer_id if customer_id is not None else existing.customer_id
            target_vin = normalize_vin(vin) if vin is not None else existing.vin

            if (target_customer, target_vin) != (existing.customer_id, existing.vin):
                self._ensure_unique(uow, target_customer, target_vin, ignore_unit_id=unit_id)

            updated = replace(
                existing,
                customer_id=target_customer,
                vin=target_vin,
                attributes=dict(attributes) if attributes is not None else existing.attributes,
                updated_at=self._clock(),
            )
            uow.repositories.units.save(updated)
            uow.commit()
            vehicle = uow.repositories.vehicles.get(updated.vin)

        log.info(f"Updated unit {unit_id}")
        return merge_unit(updated, vehicle)

    def delete_unit(self, unit_id: str) -> None:
        """Remove the association; the vehicle record for its VIN stays."""

        with self._uow_factory() as uow:
            self._require(uow, unit_id)
            uow.repositories.units.delete(unit_id)
            uow.commit()
        log.info(f"Deleted unit {unit_id}")

    def find_parts_for_unit(self, unit_id: str, *, category: str | None = None) -> list[Part]:
        unit = self.get_unit(unit_id)
        if self._fitment is None:
            return []
        return self._fitment.find_parts(unit.base_vehicle_id, unit.engine_base_id, category)

    def find_categories_for_unit(self, unit_id: str) -> list[str]:
        unit = self.get_unit(unit_id)
        if self._fitment is None:
            return []
        return self._fitment.find_categories(unit.base_vehicle_id, unit.engine_base_id)

    def find_all_categories(self) -> list[str]:
        if self._fitment is None:
            return []
        return self._fitment.find_all_categories()

    def _decode(self, vin: str) -> Vehicle:
        vehicle = self._decoder(vin)
        if vehicle is None:
            log.error(f"VIN decode returned no results for {vin}")
            raise VinDecodeError(vin)
        if self._resolver is not None:
            vehicle = self._resolver.resolve(vehicle)
        return vehicle

    @staticmethod
    def _require(uow: UnitOfWork, unit_id: str) -> Unit:
        unit = uow.repositories.units.get(unit_id)
        if unit is None:
            raise UnitNotFoundError(unit_id)
        return unit

    @staticmethod
    def _ensure_unique(
        uow: UnitOfWork,
        customer_id: str,
        vin: str,
        *,
        ignore_unit_id: str | None = None,
    ) -> None:
        existing = uow.repositories.units.find_by_customer_and_vin(customer_id, vin)
        if any(unit.unit_id != ignore_unit_id for unit in existing):
            log.warning(f"Duplicate VIN {vin} for customer {customer_id}")
            raise DuplicateVinError(customer_id, vin)
