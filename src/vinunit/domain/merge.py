"""Combine stored units with the shared vehicle record for their VIN."""

from __future__ import annotations

from dataclasses import fields
from typing import TYPE_CHECKING, Final

from vinunit.domain.model import EnrichedUnit, Unit, Vehicle

if TYPE_CHECKING:
    from collections.abc import Sequence

    from vinunit.domain.ports.persistence import VehicleRepository

UNIT_FIELD_NAMES: Final[frozenset[str]] = frozenset(field.name for field in fields(Unit))
_VEHICLE_ONLY_FIELDS: Final[tuple[str, ...]] = tuple(
    field.name for field in fields(Vehicle) if field.name not in UNIT_FIELD_NAMES
)


def merge_unit(unit: Unit, vehicle: Vehicle | None) -> EnrichedUnit:
    """Overlay ``unit`` on ``vehicle``; unit fields win whenever both carry a name."""

    vehicle_values: dict[str, object] = {}
    if vehicle is not None:
        vehicle_values = {name: getattr(vehicle, name) for name in _VEHICLE_ONLY_FIELDS}
    return EnrichedUnit(
        unit_id=unit.unit_id,
        customer_id=unit.customer_id,
        vin=unit.vin,
        attributes=dict(unit.attributes),
        created_at=unit.created_at,
        updated_at=unit.updated_at,
        **vehicle_values,  # pyright: ignore[reportArgumentType]
    )


def enrich_units(units: Sequence[Unit], vehicles: VehicleRepository) -> list[EnrichedUnit]:
    """Merge each unit with its vehicle using one batched read per distinct VIN set."""

    if not units:
        return []
    distinct_vins = list(dict.fromkeys(unit.vin for unit in units))
    by_vin = vehicles.get_many(distinct_vins)
    return [merge_unit(unit, by_vin.get(unit.vin)) for unit in units]
