"""SQLAlchemy adapter package for vinunit."""

from __future__ import annotations

from .mappings import (
    UNIT_KEY_PREFIX,
    VEHICLE_KEY_PREFIX,
    ItemRecord,
    item_table,
    mapper_registry,
    start_mappers,
    unit_key,
    vehicle_key,
)
from .repositories import (
    BATCH_GET_CHUNK_SIZE,
    SqlAlchemyUnitRepository,
    SqlAlchemyVehicleRepository,
)

__all__ = [
    "BATCH_GET_CHUNK_SIZE",
    "UNIT_KEY_PREFIX",
    "VEHICLE_KEY_PREFIX",
    "ItemRecord",
    "SqlAlchemyUnitRepository",
    "SqlAlchemyVehicleRepository",
    "item_table",
    "mapper_registry",
    "start_mappers",
    "unit_key",
    "vehicle_key",
]
