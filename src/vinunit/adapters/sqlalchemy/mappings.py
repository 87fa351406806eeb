"""SQLAlchemy table and mapper for the single key-value ``item`` table.

Vehicles and units share one table, told apart by key prefix. Units also fill
the ``customer_id``/``vin`` columns that back the secondary lookups; vehicle
rows leave them empty so they never show up in unit queries.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass, field
from datetime import UTC, datetime
from functools import cache
from typing import Any, Final

from sqlalchemy import JSON, Column, DateTime, Dialect, Index, String, Table, TypeDecorator, orm

log = logging.getLogger(__name__)

VEHICLE_KEY_PREFIX: Final[str] = "VIN#"
UNIT_KEY_PREFIX: Final[str] = "UNT#"


def vehicle_key(vin: str) -> str:
    return f"{VEHICLE_KEY_PREFIX}{vin}"


def unit_key(unit_id: str) -> str:
    return f"{UNIT_KEY_PREFIX}{unit_id}"


class UTCDateTime(TypeDecorator[datetime]):
    impl = DateTime(timezone=True)
    cache_ok = True

    def process_bind_param(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        if value.tzinfo is None:
            value = value.replace(tzinfo=UTC)
        return value.astimezone(UTC)

    def process_result_value(self, value: datetime | None, dialect: Dialect) -> datetime | None:
        _ = dialect
        if value is None:
            return None
        return value if value.tzinfo else value.replace(tzinfo=UTC)


@dataclass(eq=False, kw_only=True)
class ItemRecord:
    """One stored item; ``pk`` and ``sk`` always carry the same key."""

    pk: str
    sk: str
    customer_id: str | None = None
    vin: str | None = None
    data: dict[str, Any] = field(default_factory=dict[str, Any])
    updated_at: datetime | None = None


mapper_registry = orm.registry()
mapper_registry.metadata.naming_convention = {
    "ix": "ix_%(column_0_label)s",
    "uq": "uq_%(table_name)s_%(column_0_label)s",
    "ck": "ck_%(table_name)s_%(constraint_name)s",
    "pk": "pk_%(table_name)s",
}

item_table = Table(
    "item",
    mapper_registry.metadata,
    Column("pk", String(128), primary_key=True),
    Column("sk", String(128), primary_key=True),
    Column("customer_id", String(128), nullable=True),
    Column("vin", String(64), nullable=True),
    Column("data", JSON, nullable=False),
    Column("updated_at", UTCDateTime(), nullable=True),
)

Index("ix_item_customer_id_vin", item_table.c.customer_id, item_table.c.vin)
Index("ix_item_vin", item_table.c.vin)


@cache
def start_mappers() -> orm.registry:
    """Map :class:`ItemRecord` onto the item table (once per process)."""

    log.info("Starting SQLAlchemy mappers")
    mapper_registry.map_imperatively(ItemRecord, item_table)
    return mapper_registry
