"""Customer-owned units and their enriched, externally visible form."""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import TYPE_CHECKING

from .vehicle import Vehicle

if TYPE_CHECKING:
    from datetime import datetime

type Attributes = dict[str, object]


@dataclass(frozen=True, slots=True, kw_only=True)
class Unit:
    """Association of one customer with one VIN.

    Only association fields live here; vehicle facts are stored once per VIN
    and merged in on read.
    """

    unit_id: str
    customer_id: str
    vin: str
    attributes: Attributes = field(default_factory=dict)
    created_at: datetime | None = None
    updated_at: datetime | None = None


@dataclass(frozen=True, slots=True, kw_only=True)
class EnrichedUnit(Vehicle):
    """A unit merged with the vehicle record for its VIN."""

    unit_id: str
    customer_id: str
    attributes: Attributes = field(default_factory=dict)
