"""Public domain model surface."""

from __future__ import annotations

from .unit import Attributes, EnrichedUnit, Unit
from .vehicle import Vehicle

__all__ = [
    "Attributes",
    "EnrichedUnit",
    "Unit",
    "Vehicle",
]
