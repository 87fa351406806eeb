"""Ports implemented by adapters."""

from __future__ import annotations

from .catalog import QueryService, QueryState, QueryStatus, ResultRow
from .decoding import VinDecoder
from .persistence import UnitRepository, VehicleRepository
from .unit_of_work import UnitOfWork, UnitRepositories

__all__ = [
    "QueryService",
    "QueryState",
    "QueryStatus",
    "ResultRow",
    "UnitOfWork",
    "UnitRepositories",
    "UnitRepository",
    "VehicleRepository",
    "VinDecoder",
]
