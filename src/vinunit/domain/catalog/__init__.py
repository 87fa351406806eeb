"""Reference catalog access: query execution, id resolution and fitment lookups."""

from __future__ import annotations

from .execution import (
    MAX_POLL_ATTEMPTS,
    POLL_INTERVAL_SECONDS,
    QueryCancelledError,
    QueryExecutionClient,
    QueryExecutionError,
    QueryFailedError,
    QueryTimeoutError,
)
from .fitment import FitmentLookup, Part
from .resolver import VehicleResolver
from .sql import BLOCK_TYPES, block_type_for, escape_sql, format_displacement

__all__ = [
    "BLOCK_TYPES",
    "MAX_POLL_ATTEMPTS",
    "POLL_INTERVAL_SECONDS",
    "FitmentLookup",
    "Part",
    "QueryCancelledError",
    "QueryExecutionClient",
    "QueryExecutionError",
    "QueryFailedError",
    "QueryTimeoutError",
    "VehicleResolver",
    "block_type_for",
    "escape_sql",
    "format_displacement",
]
