"""Port for the asynchronous query engine behind the reference catalog."""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum
from typing import Protocol, runtime_checkable


class QueryState(StrEnum):
    QUEUED = "QUEUED"
    RUNNING = "RUNNING"
    SUCCEEDED = "SUCCEEDED"
    FAILED = "FAILED"
    CANCELLED = "CANCELLED"


@dataclass(frozen=True, slots=True)
class QueryStatus:
    state: QueryState
    reason: str | None = None


type ResultRow = list[str | None]


@runtime_checkable
class QueryService(Protocol):
    """Submit-then-poll SQL execution.

    ``get_rows`` returns every row of the result set, header row included.
    """

    def start_query(self, sql: str) -> str: ...

    def get_status(self, execution_id: str) -> QueryStatus: ...

    def get_rows(self, execution_id: str) -> list[ResultRow]: ...
