"""Blocking submit, poll and fetch on top of an asynchronous query service."""

from __future__ import annotations

import time
from logging import getLogger
from typing import TYPE_CHECKING, Final

from vinunit.domain.ports.catalog import QueryState

if TYPE_CHECKING:
    from collections.abc import Callable

    from vinunit.domain.ports.catalog import QueryService, ResultRow

log = getLogger(__name__)

POLL_INTERVAL_SECONDS: Final[float] = 0.5
MAX_POLL_ATTEMPTS: Final[int] = 60


class QueryExecutionError(RuntimeError):
    """Base class for catalog query failures."""

    def __init__(self, message: str, *, execution_id: str) -> None:
        super().__init__(message)
        self.execution_id = execution_id


class QueryFailedError(QueryExecutionError):
    """Raised when the query service reports FAILED."""

    def __init__(self, execution_id: str, reason: str | None) -> None:
        super().__init__(f"Query FAILED: {reason}", execution_id=execution_id)
        self.reason = reason


class QueryCancelledError(QueryExecutionError):
    """Raised when the query service reports CANCELLED."""

    def __init__(self, execution_id: str, reason: str | None) -> None:
        super().__init__(f"Query CANCELLED: {reason}", execution_id=execution_id)
        self.reason = reason


class QueryTimeoutError(QueryExecutionError):
    """Raised when the query is still not terminal after the last poll."""

    def __init__(self, execution_id: str, attempts: int) -> None:
        super().__init__(
            f"Query timed out after {attempts} poll attempts", execution_id=execution_id
        )
        self.attempts = attempts


class QueryExecutionClient:
    """Run a catalog query to completion and return its data rows.

    Waiting blocks the calling thread: the status is checked up to
    ``max_attempts`` times with ``poll_interval`` seconds of sleep between
    checks, so the longest wait is roughly ``max_attempts * poll_interval``.
    """

    def __init__(
        self,
        service: QueryService,
        *,
        poll_interval: float = POLL_INTERVAL_SECONDS,
        max_attempts: int = MAX_POLL_ATTEMPTS,
        sleep: Callable[[float], None] = time.sleep,
    ) -> None:
        if max_attempts < 1:
            raise ValueError("max_attempts must be at least 1")
        self._service = service
        self._poll_interval = poll_interval
        self._max_attempts = max_attempts
        self._sleep = sleep

    def submit(self, sql: str) -> str:
        log.debug("Submitting catalog query: %s", sql)
        return self._service.start_query(sql)

    def await_completion(self, execution_id: str) -> None:
        for attempt in range(1, self._max_attempts + 1):
            status = self._service.get_status(execution_id)
            if status.state is QueryState.SUCCEEDED:
                return
            if status.state is QueryState.FAILED:
                raise QueryFailedError(execution_id, status.reason)
            if status.state is QueryState.CANCELLED:
                raise QueryCancelledError(execution_id, status.reason)
            if attempt < self._max_attempts:
                self._sleep(self._poll_interval)
        raise QueryTimeoutError(execution_id, self._max_attempts)

    def fetch_rows(self, execution_id: str) -> list[list[str]]:
        """Return the data rows as strings; the header row is dropped and nulls become ""."""

        rows: list[ResultRow] = self._service.get_rows(execution_id)
        if len(rows) < 2:  # noqa: PLR2004
            return []
        return [[cell if cell is not None else "" for cell in row] for row in rows[1:]]

    def execute(self, sql: str) -> list[list[str]]:
        execution_id = self.submit(sql)
        self.await_completion(execution_id)
        return self.fetch_rows(execution_id)
