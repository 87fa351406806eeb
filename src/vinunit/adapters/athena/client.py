"""Amazon Athena implementation of the catalog query service."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Any

import boto3

from vinunit.domain.ports.catalog import QueryService, QueryState, QueryStatus, ResultRow

if TYPE_CHECKING:
    from vinunit.config.catalog import CatalogConfig

log = getLogger(__name__)


def _parse_state(raw: str | None) -> QueryState:
    try:
        return QueryState(raw or QueryState.RUNNING.value)
    except ValueError:
        log.debug("Unknown Athena query state %r, treating as running", raw)
        return QueryState.RUNNING


def _parse_row(row: dict[str, Any]) -> ResultRow:
    return [datum.get("VarCharValue") for datum in row.get("Data", [])]


@dataclass(slots=True)
class AthenaQueryService:
    """Run SQL in an Athena workgroup; results are read back as strings."""

    client: Any
    workgroup: str
    database: str
    output_location: str

    @classmethod
    def from_config(cls, config: CatalogConfig) -> AthenaQueryService:
        return cls(
            client=boto3.client("athena", region_name=config.region),
            workgroup=config.workgroup,
            database=config.database,
            output_location=config.output_location,
        )

    def start_query(self, sql: str) -> str:
        response = self.client.start_query_execution(
            QueryString=sql,
            WorkGroup=self.workgroup,
            QueryExecutionContext={"Database": self.database},
            ResultConfiguration={"OutputLocation": self.output_location},
        )
        execution_id: str = response["QueryExecutionId"]
        log.debug("Started Athena query %s", execution_id)
        return execution_id

    def get_status(self, execution_id: str) -> QueryStatus:
        response = self.client.get_query_execution(QueryExecutionId=execution_id)
        status = response["QueryExecution"]["Status"]
        return QueryStatus(
            state=_parse_state(status.get("State")),
            reason=status.get("StateChangeReason"),
        )

    def get_rows(self, execution_id: str) -> list[ResultRow]:
        paginator = self.client.get_paginator("get_query_results")
        rows: list[ResultRow] = []
        for page in paginator.paginate(QueryExecutionId=execution_id):
            rows.extend(_parse_row(row) for row in page["ResultSet"]["Rows"])
        return rows


if TYPE_CHECKING:
    _service_check: QueryService = AthenaQueryService(
        client=None, workgroup="", database="", output_location=""
    )
