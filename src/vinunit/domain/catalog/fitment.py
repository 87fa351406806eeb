"""Parts and category lookups keyed by resolved catalog ids."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING

from .sql import escape_sql

if TYPE_CHECKING:
    from .execution import QueryExecutionClient

log = getLogger(__name__)


@dataclass(frozen=True, slots=True)
class Part:
    part_number: str
    brand_name: str | None = None
    category: str | None = None
    part_type: str | None = None
    position: str | None = None
    quantity: int | None = None
    note: str | None = None


def _cell(row: list[str], index: int) -> str | None:
    if index >= len(row):
        return None
    return row[index] or None


def _parse_quantity(value: str | None) -> int | None:
    if value is None:
        return None
    try:
        return int(value.strip())
    except ValueError:
        return None


def _parse_part(row: list[str]) -> Part:
    return Part(
        part_number=row[0],
        brand_name=_cell(row, 1),
        category=_cell(row, 2),
        part_type=_cell(row, 3),
        position=_cell(row, 4),
        quantity=_parse_quantity(_cell(row, 5)),
        note=_cell(row, 6),
    )


class FitmentLookup:
    """Read-only queries over the fitment tables.

    Lookup failures are logged and reported as empty results.
    """

    def __init__(self, executor: QueryExecutionClient, *, schema: str) -> None:
        self._executor = executor
        self._schema = schema

    def find_parts(
        self,
        base_vehicle_id: int | None,
        engine_base_id: int | None = None,
        category: str | None = None,
    ) -> list[Part]:
        if base_vehicle_id is None:
            return []

        schema = self._schema
        clauses = [f"f.base_vehicle_id = {int(base_vehicle_id)}"]
        if engine_base_id is not None:
            clauses.append(f"f.engine_base_id = {int(engine_base_id)}")
        if category:
            clauses.append(f"UPPER(c.category_name) = UPPER('{escape_sql(category)}')")

        sql = (
            "SELECT f.part_number, b.brand_name, c.category_name, p.part_terminology_name, "
            "pos.position, f.qty, f.note "
            f"FROM {schema}.aces_fitment f "
            f"LEFT JOIN {schema}.brand b ON f.brand_aaia_id = b.brand_id "
            f"JOIN {schema}.pcadb_parts p ON f.part_type_id = p.part_terminology_id "
            f"LEFT JOIN {schema}.pcadb_category_parts cp "
            "ON p.part_terminology_id = cp.part_terminology_id "
            f"LEFT JOIN {schema}.pcadb_categories c ON cp.category_id = c.category_id "
            f"LEFT JOIN {schema}.pcadb_positions pos ON f.position_id = pos.position_id "
            f"WHERE {' AND '.join(clauses)} "
            "ORDER BY c.category_name, p.part_terminology_name, b.brand_name"
        )
        rows = self._run(sql, "parts")
        return [_parse_part(row) for row in rows if row and row[0]]

    def find_categories(
        self,
        base_vehicle_id: int | None,
        engine_base_id: int | None = None,
    ) -> list[str]:
        if base_vehicle_id is None:
            return []

        schema = self._schema
        engine_clause = (
            f" AND f.engine_base_id = {int(engine_base_id)}" if engine_base_id is not None else ""
        )
        sql = (
            "SELECT DISTINCT c.category_name "
            f"FROM {schema}.aces_fitment f "
            f"JOIN {schema}.pcadb_parts p ON f.part_type_id = p.part_terminology_id "
            f"JOIN {schema}.pcadb_category_parts cp "
            "ON p.part_terminology_id = cp.part_terminology_id "
            f"JOIN {schema}.pcadb_categories c ON cp.category_id = c.category_id "
            f"WHERE f.base_vehicle_id = {int(base_vehicle_id)}{engine_clause} "
            "ORDER BY c.category_name"
        )
        return [row[0] for row in self._run(sql, "categories") if row and row[0]]

    def find_all_categories(self) -> list[str]:
        schema = self._schema
        sql = (
            "SELECT DISTINCT c.category_name "
            f"FROM {schema}.aces_fitment f "
            f"JOIN {schema}.pcadb_parts p ON f.part_type_id = p.part_terminology_id "
            f"JOIN {schema}.pcadb_category_parts cp "
            "ON p.part_terminology_id = cp.part_terminology_id "
            f"JOIN {schema}.pcadb_categories c ON cp.category_id = c.category_id "
            "ORDER BY c.category_name"
        )
        return [row[0] for row in self._run(sql, "all categories") if row and row[0]]

    def _run(self, sql: str, what: str) -> list[list[str]]:
        try:
            return self._executor.execute(sql)
        except Exception as exc:  # noqa: BLE001
            log.warning("Fitment lookup for %s failed: %s", what, exc)
            return []
