"""Best-effort lookup of reference catalog ids for a decoded vehicle."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from .sql import block_type_for, escape_sql, format_displacement

if TYPE_CHECKING:
    from vinunit.domain.model import Vehicle

    from .execution import QueryExecutionClient

log = getLogger(__name__)


class VehicleResolver:
    """Map decoded attributes to catalog ids.

    Every lookup is optional: missing inputs skip the query entirely, and query
    failures or empty results both come back as ``None``.
    """

    def __init__(self, executor: QueryExecutionClient, *, schema: str) -> None:
        self._executor = executor
        self._schema = schema

    def resolve(self, vehicle: Vehicle) -> Vehicle:
        base_vehicle_id = self.resolve_base_vehicle(vehicle.year, vehicle.make, vehicle.model)
        engine_base_id = self.resolve_engine_base(
            vehicle.displacement_liters,
            vehicle.engine_cylinders,
            vehicle.engine_configuration,
        )
        return vehicle.with_catalog_ids(
            base_vehicle_id=base_vehicle_id,
            engine_base_id=engine_base_id,
        )

    def resolve_base_vehicle(
        self,
        year: int | None,
        make: str | None,
        model: str | None,
    ) -> int | None:
        if year is None or not make or not model:
            log.debug("Skipping base vehicle lookup: year=%s make=%s model=%s", year, make, model)
            return None

        sql = (
            "SELECT bv.base_vehicle_id "
            f"FROM {self._schema}.vcdb_base_vehicle bv "
            f"JOIN {self._schema}.vcdb_make mk ON bv.make_id = mk.make_id "
            f"JOIN {self._schema}.vcdb_model md ON bv.model_id = md.model_id "
            f"WHERE bv.year_id = {int(year)} "
            f"AND UPPER(mk.make_name) = UPPER('{escape_sql(make)}') "
            f"AND UPPER(md.model_name) = UPPER('{escape_sql(model)}') "
            "LIMIT 1"
        )
        found = self._first_id(sql)
        if found is None:
            log.info("No base vehicle for %s %s %s", year, make, model)
        else:
            log.info("Resolved base vehicle %s for %s %s %s", found, year, make, model)
        return found

    def resolve_engine_base(
        self,
        displacement_liters: float | None,
        cylinders: int | None,
        block_configuration: str | None,
    ) -> int | None:
        if displacement_liters is None or cylinders is None or not block_configuration:
            log.debug(
                "Skipping engine base lookup: liters=%s cylinders=%s configuration=%s",
                displacement_liters,
                cylinders,
                block_configuration,
            )
            return None

        block_type = block_type_for(block_configuration)
        if block_type is None:
            log.debug("Unknown engine configuration %r, skipping lookup", block_configuration)
            return None

        liter = format_displacement(displacement_liters)
        sql = (
            "SELECT engine_base_id "
            f"FROM {self._schema}.vcdb_engine_base "
            f"WHERE liter = '{escape_sql(liter)}' "
            f"AND cylinders = '{int(cylinders)}' "
            f"AND block_type = '{block_type}' "
            "LIMIT 1"
        )
        found = self._first_id(sql)
        if found is None:
            log.info("No engine base for %sL %s%s", liter, block_type, cylinders)
        else:
            log.info("Resolved engine base %s for %sL %s%s", found, liter, block_type, cylinders)
        return found

    def _first_id(self, sql: str) -> int | None:
        try:
            rows = self._executor.execute(sql)
        except Exception as exc:  # noqa: BLE001
            log.warning("Catalog lookup failed, continuing without it: %s", exc)
            return None
        if not rows or not rows[0]:
            return None
        try:
            return int(rows[0][0])
        except ValueError:
            log.warning("Catalog returned a non-numeric id: %r", rows[0][0])
            return None
