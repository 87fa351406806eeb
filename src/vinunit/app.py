"""Application wiring: build a unit service from the configured adapters."""

from __future__ import annotations

from logging import getLogger
from typing import TYPE_CHECKING

from vinunit.adapters.athena import AthenaQueryService
from vinunit.adapters.sqlalchemy.unit_of_work import SqlAlchemyUnitOfWork, is_started, startup
from vinunit.adapters.vpic import VpicVinDecoder
from vinunit.config import get_catalog_config
from vinunit.domain.catalog import FitmentLookup, QueryExecutionClient, VehicleResolver
from vinunit.domain.units import UnitService

if TYPE_CHECKING:
    from vinunit.config import CatalogConfig
    from vinunit.domain.ports.catalog import QueryService
    from vinunit.domain.ports.decoding import VinDecoder
    from vinunit.domain.units import UnitOfWorkFactory

log = getLogger(__name__)


def build_catalog(
    *,
    config: CatalogConfig | None = None,
    service: QueryService | None = None,
) -> tuple[VehicleResolver, FitmentLookup]:
    """Return the resolver and fitment lookup sharing one query execution client."""

    effective_config = config or get_catalog_config()
    executor = QueryExecutionClient(
        service or AthenaQueryService.from_config(effective_config),
        poll_interval=effective_config.poll_interval_seconds,
        max_attempts=effective_config.max_poll_attempts,
    )
    schema = effective_config.database
    return (
        VehicleResolver(executor, schema=schema),
        FitmentLookup(executor, schema=schema),
    )


def build_unit_service(
    *,
    decoder: VinDecoder | None = None,
    unit_of_work_factory: UnitOfWorkFactory | None = None,
    use_catalog: bool = True,
    catalog_config: CatalogConfig | None = None,
) -> UnitService:
    """Build a :class:`UnitService` from environment configuration.

    ``use_catalog=False`` skips catalog resolution and fitment lookups entirely,
    so no catalog configuration is needed.
    """

    if unit_of_work_factory is None:
        if not is_started():
            startup()
        unit_of_work_factory = SqlAlchemyUnitOfWork

    resolver: VehicleResolver | None = None
    fitment: FitmentLookup | None = None
    if use_catalog:
        resolver, fitment = build_catalog(config=catalog_config)
    else:
        log.info("Catalog lookups disabled")

    return UnitService(
        unit_of_work_factory=unit_of_work_factory,
        decoder=decoder or VpicVinDecoder(),
        resolver=resolver,
        fitment=fitment,
    )
