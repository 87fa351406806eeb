"""Transaction boundary around the unit and vehicle repositories."""

from __future__ import annotations

from dataclasses import dataclass
from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from types import TracebackType

    from vinunit.domain.ports.persistence import UnitRepository, VehicleRepository


@dataclass(slots=True)
class UnitRepositories:
    units: UnitRepository
    vehicles: VehicleRepository


@runtime_checkable
class UnitOfWork(Protocol):
    """Context manager exposing repositories that share one transaction.

    Leaving the block without ``commit()`` discards pending writes; leaving it
    through an exception rolls back.
    """

    @property
    def repositories(self) -> UnitRepositories: ...

    def __enter__(self) -> UnitOfWork: ...

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> bool: ...

    def commit(self) -> None: ...

    def rollback(self) -> None: ...
