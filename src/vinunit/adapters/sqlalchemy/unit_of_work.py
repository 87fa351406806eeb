"""Process-wide engine setup and the SQLAlchemy unit of work."""

from __future__ import annotations

from dataclasses import dataclass
from logging import getLogger
from typing import TYPE_CHECKING, Literal

from sqlalchemy import create_engine
from sqlalchemy.orm import Session, sessionmaker

from vinunit.adapters.sqlalchemy.mappings import start_mappers
from vinunit.adapters.sqlalchemy.migrations import upgrade_head
from vinunit.adapters.sqlalchemy.repositories import (
    SqlAlchemyUnitRepository,
    SqlAlchemyVehicleRepository,
)
from vinunit.config.storage import get_database_config
from vinunit.domain.ports.unit_of_work import UnitRepositories

if TYPE_CHECKING:
    from types import TracebackType

    from sqlalchemy.engine import Engine

log = getLogger(__name__)


class StartupError(RuntimeError):
    """Raised when the adapter is used before ``startup()`` or set up twice."""


@dataclass(slots=True)
class _AdapterState:
    engine: Engine | None = None
    sessions: sessionmaker[Session] | None = None

    def bind(self, engine: Engine | None) -> None:
        self.engine = engine
        self.sessions = (
            sessionmaker(bind=engine, expire_on_commit=False) if engine is not None else None
        )

    def session_factory(self) -> sessionmaker[Session]:
        if self.sessions is None:
            raise StartupError(
                "Storage is not initialised; call "
                "vinunit.adapters.sqlalchemy.unit_of_work.startup() first."
            )
        return self.sessions


_STATE = _AdapterState()


def startup(
    *,
    engine: Engine | None = None,
    database_uri: str | None = None,
    force: bool = False,
) -> None:
    """Bind the adapter to a database and migrate the item table to head.

    Without ``engine`` or ``database_uri`` the location comes from
    ``DATABASE_URI`` or the sqlite file in the data directory.
    """

    if _STATE.engine is not None and not force:
        raise StartupError("Storage already initialised; pass force=True to rebind.")

    if engine is None:
        uri = database_uri or get_database_config().uri
        log.info("Opening database %s", uri)
        engine = create_engine(uri, future=True)
    start_mappers()
    upgrade_head(engine=engine)
    _STATE.bind(engine)


def is_started() -> bool:
    return _STATE.engine is not None


def shutdown() -> None:
    if _STATE.engine is not None:
        _STATE.engine.dispose()
    _STATE.bind(None)


class SqlAlchemyUnitOfWork:
    """One session per ``with`` block, shared by the unit and vehicle repositories."""

    def __init__(self) -> None:
        self._session_factory = _STATE.session_factory()
        self._session: Session | None = None
        self._repositories: UnitRepositories | None = None

    def __enter__(self) -> SqlAlchemyUnitOfWork:
        if self._session is not None:
            raise StartupError("Unit of work is already open")
        self._session = self._session_factory()
        self._repositories = UnitRepositories(
            units=SqlAlchemyUnitRepository(self._session),
            vehicles=SqlAlchemyVehicleRepository(self._session),
        )
        return self

    def __exit__(
        self,
        exc_type: type[BaseException] | None,
        exc_value: BaseException | None,
        traceback: TracebackType | None,
    ) -> Literal[False]:
        if exc_type is not None:
            self.rollback()
        self.session.close()
        self._session = None
        self._repositories = None
        return False

    @property
    def session(self) -> Session:
        if self._session is None:
            raise StartupError("Unit of work is not open")
        return self._session

    @property
    def repositories(self) -> UnitRepositories:
        if self._repositories is None:
            raise StartupError("Unit of work is not open")
        return self._repositories

    def commit(self) -> None:
        self.session.commit()

    def rollback(self) -> None:
        self.session.rollback()


if TYPE_CHECKING:
    from vinunit.domain.ports.unit_of_work import UnitOfWork

    _uow_check: UnitOfWork = SqlAlchemyUnitOfWork()
