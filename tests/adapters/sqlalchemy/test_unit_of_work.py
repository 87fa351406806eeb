from __future__ import annotations

from typing import TYPE_CHECKING

import pytest
from sqlalchemy import create_engine

from vinunit.adapters.sqlalchemy.unit_of_work import (
    SqlAlchemyUnitOfWork,
    StartupError,
    is_started,
    shutdown,
    startup,
)
from tests.helpers.units import HONDA_VIN, make_unit, make_vehicle

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Engine


@pytest.fixture(autouse=True)
def reset_unit_of_work_state() -> Iterator[None]:
    shutdown()
    yield
    shutdown()


def test_sqlalchemy_unit_of_work_requires_startup() -> None:
    with pytest.raises(StartupError):
        SqlAlchemyUnitOfWork()


def test_startup_requires_force_for_reconfiguration() -> None:
    engine_a = create_engine("sqlite+pysqlite:///:memory:", future=True)
    engine_b = create_engine("sqlite+pysqlite:///:memory:", future=True)

    startup(engine=engine_a, force=True)

    with pytest.raises(StartupError):
        startup(engine=engine_b)

    startup(engine=engine_b, force=True)
    assert is_started()


def test_unit_of_work_persists_on_commit(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with SqlAlchemyUnitOfWork() as uow:
        uow.repositories.vehicles.save(make_vehicle())
        uow.repositories.units.save(make_unit("unt_0000001"))
        uow.commit()

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.vehicles.get(HONDA_VIN) is not None
        assert uow.repositories.units.get("unt_0000001") is not None


def test_unit_of_work_discards_uncommitted_writes(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    with pytest.raises(RuntimeError), SqlAlchemyUnitOfWork() as uow:
        uow.repositories.units.save(make_unit("unt_0000001"))
        raise RuntimeError("boom")

    with SqlAlchemyUnitOfWork() as uow:
        assert uow.repositories.units.get("unt_0000001") is None


def test_repositories_require_an_open_session(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)
    uow = SqlAlchemyUnitOfWork()

    with pytest.raises(StartupError):
        _ = uow.repositories

    with uow:
        assert uow.repositories.units is not None

    with pytest.raises(StartupError):
        _ = uow.session


def test_shutdown_resets_state(sqlite_engine: Engine) -> None:
    startup(engine=sqlite_engine, force=True)

    shutdown()

    assert not is_started()
