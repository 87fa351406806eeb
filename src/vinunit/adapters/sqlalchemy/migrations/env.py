"""Alembic runtime for the ``item`` table migrations."""

from __future__ import annotations

from contextlib import contextmanager
from typing import TYPE_CHECKING, Any

from alembic import context
from sqlalchemy import create_engine, pool

from vinunit.adapters.sqlalchemy import mapper_registry
from vinunit.config import get_database_config

if TYPE_CHECKING:
    from collections.abc import Iterator

    from sqlalchemy.engine import Connection

config = context.config


def _url() -> str:
    return config.get_main_option("sqlalchemy.url") or get_database_config().uri


@contextmanager
def _connection() -> Iterator[Connection]:
    # upgrade_head() hands over an open connection when it was given an engine
    handed_over: Connection | None = config.attributes.get("connection")
    if handed_over is not None:
        yield handed_over
        return
    engine = create_engine(_url(), poolclass=pool.NullPool, future=True)
    try:
        with engine.connect() as connection:
            yield connection
    finally:
        engine.dispose()


def _run(**target: Any) -> None:
    # batch mode so sqlite can alter tables
    context.configure(
        target_metadata=mapper_registry.metadata,
        render_as_batch=True,
        compare_type=True,
        **target,
    )
    with context.begin_transaction():
        context.run_migrations()


if context.is_offline_mode():
    _run(url=_url(), literal_binds=True)
else:
    with _connection() as connection:
        _run(connection=connection)
