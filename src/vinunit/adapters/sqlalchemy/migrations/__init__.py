"""Schema migrations for the SQLAlchemy adapter, applied with alembic."""

from __future__ import annotations

from pathlib import Path
from typing import TYPE_CHECKING

from alembic import command
from alembic.config import Config

from vinunit.config.storage import get_database_config

if TYPE_CHECKING:
    from sqlalchemy.engine import Engine

SCRIPT_LOCATION = Path(__file__).resolve().parent


def upgrade_head(*, engine: Engine | None = None, database_uri: str | None = None) -> None:
    """Bring the schema to the newest revision.

    An ``engine`` is migrated over one of its own connections, which keeps
    in-memory sqlite databases intact; otherwise ``database_uri`` or the
    configured database is used.
    """

    alembic_config = Config()
    alembic_config.set_main_option("script_location", str(SCRIPT_LOCATION))
    if engine is None:
        alembic_config.set_main_option("sqlalchemy.url", database_uri or get_database_config().uri)
        command.upgrade(alembic_config, "head")
        return
    with engine.begin() as connection:
        alembic_config.attributes["connection"] = connection
        command.upgrade(alembic_config, "head")
