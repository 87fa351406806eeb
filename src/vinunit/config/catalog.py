"""Reference catalog (Athena) configuration values."""

from __future__ import annotations

from dataclasses import dataclass

from .env import env_float, env_int, optional_env_var, require_env_vars

DEFAULT_AWS_REGION = "us-west-2"
DEFAULT_POLL_INTERVAL_SECONDS = 0.5
DEFAULT_MAX_POLL_ATTEMPTS = 60


@dataclass(frozen=True, slots=True)
class CatalogConfig:
    """Where catalog queries run and how long to wait for them.

    ``database`` doubles as the schema prefix of the catalog tables.
    """

    workgroup: str
    database: str
    output_location: str
    region: str = DEFAULT_AWS_REGION
    poll_interval_seconds: float = DEFAULT_POLL_INTERVAL_SECONDS
    max_poll_attempts: int = DEFAULT_MAX_POLL_ATTEMPTS


def get_catalog_config() -> CatalogConfig:
    values = require_env_vars(
        ("CATALOG_WORKGROUP", "CATALOG_DATABASE", "CATALOG_OUTPUT_LOCATION")
    )
    return CatalogConfig(
        workgroup=values["CATALOG_WORKGROUP"],
        database=values["CATALOG_DATABASE"],
        output_location=values["CATALOG_OUTPUT_LOCATION"],
        region=optional_env_var("AWS_REGION", DEFAULT_AWS_REGION),
        poll_interval_seconds=env_float(
            "CATALOG_POLL_INTERVAL_SECONDS", DEFAULT_POLL_INTERVAL_SECONDS
        ),
        max_poll_attempts=env_int("CATALOG_MAX_POLL_ATTEMPTS", DEFAULT_MAX_POLL_ATTEMPTS),
    )
