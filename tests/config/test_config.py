from __future__ import annotations

from pathlib import Path

import pytest

from vinunit.config import (
    ConfigurationError,
    MissingConfigurationError,
    VinDecodeDialect,
    env_float,
    env_int,
    get_catalog_config,
    get_database_config,
    get_storage_config,
    get_vpic_config,
    optional_env_var,
    require_env_vars,
)

CATALOG_VARS = ("CATALOG_WORKGROUP", "CATALOG_DATABASE", "CATALOG_OUTPUT_LOCATION")


def test_require_env_vars_returns_stripped_values(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("EXAMPLE_VAR", "  value ")

    assert require_env_vars(["EXAMPLE_VAR"]) == {"EXAMPLE_VAR": "value"}


def test_require_env_vars_names_every_missing_variable(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.delenv("MISSING_A", raising=False)
    monkeypatch.setenv("MISSING_B", "   ")

    with pytest.raises(MissingConfigurationError) as exc:
        require_env_vars(["MISSING_B", "MISSING_A"])

    assert "MISSING_A, MISSING_B" in str(exc.value)


def test_optional_env_var_falls_back_on_blank(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("OPTIONAL_VAR", " ")

    assert optional_env_var("OPTIONAL_VAR", "fallback") == "fallback"


def test_numeric_env_vars(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INT_VAR", "12")
    monkeypatch.setenv("FLOAT_VAR", "0.25")
    monkeypatch.delenv("UNSET_VAR", raising=False)

    assert env_int("INT_VAR", 1) == 12
    assert env_float("FLOAT_VAR", 1.0) == 0.25
    assert env_int("UNSET_VAR", 7) == 7


def test_numeric_env_var_rejects_garbage(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("INT_VAR", "twelve")

    with pytest.raises(ConfigurationError, match="INT_VAR"):
        env_int("INT_VAR", 1)


def test_catalog_config_from_environment(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("CATALOG_WORKGROUP", "catalog")
    monkeypatch.setenv("CATALOG_DATABASE", "autocare")
    monkeypatch.setenv("CATALOG_OUTPUT_LOCATION", "s3://results/")
    monkeypatch.setenv("AWS_REGION", "eu-central-1")
    monkeypatch.setenv("CATALOG_MAX_POLL_ATTEMPTS", "10")
    monkeypatch.delenv("CATALOG_POLL_INTERVAL_SECONDS", raising=False)

    config = get_catalog_config()

    assert config.workgroup == "catalog"
    assert config.database == "autocare"
    assert config.output_location == "s3://results/"
    assert config.region == "eu-central-1"
    assert config.max_poll_attempts == 10
    assert config.poll_interval_seconds == 0.5


def test_catalog_config_requires_connection_settings(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in CATALOG_VARS:
        monkeypatch.delenv(name, raising=False)

    with pytest.raises(MissingConfigurationError) as exc:
        get_catalog_config()

    for name in CATALOG_VARS:
        assert name in str(exc.value)


VPIC_VARS = (
    "VPIC_DIALECT",
    "VPIC_BASE_URL",
    "VPIC_CACHE",
    "VPIC_TIMEOUT_SECONDS",
    "VPIC_MAX_CALLS_PER_SECOND",
)


def test_vpic_config_defaults(monkeypatch: pytest.MonkeyPatch) -> None:
    for name in VPIC_VARS:
        monkeypatch.delenv(name, raising=False)

    config = get_vpic_config()

    assert config.dialect is VinDecodeDialect.VARIABLE
    assert config.resilience.base_url == "https://vpic.nhtsa.dot.gov/api/"
    assert config.resilience.timeout_seconds == 30.0
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 5
    assert config.resilience.cache is not None
    assert config.resilience.cache.backend == "memory"


def test_vpic_config_http_overrides(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VPIC_CACHE", "off")
    monkeypatch.setenv("VPIC_MAX_CALLS_PER_SECOND", "2")
    monkeypatch.setenv("VPIC_TIMEOUT_SECONDS", "5")

    config = get_vpic_config()

    assert config.resilience.cache is None
    assert config.resilience.ratelimit is not None
    assert config.resilience.ratelimit.max_calls == 2
    assert config.resilience.timeout_seconds == 5.0


def test_vpic_config_sqlite_cache_keeps_predicate(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VPIC_CACHE", "SQLite")

    def cache_if(payload: object) -> bool:
        return payload is not None

    config = get_vpic_config(cache_if=cache_if)

    assert config.resilience.cache is not None
    assert config.resilience.cache.backend == "sqlite"
    assert config.resilience.cache.cache_if is cache_if


def test_vpic_config_rejects_unknown_cache(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VPIC_CACHE", "redis")

    with pytest.raises(ConfigurationError, match="VPIC_CACHE"):
        get_vpic_config()


def test_vpic_config_rejects_unknown_dialect(monkeypatch: pytest.MonkeyPatch) -> None:
    monkeypatch.setenv("VPIC_DIALECT", "xml")

    with pytest.raises(ConfigurationError, match="VPIC_DIALECT"):
        get_vpic_config()


def test_storage_config_uses_env_dir(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("VINUNIT_DATA_DIR", str(tmp_path / "data"))

    storage = get_storage_config()

    assert storage.http_cache_path() == (tmp_path / "data" / "http_cache.db").resolve()
    assert storage.database_uri().endswith("vinunit.db")


def test_database_uri_prefers_environment(monkeypatch: pytest.MonkeyPatch, tmp_path: Path) -> None:
    monkeypatch.setenv("DATABASE_URI", "postgresql+psycopg://localhost/vinunit")
    assert get_database_config().uri == "postgresql+psycopg://localhost/vinunit"

    monkeypatch.delenv("DATABASE_URI")
    monkeypatch.setenv("VINUNIT_DATA_DIR", str(tmp_path))
    assert get_database_config().uri == f"sqlite+pysqlite:///{(tmp_path / 'vinunit.db').resolve()}"
