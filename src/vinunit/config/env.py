"""Readers for environment variables used by the config modules."""

from __future__ import annotations

import os
from typing import TYPE_CHECKING

from .errors import ConfigurationError, MissingConfigurationError

if TYPE_CHECKING:
    from collections.abc import Callable, Sequence


def _read(name: str) -> str | None:
    # blank counts as unset
    raw = os.getenv(name)
    if raw is None:
        return None
    return raw.strip() or None


def require_env_vars(names: Sequence[str]) -> dict[str, str]:
    """Look up every name at once so the error lists all of the gaps."""

    found = {name: _read(name) for name in names}
    missing = sorted(name for name, value in found.items() if value is None)
    if missing:
        raise MissingConfigurationError(f"Missing configuration for: {', '.join(missing)}")
    return {name: value for name, value in found.items() if value is not None}


def optional_env_var(name: str, default: str) -> str:
    value = _read(name)
    return default if value is None else value


def _env_number[T: (int, float)](name: str, default: T, convert: Callable[[str], T]) -> T:
    value = _read(name)
    if value is None:
        return default
    try:
        return convert(value)
    except ValueError as exc:
        raise ConfigurationError(f"{name} must be numeric, got {value!r}") from exc


def env_int(name: str, default: int) -> int:
    return _env_number(name, default, int)


def env_float(name: str, default: float) -> float:
    return _env_number(name, default, float)
