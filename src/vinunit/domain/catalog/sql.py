"""Helpers for building catalog SQL from decoded vehicle values."""

from __future__ import annotations

from typing import Final

BLOCK_TYPES: Final[dict[str, str]] = {
    "V-Shaped": "V",
    "In-Line": "I",
    "Flat": "H",
    "Rotary": "R",
    "W-Shaped": "W",
}


def escape_sql(value: str) -> str:
    """Escape a value for use inside a single-quoted SQL literal."""

    return value.replace("'", "''")


def format_displacement(liters: float) -> str:
    """Render liters the way the catalog stores them: ``5.0 -> "5"``, ``6.7 -> "6.7"``."""

    if liters.is_integer():
        return str(int(liters))
    return str(liters)


def block_type_for(configuration: str) -> str | None:
    return BLOCK_TYPES.get(configuration.strip())
