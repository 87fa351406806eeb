from __future__ import annotations

import pytest

from vinunit.domain.catalog import block_type_for, escape_sql, format_displacement


def test_escape_doubles_single_quotes() -> None:
    assert escape_sql("O'Reilly's") == "O''Reilly''s"
    assert escape_sql("plain") == "plain"


@pytest.mark.parametrize(
    ("liters", "expected"),
    [(5.0, "5"), (6.7, "6.7"), (2.0, "2"), (3.5, "3.5")],
)
def test_format_displacement(liters: float, expected: str) -> None:
    assert format_displacement(liters) == expected


@pytest.mark.parametrize(
    ("configuration", "expected"),
    [
        ("V-Shaped", "V"),
        ("In-Line", "I"),
        ("Flat", "H"),
        ("Rotary", "R"),
        ("W-Shaped", "W"),
        (" V-Shaped ", "V"),
        ("Boxer", None),
    ],
)
def test_block_type_for(configuration: str, expected: str | None) -> None:
    assert block_type_for(configuration) == expected
