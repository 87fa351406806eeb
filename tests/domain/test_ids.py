from __future__ import annotations

import re

from vinunit.domain.ids import generate_unit_id


def test_unit_ids_have_prefix_and_suffix() -> None:
    unit_id = generate_unit_id()

    assert re.fullmatch(r"unt_[a-z0-9]{7}", unit_id)


def test_unit_ids_vary() -> None:
    assert len({generate_unit_id() for _ in range(50)}) > 1
