"""Unit id generation."""

from __future__ import annotations

import secrets
import string
from typing import Final

UNIT_ID_PREFIX: Final[str] = "unt_"
UNIT_ID_LENGTH: Final[int] = 7
_ALPHABET: Final[str] = string.ascii_lowercase + string.digits


def generate_unit_id() -> str:
    """Return ``unt_`` followed by seven random lowercase alphanumerics."""

    suffix = "".join(secrets.choice(_ALPHABET) for _ in range(UNIT_ID_LENGTH))
    return f"{UNIT_ID_PREFIX}{suffix}"
