"""Port for VIN decoding."""

from __future__ import annotations

from typing import TYPE_CHECKING, Protocol, runtime_checkable

if TYPE_CHECKING:
    from vinunit.domain.model import Vehicle


@runtime_checkable
class VinDecoder(Protocol):
    """Decode a VIN into a vehicle record, or ``None`` when nothing decodes."""

    def __call__(self, vin: str) -> Vehicle | None: ...
