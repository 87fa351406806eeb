"""Errors raised by the unit service."""

from __future__ import annotations


class UnitServiceError(RuntimeError):
    """Base class for unit lifecycle failures."""


class UnitNotFoundError(UnitServiceError):
    """Raised when a unit id does not resolve to a stored unit."""

    def __init__(self, unit_id: str) -> None:
        super().__init__(f"Unit not found: {unit_id}")
        self.unit_id = unit_id


class DuplicateVinError(UnitServiceError):
    """Raised when the customer already has a unit for the VIN."""

    def __init__(self, customer_id: str, vin: str) -> None:
        super().__init__(f"Customer {customer_id} already has a unit for VIN {vin}")
        self.customer_id = customer_id
        self.vin = vin


class VinDecodeError(UnitServiceError):
    """Raised when the decoder has nothing for a VIN."""

    def __init__(self, vin: str) -> None:
        super().__init__(f"Failed to decode VIN: {vin}")
        self.vin = vin


class InvalidVinError(ValueError):
    """Raised for VIN input that cannot be a VIN at all."""
