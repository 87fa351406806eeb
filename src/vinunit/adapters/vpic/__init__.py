"""Public interface for the vPIC adapter."""

from __future__ import annotations

from .client import VpicAPIError, VpicClient, VpicVinDecoder
from .schema import DecodedVariable, DecodeVinResponse, DecodeVinValuesResponse
from .translator import (
    FIELD_MAPPINGS,
    DecodePair,
    FieldMapping,
    normalize,
    pairs_from_decode_vin,
    pairs_from_decode_vin_values,
)

__all__ = [
    "FIELD_MAPPINGS",
    "DecodePair",
    "DecodeVinResponse",
    "DecodeVinValuesResponse",
    "DecodedVariable",
    "FieldMapping",
    "VpicAPIError",
    "VpicClient",
    "VpicVinDecoder",
    "normalize",
    "pairs_from_decode_vin",
    "pairs_from_decode_vin_values",
]
